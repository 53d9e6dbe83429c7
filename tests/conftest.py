"""Shared test fixtures for codescan tests."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Dict

import pytest

from codescan.rules import ScanTarget
from codescan.utils.walk import module_of

SAMPLES_DIR = Path(__file__).resolve().parents[1] / "samples"


@pytest.fixture
def make_target() -> Callable[..., ScanTarget]:
    def _make(content: str, relative_path: str = "Acme/Model/Foo.php") -> ScanTarget:
        return ScanTarget(
            path=Path("/srv/magento/app/code") / relative_path,
            relative_path=relative_path,
            module=module_of(relative_path),
            content=content,
        )

    return _make


@pytest.fixture
def write_tree(tmp_path: Path) -> Callable[[Dict[str, str]], Path]:
    """Materialize ``{relative_path: content}`` under a fresh scan root."""

    def _write(files: Dict[str, str]) -> Path:
        root = tmp_path / "code"
        root.mkdir(exist_ok=True)
        for relative_path, content in files.items():
            path = root / relative_path
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        return root

    return _write


@pytest.fixture
def samples_dir() -> Path:
    return SAMPLES_DIR
