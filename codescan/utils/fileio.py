"""Basic file IO helpers."""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ElementTree
from pathlib import Path
from typing import Any, Optional

import yaml

logger = logging.getLogger(__name__)


def read_yaml_file(path: Path) -> Any:
    """Return the parsed YAML if the file exists, otherwise ``None``."""

    if not path.exists():
        return None
    with path.open("r", encoding="utf-8") as handle:
        return yaml.safe_load(handle)


def read_text_file(path: Path) -> str:
    """Return the file contents as text.

    Undecodable bytes are replaced rather than raising, so binary assets that
    live next to the code are scanned like any other file. ``OSError`` is left
    to the caller.
    """

    with path.open("r", encoding="utf-8", errors="replace") as handle:
        return handle.read()


def parse_markup(content: str, source: str = "<string>") -> Optional[ElementTree.Element]:
    """Parse XML content into an element tree, or return ``None`` if malformed."""

    try:
        return ElementTree.fromstring(content.encode("utf-8"))
    except (ElementTree.ParseError, ValueError) as exc:
        logger.debug("Skipping markup rules for %s: %s", source, exc)
        return None
