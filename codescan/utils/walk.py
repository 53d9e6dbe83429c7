"""Deterministic traversal of the scan root."""

from __future__ import annotations

import fnmatch
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Generator, Iterable, Optional

from codescan.errors import ScanRootUnavailable

ErrorHandler = Callable[[Path, OSError], None]


@dataclass(frozen=True)
class WalkEntry:
    """A regular file found under the scan root."""

    path: Path
    relative_path: str
    module: str


def module_of(relative_path: str) -> str:
    """Return the first segment of a relative path, or ``""`` for root-level files."""

    head, sep, _ = relative_path.partition("/")
    return head if sep else ""


def check_root(root: Path) -> Path:
    """Resolve ``root`` and fail fast if it cannot be scanned."""

    if not root.exists():
        raise ScanRootUnavailable(root, "path does not exist")
    if not root.is_dir():
        raise ScanRootUnavailable(root, "not a directory")
    if not os.access(root, os.R_OK | os.X_OK):
        raise ScanRootUnavailable(root, "permission denied")
    return root.resolve()


def iter_tree(
    root: Path,
    exclude: Iterable[str] = (),
    on_error: Optional[ErrorHandler] = None,
) -> Generator[WalkEntry, None, None]:
    """Yield every regular file beneath ``root``.

    Each directory is listed in lexical name order and subdirectories are
    recursed into at their lexical position, so the sequence is stable for a
    given file-system snapshot. Symlinked directories are not followed.
    ``exclude`` holds fnmatch globs applied to the root-relative path.
    """

    base = check_root(Path(root))
    patterns = tuple(exclude)
    # Root is validated eagerly; the walk itself is lazy.
    return _walk(base, base, patterns, on_error)


def _walk(
    base: Path,
    directory: Path,
    patterns: tuple,
    on_error: Optional[ErrorHandler],
) -> Generator[WalkEntry, None, None]:
    try:
        children = sorted(directory.iterdir(), key=lambda child: child.name)
    except OSError as exc:
        if directory == base:
            raise ScanRootUnavailable(base, str(exc)) from exc
        if on_error is not None:
            on_error(directory, exc)
        return

    for child in children:
        try:
            is_dir = child.is_dir() and not child.is_symlink()
            is_file = not is_dir and child.is_file()
        except OSError as exc:
            if on_error is not None:
                on_error(child, exc)
            continue
        if is_dir:
            yield from _walk(base, child, patterns, on_error)
            continue
        if not is_file:
            continue
        relative_path = child.relative_to(base).as_posix()
        if any(fnmatch.fnmatch(relative_path, pattern) for pattern in patterns):
            continue
        yield WalkEntry(path=child, relative_path=relative_path, module=module_of(relative_path))
