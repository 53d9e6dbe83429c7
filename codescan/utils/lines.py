"""Offset to line number resolution."""

from __future__ import annotations


def line_of(content: str, offset: int) -> int:
    """Return the 1-based line holding ``offset``.

    Only line feeds are counted. The engine loads files with universal
    newlines, so CRLF and CR-only files reach the rules already normalized
    to line feeds.
    """

    return content.count("\n", 0, offset) + 1
