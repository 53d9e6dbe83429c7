"""Utility helpers for the scanner."""

from .fileio import parse_markup, read_text_file, read_yaml_file
from .lines import line_of
from .walk import WalkEntry, iter_tree

__all__ = [
    "parse_markup",
    "read_text_file",
    "read_yaml_file",
    "line_of",
    "WalkEntry",
    "iter_tree",
]
