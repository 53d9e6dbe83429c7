"""Error taxonomy for the code scanner."""

from __future__ import annotations

from pathlib import Path


class CodeScanError(Exception):
    """Base class for all scanner errors."""


class ScanRootUnavailable(CodeScanError):
    """Raised when the scan root is missing, not a directory or unreadable."""

    def __init__(self, root: Path, reason: str) -> None:
        super().__init__(f"Scan root {root} is unavailable: {reason}")
        self.root = root
        self.reason = reason


class RuleConfigurationError(CodeScanError):
    """Raised when a rule or registry is built from invalid configuration."""


class ConfigError(CodeScanError, ValueError):
    """Raised when the scanner configuration file is invalid."""
