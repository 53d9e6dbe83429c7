"""Core result data structures for the scanner."""

from __future__ import annotations

from dataclasses import dataclass, field, asdict
from typing import Dict, List, Tuple

FILE_UNREADABLE = "FileUnreadable"
MARKUP_PARSE_FAILURE = "MarkupParseFailure"

TABLE_HEADERS = ("Type", "Module", "File", "Line")


@dataclass(frozen=True)
class Finding:
    """A single occurrence of a detected pattern."""

    kind: str
    module: str
    file: str
    line: str = ""

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)

    def as_row(self) -> Tuple[str, str, str, str]:
        return (self.kind, self.module, self.file, self.line)


@dataclass(frozen=True)
class Diagnostic:
    """A per-file problem that is not a rule finding (e.g. an unreadable file)."""

    kind: str
    file: str
    message: str

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)


@dataclass
class ScanResult:
    """Bundle the ordered findings and diagnostics of one scan."""

    findings: List[Finding] = field(default_factory=list)
    diagnostics: List[Diagnostic] = field(default_factory=list)
    files_scanned: int = 0
    cancelled: bool = False

    @property
    def passed(self) -> bool:
        return not self.findings

    def merge(self, findings: List[Finding], diagnostics: List[Diagnostic]) -> None:
        """Append one file's batch, keeping rule and match order."""

        self.files_scanned += 1
        self.findings.extend(findings)
        self.diagnostics.extend(diagnostics)

    def to_dict(self) -> Dict[str, object]:
        return {
            "files_scanned": self.files_scanned,
            "cancelled": self.cancelled,
            "passed": self.passed,
            "findings": [finding.to_dict() for finding in self.findings],
            "diagnostics": [diagnostic.to_dict() for diagnostic in self.diagnostics],
        }


def format_findings_table(result: ScanResult) -> str:
    """Create a human-readable table of findings for console output."""

    rows = [TABLE_HEADERS] + [finding.as_row() for finding in result.findings]
    widths = [max(len(row[idx]) for row in rows) for idx in range(len(TABLE_HEADERS))]
    separator = "-+-".join("-" * width for width in widths)

    lines: List[str] = []
    for idx, row in enumerate(rows):
        lines.append(" | ".join(cell.ljust(widths[col]) for col, cell in enumerate(row)).rstrip())
        if idx == 0:
            lines.append(separator)
    return "\n".join(lines)
