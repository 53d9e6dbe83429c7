"""Rule protocol and the per-file context shared across rules."""

from __future__ import annotations

from dataclasses import dataclass
from functools import cached_property
from pathlib import Path
from typing import List, Optional, Protocol
from xml.etree.ElementTree import Element

from codescan.result import Finding
from codescan.utils import parse_markup
from codescan.utils.walk import WalkEntry

MARKUP_SUFFIX = ".xml"


class Rule(Protocol):
    """Protocol implemented by all rule evaluators."""

    name: str

    def inspect(self, target: "ScanTarget") -> List[Finding]:
        """Return the findings for ``target`` in match order."""


@dataclass(frozen=True)
class ScanTarget:
    """One file's already-loaded content plus its location under the scan root."""

    path: Path
    relative_path: str
    module: str
    content: str

    @classmethod
    def from_entry(cls, entry: WalkEntry, content: str) -> "ScanTarget":
        return cls(
            path=entry.path,
            relative_path=entry.relative_path,
            module=entry.module,
            content=content,
        )

    @property
    def is_markup(self) -> bool:
        return self.path.suffix == MARKUP_SUFFIX

    @cached_property
    def markup(self) -> Optional[Element]:
        """Parsed markup tree, shared by every markup rule; ``None`` when unavailable."""

        if not self.is_markup:
            return None
        return parse_markup(self.content, self.relative_path)

    def finding(self, kind: str, line: str = "") -> Finding:
        return Finding(kind=kind, module=self.module, file=self.relative_path, line=line)
