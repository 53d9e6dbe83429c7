"""Regex-driven rules over raw file content."""

from __future__ import annotations

import re
from typing import Callable, List, Optional, Sequence, Tuple

from codescan.errors import RuleConfigurationError
from codescan.result import Finding
from codescan.utils import line_of

from . import ScanTarget

PathFilter = Callable[[ScanTarget], bool]


def compile_pattern(rule_name: str, pattern: str, flags: int = 0) -> re.Pattern[str]:
    try:
        return re.compile(pattern, flags)
    except re.error as exc:
        raise RuleConfigurationError(f"Rule {rule_name!r} has an invalid pattern {pattern!r}: {exc}") from exc


def outside_test_dirs(target: ScanTarget) -> bool:
    """True unless the file sits under a ``Test`` directory of the scanned tree."""

    return "/Test/" not in f"/{target.relative_path}"


class PatternRule:
    """Flag every match of a single regular expression."""

    def __init__(
        self,
        name: str,
        kind: str,
        pattern: str,
        applies_to: Optional[PathFilter] = None,
        flags: int = 0,
    ) -> None:
        self.name = name
        self.kind = kind
        self._pattern = compile_pattern(name, pattern, flags)
        self._applies_to = applies_to

    def inspect(self, target: ScanTarget) -> List[Finding]:
        if self._applies_to is not None and not self._applies_to(target):
            return []
        content = target.content
        return [
            target.finding(self.kind, str(line_of(content, match.start())))
            for match in self._pattern.finditer(content)
        ]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"


class MultiPatternRule:
    """Flag matches of several labelled patterns, each with its own finding kind.

    Findings are grouped by pattern, in the order the patterns were given, and
    ordered by offset within a pattern.
    """

    def __init__(self, name: str, patterns: Sequence[Tuple[str, str]], flags: int = 0) -> None:
        if not patterns:
            raise RuleConfigurationError(f"Rule {name!r} needs at least one pattern")
        self.name = name
        self._patterns = [(kind, compile_pattern(name, pattern, flags)) for kind, pattern in patterns]

    def inspect(self, target: ScanTarget) -> List[Finding]:
        content = target.content
        findings: List[Finding] = []
        for kind, pattern in self._patterns:
            for match in pattern.finditer(content):
                findings.append(target.finding(kind, str(line_of(content, match.start()))))
        return findings

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"


class FunctionCallRule(MultiPatternRule):
    """Flag calls to any of a fixed list of function names.

    A call is the bare name at a word boundary followed by ``(``, optionally
    separated by whitespace. The kind is ``"<prefix>: <name>"``.
    """

    def __init__(self, name: str, kind_prefix: str, functions: Sequence[str]) -> None:
        for function in functions:
            if not re.fullmatch(r"[A-Za-z_][A-Za-z0-9_]*", function):
                raise RuleConfigurationError(f"Rule {name!r} has an invalid function name {function!r}")
        super().__init__(
            name,
            [(f"{kind_prefix}: {function}", rf"\b{function}\s*\(") for function in functions],
        )
        self.functions = tuple(functions)
