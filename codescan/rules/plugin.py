"""Paired-construct rules: a declaration plus an expectation about its body."""

from __future__ import annotations

import re
from typing import List

from codescan.errors import RuleConfigurationError
from codescan.result import Finding
from codescan.utils import line_of

from . import ScanTarget
from .patterns import PathFilter, compile_pattern

PLUGIN_PATH_MARKER = "Plugin/"


def in_plugin_dir(target: ScanTarget) -> bool:
    return PLUGIN_PATH_MARKER in target.relative_path


class PairedConstructRule:
    """Flag declarations whose body does not contain an expected substring.

    ``declaration`` must capture the body in a group named ``body``. The
    pattern decides how far a body reaches; see :func:`plugin_method_pattern`
    for the brace heuristic used by plugin rules.
    """

    def __init__(self, name: str, kind: str, declaration: str, expected: str, applies_to: PathFilter) -> None:
        self.name = name
        self.kind = kind
        self.expected = expected
        self._declaration = compile_pattern(name, declaration, re.DOTALL)
        if "body" not in self._declaration.groupindex:
            raise RuleConfigurationError(f"Rule {name!r} declaration pattern has no 'body' group")
        self._applies_to = applies_to

    def inspect(self, target: ScanTarget) -> List[Finding]:
        if not self._applies_to(target):
            return []
        content = target.content
        return [
            target.finding(self.kind, str(line_of(content, match.start())))
            for match in self._declaration.finditer(content)
            if self.expected not in match.group("body")
        ]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"


def plugin_method_pattern(prefix: str) -> str:
    """Match ``function <prefix><Name>(...)[: type] { ... }`` up to the first closing brace.

    The parameter list never spans a ``{`` or ``;``, so a signature that does
    not match stays unmatched instead of borrowing a later method's body.

    Bodies containing nested braces are cut at the first ``}``, so a
    ``return`` after a nested block is not seen.
    """

    return (
        rf"function {prefix}[A-Z][A-Za-z0-9_]*\([^{{;]*?\)"
        r"(?:\s*:\s*\??[\\\w|]+)?"
        r"\s*\{(?P<body>[^}]*)\}"
    )


def plugin_no_return_rule(prefix: str) -> PairedConstructRule:
    return PairedConstructRule(
        name=f"plugin_{prefix}_no_return",
        kind=f"Plugin {prefix} without return",
        declaration=plugin_method_pattern(prefix),
        expected="return",
        applies_to=in_plugin_dir,
    )
