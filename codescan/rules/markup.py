"""Structured markup (XML) rules."""

from __future__ import annotations

import re
from typing import Callable, List, Mapping

from codescan.result import Finding

from . import ScanTarget

AttributePredicate = Callable[[Mapping[str, str]], bool]

GENERIC_EVENT_PATTERN = re.compile(r"controller_action|^all$|_all$", re.IGNORECASE)


class MarkupRule:
    """Flag every element with a given tag whose attributes satisfy a predicate.

    Markup rules are not offset addressable, so findings carry an empty line.
    Files that fail to parse yield nothing.
    """

    def __init__(self, name: str, kind: str, tag: str, predicate: AttributePredicate) -> None:
        self.name = name
        self.kind = kind
        self.tag = tag
        self._predicate = predicate

    def inspect(self, target: ScanTarget) -> List[Finding]:
        tree = target.markup
        if tree is None:
            return []
        return [target.finding(self.kind) for element in tree.iter(self.tag) if self._predicate(element.attrib)]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"


def lacks_class_and_template(attrs: Mapping[str, str]) -> bool:
    return not attrs.get("class") and not attrs.get("template")


def listens_to_generic_event(attrs: Mapping[str, str]) -> bool:
    name = attrs.get("name")
    if not name:
        return False
    return GENERIC_EVENT_PATTERN.search(name) is not None
