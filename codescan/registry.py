"""Explicit, ordered rule registry."""

from __future__ import annotations

from typing import Iterable, Iterator, List, Tuple

from .errors import RuleConfigurationError
from .rules import Rule
from .rules.markup import MarkupRule, lacks_class_and_template, listens_to_generic_event
from .rules.patterns import FunctionCallRule, PatternRule, outside_test_dirs
from .rules.plugin import plugin_no_return_rule

DANGEROUS_FUNCTIONS = ("eval", "exec", "shell_exec", "system", "passthru", "proc_open", "popen")
DEBUG_FUNCTIONS = ("var_dump", "print_r", "die", "exit")


class RuleRegistry:
    """Immutable ordered collection of rules; iteration order is execution order."""

    def __init__(self, rules: Iterable[Rule]) -> None:
        collected: List[Rule] = []
        seen = set()
        for rule in rules:
            name = getattr(rule, "name", None)
            if not isinstance(name, str) or not callable(getattr(rule, "inspect", None)):
                raise RuleConfigurationError(f"{rule!r} does not implement the rule protocol")
            if name in seen:
                raise RuleConfigurationError(f"Duplicate rule name {name!r}")
            seen.add(name)
            collected.append(rule)
        self._rules: Tuple[Rule, ...] = tuple(collected)

    def __iter__(self) -> Iterator[Rule]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    @property
    def names(self) -> List[str]:
        return [rule.name for rule in self._rules]

    def get(self, name: str) -> Rule:
        for rule in self._rules:
            if rule.name == name:
                return rule
        raise KeyError(name)

    def without(self, names: Iterable[str]) -> "RuleRegistry":
        """Return a new registry with the named rules removed."""

        dropped = set(names)
        unknown = dropped.difference(self.names)
        if unknown:
            raise RuleConfigurationError(f"Unknown rule name(s): {', '.join(sorted(unknown))}")
        return RuleRegistry(rule for rule in self._rules if rule.name not in dropped)

    def __repr__(self) -> str:
        return f"RuleRegistry({self.names!r})"


def load_rules() -> List[Rule]:
    return [
        PatternRule(
            name="object_manager",
            kind="Direct ObjectManager usage",
            pattern=r"ObjectManager::getInstance\(",
        ),
        PatternRule(
            name="direct_new",
            kind="Direct instantiation with new",
            pattern=r"\bnew\s+[?\\]?[A-Za-z0-9_]+",
            applies_to=outside_test_dirs,
        ),
        MarkupRule(
            name="block_without_class",
            kind="Block without class/template",
            tag="block",
            predicate=lacks_class_and_template,
        ),
        MarkupRule(
            name="generic_observer",
            kind="Observer listening to generic event",
            tag="observer",
            predicate=listens_to_generic_event,
        ),
        plugin_no_return_rule("before"),
        plugin_no_return_rule("after"),
        plugin_no_return_rule("around"),
        FunctionCallRule("dangerous_functions", "Dangerous PHP function", DANGEROUS_FUNCTIONS),
        FunctionCallRule("debug_functions", "Debug function", DEBUG_FUNCTIONS),
    ]


def default_registry() -> RuleRegistry:
    """Build the registry of all built-in rules in their reporting order."""

    return RuleRegistry(load_rules())
