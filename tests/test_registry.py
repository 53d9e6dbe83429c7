import pytest

from codescan.errors import RuleConfigurationError
from codescan.registry import RuleRegistry, default_registry
from codescan.rules.patterns import PatternRule

EXPECTED_ORDER = [
    "object_manager",
    "direct_new",
    "block_without_class",
    "generic_observer",
    "plugin_before_no_return",
    "plugin_after_no_return",
    "plugin_around_no_return",
    "dangerous_functions",
    "debug_functions",
]


def test_default_registry_order():
    assert default_registry().names == EXPECTED_ORDER


def test_default_registry_is_rebuilt_each_call():
    assert default_registry() is not default_registry()


def test_duplicate_names_are_rejected():
    rule = PatternRule(name="dup", kind="Dup", pattern="x")

    with pytest.raises(RuleConfigurationError):
        RuleRegistry([rule, PatternRule(name="dup", kind="Dup", pattern="y")])


def test_objects_without_inspect_are_rejected():
    with pytest.raises(RuleConfigurationError):
        RuleRegistry([object()])


def test_without_returns_new_registry():
    registry = default_registry()

    trimmed = registry.without(["direct_new", "debug_functions"])

    assert "direct_new" not in trimmed.names
    assert len(trimmed) == len(registry) - 2
    assert registry.names == EXPECTED_ORDER


def test_without_rejects_unknown_rule():
    with pytest.raises(RuleConfigurationError):
        default_registry().without(["no_such_rule"])


def test_get_unknown_rule_raises_key_error():
    with pytest.raises(KeyError):
        default_registry().get("missing")
