"""Tests for rule descriptor resolution and rule value normalization."""

import pytest

from recordguard.exceptions import ConfigurationError
from recordguard.validation.rules import camelize, normalize_rule_value, resolve_rules
from recordguard.validation.types import FieldDescriptor, RuleDescriptor


def make_field(validation, name="name") -> FieldDescriptor:
    options = {} if validation is ... else {"validation": validation}
    return FieldDescriptor(name, options=options)


# =============================================================================
# resolve_rules
# =============================================================================


class TestResolveRules:
    @pytest.mark.parametrize("validation", [..., None, {}, [], (), ""])
    def test_empty_declarations(self, validation):
        assert resolve_rules(make_field(validation)) == []

    def test_single_rule_object(self):
        field = make_field({"presence": True})

        assert resolve_rules(field) == [
            RuleDescriptor(rule_type="presence", rule_value=True, field=field)
        ]

    def test_multi_key_object_keeps_key_order(self):
        field = make_field({"presence": True, "length": {"min": 3}})

        rules = resolve_rules(field)

        assert [(r.rule_type, r.rule_value) for r in rules] == [
            ("presence", True),
            ("length", {"min": 3}),
        ]

    def test_list_keeps_declaration_order(self):
        field = make_field([{"length": {"min": 3}}, {"presence": True}, {"length": {"max": 9}}])

        rules = resolve_rules(field)

        assert [(r.rule_type, r.rule_value) for r in rules] == [
            ("length", {"min": 3}),
            ("presence", True),
            ("length", {"max": 9}),
        ]
        assert all(rule.field is field for rule in rules)

    def test_tuple_is_accepted(self):
        field = make_field(({"presence": True},))
        assert len(resolve_rules(field)) == 1

    def test_empty_rule_object_in_list_yields_nothing(self):
        field = make_field([{}, {"presence": True}])
        assert [r.rule_type for r in resolve_rules(field)] == ["presence"]

    def test_non_mapping_element_raises(self):
        field = make_field([{"presence": True}, "length"])

        with pytest.raises(ConfigurationError, match="Validation rule 1 for field 'name'"):
            resolve_rules(field)

    @pytest.mark.parametrize("validation", ["presence", True, 5])
    def test_scalar_declaration_raises(self, validation):
        with pytest.raises(ConfigurationError, match="must be a mapping"):
            resolve_rules(make_field(validation))

    def test_declaration_is_not_mutated(self):
        validation = [{"length": {"min": 3}}]
        field = make_field(validation)

        resolve_rules(field)

        assert validation == [{"length": {"min": 3}}]


# =============================================================================
# normalize_rule_value
# =============================================================================


class TestNormalizeRuleValue:
    @pytest.mark.parametrize("value", [True, False, 5, "^[a-z]+$", None])
    def test_scalar_is_wrapped(self, value):
        assert normalize_rule_value("rule", value) == {"rule": value}

    def test_list_is_wrapped(self):
        assert normalize_rule_value("inclusion", ["a", "b"]) == {"inclusion": ["a", "b"]}

    def test_mapping_is_copied(self):
        value = {"min": 3, "max": 9}

        normalized = normalize_rule_value("length", value)

        assert normalized == value
        assert normalized is not value

    def test_normalizing_twice_is_a_no_op(self):
        once = normalize_rule_value("length", 5)
        assert normalize_rule_value("length", once) == once


# =============================================================================
# camelize
# =============================================================================


class TestCamelize:
    @pytest.mark.parametrize(
        "key,expected",
        [
            ("presence", "presence"),
            ("min-length", "minLength"),
            ("min_length", "minLength"),
            ("MinLength", "minLength"),
            ("minLength", "minLength"),
            ("greater-than-or-equal", "greaterThanOrEqual"),
        ],
    )
    def test_camelize(self, key, expected):
        assert camelize(key) == expected
