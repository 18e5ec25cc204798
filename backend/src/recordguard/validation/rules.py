"""Rule descriptor resolution.

Turns a field's declarative ``validation`` metadata into an ordered list of
RuleDescriptor objects, and normalizes rule values into the options shape
validators receive.

Accepted declarations:
    validation: {presence: true}                        # single rule object
    validation: {presence: true, length: {min: 3}}      # several rules at one position
    validation: [{length: {min: 3}}, {length: {max: 9}}]  # repeated rule types
"""

import re
from collections.abc import Mapping
from typing import Any

from recordguard.exceptions import ConfigurationError
from recordguard.validation.types import FieldDescriptor, RuleDescriptor

_WORD_SEPARATOR = re.compile(r"[-_\s]+(.)?")


def resolve_rules(field: FieldDescriptor) -> list[RuleDescriptor]:
    """Expand a field's validation metadata into rule descriptors.

    Order is declaration order, then key order within each rule object.

    Raises:
        ConfigurationError: If a declared rule is not a mapping
    """
    validations = field.validation

    if _is_empty(validations):
        return []

    if isinstance(validations, Mapping):
        validations = [validations]
    elif not isinstance(validations, (list, tuple)):
        raise ConfigurationError(
            f"Validation for field '{field.name}' must be a mapping or a list of "
            f"mappings, got {type(validations).__name__}"
        )

    rules: list[RuleDescriptor] = []
    for position, validation in enumerate(validations):
        if not isinstance(validation, Mapping):
            raise ConfigurationError(
                f"Validation rule {position} for field '{field.name}' must be a "
                f"mapping of rule type to value, got {type(validation).__name__}"
            )
        for rule_type, rule_value in validation.items():
            rules.append(RuleDescriptor(rule_type=rule_type, rule_value=rule_value, field=field))

    return rules


def normalize_rule_value(rule_type: str, value: Any) -> dict[str, Any]:
    """Return the options mapping a validator receives for one rule.

    A mapping is copied unchanged, so normalizing twice is a no-op and the
    declaration itself is never mutated. Any other value is shorthand and is
    wrapped as ``{rule_type: value}``.
    """
    if isinstance(value, Mapping):
        return dict(value)
    return {rule_type: value}


def camelize(key: str) -> str:
    """Normalize a rule type to its camel-case message key.

    "min-length", "min_length" and "MinLength" all become "minLength".
    """
    camel = _WORD_SEPARATOR.sub(lambda m: m.group(1).upper() if m.group(1) else "", key)
    return camel[:1].lower() + camel[1:]


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, (str, list, tuple, Mapping)) and len(value) == 0:
        return True
    return False
