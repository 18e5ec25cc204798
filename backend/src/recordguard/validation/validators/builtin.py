"""Built-in validators for recordguard.

These validators ship with the library and are registered in the vendored
namespace, so an application can override any of them by registering its
own factory under the same rule type.

Available validators:
- presence: value must not be blank
- absence: value must be blank
- length: string/collection length bounds (min, max, is)
- range: numeric bounds (min, max)
- number: value must be a finite number (numeric strings accepted)
- digit / numeric: value must contain only digits
- pattern: value must match a regular expression
- email, url: format checks
- acceptance: value must be an accepted flag (true, "1", "yes", ...)
- inclusion / exclusion: value must (not) be one of a list
"""

import math
import re
from typing import Any

from recordguard.exceptions import ConfigurationError
from recordguard.validation.registry import Registry
from recordguard.validation.types import FieldDescriptor, RecordLike, ValidationOutcome
from recordguard.validation.validators.base import BaseValidator


# =============================================================================
# Format Patterns
# =============================================================================

EMAIL_PATTERN = re.compile(
    r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$"
)

URL_PATTERN = re.compile(
    r"^https?://[^\s/$.?#].[^\s]*$",
    re.IGNORECASE
)

DIGIT_PATTERN = re.compile(r"^\d+$")

ACCEPTED_VALUES = (True, 1, "1", "true", "yes", "on")


# =============================================================================
# Presence / Absence
# =============================================================================


class PresenceValidator(BaseValidator):
    """Value must not be blank. ``{presence: false}`` disables the check."""

    message_key = "presence"

    def validate(self, name: str, value: Any, field: FieldDescriptor, record: RecordLike) -> ValidationOutcome:
        if self.shorthand is False:
            return self.ok()
        if self.is_blank(value):
            return self.fail(field)
        return self.ok()


class AbsenceValidator(BaseValidator):
    """Value must be blank."""

    message_key = "absence"

    def validate(self, name: str, value: Any, field: FieldDescriptor, record: RecordLike) -> ValidationOutcome:
        if self.shorthand is False:
            return self.ok()
        if not self.is_blank(value):
            return self.fail(field)
        return self.ok()


# =============================================================================
# Length / Range
# =============================================================================


class LengthValidator(BaseValidator):
    """Length bounds for strings and collections.

    Options:
        min: Minimum length
        max: Maximum length
        is: Exact length; ``{length: 5}`` is shorthand for ``{length: {is: 5}}``
    """

    message_key = "length"

    def validate(self, name: str, value: Any, field: FieldDescriptor, record: RecordLike) -> ValidationOutcome:
        if value is None:
            return self.ok()
        if not isinstance(value, (str, list, tuple, set, dict)):
            value = str(value)

        length = len(value)
        exact = self.options.get("is", self.shorthand)

        if isinstance(exact, int) and not isinstance(exact, bool):
            if length != exact:
                return self.fail(field, ".is", **{"is": exact, "length": length})
            return self.ok()

        minimum = self.options.get("min")
        maximum = self.options.get("max")

        if minimum is not None and length < minimum:
            return self.fail(field, ".min", length=length)
        if maximum is not None and length > maximum:
            return self.fail(field, ".max", length=length)
        return self.ok()


class RangeValidator(BaseValidator):
    """Numeric bounds (inclusive).

    Non-numeric values pass; pair with ``number`` to reject them.
    """

    message_key = "range"

    def validate(self, name: str, value: Any, field: FieldDescriptor, record: RecordLike) -> ValidationOutcome:
        number = _to_number(value)
        if number is None:
            return self.ok()

        minimum = self.options.get("min")
        maximum = self.options.get("max")

        if minimum is not None and number < minimum:
            return self.fail(field, ".min", value=value)
        if maximum is not None and number > maximum:
            return self.fail(field, ".max", value=value)
        return self.ok()


# =============================================================================
# Number / Digit
# =============================================================================


class NumberValidator(BaseValidator):
    """Value must be a finite number or a string that parses as one."""

    message_key = "number"

    def validate(self, name: str, value: Any, field: FieldDescriptor, record: RecordLike) -> ValidationOutcome:
        if self.is_blank(value):
            return self.ok()
        if _to_number(value) is None:
            return self.fail(field, value=value)
        return self.ok()


class DigitValidator(BaseValidator):
    """Value must consist of digits only, so signs and decimals fail."""

    message_key = "digit"

    def validate(self, name: str, value: Any, field: FieldDescriptor, record: RecordLike) -> ValidationOutcome:
        if self.is_blank(value):
            return self.ok()
        if isinstance(value, (bool, float)) or not DIGIT_PATTERN.match(str(value)):
            return self.fail(field, value=value)
        return self.ok()


# =============================================================================
# Format Validators
# =============================================================================


class PatternValidator(BaseValidator):
    """Value must match a regular expression.

    Options:
        pattern: The expression; ``{pattern: "^[A-Z]+$"}`` is the shorthand form
    """

    message_key = "pattern"

    def __init__(self, config):
        super().__init__(config)
        expression = self.options.get("pattern", self.shorthand)
        if not isinstance(expression, str):
            raise ConfigurationError(
                f"Pattern rule on field '{self.attribute.name}' needs a string pattern"
            )
        try:
            self.pattern = re.compile(expression)
        except re.error as e:
            raise ConfigurationError(
                f"Invalid pattern '{expression}' on field '{self.attribute.name}': {e}"
            ) from e

    def validate(self, name: str, value: Any, field: FieldDescriptor, record: RecordLike) -> ValidationOutcome:
        if self.is_blank(value):
            return self.ok()
        if not self.pattern.match(str(value)):
            return self.fail(field, value=value)
        return self.ok()


class EmailValidator(BaseValidator):
    message_key = "email"

    def validate(self, name: str, value: Any, field: FieldDescriptor, record: RecordLike) -> ValidationOutcome:
        if self.is_blank(value):
            return self.ok()
        if not isinstance(value, str) or not EMAIL_PATTERN.match(value):
            return self.fail(field, value=value)
        return self.ok()


class UrlValidator(BaseValidator):
    message_key = "url"

    def validate(self, name: str, value: Any, field: FieldDescriptor, record: RecordLike) -> ValidationOutcome:
        if self.is_blank(value):
            return self.ok()
        if not isinstance(value, str) or not URL_PATTERN.match(value):
            return self.fail(field, value=value)
        return self.ok()


# =============================================================================
# Acceptance / Inclusion / Exclusion
# =============================================================================


class AcceptanceValidator(BaseValidator):
    """Value must be an accepted flag, or equal the ``accept`` option."""

    message_key = "acceptance"

    def validate(self, name: str, value: Any, field: FieldDescriptor, record: RecordLike) -> ValidationOutcome:
        if "accept" in self.options:
            accepted = value == self.options["accept"]
        else:
            normalized = value.strip().lower() if isinstance(value, str) else value
            accepted = normalized in ACCEPTED_VALUES
        if not accepted:
            return self.fail(field, value=value)
        return self.ok()


class InclusionValidator(BaseValidator):
    """Value must be one of ``in``. ``{inclusion: [a, b]}`` is the shorthand form."""

    message_key = "inclusion"

    def validate(self, name: str, value: Any, field: FieldDescriptor, record: RecordLike) -> ValidationOutcome:
        if self.is_blank(value):
            return self.ok()
        if value not in _choices(self):
            return self.fail(field, value=value)
        return self.ok()


class ExclusionValidator(BaseValidator):
    """Value must not be one of ``in``."""

    message_key = "exclusion"

    def validate(self, name: str, value: Any, field: FieldDescriptor, record: RecordLike) -> ValidationOutcome:
        if self.is_blank(value):
            return self.ok()
        if value in _choices(self):
            return self.fail(field, value=value)
        return self.ok()


def _choices(validator: BaseValidator) -> list[Any]:
    choices = validator.options.get("in", validator.shorthand)
    if not isinstance(choices, (list, tuple, set)):
        raise ConfigurationError(
            f"Rule `{validator.type_key}` on field '{validator.attribute.name}' "
            "needs a list of values"
        )
    return list(choices)


def _to_number(value: Any) -> float | None:
    """Return value as a finite number, or None if it is not one."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


# =============================================================================
# Registration
# =============================================================================

BUILTIN_VALIDATORS: dict[str, type[BaseValidator]] = {
    "presence": PresenceValidator,
    "absence": AbsenceValidator,
    "length": LengthValidator,
    "range": RangeValidator,
    "number": NumberValidator,
    "digit": DigitValidator,
    "numeric": DigitValidator,
    "pattern": PatternValidator,
    "email": EmailValidator,
    "url": UrlValidator,
    "acceptance": AcceptanceValidator,
    "inclusion": InclusionValidator,
    "exclusion": ExclusionValidator,
}


def register_builtin_validators(registry: Registry) -> None:
    """Register all built-in validators in the vendored namespace."""
    for key, validator_class in BUILTIN_VALIDATORS.items():
        registry.register_validator(key, validator_class, vendored=True)
