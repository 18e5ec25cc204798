"""Base class for recordguard validators."""

from typing import Any

from recordguard.validation.messages import DEFAULT_MESSAGES, MessageInterpolator, humanize
from recordguard.validation.types import (
    OK,
    Failed,
    FieldDescriptor,
    RecordLike,
    RuleConfig,
    ValidationOutcome,
)

_interpolator = MessageInterpolator()


class BaseValidator:
    """Base class for validators with message resolution.

    A validator class is its own factory: the validation service calls it
    with a RuleConfig and then calls ``validate`` once. Subclasses override
    ``validate`` and report failures through ``fail``.

    Message lookup for a failure key (e.g. "length.min"), first hit wins:
    1. ``message`` option on the rule declaration
    2. resolver key scoped to the record type and field ("user.name.presence")
    3. resolver key ("presence")
    4. built-in catalog, by rule type and then by ``message_key``
    5. the built-in "invalid" message
    """

    # Base key into the built-in catalog; lets a validator registered under
    # another rule type still find its default messages.
    message_key: str = "invalid"

    def __init__(self, config: RuleConfig):
        self.config = config
        self.options = dict(config.options)
        self.attribute = config.attribute
        self.message_resolver = config.message_resolver
        self.type_key = config.type_key

    @property
    def shorthand(self) -> Any:
        """The value of a scalar declaration like ``{presence: true}``."""
        return self.options.get(self.config.rule_type)

    def validate(
        self,
        name: str,
        value: Any,
        field: FieldDescriptor,
        record: RecordLike,
    ) -> ValidationOutcome:
        """Validate one value. Override in subclasses."""
        raise NotImplementedError("Subclasses must implement validate()")

    def ok(self) -> ValidationOutcome:
        return OK

    def fail(self, field: FieldDescriptor, suffix: str = "", **params: Any) -> Failed:
        template = self.resolve_message(field, suffix)
        values = {k: v for k, v in self.options.items() if isinstance(k, str)}
        values.update(params)
        values.setdefault("description", self.description(field))
        return Failed(_interpolator.interpolate(template, values))

    def resolve_message(self, field: FieldDescriptor, suffix: str = "") -> str:
        explicit = self.options.get("message")
        if isinstance(explicit, str) and explicit:
            return explicit

        keys = [f"{self.type_key}{suffix}"]
        if self.message_key != self.type_key:
            keys.append(f"{self.message_key}{suffix}")

        if self.message_resolver is not None:
            for key in keys:
                if field.parent_type_key:
                    message = self.message_resolver.resolve_message(
                        f"{field.parent_type_key}.{field.name}.{key}"
                    )
                    if message:
                        return message
                message = self.message_resolver.resolve_message(key)
                if message:
                    return message

        for key in keys:
            if key in DEFAULT_MESSAGES:
                return DEFAULT_MESSAGES[key]
        return DEFAULT_MESSAGES["invalid"]

    def description(self, field: FieldDescriptor) -> str:
        return field.description or humanize(field.name)

    @staticmethod
    def is_blank(value: Any) -> bool:
        """Check if a value is considered blank."""
        if value is None:
            return True
        if isinstance(value, str) and value.strip() == "":
            return True
        if isinstance(value, (list, tuple, set, dict)) and len(value) == 0:
            return True
        return False
