"""Core types for the recordguard validation system.

This module defines the foundational types shared by the registry, the
rule resolver and the validation service:
- FieldDescriptor: an attribute or relationship declared on a record type
- RuleDescriptor: one resolved unit of work (rule type, rule value, field)
- RuleConfig: the normalized configuration handed to a validator factory
- Ok / Failed: the explicit result of running a single validator
- Protocols for the external collaborators (validators, message resolvers,
  records and the commit operation)
"""

from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol, Union

from recordguard.validation.errors import Errors


ATTRIBUTE = "attribute"
RELATIONSHIP = "relationship"


@dataclass
class FieldDescriptor:
    """An attribute or relationship declared on a record type.

    Attributes:
        name: Field name, used as the key in the record's error collection
        kind: "attribute" or "relationship"
        type: Declared value type, or the related record type for relationships
        options: Declarative metadata; may carry ``validation`` and ``description``
        parent_type_key: Owning record type, stamped when the field is validated
    """

    name: str
    kind: str = ATTRIBUTE
    type: str | None = None
    options: dict[str, Any] = field(default_factory=dict)
    parent_type_key: str | None = None

    @property
    def validation(self) -> Any:
        return self.options.get("validation")

    @property
    def description(self) -> str | None:
        return self.options.get("description")

    @property
    def is_relationship(self) -> bool:
        return self.kind == RELATIONSHIP


@dataclass(frozen=True)
class RuleDescriptor:
    """One declared rule for one field.

    ``rule_value`` is kept exactly as declared: either a scalar shorthand
    (``{"presence": True}``) or an options mapping (``{"length": {"min": 3}}``).
    """

    rule_type: str
    rule_value: Any
    field: FieldDescriptor


@dataclass(frozen=True)
class Ok:
    """The validator found nothing wrong."""


@dataclass(frozen=True)
class Failed:
    """The validator rejected the value with a human-readable message."""

    message: str


ValidationOutcome = Union[Ok, Failed]

OK = Ok()


class MessageResolver(Protocol):
    """Resolves a message key to a message template."""

    def resolve_message(self, key: str) -> str | None:
        ...


@dataclass(frozen=True)
class RuleConfig:
    """Configuration passed to a validator factory.

    Attributes:
        rule_type: Rule type exactly as declared
        type_key: Camel-cased rule type, used by validators for message keys
        options: Normalized rule options; scalar shorthand is wrapped as
            ``{rule_type: value}``
        attribute: The field being validated
        message_resolver: Resolver from the registry, or None if none is registered
    """

    rule_type: str
    type_key: str
    options: Mapping[str, Any]
    attribute: FieldDescriptor
    message_resolver: MessageResolver | None = None


class RecordLike(Protocol):
    """What the validation service needs from a record."""

    @property
    def model_name(self) -> str | None:
        ...

    @property
    def errors(self) -> Errors:
        ...

    @property
    def is_valid(self) -> bool:
        ...

    @property
    def is_deleted(self) -> bool:
        ...

    def get(self, name: str) -> Any:
        ...

    def each_attribute(self, callback: Callable[[str, FieldDescriptor], None]) -> None:
        ...

    def each_relationship(self, callback: Callable[[str, FieldDescriptor], None]) -> None:
        ...

    def send(self, event: str) -> None:
        ...


class Validator(Protocol):
    """Protocol that all validators must implement.

    Validators are built fresh for every rule on every pass and must return
    a plain value: an ``Ok``/``Failed`` outcome, a failure message string,
    or None.
    """

    def validate(
        self,
        name: str,
        value: Any,
        field: FieldDescriptor,
        record: RecordLike,
    ) -> ValidationOutcome | str | None:
        ...


ValidatorFactory = Callable[[RuleConfig], Validator]

CommitFn = Callable[[RecordLike], Awaitable[Any]]
