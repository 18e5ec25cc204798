"""Record model for recordguard.

A RecordType declares the attributes and relationships of a kind of record,
each as a FieldDescriptor carrying optional validation metadata. A Record
holds current values for one instance, its status and its error collection.
"""

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Any

from recordguard.records.states import (
    BECAME_INVALID,
    BECOME_DIRTY,
    DELETE,
    RecordStateMachine,
    RecordStatus,
    StateTransition,
    TransitionObserver,
)
from recordguard.validation.errors import BECAME_INVALID as ERRORS_BECAME_INVALID
from recordguard.validation.errors import Errors
from recordguard.validation.types import ATTRIBUTE, RELATIONSHIP, FieldDescriptor


@dataclass
class RecordType:
    """Declared shape of a kind of record.

    Attributes:
        name: Record type identifier (e.g. "user"), stamped onto fields as
            their parent type when they are validated
        attributes: Scalar fields, validated first
        relationships: Links to other records, validated after attributes
    """

    name: str
    attributes: list[FieldDescriptor] = field(default_factory=list)
    relationships: list[FieldDescriptor] = field(default_factory=list)

    def __post_init__(self) -> None:
        for attribute in self.attributes:
            attribute.kind = ATTRIBUTE
        for relationship in self.relationships:
            relationship.kind = RELATIONSHIP

    def field(self, name: str) -> FieldDescriptor | None:
        for descriptor in self.fields:
            if descriptor.name == name:
                return descriptor
        return None

    @property
    def fields(self) -> list[FieldDescriptor]:
        return self.attributes + self.relationships

    def create(
        self,
        values: dict[str, Any] | None = None,
        status: RecordStatus = RecordStatus.DIRTY,
    ) -> "Record":
        """Create a new record of this type. New records start dirty."""
        return Record(self, values, status=status)

    def load(self, values: dict[str, Any]) -> "Record":
        """Wrap values loaded from storage. Loaded records start clean."""
        return Record(self, values, status=RecordStatus.CLEAN)


class Record:
    """A mutable record with a status and an error collection.

    Example:
        user_type = RecordType("user", attributes=[
            FieldDescriptor("name", options={"validation": {"presence": True}}),
        ])
        user = user_type.create({"name": ""})
        user.set("name", "Ada")
    """

    def __init__(
        self,
        record_type: RecordType,
        values: dict[str, Any] | None = None,
        status: RecordStatus = RecordStatus.CLEAN,
    ):
        self.record_type = record_type
        self._values: dict[str, Any] = dict(values or {})
        self._state = RecordStateMachine(status)
        self._errors = Errors()
        self._errors.subscribe(
            ERRORS_BECAME_INVALID, self._errors_became_invalid, propagate=True
        )

    def __repr__(self) -> str:
        return f"<Record {self.model_name} status={self.status.value} values={self._values!r}>"

    @property
    def model_name(self) -> str:
        return self.record_type.name

    @property
    def errors(self) -> Errors:
        return self._errors

    @property
    def status(self) -> RecordStatus:
        return self._state.status

    @property
    def is_valid(self) -> bool:
        return self.status is not RecordStatus.INVALID

    @property
    def is_deleted(self) -> bool:
        return self.status is RecordStatus.DELETED

    @property
    def is_dirty(self) -> bool:
        return self.status in (RecordStatus.DIRTY, RecordStatus.INVALID)

    @property
    def is_saving(self) -> bool:
        return self.status is RecordStatus.IN_FLIGHT

    # -------------------------------------------------------------------------
    # Values
    # -------------------------------------------------------------------------

    def get(self, name: str) -> Any:
        return self._values.get(name)

    def set(self, name: str, value: Any) -> None:
        """Change a field value and mark the record dirty.

        Raises:
            KeyError: If the record type declares no such field
            InvalidTransitionError: If the record is deleted
        """
        if self.record_type.field(name) is None:
            raise KeyError(f"Record type '{self.model_name}' has no field '{name}'")
        self._state.send(BECOME_DIRTY)
        self._values[name] = value

    def update(self, values: dict[str, Any]) -> None:
        for name, value in values.items():
            self.set(name, value)

    def to_dict(self) -> dict[str, Any]:
        return dict(self._values)

    # -------------------------------------------------------------------------
    # Field enumeration
    # -------------------------------------------------------------------------

    def each_attribute(self, callback: Callable[[str, FieldDescriptor], None]) -> None:
        _each(self.record_type.attributes, callback)

    def each_relationship(self, callback: Callable[[str, FieldDescriptor], None]) -> None:
        _each(self.record_type.relationships, callback)

    # -------------------------------------------------------------------------
    # Status
    # -------------------------------------------------------------------------

    def send(self, event: str) -> StateTransition:
        return self._state.send(event)

    def on_transition(self, observer: TransitionObserver) -> TransitionObserver:
        """Register an observer called after every status change."""
        return self._state.subscribe(observer)

    def delete(self) -> None:
        self._state.send(DELETE)

    def _errors_became_invalid(self, errors: Errors) -> None:
        self._state.send(BECAME_INVALID)


def _each(
    descriptors: Iterable[FieldDescriptor],
    callback: Callable[[str, FieldDescriptor], None],
) -> None:
    for descriptor in descriptors:
        callback(descriptor.name, descriptor)
