"""Records, record types and the record status state machine."""

from recordguard.records.model import Record, RecordType
from recordguard.records.states import (
    BECAME_ERROR,
    BECAME_INVALID,
    BECAME_VALID,
    BECOME_DIRTY,
    DELETE,
    DID_COMMIT,
    TRANSITIONS,
    WILL_COMMIT,
    RecordStateMachine,
    RecordStatus,
    StateTransition,
)

__all__ = [
    "Record",
    "RecordType",
    "RecordStateMachine",
    "RecordStatus",
    "StateTransition",
    "TRANSITIONS",
    # Events
    "BECAME_ERROR",
    "BECAME_INVALID",
    "BECAME_VALID",
    "BECOME_DIRTY",
    "DELETE",
    "DID_COMMIT",
    "WILL_COMMIT",
]
