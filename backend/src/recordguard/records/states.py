"""Record status state machine.

A record is always in exactly one status. Status changes happen only by
sending an event; every accepted event is reported to the registered
transition observers.

Statuses:
- clean: loaded or saved, no local changes
- dirty: has local changes not yet committed
- in_flight: a commit is in progress
- invalid: the last validation pass failed
- deleted: marked for deletion; never validated or changed again, but
  its deletion can still be committed
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from recordguard.exceptions import InvalidTransitionError

logger = logging.getLogger(__name__)


class RecordStatus(Enum):
    CLEAN = "clean"
    DIRTY = "dirty"
    IN_FLIGHT = "in_flight"
    INVALID = "invalid"
    DELETED = "deleted"


# Events
BECOME_DIRTY = "become_dirty"
WILL_COMMIT = "will_commit"
DID_COMMIT = "did_commit"
BECAME_ERROR = "became_error"
BECAME_VALID = "became_valid"
BECAME_INVALID = "became_invalid"
DELETE = "delete"

TRANSITIONS: dict[RecordStatus, dict[str, RecordStatus]] = {
    RecordStatus.CLEAN: {
        BECOME_DIRTY: RecordStatus.DIRTY,
        WILL_COMMIT: RecordStatus.IN_FLIGHT,
        BECAME_INVALID: RecordStatus.INVALID,
        DELETE: RecordStatus.DELETED,
    },
    RecordStatus.DIRTY: {
        BECOME_DIRTY: RecordStatus.DIRTY,
        WILL_COMMIT: RecordStatus.IN_FLIGHT,
        BECAME_INVALID: RecordStatus.INVALID,
        DELETE: RecordStatus.DELETED,
    },
    RecordStatus.IN_FLIGHT: {
        BECOME_DIRTY: RecordStatus.DIRTY,
        WILL_COMMIT: RecordStatus.IN_FLIGHT,
        DID_COMMIT: RecordStatus.CLEAN,
        BECAME_ERROR: RecordStatus.DIRTY,
        BECAME_INVALID: RecordStatus.INVALID,
    },
    RecordStatus.INVALID: {
        BECAME_VALID: RecordStatus.DIRTY,
        BECOME_DIRTY: RecordStatus.INVALID,
        WILL_COMMIT: RecordStatus.IN_FLIGHT,
        BECAME_INVALID: RecordStatus.INVALID,
        DELETE: RecordStatus.DELETED,
    },
    # Committing a deletion keeps the record deleted
    RecordStatus.DELETED: {
        WILL_COMMIT: RecordStatus.DELETED,
        DID_COMMIT: RecordStatus.DELETED,
        BECAME_ERROR: RecordStatus.DELETED,
    },
}


@dataclass(frozen=True)
class StateTransition:
    """One accepted event and the statuses on either side of it."""

    event: str
    previous: RecordStatus
    current: RecordStatus


TransitionObserver = Callable[[StateTransition], None]


class RecordStateMachine:
    """Holds a record's status and applies events to it.

    Observers run synchronously after each transition, in registration
    order. A failing observer is logged and does not stop the others.
    """

    def __init__(self, status: RecordStatus = RecordStatus.CLEAN):
        self.status = status
        self._observers: list[TransitionObserver] = []

    def can_handle(self, event: str) -> bool:
        return event in TRANSITIONS[self.status]

    def send(self, event: str) -> StateTransition:
        """Apply an event.

        Raises:
            InvalidTransitionError: If the current status does not handle the event
        """
        handlers = TRANSITIONS[self.status]
        if event not in handlers:
            raise InvalidTransitionError(self.status.value, event)

        transition = StateTransition(event=event, previous=self.status, current=handlers[event])
        self.status = transition.current
        logger.debug(
            "Record status %s -> %s on %s",
            transition.previous.value,
            transition.current.value,
            event,
        )

        for observer in list(self._observers):
            try:
                observer(transition)
            except Exception as e:
                logger.error("Transition observer failed on '%s': %s", event, e)

        return transition

    def subscribe(self, observer: TransitionObserver) -> TransitionObserver:
        self._observers.append(observer)
        return observer

    def unsubscribe(self, observer: TransitionObserver) -> None:
        if observer in self._observers:
            self._observers.remove(observer)
