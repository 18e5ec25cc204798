"""Error collection for recordguard.

Validation failures are collected per field in an ``Errors`` instance owned
by the record; see ``recordguard.exceptions`` for the exception types.
"""

import logging
from collections.abc import Callable, Iterator

logger = logging.getLogger(__name__)

BECAME_INVALID = "became_invalid"
BECAME_VALID = "became_valid"

ErrorsObserver = Callable[["Errors"], None]


# =============================================================================
# Error Collection
# =============================================================================


class Errors:
    """Field name -> ordered list of validation messages.

    Adding never overwrites earlier messages for the same field. The
    collection does not change any record state by itself; the validation
    service raises ``became_invalid`` explicitly and observers (usually the
    owning record) react to it.

    Example:
        errors = Errors()
        errors.add("name", "Name can't be blank")
        errors["name"]       # ["Name can't be blank"]
        errors.is_empty      # False
    """

    def __init__(self) -> None:
        self._messages: dict[str, list[str]] = {}
        self._observers: dict[str, list[ErrorsObserver]] = {
            BECAME_INVALID: [],
            BECAME_VALID: [],
        }
        self._propagating: list[ErrorsObserver] = []

    def add(self, name: str, message: str | list[str]) -> None:
        """Append one or more messages for a field."""
        messages = [message] if isinstance(message, str) else list(message)
        if not messages:
            return
        self._messages.setdefault(name, []).extend(messages)

    def remove(self, name: str) -> None:
        """Drop every message recorded for a field."""
        self._messages.pop(name, None)

    def clear(self) -> None:
        self._messages.clear()

    def get(self, name: str) -> list[str]:
        return list(self._messages.get(name, []))

    def __getitem__(self, name: str) -> list[str]:
        return self.get(name)

    def __contains__(self, name: object) -> bool:
        return bool(self._messages.get(name))  # type: ignore[arg-type]

    def __iter__(self) -> Iterator[tuple[str, str]]:
        for name, messages in self._messages.items():
            for message in messages:
                yield name, message

    def __len__(self) -> int:
        return sum(len(messages) for messages in self._messages.values())

    def __repr__(self) -> str:
        return f"Errors({self.to_dict()!r})"

    @property
    def is_empty(self) -> bool:
        return not any(self._messages.values())

    @property
    def fields(self) -> list[str]:
        """Names of fields with at least one message, in insertion order."""
        return [name for name, messages in self._messages.items() if messages]

    def full_messages(self) -> list[str]:
        return [message for _, message in self]

    def to_dict(self) -> dict[str, list[str]]:
        return {name: list(messages) for name, messages in self._messages.items() if messages}

    # -------------------------------------------------------------------------
    # Signals
    # -------------------------------------------------------------------------

    def subscribe(self, event: str, observer: ErrorsObserver, propagate: bool = False) -> None:
        """Register an observer for ``became_invalid`` or ``became_valid``.

        Exceptions from observers are logged and swallowed unless
        ``propagate`` is set; the owning record subscribes this way so a
        failed status change is not hidden.
        """
        if event not in self._observers:
            raise ValueError(
                f"Unknown errors event '{event}'. "
                f"Expected one of: {', '.join(sorted(self._observers))}"
            )
        self._observers[event].append(observer)
        if propagate:
            self._propagating.append(observer)

    def unsubscribe(self, event: str, observer: ErrorsObserver) -> None:
        observers = self._observers.get(event, [])
        if observer in observers:
            observers.remove(observer)
        if observer in self._propagating and not any(
            observer in registered for registered in self._observers.values()
        ):
            self._propagating.remove(observer)

    def became_invalid(self) -> None:
        self._trigger(BECAME_INVALID)

    def became_valid(self) -> None:
        self._trigger(BECAME_VALID)

    def _trigger(self, event: str) -> None:
        for observer in list(self._observers[event]):
            if observer in self._propagating:
                observer(self)
                continue
            try:
                observer(self)
            except Exception as e:
                logger.error("Errors observer for '%s' failed: %s", event, e)
