"""Exception hierarchy for recordguard.

Field validation failures are data, not exceptions: they are collected in
the record's error collection. Exceptions are reserved for configuration
mistakes, state machine misuse and rejected commits.
"""

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from recordguard.validation.errors import Errors


class RecordGuardError(Exception):
    """Base class for all recordguard exceptions."""


class ConfigurationError(RecordGuardError):
    """A validation declaration or registration is wrong.

    This is a programming error, not a data error, and is never collected
    into a record's error collection.
    """


class ValidatorNotFoundError(ConfigurationError):
    """No validator factory is registered for a declared rule type."""

    def __init__(self, rule_type: str, available: list[str] | None = None):
        self.rule_type = rule_type
        message = f"Could not find Validator `{rule_type}`."
        if available:
            message += " Available types: " + ", ".join(available)
        super().__init__(message)


class InvalidResultError(ConfigurationError):
    """A validator returned something other than an outcome, a string or None."""

    def __init__(self, rule_type: str, result: Any):
        self.rule_type = rule_type
        self.result = result
        super().__init__(
            f"Validator `{rule_type}` returned an unsupported result of type "
            f"{type(result).__name__}: {result!r}"
        )


class InvalidTransitionError(RecordGuardError):
    """A record received a status event its current state does not handle."""

    def __init__(self, status: Any, event: str):
        self.status = status
        self.event = event
        super().__init__(
            f"Attempted to handle event `{event}` on a record while in state `{status}`."
        )


class SchemaError(RecordGuardError):
    """A record schema file could not be loaded."""


class RecordValidationError(RecordGuardError):
    """Raised from ``save`` when the record fails validation.

    Bundles a human-readable summary with the record's error collection as it
    was when the commit was rejected.
    """

    def __init__(self, message: str, errors: "Errors"):
        super().__init__(message)
        self._message = message
        self._errors = errors

    @property
    def message(self) -> str:
        return self._message

    @property
    def errors(self) -> "Errors":
        return self._errors

    def to_dict(self) -> dict[str, Any]:
        return {
            "message": self._message,
            "errors": self._errors.to_dict(),
        }
