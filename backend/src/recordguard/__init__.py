"""recordguard: declarative per-field validation for mutable records."""

from recordguard.bootstrap import create_registry, create_validation_service
from recordguard.config import ValidationConfig
from recordguard.exceptions import (
    ConfigurationError,
    InvalidResultError,
    InvalidTransitionError,
    RecordGuardError,
    RecordValidationError,
    SchemaError,
    ValidatorNotFoundError,
)
from recordguard.records import Record, RecordStatus, RecordType, StateTransition
from recordguard.validation import (
    Errors,
    Failed,
    FieldDescriptor,
    MessageCatalog,
    Ok,
    Registry,
    ValidationService,
)

__all__ = [
    "ConfigurationError",
    "Errors",
    "Failed",
    "FieldDescriptor",
    "InvalidResultError",
    "InvalidTransitionError",
    "MessageCatalog",
    "Ok",
    "Record",
    "RecordGuardError",
    "RecordStatus",
    "RecordType",
    "RecordValidationError",
    "Registry",
    "SchemaError",
    "StateTransition",
    "ValidationConfig",
    "ValidationService",
    "ValidatorNotFoundError",
    "create_registry",
    "create_validation_service",
]
