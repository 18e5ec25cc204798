"""Validators for recordguard.

This module provides the validator base class and the built-in validators
that can be referenced from field declarations.
"""

from recordguard.validation.validators.base import BaseValidator
from recordguard.validation.validators.builtin import (
    BUILTIN_VALIDATORS,
    AbsenceValidator,
    AcceptanceValidator,
    DigitValidator,
    EmailValidator,
    ExclusionValidator,
    InclusionValidator,
    LengthValidator,
    NumberValidator,
    PatternValidator,
    PresenceValidator,
    RangeValidator,
    UrlValidator,
    register_builtin_validators,
)

__all__ = [
    "BUILTIN_VALIDATORS",
    "AbsenceValidator",
    "AcceptanceValidator",
    "BaseValidator",
    "DigitValidator",
    "EmailValidator",
    "ExclusionValidator",
    "InclusionValidator",
    "LengthValidator",
    "NumberValidator",
    "PatternValidator",
    "PresenceValidator",
    "RangeValidator",
    "UrlValidator",
    "register_builtin_validators",
]
