"""recordguard validation system.

This module provides declarative per-field validation for records:
- Rules: field ``validation`` metadata expands into rule descriptors
- Registry: validator factories and the message resolver, looked up by name
  with application overrides taking precedence over built-ins
- Service: runs validators, collects errors, moves the record's status and
  guards commits

Usage:
    from recordguard.validation import Registry, ValidationService
    from recordguard.validation.validators import register_builtin_validators

    # At application startup
    registry = Registry()
    register_builtin_validators(registry)
    service = ValidationService(registry, commit=store.save)
"""

from recordguard.validation.errors import Errors
from recordguard.validation.messages import (
    DEFAULT_MESSAGES,
    MessageCatalog,
    MessageInterpolator,
    default_catalog,
)
from recordguard.validation.registry import (
    Registry,
    lookup_message_resolver,
    lookup_validator_factory,
)
from recordguard.validation.rules import camelize, normalize_rule_value, resolve_rules
from recordguard.validation.service import ValidationService
from recordguard.validation.types import (
    ATTRIBUTE,
    OK,
    RELATIONSHIP,
    CommitFn,
    Failed,
    FieldDescriptor,
    MessageResolver,
    Ok,
    RecordLike,
    RuleConfig,
    RuleDescriptor,
    ValidationOutcome,
    Validator,
    ValidatorFactory,
)

__all__ = [
    # Types
    "ATTRIBUTE",
    "OK",
    "RELATIONSHIP",
    "CommitFn",
    "Failed",
    "FieldDescriptor",
    "MessageResolver",
    "Ok",
    "RecordLike",
    "RuleConfig",
    "RuleDescriptor",
    "ValidationOutcome",
    "Validator",
    "ValidatorFactory",
    # Errors
    "Errors",
    # Registry
    "Registry",
    "lookup_message_resolver",
    "lookup_validator_factory",
    # Rules
    "camelize",
    "normalize_rule_value",
    "resolve_rules",
    # Messages
    "DEFAULT_MESSAGES",
    "MessageCatalog",
    "MessageInterpolator",
    "default_catalog",
    # Service
    "ValidationService",
]
