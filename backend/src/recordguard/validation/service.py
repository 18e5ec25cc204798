"""Validation service for recordguard.

This module orchestrates a record's validation pass and its commit:
1. Rule resolution: each field's declarations become rule descriptors
2. Instantiation: each rule gets a fresh validator from the registry
3. Execution: validators run in declaration order; failures are collected
   into the record's error collection under the field name
4. State: the record is moved through in_flight / dirty / invalid
5. Commit guard: ``save`` only commits a record that passed validation
"""

import inspect
import logging
from typing import Any

from recordguard.config import ValidationConfig
from recordguard.exceptions import (
    InvalidResultError,
    RecordValidationError,
    ValidatorNotFoundError,
)
from recordguard.records.states import (
    BECAME_ERROR,
    BECAME_VALID,
    BECOME_DIRTY,
    DID_COMMIT,
    WILL_COMMIT,
    RecordStatus,
)
from recordguard.validation.messages import DEFAULT_MESSAGES
from recordguard.validation.registry import (
    Registry,
    lookup_message_resolver,
    lookup_validator_factory,
)
from recordguard.validation.rules import camelize, normalize_rule_value, resolve_rules
from recordguard.validation.types import (
    CommitFn,
    Failed,
    FieldDescriptor,
    Ok,
    RecordLike,
    RuleConfig,
    RuleDescriptor,
    Validator,
)

logger = logging.getLogger(__name__)


class ValidationService:
    """Runs validation passes over records and guards their commits.

    The service holds no per-record state; registries and the commit
    operation are injected. Passes over the same record must not overlap.

    Example:
        service = ValidationService(registry, commit=store.save)
        if service.validate(record, will_commit=False):
            ...
        await service.save(record)  # raises RecordValidationError on failure
    """

    def __init__(
        self,
        registry: Registry,
        message_registry: Registry | None = None,
        commit: CommitFn | None = None,
        config: ValidationConfig | None = None,
    ):
        self.registry = registry
        self.message_registry = message_registry or registry
        self.commit = commit
        self.config = config or ValidationConfig()

    # -------------------------------------------------------------------------
    # Rules and validators
    # -------------------------------------------------------------------------

    def rules_for(self, field: FieldDescriptor) -> list[RuleDescriptor]:
        return resolve_rules(field)

    def validators_for(self, field: FieldDescriptor) -> list[Validator]:
        """Build one fresh validator per declared rule, in declaration order."""
        return [self.build_validator(rule) for rule in self.rules_for(field)]

    def build_validator(self, rule: RuleDescriptor) -> Validator:
        """Instantiate the validator for one rule.

        Raises:
            ValidatorNotFoundError: If no factory is registered for the rule type
        """
        factory = lookup_validator_factory(self.registry, rule.rule_type)
        if not callable(factory):
            raise ValidatorNotFoundError(rule.rule_type, self.registry.validator_types())

        config = RuleConfig(
            rule_type=rule.rule_type,
            type_key=camelize(rule.rule_type),
            options=normalize_rule_value(rule.rule_type, rule.rule_value),
            attribute=rule.field,
            message_resolver=lookup_message_resolver(self.message_registry),
        )
        return factory(config)

    # -------------------------------------------------------------------------
    # Execution
    # -------------------------------------------------------------------------

    def validate_field(self, record: RecordLike, field: FieldDescriptor) -> None:
        """Run every validator declared on one field.

        All rules run even after one fails, so a field can collect several
        messages in one pass.
        """
        rules = self.rules_for(field)
        validators = [self.build_validator(rule) for rule in rules]
        name = field.name

        field.parent_type_key = record.model_name

        for rule, validator in zip(rules, validators):
            result = validator.validate(name, record.get(name), field, record)
            self._add_error(record, name, rule, result)

    def _add_error(
        self,
        record: RecordLike,
        name: str,
        rule: RuleDescriptor,
        result: Any,
    ) -> None:
        if result is None or isinstance(result, Ok):
            return
        if isinstance(result, Failed):
            if result.message:
                record.errors.add(name, result.message)
            return
        if isinstance(result, str):
            if result:
                record.errors.add(name, result)
            return

        # Only strings and Failed outcomes count as failures
        if self.config.strict_results:
            raise InvalidResultError(rule.rule_type, result)
        if inspect.isawaitable(result) and hasattr(result, "close"):
            result.close()
        logger.warning(
            "Ignoring unsupported result from validator '%s' on %s.%s: %r",
            rule.rule_type,
            record.model_name,
            name,
            result,
        )

    # -------------------------------------------------------------------------
    # Validation pass
    # -------------------------------------------------------------------------

    def validate(self, record: RecordLike, will_commit: bool = True) -> bool:
        """Validate the record and update its status.

        Errors from a previous pass are cleared first. Deleted records are
        never validated. On failure the record is left dirty and invalid and
        its errors hold one entry per failed rule.

        Args:
            record: The record to validate
            will_commit: Move the record in flight before validating, as part
                of a commit attempt

        Returns:
            True if no validator reported a failure
        """
        errors = record.errors

        if not record.is_valid:
            record.send(BECAME_VALID)
            errors.clear()
            errors.became_valid()

        if record.is_deleted:
            return True

        if will_commit:
            record.send(WILL_COMMIT)

        record.each_attribute(lambda key, attribute: self.validate_field(record, attribute))
        record.each_relationship(lambda key, relationship: self.validate_field(record, relationship))

        is_valid = errors.is_empty

        if not is_valid:
            # A clean record that skipped validation earlier must become dirty
            # before it can be marked invalid
            record.send(BECOME_DIRTY)
            errors.became_invalid()

        logger.debug(
            "Validated %s: %s (%d error(s))",
            record.model_name,
            "valid" if is_valid else "invalid",
            len(errors),
        )
        return is_valid

    # -------------------------------------------------------------------------
    # Commit guard
    # -------------------------------------------------------------------------

    async def save(self, record: RecordLike, validate: bool = True) -> Any:
        """Validate, then commit the record.

        Args:
            record: The record to save
            validate: Set False to commit without validating. Errors from an
                earlier failed pass are cleared.

        Returns:
            Whatever the commit operation returns

        Raises:
            RecordValidationError: If validation fails; the commit is not invoked
        """
        if not validate:
            return await self._commit(record)

        if self.validate(record):
            return await self._commit(record)

        raise self.create_validation_error(record)

    def create_validation_error(self, record: RecordLike) -> RecordValidationError:
        """Build the aggregate error for a rejected commit."""
        resolver = lookup_message_resolver(self.message_registry)
        message = resolver.resolve_message("error") if resolver is not None else None

        if not message:
            message = self.config.error_message or DEFAULT_MESSAGES["error"]

        return RecordValidationError(message, record.errors)

    async def _commit(self, record: RecordLike) -> Any:
        if self.commit is None:
            raise RuntimeError("ValidationService has no commit operation configured")

        # An unvalidated commit drops messages left over from an earlier pass
        if not record.is_valid:
            record.errors.clear()
            record.errors.became_valid()

        if getattr(record, "status", None) is not RecordStatus.IN_FLIGHT:
            record.send(WILL_COMMIT)

        try:
            result = await self.commit(record)
        except Exception:
            record.send(BECAME_ERROR)
            raise

        record.send(DID_COMMIT)
        return result
