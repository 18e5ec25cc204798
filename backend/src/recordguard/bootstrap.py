"""Wiring between configuration, registries and the validation service.

Usage:
    from recordguard.bootstrap import create_validation_service

    service = create_validation_service(commit=store.save)
"""

import logging

from recordguard.config import ValidationConfig
from recordguard.validation.messages import MessageCatalog, default_catalog
from recordguard.validation.registry import Registry
from recordguard.validation.service import ValidationService
from recordguard.validation.types import CommitFn
from recordguard.validation.validators import register_builtin_validators

logger = logging.getLogger(__name__)


def create_registry(config: ValidationConfig | None = None) -> Registry:
    """Build a registry with everything the library ships.

    Built-in validators and the default message catalog go in the vendored
    namespace. A catalog configured with ``messages_path`` is registered in
    the application namespace and falls back to the defaults.
    """
    config = config or ValidationConfig()
    registry = Registry()

    register_builtin_validators(registry)

    defaults = default_catalog()
    registry.register_message_resolver(defaults, vendored=True)

    if config.messages_path is not None:
        catalog = MessageCatalog.from_yaml(config.messages_path, parent=defaults)
        registry.register_message_resolver(catalog)
        logger.debug("Loaded %d message(s) from %s", len(catalog.messages), config.messages_path)

    return registry


def create_validation_service(
    config: ValidationConfig | None = None,
    commit: CommitFn | None = None,
    registry: Registry | None = None,
) -> ValidationService:
    """Create a ValidationService configured from ``config`` (or the environment)."""
    if config is None:
        config = ValidationConfig.from_env()
    if registry is None:
        registry = create_registry(config)
    return ValidationService(registry, commit=commit, config=config)
