"""Provider registry for recordguard.

Provides registration and lookup for:
- Validator factories, keyed by rule type (``validator:<type>``)
- The validation message resolver (``resolver:validation-message``)

Every name exists in two namespaces. The primary namespace belongs to the
application; the vendored namespace (prefixed with ``recordguard@``) holds
what ships with the library. Lookups try the primary name first, so an
application can override any built-in validator or the message catalog
without touching the built-in registrations.
"""

from typing import Any

from recordguard.validation.types import MessageResolver, ValidatorFactory

VENDOR_PREFIX = "recordguard@"

MESSAGE_RESOLVER_NAME = "resolver:validation-message"
VALIDATOR_NAME = "validator:{key}"


class Registry:
    """Name -> provider registry.

    Providers must be explicitly registered before they can be resolved.
    Registries are plain objects handed to the validation service; nothing
    is looked up from global state.

    Example:
        registry = Registry()
        registry.register_validator("presence", PresenceValidator)
        registry.lookup("validator:presence")
    """

    def __init__(self) -> None:
        self._providers: dict[str, Any] = {}

    def register(self, name: str, provider: Any) -> None:
        """Register a provider by its full name.

        Idempotent - re-registering the same name is a no-op.

        Args:
            name: Full name, e.g. "validator:presence" or
                "recordguard@resolver:validation-message"
            provider: The factory or object to return from lookup
        """
        if name in self._providers:
            return  # Already registered, no-op
        self._providers[name] = provider

    def unregister(self, name: str) -> None:
        self._providers.pop(name, None)

    def lookup(self, name: str) -> Any | None:
        """Return the provider registered under ``name``, or None."""
        return self._providers.get(name)

    def is_registered(self, name: str) -> bool:
        return name in self._providers

    def list_registered(self) -> list[str]:
        """List all registered names."""
        return sorted(self._providers)

    def clear(self) -> None:
        """Clear all registrations. Primarily for testing."""
        self._providers.clear()

    # -------------------------------------------------------------------------
    # Namespaced helpers
    # -------------------------------------------------------------------------

    def register_validator(
        self,
        key: str,
        factory: ValidatorFactory,
        vendored: bool = False,
    ) -> None:
        """Register a validator factory for a rule type.

        Args:
            key: Rule type as written in declarations (e.g. "presence")
            factory: Callable taking a RuleConfig and returning a validator
            vendored: Register in the library namespace instead of the
                application namespace
        """
        self.register(_namespaced(VALIDATOR_NAME.format(key=key), vendored), factory)

    def register_message_resolver(
        self,
        resolver: MessageResolver,
        vendored: bool = False,
    ) -> None:
        """Register the validation message resolver."""
        self.register(_namespaced(MESSAGE_RESOLVER_NAME, vendored), resolver)

    def validator_types(self) -> list[str]:
        """Rule types with a registered factory in either namespace."""
        prefix = VALIDATOR_NAME.format(key="")
        types = set()
        for name in self._providers:
            bare = name[len(VENDOR_PREFIX):] if name.startswith(VENDOR_PREFIX) else name
            if bare.startswith(prefix):
                types.add(bare[len(prefix):])
        return sorted(types)


def _namespaced(name: str, vendored: bool) -> str:
    return f"{VENDOR_PREFIX}{name}" if vendored else name


def lookup_message_resolver(registry: Registry) -> MessageResolver | None:
    """Resolve the message resolver, primary namespace first.

    Absence is a legitimate outcome; callers fall back to built-in messages.
    """
    return registry.lookup(MESSAGE_RESOLVER_NAME) or registry.lookup(
        VENDOR_PREFIX + MESSAGE_RESOLVER_NAME
    )


def lookup_validator_factory(registry: Registry, key: str) -> ValidatorFactory | None:
    """Resolve the validator factory for a rule type, primary namespace first.

    Returns None when neither namespace has one; the validation service
    turns that into a ValidatorNotFoundError.
    """
    name = VALIDATOR_NAME.format(key=key)
    return registry.lookup(name) or registry.lookup(VENDOR_PREFIX + name)
