"""Validation messages for recordguard.

This module provides:
1. DEFAULT_MESSAGES: the built-in English catalog, used when no resolver is
   registered or the registered one has no entry for a key
2. MessageCatalog: a dict-backed MessageResolver, loadable from YAML
3. MessageInterpolator: fills ``{placeholder}`` values into message templates
"""

import re
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from recordguard.exceptions import ConfigurationError


DEFAULT_MESSAGES: dict[str, str] = {
    "error": "Validation failed.",
    "invalid": "{description} is invalid",
    "presence": "{description} can't be blank",
    "absence": "{description} must be blank",
    "length.min": "{description} is too short (minimum is {min} characters)",
    "length.max": "{description} is too long (maximum is {max} characters)",
    "length.is": "{description} is the wrong length (should be {is} characters)",
    "range.min": "{description} must be greater than or equal to {min}",
    "range.max": "{description} must be less than or equal to {max}",
    "number": "{description} must be a number",
    "digit": "{description} must contain only digits",
    "pattern": "{description} is invalid",
    "email": "{description} must be a valid email address",
    "url": "{description} must be a valid URL",
    "acceptance": "{description} must be accepted",
    "inclusion": "{description} is not included in the list",
    "exclusion": "{description} is reserved",
}


# =============================================================================
# Message Catalog
# =============================================================================


class MessageCatalog:
    """Dict-backed message resolver.

    Keys are dotted strings ("length.min", "user.name.presence"). Nested
    mappings are flattened on construction, so a YAML catalog can be written
    in sections. A parent catalog answers keys this one does not define.
    """

    def __init__(
        self,
        messages: Mapping[str, Any] | None = None,
        parent: "MessageCatalog | None" = None,
    ):
        self.messages = _flatten(messages or {})
        self.parent = parent

    def resolve_message(self, key: str) -> str | None:
        message = self.messages.get(key)
        if message:
            return message
        if self.parent is not None:
            return self.parent.resolve_message(key)
        return None

    @classmethod
    def from_yaml(cls, path: Path, parent: "MessageCatalog | None" = None) -> "MessageCatalog":
        """Load a catalog from a YAML file.

        Raises:
            ConfigurationError: If the file cannot be parsed or is not a mapping
        """
        try:
            with open(path) as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Cannot load message catalog {path}: {e}") from e

        if data is None:
            data = {}
        if not isinstance(data, Mapping):
            raise ConfigurationError(
                f"Message catalog {path} must be a mapping, got {type(data).__name__}"
            )
        return cls(data, parent=parent)


def default_catalog() -> MessageCatalog:
    return MessageCatalog(DEFAULT_MESSAGES)


def _flatten(data: Mapping[str, Any], prefix: str = "") -> dict[str, str]:
    flat: dict[str, str] = {}
    for key, value in data.items():
        full_key = f"{prefix}{key}"
        if isinstance(value, Mapping):
            flat.update(_flatten(value, prefix=f"{full_key}."))
        elif value is not None:
            flat[full_key] = str(value)
    return flat


# =============================================================================
# Message Interpolator
# =============================================================================


class MessageInterpolator:
    """Interpolates values into message templates.

    Supports ``{name}`` placeholders; names may contain letters, digits,
    underscores and dots. Placeholders without a value are left untouched so
    a missing parameter is visible in the output rather than silently blank.
    """

    PATTERN = re.compile(r"\{(?P<name>[\w.]+)\}")

    def interpolate(self, template: str, params: Mapping[str, Any]) -> str:
        def replace(match: re.Match) -> str:
            name = match.group("name")
            if name not in params or params[name] is None:
                return match.group(0)
            return self._format_value(params[name])

        return self.PATTERN.sub(replace, template)

    def _format_value(self, value: Any) -> str:
        if isinstance(value, bool):
            return "Yes" if value else "No"
        if isinstance(value, (list, tuple)):
            return ", ".join(str(v) for v in value)
        return str(value)


def humanize(name: str) -> str:
    """Convert a field name to a sentence-case label.

    "firstName" -> "First name", "date_of_birth" -> "Date of birth"
    """
    words = re.sub(r"([A-Z])", r" \1", name).replace("_", " ").replace("-", " ")
    words = " ".join(words.split()).lower()
    return words[:1].upper() + words[1:]
