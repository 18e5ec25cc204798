"""Validation configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from recordguard.exceptions import ConfigurationError

_TRUE_VALUES = ("1", "true", "yes", "on")


@dataclass
class ValidationConfig:
    """Settings for the validation service and its registries.

    Attributes:
        strict_results: Raise InvalidResultError when a validator returns
            something other than an outcome, a string or None. When False the
            result is logged and ignored.
        messages_path: YAML message catalog registered in the application
            namespace, overriding built-in messages key by key
        error_message: Summary message for rejected commits when no resolver
            provides the "error" key
        log_level: Level name used by the command line
    """

    strict_results: bool = False
    messages_path: Path | None = None
    error_message: str | None = None
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> ValidationConfig:
        """Create config from environment variables.

        Resolution order:
        1. RECORDGUARD_CONFIG env var: YAML file loaded with from_file
        2. RECORDGUARD_STRICT_RESULTS, RECORDGUARD_MESSAGES_PATH,
           RECORDGUARD_ERROR_MESSAGE, RECORDGUARD_LOG_LEVEL override
           individual settings
        3. Defaults
        """
        config_path = os.environ.get("RECORDGUARD_CONFIG")
        config = cls.from_file(Path(config_path)) if config_path else cls()

        strict = os.environ.get("RECORDGUARD_STRICT_RESULTS")
        if strict is not None:
            config.strict_results = strict.strip().lower() in _TRUE_VALUES

        messages_path = os.environ.get("RECORDGUARD_MESSAGES_PATH")
        if messages_path:
            config.messages_path = Path(messages_path)

        error_message = os.environ.get("RECORDGUARD_ERROR_MESSAGE")
        if error_message:
            config.error_message = error_message

        log_level = os.environ.get("RECORDGUARD_LOG_LEVEL")
        if log_level:
            config.log_level = log_level.upper()

        return config

    @classmethod
    def from_file(cls, path: Path) -> ValidationConfig:
        """Load config from a YAML file.

        Relative ``messagesPath`` values are resolved against the file's
        directory.

        Raises:
            ConfigurationError: If the file cannot be read or parsed
        """
        try:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Cannot load config {path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigurationError(f"Config {path} must be a mapping")

        return cls.from_dict(data, base_path=path.parent)

    @classmethod
    def from_dict(cls, data: dict[str, Any], base_path: Path | None = None) -> ValidationConfig:
        messages_path = data.get("messagesPath")
        if messages_path:
            messages_path = Path(messages_path)
            if base_path is not None and not messages_path.is_absolute():
                messages_path = base_path / messages_path

        return cls(
            strict_results=bool(data.get("strictResults", False)),
            messages_path=messages_path or None,
            error_message=data.get("errorMessage"),
            log_level=str(data.get("logLevel", "WARNING")).upper(),
        )
