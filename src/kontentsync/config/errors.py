"""Configuration error definitions."""

from __future__ import annotations


class ConfigurationError(RuntimeError):
    """Raised when configuration values are invalid."""


class MissingConfigurationError(ConfigurationError):
    """Raised when required configuration values are absent or blank."""


class InvalidConfigurationValueError(ConfigurationError):
    """Raised when a configuration value cannot be parsed."""

    def __init__(self, name: str, value: str) -> None:
        super().__init__(f"Invalid value for {name}: {value!r}")
        self.name = name
        self.value = value
