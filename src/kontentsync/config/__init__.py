"""Application configuration helpers."""

from __future__ import annotations

from .env import env_flag, env_list, require_env_vars
from .errors import (
    ConfigurationError,
    InvalidConfigurationValueError,
    MissingConfigurationError,
)
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy
from .kontent import (
    KONTENT_DELIVERY_URL,
    KONTENT_PREVIEW_URL,
    KontentConfig,
    build_kontent_resilience,
    get_kontent_config,
)
from .logging import VERBOSE, configure_logging
from .storage import DatabaseConfig, StorageConfig, get_database_config, get_storage_config

__all__ = [
    "KONTENT_DELIVERY_URL",
    "KONTENT_PREVIEW_URL",
    "VERBOSE",
    "ConfigurationError",
    "DatabaseConfig",
    "InvalidConfigurationValueError",
    "KontentConfig",
    "MissingConfigurationError",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "StorageConfig",
    "build_kontent_resilience",
    "configure_logging",
    "env_flag",
    "env_list",
    "get_database_config",
    "get_kontent_config",
    "get_storage_config",
    "require_env_vars",
]
