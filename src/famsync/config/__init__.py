"""Application configuration helpers."""

from __future__ import annotations

from .env import env_flag, parse_bool, require_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .logging import configure_logging
from .privacy import PrivacyConfig, get_privacy_config
from .storage import (
    DatabaseConfig,
    StorageConfig,
    get_database_config,
    get_database_uri,
    get_storage_config,
)
from .sync import MAX_BATCH_SIZE, SyncConfig, get_sync_config

__all__ = [
    "MAX_BATCH_SIZE",
    "ConfigurationError",
    "DatabaseConfig",
    "MissingConfigurationError",
    "PrivacyConfig",
    "StorageConfig",
    "SyncConfig",
    "configure_logging",
    "env_flag",
    "get_database_config",
    "get_database_uri",
    "get_privacy_config",
    "get_storage_config",
    "get_sync_config",
    "parse_bool",
    "require_env_var",
    "require_env_vars",
]
