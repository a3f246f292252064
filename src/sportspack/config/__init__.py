"""Application configuration helpers."""

from __future__ import annotations

from .env import optional_env_var, positive_float_env_var
from .errors import ConfigurationError
from .inheritance import DEFAULT_CACHE_TTL_SECONDS, InheritanceConfig, get_inheritance_config
from .providers import ProviderConfig, get_provider_config
from .storage import DatabaseConfig, StorageConfig, get_database_config, get_storage_config
from .sync import DEFAULT_SYNC_DAYS, SyncConfig, get_sync_config

__all__ = [
    "DEFAULT_CACHE_TTL_SECONDS",
    "DEFAULT_SYNC_DAYS",
    "ConfigurationError",
    "DatabaseConfig",
    "InheritanceConfig",
    "ProviderConfig",
    "StorageConfig",
    "SyncConfig",
    "get_database_config",
    "get_inheritance_config",
    "get_provider_config",
    "get_storage_config",
    "get_sync_config",
    "optional_env_var",
    "positive_float_env_var",
]
