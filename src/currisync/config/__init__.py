"""Application configuration helpers."""

from __future__ import annotations

from .data_api import DataApiConfig, get_data_api_config
from .env import optional_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy
from .importing import ImportConfig, StoreBackend, get_import_config
from .logging import configure_logging
from .storage import DatabaseConfig, StorageConfig, get_database_config, get_storage_config

__all__ = [
    "ConfigurationError",
    "DataApiConfig",
    "DatabaseConfig",
    "ImportConfig",
    "MissingConfigurationError",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "StorageConfig",
    "StoreBackend",
    "configure_logging",
    "get_data_api_config",
    "get_database_config",
    "get_import_config",
    "get_storage_config",
    "optional_env_var",
    "require_env_vars",
]
