"""Application configuration helpers."""

from __future__ import annotations

from .env import env_flag, env_int, optional_env_var
from .errors import ConfigurationError
from .logging import configure_logging
from .merge import MergeConfig, get_merge_config
from .storage import DatabaseConfig, StorageConfig, get_database_config, get_storage_config

__all__ = [
    "ConfigurationError",
    "DatabaseConfig",
    "MergeConfig",
    "StorageConfig",
    "configure_logging",
    "env_flag",
    "env_int",
    "get_database_config",
    "get_merge_config",
    "get_storage_config",
    "optional_env_var",
]
