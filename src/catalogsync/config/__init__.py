"""Application configuration helpers."""

from __future__ import annotations

from .engine import EngineConfig, get_engine_config, parse_delete_semantics
from .env import read_env, read_env_list
from .errors import ConfigurationError
from .logging import configure_logging, resolve_log_level
from .storage import (
    DatabaseConfig,
    StorageConfig,
    get_database_config,
    get_database_uri,
    get_storage_config,
)

__all__ = [
    "ConfigurationError",
    "DatabaseConfig",
    "EngineConfig",
    "StorageConfig",
    "configure_logging",
    "get_database_config",
    "get_database_uri",
    "get_engine_config",
    "get_storage_config",
    "parse_delete_semantics",
    "read_env",
    "read_env_list",
    "resolve_log_level",
]
