"""Settings for the compendium store, the feature engine and logging."""

from __future__ import annotations

from .engine import EngineConfig, get_engine_config
from .env import env_int, env_str
from .errors import ConfigurationError, InvalidDocumentError
from .logging import configure_logging
from .storage import DatabaseConfig, StorageConfig, get_database_config, get_storage_config

__all__ = [
    "ConfigurationError",
    "DatabaseConfig",
    "EngineConfig",
    "InvalidDocumentError",
    "StorageConfig",
    "configure_logging",
    "env_int",
    "env_str",
    "get_database_config",
    "get_engine_config",
    "get_storage_config",
]
