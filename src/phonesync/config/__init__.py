"""Application configuration helpers."""

from __future__ import annotations

from .env import optional_env_var
from .errors import ConfigurationError
from .http import HttpConfig, RetryPolicy, get_http_config
from .logging import configure_logging
from .storage import StorageConfig, get_storage_config
from .sync import SyncConfig, get_sync_config

__all__ = [
    "ConfigurationError",
    "HttpConfig",
    "RetryPolicy",
    "StorageConfig",
    "SyncConfig",
    "configure_logging",
    "get_http_config",
    "get_storage_config",
    "get_sync_config",
    "optional_env_var",
]
