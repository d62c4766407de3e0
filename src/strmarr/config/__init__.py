"""Application configuration helpers."""

from __future__ import annotations

from .env import optional_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging
from .playarr import DEFAULT_MEDIA_TYPES, PlayarrConfig, get_playarr_config
from .sync import (
    DEFAULT_MEDIA_PATH,
    DEFAULT_SYNC_SCHEDULE,
    POINTER_FILE_SUFFIX,
    SyncConfig,
    get_sync_config,
)

__all__ = [
    "DEFAULT_MEDIA_PATH",
    "DEFAULT_MEDIA_TYPES",
    "DEFAULT_SYNC_SCHEDULE",
    "POINTER_FILE_SUFFIX",
    "ConfigurationError",
    "MissingConfigurationError",
    "PlayarrConfig",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "SyncConfig",
    "configure_logging",
    "get_playarr_config",
    "get_sync_config",
    "optional_env_var",
    "require_env_vars",
]
