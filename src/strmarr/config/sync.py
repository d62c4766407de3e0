"""Synchronization settings for the pointer-file reconciler."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from croniter import croniter

from .env import optional_env_var
from .errors import ConfigurationError
from .playarr import PlayarrConfig, get_playarr_config

DEFAULT_MEDIA_PATH = "/app/media"
DEFAULT_SYNC_SCHEDULE = "0 * * * *"
POINTER_FILE_SUFFIX = ".strm"


@dataclass(frozen=True, slots=True)
class SyncConfig:
    """Everything one reconciliation run needs, resolved once at startup."""

    media_root: Path
    playarr: PlayarrConfig
    schedule: str = DEFAULT_SYNC_SCHEDULE
    pointer_suffix: str = POINTER_FILE_SUFFIX


def validate_schedule(expression: str) -> str:
    if not croniter.is_valid(expression):
        raise ConfigurationError(f"SYNC_INTERVAL is not a valid cron expression: {expression!r}")
    return expression


def get_sync_config(*, playarr: PlayarrConfig | None = None) -> SyncConfig:
    playarr_config = playarr or get_playarr_config()
    media_root = Path(optional_env_var("MEDIA_PATH", DEFAULT_MEDIA_PATH)).expanduser()
    schedule = validate_schedule(optional_env_var("SYNC_INTERVAL", DEFAULT_SYNC_SCHEDULE))
    return SyncConfig(media_root=media_root, playarr=playarr_config, schedule=schedule)
