"""Application orchestration entry points."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from strmarr.adapters.playarr import PlayarrFetcher
from strmarr.domain.coordinator import RunCoordinator
from strmarr.domain.types import Source

if TYPE_CHECKING:
    from pathlib import Path

    from strmarr.config import PlayarrConfig, SyncConfig
    from strmarr.domain.ports.fetching import MappingFetcher
    from strmarr.domain.types import RunReport


log = getLogger(__name__)


def build_sources(config: PlayarrConfig) -> tuple[Source, ...]:
    """One source per media type, in configured (merge) order."""

    return tuple(
        Source(name=media_type, url=config.endpoint_url(media_type))
        for media_type in config.media_types
    )


def build_coordinator(
    config: SyncConfig,
    *,
    fetcher: MappingFetcher | None = None,
) -> RunCoordinator:
    effective_fetcher = fetcher or PlayarrFetcher(resilience=config.playarr.resilience)
    return RunCoordinator(
        sources=build_sources(config.playarr),
        fetcher=effective_fetcher,
        media_root=config.media_root,
        pointer_suffix=config.pointer_suffix,
    )


def ensure_media_root(media_root: Path) -> None:
    if media_root.is_dir():
        log.info("Media directory verified: %s", media_root)
        return
    log.info("Media directory does not exist, creating: %s", media_root)
    media_root.mkdir(parents=True, exist_ok=True)


def sync_pointer_files(
    config: SyncConfig,
    *,
    fetcher: MappingFetcher | None = None,
) -> RunReport:
    """Run a single reconciliation pass using the configured adapters."""

    coordinator = build_coordinator(config, fetcher=fetcher)
    return coordinator.run()


def log_startup(config: SyncConfig) -> None:
    endpoints = ", ".join(source.display_url for source in build_sources(config.playarr))
    log.info("Strmarr starting...")
    log.info("Media path: %s", config.media_root)
    log.info("Playarr base URL: %s", config.playarr.base_url)
    log.info("Endpoints: %s", endpoints)
    log.info("Sync schedule: %s", config.schedule)
