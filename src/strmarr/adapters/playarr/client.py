"""HTTP fetcher for the Playarr playlist data endpoints."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

import httpx
from pydantic import ValidationError

from strmarr.adapters.http_resilience import ResilienceConfig, ResilientClient
from strmarr.domain.ports.fetching import (
    InvalidSourceURLError,
    MappingFetcher,
    SourceFetchError,
    SourceFetchResult,
    SourcePayloadError,
    SourceStatusError,
    SourceTransportError,
)

from .schema import PlaylistDataPayload

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from strmarr.domain.types import RawMapping, Source

log = getLogger(__name__)


def _default_resilience_config() -> ResilienceConfig:
    return ResilienceConfig(name="playarr")


def _default_client_factory(config: ResilienceConfig) -> ResilientClient:
    return ResilientClient(config)


def _validate_source_url(source: Source) -> None:
    try:
        url = httpx.URL(source.url)
    except httpx.InvalidURL as exc:
        raise InvalidSourceURLError(source, f"Invalid URL: {exc}") from exc
    if url.scheme not in {"http", "https"} or not url.host:
        raise InvalidSourceURLError(source, f"Invalid URL: {source.display_url!r}")


@dataclass(slots=True)
class PlayarrFetcher:
    """Fetch every source concurrently and report results in the order given."""

    resilience: ResilienceConfig = field(default_factory=_default_resilience_config)
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=_default_client_factory
    )

    def __call__(self, sources: Sequence[Source]) -> list[SourceFetchResult]:
        return asyncio.run(self._fetch_all_async(sources))

    async def _fetch_all_async(self, sources: Sequence[Source]) -> list[SourceFetchResult]:
        async with self.client_factory(self.resilience) as client:
            return list(
                await asyncio.gather(*(self._fetch_source(client, source) for source in sources))
            )

    async def _fetch_source(self, client: ResilientClient, source: Source) -> SourceFetchResult:
        try:
            mapping = await self.fetch_mapping(client, source)
        except SourceFetchError as exc:
            return SourceFetchResult(source=source, error=exc)
        return SourceFetchResult(source=source, mapping=mapping)

    async def fetch_mapping(self, client: ResilientClient, source: Source) -> RawMapping:
        """Issue one GET for ``source`` and return its parsed mapping."""

        _validate_source_url(source)
        log.info("Fetching %s data from %s...", source.name, source.display_url)
        try:
            response = await client.get(source.url)
        except httpx.HTTPError as exc:
            raise SourceTransportError(source, f"Request failed: {exc}") from exc

        if not response.is_success:
            raise SourceStatusError(source, response.status_code)

        try:
            payload = PlaylistDataPayload.model_validate_json(response.content)
        except ValidationError as exc:
            first = exc.errors()[0]
            raise SourcePayloadError(source, f"Failed to parse JSON: {first['msg']}") from exc

        mapping = payload.root
        log.info("Successfully fetched %s mapping with %s entries", source.name, len(mapping))
        return mapping


if TYPE_CHECKING:
    _fetcher_check: MappingFetcher = PlayarrFetcher()
