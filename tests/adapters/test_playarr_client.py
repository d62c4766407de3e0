from __future__ import annotations

import asyncio
from collections.abc import Callable  # noqa: TC003

import httpx
import pytest

from strmarr.adapters.http_resilience import ResilienceConfig, ResilientClient
from strmarr.adapters.playarr import PlayarrFetcher
from strmarr.domain.ports.fetching import (
    InvalidSourceURLError,
    SourcePayloadError,
    SourceStatusError,
    SourceTransportError,
)
from strmarr.domain.types import Source


def _make_client_factory(
    handler: Callable[[httpx.Request], httpx.Response],
) -> Callable[[ResilienceConfig], ResilientClient]:
    async def async_handler(request: httpx.Request) -> httpx.Response:
        return handler(request)

    def factory(resilience: ResilienceConfig) -> ResilientClient:
        client = ResilientClient(resilience)
        client._client = httpx.AsyncClient(transport=httpx.MockTransport(async_handler))  # noqa: SLF001  # type: ignore[reportPrivateUsage]
        return client

    return factory


def _routes(
    responses: dict[str, httpx.Response | Exception],
) -> Callable[[httpx.Request], httpx.Response]:
    def handler(request: httpx.Request) -> httpx.Response:
        outcome = responses[request.url.path]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    return handler


def test_fetches_each_source_in_given_order(sources: tuple[Source, ...]) -> None:
    seen: list[httpx.URL] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request.url)
        media_type = request.url.path.split("/")[3]
        return httpx.Response(200, json={f"{media_type}/Item": f"http://stream/{media_type}"})

    fetcher = PlayarrFetcher(client_factory=_make_client_factory(handler))

    results = fetcher(sources)

    assert [result.source.name for result in results] == ["movies", "shows"]
    assert all(result.ok for result in results)
    assert results[0].mapping == {"movies/Item": "http://stream/movies"}
    assert results[1].mapping == {"shows/Item": "http://stream/shows"}
    assert {url.params["api_key"] for url in seen} == {"secret"}


def test_one_failure_leaves_other_sources_intact(sources: tuple[Source, ...]) -> None:
    handler = _routes(
        {
            "/api/playlist/movies/data": httpx.Response(200, json={"m": "http://stream/m"}),
            "/api/playlist/shows/data": httpx.Response(404, text="nope"),
        }
    )
    fetcher = PlayarrFetcher(client_factory=_make_client_factory(handler))

    movies, shows = fetcher(sources)

    assert movies.ok
    assert not shows.ok
    assert isinstance(shows.error, SourceStatusError)
    assert shows.error.status_code == 404
    assert shows.error.source.name == "shows"


@pytest.mark.parametrize(
    ("outcome", "error_type"),
    [
        (httpx.Response(500, text="down"), SourceStatusError),
        (httpx.ConnectError("connection refused"), SourceTransportError),
        (httpx.Response(200, text="<html>not json</html>"), SourcePayloadError),
        (httpx.Response(200, json=["not", "an", "object"]), SourcePayloadError),
        (httpx.Response(200, json={"nested": {"url": "x"}}), SourcePayloadError),
        (httpx.Response(200, json={"number": 42}), SourcePayloadError),
    ],
)
def test_failures_map_to_distinct_errors(
    sources: tuple[Source, ...],
    outcome: httpx.Response | Exception,
    error_type: type[Exception],
) -> None:
    movies = sources[0]
    fetcher = PlayarrFetcher(
        client_factory=_make_client_factory(_routes({"/api/playlist/movies/data": outcome}))
    )

    (result,) = fetcher([movies])

    assert isinstance(result.error, error_type)
    assert result.mapping is None
    assert "movies" in str(result.error)


def test_null_values_survive_validation(sources: tuple[Source, ...]) -> None:
    handler = _routes(
        {"/api/playlist/movies/data": httpx.Response(200, json={"a": None, "b": "http://s/b"})}
    )
    fetcher = PlayarrFetcher(client_factory=_make_client_factory(handler))

    (result,) = fetcher(sources[:1])

    assert result.mapping == {"a": None, "b": "http://s/b"}


def test_non_http_source_url_is_rejected() -> None:
    source = Source(name="ftp", url="ftp://playarr.test/data?api_key=secret")
    fetcher = PlayarrFetcher(
        client_factory=_make_client_factory(lambda request: httpx.Response(200, json={}))
    )

    (result,) = fetcher([source])

    assert isinstance(result.error, InvalidSourceURLError)
    assert "secret" not in str(result.error)


def test_fetch_mapping_raises_for_direct_callers(sources: tuple[Source, ...]) -> None:
    factory = _make_client_factory(lambda request: httpx.Response(503))
    fetcher = PlayarrFetcher(client_factory=factory)

    async def run() -> None:
        async with factory(fetcher.resilience) as client:
            await fetcher.fetch_mapping(client, sources[0])

    with pytest.raises(SourceStatusError):
        asyncio.run(run())


def test_source_display_url_hides_credential(sources: tuple[Source, ...]) -> None:
    assert sources[0].display_url == "http://playarr.test/api/playlist/movies/data"
    assert "secret" not in repr(sources[0])
