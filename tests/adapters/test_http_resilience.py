from __future__ import annotations

import asyncio
import logging

import httpx
import pytest

from strmarr.adapters.http_resilience import (
    RateLimit,
    ResilienceConfig,
    ResilientClient,
    RetryPolicy,
)


def test_retry_policy_builds_retry() -> None:
    retry = RetryPolicy(total=2).build()

    assert retry.total == 2


def test_client_sends_default_headers_through_rate_limiter(
    caplog: pytest.LogCaptureFixture,
) -> None:
    caplog.set_level(logging.DEBUG, logger="strmarr.adapters.http_resilience")
    config = ResilienceConfig(
        name="playarr",
        ratelimit=RateLimit(max_calls=2, per_seconds=1.0),
        default_headers={"Accept": "application/json"},
    )
    seen: list[httpx.Request] = []

    async def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={})

    async def run() -> int:
        async with ResilientClient(config) as client:
            client._client = httpx.AsyncClient(  # noqa: SLF001  # type: ignore[reportPrivateUsage]
                transport=httpx.MockTransport(handler),
                headers=config.default_headers,
            )
            response = await client.get("http://example.test/data?api_key=secret")
            return response.status_code

    assert asyncio.run(run()) == 200
    assert seen[0].headers["Accept"] == "application/json"
    assert seen[0].method == "GET"
    messages = [record.getMessage() for record in caplog.records]
    assert "[playarr] GET http://example.test/data -> 200" in messages
    assert not any("secret" in message for message in messages)
