"""Playarr upstream configuration values."""

from __future__ import annotations

from dataclasses import dataclass, field

import httpx

from .env import optional_env_float, optional_env_var, require_env_vars
from .errors import ConfigurationError
from .http_resilience import RateLimit, ResilienceConfig

DEFAULT_MEDIA_TYPES: tuple[str, ...] = ("movies", "shows")
PLAYARR_TIMEOUT_SECONDS = 30.0
PLAYLIST_DATA_PATH = "/api/playlist/{media_type}/data"


@dataclass(frozen=True)
class PlayarrConfig:
    """Holds the upstream address, credential and endpoint selection."""

    base_url: str
    api_key: str = field(repr=False)
    media_types: tuple[str, ...] = DEFAULT_MEDIA_TYPES
    resilience: ResilienceConfig = field(
        default_factory=lambda: _default_resilience_config(PLAYARR_TIMEOUT_SECONDS)
    )

    def endpoint_url(self, media_type: str) -> str:
        """Return the fully-resolved data URL for ``media_type``, credential included."""

        path = PLAYLIST_DATA_PATH.format(media_type=media_type)
        url = httpx.URL(self.base_url + path, params={"api_key": self.api_key})
        return str(url)


def _default_resilience_config(timeout_seconds: float) -> ResilienceConfig:
    return ResilienceConfig(
        name="playarr",
        timeout_seconds=timeout_seconds,
        ratelimit=RateLimit(max_calls=4, per_seconds=1.0),
        default_headers={"Accept": "application/json"},
    )


def normalize_base_url(value: str) -> str:
    """Strip a trailing slash and require an absolute http(s) URL."""

    candidate = value.strip().rstrip("/")
    try:
        url = httpx.URL(candidate)
    except httpx.InvalidURL as exc:
        raise ConfigurationError(f"Invalid PLAYARR_BASE_URL: {value!r}") from exc
    if url.scheme not in {"http", "https"} or not url.host:
        raise ConfigurationError(
            f"PLAYARR_BASE_URL must be an http(s) URL like http://localhost:5000, got {value!r}"
        )
    return candidate


def parse_media_types(value: str) -> tuple[str, ...]:
    media_types: list[str] = []
    for part in value.split(","):
        name = part.strip().strip("/")
        if name and name not in media_types:
            media_types.append(name)
    if not media_types:
        raise ConfigurationError("PLAYARR_MEDIA_TYPES must name at least one media type")
    return tuple(media_types)


def get_playarr_config(*, resilience: ResilienceConfig | None = None) -> PlayarrConfig:
    values = require_env_vars(("PLAYARR_BASE_URL", "PLAYARR_API_KEY"))
    timeout = optional_env_float("PLAYARR_TIMEOUT_SECONDS", PLAYARR_TIMEOUT_SECONDS)
    media_types = parse_media_types(
        optional_env_var("PLAYARR_MEDIA_TYPES", ",".join(DEFAULT_MEDIA_TYPES))
    )
    return PlayarrConfig(
        base_url=normalize_base_url(values["PLAYARR_BASE_URL"]),
        api_key=values["PLAYARR_API_KEY"],
        media_types=media_types,
        resilience=resilience or _default_resilience_config(timeout),
    )
