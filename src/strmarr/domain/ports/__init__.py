"""Domain ports (interfaces) for external adapters."""

from __future__ import annotations

from .fetching import (
    InvalidSourceURLError,
    MappingFetcher,
    SourceFetchError,
    SourceFetchResult,
    SourcePayloadError,
    SourceStatusError,
    SourceTransportError,
)

__all__ = [
    "InvalidSourceURLError",
    "MappingFetcher",
    "SourceFetchError",
    "SourceFetchResult",
    "SourcePayloadError",
    "SourceStatusError",
    "SourceTransportError",
]
