"""Ports for fetching mapping documents from upstream sources."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from strmarr.domain.types import RawMapping, Source


class SourceFetchError(RuntimeError):
    """Base class for failures to obtain a mapping from one source."""

    def __init__(self, source: Source, message: str) -> None:
        super().__init__(f"{source.name}: {message}")
        self.source = source


class InvalidSourceURLError(SourceFetchError):
    """Raised when a source address is not an absolute http(s) URL."""


class SourceStatusError(SourceFetchError):
    """Raised when the source answers with a non-2xx status."""

    def __init__(self, source: Source, status_code: int) -> None:
        super().__init__(source, f"HTTP error status {status_code}")
        self.status_code = status_code


class SourceTransportError(SourceFetchError):
    """Raised when the request could not be completed (connection, timeout, protocol)."""


class SourcePayloadError(SourceFetchError):
    """Raised when the body is not a flat JSON object of strings."""


@dataclass(frozen=True, slots=True)
class SourceFetchResult:
    """Outcome of fetching one source: exactly one of ``mapping``/``error`` is set."""

    source: Source
    mapping: RawMapping | None = None
    error: SourceFetchError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.mapping is not None


@runtime_checkable
class MappingFetcher(Protocol):
    """Callable port returning one result per source, in the order given."""

    def __call__(self, sources: Sequence[Source]) -> list[SourceFetchResult]: ...


__all__ = [
    "InvalidSourceURLError",
    "MappingFetcher",
    "SourceFetchError",
    "SourceFetchResult",
    "SourcePayloadError",
    "SourceStatusError",
    "SourceTransportError",
]
