"""Public interface for the Playarr adapter."""

from __future__ import annotations

from .client import PlayarrFetcher
from .schema import PlaylistDataPayload

__all__ = ["PlayarrFetcher", "PlaylistDataPayload"]
