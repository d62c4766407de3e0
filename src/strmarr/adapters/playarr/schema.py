"""Pydantic model describing the Playarr playlist data payload."""

from __future__ import annotations

from pydantic import RootModel, StrictStr


class PlaylistDataPayload(RootModel[dict[str, StrictStr | None]]):
    """Flat JSON object mapping pointer-file keys to stream URLs.

    Null values are accepted here and rejected per entry later, so one bad
    item never discards the whole document.
    """
