"""Combine per-source mappings into one canonical mapping."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .types import MergedMapping, RawMapping, Source

log = getLogger(__name__)


def merge_mappings(results: Iterable[tuple[Source, RawMapping]]) -> MergedMapping:
    """Merge ``results`` in the order given; a later source wins on key collision.

    Failed sources are expected to be absent from ``results`` rather than passed
    as empty mappings. The caller owns the ordering, which must come from
    configuration and never from fetch completion.
    """

    merged: MergedMapping = {}
    owners: dict[str, str] = {}
    for source, mapping in results:
        for key, url in mapping.items():
            previous_owner = owners.get(key)
            if previous_owner is not None and merged[key] != url:
                log.debug(
                    "Key %r from %s overrides value from %s",
                    key,
                    source.name,
                    previous_owner,
                )
            merged[key] = url
            owners[key] = source.name
    return merged
