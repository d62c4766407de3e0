"""Turn logical mapping keys into pointer-file paths under the media root."""

from __future__ import annotations

from logging import getLogger
from pathlib import PurePosixPath
from typing import TYPE_CHECKING

from .types import Entry, EntryOutcome, OutcomeStatus

if TYPE_CHECKING:
    from .types import MergedMapping

log = getLogger(__name__)


class InvalidEntryError(ValueError):
    """Raised when a mapping item cannot be turned into a pointer-file entry."""


def normalize_entry_path(key: str, suffix: str) -> str:
    """Return ``key`` as a relative path ending with ``suffix`` (case-sensitive).

    Keys must stay inside the media root: absolute paths and ``..`` segments
    are rejected, as are keys the filesystem cannot represent (NUL bytes).
    """

    if not key or not key.strip():
        raise InvalidEntryError("empty key")
    if "\x00" in key:
        raise InvalidEntryError("key contains a NUL byte")
    path = PurePosixPath(key)
    if path.is_absolute() or key.startswith("\\"):
        raise InvalidEntryError("absolute path")
    if ".." in path.parts or ".." in key.split("\\"):
        raise InvalidEntryError("path escapes the media root")
    return key if key.endswith(suffix) else f"{key}{suffix}"


def build_entries(
    mapping: MergedMapping,
    suffix: str,
) -> tuple[list[Entry], list[EntryOutcome]]:
    """Split ``mapping`` into valid entries and rejected (skipped) outcomes.

    Two keys may normalize to the same file (``"x"`` and ``"x.strm"``); the one
    seen last wins, matching the merge precedence, and the other is rejected.
    """

    by_path: dict[str, Entry] = {}
    rejected: list[EntryOutcome] = []
    for key, url in mapping.items():
        try:
            if not url or not url.strip():
                raise InvalidEntryError("empty URL")  # noqa: TRY301
            relative_path = normalize_entry_path(key, suffix)
        except InvalidEntryError as exc:
            log.warning("Skipping invalid entry %r -> %r: %s", key, url, exc)
            rejected.append(EntryOutcome(key=key, status=OutcomeStatus.SKIPPED, reason=str(exc)))
            continue

        shadowed = by_path.pop(relative_path, None)
        if shadowed is not None:
            log.warning(
                "Keys %r and %r both map to %s; keeping %r",
                shadowed.key,
                key,
                relative_path,
                key,
            )
            rejected.append(
                EntryOutcome(
                    key=shadowed.key,
                    status=OutcomeStatus.SKIPPED,
                    relative_path=relative_path,
                    reason=f"superseded by {key!r}",
                )
            )
        by_path[relative_path] = Entry(key=key, relative_path=relative_path, url=url)
    return list(by_path.values()), rejected
