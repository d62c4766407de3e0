"""Write-on-change reconciliation of individual pointer files."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from .types import EntryOutcome, OutcomeStatus

if TYPE_CHECKING:
    from collections.abc import Collection
    from pathlib import Path

    from .types import Entry

log = getLogger(__name__)


def read_pointer_file(path: Path) -> str | None:
    """Return the file content, or ``None`` when the file does not exist."""

    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return None


def needs_update(existing: str | None, url: str) -> bool:
    """Compare trimmed contents so incidental whitespace never forces a rewrite."""

    return existing is None or existing.strip() != url.strip()


def reconcile_pointer_file(
    entry: Entry,
    media_root: Path,
    *,
    failed_directories: Collection[Path] = (),
) -> EntryOutcome:
    """Bring one pointer file in line with ``entry``; never raises for I/O errors."""

    path = entry.target(media_root)
    try:
        existing = read_pointer_file(path)
        if not needs_update(existing, entry.url):
            return EntryOutcome(
                key=entry.key,
                status=OutcomeStatus.SKIPPED,
                relative_path=entry.relative_path,
            )
        path.write_text(entry.url, encoding="utf-8")
    except (OSError, ValueError) as exc:
        if path.parent in failed_directories:
            reason = f"directory {path.parent} could not be created: {exc}"
        else:
            reason = f"{type(exc).__name__}: {exc}"
        log.error("Failed to process %s: %s", entry.relative_path, reason)
        return EntryOutcome(
            key=entry.key,
            status=OutcomeStatus.ERRORED,
            relative_path=entry.relative_path,
            reason=reason,
        )

    log.info("Updated STRM file: %s", entry.relative_path)
    return EntryOutcome(
        key=entry.key,
        status=OutcomeStatus.UPDATED,
        relative_path=entry.relative_path,
    )
