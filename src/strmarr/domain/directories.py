"""Plan and materialize the directories pointer files will be written into."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from .types import DirectoryReport

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

    from .types import Entry

log = getLogger(__name__)


def plan_directories(entries: Iterable[Entry], media_root: Path) -> list[Path]:
    """Return the distinct parent directories of ``entries``, excluding ``media_root``.

    Only immediate parents are listed; intermediate directories are created by
    the recursive ``mkdir`` in :func:`ensure_directories`.
    """

    directories = {entry.target(media_root).parent for entry in entries}
    directories.discard(media_root)
    return sorted(directories)


def ensure_directories(directories: Iterable[Path]) -> DirectoryReport:
    """Create every missing directory, isolating failures per directory."""

    report = DirectoryReport()
    for directory in directories:
        if directory.is_dir():
            report.existing.append(directory)
            continue
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except (OSError, ValueError) as exc:
            log.error("Failed to create %s: %s", directory, exc)
            report.failed[directory] = str(exc)
            continue
        log.info("Created: %s", directory)
        report.created.append(directory)

    log.info(
        "Directory creation complete: %s created, %s already existed, %s failed",
        len(report.created),
        len(report.existing),
        len(report.failed),
    )
    return report
