"""Run-scoped value types shared by the reconciliation phases."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import datetime
    from pathlib import Path

type RawMapping = dict[str, str | None]
"""Logical key to stream URL as returned by one source; values may be null."""

type MergedMapping = dict[str, str | None]


@dataclass(frozen=True, slots=True)
class Source:
    """One upstream endpoint supplying a partial key to URL mapping."""

    name: str
    url: str = field(repr=False)

    @property
    def display_url(self) -> str:
        """The endpoint address without its query string (which carries the credential)."""

        return self.url.split("?", 1)[0]


@dataclass(frozen=True, slots=True)
class Entry:
    """A normalized pointer-file path and the stream URL it should contain."""

    key: str
    relative_path: str
    url: str

    def target(self, media_root: Path) -> Path:
        return media_root / self.relative_path


class OutcomeStatus(StrEnum):
    UPDATED = "updated"
    SKIPPED = "skipped"
    ERRORED = "errored"


@dataclass(frozen=True, slots=True)
class EntryOutcome:
    """Terminal result for a single entry within one run."""

    key: str
    status: OutcomeStatus
    relative_path: str | None = None
    reason: str | None = None

    @property
    def rejected(self) -> bool:
        """True for entries dropped before reconciliation (skipped with a warning)."""

        return self.status is OutcomeStatus.SKIPPED and self.reason is not None


@dataclass(slots=True)
class DirectoryReport:
    created: list[Path] = field(default_factory=list)
    existing: list[Path] = field(default_factory=list)
    failed: dict[Path, str] = field(default_factory=dict)


class RunPhase(StrEnum):
    IDLE = "idle"
    FETCHING_SOURCES = "fetching_sources"
    MERGING = "merging"
    NORMALIZING = "normalizing"
    PLANNING_DIRECTORIES = "planning_directories"
    RECONCILING_FILES = "reconciling_files"
    REPORTING = "reporting"


@dataclass(slots=True)
class RunReport:
    """Aggregate outcome of one reconciliation pass."""

    started_at: datetime
    duration_seconds: float = 0.0
    fetched_by_source: dict[str, int] = field(default_factory=dict)
    failed_sources: dict[str, str] = field(default_factory=dict)
    unique_entries: int = 0
    directories_created: int = 0
    directories_existing: int = 0
    directories_failed: int = 0
    outcomes: list[EntryOutcome] = field(default_factory=list)
    completed: bool = True

    @property
    def total_fetched(self) -> int:
        return sum(self.fetched_by_source.values())

    @property
    def updated(self) -> int:
        return self._count(OutcomeStatus.UPDATED)

    @property
    def skipped(self) -> int:
        return self._count(OutcomeStatus.SKIPPED)

    @property
    def rejected(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.rejected)

    @property
    def errored(self) -> int:
        return self._count(OutcomeStatus.ERRORED)

    @property
    def total(self) -> int:
        return len(self.outcomes)

    def _count(self, status: OutcomeStatus) -> int:
        return sum(1 for outcome in self.outcomes if outcome.status is status)
