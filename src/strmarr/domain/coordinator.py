"""Orchestrate one reconciliation pass from upstream fetch to pointer files.

A pass moves through ``RunPhase`` in a fixed order:
fetch all sources, merge in configured order, normalize keys, create every
directory, then reconcile files. Per-source, per-directory and per-entry
failures are recorded and never abort the pass; the result is always a
``RunReport``.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from datetime import UTC, datetime
from logging import getLogger
from typing import TYPE_CHECKING

from .directories import ensure_directories, plan_directories
from .merge import merge_mappings
from .paths import build_entries
from .pointer_files import reconcile_pointer_file
from .types import RunPhase, RunReport

if TYPE_CHECKING:
    from collections.abc import Callable, Collection, Sequence
    from pathlib import Path

    from .ports.fetching import MappingFetcher, SourceFetchResult
    from .types import Entry, EntryOutcome, MergedMapping, Source

log = getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass(slots=True)
class RunCoordinator:
    """Run reconciliation passes for a fixed set of sources and a media root."""

    sources: Sequence[Source]
    fetcher: MappingFetcher
    media_root: Path
    pointer_suffix: str = ".strm"
    clock: Callable[[], datetime] = field(default=_utcnow)
    phase: RunPhase = field(default=RunPhase.IDLE, init=False)

    def run(self) -> RunReport:
        """Execute one pass; unexpected failures yield an incomplete report."""

        report = RunReport(started_at=self.clock())
        started = time.perf_counter()
        log.info("=== Starting synchronization at %s ===", report.started_at.isoformat())
        try:
            self._run_phases(report)
        except Exception:
            log.exception("Synchronization failed during %s", self.phase)
            report.completed = False
        finally:
            self.phase = RunPhase.REPORTING
            report.duration_seconds = time.perf_counter() - started
            _log_summary(report)
            self.phase = RunPhase.IDLE
        return report

    def _run_phases(self, report: RunReport) -> None:
        self.phase = RunPhase.FETCHING_SOURCES
        results = self._fetch(report)

        self.phase = RunPhase.MERGING
        merged = self._merge(results)
        if not merged:
            log.warning("No mappings found from any endpoint")
            return
        report.unique_entries = len(merged)
        log.info("Total entries fetched: %s", report.total_fetched)
        log.info("Unique file paths: %s", report.unique_entries)

        self.phase = RunPhase.NORMALIZING
        entries, rejected = build_entries(merged, self.pointer_suffix)
        report.outcomes.extend(rejected)

        self.phase = RunPhase.PLANNING_DIRECTORIES
        directories = plan_directories(entries, self.media_root)
        log.info("Creating %s directories...", len(directories))
        directory_report = ensure_directories(directories)
        report.directories_created = len(directory_report.created)
        report.directories_existing = len(directory_report.existing)
        report.directories_failed = len(directory_report.failed)

        self.phase = RunPhase.RECONCILING_FILES
        log.info("Writing %s STRM files...", len(entries))
        report.outcomes.extend(self._reconcile(entries, directory_report.failed.keys()))

    def _fetch(self, report: RunReport) -> list[SourceFetchResult]:
        results = self.fetcher(self.sources)
        for result in results:
            name = result.source.name
            if result.ok and result.mapping is not None:
                report.fetched_by_source[name] = len(result.mapping)
                log.info("Fetched %s: %s entries", name, len(result.mapping))
            else:
                report.failed_sources[name] = str(result.error)
                log.error("Source fetch failed: %s", result.error)
        return results

    def _merge(self, results: Sequence[SourceFetchResult]) -> MergedMapping:
        order = {source.name: index for index, source in enumerate(self.sources)}
        successful = sorted(
            (result for result in results if result.ok),
            key=lambda result: order.get(result.source.name, len(order)),
        )
        return merge_mappings(
            (result.source, result.mapping) for result in successful if result.mapping is not None
        )

    def _reconcile(
        self,
        entries: Sequence[Entry],
        failed_directories: Collection[Path],
    ) -> list[EntryOutcome]:
        failed = frozenset(failed_directories)
        return [
            reconcile_pointer_file(entry, self.media_root, failed_directories=failed)
            for entry in entries
        ]


def _log_summary(report: RunReport) -> None:
    log.info("=== Synchronization %s ===", "completed" if report.completed else "incomplete")
    log.info("Duration: %.2fs", report.duration_seconds)
    if report.failed_sources:
        log.info("Failed sources: %s", ", ".join(sorted(report.failed_sources)))
    log.info("Updated: %s", report.updated)
    log.info("Skipped (no change): %s", report.skipped - report.rejected)
    log.info("Rejected: %s", report.rejected)
    log.info("Errors: %s", report.errored)
    log.info("Total: %s", report.total)
