"""Cron-driven trigger for reconciliation passes.

Each trigger runs on a worker thread so the schedule keeps time while a slow
pass is in flight. A non-blocking lock lets at most one pass run at once; a
trigger that fires during an active pass is logged and dropped.
"""

from __future__ import annotations

import threading
from datetime import datetime
from logging import getLogger
from typing import TYPE_CHECKING

from croniter import croniter

if TYPE_CHECKING:
    from collections.abc import Callable

    from strmarr.domain.types import RunReport

log = getLogger(__name__)


def _local_now() -> datetime:
    return datetime.now().astimezone()


class SyncScheduler:
    """Invoke ``run`` at every fire time of a cron ``schedule`` until stopped."""

    def __init__(
        self,
        run: Callable[[], RunReport],
        schedule: str,
        *,
        now_provider: Callable[[], datetime] = _local_now,
    ) -> None:
        self._run = run
        self.schedule = schedule
        self._now = now_provider
        self._run_lock = threading.Lock()
        self._stop_event = threading.Event()
        self._workers: list[threading.Thread] = []

    @property
    def running(self) -> bool:
        """True while a reconciliation pass is active."""

        return self._run_lock.locked()

    def next_fire_time(self, after: datetime | None = None) -> datetime:
        base = after or self._now()
        return croniter(self.schedule, base).get_next(datetime)

    def trigger(self) -> RunReport | None:
        """Run one pass now unless another pass holds the lock."""

        if not self._run_lock.acquire(blocking=False):
            log.warning("Synchronization already in progress; skipping this trigger")
            return None
        try:
            return self._run()
        except Exception:
            log.exception("Synchronization failed")
            return None
        finally:
            self._run_lock.release()

    def dispatch(self) -> threading.Thread:
        """Start :meth:`trigger` on a worker thread and return it."""

        self._workers = [worker for worker in self._workers if worker.is_alive()]
        worker = threading.Thread(target=self.trigger, name="strmarr-sync", daemon=True)
        worker.start()
        self._workers.append(worker)
        return worker

    def serve_forever(self) -> None:
        """Block, dispatching passes on schedule, until :meth:`stop` is called."""

        log.info("Waiting for scheduled sync (%s)...", self.schedule)
        previous: datetime | None = None
        while not self._stop_event.is_set():
            now = self._now()
            # waking early must not fire the same slot twice
            base = previous if previous is not None and previous > now else now
            fire_at = self.next_fire_time(base)
            delay = max((fire_at - now).total_seconds(), 0.0)
            log.debug("Next synchronization at %s", fire_at.isoformat())
            if self._stop_event.wait(delay):
                break
            previous = fire_at
            self.dispatch()

    def stop(self, *, timeout: float | None = None) -> None:
        self._stop_event.set()
        current = threading.current_thread()
        for worker in self._workers:
            if worker is not current:
                worker.join(timeout)
