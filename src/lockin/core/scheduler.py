"""Periodic tick sources that the timer controller schedules itself on.

A scheduler exposes a single method, ``schedule(interval, callback)``, and
returns a :class:`ScheduledHandle` the caller cancels to stop the ticks.
Two implementations are provided:

* :class:`ManualScheduler` fires only when told to, so tests and hosts with
  their own event loop can drive ticks without waiting on the wall clock.
* :class:`BlockingScheduler` runs the ticks on the calling thread, sleeping
  between them, until every job has been cancelled.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Protocol

logger = logging.getLogger(__name__)


class ScheduledHandle:
    """A cancellable periodic job."""

    def __init__(self, interval: float, callback: Callable[[], None], next_fire: float = 0.0) -> None:
        self.interval = interval
        self.callback = callback
        self.next_fire = next_fire
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        """Stop the job.  Safe to call more than once."""
        self._cancelled = True


class Scheduler(Protocol):
    def schedule(self, interval: float, callback: Callable[[], None]) -> ScheduledHandle: ...


class ManualScheduler:
    """Scheduler whose jobs fire only on :meth:`advance`."""

    def __init__(self) -> None:
        self._jobs: list[ScheduledHandle] = []

    def schedule(self, interval: float, callback: Callable[[], None]) -> ScheduledHandle:
        handle = ScheduledHandle(interval, callback)
        self._jobs.append(handle)
        return handle

    @property
    def active_jobs(self) -> list[ScheduledHandle]:
        """Jobs that have not been cancelled."""
        self._jobs = [job for job in self._jobs if not job.cancelled]
        return list(self._jobs)

    def advance(self, periods: int = 1) -> int:
        """Fire every active job once per period, *periods* times.

        Returns the number of callbacks fired.  Stops early once no active
        job remains.
        """
        fired = 0
        for _ in range(periods):
            jobs = self.active_jobs
            if not jobs:
                break
            for job in jobs:
                # An earlier callback in this period may have cancelled it.
                if job.cancelled:
                    continue
                job.callback()
                fired += 1
        return fired


class BlockingScheduler:
    """Scheduler that runs its jobs on the calling thread via :meth:`run`.

    Fire times advance by a fixed interval from the scheduled time, not from
    when the previous callback finished, so a slow tick does not push every
    later tick back.
    """

    def __init__(self) -> None:
        self._jobs: list[ScheduledHandle] = []

    def schedule(self, interval: float, callback: Callable[[], None]) -> ScheduledHandle:
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        handle = ScheduledHandle(interval, callback, time.monotonic() + interval)
        self._jobs.append(handle)
        logger.debug("Scheduled job every %ss", interval)
        return handle

    def run(self) -> None:
        """Fire due jobs until none remain.  Callbacks run to completion in order."""
        while True:
            self._jobs = [job for job in self._jobs if not job.cancelled]
            if not self._jobs:
                return
            job = min(self._jobs, key=lambda j: j.next_fire)
            delay = job.next_fire - time.monotonic()
            if delay > 0:
                time.sleep(delay)
            if job.cancelled:
                continue
            job.next_fire += job.interval
            job.callback()

    def cancel_all(self) -> None:
        for job in self._jobs:
            job.cancel()
        self._jobs = []
