"""Timer core — the lock-in countdown state machine."""

from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING, Callable

from lockin.core.scheduler import ScheduledHandle, Scheduler
from lockin.core.stage import stage

if TYPE_CHECKING:
    from lockin.core.setup import TimeSelection

logger = logging.getLogger(__name__)

TICK_INTERVAL_SECONDS = 1

UNSET_DISPLAY = "--:--:--"


class TimerState(Enum):
    """Possible states of the timer."""

    UNCONFIGURED = "unconfigured"
    READY = "ready"
    RUNNING = "running"


class InvalidStateError(Exception):
    """Raised when an operation is attempted from a state that does not allow it."""


TimerObserver = Callable[["TimerController"], None]


def format_hms(seconds: int) -> str:
    """Format *seconds* as zero-padded ``HH:MM:SS``.

    The hour field is not wrapped, so 100 hours renders as ``100:00:00``.
    """
    return f"{seconds // 3600:02d}:{seconds % 3600 // 60:02d}:{seconds % 60:02d}"


class TimerController:
    """Countdown timer that resets to its full duration when it stops.

    There is no pause: :meth:`stop` (and reaching zero) puts the remaining
    time back to the configured duration, so the next :meth:`start` runs the
    whole countdown again.  Ticks come from the injected *scheduler*; the
    controller never sleeps or spawns threads itself.
    """

    def __init__(self, scheduler: Scheduler, interval: float = TICK_INTERVAL_SECONDS) -> None:
        self._scheduler = scheduler
        self._interval = interval
        self._handle: ScheduledHandle | None = None
        self._configured_duration: int = 0
        self._remaining_duration: int = 0
        self._is_time_set: bool = False
        self._is_running: bool = False
        self._current_stage: int = 0

        self.on_tick: TimerObserver | None = None
        self.on_complete: TimerObserver | None = None

    # -- read-only state -----------------------------------------------------

    @property
    def configured_duration(self) -> int:
        return self._configured_duration

    @property
    def remaining_duration(self) -> int:
        return self._remaining_duration

    @property
    def is_time_set(self) -> bool:
        return self._is_time_set

    @property
    def is_running(self) -> bool:
        return self._is_running

    @property
    def can_start(self) -> bool:
        """Whether the start control should be enabled."""
        return self._is_time_set and self._remaining_duration > 0

    @property
    def state(self) -> TimerState:
        if self._is_running:
            return TimerState.RUNNING
        if self._is_time_set and self._configured_duration > 0:
            return TimerState.READY
        return TimerState.UNCONFIGURED

    # -- public interface ----------------------------------------------------

    def configure(self, hours: int, minutes: int, seconds: int) -> None:
        """Set the countdown to *hours*:*minutes*:*seconds*.

        A zero duration is accepted; it just leaves :attr:`can_start` false.
        """
        if self._is_running:
            # Keep a single live tick source and remaining <= configured.
            self._cancel_ticks()
            self._is_running = False
        duration = hours * 3600 + minutes * 60 + seconds
        self._configured_duration = duration
        self._remaining_duration = duration
        self._is_time_set = True
        self._update_stage()
        logger.info("Timer configured: %s", format_hms(duration))

    def configure_selection(self, selection: TimeSelection) -> None:
        self.configure(selection.hours, selection.minutes, selection.seconds)

    def start(self) -> None:
        """Begin ticking.  Ignored when already running or nothing is left to count."""
        if self._is_running:
            logger.debug("start() ignored: already running")
            return
        if not self.can_start:
            logger.debug("start() ignored: no time set")
            return
        self._is_running = True
        self._handle = self._scheduler.schedule(self._interval, self.tick)
        logger.info("Timer started: %s remaining", self.formatted_remaining())

    def stop(self) -> None:
        """Stop ticking and reset the remaining time to the configured duration."""
        was_running = self._is_running
        self._is_running = False
        self._cancel_ticks()
        self._remaining_duration = self._configured_duration
        self._update_stage()
        if was_running:
            logger.info("Timer stopped and reset to %s", self.formatted_remaining())

    def toggle(self) -> None:
        """Stop when running, otherwise start."""
        if self._is_running:
            self.stop()
        else:
            self.start()

    def tick(self) -> None:
        """Count down one second; stop (and reset) once zero is reached."""
        if self._remaining_duration > 0:
            self._remaining_duration -= 1
            self._update_stage()
            logger.debug("Tick: %s (stage %d)", self.formatted_remaining(), self._current_stage)
            self._notify(self.on_tick)
        if self._remaining_duration == 0:
            logger.info("Countdown complete")
            self.stop()
            self._notify(self.on_complete)

    def formatted_remaining(self) -> str:
        """Return the remaining time as ``HH:MM:SS``, or ``--:--:--`` before configure."""
        if not self._is_time_set:
            return UNSET_DISPLAY
        return format_hms(self._remaining_duration)

    def progress(self) -> float:
        """Return remaining / configured, counting down from 1.0 to 0.0.

        With no configured duration there is nothing to divide by, so this
        reports a full timer (1.0).
        """
        if self._configured_duration == 0:
            return 1.0
        return self._remaining_duration / self._configured_duration

    def current_stage(self) -> int:
        """Return the illustration stage (0--3) for the current progress."""
        return self._current_stage

    # -- private helpers -----------------------------------------------------

    def _update_stage(self) -> None:
        self._current_stage = stage(self.progress())

    def _cancel_ticks(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _notify(self, observer: TimerObserver | None) -> None:
        if observer is None:
            return
        try:
            observer(self)
        except Exception:
            logger.exception("Error in timer observer")
