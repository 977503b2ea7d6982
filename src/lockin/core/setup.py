"""Time setup input — the three-wheel hours/minutes/seconds picker."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from lockin.core.timer import InvalidStateError

logger = logging.getLogger(__name__)

HOURS_RANGE = range(0, 24)
MINUTES_RANGE = range(0, 60)
SECONDS_RANGE = range(0, 60)

OnTimeSelected = Callable[[int, int, int], None]


@dataclass(frozen=True)
class TimeSelection:
    """An hours/minutes/seconds triple picked on the setup wheels."""

    hours: int = 0
    minutes: int = 0
    seconds: int = 0

    @property
    def total_seconds(self) -> int:
        return self.hours * 3600 + self.minutes * 60 + self.seconds


def _check_wheel(name: str, value: int, wheel: range) -> int:
    if value not in wheel:
        raise ValueError(f"{name} must be between {wheel.start} and {wheel.stop - 1}, got {value}")
    return value


class TimeSetupInput:
    """Holds the three wheel values until the user confirms them.

    :meth:`confirm` hands the triple to *on_time_selected* (normally
    ``TimerController.configure``) and dismisses the input; a dismissed
    input cannot be confirmed again.
    """

    def __init__(
        self,
        on_time_selected: OnTimeSelected,
        hours: int = 0,
        minutes: int = 0,
        seconds: int = 0,
    ) -> None:
        self._on_time_selected = on_time_selected
        self._hours = _check_wheel("hours", hours, HOURS_RANGE)
        self._minutes = _check_wheel("minutes", minutes, MINUTES_RANGE)
        self._seconds = _check_wheel("seconds", seconds, SECONDS_RANGE)
        self._dismissed = False

    @classmethod
    def prefilled(cls, remaining_seconds: int, on_time_selected: OnTimeSelected) -> TimeSetupInput:
        """Build an input whose wheels start at *remaining_seconds*.

        Durations of a day or more cannot be shown on the hour wheel, so the
        hour is clamped to its last position.
        """
        hours = min(remaining_seconds // 3600, HOURS_RANGE[-1])
        minutes = remaining_seconds % 3600 // 60
        seconds = remaining_seconds % 60
        return cls(on_time_selected, hours, minutes, seconds)

    @property
    def selection(self) -> TimeSelection:
        return TimeSelection(self._hours, self._minutes, self._seconds)

    @property
    def dismissed(self) -> bool:
        return self._dismissed

    def set_hours(self, value: int) -> None:
        self._hours = _check_wheel("hours", value, HOURS_RANGE)

    def set_minutes(self, value: int) -> None:
        self._minutes = _check_wheel("minutes", value, MINUTES_RANGE)

    def set_seconds(self, value: int) -> None:
        self._seconds = _check_wheel("seconds", value, SECONDS_RANGE)

    def confirm(self) -> TimeSelection:
        """Emit the selected time and dismiss the input."""
        if self._dismissed:
            raise InvalidStateError("confirm() is not valid once the setup input is dismissed")
        selection = self.selection
        self._dismissed = True
        logger.debug("Time selected: %s", selection)
        self._on_time_selected(selection.hours, selection.minutes, selection.seconds)
        return selection
