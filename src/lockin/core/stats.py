"""Static sample data behind the stats, streak and challenges screens."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class TimeLockedIn:
    """Minutes locked in on one day of the week."""

    day_of_week: str
    time_locked: int


LOCKED_IN_DATA: tuple[TimeLockedIn, ...] = (
    TimeLockedIn("Mon", 50),
    TimeLockedIn("Tue", 45),
    TimeLockedIn("Wed", 15),
    TimeLockedIn("Thur", 0),
    TimeLockedIn("Fri", 0),
)

AVERAGE_MINUTES = 40
CHART_MAX_MINUTES = 80

STREAK_DAYS = 4

# (day, checked) in display order, Sunday first.
STREAK_WEEK: tuple[tuple[str, bool], ...] = (
    ("Sun", True),
    ("Mon", True),
    ("Tue", True),
    ("Wed", True),
    ("Thu", False),
    ("Fri", False),
    ("Sat", False),
)


@dataclass(frozen=True)
class Challenge:
    """One page of the challenges carousel."""

    name: str
    image: str


CHALLENGES: tuple[Challenge, ...] = (
    Challenge("Cam", "CamImage"),
    Challenge("Braum", "BraumImage"),
    Challenge("Rell", "RellFull"),
)


def challenge_page(index: int) -> Challenge:
    """Return the carousel page at *index*, wrapping past either end."""
    return CHALLENGES[index % len(CHALLENGES)]


def render_bar_chart(
    data: tuple[TimeLockedIn, ...] = LOCKED_IN_DATA,
    width: int = 40,
    average: int = AVERAGE_MINUTES,
    y_max: int = CHART_MAX_MINUTES,
) -> list[str]:
    """Render *data* as horizontal text bars scaled to ``0..y_max`` minutes.

    Each row is ``"<day> <bar> <minutes>"``; the column where the average
    falls is marked with ``|`` when the bar does not reach it.
    """
    if width <= 0:
        raise ValueError(f"width must be positive, got {width}")
    label_width = max((len(day.day_of_week) for day in data), default=0)
    average_col = min(round(average / y_max * width), width - 1)
    rows = []
    for day in data:
        filled = min(round(min(day.time_locked, y_max) / y_max * width), width)
        cells = ["#" if col < filled else " " for col in range(width)]
        if cells[average_col] == " ":
            cells[average_col] = "|"
        rows.append(f"{day.day_of_week:<{label_width}} {''.join(cells)} {day.time_locked}")
    return rows
