"""CLI entry point for lockin.

Uses Click to expose the ``lockin`` command group.  ``lockin run`` drives a
:class:`TimerController` on a real one-second cadence; the other commands
render the static stats, streak and challenges screens.
"""

from __future__ import annotations

import logging
import sys
from typing import Callable, TypeVar

import click

import lockin
from lockin.core import stats
from lockin.core.scheduler import BlockingScheduler
from lockin.core.setup import HOURS_RANGE, MINUTES_RANGE, SECONDS_RANGE, TimeSetupInput
from lockin.core.stage import illustration, stage
from lockin.core.timer import TICK_INTERVAL_SECONDS, InvalidStateError, TimerController

T = TypeVar("T")


def _run(action: Callable[[], T]) -> T:
    """Execute *action*, converting core errors to a CLI error.

    On ``InvalidStateError`` or ``ValueError`` the message is printed to
    stderr and the process exits with code 1.
    """
    try:
        return action()
    except (InvalidStateError, ValueError) as exc:
        click.echo(str(exc), err=True)
        sys.exit(1)


def _wheel(wheel: range) -> click.IntRange:
    return click.IntRange(wheel.start, wheel.stop - 1)


def _status_line(controller: TimerController) -> str:
    return f"{controller.formatted_remaining()}  [{illustration(controller.current_stage())}]"


@click.group()
@click.version_option(version=lockin.__version__, prog_name="lockin")
@click.option("-v", "--verbose", is_flag=True, help="Log timer transitions.")
def cli(verbose: bool) -> None:
    """lockin: a focus timer for studying and working."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


@cli.command()
@click.argument("hours", type=_wheel(HOURS_RANGE))
@click.argument("minutes", type=_wheel(MINUTES_RANGE))
@click.argument("seconds", type=_wheel(SECONDS_RANGE))
@click.option(
    "--interval",
    type=click.FloatRange(min=0, min_open=True),
    default=TICK_INTERVAL_SECONDS,
    envvar="LOCKIN_TICK_INTERVAL",
    show_default=True,
    help="Seconds of wall-clock time per countdown second.",
)
def run(hours: int, minutes: int, seconds: int, interval: float) -> None:
    """Lock in for HOURS MINUTES SECONDS.  Ctrl-C stops and resets."""
    scheduler = BlockingScheduler()
    controller = TimerController(scheduler, interval=interval)
    setup = TimeSetupInput(controller.configure, hours, minutes, seconds)
    _run(setup.confirm)

    if not controller.can_start:
        click.echo("Set a time above 00:00:00 to lock in", err=True)
        sys.exit(1)

    controller.on_tick = lambda c: click.echo(_status_line(c))
    controller.on_complete = lambda c: click.echo(f"Locked in for {c.formatted_remaining()}!")

    controller.start()
    click.echo(f"LOCK IN  {_status_line(controller)}")
    try:
        scheduler.run()
    except KeyboardInterrupt:
        controller.stop()
        click.echo(f"\nSTOP  reset to {controller.formatted_remaining()}")


@cli.command(name="stage")
@click.argument("progress", type=float)
def stage_command(progress: float) -> None:
    """Show the illustration stage for PROGRESS (remaining / total)."""
    index = stage(progress)
    click.echo(f"{index} {illustration(index)}")


@cli.command(name="stats")
@click.option("--width", type=click.IntRange(min=1), default=40, show_default=True)
def stats_command(width: int) -> None:
    """Show minutes locked in this week."""
    click.echo(f"Time locked in (minutes, average {stats.AVERAGE_MINUTES})")
    for row in stats.render_bar_chart(width=width):
        click.echo(row)


@cli.command()
def streak() -> None:
    """Show the current day streak."""
    click.echo(f"{stats.STREAK_DAYS} Day Streak!")
    click.echo("  ".join(f"{day} {'✔' if checked else '·'}" for day, checked in stats.STREAK_WEEK))


@cli.command()
@click.option("--page", type=int, default=0, show_default=True, help="Carousel page (wraps).")
def challenges(page: int) -> None:
    """Show a page of the challenges carousel."""
    challenge = stats.challenge_page(page)
    position = page % len(stats.CHALLENGES) + 1
    click.echo(f"[{position}/{len(stats.CHALLENGES)}] {challenge.name} ({challenge.image})")
