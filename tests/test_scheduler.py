"""Tests for the tick sources."""

from unittest.mock import MagicMock, patch

import pytest

from lockin.core.scheduler import BlockingScheduler, ManualScheduler, ScheduledHandle

# ---------------------------------------------------------------------------
# ScheduledHandle
# ---------------------------------------------------------------------------


class TestScheduledHandle:
    def test_starts_active(self) -> None:
        handle = ScheduledHandle(1, MagicMock())
        assert not handle.cancelled

    def test_cancel_is_repeatable(self) -> None:
        handle = ScheduledHandle(1, MagicMock())
        handle.cancel()
        handle.cancel()
        assert handle.cancelled


# ---------------------------------------------------------------------------
# ManualScheduler
# ---------------------------------------------------------------------------


class TestManualScheduler:
    """Jobs fire only on advance()."""

    def test_nothing_fires_without_advance(self) -> None:
        callback = MagicMock()
        ManualScheduler().schedule(1, callback)
        callback.assert_not_called()

    def test_advance_fires_once_per_period(self) -> None:
        scheduler = ManualScheduler()
        callback = MagicMock()
        scheduler.schedule(1, callback)
        assert scheduler.advance(3) == 3
        assert callback.call_count == 3

    def test_cancelled_job_does_not_fire(self) -> None:
        scheduler = ManualScheduler()
        callback = MagicMock()
        scheduler.schedule(1, callback).cancel()
        assert scheduler.advance(2) == 0
        callback.assert_not_called()
        assert scheduler.active_jobs == []

    def test_cancel_from_callback_stops_further_fires(self) -> None:
        scheduler = ManualScheduler()
        calls = []

        def callback() -> None:
            calls.append(1)
            if len(calls) == 2:
                handle.cancel()

        handle = scheduler.schedule(1, callback)
        assert scheduler.advance(5) == 2
        assert len(calls) == 2


# ---------------------------------------------------------------------------
# BlockingScheduler
# ---------------------------------------------------------------------------


class _FakeClock:
    """monotonic()/sleep() pair where sleeping advances the clock."""

    def __init__(self) -> None:
        self.now = 0.0
        self.sleeps: list[float] = []

    def monotonic(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


class TestBlockingScheduler:
    """run() fires jobs on the calling thread until all are cancelled."""

    def test_run_returns_immediately_without_jobs(self) -> None:
        with patch("lockin.core.scheduler.time") as mock_time:
            BlockingScheduler().run()
            mock_time.sleep.assert_not_called()

    def test_fires_at_interval_until_cancelled(self) -> None:
        clock = _FakeClock()
        with patch("lockin.core.scheduler.time", clock):
            scheduler = BlockingScheduler()
            fire_times = []

            def callback() -> None:
                fire_times.append(clock.now)
                if len(fire_times) == 3:
                    handle.cancel()

            handle = scheduler.schedule(1, callback)
            scheduler.run()

        assert fire_times == [1.0, 2.0, 3.0]
        assert clock.sleeps == [1.0, 1.0, 1.0]

    def test_slow_callback_does_not_drift(self) -> None:
        clock = _FakeClock()
        with patch("lockin.core.scheduler.time", clock):
            scheduler = BlockingScheduler()
            fire_times = []

            def callback() -> None:
                fire_times.append(clock.now)
                clock.now += 0.25  # work inside the tick
                if len(fire_times) == 3:
                    handle.cancel()

            handle = scheduler.schedule(1, callback)
            scheduler.run()

        assert fire_times == [1.0, 2.0, 3.0]

    def test_cancel_all(self) -> None:
        clock = _FakeClock()
        with patch("lockin.core.scheduler.time", clock):
            scheduler = BlockingScheduler()
            callback = MagicMock()
            scheduler.schedule(1, callback)
            scheduler.cancel_all()
            scheduler.run()
        callback.assert_not_called()

    @pytest.mark.parametrize("interval", [0, -1])
    def test_non_positive_interval_raises(self, interval: float) -> None:
        with pytest.raises(ValueError):
            BlockingScheduler().schedule(interval, MagicMock())
