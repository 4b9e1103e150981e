from __future__ import annotations

from datetime import datetime, timedelta

from safety_dashboard.core.time import ManualScheduler, delay_ms
from safety_dashboard.dashboard.auto_safe import MIN_DELAY_MS, AutoSafeTimer
from safety_dashboard.mock import MockClock, MockScheduler

HOUR_MS = 3_600_000


def _timer(now: datetime):
    clock = MockClock(now)
    scheduler = MockScheduler(clock)
    fired: list[datetime] = []
    timer = AutoSafeTimer(scheduler, clock, fired.append, cutoff_hour=16)
    return timer, scheduler, clock, fired


def test_delay_ms() -> None:
    now = datetime(2026, 3, 15, 10, 0)
    assert delay_ms(now, now + timedelta(seconds=2)) == 2000
    assert delay_ms(now, now - timedelta(seconds=2)) == 0
    assert delay_ms(now, now, minimum=250) == 250


def test_fires_at_cutoff_and_reschedules_daily() -> None:
    timer, scheduler, _clock, fired = _timer(datetime(2026, 3, 15, 10, 0))
    timer.start()
    assert scheduler.next_due_ms() == 6 * HOUR_MS

    scheduler.advance(6 * HOUR_MS)
    assert fired == [datetime(2026, 3, 15, 16, 0)]
    assert scheduler.next_due_ms() == 24 * HOUR_MS

    scheduler.advance(24 * HOUR_MS)
    assert fired[-1] == datetime(2026, 3, 16, 16, 0)


def test_started_after_cutoff_waits_for_tomorrow() -> None:
    timer, scheduler, _clock, fired = _timer(datetime(2026, 3, 15, 16, 0))
    timer.start()
    assert scheduler.next_due_ms() == 24 * HOUR_MS
    assert fired == []


def test_imminent_cutoff_uses_minimum_delay() -> None:
    timer, scheduler, _clock, _fired = _timer(datetime(2026, 3, 15, 15, 59, 59, 900_000))
    timer.start()
    assert scheduler.next_due_ms() == MIN_DELAY_MS


def test_stop_cancels() -> None:
    timer, scheduler, _clock, fired = _timer(datetime(2026, 3, 15, 10, 0))
    timer.start()
    timer.start()
    assert scheduler.pending_count() == 1

    timer.stop()
    assert not timer.running
    assert scheduler.pending_count() == 0
    scheduler.advance(48 * HOUR_MS)
    assert fired == []


def test_manual_scheduler_never_fires() -> None:
    scheduler = ManualScheduler()
    ran: list[str] = []
    first = scheduler.call_later(0, lambda: ran.append("a"))
    second = scheduler.call_later(10, lambda: ran.append("b"))
    scheduler.cancel(first)

    assert first != second
    assert ran == []
