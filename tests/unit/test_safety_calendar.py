from __future__ import annotations

from datetime import date, datetime

import pytest

from safety_dashboard.core.enums import DayStatus
from safety_dashboard.core.models import MonthSummary
from safety_dashboard.core.safety_calendar import (
    apply_auto_safe,
    create_year_data,
    days_in_month,
    month_summary,
    next_cutoff,
    next_day_status,
    safety_streak,
    with_day_status,
)


def _status(months, month: int, day: int) -> DayStatus | None:
    return months[month].days[day - 1].status


def test_year_scaffold() -> None:
    months = create_year_data(2024)
    assert len(months) == 12
    assert [m.month for m in months] == list(range(12))
    assert sum(len(m.days) for m in months) == 366
    assert all(entry.status is None for m in months for entry in m.days)
    assert [entry.day for entry in months[1].days] == list(range(1, 30))


@pytest.mark.parametrize(
    ("year", "month", "expected"),
    [(2026, 0, 31), (2026, 1, 28), (2024, 1, 29), (2026, 3, 30), (2026, 11, 31)],
)
def test_days_in_month(year: int, month: int, expected: int) -> None:
    assert days_in_month(year, month) == expected


def test_status_cycle() -> None:
    assert next_day_status(None) == DayStatus.SAFE
    assert next_day_status(DayStatus.SAFE) == DayStatus.NEAR_MISS
    assert next_day_status(DayStatus.NEAR_MISS) == DayStatus.ACCIDENT
    assert next_day_status(DayStatus.ACCIDENT) is None


def test_with_day_status_out_of_range_is_identity() -> None:
    months = create_year_data(2026)
    assert with_day_status(months, 12, 1, DayStatus.SAFE) is months
    assert with_day_status(months, 1, 29, DayStatus.SAFE) is months
    assert with_day_status(months, 0, 1, None) is months


def test_with_day_status_copies_only_touched_month() -> None:
    months = create_year_data(2026)
    updated = with_day_status(months, 4, 9, DayStatus.ACCIDENT)
    assert _status(updated, 4, 9) == DayStatus.ACCIDENT
    assert _status(months, 4, 9) is None
    assert updated[3] is months[3]


def test_auto_safe_before_cutoff() -> None:
    months = create_year_data(2026)
    result = apply_auto_safe(months, datetime(2026, 3, 15, 10, 0), 2026, cutoff_hour=16)

    assert all(e.status == DayStatus.SAFE for m in result[:2] for e in m.days)
    assert all(_status(result, 2, d) == DayStatus.SAFE for d in range(1, 15))
    assert _status(result, 2, 15) is None
    assert _status(result, 2, 16) is None
    assert all(e.status is None for m in result[3:] for e in m.days)


def test_auto_safe_after_cutoff_includes_today() -> None:
    months = create_year_data(2026)
    result = apply_auto_safe(months, datetime(2026, 3, 15, 16, 0), 2026, cutoff_hour=16)
    assert _status(result, 2, 15) == DayStatus.SAFE
    assert _status(result, 2, 16) is None


def test_auto_safe_keeps_recorded_statuses() -> None:
    months = with_day_status(create_year_data(2026), 1, 2, DayStatus.ACCIDENT)
    months = with_day_status(months, 2, 3, DayStatus.NEAR_MISS)
    result = apply_auto_safe(months, datetime(2026, 3, 15, 10, 0), 2026)
    assert _status(result, 1, 2) == DayStatus.ACCIDENT
    assert _status(result, 2, 3) == DayStatus.NEAR_MISS


def test_auto_safe_is_idempotent() -> None:
    now = datetime(2026, 3, 15, 17, 0)
    once = apply_auto_safe(create_year_data(2026), now, 2026)
    assert apply_auto_safe(once, now, 2026) is once


def test_auto_safe_leaves_other_years_alone() -> None:
    months = create_year_data(2025)
    assert apply_auto_safe(months, datetime(2026, 3, 15, 17, 0), 2025) is months


def test_auto_safe_untouched_months_are_shared() -> None:
    months = create_year_data(2026)
    result = apply_auto_safe(months, datetime(2026, 3, 15, 10, 0), 2026)
    assert result[5] is months[5]


@pytest.mark.parametrize(
    ("now", "expected"),
    [
        (datetime(2026, 3, 15, 10, 0), datetime(2026, 3, 15, 16, 0)),
        (datetime(2026, 3, 15, 16, 0), datetime(2026, 3, 16, 16, 0)),
        (datetime(2026, 3, 15, 23, 59), datetime(2026, 3, 16, 16, 0)),
        (datetime(2026, 12, 31, 18, 0), datetime(2027, 1, 1, 16, 0)),
    ],
)
def test_next_cutoff(now: datetime, expected: datetime) -> None:
    assert next_cutoff(now, 16) == expected


def test_safety_streak_counts_back_from_today() -> None:
    months = apply_auto_safe(create_year_data(2026), datetime(2026, 3, 15, 17, 0), 2026)
    assert safety_streak(months, date(2026, 3, 15), 2026) == 31 + 28 + 15

    months = with_day_status(months, 2, 10, DayStatus.ACCIDENT)
    assert safety_streak(months, date(2026, 3, 15), 2026) == 5

    months = with_day_status(months, 2, 12, DayStatus.NEAR_MISS)
    assert safety_streak(months, date(2026, 3, 15), 2026) == 5


def test_safety_streak_unset_today_is_zero() -> None:
    months = apply_auto_safe(create_year_data(2026), datetime(2026, 3, 15, 10, 0), 2026)
    assert safety_streak(months, date(2026, 3, 15), 2026) == 0


def test_safety_streak_other_year_is_zero() -> None:
    months = create_year_data(2025)
    assert safety_streak(months, date(2026, 1, 1), 2025) == 0


def test_safety_streak_stops_at_year_start() -> None:
    months = with_day_status(create_year_data(2026), 0, 1, DayStatus.SAFE)
    assert safety_streak(months, date(2026, 1, 1), 2026) == 1


def test_month_summary() -> None:
    months = with_day_status(create_year_data(2026), 2, 1, DayStatus.SAFE)
    months = with_day_status(months, 2, 2, DayStatus.SAFE)
    months = with_day_status(months, 2, 3, DayStatus.NEAR_MISS)
    months = with_day_status(months, 2, 4, DayStatus.ACCIDENT)
    assert month_summary(months[2]) == MonthSummary(safe=2, near_miss=1, accident=1)
    assert month_summary(None) == MonthSummary()
