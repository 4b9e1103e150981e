"""Safety calendar: year scaffolding, status cycling, and the auto-safe backfill."""

from __future__ import annotations

import calendar
from dataclasses import replace
from datetime import date, datetime, timedelta

from safety_dashboard.core.enums import DayStatus
from safety_dashboard.core.models import DayEntry, MonthlyData, MonthSummary

AUTO_SAFE_HOUR = 16

_STATUS_CYCLE: dict[DayStatus | None, DayStatus | None] = {
    None: DayStatus.SAFE,
    DayStatus.SAFE: DayStatus.NEAR_MISS,
    DayStatus.NEAR_MISS: DayStatus.ACCIDENT,
    DayStatus.ACCIDENT: None,
}


def days_in_month(year: int, month: int) -> int:
    """Number of days in the 0-based *month* of *year*."""
    return calendar.monthrange(year, month + 1)[1]


def create_year_data(year: int) -> tuple[MonthlyData, ...]:
    return tuple(
        MonthlyData(
            month=month,
            year=year,
            days=tuple(DayEntry(day=day) for day in range(1, days_in_month(year, month) + 1)),
        )
        for month in range(12)
    )


def next_day_status(status: DayStatus | None) -> DayStatus | None:
    return _STATUS_CYCLE[status]


def with_day_status(
    months: tuple[MonthlyData, ...], month: int, day: int, status: DayStatus | None
) -> tuple[MonthlyData, ...]:
    """Return *months* with one day changed; unknown days return *months* unchanged."""
    if not 0 <= month < len(months):
        return months
    target = months[month]
    if not 1 <= day <= len(target.days) or target.days[day - 1].status == status:
        return months
    days = list(target.days)
    days[day - 1] = replace(days[day - 1], status=status)
    updated = list(months)
    updated[month] = replace(target, days=tuple(days))
    return tuple(updated)


def apply_auto_safe(
    months: tuple[MonthlyData, ...],
    now: datetime,
    year: int,
    cutoff_hour: int = AUTO_SAFE_HOUR,
) -> tuple[MonthlyData, ...]:
    """Mark unset days as safe once they can no longer be reported.

    Every unset day before today becomes safe, and today becomes safe from
    *cutoff_hour* onwards.  Only the current year is touched.  When no day
    qualifies the very same *months* object is returned.
    """
    if now.year != year:
        return months
    today = now.date()
    after_cutoff = now.hour >= cutoff_hour

    updated: list[MonthlyData] | None = None
    for index, month in enumerate(months):
        new_days: list[DayEntry] | None = None
        for position, entry in enumerate(month.days):
            if entry.status is not None:
                continue
            entry_date = date(year, month.month + 1, entry.day)
            if entry_date < today or (after_cutoff and entry_date == today):
                if new_days is None:
                    new_days = list(month.days)
                new_days[position] = replace(entry, status=DayStatus.SAFE)
        if new_days is not None:
            if updated is None:
                updated = list(months)
            updated[index] = replace(month, days=tuple(new_days))

    return months if updated is None else tuple(updated)


def next_cutoff(now: datetime, cutoff_hour: int = AUTO_SAFE_HOUR) -> datetime:
    """Today's cutoff if it is still ahead of *now*, otherwise tomorrow's."""
    target = now.replace(hour=cutoff_hour, minute=0, second=0, microsecond=0)
    if now >= target:
        target += timedelta(days=1)
    return target


def safety_streak(months: tuple[MonthlyData, ...], today: date, year: int) -> int:
    """Consecutive days without an accident, counting back from *today*.

    Safe and near-miss days extend the streak; an accident or an unset day
    ends it.  The streak never crosses into the previous year.
    """
    if today.year != year:
        return 0
    streak = 0
    cursor = today
    while cursor.year == year:
        month = months[cursor.month - 1] if cursor.month - 1 < len(months) else None
        status = None
        if month is not None and cursor.day <= len(month.days):
            status = month.days[cursor.day - 1].status
        if status not in (DayStatus.SAFE, DayStatus.NEAR_MISS):
            break
        streak += 1
        cursor -= timedelta(days=1)
    return streak


def month_summary(month: MonthlyData | None) -> MonthSummary:
    if month is None:
        return MonthSummary()
    statuses = [entry.status for entry in month.days]
    return MonthSummary(
        safe=statuses.count(DayStatus.SAFE),
        near_miss=statuses.count(DayStatus.NEAR_MISS),
        accident=statuses.count(DayStatus.ACCIDENT),
    )
