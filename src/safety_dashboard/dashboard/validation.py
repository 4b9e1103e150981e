"""Shape checks for payloads read back from storage.

Stored JSON is untrusted: it may be from an older version, hand-edited, or
truncated.  Each check answers yes/no for the whole document; nothing here
repairs a payload.
"""

from __future__ import annotations

import math
from typing import Any

from safety_dashboard.core.enums import DayStatus, LayoutGroup, PanelKey, SlotKey
from safety_dashboard.core.safety_calendar import days_in_month

_PANELS = {panel.value for panel in PanelKey}
_STATUSES = {status.value for status in DayStatus}
_TREND_FIELDS = ("firstAid", "nonAbsent", "absent", "fire")


def _is_number(value: Any) -> bool:
    # bool is an int subclass but never a proportion.
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_finite_number(value: Any) -> bool:
    return _is_number(value) and _finite(value)


def is_valid_layout(data: Any) -> bool:
    """All four vectors present, each a list of finite numbers.

    The vectors do not need to sum to 100; they are renormalised on load.
    """
    if not isinstance(data, dict):
        return False
    for group in LayoutGroup:
        values = data.get(group.value)
        if not isinstance(values, list) or not all(is_finite_number(v) for v in values):
            return False
    return True


def is_valid_slots(data: Any) -> bool:
    """Every slot key present and mapped to a known panel.

    Duplicate panels are accepted here; see ``SlotAssignment.is_bijective``.
    """
    if not isinstance(data, dict):
        return False
    return all(_is_member(data.get(slot.value), _PANELS) for slot in SlotKey)


def is_valid_monthly_data(data: Any, year: int) -> bool:
    """Exactly twelve months tagged by position, each with the right day count."""
    if not isinstance(data, list) or len(data) != 12:
        return False
    for index, month in enumerate(data):
        if not isinstance(month, dict):
            return False
        if month.get("month") != index or month.get("year") != year:
            return False
        days = month.get("days")
        if not isinstance(days, list) or len(days) != days_in_month(year, index):
            return False
        if not all(is_valid_day(entry, position + 1) for position, entry in enumerate(days)):
            return False
    return True


def is_valid_day(data: Any, day: int) -> bool:
    """A day entry sits at its own position and carries a known status."""
    if not isinstance(data, dict):
        return False
    status = data.get("status")
    return data.get("day") == day and (status is None or _is_member(status, _STATUSES))


def _is_member(value: Any, names: set[str]) -> bool:
    return isinstance(value, str) and value in names


def _finite(value: Any) -> bool:
    # JSON integers are unbounded; float() overflows on huge ones.
    try:
        return math.isfinite(float(value))
    except (TypeError, ValueError, OverflowError):
        return False


def is_valid_trend_rows(data: Any) -> bool:
    """Between one and twelve rows, each with a numeric year and counters."""
    if not isinstance(data, list) or not 1 <= len(data) <= 12:
        return False
    return all(
        isinstance(row, dict)
        and _finite(row.get("year"))
        and all(_finite(row.get(name)) for name in _TREND_FIELDS)
        for row in data
    )


def is_valid_ui_scale(data: Any) -> bool:
    return is_finite_number(data)
