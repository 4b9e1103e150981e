"""Proportion vectors: percentages that always add up to 100."""

from __future__ import annotations

from typing import Sequence

from safety_dashboard.core.enums import LayoutGroup, Orientation
from safety_dashboard.core.models import LayoutConfiguration

TOTAL = 100.0
TOLERANCE = 1e-6

# Minimum share any single region may shrink to, per group.
GROUP_FLOORS: dict[LayoutGroup, float] = {
    LayoutGroup.COLS: 18.0,
    LayoutGroup.LEFT_ROWS: 14.0,
    LayoutGroup.CENTER_ROWS: 18.0,
    LayoutGroup.RIGHT_ROWS: 16.0,
}

GROUP_ORIENTATION: dict[LayoutGroup, Orientation] = {
    LayoutGroup.COLS: Orientation.VERTICAL,
    LayoutGroup.LEFT_ROWS: Orientation.HORIZONTAL,
    LayoutGroup.CENTER_ROWS: Orientation.HORIZONTAL,
    LayoutGroup.RIGHT_ROWS: Orientation.HORIZONTAL,
}


def clamp(value: float, low: float, high: float) -> float:
    return min(high, max(low, value))


def normalize(values: Sequence[float]) -> tuple[float, ...]:
    """Scale *values* so they sum to 100.

    Callers must never pass a vector whose sum is zero or negative.
    """
    total = sum(values)
    return tuple(value * TOTAL / total for value in values)


def meets_floor(values: Sequence[float], floor: float) -> bool:
    return all(value >= floor - TOLERANCE for value in values)


def default_layout() -> LayoutConfiguration:
    return LayoutConfiguration()
