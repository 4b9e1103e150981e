from __future__ import annotations

import pytest

from safety_dashboard.core.enums import LayoutGroup
from safety_dashboard.core.proportions import (
    GROUP_FLOORS,
    TOTAL,
    default_layout,
    meets_floor,
    normalize,
)


def test_normalize_scales_to_total() -> None:
    values = normalize([1, 1, 2])
    assert values == pytest.approx((25.0, 25.0, 50.0))
    assert sum(values) == pytest.approx(TOTAL)


def test_normalize_keeps_normalized_vector() -> None:
    assert normalize((25.0, 45.0, 30.0)) == pytest.approx((25.0, 45.0, 30.0))


def test_meets_floor_tolerates_float_noise() -> None:
    assert meets_floor((17.9999999999, 42.0, 40.0000000001), 18.0)
    assert not meets_floor((17.5, 42.5, 40.0), 18.0)


def test_default_layout_is_normalized() -> None:
    layout = default_layout()
    assert layout.cols == (25.0, 45.0, 30.0)
    assert layout.left_rows == (28.0, 72.0)
    assert layout.center_rows == (60.0, 18.0, 22.0)
    assert layout.right_rows == (34.0, 66.0)
    for group in LayoutGroup:
        assert sum(layout.group(group)) == pytest.approx(TOTAL)
        assert meets_floor(layout.group(group), GROUP_FLOORS[group])


def test_with_group_rejects_wrong_length() -> None:
    with pytest.raises(ValueError):
        default_layout().with_group(LayoutGroup.COLS, (50.0, 50.0))


def test_with_group_replaces_only_that_group() -> None:
    layout = default_layout().with_group(LayoutGroup.RIGHT_ROWS, (50.0, 50.0))
    assert layout.right_rows == (50.0, 50.0)
    assert layout.cols == default_layout().cols
