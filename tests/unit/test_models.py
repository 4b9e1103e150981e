import pytest

from safety_dashboard.core.enums import LayoutGroup
from safety_dashboard.core.models import DayEntry, LayoutConfiguration, SafetyRecord


def test_models_construct() -> None:
    layout = LayoutConfiguration()
    entry = DayEntry(day=3)
    record = SafetyRecord(year=2026, monthly_data=())

    assert layout.cols == (25.0, 45.0, 30.0)
    assert entry.status is None
    assert record.poster_zoom == 1.0


def test_with_group_replaces_only_that_group() -> None:
    layout = LayoutConfiguration()
    updated = layout.with_group(LayoutGroup.RIGHT_ROWS, (50.0, 50.0))

    assert updated.right_rows == (50.0, 50.0)
    assert updated.cols == layout.cols
    assert layout.right_rows == (34.0, 66.0)


def test_with_group_rejects_wrong_length() -> None:
    with pytest.raises(ValueError):
        LayoutConfiguration().with_group(LayoutGroup.LEFT_ROWS, (30.0, 30.0, 40.0))
