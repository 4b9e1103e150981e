from __future__ import annotations

import pytest

from safety_dashboard.core.enums import LayoutGroup, Orientation
from safety_dashboard.core.models import LayoutConfiguration
from safety_dashboard.core.proportions import GROUP_FLOORS, TOTAL
from safety_dashboard.core.resize import ResizeController, resize_pair


class _Layout:
    """Minimal proportion source for driving a ResizeController."""

    def __init__(self) -> None:
        self.layout = LayoutConfiguration()
        self.updates: list[tuple[LayoutGroup, tuple[float, ...]]] = []

    def get(self, group: LayoutGroup) -> tuple[float, ...]:
        return self.layout.group(group)

    def set(self, group: LayoutGroup, values: tuple[float, ...]) -> None:
        self.updates.append((group, values))
        self.layout = self.layout.with_group(group, values)


def test_resize_pair_moves_only_adjacent_regions() -> None:
    assert resize_pair((25.0, 45.0, 30.0), 0, 5.0, 18.0) == pytest.approx((30.0, 40.0, 30.0))
    assert resize_pair((25.0, 45.0, 30.0), 1, -10.0, 18.0) == pytest.approx((25.0, 35.0, 40.0))


@pytest.mark.parametrize("delta", [-100.0, -27.0, 27.0, 100.0, 1000.0])
def test_resize_pair_honours_floor(delta: float) -> None:
    result = resize_pair((25.0, 45.0, 30.0), 0, delta, 18.0)
    assert min(result) >= 18.0 - 1e-9
    assert sum(result) == pytest.approx(TOTAL)
    assert result[2] == pytest.approx(30.0)


def test_resize_pair_clamps_to_floor_values() -> None:
    assert resize_pair((25.0, 45.0, 30.0), 0, -100.0, 18.0) == pytest.approx((18.0, 52.0, 30.0))
    assert resize_pair((25.0, 45.0, 30.0), 0, 100.0, 18.0) == pytest.approx((52.0, 18.0, 30.0))


def test_resize_pair_rejects_last_index() -> None:
    with pytest.raises(ValueError):
        resize_pair((50.0, 50.0), 1, 5.0, 14.0)


def test_session_uses_total_travel_from_start() -> None:
    source = _Layout()
    controller = ResizeController(source.get, source.set)
    session = controller.begin_resize(LayoutGroup.COLS, 0, 1000)

    session.update(50)
    session.update(100)

    # 100px of 1000px is 10%, applied to the starting vector, not to the last update.
    assert source.layout.cols == pytest.approx((35.0, 35.0, 30.0))


def test_session_orientation_follows_group() -> None:
    source = _Layout()
    controller = ResizeController(source.get, source.set)
    assert controller.begin_resize(LayoutGroup.COLS, 0, 100).orientation == Orientation.VERTICAL
    assert (
        controller.begin_resize(LayoutGroup.CENTER_ROWS, 1, 100).orientation
        == Orientation.HORIZONTAL
    )


def test_degenerate_extent_uses_one_pixel() -> None:
    source = _Layout()
    controller = ResizeController(source.get, source.set)
    session = controller.begin_resize(LayoutGroup.LEFT_ROWS, 0, 0)
    assert session.extent_px == 1.0

    session.update(1)
    floor = GROUP_FLOORS[LayoutGroup.LEFT_ROWS]
    assert source.layout.left_rows == pytest.approx((TOTAL - floor, floor))


def test_cursor_hook_brackets_gesture() -> None:
    source = _Layout()
    cursors: list[str | None] = []
    controller = ResizeController(source.get, source.set, cursor_hook=cursors.append)

    controller.begin_resize(LayoutGroup.COLS, 1, 800)
    controller.end_resize()
    controller.begin_resize(LayoutGroup.RIGHT_ROWS, 0, 600)
    controller.end_resize()

    assert cursors == ["col-resize", None, "row-resize", None]
    assert controller.session is None


def test_new_gesture_ends_previous_one() -> None:
    source = _Layout()
    cursors: list[str | None] = []
    controller = ResizeController(source.get, source.set, cursor_hook=cursors.append)

    first = controller.begin_resize(LayoutGroup.COLS, 0, 1000)
    second = controller.begin_resize(LayoutGroup.CENTER_ROWS, 0, 500)

    assert not first.active
    assert second.active
    assert controller.session is second
    assert cursors == ["col-resize", None, "row-resize"]


def test_ended_session_ignores_updates() -> None:
    source = _Layout()
    controller = ResizeController(source.get, source.set)
    session = controller.begin_resize(LayoutGroup.COLS, 0, 1000)
    session.update(50)
    controller.end_resize()

    session.update(200)
    assert source.layout.cols == pytest.approx((30.0, 40.0, 30.0))
    assert len(source.updates) == 1


def test_begin_rejects_out_of_range_boundary() -> None:
    source = _Layout()
    controller = ResizeController(source.get, source.set)
    with pytest.raises(ValueError):
        controller.begin_resize(LayoutGroup.LEFT_ROWS, 1, 500)
    assert controller.session is None


def test_resize_pair_leaves_squeezed_pair_alone() -> None:
    # Both regions already sit below the floor; no boundary position honours it.
    squeezed = (1.0, 1.0, 98.0)
    for delta in (-50.0, 5.0, 50.0):
        assert resize_pair(squeezed, 0, delta, 18.0) == squeezed
