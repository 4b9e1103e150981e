from __future__ import annotations

from safety_dashboard.core.enums import LayoutGroup, Orientation, SlotKey
from safety_dashboard.core.proportions import default_layout
from safety_dashboard.ui_gtk.layout import HANDLE_THICKNESS, GridGeometry, Rect


def test_columns_follow_proportions() -> None:
    geometry = GridGeometry(default_layout(), 1000, 500)
    assert [r.width for r in geometry.column_rects()] == [250, 450, 300]


def test_slot_rects() -> None:
    rects = GridGeometry(default_layout(), 1000, 500).slot_rects()
    assert set(rects) == set(SlotKey)
    assert rects[SlotKey.LEFT_TOP] == Rect(0, 0, 250, 140)
    assert rects[SlotKey.LEFT_BOTTOM] == Rect(0, 140, 250, 360)
    assert rects[SlotKey.CENTER_TOP] == Rect(250, 0, 450, 300)
    assert rects[SlotKey.CENTER_MID] == Rect(250, 300, 450, 90)
    assert rects[SlotKey.CENTER_BOTTOM] == Rect(250, 390, 450, 110)
    assert rects[SlotKey.RIGHT_TOP] == Rect(700, 0, 300, 170)
    assert rects[SlotKey.RIGHT_BOTTOM] == Rect(700, 170, 300, 330)


def test_slots_tile_without_gaps_on_odd_sizes() -> None:
    geometry = GridGeometry(default_layout(), 1023, 767)
    rects = geometry.slot_rects()
    assert sum(r.width * r.height for r in rects.values()) == 1023 * 767


def test_handles() -> None:
    handles = GridGeometry(default_layout(), 1000, 500).handles()
    assert len(handles) == 2 + 1 + 2 + 1

    cols = [h for h in handles if h.group == LayoutGroup.COLS]
    assert [h.index for h in cols] == [0, 1]
    assert cols[0].orientation == Orientation.VERTICAL
    assert cols[0].rect == Rect(250 - HANDLE_THICKNESS // 2, 0, HANDLE_THICKNESS, 500)
    assert cols[0].extent_px == 1000

    center = [h for h in handles if h.group == LayoutGroup.CENTER_ROWS]
    assert [h.index for h in center] == [0, 1]
    assert center[1].orientation == Orientation.HORIZONTAL
    assert center[1].rect.y == 390 - HANDLE_THICKNESS // 2
    assert center[1].extent_px == 500
