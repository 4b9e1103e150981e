"""Pixel geometry of the dashboard grid derived from the stored proportions.

The grid is three columns; each column is split into rows.  All positions
are fractions of the allocated width and height, so the arrangement follows
the window when it is resized.
"""

from __future__ import annotations

from dataclasses import dataclass

from safety_dashboard.core.enums import LayoutGroup, Orientation, SlotKey
from safety_dashboard.core.models import LayoutConfiguration
from safety_dashboard.core.proportions import GROUP_ORIENTATION, TOTAL

# Width of the grab area drawn over each boundary.
HANDLE_THICKNESS = 8

COLUMN_ROWS: tuple[tuple[LayoutGroup, tuple[SlotKey, ...]], ...] = (
    (LayoutGroup.LEFT_ROWS, (SlotKey.LEFT_TOP, SlotKey.LEFT_BOTTOM)),
    (
        LayoutGroup.CENTER_ROWS,
        (SlotKey.CENTER_TOP, SlotKey.CENTER_MID, SlotKey.CENTER_BOTTOM),
    ),
    (LayoutGroup.RIGHT_ROWS, (SlotKey.RIGHT_TOP, SlotKey.RIGHT_BOTTOM)),
)


@dataclass(frozen=True, slots=True)
class Rect:
    x: int
    y: int
    width: int
    height: int


@dataclass(frozen=True, slots=True)
class Handle:
    """Grab area for the boundary after region *index* of *group*."""

    group: LayoutGroup
    index: int
    rect: Rect
    extent_px: float

    @property
    def orientation(self) -> Orientation:
        return GROUP_ORIENTATION[self.group]


def _edges(values: tuple[float, ...], start: int, length: int) -> list[int]:
    """Pixel offsets of every region edge, first and last included."""
    edges = [start]
    running = 0.0
    for value in values:
        running += value
        edges.append(start + round(length * running / TOTAL))
    edges[-1] = start + length
    return edges


@dataclass(frozen=True, slots=True)
class GridGeometry:
    layout: LayoutConfiguration
    width: int
    height: int

    def column_rects(self) -> list[Rect]:
        xs = _edges(self.layout.cols, 0, self.width)
        return [Rect(xs[i], 0, xs[i + 1] - xs[i], self.height) for i in range(len(xs) - 1)]

    def slot_rects(self) -> dict[SlotKey, Rect]:
        rects: dict[SlotKey, Rect] = {}
        for column, (group, slots) in zip(self.column_rects(), COLUMN_ROWS):
            ys = _edges(self.layout.group(group), column.y, column.height)
            for i, slot in enumerate(slots):
                rects[slot] = Rect(column.x, ys[i], column.width, ys[i + 1] - ys[i])
        return rects

    def handles(self) -> list[Handle]:
        half = HANDLE_THICKNESS // 2
        columns = self.column_rects()
        handles = [
            Handle(
                LayoutGroup.COLS,
                i,
                Rect(columns[i + 1].x - half, 0, HANDLE_THICKNESS, self.height),
                float(self.width),
            )
            for i in range(len(columns) - 1)
        ]
        for column, (group, _) in zip(columns, COLUMN_ROWS):
            ys = _edges(self.layout.group(group), column.y, column.height)
            for i in range(1, len(ys) - 1):
                handles.append(
                    Handle(
                        group,
                        i - 1,
                        Rect(column.x, ys[i] - half, column.width, HANDLE_THICKNESS),
                        float(column.height),
                    )
                )
        return handles
