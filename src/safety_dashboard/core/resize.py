"""Drag-to-resize gestures over proportion vectors.

A gesture is modelled as a :class:`ResizeSession` created when the pointer
goes down on a splitter handle.  The session keeps the starting snapshot of
the vector so every pointer-move is computed from the same origin, which keeps
the result independent of how many intermediate events were delivered.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Sequence

from safety_dashboard.core.enums import LayoutGroup, Orientation
from safety_dashboard.core.proportions import (
    GROUP_FLOORS,
    GROUP_ORIENTATION,
    TOTAL,
    clamp,
    normalize,
)

logger = logging.getLogger(__name__)

# Containers narrower than this are treated as this wide.
MIN_EXTENT_PX = 1.0

CURSOR_NAMES = {
    Orientation.VERTICAL: "col-resize",
    Orientation.HORIZONTAL: "row-resize",
}


def resize_pair(
    start: Sequence[float], index: int, delta_percent: float, floor: float
) -> tuple[float, ...]:
    """Move the boundary between ``start[index]`` and ``start[index + 1]``.

    Only the two adjacent regions change; both stay at or above *floor*
    even when that means honouring less than the requested delta.
    """
    if not 0 <= index < len(start) - 1:
        raise ValueError(f"boundary index {index} out of range for {len(start)} regions")
    rest = sum(start) - start[index] - start[index + 1]
    if TOTAL - rest - floor < floor:
        # The pair is already squeezed below two floors; there is nothing to move.
        return tuple(start)
    first = clamp(start[index] + delta_percent, floor, TOTAL - rest - floor)
    second = TOTAL - rest - first
    if second < floor:
        second = floor
        first = TOTAL - rest - second
    values = list(start)
    values[index] = first
    values[index + 1] = second
    return normalize(values)


@dataclass(slots=True)
class ResizeSession:
    group: LayoutGroup
    index: int
    extent_px: float
    start: tuple[float, ...]
    floor: float
    on_update: Callable[[tuple[float, ...]], None]
    on_end: Callable[["ResizeSession"], None] | None = None
    current: tuple[float, ...] = field(init=False)
    active: bool = field(init=False, default=True)

    def __post_init__(self) -> None:
        self.current = self.start

    @property
    def orientation(self) -> Orientation:
        return GROUP_ORIENTATION[self.group]

    def update(self, delta_px: float) -> tuple[float, ...]:
        """Apply the total pointer travel since the gesture began."""
        if not self.active:
            return self.current
        delta_percent = delta_px / self.extent_px * 100.0
        self.current = resize_pair(self.start, self.index, delta_percent, self.floor)
        self.on_update(self.current)
        return self.current

    def end(self) -> tuple[float, ...]:
        if self.active:
            self.active = False
            if self.on_end is not None:
                self.on_end(self)
        return self.current


class ResizeController:
    """Creates resize sessions against a proportion source.

    *cursor_hook* is called with a cursor name when a gesture begins and with
    ``None`` when it ends, so the UI can lock the pointer cursor and text
    selection for the duration of the drag.
    """

    def __init__(
        self,
        get_values: Callable[[LayoutGroup], tuple[float, ...]],
        set_values: Callable[[LayoutGroup, tuple[float, ...]], None],
        cursor_hook: Callable[[str | None], None] | None = None,
    ) -> None:
        self._get_values = get_values
        self._set_values = set_values
        self._cursor_hook = cursor_hook
        self._session: ResizeSession | None = None

    @property
    def session(self) -> ResizeSession | None:
        return self._session

    def set_cursor_hook(self, hook: Callable[[str | None], None] | None) -> None:
        self._cursor_hook = hook

    def begin_resize(self, group: LayoutGroup, index: int, extent_px: float) -> ResizeSession:
        # One pointer: a new gesture ends any gesture still in flight.
        if self._session is not None:
            self._session.end()

        start = self._get_values(group)
        if not 0 <= index < len(start) - 1:
            raise ValueError(f"boundary index {index} out of range for {group}")
        if extent_px < MIN_EXTENT_PX:
            logger.debug("Degenerate %s extent %.3fpx, using 1px", group, extent_px)
            extent_px = MIN_EXTENT_PX

        session = ResizeSession(
            group=group,
            index=index,
            extent_px=float(extent_px),
            start=tuple(start),
            floor=GROUP_FLOORS[group],
            on_update=lambda values: self._set_values(group, values),
            on_end=self._on_session_end,
        )
        self._session = session
        if self._cursor_hook is not None:
            self._cursor_hook(CURSOR_NAMES[session.orientation])
        return session

    def end_resize(self) -> tuple[float, ...] | None:
        if self._session is None:
            return None
        return self._session.end()

    def _on_session_end(self, session: ResizeSession) -> None:
        if self._session is session:
            self._session = None
        if self._cursor_hook is not None:
            self._cursor_hook(None)
