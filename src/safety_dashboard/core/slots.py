"""Slot → panel assignment and the drag-to-swap operation."""

from __future__ import annotations

from typing import Mapping

from safety_dashboard.core.enums import PanelKey, SlotKey

DEFAULT_SLOTS: dict[SlotKey, PanelKey] = {
    SlotKey.LEFT_TOP: PanelKey.SLOGAN,
    SlotKey.LEFT_BOTTOM: PanelKey.POSTER,
    SlotKey.CENTER_TOP: PanelKey.SAFETY_DATA,
    SlotKey.CENTER_MID: PanelKey.POLICY,
    SlotKey.CENTER_BOTTOM: PanelKey.ANNOUNCEMENTS,
    SlotKey.RIGHT_TOP: PanelKey.STREAK,
    SlotKey.RIGHT_BOTTOM: PanelKey.CALENDAR,
}


class SlotAssignment:
    """Immutable total mapping from every :class:`SlotKey` to a panel."""

    __slots__ = ("_panels",)

    def __init__(self, panels: Mapping[SlotKey, PanelKey]) -> None:
        missing = [slot for slot in SlotKey if slot not in panels]
        if missing:
            raise ValueError(f"slot assignment is missing {', '.join(missing)}")
        self._panels = {SlotKey(slot): PanelKey(panels[slot]) for slot in SlotKey}

    @classmethod
    def default(cls) -> "SlotAssignment":
        return cls(DEFAULT_SLOTS)

    def panel_at(self, slot: SlotKey) -> PanelKey:
        return self._panels[slot]

    def is_bijective(self) -> bool:
        return len(set(self._panels.values())) == len(self._panels)

    def swapped(self, first: SlotKey, second: SlotKey) -> "SlotAssignment":
        if first == second:
            return self
        panels = dict(self._panels)
        panels[first], panels[second] = panels[second], panels[first]
        return SlotAssignment(panels)

    def as_dict(self) -> dict[str, str]:
        return {str(slot): str(panel) for slot, panel in self._panels.items()}

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SlotAssignment):
            return NotImplemented
        return self._panels == other._panels

    def __hash__(self) -> int:
        return hash(tuple(self._panels.items()))

    def __repr__(self) -> str:
        return f"SlotAssignment({self.as_dict()!r})"


def can_accept_drop(source: SlotKey, target: SlotKey, *, locked: bool) -> bool:
    """Whether *target* may take a panel dragged from *source* right now."""
    return not locked and source != target


def swap_slots(
    assignment: SlotAssignment, source: SlotKey, target: SlotKey, *, locked: bool
) -> SlotAssignment:
    """Exchange the panels of two slots.

    Returns *assignment* itself when the swap is rejected (locked layout or
    same slot), so callers can detect a no-op by identity.
    """
    if not can_accept_drop(source, target, locked=locked):
        return assignment
    return assignment.swapped(source, target)
