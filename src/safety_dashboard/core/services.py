from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Callable, Protocol

from safety_dashboard.core.enums import DayStatus, LayoutGroup, PanelKey, SlotKey
from safety_dashboard.core.models import LayoutConfiguration, MonthSummary, SafetyRecord

if TYPE_CHECKING:
    from safety_dashboard.core.resize import ResizeSession
    from safety_dashboard.core.slots import SlotAssignment


class StorageError(Exception):
    """The key/value backend failed to read, write, or remove a key."""


class KeyValueStorage(Protocol):
    def read_key(self, key: str) -> str | None: ...

    def write_key(self, key: str, value: str) -> None: ...

    def remove_key(self, key: str) -> None: ...


class Clock(Protocol):
    def now(self) -> datetime: ...


class Scheduler(Protocol):
    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> int:
        """Run *callback* once after *delay_ms*; returns a handle for :meth:`cancel`."""
        ...

    def cancel(self, handle: int) -> None:
        """Cancel a pending callback.  Unknown or already-fired handles are ignored."""
        ...


class DashboardService(Protocol):
    def set_change_notify(self, notify_fn: Callable[[str], None] | None) -> None: ...

    def set_cursor_hook(self, hook: Callable[[str | None], None] | None) -> None: ...

    def load(self) -> None: ...

    def close(self, *, flush: bool = True) -> None: ...

    def flush(self) -> None: ...

    def get_layout(self) -> LayoutConfiguration: ...

    def get_slots(self) -> SlotAssignment: ...

    def get_safety_record(self) -> SafetyRecord: ...

    def is_locked(self) -> bool: ...

    def set_locked(self, locked: bool) -> None: ...

    def begin_resize(
        self, group: LayoutGroup, index: int, extent_px: float
    ) -> ResizeSession: ...

    def on_resize(
        self, group: LayoutGroup, index: int, pointer_delta: float, extent_px: float
    ) -> tuple[float, ...]: ...

    def end_resize(self) -> None: ...

    def can_accept_drop(self, source: SlotKey, target: SlotKey) -> bool: ...

    def swap_slots(self, source: SlotKey, target: SlotKey) -> bool: ...

    def panel_at(self, slot: SlotKey) -> PanelKey: ...

    def update_panel_scale(self, container_id: str, width: float, height: float) -> float: ...

    def get_scale(self, container_id: str) -> float: ...

    def update_viewport(self, width: float, height: float) -> float: ...

    def root_font_size(self) -> float: ...

    def get_ui_scale(self) -> float: ...

    def step_ui_scale(self, steps: int) -> float: ...

    def reset_ui_scale(self) -> None: ...

    def reset_layout(self) -> None: ...

    def set_day_status(self, month: int, day: int, status: DayStatus | None) -> None: ...

    def cycle_day_status(self, month: int, day: int) -> None: ...

    def safety_streak(self) -> int: ...

    def month_summary(self, month: int) -> MonthSummary: ...
