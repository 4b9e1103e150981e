from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime
from typing import Callable, Iterable, Sequence

from safety_dashboard.core import safety as safety_edits
from safety_dashboard.core.enums import DayStatus, LayoutGroup, PanelKey, SlotKey
from safety_dashboard.core.models import (
    LayoutConfiguration,
    MonthSummary,
    SafetyMetric,
    SafetyRecord,
    SafetyTrendRow,
)
from safety_dashboard.core.proportions import default_layout
from safety_dashboard.core.resize import ResizeController, ResizeSession
from safety_dashboard.core.safety_calendar import apply_auto_safe, month_summary, safety_streak
from safety_dashboard.core.scale import (
    ROOT_BASE_UNIT,
    ScaleTracker,
    clamp_ui_scale,
    panel_scale,
    root_scale,
    step_ui_scale,
)
from safety_dashboard.core.services import Clock, DashboardService, KeyValueStorage, Scheduler
from safety_dashboard.core.slots import SlotAssignment, can_accept_drop, swap_slots
from safety_dashboard.core.time import SystemClock

from .auto_safe import AutoSafeTimer
from .codecs import (
    LAYOUT_KEY,
    SLOTS_KEY,
    UI_SCALE_KEY,
    decode_layout,
    decode_safety_record,
    decode_slots,
    decode_ui_scale,
    encode_layout,
    encode_safety_record,
    encode_slots,
    encode_ui_scale,
    safety_key,
)
from .config import DashboardConfig, load_config_from_env
from .records import PersistedRecord

logger = logging.getLogger(__name__)

ROOT_CONTAINER = "root"


class DashboardController(DashboardService):
    """Owns the persisted dashboard state and the operations the UI performs on it.

    Four records are kept independently, each with its own storage key and
    debounce timer: the layout proportions, the slot assignment, the UI scale
    multiplier, and the safety record of the active year.
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        *,
        scheduler: Scheduler | None = None,
        clock: Clock | None = None,
        config: DashboardConfig | None = None,
        year: int | None = None,
    ) -> None:
        if scheduler is None:
            from .scheduler import GLibScheduler

            scheduler = GLibScheduler()
        self._storage = storage
        self._scheduler = scheduler
        self._clock = clock or SystemClock()
        self._config = config or load_config_from_env()
        self._year = year if year is not None else self._clock.now().year
        self._locked = self._config.start_locked
        self._notify: Callable[[str], None] | None = None
        self._closed = False

        self._layout: PersistedRecord[LayoutConfiguration] = PersistedRecord(
            LAYOUT_KEY,
            storage,
            scheduler,
            decode=decode_layout,
            encode=encode_layout,
            default_factory=default_layout,
            debounce_ms=self._config.layout_debounce_ms,
        )
        self._slots: PersistedRecord[SlotAssignment] = PersistedRecord(
            SLOTS_KEY,
            storage,
            scheduler,
            decode=decode_slots,
            encode=encode_slots,
            default_factory=SlotAssignment.default,
            debounce_ms=self._config.layout_debounce_ms,
        )
        self._ui_scale: PersistedRecord[float] = PersistedRecord(
            UI_SCALE_KEY,
            storage,
            scheduler,
            decode=decode_ui_scale,
            encode=encode_ui_scale,
            default_factory=lambda: 1.0,
            debounce_ms=self._config.layout_debounce_ms,
        )
        self._safety = self._safety_record_for(self._year)

        self._resize = ResizeController(self._group_values, self._set_group_values)
        self._panel_scales = ScaleTracker(panel_scale, initial=1.0)
        self._root_scales = ScaleTracker(root_scale, initial=ROOT_BASE_UNIT)
        self._auto_safe = AutoSafeTimer(
            scheduler, self._clock, self._on_cutoff, self._config.auto_safe_hour
        )

    def _safety_record_for(self, year: int) -> PersistedRecord[SafetyRecord]:
        return PersistedRecord(
            safety_key(year),
            self._storage,
            self._scheduler,
            decode=lambda data: decode_safety_record(data, year),
            encode=encode_safety_record,
            default_factory=lambda: safety_edits.default_safety_record(year),
            debounce_ms=self._config.safety_debounce_ms,
        )

    # -- Lifecycle -----------------------------------------------------------

    def set_change_notify(self, notify_fn: Callable[[str], None] | None) -> None:
        """Register a callback receiving ``"layout"``, ``"slots"``, ``"safety"``,
        ``"ui-scale"`` or ``"locked"`` after the corresponding state changed."""
        self._notify = notify_fn

    def _emit(self, what: str) -> None:
        if self._notify is not None:
            self._notify(what)

    def load(self) -> None:
        self._layout.load()
        self._slots.load()
        self._ui_scale.load()
        self._load_safety()
        self._auto_safe.start()
        logger.info(
            "Dashboard state loaded: layout=%s slots=%s safety[%d]=%s",
            self._layout.state,
            self._slots.state,
            self._year,
            self._safety.state,
        )

    def _load_safety(self) -> None:
        self._safety.load()
        self._apply_auto_safe(self._clock.now())

    def flush(self) -> None:
        for record in self._records():
            record.flush()

    def close(self, *, flush: bool = True) -> None:
        """Stop all timers.  Pending writes are saved first unless *flush* is False."""
        if self._closed:
            return
        self._closed = True
        self._auto_safe.stop()
        self._resize.end_resize()
        for record in self._records():
            if flush:
                record.flush()
            record.cancel()

    def _records(self) -> Iterable[PersistedRecord]:
        return (self._layout, self._slots, self._ui_scale, self._safety)

    # -- State access --------------------------------------------------------

    @property
    def year(self) -> int:
        return self._year

    def now(self) -> datetime:
        return self._clock.now()

    def get_layout(self) -> LayoutConfiguration:
        return self._layout.value

    def get_slots(self) -> SlotAssignment:
        return self._slots.value

    def get_safety_record(self) -> SafetyRecord:
        return self._safety.value

    def record_states(self) -> dict[str, str]:
        return {record.key: str(record.state) for record in self._records()}

    def is_locked(self) -> bool:
        return self._locked

    def set_locked(self, locked: bool) -> None:
        if locked == self._locked:
            return
        self._locked = locked
        self._emit("locked")

    def toggle_locked(self) -> bool:
        self.set_locked(not self._locked)
        return self._locked

    # -- Resizing ------------------------------------------------------------

    def set_cursor_hook(self, hook: Callable[[str | None], None] | None) -> None:
        self._resize.set_cursor_hook(hook)

    def _group_values(self, group: LayoutGroup) -> tuple[float, ...]:
        return self._layout.value.group(group)

    def _set_group_values(self, group: LayoutGroup, values: tuple[float, ...]) -> None:
        if self._layout.set(self._layout.value.with_group(group, values)):
            self._emit("layout")

    def begin_resize(self, group: LayoutGroup, index: int, extent_px: float) -> ResizeSession:
        return self._resize.begin_resize(group, index, extent_px)

    def on_resize(
        self, group: LayoutGroup, index: int, pointer_delta: float, extent_px: float
    ) -> tuple[float, ...]:
        """Apply the pointer travel of the current gesture on boundary *index* of *group*.

        Starts a gesture when none is active for that boundary.
        """
        session = self._resize.session
        if session is None or session.group != group or session.index != index:
            session = self._resize.begin_resize(group, index, extent_px)
        return session.update(pointer_delta)

    def end_resize(self) -> None:
        self._resize.end_resize()

    # -- Slots ---------------------------------------------------------------

    def panel_at(self, slot: SlotKey) -> PanelKey:
        return self._slots.value.panel_at(slot)

    def can_accept_drop(self, source: SlotKey, target: SlotKey) -> bool:
        return can_accept_drop(source, target, locked=self._locked)

    def swap_slots(self, source: SlotKey, target: SlotKey) -> bool:
        current = self._slots.value
        updated = swap_slots(current, source, target, locked=self._locked)
        if updated is current:
            logger.debug("Ignored swap %s -> %s (locked=%s)", source, target, self._locked)
            return False
        if self._slots.set(updated):
            self._emit("slots")
        return True

    # -- Scale ---------------------------------------------------------------

    def update_panel_scale(self, container_id: str, width: float, height: float) -> float:
        return self._panel_scales.update(container_id, width, height)

    def get_scale(self, container_id: str) -> float:
        """Current scale of a slot, or the root font size for ``"root"``."""
        if container_id == ROOT_CONTAINER:
            return self._root_scales.get(ROOT_CONTAINER)
        return self._panel_scales.get(container_id)

    def update_viewport(self, width: float, height: float) -> float:
        return self._root_scales.update(ROOT_CONTAINER, width, height)

    def root_font_size(self) -> float:
        return self._root_scales.get(ROOT_CONTAINER) * self._ui_scale.value

    def get_ui_scale(self) -> float:
        return self._ui_scale.value

    def set_ui_scale(self, value: float) -> float:
        if self._ui_scale.set(clamp_ui_scale(value)):
            self._emit("ui-scale")
        return self._ui_scale.value

    def step_ui_scale(self, steps: int) -> float:
        return self.set_ui_scale(step_ui_scale(self._ui_scale.value, steps))

    def reset_ui_scale(self) -> None:
        self.set_ui_scale(1.0)

    # -- Reset ---------------------------------------------------------------

    def reset_layout(self) -> None:
        """Restore default proportions and slots and forget their stored records.

        The poster zoom is part of the arrangement too and goes back to 1; it
        lives in the safety record, which is saved rather than cleared.
        """
        self._resize.end_resize()
        self._layout.clear()
        self._slots.clear()
        self._emit("layout")
        self._emit("slots")
        self._set_safety(safety_edits.set_poster_zoom(self._safety.value, 1.0))
        logger.info("Layout reset to defaults")

    # -- Safety record -------------------------------------------------------

    def _set_safety(self, record: SafetyRecord) -> None:
        if self._safety.set(record):
            self._emit("safety")

    def _apply_auto_safe(self, now: datetime) -> bool:
        record = self._safety.value
        months = apply_auto_safe(
            record.monthly_data, now, record.year, self._config.auto_safe_hour
        )
        if months is record.monthly_data:
            return False
        logger.info("Auto-safe marked unset days as safe (%s)", now.isoformat(timespec="minutes"))
        self._set_safety(replace(record, monthly_data=months))
        return True

    def _on_cutoff(self, now: datetime) -> None:
        self._apply_auto_safe(now)

    def switch_year(self, year: int) -> None:
        if year == self._year:
            return
        self._safety.flush()
        self._safety.cancel()
        self._year = year
        self._safety = self._safety_record_for(year)
        self._load_safety()
        self._emit("safety")

    def set_day_status(self, month: int, day: int, status: DayStatus | None) -> None:
        self._set_safety(safety_edits.set_day_status(self._safety.value, month, day, status))

    def cycle_day_status(self, month: int, day: int) -> None:
        self._set_safety(safety_edits.cycle_day_status(self._safety.value, month, day))

    def safety_streak(self) -> int:
        record = self._safety.value
        return safety_streak(record.monthly_data, self._clock.now().date(), record.year)

    def month_summary(self, month: int) -> MonthSummary:
        months = self._safety.value.monthly_data
        return month_summary(months[month] if 0 <= month < len(months) else None)

    def update_slogan(self, slogan_th: str, slogan_en: str) -> None:
        self._set_safety(safety_edits.update_slogan(self._safety.value, slogan_th, slogan_en))

    def update_policy(self, title: str, lines: Iterable[str]) -> None:
        self._set_safety(safety_edits.update_policy(self._safety.value, title, lines))

    def add_announcement(self, text: str = safety_edits.NEW_ANNOUNCEMENT_TEXT) -> str:
        record, announcement_id = safety_edits.add_announcement(self._safety.value, text)
        self._set_safety(record)
        return announcement_id

    def edit_announcement(self, announcement_id: str, text: str) -> None:
        self._set_safety(
            safety_edits.edit_announcement(self._safety.value, announcement_id, text)
        )

    def delete_announcement(self, announcement_id: str) -> None:
        self._set_safety(safety_edits.delete_announcement(self._safety.value, announcement_id))

    def replace_metrics(self, metrics: Sequence[SafetyMetric]) -> None:
        self._set_safety(safety_edits.replace_metrics(self._safety.value, metrics))

    def save_trend_rows(self, rows: Sequence[SafetyTrendRow]) -> None:
        self._set_safety(safety_edits.save_trend_rows(self._safety.value, rows))

    def set_poster(self, poster: str | None) -> None:
        self._set_safety(safety_edits.set_poster(self._safety.value, poster))

    def set_poster_zoom(self, zoom: float) -> None:
        self._set_safety(safety_edits.set_poster_zoom(self._safety.value, zoom))
