from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import gi

gi.require_version("Gtk", "4.0")

from gi.repository import GLib, Gtk

from safety_dashboard.core.enums import Orientation, SlotKey
from safety_dashboard.core.resize import CURSOR_NAMES
from safety_dashboard.ui_gtk.helpers import rectangle
from safety_dashboard.ui_gtk.layout import GridGeometry, Handle, Rect

from .dashboard_slot import DashboardSlot

if TYPE_CHECKING:
    from safety_dashboard.dashboard.controller import DashboardController

logger = logging.getLogger(__name__)


class SplitterHandle(Gtk.Box):
    """Visible grab strip drawn over a boundary.  Dragging is handled by the grid."""

    def __init__(self, orientation: Orientation) -> None:
        super().__init__()
        self.add_css_class("splitter")
        self.add_css_class(f"splitter-{orientation}")
        self.set_cursor_from_name(CURSOR_NAMES[orientation])


class DashboardGrid(Gtk.Widget):
    """Lays out the seven slots and the splitter handles from the stored proportions."""

    def __init__(self, service: DashboardController) -> None:
        super().__init__()
        self.add_css_class("dashboard-grid")
        self.set_hexpand(True)
        self.set_vexpand(True)
        self._service = service
        self._slots: dict[SlotKey, DashboardSlot] = {}
        self._handles: list[tuple[Handle, SplitterHandle]] = []
        self._geometry: GridGeometry | None = None
        self._active: Handle | None = None
        self._scale_source = 0

        for slot in SlotKey:
            widget = DashboardSlot(slot, service)
            widget.set_parent(self)
            self._slots[slot] = widget

        drag = Gtk.GestureDrag.new()
        drag.set_propagation_phase(Gtk.PropagationPhase.CAPTURE)
        drag.connect("drag-begin", self._on_drag_begin)
        drag.connect("drag-update", self._on_drag_update)
        drag.connect("drag-end", self._on_drag_end)
        self.add_controller(drag)

    def do_dispose(self) -> None:
        if self._scale_source:
            GLib.source_remove(self._scale_source)
            self._scale_source = 0
        for widget in self._slots.values():
            widget.unparent()
        self._slots.clear()
        for _, widget in self._handles:
            widget.unparent()
        self._handles.clear()
        Gtk.Widget.do_dispose(self)

    # -- Public --------------------------------------------------------------

    def rebuild_slots(self) -> None:
        for widget in self._slots.values():
            widget.rebuild()
        self._apply_scales()

    def update_locked(self) -> None:
        for widget in self._slots.values():
            widget.update_locked()

    # -- Layout --------------------------------------------------------------

    def do_get_request_mode(self) -> Gtk.SizeRequestMode:
        return Gtk.SizeRequestMode.CONSTANT_SIZE

    def do_measure(self, orientation: Gtk.Orientation, for_size: int) -> tuple[int, int, int, int]:
        natural = 1280 if orientation == Gtk.Orientation.HORIZONTAL else 720
        return 0, natural, -1, -1

    def do_size_allocate(self, width: int, height: int, baseline: int) -> None:
        geometry = GridGeometry(self._service.get_layout(), width, height)
        self._geometry = geometry
        for slot, rect in geometry.slot_rects().items():
            self._slots[slot].size_allocate(_to_gdk(rect), -1)

        handles = geometry.handles()
        if len(handles) != len(self._handles):
            for _, widget in self._handles:
                widget.unparent()
            self._handles = [(h, SplitterHandle(h.orientation)) for h in handles]
            for _, widget in self._handles:
                widget.set_parent(self)
        else:
            self._handles = [(h, widget) for h, (_, widget) in zip(handles, self._handles)]
        for handle, widget in self._handles:
            widget.size_allocate(_to_gdk(handle.rect), -1)

        # Typography changes queue a resize; never do that from inside allocation.
        if not self._scale_source:
            self._scale_source = GLib.idle_add(self._on_idle_scale)

    def _on_idle_scale(self) -> bool:
        self._scale_source = 0
        geometry = self._geometry
        if geometry is None:
            return GLib.SOURCE_REMOVE
        self._service.update_viewport(geometry.width, geometry.height)
        for slot, rect in geometry.slot_rects().items():
            self._service.update_panel_scale(str(slot), rect.width, rect.height)
        self._apply_scales()
        return GLib.SOURCE_REMOVE

    def _apply_scales(self) -> None:
        root_px = self._service.root_font_size()
        for slot, widget in self._slots.items():
            if widget.card is not None:
                widget.card.apply_scale(self._service.get_scale(str(slot)), root_px)

    # -- Splitter dragging ---------------------------------------------------

    def _handle_at(self, x: float, y: float) -> Handle | None:
        for handle, _ in self._handles:
            r = handle.rect
            if r.x <= x < r.x + r.width and r.y <= y < r.y + r.height:
                return handle
        return None

    def _on_drag_begin(self, gesture: Gtk.GestureDrag, x: float, y: float) -> None:
        handle = self._handle_at(x, y)
        if handle is None:
            # Leave the event to the slot drag-and-drop controllers.
            gesture.set_state(Gtk.EventSequenceState.DENIED)
            return
        gesture.set_state(Gtk.EventSequenceState.CLAIMED)
        self._active = handle
        self._service.begin_resize(handle.group, handle.index, handle.extent_px)

    def _on_drag_update(self, _gesture: Gtk.GestureDrag, offset_x: float, offset_y: float) -> None:
        handle = self._active
        if handle is None:
            return
        delta = offset_x if handle.orientation == Orientation.VERTICAL else offset_y
        self._service.on_resize(handle.group, handle.index, delta, handle.extent_px)

    def _on_drag_end(self, _gesture: Gtk.GestureDrag, _offset_x: float, _offset_y: float) -> None:
        if self._active is None:
            return
        self._active = None
        self._service.end_resize()


def _to_gdk(rect: Rect):
    return rectangle(rect.x, rect.y, rect.width, rect.height)
