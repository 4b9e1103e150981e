from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import gi

gi.require_version("Gtk", "4.0")

from gi.repository import Gdk, GObject, Gtk

from safety_dashboard.core.enums import SlotKey

from .panel_card import PanelCard

if TYPE_CHECKING:
    from safety_dashboard.dashboard.controller import DashboardController

logger = logging.getLogger(__name__)


class DashboardSlot(Gtk.Box):
    """One of the seven grid positions.  Hosts whichever panel is assigned to it.

    Panels are moved by dragging one slot onto another, which swaps the two.
    Dragging is only offered while the layout is unlocked.
    """

    def __init__(self, slot: SlotKey, service: DashboardController) -> None:
        super().__init__(orientation=Gtk.Orientation.VERTICAL)
        self.add_css_class("dashboard-slot")
        self._slot = slot
        self._service = service
        self._card: PanelCard | None = None

        self._drag_source = Gtk.DragSource.new()
        self._drag_source.set_actions(Gdk.DragAction.MOVE)
        self._drag_source.connect("prepare", self._on_drag_prepare)
        self.add_controller(self._drag_source)

        drop_target = Gtk.DropTarget.new(GObject.TYPE_STRING, Gdk.DragAction.MOVE)
        drop_target.set_preload(True)
        drop_target.connect("enter", self._on_drop_enter)
        drop_target.connect("leave", self._on_drop_leave)
        drop_target.connect("drop", self._on_drop)
        self.add_controller(drop_target)

        self.rebuild()
        self.update_locked()

    @property
    def slot(self) -> SlotKey:
        return self._slot

    @property
    def card(self) -> PanelCard | None:
        return self._card

    def rebuild(self) -> None:
        panel = self._service.panel_at(self._slot)
        if self._card is not None and self._card.panel == panel:
            self._card.refresh()
            return
        if self._card is not None:
            self.remove(self._card)
        self._card = PanelCard(panel, self._service)
        self.append(self._card)

    def update_locked(self) -> None:
        locked = self._service.is_locked()
        self._drag_source.set_propagation_phase(
            Gtk.PropagationPhase.NONE if locked else Gtk.PropagationPhase.BUBBLE
        )
        if locked:
            self.remove_css_class("unlocked")
        else:
            self.add_css_class("unlocked")

    def _on_drag_prepare(self, _source: Gtk.DragSource, _x: float, _y: float):
        if self._service.is_locked():
            return None
        return Gdk.ContentProvider.new_for_value(str(self._slot))

    def _source_of(self, target: Gtk.DropTarget) -> SlotKey | None:
        value = target.get_value()
        try:
            return SlotKey(value) if value is not None else None
        except ValueError:
            return None

    def _on_drop_enter(self, target: Gtk.DropTarget, _x: float, _y: float) -> Gdk.DragAction:
        source = self._source_of(target)
        if source is None or not self._service.can_accept_drop(source, self._slot):
            return Gdk.DragAction(0)
        self.add_css_class("drop-target")
        return Gdk.DragAction.MOVE

    def _on_drop_leave(self, _target: Gtk.DropTarget) -> None:
        self.remove_css_class("drop-target")

    def _on_drop(self, _target: Gtk.DropTarget, value: str, _x: float, _y: float) -> bool:
        self.remove_css_class("drop-target")
        try:
            source = SlotKey(value)
        except ValueError:
            logger.debug("Ignored drop of unknown payload %r", value)
            return False
        return self._service.swap_slots(source, self._slot)
