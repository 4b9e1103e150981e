"""GTK widget utility functions."""

from __future__ import annotations

import gi

gi.require_version("Gtk", "4.0")

from gi.repository import Gdk, Gtk, Pango

from safety_dashboard.core.scale import ROOT_BASE_UNIT, scaled_px


def clear_children(container: Gtk.Widget) -> None:
    """Remove all children from a container widget (Gtk.Box, etc.)."""
    while True:
        child = container.get_first_child()
        if child is None:
            break
        container.remove(child)


def rectangle(x: int, y: int, width: int, height: int) -> Gdk.Rectangle:
    rect = Gdk.Rectangle()
    rect.x, rect.y, rect.width, rect.height = x, y, max(0, width), max(0, height)
    return rect


class ScaledLabel(Gtk.Label):
    """Label whose font size follows the panel scale of the slot it sits in.

    *base_px* is the size at the reference panel size and a 16px root font.
    """

    def __init__(self, text: str, base_px: float, *, css_class: str | None = None) -> None:
        super().__init__(label=text)
        self._base_px = base_px
        self.set_wrap(True)
        self.set_wrap_mode(Pango.WrapMode.WORD_CHAR)
        if css_class:
            self.add_css_class(css_class)
        self.apply_scale(1.0, ROOT_BASE_UNIT)

    def apply_scale(self, panel_scale: float, root_px: float) -> None:
        px = scaled_px(self._base_px * root_px / ROOT_BASE_UNIT, panel_scale)
        attrs = Pango.AttrList()
        attrs.insert(Pango.attr_size_new_absolute(int(px * Pango.SCALE)))
        self.set_attributes(attrs)


def iter_scaled_labels(widget: Gtk.Widget):
    """Yield every :class:`ScaledLabel` below *widget*."""
    child = widget.get_first_child()
    while child is not None:
        if isinstance(child, ScaledLabel):
            yield child
        yield from iter_scaled_labels(child)
        child = child.get_next_sibling()
