from __future__ import annotations

import logging

import gi

gi.require_version("Gtk", "4.0")
gi.require_version("Adw", "1")

from gi.repository import Adw, Gdk, Gtk

from safety_dashboard.dashboard.controller import DashboardController
from safety_dashboard.ui_gtk.widgets import DashboardGrid

logger = logging.getLogger(__name__)


class MainWindow(Adw.ApplicationWindow):
    def __init__(self, application: Adw.Application, service: DashboardController) -> None:
        super().__init__(application=application)
        self._service = service
        self.set_title("Safety Dashboard")
        self._apply_window_geometry()
        self.add_css_class("dashboard-root")

        self._root_css = Gtk.CssProvider()
        display = Gdk.Display.get_default()
        if display is not None:
            Gtk.StyleContext.add_provider_for_display(
                display, self._root_css, Gtk.STYLE_PROVIDER_PRIORITY_APPLICATION + 1
            )

        header_bar = Adw.HeaderBar.new()
        header_bar.add_css_class("app-header")

        title = Gtk.Label(label=f"Safety Dashboard {service.year}")
        title.add_css_class("app-title")
        header_bar.set_title_widget(title)
        self._title = title

        # Left: arrangement controls
        self._lock_button = Gtk.ToggleButton()
        self._lock_button.connect("toggled", self._on_lock_toggled)
        header_bar.pack_start(self._lock_button)

        reset_btn = Gtk.Button.new_from_icon_name("view-refresh-symbolic")
        reset_btn.set_tooltip_text("Reset layout")
        reset_btn.update_property([Gtk.AccessibleProperty.LABEL], ["Reset layout"])
        reset_btn.connect("clicked", self._on_reset_clicked)
        header_bar.pack_start(reset_btn)

        # Right: UI scale stepper
        scale_box = Gtk.Box(orientation=Gtk.Orientation.HORIZONTAL, spacing=2)
        scale_box.add_css_class("linked")
        smaller = Gtk.Button.new_with_label("A−")
        smaller.set_tooltip_text("Smaller text")
        smaller.connect("clicked", lambda _b: service.step_ui_scale(-1))
        self._scale_label = Gtk.Button.new_with_label("")
        self._scale_label.set_tooltip_text("Reset text size")
        self._scale_label.connect("clicked", lambda _b: service.reset_ui_scale())
        larger = Gtk.Button.new_with_label("A+")
        larger.set_tooltip_text("Larger text")
        larger.connect("clicked", lambda _b: service.step_ui_scale(1))
        scale_box.append(smaller)
        scale_box.append(self._scale_label)
        scale_box.append(larger)
        header_bar.pack_end(scale_box)

        self._grid = DashboardGrid(service)

        page = Adw.ToolbarView.new()
        page.add_top_bar(header_bar)
        page.set_content(self._grid)

        self._toast_overlay = Adw.ToastOverlay.new()
        self._toast_overlay.set_child(page)
        self.set_content(self._toast_overlay)

        self._wire_keyboard_shortcuts()
        service.set_cursor_hook(self._on_cursor)
        service.set_change_notify(self._on_change)
        self._sync_locked()
        self._sync_ui_scale()

    def _apply_window_geometry(self) -> None:
        width = 1920
        height = 1080
        display = Gdk.Display.get_default()
        if display is not None:
            monitors = display.get_monitors()
            if monitors.get_n_items() > 0:
                monitor = monitors.get_item(0)
                if monitor is not None:
                    geometry = monitor.get_geometry()
                    logger.debug("MainWindow: screen geometry %dx%d", geometry.width, geometry.height)
                    width = min(width, geometry.width)
                    height = min(height, geometry.height - 100)  # Reserve for panels
        self.set_default_size(width, height)
        self.set_resizable(True)

    # -- Service notifications -----------------------------------------------

    def _on_change(self, what: str) -> None:
        logger.debug("UI: %s changed", what)
        if what == "layout":
            self._grid.queue_allocate()
        elif what in ("slots", "safety"):
            self._grid.rebuild_slots()
        elif what == "locked":
            self._sync_locked()
        elif what == "ui-scale":
            self._sync_ui_scale()

    def _on_cursor(self, name: str | None) -> None:
        # Keep the resize cursor while the pointer strays off the handle.
        self.set_cursor_from_name(name)
        if name is None:
            self.remove_css_class("resizing")
        else:
            self.add_css_class("resizing")

    def _sync_locked(self) -> None:
        locked = self._service.is_locked()
        self._lock_button.handler_block_by_func(self._on_lock_toggled)
        self._lock_button.set_active(not locked)
        self._lock_button.handler_unblock_by_func(self._on_lock_toggled)
        self._lock_button.set_icon_name(
            "changes-prevent-symbolic" if locked else "changes-allow-symbolic"
        )
        label = "Unlock layout" if locked else "Lock layout"
        self._lock_button.set_tooltip_text(label)
        self._lock_button.update_property([Gtk.AccessibleProperty.LABEL], [label])
        self._grid.update_locked()

    def _sync_ui_scale(self) -> None:
        self._scale_label.set_label(f"{round(self._service.get_ui_scale() * 100)}%")
        self._root_css.load_from_string(
            f".dashboard-root {{ font-size: {self._service.root_font_size():.2f}px; }}"
        )
        self._grid.rebuild_slots()

    # -- Actions -------------------------------------------------------------

    def _on_lock_toggled(self, button: Gtk.ToggleButton) -> None:
        self._service.set_locked(not button.get_active())

    def _on_reset_clicked(self, _button: Gtk.Button) -> None:
        self._service.reset_layout()
        self._toast_overlay.add_toast(Adw.Toast.new("Layout reset"))

    def _wire_keyboard_shortcuts(self) -> None:
        controller = Gtk.EventControllerKey.new()
        controller.connect("key-pressed", self._on_key_pressed)
        self.add_controller(controller)

    def _on_key_pressed(
        self,
        _controller: Gtk.EventControllerKey,
        keyval: int,
        _keycode: int,
        state: Gdk.ModifierType,
    ) -> bool:
        if keyval == Gdk.KEY_Escape:
            self._service.end_resize()
            return False

        if not (state & Gdk.ModifierType.CONTROL_MASK):
            return False

        if keyval in (Gdk.KEY_plus, Gdk.KEY_equal, Gdk.KEY_KP_Add):
            self._service.step_ui_scale(1)
        elif keyval in (Gdk.KEY_minus, Gdk.KEY_KP_Subtract):
            self._service.step_ui_scale(-1)
        elif keyval == Gdk.KEY_0:
            self._service.reset_ui_scale()
        elif keyval == Gdk.KEY_l:
            self._service.toggle_locked()
        else:
            return False
        return True
