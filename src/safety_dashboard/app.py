from __future__ import annotations

import logging
import os
import signal
from pathlib import Path
from typing import Sequence

from safety_dashboard.dashboard.logging_setup import configure_logging

# Kiosk displays run without AT-SPI, and GTK4 spams warnings when it's missing.
# Users can still override via GTK_A11Y=atspi if they need screen-reader support.
os.environ.setdefault("GTK_A11Y", "none")

import gi

configure_logging()

gi.require_version("Gtk", "4.0")
gi.require_version("Adw", "1")

from gi.repository import Adw, Gdk, GLib, Gio, Gtk

from safety_dashboard.core.services import KeyValueStorage
from safety_dashboard.dashboard.config import DashboardConfig, load_config_from_env
from safety_dashboard.dashboard.controller import DashboardController
from safety_dashboard.dashboard.scheduler import GLibScheduler
from safety_dashboard.ui_gtk.windows.main_window import MainWindow

logger = logging.getLogger(__name__)

APP_ID = "com.safetydashboard.Dashboard"


def _load_css() -> None:
    resources = Path(__file__).parent / "ui_gtk" / "resources"
    display = Gdk.Display.get_default()
    if display is None:
        return

    for css_path in sorted(resources.glob("*.css")):
        provider = Gtk.CssProvider()
        provider.load_from_path(str(css_path))
        Gtk.StyleContext.add_provider_for_display(
            display,
            provider,
            Gtk.STYLE_PROVIDER_PRIORITY_APPLICATION,
        )


def open_storage(config: DashboardConfig) -> KeyValueStorage:
    if config.use_mock_storage:
        from safety_dashboard.mock import MemoryKeyValueStore

        logger.info("Using in-memory storage; nothing will be saved")
        return MemoryKeyValueStore()

    from safety_dashboard.dashboard.db import open_db
    from safety_dashboard.dashboard.kv_store import SqliteKeyValueStore

    return SqliteKeyValueStore(open_db(config.db_path))


class DashboardApplication(Adw.Application):
    def __init__(self) -> None:
        super().__init__(application_id=APP_ID, flags=Gio.ApplicationFlags.FLAGS_NONE)
        config = load_config_from_env()
        logger.info("Starting with %s", config.to_log_string())
        self._scheduler = GLibScheduler()
        self.service = DashboardController(
            open_storage(config), scheduler=self._scheduler, config=config
        )
        self.service.load()

    def do_shutdown(self) -> None:
        self.service.close(flush=True)
        self._scheduler.cancel_all()
        Adw.Application.do_shutdown(self)

    def do_activate(self) -> None:
        _load_css()
        window = self.props.active_window
        if window is None:
            window = MainWindow(application=self, service=self.service)
        window.present()


def run(argv: Sequence[str] | None = None) -> int:
    app = DashboardApplication()
    # GTK's main loop doesn't forward SIGINT by default on all platforms.
    GLib.unix_signal_add(GLib.PRIORITY_HIGH, signal.SIGINT, lambda: app.quit() or True)
    return app.run(argv)
