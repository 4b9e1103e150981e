from __future__ import annotations

import os
from pathlib import Path

APP_NAME = "safety-dashboard"


def xdg_state_home() -> Path:
    """Return XDG_STATE_HOME or default ~/.local/state"""
    return Path(os.environ.get("XDG_STATE_HOME", Path.home() / ".local" / "state"))


def state_dir() -> Path:
    """Return the app state directory (XDG_STATE_HOME/safety-dashboard)"""
    return xdg_state_home() / APP_NAME


def db_path() -> Path:
    """Return the path to the SQLite database holding the persisted records."""
    return state_dir() / "dashboard.db"
