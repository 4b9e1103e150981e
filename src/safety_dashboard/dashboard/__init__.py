from .codecs import LAYOUT_KEY, SLOTS_KEY, UI_SCALE_KEY, safety_key
from .config import DashboardConfig, load_config_from_env
from .controller import DashboardController
from .db import open_db
from .kv_store import SqliteKeyValueStore
from .records import PersistedRecord

__all__ = [
    "DashboardConfig",
    "DashboardController",
    "LAYOUT_KEY",
    "PersistedRecord",
    "SLOTS_KEY",
    "SqliteKeyValueStore",
    "UI_SCALE_KEY",
    "load_config_from_env",
    "open_db",
    "safety_key",
]
