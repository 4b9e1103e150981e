from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from safety_dashboard.core.safety_calendar import AUTO_SAFE_HOUR


@dataclass(slots=True)
class DashboardConfig:
    layout_debounce_ms: int = 250
    safety_debounce_ms: int = 450
    auto_safe_hour: int = AUTO_SAFE_HOUR
    start_locked: bool = True
    db_path: Path | None = None
    use_mock_storage: bool = False

    def to_log_string(self) -> str:
        return (
            f"layout_debounce_ms={self.layout_debounce_ms} "
            f"safety_debounce_ms={self.safety_debounce_ms} "
            f"auto_safe_hour={self.auto_safe_hour} start_locked={self.start_locked} "
            f"db_path={self.db_path or '<default>'} use_mock_storage={self.use_mock_storage}"
        )


def _env_int(name: str, default: int) -> int:
    value = os.environ.get(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _env_bool(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_path(name: str) -> Path | None:
    value = os.environ.get(name, "").strip()
    return Path(value).expanduser() if value else None


def load_config_from_env() -> DashboardConfig:
    hour = _env_int("SAFETY_DASHBOARD_AUTO_SAFE_HOUR", AUTO_SAFE_HOUR)
    if not 0 <= hour <= 23:
        hour = AUTO_SAFE_HOUR
    return DashboardConfig(
        layout_debounce_ms=max(0, _env_int("SAFETY_DASHBOARD_LAYOUT_DEBOUNCE_MS", 250)),
        safety_debounce_ms=max(0, _env_int("SAFETY_DASHBOARD_SAFETY_DEBOUNCE_MS", 450)),
        auto_safe_hour=hour,
        start_locked=_env_bool("SAFETY_DASHBOARD_LOCKED", True),
        db_path=_env_path("SAFETY_DASHBOARD_DB"),
        use_mock_storage=_env_bool("SAFETY_DASHBOARD_MOCK", False),
    )
