from .enums import DayStatus, LayoutGroup, Orientation, PanelKey, RecordState, SlotKey
from .models import (
    Announcement,
    DayEntry,
    LayoutConfiguration,
    MonthlyData,
    MonthSummary,
    SafetyMetric,
    SafetyRecord,
    SafetyTrendRow,
)
from .proportions import GROUP_FLOORS, normalize
from .resize import ResizeController, ResizeSession
from .scale import ScaleTracker, panel_scale, root_scale
from .services import Clock, DashboardService, KeyValueStorage, Scheduler, StorageError
from .slots import DEFAULT_SLOTS, SlotAssignment, can_accept_drop, swap_slots

__all__ = [
    "Announcement",
    "Clock",
    "DEFAULT_SLOTS",
    "DashboardService",
    "DayEntry",
    "DayStatus",
    "GROUP_FLOORS",
    "KeyValueStorage",
    "LayoutConfiguration",
    "LayoutGroup",
    "MonthSummary",
    "MonthlyData",
    "Orientation",
    "PanelKey",
    "RecordState",
    "ResizeController",
    "ResizeSession",
    "SafetyMetric",
    "SafetyRecord",
    "SafetyTrendRow",
    "ScaleTracker",
    "Scheduler",
    "SlotAssignment",
    "SlotKey",
    "StorageError",
    "can_accept_drop",
    "normalize",
    "panel_scale",
    "root_scale",
    "swap_slots",
]
