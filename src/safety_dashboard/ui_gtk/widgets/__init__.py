from .dashboard_grid import DashboardGrid, SplitterHandle
from .dashboard_slot import DashboardSlot
from .panel_card import PanelCard

__all__ = [
    "DashboardGrid",
    "DashboardSlot",
    "PanelCard",
    "SplitterHandle",
]
