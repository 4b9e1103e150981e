from __future__ import annotations

import calendar
from typing import TYPE_CHECKING

import gi

gi.require_version("Gtk", "4.0")

from gi.repository import Gtk

from safety_dashboard.core.enums import DayStatus, PanelKey
from safety_dashboard.core.models import SafetyRecord
from safety_dashboard.core.safety import POSTER_ZOOM_MAX, POSTER_ZOOM_MIN
from safety_dashboard.ui_gtk.helpers import ScaledLabel, clear_children, iter_scaled_labels

if TYPE_CHECKING:
    from safety_dashboard.dashboard.controller import DashboardController

PANEL_TITLES = {
    PanelKey.SLOGAN: "Safety Slogan",
    PanelKey.SAFETY_DATA: "Safety Statistics",
    PanelKey.ANNOUNCEMENTS: "Announcements",
    PanelKey.CALENDAR: "Safety Calendar",
    PanelKey.STREAK: "Days Without Accident",
    PanelKey.POLICY: "Safety Policy",
    PanelKey.POSTER: "Policy Poster",
}

_STATUS_CLASSES = {
    DayStatus.SAFE: "day-safe",
    DayStatus.NEAR_MISS: "day-near-miss",
    DayStatus.ACCIDENT: "day-accident",
}

POSTER_ZOOM_STEP = 0.1


class PanelCard(Gtk.Box):
    """Renders one panel's content from the safety record."""

    def __init__(self, panel: PanelKey, service: DashboardController) -> None:
        super().__init__(orientation=Gtk.Orientation.VERTICAL, spacing=6)
        self.add_css_class("panel-card")
        self.set_hexpand(True)
        self.set_vexpand(True)
        self._panel = panel
        self._service = service
        self._scale = 1.0
        self._root_px = service.root_font_size()
        self.refresh()

    @property
    def panel(self) -> PanelKey:
        return self._panel

    def refresh(self) -> None:
        clear_children(self)
        header = ScaledLabel(PANEL_TITLES[self._panel], 17, css_class="panel-title")
        header.set_halign(Gtk.Align.START)
        self.append(header)

        record = self._service.get_safety_record()
        builder = getattr(self, f"_build_{self._panel.name.lower()}")
        builder(record)
        self.apply_scale(self._scale, self._root_px)

    def apply_scale(self, panel_scale: float, root_px: float) -> None:
        self._scale = panel_scale
        self._root_px = root_px
        for label in iter_scaled_labels(self):
            label.apply_scale(panel_scale, root_px)

    def _body(self, text: str, base_px: float = 15, css_class: str | None = None) -> ScaledLabel:
        label = ScaledLabel(text, base_px, css_class=css_class)
        label.set_halign(Gtk.Align.START)
        label.set_xalign(0)
        self.append(label)
        return label

    # -- Panels --------------------------------------------------------------

    def _build_slogan(self, record: SafetyRecord) -> None:
        self._body(record.slogan_th, 34, "slogan-th")
        self._body(record.slogan_en, 20, "slogan-en")

    def _build_safety_data(self, record: SafetyRecord) -> None:
        grid = Gtk.Grid(column_spacing=12, row_spacing=4)
        for row, metric in enumerate(record.metrics):
            label = ScaledLabel(metric.label, 14, css_class="metric-title")
            label.set_halign(Gtk.Align.START)
            value = ScaledLabel(f"{metric.value} {metric.unit}".strip(), 18, css_class="metric-value")
            value.set_halign(Gtk.Align.END)
            grid.attach(label, 0, row, 1, 1)
            grid.attach(value, 1, row, 1, 1)
        self.append(grid)
        for trend in record.trend_rows:
            self._body(
                f"{trend.year}: first aid {trend.first_aid:g} / non-absent {trend.non_absent:g}"
                f" / absent {trend.absent:g} / fire {trend.fire:g}",
                12,
                "trend-row",
            )

    def _build_announcements(self, record: SafetyRecord) -> None:
        for announcement in record.announcements:
            self._body(f"• {announcement.text}", 15, "announcement")

    def _build_calendar(self, record: SafetyRecord) -> None:
        now = self._service.now()
        month = now.month - 1 if now.year == record.year else 0
        summary = self._service.month_summary(month)

        nav = Gtk.Box(orientation=Gtk.Orientation.HORIZONTAL, spacing=6)
        previous = Gtk.Button(label="‹")
        previous.set_tooltip_text("Previous year")
        previous.connect("clicked", self._on_year_clicked, record.year - 1)
        following = Gtk.Button(label="›")
        following.set_tooltip_text("Next year")
        following.connect("clicked", self._on_year_clicked, record.year + 1)
        title = ScaledLabel(
            f"{calendar.month_name[month + 1]} {record.year}", 16, css_class="calendar-month"
        )
        title.set_hexpand(True)
        nav.append(previous)
        nav.append(title)
        nav.append(following)
        self.append(nav)

        grid = Gtk.Grid(column_spacing=2, row_spacing=2)
        grid.set_column_homogeneous(True)
        for entry in record.monthly_data[month].days:
            button = Gtk.Button(label=str(entry.day))
            button.add_css_class("day-cell")
            if entry.status is not None:
                button.add_css_class(_STATUS_CLASSES[entry.status])
            button.connect("clicked", self._on_day_clicked, month, entry.day)
            grid.attach(button, (entry.day - 1) % 7, (entry.day - 1) // 7, 1, 1)
        self.append(grid)
        self._body(
            f"Safe {summary.safe} · Near miss {summary.near_miss} · "
            f"Accident {summary.accident}",
            13,
            "calendar-summary",
        )

    def _on_day_clicked(self, _button: Gtk.Button, month: int, day: int) -> None:
        self._service.cycle_day_status(month, day)

    def _on_year_clicked(self, _button: Gtk.Button, year: int) -> None:
        self._service.switch_year(year)

    def _build_streak(self, record: SafetyRecord) -> None:
        streak = self._service.safety_streak()
        self._body(str(streak), 64, "streak-value")
        self._body("days" if streak != 1 else "day", 18, "streak-unit")

    def _build_policy(self, record: SafetyRecord) -> None:
        self._body(record.policy_title, 19, "policy-title")
        for line in record.policy_lines:
            self._body(line, 14, "policy-line")

    def _build_poster(self, record: SafetyRecord) -> None:
        if record.policy_poster is None:
            self._body("No poster", 14, "dim-label")
            return
        picture = Gtk.Picture.new_for_filename(record.policy_poster)
        picture.set_can_shrink(True)
        picture.set_vexpand(True)
        picture.set_size_request(-1, int(120 * record.poster_zoom))
        self.append(picture)

        controls = Gtk.Box(orientation=Gtk.Orientation.HORIZONTAL, spacing=4)
        zoom_out = Gtk.Button.new_from_icon_name("zoom-out-symbolic")
        zoom_out.set_sensitive(record.poster_zoom > POSTER_ZOOM_MIN)
        zoom_out.connect("clicked", self._on_zoom, -POSTER_ZOOM_STEP)
        zoom_in = Gtk.Button.new_from_icon_name("zoom-in-symbolic")
        zoom_in.set_sensitive(record.poster_zoom < POSTER_ZOOM_MAX)
        zoom_in.connect("clicked", self._on_zoom, POSTER_ZOOM_STEP)
        controls.append(zoom_out)
        controls.append(ScaledLabel(f"{round(record.poster_zoom * 100)}%", 13))
        controls.append(zoom_in)
        self.append(controls)

    def _on_zoom(self, _button: Gtk.Button, step: float) -> None:
        zoom = self._service.get_safety_record().poster_zoom
        self._service.set_poster_zoom(round(zoom + step, 2))
