from dataclasses import dataclass, field, replace

from safety_dashboard.core.enums import DayStatus, LayoutGroup


@dataclass(frozen=True, slots=True)
class LayoutConfiguration:
    """Percent proportions of the grid.  Every vector sums to 100."""

    cols: tuple[float, float, float] = (25.0, 45.0, 30.0)
    left_rows: tuple[float, float] = (28.0, 72.0)
    center_rows: tuple[float, float, float] = (60.0, 18.0, 22.0)
    right_rows: tuple[float, float] = (34.0, 66.0)

    def group(self, group: LayoutGroup) -> tuple[float, ...]:
        return getattr(self, _GROUP_FIELDS[group])

    def with_group(self, group: LayoutGroup, values: tuple[float, ...]) -> "LayoutConfiguration":
        current = self.group(group)
        if len(values) != len(current):
            raise ValueError(
                f"{group} expects {len(current)} proportions, got {len(values)}"
            )
        return replace(self, **{_GROUP_FIELDS[group]: tuple(values)})


_GROUP_FIELDS = {
    LayoutGroup.COLS: "cols",
    LayoutGroup.LEFT_ROWS: "left_rows",
    LayoutGroup.CENTER_ROWS: "center_rows",
    LayoutGroup.RIGHT_ROWS: "right_rows",
}


@dataclass(frozen=True, slots=True)
class DayEntry:
    day: int  # 1-based day of month
    status: DayStatus | None = None


@dataclass(frozen=True, slots=True)
class MonthlyData:
    month: int  # 0-based month index, as persisted
    year: int
    days: tuple[DayEntry, ...] = ()


@dataclass(frozen=True, slots=True)
class Announcement:
    id: str
    text: str


@dataclass(frozen=True, slots=True)
class SafetyMetric:
    id: str
    label: str
    value: str
    unit: str = ""


@dataclass(frozen=True, slots=True)
class SafetyTrendRow:
    year: int
    first_aid: float = 0
    non_absent: float = 0
    absent: float = 0
    fire: float = 0
    ifr: float | None = None
    isr: float | None = None


@dataclass(frozen=True, slots=True)
class MonthSummary:
    safe: int = 0
    near_miss: int = 0
    accident: int = 0


@dataclass(frozen=True, slots=True)
class SafetyRecord:
    """Per-year safety dataset: the calendar plus the panel companions."""

    year: int
    monthly_data: tuple[MonthlyData, ...]
    announcements: tuple[Announcement, ...] = ()
    policy_poster: str | None = None
    poster_zoom: float = 1.0
    policy_title: str = "Safety Policy"
    policy_lines: tuple[str, ...] = ()
    slogan_th: str = ""
    slogan_en: str = ""
    metrics: tuple[SafetyMetric, ...] = ()
    trend_rows: tuple[SafetyTrendRow, ...] = field(default_factory=tuple)
