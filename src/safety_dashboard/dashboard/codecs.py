"""Conversion between models and the persisted JSON documents.

``decode_*`` functions return ``None`` when a payload fails validation, so a
record either loads completely or not at all.
"""

from __future__ import annotations

import logging
from typing import Any

from safety_dashboard.core.enums import DayStatus, LayoutGroup, SlotKey
from safety_dashboard.core.models import (
    Announcement,
    DayEntry,
    LayoutConfiguration,
    MonthlyData,
    SafetyMetric,
    SafetyRecord,
    SafetyTrendRow,
)
from safety_dashboard.core.proportions import GROUP_FLOORS, clamp, meets_floor, normalize
from safety_dashboard.core.safety import (
    DEFAULT_ANNOUNCEMENTS,
    DEFAULT_METRICS,
    DEFAULT_POLICY_LINES,
    DEFAULT_POLICY_TITLE,
    DEFAULT_POSTER_URL,
    DEFAULT_SLOGAN_EN,
    DEFAULT_SLOGAN_TH,
    POSTER_ZOOM_MAX,
    POSTER_ZOOM_MIN,
    default_trend_rows,
)
from safety_dashboard.core.scale import clamp_ui_scale
from safety_dashboard.core.slots import SlotAssignment
from safety_dashboard.core.types import LayoutRecordDict, SafetyRecordDict, SlotsRecordDict

from .validation import (
    is_finite_number,
    is_valid_layout,
    is_valid_monthly_data,
    is_valid_slots,
    is_valid_trend_rows,
    is_valid_ui_scale,
)

logger = logging.getLogger(__name__)

# Bump the suffix whenever the stored shape changes incompatibly.
LAYOUT_KEY = "safety-dashboard-layout-v7"
SLOTS_KEY = "safety-dashboard-slots-v4"
UI_SCALE_KEY = "safety-dashboard-ui-scale"


def safety_key(year: int) -> str:
    return f"safety-dashboard-{year}"


# -- Layout ------------------------------------------------------------------


def encode_layout(layout: LayoutConfiguration) -> LayoutRecordDict:
    return {
        "cols": list(layout.cols),
        "leftRows": list(layout.left_rows),
        "centerRows": list(layout.center_rows),
        "rightRows": list(layout.right_rows),
    }


def decode_layout(data: Any) -> LayoutConfiguration | None:
    if not is_valid_layout(data):
        return None
    layout = LayoutConfiguration()
    for group in LayoutGroup:
        values = [float(v) for v in data[group.value]]
        if not all(v >= 0 for v in values) or sum(values) <= 0:
            return None
        normalized = normalize(values)
        if not meets_floor(normalized, GROUP_FLOORS[group]):
            logger.warning(
                "Stored %s %s is below its %.0f%% floor", group, values, GROUP_FLOORS[group]
            )
            return None
        try:
            layout = layout.with_group(group, normalized)
        except ValueError:
            return None
    return layout


# -- Slots -------------------------------------------------------------------


def encode_slots(slots: SlotAssignment) -> SlotsRecordDict:
    return slots.as_dict()


def decode_slots(data: Any) -> SlotAssignment | None:
    if not is_valid_slots(data):
        return None
    assignment = SlotAssignment({slot: data[slot.value] for slot in SlotKey})
    if not assignment.is_bijective():
        logger.warning("Stored slot assignment repeats a panel: %s", assignment.as_dict())
    return assignment


# -- UI scale ----------------------------------------------------------------


def encode_ui_scale(value: float) -> float:
    return value


def decode_ui_scale(data: Any) -> float | None:
    if not is_valid_ui_scale(data):
        return None
    return clamp_ui_scale(float(data))


# -- Safety record -----------------------------------------------------------


def _encode_trend_row(row: SafetyTrendRow) -> dict[str, Any]:
    encoded: dict[str, Any] = {
        "year": row.year,
        "firstAid": row.first_aid,
        "nonAbsent": row.non_absent,
        "absent": row.absent,
        "fire": row.fire,
    }
    if row.ifr is not None:
        encoded["ifr"] = row.ifr
    if row.isr is not None:
        encoded["isr"] = row.isr
    return encoded


def encode_safety_record(record: SafetyRecord) -> SafetyRecordDict:
    return {
        "monthlyData": [
            {
                "month": month.month,
                "year": month.year,
                "days": [
                    {"day": entry.day, "status": None if entry.status is None else str(entry.status)}
                    for entry in month.days
                ],
            }
            for month in record.monthly_data
        ],
        "announcements": [{"id": a.id, "text": a.text} for a in record.announcements],
        "policyPoster": record.policy_poster,
        "posterZoom": record.poster_zoom,
        "policyTitle": record.policy_title,
        "policyLines": list(record.policy_lines),
        "sloganTh": record.slogan_th,
        "sloganEn": record.slogan_en,
        "metrics": [
            {"id": m.id, "label": m.label, "value": m.value, "unit": m.unit} for m in record.metrics
        ],
        "trendRows": [_encode_trend_row(row) for row in record.trend_rows],
    }


def _decode_months(data: list[dict[str, Any]], year: int) -> tuple[MonthlyData, ...]:
    return tuple(
        MonthlyData(
            month=month["month"],
            year=year,
            days=tuple(
                DayEntry(
                    day=entry["day"],
                    status=None if entry.get("status") is None else DayStatus(entry["status"]),
                )
                for entry in month["days"]
            ),
        )
        for month in data
    )


def _non_empty_list(value: Any) -> bool:
    return isinstance(value, list) and len(value) > 0


def _decode_announcements(value: Any) -> tuple[Announcement, ...]:
    if not _non_empty_list(value):
        return DEFAULT_ANNOUNCEMENTS
    try:
        return tuple(Announcement(id=str(a["id"]), text=str(a["text"])) for a in value)
    except (KeyError, TypeError):
        return DEFAULT_ANNOUNCEMENTS


def _decode_metrics(value: Any) -> tuple[SafetyMetric, ...]:
    if not _non_empty_list(value):
        return DEFAULT_METRICS
    try:
        return tuple(
            SafetyMetric(
                id=str(m["id"]),
                label=str(m.get("label", "")),
                value=str(m.get("value", "")),
                unit=str(m.get("unit") or ""),
            )
            for m in value
        )
    except (KeyError, TypeError, AttributeError):
        return DEFAULT_METRICS


def _optional_number(value: Any) -> float | None:
    return None if value is None else float(value)


def _decode_trend_rows(value: Any, year: int) -> tuple[SafetyTrendRow, ...]:
    if not is_valid_trend_rows(value):
        return default_trend_rows(year)
    try:
        return tuple(
            SafetyTrendRow(
                year=int(float(row["year"])),
                first_aid=float(row["firstAid"]),
                non_absent=float(row["nonAbsent"]),
                absent=float(row["absent"]),
                fire=float(row["fire"]),
                ifr=_optional_number(row.get("ifr")),
                isr=_optional_number(row.get("isr")),
            )
            for row in value
        )
    except (TypeError, ValueError, OverflowError):
        return default_trend_rows(year)


def _decode_poster(data: dict[str, Any]) -> str | None:
    # An explicit null means the poster was removed; a missing key means never set.
    if "policyPoster" not in data:
        return DEFAULT_POSTER_URL
    poster = data["policyPoster"]
    return poster if isinstance(poster, str) else None


def _string(value: Any, default: str) -> str:
    return value if isinstance(value, str) else default


def decode_safety_record(data: Any, year: int) -> SafetyRecord | None:
    """Decode a stored safety record for *year*.

    The calendar must pass validation or the whole record is rejected.  The
    companion fields are sanitised one by one, falling back to their defaults.
    """
    if not isinstance(data, dict) or not is_valid_monthly_data(data.get("monthlyData"), year):
        return None

    zoom = data.get("posterZoom")
    poster_zoom = (
        clamp(float(zoom), POSTER_ZOOM_MIN, POSTER_ZOOM_MAX)
        if is_finite_number(zoom)
        else 1.0
    )
    policy_lines = data.get("policyLines")
    return SafetyRecord(
        year=year,
        monthly_data=_decode_months(data["monthlyData"], year),
        announcements=_decode_announcements(data.get("announcements")),
        policy_poster=_decode_poster(data),
        poster_zoom=poster_zoom,
        policy_title=_string(data.get("policyTitle"), DEFAULT_POLICY_TITLE),
        policy_lines=(
            tuple(str(line) for line in policy_lines)
            if _non_empty_list(policy_lines)
            else DEFAULT_POLICY_LINES
        ),
        slogan_th=_string(data.get("sloganTh"), DEFAULT_SLOGAN_TH),
        slogan_en=_string(data.get("sloganEn"), DEFAULT_SLOGAN_EN),
        metrics=_decode_metrics(data.get("metrics")),
        trend_rows=_decode_trend_rows(data.get("trendRows"), year),
    )
