"""Default safety dataset and the edits the panels make to it.

Every function takes a :class:`SafetyRecord` and returns a new one, or the
same object when the edit changes nothing.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Iterable, Sequence
from uuid import uuid4

from safety_dashboard.core.enums import DayStatus
from safety_dashboard.core.models import (
    Announcement,
    SafetyMetric,
    SafetyRecord,
    SafetyTrendRow,
)
from safety_dashboard.core.proportions import clamp
from safety_dashboard.core.safety_calendar import create_year_data, next_day_status, with_day_status

DEFAULT_ANNOUNCEMENTS = (
    Announcement(id="1", text="PPE Audit ประจำสัปดาห์ทุกวันพฤหัสบดี เวลา 09:00 น."),
    Announcement(id="2", text="Emergency Drill ไตรมาสนี้กำหนดวันที่ 28 มีนาคม 2026"),
)
DEFAULT_POLICY_TITLE = "Safety Policy"
DEFAULT_POLICY_LINES = (
    "ปฏิบัติตามกฎความปลอดภัยและสวม PPE ก่อนเข้าพื้นที่ผลิต",
    "แจ้ง Near Miss / Unsafe Condition ทันทีเมื่อพบความเสี่ยง",
    "หยุดงานทันทีเมื่อพบสภาพไม่ปลอดภัย (Stop Work Authority)",
    "ทุกคนมีส่วนร่วมรักษา Zero Accident Workplace",
)
DEFAULT_METRICS = (
    SafetyMetric(id="m1", label="First Aid", value="0", unit="case"),
    SafetyMetric(id="m2", label="Non-Absent", value="0", unit="case"),
    SafetyMetric(id="m3", label="Absent", value="0", unit="case"),
    SafetyMetric(id="m4", label="Fire", value="0", unit="case"),
    SafetyMetric(id="m5", label="IFR", value="0", unit=""),
    SafetyMetric(id="m6", label="ISR", value="1.2", unit=""),
)
DEFAULT_SLOGAN_TH = "ความปลอดภัย เริ่มที่ตัวเรา"
DEFAULT_SLOGAN_EN = "Safety Starts With Me"
DEFAULT_POSTER_URL = "/company-policy-poster.png"
NEW_ANNOUNCEMENT_TEXT = "New announcement..."

POSTER_ZOOM_MIN = 0.5
POSTER_ZOOM_MAX = 2.5
TREND_WINDOW_YEARS = 5


def default_trend_rows(year: int) -> tuple[SafetyTrendRow, ...]:
    """Five-year window ending at *year*."""
    first = year - TREND_WINDOW_YEARS + 1
    return tuple(
        SafetyTrendRow(year=y, ifr=0, isr=0) for y in range(first, year + 1)
    )


def default_safety_record(year: int) -> SafetyRecord:
    return SafetyRecord(
        year=year,
        monthly_data=create_year_data(year),
        announcements=DEFAULT_ANNOUNCEMENTS,
        policy_poster=DEFAULT_POSTER_URL,
        poster_zoom=1.0,
        policy_title=DEFAULT_POLICY_TITLE,
        policy_lines=DEFAULT_POLICY_LINES,
        slogan_th=DEFAULT_SLOGAN_TH,
        slogan_en=DEFAULT_SLOGAN_EN,
        metrics=DEFAULT_METRICS,
        trend_rows=default_trend_rows(year),
    )


def _changed(record: SafetyRecord, **changes: object) -> SafetyRecord:
    if all(getattr(record, name) == value for name, value in changes.items()):
        return record
    return replace(record, **changes)


def set_day_status(
    record: SafetyRecord, month: int, day: int, status: DayStatus | None
) -> SafetyRecord:
    months = with_day_status(record.monthly_data, month, day, status)
    if months is record.monthly_data:
        return record
    return replace(record, monthly_data=months)


def cycle_day_status(record: SafetyRecord, month: int, day: int) -> SafetyRecord:
    if not 0 <= month < len(record.monthly_data):
        return record
    days = record.monthly_data[month].days
    if not 1 <= day <= len(days):
        return record
    return set_day_status(record, month, day, next_day_status(days[day - 1].status))


def update_slogan(record: SafetyRecord, slogan_th: str, slogan_en: str) -> SafetyRecord:
    """Blank drafts keep the current text."""
    return _changed(
        record,
        slogan_th=slogan_th.strip() or record.slogan_th,
        slogan_en=slogan_en.strip() or record.slogan_en,
    )


def update_policy(record: SafetyRecord, title: str, lines: Iterable[str]) -> SafetyRecord:
    cleaned = tuple(line.strip() for line in lines if line.strip())
    return _changed(
        record,
        policy_title=title.strip() or record.policy_title,
        policy_lines=cleaned or record.policy_lines,
    )


def add_announcement(
    record: SafetyRecord, text: str = NEW_ANNOUNCEMENT_TEXT
) -> tuple[SafetyRecord, str]:
    """Prepend an announcement and return the updated record with its id."""
    announcement_id = f"ann-{uuid4().hex[:12]}"
    announcement = Announcement(id=announcement_id, text=text)
    return replace(record, announcements=(announcement, *record.announcements)), announcement_id


def edit_announcement(record: SafetyRecord, announcement_id: str, text: str) -> SafetyRecord:
    stripped = text.strip()
    if not stripped:
        return record
    announcements = tuple(
        replace(a, text=stripped) if a.id == announcement_id else a
        for a in record.announcements
    )
    return _changed(record, announcements=announcements)


def delete_announcement(record: SafetyRecord, announcement_id: str) -> SafetyRecord:
    announcements = tuple(a for a in record.announcements if a.id != announcement_id)
    return _changed(record, announcements=announcements)


def replace_metrics(record: SafetyRecord, metrics: Sequence[SafetyMetric]) -> SafetyRecord:
    return _changed(record, metrics=tuple(metrics))


def _number(value: object) -> float:
    try:
        number = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError, OverflowError):
        return 0
    return number if number == number else 0  # NaN


def save_trend_rows(record: SafetyRecord, rows: Sequence[SafetyTrendRow]) -> SafetyRecord:
    """Sort rows by year and drop later duplicates of the same year."""
    coerced = sorted(
        (
            replace(
                row,
                year=int(row.year),
                first_aid=_number(row.first_aid),
                non_absent=_number(row.non_absent),
                absent=_number(row.absent),
                fire=_number(row.fire),
            )
            for row in rows
        ),
        key=lambda row: row.year,
    )
    deduped: list[SafetyTrendRow] = []
    for row in coerced:
        if not deduped or deduped[-1].year != row.year:
            deduped.append(row)
    return _changed(record, trend_rows=tuple(deduped) or default_trend_rows(record.year))


def set_poster(record: SafetyRecord, poster: str | None) -> SafetyRecord:
    """Replace the poster image; zoom goes back to 1."""
    return _changed(record, policy_poster=poster, poster_zoom=1.0)


def set_poster_zoom(record: SafetyRecord, zoom: float) -> SafetyRecord:
    return _changed(record, poster_zoom=clamp(zoom, POSTER_ZOOM_MIN, POSTER_ZOOM_MAX))
