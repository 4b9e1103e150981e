"""Shapes of the persisted JSON documents.

These describe what is written to storage.  Loaded payloads are untrusted and
go through :mod:`safety_dashboard.dashboard.validation` before they are
turned into models.
"""

from __future__ import annotations

from typing import Literal, TypedDict

DayStatusValue = Literal["safe", "near_miss", "accident"] | None


class DayDict(TypedDict):
    day: int
    status: DayStatusValue


class MonthDict(TypedDict):
    month: int  # 0-based
    year: int
    days: list[DayDict]


class LayoutRecordDict(TypedDict):
    cols: list[float]
    leftRows: list[float]
    centerRows: list[float]
    rightRows: list[float]


# Slot key -> panel key, all seven slots present.
SlotsRecordDict = dict[str, str]


class AnnouncementDict(TypedDict):
    id: str
    text: str


class MetricDict(TypedDict, total=False):
    id: str
    label: str
    value: str
    unit: str


class TrendRowDict(TypedDict, total=False):
    year: int
    firstAid: float
    nonAbsent: float
    absent: float
    fire: float
    ifr: float
    isr: float


class SafetyRecordDict(TypedDict):
    monthlyData: list[MonthDict]
    announcements: list[AnnouncementDict]
    policyPoster: str | None
    posterZoom: float
    policyTitle: str
    policyLines: list[str]
    sloganTh: str
    sloganEn: str
    metrics: list[MetricDict]
    trendRows: list[TrendRowDict]
