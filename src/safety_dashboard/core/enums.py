"""Enums for slots, panels, day statuses, and layout groups."""

from enum import StrEnum


class SlotKey(StrEnum):
    """The seven fixed positions of the dashboard grid.

    Values are the persisted key names, so they must never change.
    """

    LEFT_TOP = "leftTop"
    LEFT_BOTTOM = "leftBottom"
    CENTER_TOP = "centerTop"
    CENTER_MID = "centerMid"
    CENTER_BOTTOM = "centerBottom"
    RIGHT_TOP = "rightTop"
    RIGHT_BOTTOM = "rightBottom"


class PanelKey(StrEnum):
    """Content panels that can be placed in a slot."""

    SLOGAN = "slogan"
    SAFETY_DATA = "safetyData"
    ANNOUNCEMENTS = "announcements"
    CALENDAR = "calendar"
    STREAK = "streak"
    POLICY = "policy"
    POSTER = "poster"


class DayStatus(StrEnum):
    """Recorded outcome of a calendar day.  An unset day is ``None``."""

    SAFE = "safe"
    NEAR_MISS = "near_miss"
    ACCIDENT = "accident"


class Orientation(StrEnum):
    """Orientation of a splitter handle.

    A VERTICAL handle sits between columns and is dragged along the x axis;
    a HORIZONTAL handle sits between rows and is dragged along the y axis.
    """

    VERTICAL = "vertical"
    HORIZONTAL = "horizontal"


class LayoutGroup(StrEnum):
    """Proportion vectors that make up a layout (persisted key names)."""

    COLS = "cols"
    LEFT_ROWS = "leftRows"
    CENTER_ROWS = "centerRows"
    RIGHT_ROWS = "rightRows"


class RecordState(StrEnum):
    """Lifecycle of a persisted record."""

    UNLOADED = "unloaded"
    LOADING = "loading"
    VALID = "valid"
    FALLEN_BACK = "fallen_back"
    DIRTY = "dirty"
    SAVING = "saving"
