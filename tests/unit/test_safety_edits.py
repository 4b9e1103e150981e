from __future__ import annotations

import pytest

from safety_dashboard.core import safety
from safety_dashboard.core.enums import DayStatus
from safety_dashboard.core.models import SafetyMetric, SafetyTrendRow


@pytest.fixture()
def record():
    return safety.default_safety_record(2026)


def test_default_record(record) -> None:
    assert record.year == 2026
    assert len(record.monthly_data) == 12
    assert record.policy_poster == safety.DEFAULT_POSTER_URL
    assert record.poster_zoom == 1.0
    assert [row.year for row in record.trend_rows] == [2022, 2023, 2024, 2025, 2026]


def test_cycle_day_status(record) -> None:
    once = safety.cycle_day_status(record, 0, 5)
    twice = safety.cycle_day_status(once, 0, 5)
    assert once.monthly_data[0].days[4].status == DayStatus.SAFE
    assert twice.monthly_data[0].days[4].status == DayStatus.NEAR_MISS
    assert safety.cycle_day_status(record, 0, 40) is record


def test_set_day_status_unchanged_is_identity(record) -> None:
    assert safety.set_day_status(record, 2, 1, None) is record


def test_update_slogan_blank_keeps_current(record) -> None:
    updated = safety.update_slogan(record, "  ", "Think Safe")
    assert updated.slogan_th == record.slogan_th
    assert updated.slogan_en == "Think Safe"
    assert safety.update_slogan(record, "", "") is record


def test_update_policy_trims_and_drops_empty_lines(record) -> None:
    updated = safety.update_policy(record, " Policy 2026 ", ["  Wear PPE ", "", "   ", "Report"])
    assert updated.policy_title == "Policy 2026"
    assert updated.policy_lines == ("Wear PPE", "Report")

    kept = safety.update_policy(record, "", ["", " "])
    assert kept is record


def test_announcements(record) -> None:
    added, announcement_id = safety.add_announcement(record, "Drill on Friday")
    assert announcement_id.startswith("ann-")
    assert added.announcements[0].text == "Drill on Friday"
    assert len(added.announcements) == len(record.announcements) + 1

    edited = safety.edit_announcement(added, announcement_id, "  Drill moved  ")
    assert edited.announcements[0].text == "Drill moved"
    assert safety.edit_announcement(edited, announcement_id, "   ") is edited

    deleted = safety.delete_announcement(edited, announcement_id)
    assert deleted.announcements == record.announcements
    assert safety.delete_announcement(deleted, "missing") is deleted


def test_replace_metrics(record) -> None:
    metrics = [
        SafetyMetric(id="x", label="LTI", value="0", unit="case"),
        SafetyMetric(id="y", label="Near misses", value="3"),
    ]
    updated = safety.replace_metrics(record, metrics)
    assert updated.metrics[0].label == "LTI"
    assert updated.metrics[1].unit == ""


def test_save_trend_rows_sorts_and_dedups(record) -> None:
    rows = [
        SafetyTrendRow(year=2025, first_aid=1),
        SafetyTrendRow(year=2023),
        SafetyTrendRow(year=2025, first_aid=9),
    ]
    updated = safety.save_trend_rows(record, rows)
    assert [row.year for row in updated.trend_rows] == [2023, 2025]
    assert updated.trend_rows[1].first_aid == 1


def test_save_trend_rows_coerces_bad_numbers(record) -> None:
    rows = [SafetyTrendRow(year=2026, first_aid=float("nan"), fire="3")]  # type: ignore[arg-type]
    updated = safety.save_trend_rows(record, rows)
    assert updated.trend_rows[0].first_aid == 0
    assert updated.trend_rows[0].fire == 3.0


def test_save_trend_rows_empty_uses_default_window(record) -> None:
    updated = safety.save_trend_rows(record, [])
    assert updated.trend_rows == safety.default_trend_rows(2026)


def test_poster_zoom_clamped_and_reset_by_new_poster(record) -> None:
    assert safety.set_poster_zoom(record, 3.0).poster_zoom == safety.POSTER_ZOOM_MAX
    assert safety.set_poster_zoom(record, 0.1).poster_zoom == safety.POSTER_ZOOM_MIN

    zoomed = safety.set_poster_zoom(record, 1.8)
    replaced = safety.set_poster(zoomed, "/uploads/poster-2026.png")
    assert replaced.policy_poster == "/uploads/poster-2026.png"
    assert replaced.poster_zoom == 1.0

    removed = safety.set_poster(replaced, None)
    assert removed.policy_poster is None
