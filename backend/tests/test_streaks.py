"""
Tests for current and longest streaks.
"""
from datetime import date, datetime, timezone

from conftest import build_days, day_doc, strength
from liftledger.services.analytics.adapter import merge_workouts_into_days
from liftledger.services.analytics.streaks import (
    calculate_current_streak,
    calculate_longest_streak,
)


def _workout_days(*dates):
    return build_days(*(day_doc(d, strength("Bench", [(5, 100)])) for d in dates))


class TestCurrentStreak:

    def test_consecutive_days(self):
        days = _workout_days("2024-06-01", "2024-06-02")
        assert calculate_current_streak(days, today=date(2024, 6, 2)) == 2

    def test_gap_counts_trailing_run_only(self):
        days = _workout_days("2024-06-01", "2024-06-03")
        assert calculate_current_streak(days, today=date(2024, 6, 3)) == 1

    def test_anchored_to_today(self):
        # Nothing logged today yet: the streak is broken
        days = _workout_days("2024-06-01", "2024-06-02")
        assert calculate_current_streak(days, today=date(2024, 6, 3)) == 0

    def test_rest_day_keeps_streak(self):
        days = build_days(
            day_doc("2024-06-01", strength("Bench", [(5, 100)])),
            day_doc("2024-06-02", rest=True),
            day_doc("2024-06-03", strength("Bench", [(5, 100)])),
        )
        assert calculate_current_streak(days, today=date(2024, 6, 3)) == 3

    def test_empty_day_breaks_streak(self):
        days = build_days(
            day_doc("2024-06-01", strength("Bench", [(5, 100)])),
            day_doc("2024-06-02"),
            day_doc("2024-06-03", strength("Bench", [(5, 100)])),
        )
        assert calculate_current_streak(days, today=date(2024, 6, 3)) == 1

    def test_future_days_ignored(self):
        days = _workout_days("2024-06-02", "2024-06-03", "2024-06-05")
        assert calculate_current_streak(days, today=date(2024, 6, 3)) == 2

    def test_duplicate_dates_count_once(self):
        days = build_days(
            day_doc("2024-06-02", strength("Bench", [(5, 100)]), id="a"),
            day_doc("2024-06-02", strength("Squat", [(5, 140)]), id="b"),
        )
        assert calculate_current_streak(days, today=date(2024, 6, 2)) == 1

    def test_unordered_input(self):
        days = _workout_days("2024-06-03", "2024-06-01", "2024-06-02")
        assert calculate_current_streak(days, today=date(2024, 6, 3)) == 3

    def test_across_timezone_boundary(self, monkeypatch):
        from liftledger.core.config import settings
        monkeypatch.setattr(settings, "TIMEZONE", "America/New_York")

        # Both are evenings in New York but already the next day in UTC
        days = merge_workouts_into_days([
            {"ownerId": "u1", "date": datetime(2024, 6, 2, 1, 0, tzinfo=timezone.utc),
             "exercises": [strength("Bench", [(5, 100)])]},
            {"ownerId": "u1", "date": datetime(2024, 6, 3, 1, 0, tzinfo=timezone.utc),
             "exercises": [strength("Bench", [(5, 100)])]},
        ])
        assert sorted(d.date for d in days) == ["2024-06-01", "2024-06-02"]
        assert calculate_current_streak(days, today=date(2024, 6, 2)) == 2

    def test_empty(self):
        assert calculate_current_streak([], today=date(2024, 6, 2)) == 0


class TestLongestStreak:

    def test_longest_run_anywhere(self):
        days = _workout_days(
            "2024-01-01", "2024-01-02", "2024-01-03",
            "2024-02-10",
            "2024-03-01", "2024-03-02",
        )
        assert calculate_longest_streak(days) == 3

    def test_single_day(self):
        assert calculate_longest_streak(_workout_days("2024-01-01")) == 1

    def test_crosses_month_end(self):
        assert calculate_longest_streak(_workout_days("2024-02-28", "2024-02-29", "2024-03-01")) == 3

    def test_empty(self):
        assert calculate_longest_streak([]) == 0
