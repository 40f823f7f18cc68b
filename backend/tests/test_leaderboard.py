"""
Tests for leaderboard ranking.
"""
import pytest

from conftest import build_days, cardio, day_doc, strength
from liftledger.services.analytics.leaderboard import (
    LeaderboardMetric,
    assign_ranks,
    get_cardio_distance_leaderboard,
    get_consistency_leaderboard,
    get_volume_leaderboard,
    group_days_by_user_id,
    rank_leaderboard,
)
from liftledger.services.analytics.periods import LeaderboardPeriod


@pytest.fixture
def board(now):
    """Three lifters and one runner; now is 2024-06-15."""
    return group_days_by_user_id(build_days(
        day_doc("2024-06-14", strength("Bench", [(10, 100)]), user_id="ana"),
        day_doc("2024-06-13", strength("Squat", [(5, 200)]), user_id="ben"),
        day_doc("2024-06-14", strength("Deadlift", [(5, 100)]), user_id="cam"),
        day_doc("2024-05-01", strength("Deadlift", [(5, 500)]), user_id="cam"),
        day_doc("2024-06-12", cardio("Run", 1800, 5), user_id="dee"),
        day_doc("2024-06-14", rest=True, user_id="dee"),
    ))


class TestRanking:

    def test_competition_ranks(self):
        entries = assign_ranks({"a": 10, "b": 10, "c": 5, "d": 5, "e": 1})
        assert [(e.user_id, e.rank) for e in entries] == [
            ("a", 1), ("b", 1), ("c", 3), ("d", 3), ("e", 5),
        ]

    def test_ties_keep_input_order(self):
        entries = assign_ranks({"z": 3, "a": 3})
        assert [e.user_id for e in entries] == ["z", "a"]

    def test_empty(self):
        assert assign_ranks({}) == []


class TestVolumeLeaderboard:

    def test_seven_days(self, board, now):
        entries = get_volume_leaderboard(board, LeaderboardPeriod.SEVEN_DAYS, now=now)
        assert [(e.user_id, e.value, e.rank) for e in entries] == [
            ("ana", 1000, 1),
            ("ben", 1000, 1),
            ("cam", 500, 3),
        ]

    def test_all_time(self, board, now):
        entries = get_volume_leaderboard(board, LeaderboardPeriod.ALL, now=now)
        assert entries[0].user_id == "cam"
        assert entries[0].value == 3000

    def test_user_without_records_excluded(self, board, now):
        entries = get_volume_leaderboard(board, "7days", now=now)
        assert "dee" not in {e.user_id for e in entries}


class TestCardioLeaderboard:

    def test_only_runner_listed(self, board, now):
        entries = get_cardio_distance_leaderboard(board, LeaderboardPeriod.THIRTY_DAYS, now=now)
        assert [(e.user_id, e.value, e.rank) for e in entries] == [("dee", 5, 1)]


class TestConsistencyLeaderboard:

    def test_rest_days_count(self, board, now):
        entries = get_consistency_leaderboard(board, LeaderboardPeriod.SEVEN_DAYS, now=now)
        values = {e.user_id: e.value for e in entries}
        assert values["dee"] == 2
        assert values["ana"] == 1

    def test_window_excludes_old_days(self, board, now):
        entries = get_consistency_leaderboard(board, LeaderboardPeriod.SEVEN_DAYS, now=now)
        assert {e.user_id: e.value for e in entries}["cam"] == 1


class TestRankLeaderboard:

    def test_metric_from_string(self, board, now):
        entries = rank_leaderboard(board, "volume", LeaderboardPeriod.ALL, now=now)
        assert entries == get_volume_leaderboard(board, LeaderboardPeriod.ALL, now=now)

    def test_unknown_metric_raises(self, board):
        with pytest.raises(ValueError):
            rank_leaderboard(board, "calories")

    def test_user_with_no_days_excluded(self, now):
        entries = rank_leaderboard({"ghost": []}, LeaderboardMetric.CONSISTENCY, now=now)
        assert entries == []

    def test_input_not_mutated(self, board, now):
        sizes = {user: len(days) for user, days in board.items()}
        rank_leaderboard(board, LeaderboardMetric.VOLUME, LeaderboardPeriod.SEVEN_DAYS, now=now)
        assert {user: len(days) for user, days in board.items()} == sizes


class TestGroupDays:

    def test_groups_in_first_seen_order(self):
        days = build_days(
            day_doc("2024-01-01", user_id="b"),
            day_doc("2024-01-01", user_id="a"),
            day_doc("2024-01-02", user_id="b"),
        )
        grouped = group_days_by_user_id(days)
        assert list(grouped) == ["b", "a"]
        assert len(grouped["b"]) == 2
