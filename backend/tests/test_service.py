"""
Tests for the record source, summary cache and async analytics service.
"""
import asyncio
from datetime import date

import pytest

from conftest import build_days, cardio, day_doc, strength
from liftledger.models.day import Day, Modality
from liftledger.services.analytics.cache import SummaryCache, recordset_version
from liftledger.services.analytics.leaderboard import LeaderboardMetric
from liftledger.services.analytics.periods import LeaderboardPeriod, local_today
from liftledger.services.analytics.service import AnalyticsService
from liftledger.services.analytics.store import (
    InMemoryRecordSource,
    ListRecordsOptions,
    fetch_days_for_leaderboard,
)


class FailingSource(InMemoryRecordSource):
    """Refuses to read one user's days."""

    def __init__(self, forbidden, **kwargs):
        super().__init__(**kwargs)
        self.forbidden = forbidden

    async def list_records(self, user_id, options=None):
        if user_id == self.forbidden:
            raise PermissionError("missing permission")
        return await super().list_records(user_id, options)


@pytest.fixture
def source(example_days, catalog):
    return InMemoryRecordSource(days=example_days, exercises=catalog.values())


# ========================================
# Record source
# ========================================

class TestInMemoryRecordSource:

    def test_order_and_limit(self):
        source = InMemoryRecordSource(days=build_days(
            day_doc("2024-01-01"), day_doc("2024-01-03"), day_doc("2024-01-02"),
        ))
        newest = asyncio.run(source.list_records("userA", ListRecordsOptions(limit=2)))
        assert [d.date for d in newest] == ["2024-01-03", "2024-01-02"]

        oldest = asyncio.run(source.list_records("userA", ListRecordsOptions(order="asc")))
        assert [d.date for d in oldest] == ["2024-01-01", "2024-01-02", "2024-01-03"]

    def test_date_bounds(self):
        source = InMemoryRecordSource(days=build_days(
            day_doc("2024-01-01"), day_doc("2024-01-02"), day_doc("2024-01-03"),
        ))
        options = ListRecordsOptions(start_date="2024-01-02", end_date="2024-01-02")
        days = asyncio.run(source.list_records("userA", options))
        assert [d.date for d in days] == ["2024-01-02"]

    def test_same_day_replaced(self):
        source = InMemoryRecordSource()
        source.add_day(Day(date="2024-01-01", user_id="u1", notes="first"))
        source.add_day(Day(date="2024-01-01", user_id="u1", notes="second"))
        days = asyncio.run(source.list_records("u1"))
        assert [d.notes for d in days] == ["second"]

    def test_get_exercise(self, source):
        entry = asyncio.run(source.get_exercise("squat"))
        assert entry.name == "Back Squat"
        assert asyncio.run(source.get_exercise("missing")) is None


class TestFetchDaysForLeaderboard:

    def test_failed_user_gets_empty_list(self):
        source = FailingSource(
            forbidden="bob",
            days=build_days(
                day_doc("2024-01-01", strength("Bench", [(5, 100)]), user_id="ana"),
                day_doc("2024-01-01", strength("Bench", [(5, 100)]), user_id="bob"),
            ),
        )
        result = asyncio.run(fetch_days_for_leaderboard(source, ["ana", "bob"]))
        assert len(result["ana"]) == 1
        assert result["bob"] == []

    def test_limit_applied(self):
        source = InMemoryRecordSource(days=build_days(
            day_doc("2024-01-01", user_id="ana"),
            day_doc("2024-01-02", user_id="ana"),
        ))
        result = asyncio.run(fetch_days_for_leaderboard(source, ["ana"], limit=1))
        assert [d.date for d in result["ana"]] == ["2024-01-02"]

    def test_duplicate_ids_fetched_once(self):
        source = InMemoryRecordSource()
        result = asyncio.run(fetch_days_for_leaderboard(source, ["ana", "ana"]))
        assert list(result) == ["ana"]


# ========================================
# Cache
# ========================================

class TestSummaryCache:

    def test_get_set(self):
        cache = SummaryCache(ttl_minutes=5)
        cache.set("u1", "summary", "all", "v1", "value")
        assert cache.get("u1", "summary", "all", "v1") == "value"
        assert cache.get("u1", "summary", "all", "v2") is None

    def test_expired_entries(self):
        cache = SummaryCache(ttl_minutes=-1)
        cache.set("u1", "summary", "all", "v1", "value")
        assert cache.get("u1", "summary", "all", "v1") is None

        cache.set("u1", "summary", "week", "v1", "value")
        assert cache.cleanup_expired() == 1
        assert len(cache) == 0

    def test_invalidate_user(self):
        cache = SummaryCache()
        cache.set("u1", "summary", "all", "v1", 1)
        cache.set("u1", "cardio", "all", "v1", 2)
        cache.set("u2", "summary", "all", "v1", 3)
        assert cache.invalidate("u1") == 2
        assert len(cache) == 1

    def test_new_version_replaces_old(self):
        cache = SummaryCache()
        for version in range(50):
            cache.set("u1", "summary", "all", f"v{version}", version)
        assert len(cache) == 1
        assert cache.get("u1", "summary", "all", "v49") == 49
        assert cache.get("u1", "summary", "all", "v48") is None

    def test_other_slots_survive_a_store(self):
        cache = SummaryCache()
        cache.set("u1", "summary", "all", "v1", 1)
        cache.set("u1", "summary", "week", "v1", 2)
        cache.set("u2", "summary", "all", "v1", 3)
        cache.set("u1", "summary", "all", "v2", 4)
        assert len(cache) == 3
        assert cache.get("u1", "summary", "week", "v1") == 2

    def test_store_evicts_expired_entries(self):
        cache = SummaryCache(ttl_minutes=-1)
        cache.set("u1", "summary", "all", "v1", 1)
        cache.set("u2", "cardio", "week", "v1", 2)
        assert len(cache) == 1

    def test_version_tracks_edits(self):
        before = build_days(day_doc("2024-01-01", updatedAt="2024-01-01T10:00:00"))
        after = build_days(day_doc("2024-01-01", updatedAt="2024-01-01T11:00:00"))
        assert recordset_version(before) != recordset_version(after)
        assert recordset_version(before) == recordset_version(list(reversed(before)))


# ========================================
# Service
# ========================================

class TestAnalyticsService:

    def test_summary(self, source):
        service = AnalyticsService(source)
        summary = asyncio.run(service.get_summary("userA", today=date(2024, 1, 2)))
        assert summary.total_volume == 1000
        assert summary.current_streak == 2
        assert summary.favorite_exercise == "Bench"

    def test_summary_cached_per_version(self, source):
        service = AnalyticsService(source, SummaryCache())
        first = asyncio.run(service.get_summary("userA"))
        assert asyncio.run(service.get_summary("userA")) is first

        source.add_day(build_days(day_doc("2024-01-03", strength("Squat", [(5, 100)])))[0])
        refreshed = asyncio.run(service.get_summary("userA"))
        assert refreshed is not first
        assert refreshed.total_volume == 1500

    def test_cache_stays_bounded_while_logging(self, source):
        service = AnalyticsService(source, SummaryCache())
        for offset in range(3, 23):
            source.add_day(build_days(day_doc(f"2024-01-{offset:02d}", strength("Squat", [(5, 100)])))[0])
            asyncio.run(service.get_summary("userA"))
        assert len(service.cache) == 1

    def test_cache_slot_carries_local_date(self, source):
        service = AnalyticsService(source, SummaryCache())
        summary = asyncio.run(service.get_summary("userA"))
        version = recordset_version(asyncio.run(source.list_records("userA")))
        slot = f"all@{local_today().isoformat()}"
        assert service.cache.get("userA", "summary", slot, version) is summary
        assert service.cache.get("userA", "summary", "all", version) is None

    def test_cache_rolls_over_at_local_midnight(self, source, monkeypatch):
        import liftledger.services.analytics.service as service_module

        service = AnalyticsService(source, SummaryCache())
        monkeypatch.setattr(service_module, "local_today", lambda: date(2024, 1, 2))
        first = asyncio.run(service.get_summary("userA"))
        assert asyncio.run(service.get_summary("userA")) is first

        monkeypatch.setattr(service_module, "local_today", lambda: date(2024, 1, 3))
        assert asyncio.run(service.get_summary("userA")) is not first

    def test_strength_and_cardio(self, source):
        service = AnalyticsService(source)
        strength_view = asyncio.run(service.get_strength_analytics("userA"))
        cardio_view = asyncio.run(service.get_cardio_analytics("userA"))
        assert strength_view.total_volume == 1000
        assert cardio_view.average_pace == 360

    def test_personal_records(self, source):
        prs = asyncio.run(AnalyticsService(source).get_personal_records("userA"))
        assert {pr.pr_type.value for pr in prs} == {"maxWeight", "bestPace", "maxDistance"}

    def test_check_new_pr(self):
        source = InMemoryRecordSource(days=build_days(
            day_doc("2024-01-01", strength("Bench", [(5, 100)])),
            day_doc("2024-01-08", strength("Bench", [(5, 100)])),
        ))
        service = AnalyticsService(source)
        assert asyncio.run(service.check_new_pr("userA", "Bench", Modality.STRENGTH)) is True

    def test_last_exercise(self, source):
        service = AnalyticsService(source)
        last = asyncio.run(service.get_last_exercise("userA", "Run"))
        assert last.cardio.distance == 5
        assert asyncio.run(service.get_last_exercise("userA", "Deadlift")) is None

    def test_leaderboard(self):
        source = FailingSource(
            forbidden="cam",
            days=build_days(
                day_doc("2024-06-14", cardio("Run", 1800, 5), user_id="ana"),
                day_doc("2024-06-14", cardio("Run", 3600, 10), user_id="ben"),
                day_doc("2024-06-14", cardio("Run", 3600, 10), user_id="cam"),
            ),
        )
        service = AnalyticsService(source)
        entries = asyncio.run(service.get_leaderboard(
            ["ana", "ben", "cam"], LeaderboardMetric.CARDIO, LeaderboardPeriod.ALL,
        ))
        assert [(e.user_id, e.rank) for e in entries] == [("ben", 1), ("ana", 2)]
