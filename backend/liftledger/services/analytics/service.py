"""
Analytics Service - Caller-side facade over the pure analytics pipeline.

Fetches day records from a RecordSource, runs the calculators and caches
results per recordset version. All I/O lives here; everything it calls in
the analytics core is synchronous and side-effect free.
"""
from datetime import date, datetime
from typing import Dict, List, Optional, Sequence

from liftledger.core.logging import get_logger
from liftledger.models.catalog import ExerciseCatalogEntry
from liftledger.models.day import Day, ExerciseEntry, Modality
from liftledger.models.stats import (
    AnalyticsSummary,
    CardioAnalytics,
    ExercisePR,
    LeaderboardEntry,
    StrengthAnalytics,
)
from liftledger.services.analytics.cache import SummaryCache, recordset_version
from liftledger.services.analytics.calculator import (
    get_analytics_summary,
    get_cardio_analytics,
    get_strength_analytics,
)
from liftledger.services.analytics.leaderboard import LeaderboardMetric, rank_leaderboard
from liftledger.services.analytics.periods import (
    LeaderboardPeriod,
    TimePeriod,
    filter_days_by_period,
    local_today,
)
from liftledger.services.analytics.records import (
    exercise_history_for,
    find_all_prs,
    get_last_exercise,
    is_new_pr,
)
from liftledger.services.analytics.store import RecordSource

logger = get_logger(__name__)


def _slot(period: TimePeriod) -> str:
    """Cache slot for a live-clock view; rolls over at local midnight."""
    return f"{period.value}@{local_today().isoformat()}"


class AnalyticsService:
    """
    Async analytics for one record source.

    Summary, strength and cardio views are cached; "now"-sensitive inputs
    (``today``/``now`` overrides) bypass the cache.
    """

    def __init__(self, source: RecordSource, cache: Optional[SummaryCache] = None):
        """
        Initialize the service.

        Args:
            source: Where day records and the exercise catalog come from
            cache: Result cache; a fresh one is created when omitted
        """
        self.source = source
        self.cache = cache if cache is not None else SummaryCache()

    async def get_catalog(self) -> Dict[str, ExerciseCatalogEntry]:
        entries = await self.source.get_all_exercises()
        return {entry.id: entry for entry in entries}

    async def _days(self, user_id: str) -> List[Day]:
        return await self.source.list_records(user_id)

    async def get_summary(
        self,
        user_id: str,
        period: TimePeriod = TimePeriod.ALL,
        today: Optional[date] = None
    ) -> AnalyticsSummary:
        """
        Overview summary for a user.

        Args:
            user_id: User to summarise
            period: Window applied before summarising
            today: Local date override for the window and current streak

        Returns:
            AnalyticsSummary
        """
        period = TimePeriod(period)
        days = await self._days(user_id)
        version = recordset_version(days)
        slot = _slot(period)

        if today is None:
            cached = self.cache.get(user_id, "summary", slot, version)
            if cached is not None:
                logger.debug("Summary cache hit", user_id=user_id, period=period.value)
                return cached

        now = datetime.combine(today, datetime.min.time()) if today else None
        scoped = filter_days_by_period(days, period, now=now)
        catalog = await self.get_catalog()
        summary = get_analytics_summary(scoped, catalog, today=today)

        if today is None:
            self.cache.set(user_id, "summary", slot, version, summary)

        logger.info("Summary computed", user_id=user_id, period=period.value, days=len(scoped))
        return summary

    async def get_strength_analytics(
        self,
        user_id: str,
        period: TimePeriod = TimePeriod.ALL,
        now: Optional[datetime] = None
    ) -> StrengthAnalytics:
        period = TimePeriod(period)
        days = await self._days(user_id)
        version = recordset_version(days)
        slot = _slot(period)

        if now is None:
            cached = self.cache.get(user_id, "strength", slot, version)
            if cached is not None:
                return cached

        catalog = await self.get_catalog()
        analytics = get_strength_analytics(days, catalog, period=period, now=now)

        if now is None:
            self.cache.set(user_id, "strength", slot, version, analytics)

        logger.info("Strength analytics computed", user_id=user_id, period=period.value)
        return analytics

    async def get_cardio_analytics(
        self,
        user_id: str,
        period: TimePeriod = TimePeriod.ALL,
        now: Optional[datetime] = None
    ) -> CardioAnalytics:
        period = TimePeriod(period)
        days = await self._days(user_id)
        version = recordset_version(days)
        slot = _slot(period)

        if now is None:
            cached = self.cache.get(user_id, "cardio", slot, version)
            if cached is not None:
                return cached

        analytics = get_cardio_analytics(days, period=period, now=now)

        if now is None:
            self.cache.set(user_id, "cardio", slot, version, analytics)

        logger.info("Cardio analytics computed", user_id=user_id, period=period.value)
        return analytics

    async def get_personal_records(
        self,
        user_id: str,
        tracked_exercise_ids: Optional[Sequence[str]] = None
    ) -> List[ExercisePR]:
        """All-time PRs over the user's full history."""
        days = await self._days(user_id)
        prs = find_all_prs(days, tracked_exercise_ids)
        logger.info("Personal records computed", user_id=user_id, count=len(prs))
        return prs

    async def check_new_pr(
        self,
        user_id: str,
        name: str,
        modality: Modality,
        exercise_id: Optional[str] = None
    ) -> bool:
        """
        Whether the latest session of an exercise set a new best.

        Args:
            user_id: Owner of the history
            name: Exercise name as logged
            modality: Exercise modality
            exercise_id: Catalog id, when the exercise has one

        Returns:
            True if the latest point matches or beats all earlier points
        """
        days = await self._days(user_id)
        history = exercise_history_for(days, exercise_id, name, modality)
        return is_new_pr(history)

    async def get_last_exercise(
        self,
        user_id: str,
        name: str,
        exercise_id: Optional[str] = None
    ) -> Optional[ExerciseEntry]:
        """Previous logged session of an exercise, for prefilling a new log."""
        days = await self._days(user_id)
        return get_last_exercise(days, exercise_id, name)

    async def get_leaderboard(
        self,
        user_ids: Sequence[str],
        metric: LeaderboardMetric,
        period: LeaderboardPeriod = LeaderboardPeriod.ALL,
        now: Optional[datetime] = None
    ) -> List[LeaderboardEntry]:
        """
        Rank a group of users, fetching their days concurrently.

        Args:
            user_ids: Users on the board (typically the caller and friends)
            metric: Metric to rank on
            period: Rolling window
            now: Current instant override

        Returns:
            Ranked entries
        """
        days_by_user = await self.source.list_records_for_users(user_ids)
        entries = rank_leaderboard(days_by_user, metric, period, now=now)
        logger.info(
            "Leaderboard computed",
            metric=LeaderboardMetric(metric).value,
            period=LeaderboardPeriod(period).value,
            users=len(user_ids),
        )
        return entries
