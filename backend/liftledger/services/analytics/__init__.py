"""
Analytics module - Workout day processing and statistics calculation.

This module provides:
- Record adapters normalizing raw day and legacy workout documents
- Per-modality measurement strategies
- Time-window filtering, aggregation, streaks and PR detection
- Leaderboard ranking
- Record source interface, result cache and async service facade
"""
from liftledger.services.analytics.adapter import (
    RecordAdapter,
    DayDocumentAdapter,
    WorkoutDocumentAdapter,
    get_adapter,
    normalize_catalog,
    normalize_days,
    merge_workouts_into_days,
)
from liftledger.services.analytics.periods import (
    TimePeriod,
    LeaderboardPeriod,
    filter_days_by_period,
    filter_days_by_leaderboard_period,
    normalize_date_to_yyyymmdd,
)
from liftledger.services.analytics.calculator import (
    TrendBucket,
    get_analytics_summary,
    get_strength_analytics,
    get_cardio_analytics,
    volume_data_points,
)
from liftledger.services.analytics.records import (
    find_all_prs,
    extract_exercise_history,
    get_last_exercise,
    is_new_pr,
    should_fetch_insight,
    get_metric_name,
)
from liftledger.services.analytics.leaderboard import (
    LeaderboardMetric,
    rank_leaderboard,
    get_volume_leaderboard,
    get_cardio_distance_leaderboard,
    get_consistency_leaderboard,
    group_days_by_user_id,
)
from liftledger.services.analytics.store import (
    ListRecordsOptions,
    RecordSource,
    InMemoryRecordSource,
    fetch_days_for_leaderboard,
)
from liftledger.services.analytics.cache import SummaryCache
from liftledger.services.analytics.service import AnalyticsService

__all__ = [
    # Adapters
    "RecordAdapter",
    "DayDocumentAdapter",
    "WorkoutDocumentAdapter",
    "get_adapter",
    "normalize_catalog",
    "normalize_days",
    "merge_workouts_into_days",
    # Periods
    "TimePeriod",
    "LeaderboardPeriod",
    "filter_days_by_period",
    "filter_days_by_leaderboard_period",
    "normalize_date_to_yyyymmdd",
    # Calculator
    "TrendBucket",
    "get_analytics_summary",
    "get_strength_analytics",
    "get_cardio_analytics",
    "volume_data_points",
    # Records
    "find_all_prs",
    "extract_exercise_history",
    "get_last_exercise",
    "is_new_pr",
    "should_fetch_insight",
    "get_metric_name",
    # Leaderboards
    "LeaderboardMetric",
    "rank_leaderboard",
    "get_volume_leaderboard",
    "get_cardio_distance_leaderboard",
    "get_consistency_leaderboard",
    "group_days_by_user_id",
    # Store
    "ListRecordsOptions",
    "RecordSource",
    "InMemoryRecordSource",
    "fetch_days_for_leaderboard",
    # Service
    "SummaryCache",
    "AnalyticsService",
]
