"""
Leaderboards - Rank a friend group on one metric over a rolling window.

Ranking uses standard competition ranking: equal values share a rank and
the next rank skips (1, 1, 3). Users with nothing qualifying in the window
are left off the board entirely.
"""
from datetime import datetime
from enum import Enum
from typing import Callable, Dict, Iterable, List, Mapping, Optional, Sequence

from liftledger.core.logging import get_logger
from liftledger.models.day import Day
from liftledger.models.stats import LeaderboardEntry
from liftledger.services.analytics.calculator import (
    calculate_total_cardio_distance,
    calculate_total_volume,
)
from liftledger.services.analytics.periods import (
    LeaderboardPeriod,
    filter_days_by_leaderboard_period,
)
from liftledger.services.analytics.streaks import active_dates

logger = get_logger(__name__)


class LeaderboardMetric(str, Enum):
    VOLUME = "volume"
    CARDIO = "cardio"
    CONSISTENCY = "consistency"


def _consistency(days: Sequence[Day]) -> float:
    """Distinct active dates (workouts or rest days)."""
    return len(active_dates(days))


_REDUCERS: Dict[LeaderboardMetric, Callable[[Sequence[Day]], float]] = {
    LeaderboardMetric.VOLUME: calculate_total_volume,
    LeaderboardMetric.CARDIO: calculate_total_cardio_distance,
    LeaderboardMetric.CONSISTENCY: _consistency,
}


def assign_ranks(values: Mapping[str, float]) -> List[LeaderboardEntry]:
    """
    Sort users by value (descending, stable) and assign competition ranks.

    Args:
        values: user_id -> value, in the order ties should be listed

    Returns:
        Ranked entries
    """
    ordered = sorted(values.items(), key=lambda item: item[1], reverse=True)

    entries = []
    rank = 0
    previous = None
    for position, (user_id, value) in enumerate(ordered, start=1):
        if value != previous:
            rank = position
            previous = value
        entries.append(LeaderboardEntry(user_id=user_id, value=value, rank=rank))
    return entries


def rank_leaderboard(
    days_by_user: Mapping[str, Iterable[Day]],
    metric: LeaderboardMetric,
    period: LeaderboardPeriod = LeaderboardPeriod.ALL,
    now: Optional[datetime] = None
) -> List[LeaderboardEntry]:
    """
    Rank users on one metric.

    Args:
        days_by_user: user_id -> that user's days
        metric: volume, cardio or consistency
        period: Rolling leaderboard window
        now: Current instant for the window

    Returns:
        Ranked entries, excluding users whose value is zero
    """
    metric = LeaderboardMetric(metric)
    reducer = _REDUCERS[metric]

    values: Dict[str, float] = {}
    for user_id, days in days_by_user.items():
        scoped = filter_days_by_leaderboard_period(days, period, now=now)
        value = reducer(scoped)
        if value > 0:
            values[user_id] = value

    entries = assign_ranks(values)

    logger.debug(
        "Leaderboard ranked",
        metric=metric.value,
        period=LeaderboardPeriod(period).value,
        users=len(days_by_user),
        ranked=len(entries),
    )
    return entries


def get_volume_leaderboard(
    days_by_user: Mapping[str, Iterable[Day]],
    period: LeaderboardPeriod = LeaderboardPeriod.ALL,
    now: Optional[datetime] = None
) -> List[LeaderboardEntry]:
    """Rank by strength volume."""
    return rank_leaderboard(days_by_user, LeaderboardMetric.VOLUME, period, now=now)


def get_cardio_distance_leaderboard(
    days_by_user: Mapping[str, Iterable[Day]],
    period: LeaderboardPeriod = LeaderboardPeriod.ALL,
    now: Optional[datetime] = None
) -> List[LeaderboardEntry]:
    """Rank by cardio distance."""
    return rank_leaderboard(days_by_user, LeaderboardMetric.CARDIO, period, now=now)


def get_consistency_leaderboard(
    days_by_user: Mapping[str, Iterable[Day]],
    period: LeaderboardPeriod = LeaderboardPeriod.ALL,
    now: Optional[datetime] = None
) -> List[LeaderboardEntry]:
    """Rank by number of active days."""
    return rank_leaderboard(days_by_user, LeaderboardMetric.CONSISTENCY, period, now=now)


def group_days_by_user_id(days: Iterable[Day]) -> Dict[str, List[Day]]:
    """Group a flat list of days from several users."""
    grouped: Dict[str, List[Day]] = {}
    for day in days:
        grouped.setdefault(day.user_id, []).append(day)
    return grouped
