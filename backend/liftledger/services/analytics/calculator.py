"""
Analytics Calculator - Fold day records into summary statistics.

Provides:
- Overview summary (totals, streaks, favorite exercise)
- Strength analytics (volume, trends, frequency, muscle groups)
- Cardio analytics (distance, duration, aggregate pace)

All functions are pure: they read immutable day snapshots, build new
result objects, and never raise on empty or partial data. Days whose date
cannot be parsed are ignored by every aggregate.
"""
import math
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from liftledger.core.logging import get_logger, log_analytics_computed
from liftledger.models.catalog import ExerciseCatalog
from liftledger.models.day import Day, ExerciseEntry, Modality
from liftledger.models.stats import (
    AnalyticsSummary,
    CardioAnalytics,
    CardioExerciseFrequency,
    DistanceDataPoint,
    MuscleGroupStats,
    StrengthAnalytics,
    StrengthExerciseFrequency,
    VolumeDataPoint,
)
from liftledger.services.analytics.periods import (
    TimePeriod,
    filter_days_by_period,
    sort_days_chronologically,
)
from liftledger.services.analytics.streaks import (
    calculate_current_streak,
    calculate_longest_streak,
)
from liftledger.services.analytics.strategies import get_strategy

logger = get_logger(__name__)


class TrendBucket(str, Enum):
    """Grouping for bucketed volume trends."""
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"


def _finite_or_zero(value: float) -> float:
    """Averages and ratios never leak NaN/Infinity."""
    if value is None or not math.isfinite(value):
        return 0
    return value


def _dated(days: Iterable[Day]) -> Iterator[Day]:
    return (day for day in days if day.local_date is not None)


def _exercises(days: Iterable[Day], modality: Optional[Modality] = None) -> Iterator[ExerciseEntry]:
    for day in _dated(days):
        for exercise in day.exercises:
            if modality is None or exercise.modality is modality:
                yield exercise


# ========================================
# Totals
# ========================================

def day_volume(day: Day) -> float:
    """Strength volume (reps × weight) logged on one day."""
    strategy = get_strategy(Modality.STRENGTH)
    return sum(
        strategy.totals(ex).volume
        for ex in day.exercises
        if ex.modality is Modality.STRENGTH
    )


def calculate_total_volume(days: Iterable[Day]) -> float:
    strategy = get_strategy(Modality.STRENGTH)
    return sum(strategy.totals(ex).volume for ex in _exercises(days, Modality.STRENGTH))


def calculate_total_cardio_distance(days: Iterable[Day]) -> float:
    strategy = get_strategy(Modality.CARDIO)
    return sum(strategy.totals(ex).distance for ex in _exercises(days, Modality.CARDIO))


def calculate_total_cardio_duration(days: Iterable[Day]) -> float:
    """Total cardio duration in seconds."""
    strategy = get_strategy(Modality.CARDIO)
    return sum(strategy.totals(ex).duration for ex in _exercises(days, Modality.CARDIO))


def calculate_total_calisthenics_reps(days: Iterable[Day]) -> int:
    strategy = get_strategy(Modality.CALISTHENICS)
    return sum(strategy.totals(ex).reps for ex in _exercises(days, Modality.CALISTHENICS))


def find_favorite_exercise(
    days: Iterable[Day],
    catalog: Optional[ExerciseCatalog] = None
) -> Optional[str]:
    """
    Most frequently logged exercise, as a display name.

    Ties go to the exercise first logged in chronological order. The
    catalog name is preferred when the exercise has a catalog id; otherwise
    the most recently logged name is used.
    """
    counts: Dict[str, int] = {}
    names: Dict[str, str] = {}
    ids: Dict[str, Optional[str]] = {}

    for day in sort_days_chronologically(days):
        for exercise in day.exercises:
            key = exercise.key
            counts[key] = counts.get(key, 0) + 1
            names[key] = exercise.name
            ids[key] = exercise.exercise_id

    if not counts:
        return None

    favorite = max(counts, key=counts.get)
    catalog_entry = catalog.get(ids[favorite]) if catalog and ids[favorite] else None
    if catalog_entry is not None:
        return catalog_entry.name
    return names[favorite]


def get_analytics_summary(
    days: Iterable[Day],
    catalog: Optional[ExerciseCatalog] = None,
    today: Optional[date] = None
) -> AnalyticsSummary:
    """
    Overview summary over the given days.

    Args:
        days: Day records (any order, never mutated)
        catalog: Exercise catalog for favorite-exercise names
        today: Local date anchoring the current streak

    Returns:
        AnalyticsSummary; all zeros and no favorite for empty input
    """
    days = list(days)

    summary = AnalyticsSummary(
        total_workouts=sum(1 for day in _dated(days) if day.has_exercises),
        current_streak=calculate_current_streak(days, today=today),
        longest_streak=calculate_longest_streak(days),
        total_volume=calculate_total_volume(days),
        total_cardio_distance=calculate_total_cardio_distance(days),
        total_cardio_duration=calculate_total_cardio_duration(days),
        total_calisthenics_reps=calculate_total_calisthenics_reps(days),
        favorite_exercise=find_favorite_exercise(days, catalog),
    )

    log_analytics_computed(logger, "summary", len(days))
    return summary


# ========================================
# Trends
# ========================================

def _bucket_start(day_date: date, bucket: TrendBucket) -> date:
    if bucket is TrendBucket.WEEK:
        # Weeks start on Sunday
        return day_date - timedelta(days=(day_date.weekday() + 1) % 7)
    if bucket is TrendBucket.MONTH:
        return day_date.replace(day=1)
    if bucket is TrendBucket.YEAR:
        return date(day_date.year, 1, 1)
    return day_date


def volume_data_points(
    days: Iterable[Day],
    bucket: TrendBucket = TrendBucket.DAY
) -> List[VolumeDataPoint]:
    """
    Strength volume grouped into calendar buckets.

    Every dated day counts toward its bucket's ``workout_count``, including
    days with no strength volume.

    Returns:
        Points ordered by bucket start date
    """
    bucket = TrendBucket(bucket)
    grouped: Dict[date, Tuple[float, int]] = {}

    for day in _dated(days):
        start = _bucket_start(day.local_date, bucket)
        volume, count = grouped.get(start, (0, 0))
        grouped[start] = (volume + day_volume(day), count + 1)

    return [
        VolumeDataPoint(date=start.isoformat(), volume=volume, workout_count=count)
        for start, (volume, count) in sorted(grouped.items())
    ]


# ========================================
# Strength
# ========================================

def get_strength_analytics(
    days: Iterable[Day],
    catalog: Optional[ExerciseCatalog] = None,
    period: TimePeriod = TimePeriod.ALL,
    now: Optional[datetime] = None
) -> StrengthAnalytics:
    """
    Strength analytics for a period.

    Muscle-group stats need a catalog hit on ``exercise_id``; a miss is left
    out of ``volume_by_muscle_group`` but still counted in ``total_volume``.

    Args:
        days: Day records (any order, never mutated)
        catalog: Exercise catalog keyed by id
        period: Analytics window
        now: Current instant for the window

    Returns:
        StrengthAnalytics
    """
    scoped = filter_days_by_period(days, period, now=now)
    strategy = get_strategy(Modality.STRENGTH)

    volume_by_date: Dict[str, float] = {}
    strength_dates = set()
    frequency: Dict[str, dict] = {}
    groups: Dict[str, dict] = {}

    for day in sort_days_chronologically(scoped):
        for exercise in day.exercises:
            if exercise.modality is not Modality.STRENGTH:
                continue

            volume = strategy.totals(exercise).volume
            volume_by_date[day.date] = volume_by_date.get(day.date, 0) + volume

            if not strategy.has_measurement(exercise):
                continue
            strength_dates.add(day.date)

            entry = frequency.setdefault(exercise.key, {"name": exercise.name, "count": 0, "max_weight": 0})
            entry["name"] = exercise.name
            entry["count"] += 1
            entry["max_weight"] = max(entry["max_weight"], strategy.history_value(exercise) or 0)

            catalog_entry = catalog.get(exercise.exercise_id) if catalog and exercise.exercise_id else None
            if catalog_entry is None or catalog_entry.muscle_group is None:
                continue

            group = groups.setdefault(
                catalog_entry.muscle_group.value,
                {"volume": 0, "dates": set(), "exercises": set()},
            )
            group["volume"] += volume
            group["dates"].add(day.date)
            group["exercises"].add(exercise.key)

    total_volume = sum(volume_by_date.values())
    average = total_volume / len(strength_dates) if strength_dates else 0

    exercises_by_frequency = sorted(
        (
            StrengthExerciseFrequency(
                exercise_key=key,
                name=data["name"],
                count=data["count"],
                max_weight=data["max_weight"],
            )
            for key, data in frequency.items()
        ),
        key=lambda e: e.count,
        reverse=True,
    )

    volume_by_muscle_group = sorted(
        (
            MuscleGroupStats(
                muscle_group=name,
                volume=data["volume"],
                frequency=len(data["dates"]),
                exercises=len(data["exercises"]),
            )
            for name, data in groups.items()
        ),
        key=lambda m: m.volume,
        reverse=True,
    )

    analytics = StrengthAnalytics(
        total_volume=total_volume,
        average_volume_per_workout=_finite_or_zero(average),
        max_volume_workout=max(volume_by_date.values(), default=0),
        volume_trend=[
            VolumeDataPoint(date=date_str, volume=volume)
            for date_str, volume in volume_by_date.items()
            if volume > 0
        ],
        exercises_by_frequency=exercises_by_frequency,
        volume_by_muscle_group=volume_by_muscle_group,
    )

    log_analytics_computed(logger, "strength", len(scoped), period=TimePeriod(period).value)
    return analytics


# ========================================
# Cardio
# ========================================

def get_cardio_analytics(
    days: Iterable[Day],
    period: TimePeriod = TimePeriod.ALL,
    now: Optional[datetime] = None
) -> CardioAnalytics:
    """
    Cardio analytics for a period.

    ``average_pace`` is the aggregate ratio of duration to distance over
    distance-bearing entries, not the mean of per-entry paces.
    """
    scoped = filter_days_by_period(days, period, now=now)

    total_distance = 0.0
    total_duration = 0.0
    paced_duration = 0.0
    paces = []
    longest_distance = 0.0
    longest_duration = 0.0
    trend: Dict[str, List[float]] = {}
    frequency: Dict[str, dict] = {}

    for day in sort_days_chronologically(scoped):
        for exercise in day.exercises:
            if exercise.modality is not Modality.CARDIO or exercise.cardio is None:
                continue
            entry = exercise.cardio
            distance = entry.distance or 0

            total_duration += entry.duration_seconds
            longest_duration = max(longest_duration, entry.duration_seconds)
            if distance > 0:
                total_distance += distance
                paced_duration += entry.duration_seconds
                paces.append(entry.pace)
                longest_distance = max(longest_distance, distance)

            point = trend.setdefault(day.date, [0.0, 0.0])
            point[0] += distance
            point[1] += entry.duration_seconds

            stats = frequency.setdefault(exercise.key, {"name": exercise.name, "count": 0, "total_distance": 0.0})
            stats["name"] = exercise.name
            stats["count"] += 1
            stats["total_distance"] += distance

    average_pace = paced_duration / total_distance if total_distance > 0 else 0

    analytics = CardioAnalytics(
        total_distance=total_distance,
        total_duration=total_duration,
        average_pace=_finite_or_zero(average_pace),
        best_pace=_finite_or_zero(min(paces, default=0)),
        longest_distance=longest_distance,
        longest_duration=longest_duration,
        distance_trend=[
            DistanceDataPoint(date=date_str, distance=distance, duration=duration)
            for date_str, (distance, duration) in trend.items()
        ],
        exercises_by_frequency=sorted(
            (
                CardioExerciseFrequency(
                    exercise_key=key,
                    name=data["name"],
                    count=data["count"],
                    total_distance=data["total_distance"],
                )
                for key, data in frequency.items()
            ),
            key=lambda e: e.count,
            reverse=True,
        ),
    )

    log_analytics_computed(logger, "cardio", len(scoped), period=TimePeriod(period).value)
    return analytics
