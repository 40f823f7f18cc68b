"""
Analytics API endpoints.

Stateless: every request carries the raw day documents (and optionally
legacy workouts and the exercise catalog) it should be computed over.
"""
from datetime import date, datetime
from typing import Any, Optional

from fastapi import APIRouter
from pydantic import BaseModel, Field

from liftledger.core.logging import get_logger
from liftledger.models.day import Day, Modality, exercise_key
from liftledger.services.analytics.adapter import (
    merge_workouts_into_days,
    normalize_catalog,
    normalize_days,
)
from liftledger.services.analytics.calculator import (
    TrendBucket,
    get_analytics_summary,
    get_cardio_analytics,
    get_strength_analytics,
    volume_data_points,
)
from liftledger.services.analytics.periods import (
    TimePeriod,
    filter_days_by_period,
    local_date_of,
)
from liftledger.services.analytics.records import (
    exercise_history_for,
    find_all_prs,
    get_last_exercise,
    get_metric_name,
    is_new_pr,
    should_fetch_insight,
)

logger = get_logger(__name__)
router = APIRouter()


# ========================================
# Request/Response Schemas
# ========================================

class DaysRequest(BaseModel):
    """Raw records to compute over."""
    days: list[dict[str, Any]] = Field(default_factory=list, description="Day documents")
    workouts: list[dict[str, Any]] = Field(
        default_factory=list, description="Legacy per-workout documents"
    )
    exercises: list[dict[str, Any]] = Field(
        default_factory=list, description="Exercise catalog entries"
    )
    now: Optional[datetime] = Field(None, description="Current instant override")


class PeriodRequest(DaysRequest):
    period: TimePeriod = TimePeriod.ALL


class SummaryRequest(PeriodRequest):
    today: Optional[date] = Field(None, description="Local date anchoring the current streak")


class StrengthRequest(PeriodRequest):
    bucket: Optional[TrendBucket] = Field(None, description="Also return a bucketed volume trend")


class PRRequest(DaysRequest):
    trackedExerciseIds: Optional[list[str]] = None


class NewPRRequest(DaysRequest):
    """Check whether the latest session of one exercise is a PR."""
    name: str = Field(..., min_length=1)
    modality: Modality
    exerciseId: Optional[str] = None


class LastExerciseRequest(DaysRequest):
    """Look up the previous session of one exercise."""
    name: str = Field(..., min_length=1)
    exerciseId: Optional[str] = None


class NewPRResponse(BaseModel):
    isNewPr: bool
    metric: str
    shouldFetchInsight: bool
    history: list[dict[str, Any]]


# ========================================
# Helpers
# ========================================

def _load_days(request: DaysRequest) -> list[Day]:
    """Normalize day documents plus any legacy workouts."""
    days = normalize_days(request.days)
    if request.workouts:
        days.extend(merge_workouts_into_days(request.workouts))
    return days


def _today(request: SummaryRequest) -> Optional[date]:
    if request.today is not None:
        return request.today
    if request.now is not None:
        return local_date_of(request.now)
    return None


# ========================================
# API Endpoints
# ========================================

@router.post("/summary")
async def summary(request: SummaryRequest):
    """
    Overview summary (totals, streaks, favorite exercise) for a period.
    """
    days = _load_days(request)
    now = request.now
    if now is None and request.today is not None:
        now = datetime.combine(request.today, datetime.min.time())

    scoped = filter_days_by_period(days, request.period, now=now)
    result = get_analytics_summary(
        scoped,
        normalize_catalog(request.exercises),
        today=_today(request),
    )

    logger.info("Summary requested", period=request.period.value, days=len(scoped))
    return result.to_dict()


@router.post("/strength")
async def strength(request: StrengthRequest):
    """
    Strength analytics: volume, trend, top exercises and muscle groups.
    """
    days = _load_days(request)
    result = get_strength_analytics(
        days,
        normalize_catalog(request.exercises),
        period=request.period,
        now=request.now,
    ).to_dict()

    if request.bucket is not None:
        scoped = filter_days_by_period(days, request.period, now=request.now)
        result["volumeTrend"] = [
            point.to_dict() for point in volume_data_points(scoped, request.bucket)
        ]

    logger.info("Strength analytics requested", period=request.period.value)
    return result


@router.post("/cardio")
async def cardio(request: PeriodRequest):
    """
    Cardio analytics: distance, duration, aggregate pace and top exercises.
    """
    result = get_cardio_analytics(_load_days(request), period=request.period, now=request.now)
    logger.info("Cardio analytics requested", period=request.period.value)
    return result.to_dict()


@router.post("/filter")
async def filter_days(request: PeriodRequest):
    """
    Normalized days inside a period, in input order.
    """
    days = filter_days_by_period(_load_days(request), request.period, now=request.now)
    return [day.to_dict() for day in days]


@router.post("/prs")
async def personal_records(request: PRRequest):
    """
    All-time personal records over the full history.
    """
    prs = find_all_prs(_load_days(request), request.trackedExerciseIds)
    logger.info("Personal records requested", count=len(prs))
    return [pr.to_dict() for pr in prs]


@router.post("/new-pr", response_model=NewPRResponse)
async def new_personal_record(request: NewPRRequest):
    """
    Whether the latest session of an exercise matches or beats its history.
    """
    days = _load_days(request)
    history = exercise_history_for(days, request.exerciseId, request.name, request.modality)

    key = exercise_key(request.exerciseId, request.name)
    has_distance = any(
        exercise.cardio is not None and exercise.cardio.distance is not None
        for day in days
        for exercise in day.exercises
        if exercise.modality is Modality.CARDIO and exercise.key == key
    )

    return NewPRResponse(
        isNewPr=is_new_pr(history),
        metric=get_metric_name(request.modality, has_distance=has_distance),
        shouldFetchInsight=should_fetch_insight(history),
        history=[point.to_dict() for point in history],
    )


@router.post("/last-exercise")
async def last_exercise(request: LastExerciseRequest):
    """
    Most recently logged instance of an exercise, or null.
    """
    exercise = get_last_exercise(_load_days(request), request.exerciseId, request.name)
    return exercise.to_dict() if exercise is not None else None
