"""
Leaderboard API endpoints.
"""
from datetime import datetime
from typing import Any, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from liftledger.core.logging import get_logger
from liftledger.services.analytics.adapter import merge_workouts_into_days, normalize_days
from liftledger.services.analytics.leaderboard import (
    LeaderboardMetric,
    group_days_by_user_id,
    rank_leaderboard,
)
from liftledger.services.analytics.periods import LeaderboardPeriod

logger = get_logger(__name__)
router = APIRouter()


# ========================================
# Request/Response Schemas
# ========================================

class LeaderboardRequest(BaseModel):
    """Day documents for every user on the board."""
    days: list[dict[str, Any]] = Field(default_factory=list, description="Day documents with userId")
    workouts: list[dict[str, Any]] = Field(
        default_factory=list, description="Legacy per-workout documents"
    )
    userIds: Optional[list[str]] = Field(
        None, description="Restrict the board to these users (caller plus friends)"
    )
    period: LeaderboardPeriod = LeaderboardPeriod.ALL
    now: Optional[datetime] = None


class LeaderboardEntryResponse(BaseModel):
    userId: str
    value: float
    rank: int


# ========================================
# API Endpoints
# ========================================

@router.post("/{metric}", response_model=list[LeaderboardEntryResponse])
async def leaderboard(metric: LeaderboardMetric, request: LeaderboardRequest):
    """
    Rank users on volume, cardio distance or consistency.
    """
    if request.userIds is not None and not request.userIds:
        raise HTTPException(status_code=400, detail="userIds must not be empty")

    days = normalize_days(request.days)
    if request.workouts:
        days.extend(merge_workouts_into_days(request.workouts))

    days_by_user = group_days_by_user_id(day for day in days if day.user_id)
    if request.userIds is not None:
        days_by_user = {
            user_id: days_by_user.get(user_id, []) for user_id in dict.fromkeys(request.userIds)
        }

    entries = rank_leaderboard(days_by_user, metric, request.period, now=request.now)

    logger.info(
        "Leaderboard requested",
        metric=metric.value,
        period=request.period.value,
        users=len(days_by_user),
    )
    return [
        LeaderboardEntryResponse(userId=e.user_id, value=e.value, rank=e.rank)
        for e in entries
    ]
