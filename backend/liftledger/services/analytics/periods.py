"""
Time-Window Filter - Slice day records to a requested period.

Two period vocabularies exist:
- TimePeriod for analytics views (calendar-relative week/month/year)
- LeaderboardPeriod for friend rankings (rolling 7/30 days)

Every bound is computed from ``now`` on each call; nothing is cached.
"""
import calendar
import re
from datetime import date, datetime, timedelta, tzinfo
from enum import Enum
from typing import Any, Iterable, List, Optional
from zoneinfo import ZoneInfo

from liftledger.core.config import settings
from liftledger.core.logging import get_logger
from liftledger.models.day import Day

logger = get_logger(__name__)

_YYYY_MM_DD = re.compile(r"^\d{4}-\d{2}-\d{2}$")


class TimePeriod(str, Enum):
    """Analytics view windows."""
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"
    ALL = "all"


class LeaderboardPeriod(str, Enum):
    """Leaderboard windows."""
    SEVEN_DAYS = "7days"
    THIRTY_DAYS = "30days"
    ALL = "all"


# ========================================
# Local clock
# ========================================

def local_timezone() -> Optional[tzinfo]:
    """Configured zone, or None for the system local zone."""
    if settings.TIMEZONE:
        return ZoneInfo(settings.TIMEZONE)
    return None


def local_now() -> datetime:
    """Current instant as an aware datetime in the local zone."""
    tz = local_timezone()
    if tz is None:
        return datetime.now().astimezone()
    return datetime.now(tz)


def local_today() -> date:
    return local_now().date()


def _to_local(value: datetime) -> datetime:
    """Express an aware datetime in the local zone; naive values are already local."""
    if value.tzinfo is None:
        return value
    tz = local_timezone()
    return value.astimezone(tz) if tz is not None else value.astimezone()


def local_date_of(moment: datetime) -> date:
    """Local calendar date of an instant; aware values are converted first."""
    return _to_local(moment).date()


def normalize_date_to_yyyymmdd(value: Any) -> Optional[str]:
    """
    Normalize a stored date to a local YYYY-MM-DD string.

    Never goes through UTC: an aware timestamp is converted to the local
    zone first and only then truncated to a date, so a late-evening workout
    stays on the day the user saw.

    Args:
        value: YYYY-MM-DD string, ISO datetime string, date, datetime,
            epoch milliseconds, or a {"seconds": ...} timestamp object

    Returns:
        Local calendar date string, or None if the value cannot be read
    """
    if isinstance(value, str):
        if _YYYY_MM_DD.match(value):
            try:
                date.fromisoformat(value)
            except ValueError:
                return None
            return value
        try:
            parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return None
        return _to_local(parsed).date().isoformat()

    if isinstance(value, datetime):
        return _to_local(value).date().isoformat()

    if isinstance(value, date):
        return value.isoformat()

    if isinstance(value, dict):
        seconds = value.get("seconds", value.get("_seconds"))
        if not isinstance(seconds, (int, float)) or isinstance(seconds, bool):
            return None
        try:
            moment = datetime.fromtimestamp(seconds, tz=local_timezone())
        except (OverflowError, OSError, ValueError):
            return None
        return moment.date().isoformat()

    if isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            moment = datetime.fromtimestamp(value / 1000, tz=local_timezone())
        except (OverflowError, OSError, ValueError):
            return None
        return moment.date().isoformat()

    return None


# ========================================
# Window bounds
# ========================================

def _shift_months(value: datetime, months: int) -> datetime:
    """Move back ``months`` calendar months, clamping the day of month."""
    month_index = value.month - 1 - months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return value.replace(year=year, month=month, day=day)


def period_start(period: TimePeriod, now: datetime) -> Optional[date]:
    """
    Inclusive lower bound for an analytics period.

    Returns:
        First local date in the window, or None for ``all``
    """
    period = TimePeriod(period)
    now = _to_local(now)
    if period is TimePeriod.WEEK:
        return (now - timedelta(days=7)).date()
    if period is TimePeriod.MONTH:
        return _shift_months(now, 1).date()
    if period is TimePeriod.YEAR:
        return _shift_months(now, 12).date()
    return None


def leaderboard_period_start(period: LeaderboardPeriod, now: datetime) -> Optional[date]:
    """Inclusive lower bound for a leaderboard period, None for ``all``."""
    period = LeaderboardPeriod(period)
    now = _to_local(now)
    if period is LeaderboardPeriod.SEVEN_DAYS:
        return (now - timedelta(days=7)).date()
    if period is LeaderboardPeriod.THIRTY_DAYS:
        return (now - timedelta(days=30)).date()
    return None


def _filter_between(days: Iterable[Day], start: date, today: date) -> List[Day]:
    kept = []
    for day in days:
        day_date = day.local_date
        if day_date is None:
            logger.debug("Skipping day with invalid date", day_id=day.id, date=day.date)
            continue
        # Upper bound is "now": nothing dated after today
        if start <= day_date <= today:
            kept.append(day)
    return kept


def filter_days_by_period(
    days: Iterable[Day],
    period: TimePeriod,
    now: Optional[datetime] = None
) -> List[Day]:
    """
    Keep the days inside an analytics period.

    Args:
        days: Day records in any order
        period: week, month, year or all
        now: Current instant; defaults to the local clock at call time

    Returns:
        New list in input order
    """
    if TimePeriod(period) is TimePeriod.ALL:
        return list(days)

    now = _to_local(now or local_now())
    return _filter_between(days, period_start(period, now), now.date())


def filter_days_by_leaderboard_period(
    days: Iterable[Day],
    period: LeaderboardPeriod,
    now: Optional[datetime] = None
) -> List[Day]:
    """Keep the days inside a leaderboard period (new list, input order)."""
    if LeaderboardPeriod(period) is LeaderboardPeriod.ALL:
        return list(days)

    now = _to_local(now or local_now())
    return _filter_between(days, leaderboard_period_start(period, now), now.date())


def sort_days_chronologically(days: Iterable[Day]) -> List[Day]:
    """
    Oldest first; stable for days sharing a date.

    Days whose date cannot be parsed are left out.
    """
    dated = [day for day in days if day.local_date is not None]
    return sorted(dated, key=lambda day: day.local_date)
