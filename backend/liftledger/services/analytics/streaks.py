"""
Streak calculation over local calendar dates.

A day is active when it has at least one exercise or is a planned rest day,
so rest days keep a streak alive. Dates are compared as local calendar
dates only; nothing here touches UTC.
"""
from datetime import date, timedelta
from typing import Iterable, Optional, Set

from liftledger.models.day import Day
from liftledger.services.analytics.periods import local_today


def active_dates(days: Iterable[Day]) -> Set[date]:
    """Distinct local dates with an active day."""
    dates = set()
    for day in days:
        if not day.is_active:
            continue
        day_date = day.local_date
        if day_date is not None:
            dates.add(day_date)
    return dates


def calculate_current_streak(days: Iterable[Day], today: Optional[date] = None) -> int:
    """
    Consecutive active days ending today.

    Anchored to the actual current date: if nothing is logged today yet the
    streak is 0, even when yesterday was active. Future-dated days are
    ignored.

    Args:
        days: Day records in any order
        today: Local date to anchor on; defaults to the local clock

    Returns:
        Streak length in days
    """
    dates = active_dates(days)
    expected = today or local_today()

    streak = 0
    while expected in dates:
        streak += 1
        expected -= timedelta(days=1)
    return streak


def calculate_longest_streak(days: Iterable[Day]) -> int:
    """Longest run of consecutive active days anywhere in history."""
    dates = sorted(active_dates(days))
    if not dates:
        return 0

    longest = 1
    current = 1
    for prev, curr in zip(dates, dates[1:]):
        if (curr - prev).days == 1:
            current += 1
            longest = max(longest, current)
        else:
            current = 1
    return longest
