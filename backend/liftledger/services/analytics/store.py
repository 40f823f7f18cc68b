"""
Record Source - Persistence collaborator interface for analytics callers.

The analytics core never performs I/O. Callers fetch day records through a
RecordSource (async, possibly several users concurrently) and hand plain
Day snapshots to the pure functions.
"""
import asyncio
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence

from liftledger.core.config import settings
from liftledger.core.logging import get_logger
from liftledger.models.catalog import ExerciseCatalogEntry
from liftledger.models.day import Day

logger = get_logger(__name__)


@dataclass(frozen=True)
class ListRecordsOptions:
    """Bounds for a day listing. Dates are local YYYY-MM-DD, inclusive."""
    limit: Optional[int] = None
    order: str = "desc"  # asc or desc by date
    start_date: Optional[str] = None
    end_date: Optional[str] = None


class RecordSource(ABC):
    """Abstract persistence collaborator."""

    @abstractmethod
    async def list_records(
        self,
        user_id: str,
        options: Optional[ListRecordsOptions] = None
    ) -> List[Day]:
        """
        List one user's days.

        Args:
            user_id: Owner of the days
            options: Ordering, limit and date bounds

        Returns:
            Day snapshots
        """
        pass

    @abstractmethod
    async def get_all_exercises(self) -> List[ExerciseCatalogEntry]:
        """Fetch the full exercise catalog."""
        pass

    async def get_exercise(self, exercise_id: str) -> Optional[ExerciseCatalogEntry]:
        for entry in await self.get_all_exercises():
            if entry.id == exercise_id:
                return entry
        return None

    async def list_records_for_users(self, user_ids: Sequence[str]) -> Dict[str, List[Day]]:
        """Days for several users, fetched concurrently."""
        return await fetch_days_for_leaderboard(self, user_ids)


class InMemoryRecordSource(RecordSource):
    """
    RecordSource backed by a dict.

    Days are stored by (user_id, date); adding a day for an existing key
    replaces it.
    """

    def __init__(
        self,
        days: Iterable[Day] = (),
        exercises: Iterable[ExerciseCatalogEntry] = ()
    ):
        self._days: Dict[tuple, Day] = {}
        self._exercises: List[ExerciseCatalogEntry] = list(exercises)
        for day in days:
            self.add_day(day)

    def add_day(self, day: Day) -> None:
        self._days[(day.user_id, day.date)] = day

    async def list_records(
        self,
        user_id: str,
        options: Optional[ListRecordsOptions] = None
    ) -> List[Day]:
        options = options or ListRecordsOptions()

        days = [day for (owner, _), day in self._days.items() if owner == user_id]
        if options.start_date:
            days = [day for day in days if day.date >= options.start_date]
        if options.end_date:
            days = [day for day in days if day.date <= options.end_date]

        days.sort(key=lambda day: day.date, reverse=options.order != "asc")

        if options.limit is not None:
            days = days[:options.limit]
        return days

    async def get_all_exercises(self) -> List[ExerciseCatalogEntry]:
        return list(self._exercises)


async def fetch_days_for_leaderboard(
    source: RecordSource,
    user_ids: Sequence[str],
    limit: Optional[int] = None
) -> Dict[str, List[Day]]:
    """
    Fetch recent days for every user concurrently.

    A user whose fetch fails (e.g. no permission to read a friend's days)
    gets an empty list instead of failing the whole board.

    Args:
        source: Record source
        user_ids: Users to fetch, in board order
        limit: Max days per user; defaults to LEADERBOARD_FETCH_LIMIT

    Returns:
        user_id -> days, with an entry for every requested user
    """
    unique_ids = list(dict.fromkeys(user_ids))
    options = ListRecordsOptions(
        limit=limit if limit is not None else settings.LEADERBOARD_FETCH_LIMIT,
        order="desc",
    )

    results = await asyncio.gather(
        *(source.list_records(user_id, options) for user_id in unique_ids),
        return_exceptions=True,
    )

    days_by_user: Dict[str, List[Day]] = {}
    for user_id, result in zip(unique_ids, results):
        if isinstance(result, Exception):
            logger.warning(
                "Could not fetch days for user",
                user_id=user_id,
                error_type=type(result).__name__,
                error=str(result),
            )
            days_by_user[user_id] = []
        else:
            days_by_user[user_id] = list(result)

    logger.debug("Fetched days for leaderboard", users=len(unique_ids))
    return days_by_user
