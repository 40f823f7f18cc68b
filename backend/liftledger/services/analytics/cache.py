"""
Summary Cache - Short-lived memo of computed analytics.

Entries are keyed by (user_id, view, period, recordset version). The
version changes whenever the user's days change, so a stale recordset can
never be served; the TTL just bounds memory.

This sits outside the pure analytics core and is only used by the service
layer.
"""
import hashlib
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from threading import Lock
from typing import Any, Dict, Iterable, Optional, Tuple

from liftledger.core.config import settings
from liftledger.core.logging import get_logger
from liftledger.models.day import Day

logger = get_logger(__name__)

CacheKey = Tuple[str, str, str, str]


@dataclass
class CacheEntry:
    """A cached value and when it was stored."""
    value: Any
    created_at: datetime = field(default_factory=datetime.utcnow)

    def is_expired(self, ttl_minutes: int) -> bool:
        return datetime.utcnow() - self.created_at > timedelta(minutes=ttl_minutes)


def recordset_version(days: Iterable[Day]) -> str:
    """
    Fingerprint of a user's days.

    Built from each day's id and updated_at, so adding, removing or editing
    a day changes it.
    """
    digest = hashlib.sha1()
    for day_id, updated_at in sorted((day.id, day.updated_at or "") for day in days):
        digest.update(f"{day_id}|{updated_at}\n".encode("utf-8"))
    return digest.hexdigest()


class SummaryCache:
    """
    Thread-safe TTL cache for analytics results.
    """

    def __init__(self, ttl_minutes: Optional[int] = None):
        """
        Initialize the cache.

        Args:
            ttl_minutes: Entry lifetime; defaults to SUMMARY_CACHE_TTL_MINUTES
        """
        self._entries: Dict[CacheKey, CacheEntry] = {}
        self._lock = Lock()
        self._ttl_minutes = (
            ttl_minutes if ttl_minutes is not None else settings.SUMMARY_CACHE_TTL_MINUTES
        )

    def get(self, user_id: str, view: str, period: str, version: str) -> Optional[Any]:
        """
        Get a cached value.

        Returns:
            The value, or None if missing or expired
        """
        key = (user_id, view, period, version)
        with self._lock:
            entry = self._entries.get(key)

            if entry is None:
                return None

            if entry.is_expired(self._ttl_minutes):
                del self._entries[key]
                return None

            return entry.value

    def set(self, user_id: str, view: str, period: str, version: str, value: Any) -> None:
        """
        Store a value.

        Older versions of the same (user, view, period) and any expired
        entries are evicted, so one live entry per slot remains.
        """
        with self._lock:
            stale = [
                key for key, entry in self._entries.items()
                if key[:3] == (user_id, view, period) or entry.is_expired(self._ttl_minutes)
            ]
            for key in stale:
                del self._entries[key]

            self._entries[(user_id, view, period, version)] = CacheEntry(value=value)

    def invalidate(self, user_id: str) -> int:
        """
        Drop every entry for a user.

        Returns:
            Number of entries removed
        """
        with self._lock:
            stale = [key for key in self._entries if key[0] == user_id]
            for key in stale:
                del self._entries[key]

        if stale:
            logger.debug("Invalidated cached analytics", user_id=user_id, count=len(stale))
        return len(stale)

    def cleanup_expired(self) -> int:
        """
        Remove all expired entries.

        Returns:
            Number of entries removed
        """
        with self._lock:
            expired = [
                key for key, entry in self._entries.items()
                if entry.is_expired(self._ttl_minutes)
            ]

            for key in expired:
                del self._entries[key]

            if expired:
                logger.info("Cleaned up expired analytics cache entries", count=len(expired))

            return len(expired)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
