"""
In-memory TTL cache for list views.

Keys are tenant scoped by the caller, e.g. ``companies:list:<tenant>:<page>``.
Commands that change an entity type drop every key under its list prefix.
"""

import fnmatch
import logging
import threading
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Callable, Dict, Optional

from app.config import settings
from app.domain.models.base import utc_now


logger = logging.getLogger(__name__)


@dataclass
class CacheEntry:
    """Cached value with its expiry time."""

    data: Any
    expires_at: datetime

    def is_expired(self, now: datetime) -> bool:
        return now >= self.expires_at


class ListCache:
    """Process-local cache with glob-pattern invalidation."""

    def __init__(self, ttl_seconds: int = 300, clock: Callable[[], datetime] = utc_now):
        self._entries: Dict[str, CacheEntry] = {}
        self._ttl_seconds = ttl_seconds
        self._clock = clock
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[Any]:
        """Cached value, or None on a miss or an expired entry."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                logger.debug(f"Cache miss: {key}")
                return None
            if entry.is_expired(self._clock()):
                del self._entries[key]
                logger.debug(f"Cache expired: {key}")
                return None
            return entry.data

    def set(self, key: str, data: Any, ttl_seconds: Optional[int] = None) -> None:
        ttl = self._ttl_seconds if ttl_seconds is None else ttl_seconds
        with self._lock:
            self._entries[key] = CacheEntry(
                data=data,
                expires_at=self._clock() + timedelta(seconds=ttl),
            )

    def invalidate(self, pattern: str) -> int:
        """Drop every key matching a glob pattern. Returns how many were removed."""
        with self._lock:
            stale = [key for key in self._entries if fnmatch.fnmatchcase(key, pattern)]
            for key in stale:
                del self._entries[key]
        if stale:
            logger.debug(f"Invalidated {len(stale)} cache entries for {pattern}")
        return len(stale)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()


_list_cache: Optional[ListCache] = None


def get_list_cache() -> ListCache:
    """Get singleton list cache instance."""
    global _list_cache
    if _list_cache is None:
        _list_cache = ListCache(ttl_seconds=settings.list_cache_ttl_seconds)
    return _list_cache
