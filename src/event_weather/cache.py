"""Time-bounded cache for weather lookups.

Entries live for a fixed TTL (one hour by default, the same for every key).
Expired entries are dropped lazily when looked up; there is no background
sweeper. Hit and miss counters accumulate until `clear()`.

## Concurrency

The cache is shared by every request handled on the event loop. Its methods
never await, so each call is atomic with respect to other coroutines, but the
caller's miss -> fetch -> put sequence is not: two requests missing on the same
key will both fetch upstream and both store their result. The outcome is
idempotent, only wasteful.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Callable

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

CACHE_TTL_SECONDS = 3600


@dataclass(frozen=True)
class CacheEntry:
    """A cached value and the time it was stored."""

    key: str
    value: Any
    inserted_at: float
    ttl_seconds: float

    def is_expired(self, now: float) -> bool:
        return now - self.inserted_at >= self.ttl_seconds


class CacheStats(BaseModel):
    """Cache counters and live key listing."""

    hits: int = Field(default=0, ge=0)
    misses: int = Field(default=0, ge=0)
    cache_size: int = Field(default=0, ge=0, description="Number of live keys")
    keys: list[str] = Field(default_factory=list)


def cache_key(kind: str, location: str) -> str:
    """Build the cache key for a query kind ("current", "forecast") and location."""
    return f"{kind}_{location}"


class TemporalCache:
    """In-memory cache with a fixed time-to-live.

    Example:
        ```python
        cache = TemporalCache()
        cache.put("current_Lisbon", snapshot)
        cache.get("current_Lisbon")  # snapshot, counted as a hit
        ```
    """

    def __init__(
        self,
        ttl_seconds: float = CACHE_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        """Initialize the cache.

        Args:
            ttl_seconds: Lifetime applied to every entry
            clock: Monotonic seconds source (injectable for tests)
        """
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._hits = 0
        self._misses = 0

    def get(self, key: str) -> Any | None:
        """Return the live value for key, or None.

        A live entry counts as a hit. A missing or expired entry counts as a
        miss, and an expired entry is removed.
        """
        entry = self._entries.get(key)
        if entry is not None and entry.is_expired(self._clock()):
            del self._entries[key]
            logger.debug(f"Cache entry expired: {key}")
            entry = None

        if entry is None:
            self._misses += 1
            logger.debug(f"Cache miss: {key}")
            return None

        self._hits += 1
        logger.info(f"Cache hit: {key}")
        return entry.value

    def put(self, key: str, value: Any) -> None:
        """Store value under key, replacing any existing entry."""
        self._entries[key] = CacheEntry(
            key=key,
            value=value,
            inserted_at=self._clock(),
            ttl_seconds=self.ttl_seconds,
        )

    def stats(self) -> CacheStats:
        """Get counters and the keys of entries that have not expired."""
        now = self._clock()
        live_keys = [
            key for key, entry in self._entries.items() if not entry.is_expired(now)
        ]
        return CacheStats(
            hits=self._hits,
            misses=self._misses,
            cache_size=len(live_keys),
            keys=live_keys,
        )

    def clear(self) -> None:
        """Remove every entry and reset the counters."""
        self._entries.clear()
        self._hits = 0
        self._misses = 0
        logger.info("Weather cache cleared")

    def __len__(self) -> int:
        return len(self._entries)
