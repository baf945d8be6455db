"""Keyed Cache Core Module.

This module contains the KeyedCache class shared by the definition and scene
caches. Expiry is delegated to an injected policy and checked lazily on read;
there is no background sweep and no size-based eviction.
"""

import logging
import time
from dataclasses import dataclass
from typing import Callable, Dict, Generic, Optional, TypeVar

from .cache_entry import CacheEntry
from .cache_policy import ExpiryPolicy, NoExpiryPolicy

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class CacheStats:
    """Cache statistics."""
    hits: int = 0
    misses: int = 0
    expired: int = 0
    writes: int = 0
    entry_count: int = 0

    def calculate_hit_rate(self) -> float:
        """Calculate hit rate."""
        total = self.hits + self.misses
        return self.hits / total if total > 0 else 0.0


class KeyedCache(Generic[T]):
    """String-keyed cache with a pluggable expiry policy."""

    def __init__(
        self,
        policy: Optional[ExpiryPolicy] = None,
        clock: Callable[[], float] = time.monotonic,
        name: str = "cache",
    ):
        """Initialize the cache.

        Args:
            policy: Expiry policy consulted on every read
            clock: Callable returning the current time in seconds
            name: Label used in log messages
        """
        self.policy = policy or NoExpiryPolicy()
        self.name = name
        self._clock = clock
        self._entries: Dict[str, CacheEntry[T]] = {}
        self._stats = CacheStats()

    def get(self, key: str) -> Optional[T]:
        """Return the cached value, or None when missing or expired."""
        entry = self._entries.get(key)

        if entry is None:
            self._stats.misses += 1
            return None

        if self.policy.is_expired(entry, self._clock()):
            del self._entries[key]
            self._stats.misses += 1
            self._stats.expired += 1
            logger.debug(f"{self.name}: entry expired key={key}")
            return None

        self._stats.hits += 1
        return entry.value

    def set(self, key: str, value: T) -> None:
        """Store value under key, overwriting any previous entry."""
        self._entries[key] = CacheEntry(key=key, value=value, stored_at=self._clock())
        self._stats.writes += 1
        logger.debug(f"{self.name}: stored key={key}")

    def delete(self, key: str) -> bool:
        """Remove key from the cache."""
        return self._entries.pop(key, None) is not None

    def clear(self) -> None:
        """Drop every entry."""
        self._entries.clear()
        logger.info(f"{self.name}: cleared")

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None

    def __len__(self) -> int:
        return len(self._entries)

    def get_stats(self) -> CacheStats:
        """Return a snapshot of the cache statistics."""
        return CacheStats(
            hits=self._stats.hits,
            misses=self._stats.misses,
            expired=self._stats.expired,
            writes=self._stats.writes,
            entry_count=len(self._entries),
        )
