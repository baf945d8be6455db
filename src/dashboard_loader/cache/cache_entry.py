"""Cache Entry Module.

This module defines the cache entry data structure stored by keyed caches.
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class CacheEntry(Generic[T]):
    """Cached value paired with the clock time it was stored at."""
    key: str
    value: T
    stored_at: float

    def age(self, now: float) -> float:
        """Seconds elapsed since the entry was stored."""
        return now - self.stored_at
