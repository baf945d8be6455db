"""Cache Policy Module.

Expiry policies decide, at read time, whether a stored entry is still usable.
"""

from typing import Protocol

from .cache_entry import CacheEntry


class ExpiryPolicy(Protocol):
    """Read-time expiry check for cache entries."""

    def is_expired(self, entry: CacheEntry, now: float) -> bool:
        ...


class TTLPolicy:
    """Entries expire once their age exceeds ``ttl`` seconds."""

    def __init__(self, ttl: float):
        if ttl < 0:
            raise ValueError(f"ttl must be non-negative, got {ttl}")
        self.ttl = ttl

    def is_expired(self, entry: CacheEntry, now: float) -> bool:
        # An entry exactly ttl old is still valid.
        return entry.age(now) > self.ttl

    def __repr__(self) -> str:
        return f"TTLPolicy(ttl={self.ttl})"


class NoExpiryPolicy:
    """Entries never expire; they only leave the cache on explicit clearing."""

    def is_expired(self, entry: CacheEntry, now: float) -> bool:
        return False

    def __repr__(self) -> str:
        return "NoExpiryPolicy()"
