"""Dashboard Cache Module.

This module provides the two caches owned by the load orchestrator: a
time-boxed cache of raw dashboard definitions and an unbounded cache of
derived dashboard scenes.
"""

from .cache_entry import CacheEntry
from .cache_policy import ExpiryPolicy, NoExpiryPolicy, TTLPolicy
from .keyed_cache import CacheStats, KeyedCache
from .definition_cache import DASHBOARD_CACHE_TTL, DefinitionCache
from .scene_cache import SceneCache

__all__ = [
    "CacheEntry",
    "CacheStats",
    "ExpiryPolicy",
    "NoExpiryPolicy",
    "TTLPolicy",
    "KeyedCache",
    "DASHBOARD_CACHE_TTL",
    "DefinitionCache",
    "SceneCache",
]
