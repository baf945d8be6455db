"""Scene Cache Module."""

import time
from typing import TYPE_CHECKING, Callable

from .cache_policy import NoExpiryPolicy
from .keyed_cache import KeyedCache

if TYPE_CHECKING:
    from ..scene import DashboardScene


class SceneCache(KeyedCache["DashboardScene"]):
    """Unbounded cache of built scenes; entries leave only on clear()."""

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        super().__init__(policy=NoExpiryPolicy(), clock=clock, name="scene-cache")

    def set(self, key: str, value: "DashboardScene") -> None:
        if not key:
            raise ValueError("scenes can only be cached under a non-empty uid")
        super().set(key, value)
