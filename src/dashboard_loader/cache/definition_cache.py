"""Definition Cache Module.

Short-lived cache of raw dashboard definitions, used to avoid fetching the
same dashboard several times across a short time span.
"""

import time
from typing import Callable, Optional

from ..models import DashboardDefinition
from .cache_policy import TTLPolicy
from .keyed_cache import KeyedCache

# Seconds a fetched definition stays usable.
DASHBOARD_CACHE_TTL = 2.0


class DefinitionCache(KeyedCache[DashboardDefinition]):
    """Time-boxed cache of dashboard definitions keyed by uid or home sentinel."""

    def __init__(
        self,
        ttl: float = DASHBOARD_CACHE_TTL,
        clock: Callable[[], float] = time.monotonic,
    ):
        super().__init__(policy=TTLPolicy(ttl), clock=clock, name="definition-cache")

    @property
    def ttl(self) -> float:
        return self.policy.ttl

    def get(self, key: str) -> Optional[DashboardDefinition]:
        if not key:
            return None
        return super().get(key)
