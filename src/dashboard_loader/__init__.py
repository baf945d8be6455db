"""Dashboard Loader - dashboard load and cache orchestration.

Resolves dashboard requests into render-ready scenes, keeping a short-lived
cache of fetched definitions and an unbounded cache of built scenes.
"""

__version__ = "1.0.0"

from .config import LoaderConfig
from .exceptions import (
    BackendTransportError,
    DashboardLoaderError,
    DashboardNotFoundError,
    FetchCancelledError,
)
from .models import (
    HOME_DASHBOARD_CACHE_KEY,
    DashboardDefinition,
    DashboardMeta,
    DashboardRoute,
    LoadDashboardOptions,
)
from .orchestrator import DashboardLoadOrchestrator
from .results import LoadResult, LoadStatus
from .scene import DashboardScene
from .state import LifecycleState

__all__ = [
    "LoaderConfig",
    "BackendTransportError",
    "DashboardLoaderError",
    "DashboardNotFoundError",
    "FetchCancelledError",
    "HOME_DASHBOARD_CACHE_KEY",
    "DashboardDefinition",
    "DashboardMeta",
    "DashboardRoute",
    "LoadDashboardOptions",
    "DashboardLoadOrchestrator",
    "LoadResult",
    "LoadStatus",
    "DashboardScene",
    "LifecycleState",
]
