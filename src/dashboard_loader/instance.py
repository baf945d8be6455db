"""Dashboard Load Orchestrator Instance Management.

The process-wide orchestrator is constructed and disposed explicitly by the
application; it is never created lazily on first access.
"""

from typing import Optional

from .backend_client import DashboardBackendClient
from .config import LoaderConfig
from .location import LocationService
from .navigation import NavIndexStore
from .orchestrator import DashboardLoadOrchestrator
from .registry import CurrentDashboardRegistry

# Global orchestrator instance
dashboard_orchestrator: Optional[DashboardLoadOrchestrator] = None


def create_orchestrator(
    config: Optional[LoaderConfig] = None,
    backend=None,
    location: Optional[LocationService] = None,
    nav_index: Optional[NavIndexStore] = None,
    registry: Optional[CurrentDashboardRegistry] = None,
) -> DashboardLoadOrchestrator:
    """Build an orchestrator wired to the default collaborators.

    Args:
        config: Loader configuration
        backend: Backend override; an aiohttp client is created when omitted
        location: Location service override
        nav_index: Navigation state override
        registry: Current dashboard registry override

    Returns:
        A new orchestrator owning its own caches
    """
    config = config or LoaderConfig()
    return DashboardLoadOrchestrator(
        backend=backend or DashboardBackendClient(config.backend),
        config=config,
        location=location,
        nav_index=nav_index,
        registry=registry,
    )


def initialize_orchestrator(config: Optional[LoaderConfig] = None, **kwargs) -> DashboardLoadOrchestrator:
    """Initialize the global orchestrator instance, replacing any previous one."""
    global dashboard_orchestrator

    dashboard_orchestrator = create_orchestrator(config, **kwargs)
    return dashboard_orchestrator


def get_orchestrator() -> Optional[DashboardLoadOrchestrator]:
    """Get the global orchestrator instance.

    Returns:
        Orchestrator if initialized, None otherwise
    """
    return dashboard_orchestrator


async def dispose_orchestrator() -> None:
    """Close and forget the global orchestrator instance."""
    global dashboard_orchestrator

    if dashboard_orchestrator is not None:
        await dashboard_orchestrator.close()
        dashboard_orchestrator = None
