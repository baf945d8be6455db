import pytest
from unittest.mock import AsyncMock, MagicMock

from dashboard_loader.cache import DefinitionCache
from dashboard_loader.config import LoaderConfig
from dashboard_loader.location import LocationService
from dashboard_loader.models import (
    DashboardDefinition,
    DashboardMeta,
    FolderDTO,
    HomeDashboardResponse,
)
from dashboard_loader.navigation import NavIndexStore
from dashboard_loader.orchestrator import DashboardLoadOrchestrator
from dashboard_loader.registry import CurrentDashboardRegistry


class FakeClock:
    """Manually advanced clock, in seconds."""

    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def make_definition(uid="abc", title="ABC dashboard", url=None, folder_uid=None, panels=None):
    return DashboardDefinition(
        dashboard={
            "uid": uid,
            "title": title,
            "panels": panels if panels is not None else [
                {"id": 1, "title": "CPU", "type": "timeseries", "gridPos": {"x": 0, "y": 0, "w": 12, "h": 8}},
            ],
        },
        meta=DashboardMeta(url=url, folder_uid=folder_uid),
    )


def make_backend(dashboards=None, home=None, folders=None):
    """Backend double whose calls resolve from the given lookup tables."""
    dashboards = dashboards if dashboards is not None else {}
    folders = folders if folders is not None else {}
    backend = MagicMock()

    def load_dashboard(uid):
        return dashboards[uid]

    def get_folder_by_uid(folder_uid):
        return folders[folder_uid]

    backend.load_dashboard = AsyncMock(side_effect=load_dashboard)
    backend.get_home_dashboard = AsyncMock(return_value=home or HomeDashboardResponse())
    backend.get_folder_by_uid = AsyncMock(side_effect=get_folder_by_uid)
    backend.close = AsyncMock()
    return backend


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def abc_definition():
    return make_definition(uid="abc", url="/d/abc/abc-dashboard", folder_uid="ops")


@pytest.fixture
def ops_folder():
    return FolderDTO.model_validate({
        "uid": "ops",
        "title": "Operations",
        "url": "/dashboards/f/ops/operations",
        "parents": [{"uid": "root", "title": "Root", "url": "/dashboards/f/root/root"}],
    })


@pytest.fixture
def backend(abc_definition, ops_folder):
    return make_backend(dashboards={"abc": abc_definition}, folders={"ops": ops_folder})


@pytest.fixture
def location():
    return LocationService("/d/abc?orgId=1&from=now-6h")


@pytest.fixture
def registry():
    return CurrentDashboardRegistry()


@pytest.fixture
def orchestrator(backend, location, registry, clock):
    return DashboardLoadOrchestrator(
        backend=backend,
        config=LoaderConfig(),
        location=location,
        nav_index=NavIndexStore(),
        registry=registry,
        definition_cache=DefinitionCache(clock=clock),
    )
