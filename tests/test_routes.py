import asyncio

from dashboard_loader.models import (
    HOME_DASHBOARD_CACHE_KEY,
    DashboardMeta,
    DashboardRoute,
    HomeDashboardResponse,
    LoadDashboardOptions,
)
from dashboard_loader.results import FetchStatus
from dashboard_loader.routes import RouteFetchStrategy, cache_key_for, cache_write_key

from conftest import make_backend, make_definition


def test_cache_key_for_home_uses_sentinel():
    assert cache_key_for(DashboardRoute.HOME, "") == HOME_DASHBOARD_CACHE_KEY
    assert cache_key_for(DashboardRoute.HOME, "abc") == HOME_DASHBOARD_CACHE_KEY
    assert cache_key_for(DashboardRoute.NORMAL, "abc") == "abc"


def test_cache_write_key():
    assert cache_write_key(DashboardRoute.NORMAL, "abc") == "abc"
    assert cache_write_key(DashboardRoute.EMBEDDED, "abc") == "abc"
    assert cache_write_key(DashboardRoute.HOME, "") == HOME_DASHBOARD_CACHE_KEY
    assert cache_write_key(DashboardRoute.NEW, "") is None
    assert cache_write_key(DashboardRoute.NORMAL, "") is None


def test_new_route_builds_locally():
    backend = make_backend()
    strategy = RouteFetchStrategy(backend)

    outcome = asyncio.run(strategy.fetch(
        LoadDashboardOptions(route=DashboardRoute.NEW, url_folder_uid="ops")
    ))

    assert outcome.status is FetchStatus.DEFINITION
    assert outcome.definition.meta.is_new
    assert outcome.definition.meta.folder_uid == "ops"
    backend.load_dashboard.assert_not_called()
    backend.get_home_dashboard.assert_not_called()


def test_home_route_redirect_is_stripped_of_sub_url():
    backend = make_backend(home=HomeDashboardResponse(redirect_uri="/grafana/d/custom-home/my-home"))
    strategy = RouteFetchStrategy(backend, app_sub_url="/grafana")

    outcome = asyncio.run(strategy.fetch(LoadDashboardOptions(route=DashboardRoute.HOME)))

    assert outcome.status is FetchStatus.REDIRECT
    assert outcome.redirect_to == "/d/custom-home/my-home"
    assert outcome.definition is None


def test_home_route_is_read_only():
    home = HomeDashboardResponse(
        dashboard={"title": "Home", "panels": []},
        meta=DashboardMeta(can_save=True, can_share=True, can_star=True, can_edit=True),
    )
    strategy = RouteFetchStrategy(make_backend(home=home))

    outcome = asyncio.run(strategy.fetch(LoadDashboardOptions(route=DashboardRoute.HOME)))
    meta = outcome.definition.meta

    assert (meta.can_save, meta.can_share, meta.can_star) == (False, False, False)
    assert meta.can_edit is True
    # The backend response itself is not modified
    assert home.meta.can_save is True


def test_embedded_route_marks_definition():
    definition = make_definition(uid="emb")
    strategy = RouteFetchStrategy(make_backend(dashboards={"emb": definition}))

    outcome = asyncio.run(strategy.fetch(
        LoadDashboardOptions(uid="emb", route=DashboardRoute.EMBEDDED)
    ))

    assert outcome.definition.meta.is_embedded is True
    assert definition.meta.is_embedded is False


def test_normal_route_calls_generic_loader():
    backend = make_backend(dashboards={"abc": make_definition()})
    strategy = RouteFetchStrategy(backend)

    outcome = asyncio.run(strategy.fetch(LoadDashboardOptions(uid="abc")))

    backend.load_dashboard.assert_awaited_once_with("abc")
    assert outcome.definition.uid == "abc"
