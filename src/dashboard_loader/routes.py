"""Route fetch strategy.

Decides, per route, how a raw dashboard definition is obtained, and which
cache slot a request reads from and writes to.
"""

import logging
from typing import Callable, Optional, Protocol

from .location import strip_base_from_url
from .models import (
    HOME_DASHBOARD_CACHE_KEY,
    DashboardDefinition,
    DashboardRoute,
    FolderDTO,
    HomeDashboardResponse,
    LoadDashboardOptions,
)
from .results import FetchOutcome
from .scene import build_new_dashboard_definition

logger = logging.getLogger(__name__)


class DashboardBackend(Protocol):
    """Backend calls the loader depends on."""

    async def get_home_dashboard(self) -> HomeDashboardResponse:
        ...

    async def load_dashboard(self, uid: str) -> DashboardDefinition:
        ...

    async def get_folder_by_uid(self, folder_uid: str) -> FolderDTO:
        ...


def cache_key_for(route: DashboardRoute, uid: str) -> str:
    """Key a request reads the definition cache with."""
    return HOME_DASHBOARD_CACHE_KEY if route is DashboardRoute.HOME else uid


def cache_write_key(route: DashboardRoute, uid: str) -> Optional[str]:
    """Key a fetched definition is stored under, or None when it must not be cached.

    New dashboards carry no uid and are never stored.
    """
    if uid:
        return uid
    if route is DashboardRoute.HOME:
        return HOME_DASHBOARD_CACHE_KEY
    return None


class RouteFetchStrategy:
    """Dispatch a load request to the fetch appropriate for its route."""

    def __init__(
        self,
        backend: DashboardBackend,
        app_sub_url: str = "",
        new_dashboard_builder: Callable[[Optional[str]], DashboardDefinition] = build_new_dashboard_definition,
    ):
        self.backend = backend
        self.app_sub_url = app_sub_url
        self.new_dashboard_builder = new_dashboard_builder

    async def fetch(self, options: LoadDashboardOptions) -> FetchOutcome:
        if options.route is DashboardRoute.NEW:
            return FetchOutcome.of(self.new_dashboard_builder(options.url_folder_uid))

        if options.route is DashboardRoute.HOME:
            return await self._fetch_home()

        definition = await self.backend.load_dashboard(options.uid)
        if options.route is DashboardRoute.EMBEDDED:
            definition = definition.with_meta(is_embedded=True)
        return FetchOutcome.of(definition)

    async def _fetch_home(self) -> FetchOutcome:
        rsp = await self.backend.get_home_dashboard()

        # User configured a custom home dashboard
        if rsp.redirect_uri:
            target = strip_base_from_url(rsp.redirect_uri, self.app_sub_url)
            logger.info(f"Home dashboard redirects to {target}")
            return FetchOutcome.redirect(target)

        definition = rsp.to_definition()
        if rsp.meta is not None:
            # The home view is read-only
            definition = definition.with_meta(can_save=False, can_share=False, can_star=False)
        return FetchOutcome.of(definition)
