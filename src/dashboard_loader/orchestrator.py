"""Dashboard Load Orchestrator.

This module contains the DashboardLoadOrchestrator, which turns a dashboard
load request into a render-ready scene while keeping two caches:

* a short-lived definition cache, so the same dashboard is not fetched
  several times across a short time span;
* an unbounded scene cache, so revisiting a dashboard reuses its scene.

It also owns the page lifecycle state observed by the UI layer.
"""

import asyncio
import logging
from typing import Callable, Dict, Optional

from .cache import DefinitionCache, SceneCache
from .config import LoaderConfig
from .exceptions import DashboardNotFoundError, FetchCancelledError
from .location import LocationService, strip_base_from_url
from .models import DashboardDefinition, LoadDashboardOptions
from .navigation import NavIndexStore, build_nav_model
from .registry import CurrentDashboardRegistry
from .results import FetchOutcome, FetchStatus, LoadResult, LoadStatus
from .routes import DashboardBackend, RouteFetchStrategy, cache_key_for, cache_write_key
from .scene import DashboardScene, build_new_dashboard_definition, transform_definition_to_scene
from .state import LifecycleState, StateManagerBase

logger = logging.getLogger(__name__)


class DashboardLoadOrchestrator(StateManagerBase[LifecycleState]):
    """Resolve dashboard requests into scenes and track page load state."""

    def __init__(
        self,
        backend: DashboardBackend,
        config: Optional[LoaderConfig] = None,
        location: Optional[LocationService] = None,
        nav_index: Optional[NavIndexStore] = None,
        registry: Optional[CurrentDashboardRegistry] = None,
        transformer: Callable[[DashboardDefinition], DashboardScene] = transform_definition_to_scene,
        new_dashboard_builder: Callable[[Optional[str]], DashboardDefinition] = build_new_dashboard_definition,
        definition_cache: Optional[DefinitionCache] = None,
        scene_cache: Optional[SceneCache] = None,
    ):
        """Initialize the orchestrator.

        Args:
            backend: Backend used for home, dashboard and folder requests
            config: Loader configuration; defaults are used when omitted
            location: Location service for redirects and canonical URLs
            nav_index: Shared navigation state fed with folder breadcrumbs
            registry: Registry of the currently active dashboard
            transformer: Builds a scene from a definition
            new_dashboard_builder: Builds the definition of a new dashboard
            definition_cache: Definition cache override, mainly for tests
            scene_cache: Scene cache override, mainly for tests
        """
        super().__init__(LifecycleState())
        self.config = config or LoaderConfig()
        self.backend = backend
        self.location = location or LocationService()
        self.nav_index = nav_index or NavIndexStore()
        self.registry = registry or CurrentDashboardRegistry()
        self.transform = transformer
        self.definition_cache = definition_cache or DefinitionCache(ttl=self.config.cache.definition_ttl)
        self.scene_cache = scene_cache or SceneCache()
        self.strategy = RouteFetchStrategy(
            backend,
            app_sub_url=self.config.backend.app_sub_url,
            new_dashboard_builder=new_dashboard_builder,
        )
        self.single_flight = self.config.cache.single_flight
        self._in_flight: Dict[str, "asyncio.Future[FetchOutcome]"] = {}

        logger.info(
            f"DashboardLoadOrchestrator initialized with definition_ttl={self.definition_cache.ttl}, "
            f"single_flight={self.single_flight}"
        )

    async def fetch_definition(self, options: LoadDashboardOptions) -> Optional[DashboardDefinition]:
        """Return the definition for a request, or None on redirect or cancellation."""
        outcome = await self._resolve_definition(options)
        return outcome.definition

    async def load_scene(self, options: LoadDashboardOptions) -> DashboardScene:
        """Return the scene for a request, building and caching it on a miss.

        Raises:
            DashboardNotFoundError: no definition with content was obtained
            FetchCancelledError: the backend request was superseded
        """
        if options.uid:
            cached = self.scene_cache.get(options.uid)
            if cached is not None:
                logger.debug(f"Scene cache hit uid={options.uid}")
                return cached

        outcome = await self._resolve_definition(options)

        if outcome.status is FetchStatus.CANCELLED:
            raise FetchCancelledError(uid=options.uid)

        definition = outcome.definition
        if definition is not None and definition.has_content:
            scene = self.transform(definition)
            if options.uid:
                self.scene_cache.set(options.uid, scene)
            return scene

        raise DashboardNotFoundError(uid=options.uid, redirect_to=outcome.redirect_to)

    async def load_scene_result(self, options: LoadDashboardOptions) -> LoadResult:
        """Tagged-result form of load_scene."""
        try:
            scene = await self.load_scene(options)
        except FetchCancelledError:
            return LoadResult.cancelled()
        except DashboardNotFoundError as e:
            return LoadResult.not_found(e.message, redirect_to=e.redirect_to)
        except Exception as e:
            return LoadResult.transport_error(str(e))
        return LoadResult.success(scene)

    async def load_dashboard(self, options: LoadDashboardOptions) -> LoadResult:
        """Load a dashboard into the page state. Failures end up in ``load_error``."""
        previous = self.state
        self.set_state(scene=None, is_loading=True, load_error=None)
        loading = self.state

        result = await self.load_scene_result(options)

        if result.ok:
            result.scene.start_url_sync(self.location.get_location().pathname)
            self.registry.set_current(result.scene)
            self.set_state(scene=result.scene, is_loading=False, load_error=None)
        elif result.status is LoadStatus.CANCELLED:
            # Leave the page to whichever request superseded this one.
            if self.state is loading:
                self.set_state(
                    scene=previous.scene,
                    panel_editor=previous.panel_editor,
                    is_loading=previous.is_loading,
                    load_error=previous.load_error,
                )
        else:
            self.set_state(scene=None, is_loading=False, load_error=result.detail)

        return result

    def get_from_cache(self, key: str) -> Optional[DashboardDefinition]:
        return self.definition_cache.get(key)

    def get_scene_from_cache(self, uid: str) -> Optional[DashboardScene]:
        return self.scene_cache.get(uid) if uid else None

    def set_definition_cache(self, key: str, definition: DashboardDefinition) -> None:
        """Seed the definition cache, e.g. right after a dashboard is saved."""
        self.definition_cache.set(key, definition)

    def clear_state(self) -> None:
        """Reset the page state. Both caches are kept."""
        self.registry.set_current(None)
        self.set_state(scene=None, panel_editor=None, is_loading=False, load_error=None)

    def reset_caches(self) -> None:
        self.definition_cache.clear()
        self.scene_cache.clear()

    async def close(self) -> None:
        """Release the backend session if the backend owns one."""
        for pending in self._in_flight.values():
            pending.cancel()
        self._in_flight.clear()
        close = getattr(self.backend, "close", None)
        if close is not None:
            await close()

    async def _resolve_definition(self, options: LoadDashboardOptions) -> FetchOutcome:
        key = cache_key_for(options.route, options.uid)
        cached = self.definition_cache.get(key)
        if cached is not None:
            logger.debug(f"Definition cache hit key={key}")
            return FetchOutcome.of(cached, from_cache=True)

        write_key = cache_write_key(options.route, options.uid)
        if not (self.single_flight and write_key):
            return await self._fetch_and_store(options)

        pending = self._in_flight.get(write_key)
        if pending is None:
            pending = asyncio.ensure_future(self._fetch_and_store(options))
            self._in_flight[write_key] = pending
            pending.add_done_callback(lambda done, k=write_key: self._forget_in_flight(k, done))
        else:
            logger.debug(f"Joining in-flight fetch key={write_key}")
        try:
            return await asyncio.shield(pending)
        except asyncio.CancelledError:
            current = asyncio.current_task()
            cancelling = getattr(current, "cancelling", None)
            if pending.cancelled() and not (cancelling and cancelling()):
                # The shared fetch was cancelled, not this caller.
                return FetchOutcome.cancelled()
            raise

    def _forget_in_flight(self, key: str, done: "asyncio.Future[FetchOutcome]") -> None:
        if self._in_flight.get(key) is done:
            del self._in_flight[key]

    async def _fetch_and_store(self, options: LoadDashboardOptions) -> FetchOutcome:
        try:
            outcome = await self.strategy.fetch(options)

            if outcome.status is FetchStatus.REDIRECT:
                self.location.replace(outcome.redirect_to)
                return outcome

            definition = outcome.definition
            self._sync_canonical_url(definition)

            # Populate nav model in shared state according to the folder
            await self._init_nav_model(definition)

            write_key = cache_write_key(options.route, options.uid)
            if write_key:
                self.definition_cache.set(write_key, definition)

            return outcome
        except FetchCancelledError:
            logger.debug(f"Fetch cancelled uid={options.uid!r} route={options.route.value}")
            return FetchOutcome.cancelled()
        except Exception as e:
            logger.error(f"Failed to fetch dashboard uid={options.uid!r} route={options.route.value}: {e}")
            raise

    def _sync_canonical_url(self, definition: DashboardDefinition) -> None:
        meta = definition.meta
        if not meta.url or meta.is_embedded:
            return

        dashboard_url = strip_base_from_url(meta.url, self.config.backend.app_sub_url)
        current_path = self.location.get_location().pathname
        if dashboard_url != current_path:
            # Query string and hash are kept; only the path is corrected
            self.location.replace_pathname(dashboard_url)
            logger.info(f"Corrected dashboard URL from {current_path} to {dashboard_url}")

    async def _init_nav_model(self, definition: DashboardDefinition) -> None:
        folder_uid = definition.meta.folder_uid
        if not folder_uid:
            return

        try:
            folder = await self.backend.get_folder_by_uid(folder_uid)
            self.nav_index.update(build_nav_model(folder))
        except Exception as e:
            logger.warning(f"Error fetching parent folder {folder_uid} for dashboard: {e}")
