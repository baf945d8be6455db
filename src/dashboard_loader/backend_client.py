"""Dashboard Loader - backend HTTP client.

This module implements the aiohttp client used to fetch dashboards, the home
dashboard and folder ancestry from the dashboard backend.
"""

import asyncio
import logging
from typing import Any, Dict, Optional
from urllib.parse import quote

import aiohttp

from .config import BackendConfig
from .exceptions import BackendTransportError, FetchCancelledError
from .models import DashboardDefinition, FolderDTO, HomeDashboardResponse

logger = logging.getLogger(__name__)

# Dashboard loads share one request id: starting a new load cancels the old one.
# The id is process-wide, so when the loader is served over HTTP, concurrent
# loads from different clients cancel each other and the older one reports
# a cancelled status.
DASHBOARD_LOAD_REQUEST_ID = "dashboard-load"


class DashboardBackendClient:
    """客户端类，用于与仪表盘后端进行HTTP通信"""

    def __init__(self, config: Optional[BackendConfig] = None):
        self.config = config or BackendConfig()
        self.base_url = self.config.base_url.rstrip("/")
        self.session: Optional[aiohttp.ClientSession] = None
        self._in_flight: Dict[str, "asyncio.Future[Any]"] = {}

    async def __aenter__(self):
        self._ensure_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    def _ensure_session(self) -> aiohttp.ClientSession:
        if self.session is None or self.session.closed:
            headers = {"Accept": "application/json"}
            if self.config.api_key:
                headers["Authorization"] = f"Bearer {self.config.api_key}"
            self.session = aiohttp.ClientSession(
                headers=headers,
                timeout=aiohttp.ClientTimeout(total=self.config.timeout),
            )
        return self.session

    async def close(self):
        """关闭客户端会话"""
        for task in self._in_flight.values():
            task.cancel()
        self._in_flight.clear()
        if self.session:
            await self.session.close()
            self.session = None

    async def _request(self, session: aiohttp.ClientSession, url: str) -> Any:
        try:
            async with session.get(url) as response:
                if response.status >= 400:
                    raise BackendTransportError(
                        f"HTTP request failed: {response.status}, message='{response.reason}', url='{url}'",
                        status=response.status,
                        url=url,
                    )
                return await response.json()
        except aiohttp.ClientError as e:
            raise BackendTransportError(f"Request error: {e}", url=url) from e

    async def _get_json(self, endpoint: str, request_id: Optional[str] = None) -> Any:
        """GET an endpoint and decode JSON.

        When ``request_id`` is given, a still-running request with the same id
        is cancelled and its caller receives FetchCancelledError.
        """
        session = self._ensure_session()
        url = f"{self.base_url}{endpoint}"
        task = asyncio.ensure_future(self._request(session, url))

        if request_id:
            previous = self._in_flight.get(request_id)
            if previous is not None and not previous.done():
                logger.debug(f"Cancelling superseded request id={request_id}")
                previous.cancel()
            self._in_flight[request_id] = task

        try:
            return await asyncio.shield(task)
        except asyncio.CancelledError:
            if task.cancelled():
                raise FetchCancelledError(request_id=request_id)
            # The caller itself was cancelled.
            task.cancel()
            raise
        finally:
            if request_id and self._in_flight.get(request_id) is task:
                del self._in_flight[request_id]

    async def get_home_dashboard(self) -> HomeDashboardResponse:
        """获取首页仪表盘"""
        data = await self._get_json("/api/dashboards/home", request_id=DASHBOARD_LOAD_REQUEST_ID)
        return HomeDashboardResponse.model_validate(data or {})

    async def load_dashboard(self, uid: str) -> DashboardDefinition:
        """按UID获取仪表盘"""
        data = await self._get_json(f"/api/dashboards/uid/{quote(uid, safe='')}", request_id=DASHBOARD_LOAD_REQUEST_ID)
        return DashboardDefinition.model_validate(data or {})

    async def get_folder_by_uid(self, folder_uid: str) -> FolderDTO:
        """获取文件夹及其祖先"""
        data = await self._get_json(f"/api/folders/{quote(folder_uid, safe='')}")
        return FolderDTO.model_validate(data)
