"""
FastAPI应用工厂模块
负责创建和配置FastAPI应用实例
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from .api import router
from .config import LoaderConfig
from .instance import dispose_orchestrator, initialize_orchestrator
from .orchestrator import DashboardLoadOrchestrator


def create_app(
    config: Optional[LoaderConfig] = None,
    orchestrator: Optional[DashboardLoadOrchestrator] = None,
) -> FastAPI:
    """创建FastAPI应用实例

    When no orchestrator is given, the global one is initialized on startup
    and disposed on shutdown.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if orchestrator is not None:
            app.state.orchestrator = orchestrator
            yield
            return

        app.state.orchestrator = initialize_orchestrator(config)
        try:
            yield
        finally:
            await dispose_orchestrator()

    app = FastAPI(
        title="Dashboard Loader API",
        description="Dashboard load and cache orchestration service",
        version="1.0.0",
        lifespan=lifespan,
    )
    if orchestrator is not None:
        app.state.orchestrator = orchestrator

    app.include_router(router)

    @app.get("/")
    async def root():
        return {"message": "Welcome to Dashboard Loader"}

    return app
