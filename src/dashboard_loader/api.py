"""
仪表盘加载端点
Exposes the load orchestrator operations over HTTP.
"""

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException, Request

from .models import DashboardDefinition, LoadDashboardOptions
from .orchestrator import DashboardLoadOrchestrator

# 配置日志
logger = logging.getLogger(__name__)

# 创建路由器
router = APIRouter(prefix="/dashboards", tags=["dashboards"])


def get_dashboard_orchestrator(request: Request) -> DashboardLoadOrchestrator:
    """Resolve the orchestrator owned by the running application."""
    orchestrator: Optional[DashboardLoadOrchestrator] = getattr(request.app.state, "orchestrator", None)
    if orchestrator is None:
        raise HTTPException(status_code=503, detail="Dashboard orchestrator not initialized")
    return orchestrator


@router.post("/load")
async def load_dashboard(
    options: LoadDashboardOptions,
    orchestrator: DashboardLoadOrchestrator = Depends(get_dashboard_orchestrator),
) -> Dict[str, Any]:
    """加载仪表盘并返回页面状态

    The page state belongs to the process-wide orchestrator and is shared by
    every client; a load started by one client can cancel or replace another's.
    """
    result = await orchestrator.load_dashboard(options)
    return {
        "status": result.status.value,
        "redirectTo": result.redirect_to,
        "state": orchestrator.state.to_dict(),
    }


@router.get("/state")
async def get_state(
    orchestrator: DashboardLoadOrchestrator = Depends(get_dashboard_orchestrator),
) -> Dict[str, Any]:
    """获取页面状态"""
    return orchestrator.state.to_dict()


@router.delete("/state")
async def clear_state(
    orchestrator: DashboardLoadOrchestrator = Depends(get_dashboard_orchestrator),
) -> Dict[str, Any]:
    """清空页面状态"""
    orchestrator.clear_state()
    return orchestrator.state.to_dict()


@router.get("/cache/{key}")
async def get_cached_definition(
    key: str,
    orchestrator: DashboardLoadOrchestrator = Depends(get_dashboard_orchestrator),
) -> Dict[str, Any]:
    """读取定义缓存"""
    definition = orchestrator.get_from_cache(key)
    if definition is None:
        raise HTTPException(status_code=404, detail=f"No cached definition for key: {key}")
    return definition.model_dump(by_alias=True)


@router.put("/cache/{key}")
async def set_cached_definition(
    key: str,
    definition: DashboardDefinition,
    orchestrator: DashboardLoadOrchestrator = Depends(get_dashboard_orchestrator),
) -> Dict[str, Any]:
    """写入定义缓存"""
    orchestrator.set_definition_cache(key, definition)
    logger.info(f"Definition cache seeded for key={key}")
    return {"success": True, "key": key}


@router.delete("/cache")
async def reset_caches(
    orchestrator: DashboardLoadOrchestrator = Depends(get_dashboard_orchestrator),
) -> Dict[str, Any]:
    """清空所有缓存"""
    orchestrator.reset_caches()
    return {"success": True}
