"""Dashboard scene and the definition builders that feed it.

A scene is the in-memory, render-ready form of one dashboard definition.
"""

import copy
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from .models import DashboardDefinition, DashboardMeta

logger = logging.getLogger(__name__)

NEW_DASHBOARD_TITLE = "New dashboard"


@dataclass(frozen=True)
class ScenePanel:
    """Panel as placed in the scene grid."""
    id: int
    title: str
    type: str
    grid_pos: Dict[str, int]


@dataclass(eq=False)
class DashboardScene:
    """Render-ready dashboard built from a single definition.

    Equality is identity: consumers share the cached instance by reference.
    """
    uid: str
    title: str
    panels: Tuple[ScenePanel, ...]
    meta: DashboardMeta
    tags: Tuple[str, ...] = ()
    is_url_syncing: bool = False
    url_sync_path: Optional[str] = None
    extras: Dict[str, Any] = field(default_factory=dict)

    def start_url_sync(self, pathname: Optional[str] = None) -> None:
        """Mark the scene as driving URL state from now on."""
        self.is_url_syncing = True
        self.url_sync_path = pathname
        logger.debug(f"URL sync started for dashboard uid={self.uid or '<new>'}")

    def stop_url_sync(self) -> None:
        self.is_url_syncing = False
        self.url_sync_path = None


def build_new_dashboard_definition(folder_uid: Optional[str] = None) -> DashboardDefinition:
    """Build the definition of a new, unsaved dashboard."""
    return DashboardDefinition(
        dashboard={
            "uid": "",
            "title": NEW_DASHBOARD_TITLE,
            "editable": True,
            "panels": [],
            "tags": [],
            "schemaVersion": 39,
        },
        meta=DashboardMeta(
            can_save=True,
            can_share=False,
            can_star=False,
            can_edit=True,
            is_new=True,
            folder_uid=folder_uid or "",
        ),
    )


def _build_panel(raw: Dict[str, Any], index: int) -> ScenePanel:
    grid_pos = raw.get("gridPos") or {}
    return ScenePanel(
        id=int(raw.get("id", index + 1)),
        title=str(raw.get("title", "")),
        type=str(raw.get("type", "timeseries")),
        grid_pos={
            "x": int(grid_pos.get("x", 0)),
            "y": int(grid_pos.get("y", 0)),
            "w": int(grid_pos.get("w", 12)),
            "h": int(grid_pos.get("h", 8)),
        },
    )


def transform_definition_to_scene(definition: DashboardDefinition) -> DashboardScene:
    """Build a fresh scene from a definition; never shares mutable state with it."""
    content = definition.dashboard
    panels: List[Dict[str, Any]] = content.get("panels") or []
    known = {"uid", "title", "panels", "tags"}

    return DashboardScene(
        uid=content.get("uid") or "",
        title=content.get("title") or "",
        panels=tuple(_build_panel(p, i) for i, p in enumerate(panels)),
        meta=definition.meta,
        tags=tuple(content.get("tags") or ()),
        extras=copy.deepcopy({k: v for k, v in content.items() if k not in known}),
    )
