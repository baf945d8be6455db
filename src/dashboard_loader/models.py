"""Dashboard Loader - Data models.

This module defines Pydantic models for the dashboard payloads exchanged with
the backend and for the options accepted by the load orchestrator. Wire names
are camelCase; Python attributes are snake_case.
"""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

# Cache slot shared by every home dashboard request, whoever the user is.
HOME_DASHBOARD_CACHE_KEY = "__grafana_home_uid__"


class DashboardRoute(str, Enum):
    """Kind of navigation that triggered a dashboard load."""
    NEW = "new"
    HOME = "home"
    NORMAL = "normal"
    EMBEDDED = "embedded"


class _WireModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="allow",
    )


class DashboardMeta(_WireModel):
    """Server-side metadata describing a dashboard."""

    slug: Optional[str] = None
    url: Optional[str] = None
    folder_uid: Optional[str] = None
    folder_title: Optional[str] = None
    can_save: bool = True
    can_share: bool = True
    can_star: bool = True
    can_edit: bool = True
    is_new: bool = False
    is_embedded: bool = False


class DashboardDefinition(_WireModel):
    """Raw dashboard as received from the backend.

    Instances are immutable; overrides are applied with ``model_copy``.
    """

    dashboard: Dict[str, Any] = Field(default_factory=dict)
    meta: DashboardMeta = Field(default_factory=DashboardMeta)

    @property
    def uid(self) -> str:
        return self.dashboard.get("uid") or ""

    @property
    def has_content(self) -> bool:
        return bool(self.dashboard)

    def with_meta(self, **changes: Any) -> "DashboardDefinition":
        """Return a copy of this definition with meta fields replaced."""
        return self.model_copy(update={"meta": self.meta.model_copy(update=changes)})


class HomeDashboardResponse(_WireModel):
    """Response of the home dashboard endpoint.

    Either a dashboard with its meta, or a redirect to the user's custom home.
    """

    dashboard: Optional[Dict[str, Any]] = None
    meta: Optional[DashboardMeta] = None
    redirect_uri: Optional[str] = None

    def to_definition(self) -> DashboardDefinition:
        return DashboardDefinition(
            dashboard=self.dashboard or {},
            meta=self.meta or DashboardMeta(),
        )


class FolderParent(_WireModel):
    """Ancestor reference returned inside a folder payload."""

    uid: str
    title: str
    url: Optional[str] = None


class FolderDTO(_WireModel):
    """Folder payload; only the folder API knows about ancestors."""

    uid: str
    title: str
    url: Optional[str] = None
    parents: List[FolderParent] = Field(default_factory=list)


class LoadDashboardOptions(BaseModel):
    """Options accepted by the orchestrator's load operations."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    uid: str = ""
    route: DashboardRoute = DashboardRoute.NORMAL
    url_folder_uid: Optional[str] = None

    @field_validator("uid")
    @classmethod
    def strip_uid(cls, v):
        """Normalize surrounding whitespace in the uid."""
        return (v or "").strip()
