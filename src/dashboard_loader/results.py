"""Tagged result types for fetch and load operations."""

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Optional

from .models import DashboardDefinition

if TYPE_CHECKING:
    from .scene import DashboardScene


class FetchStatus(Enum):
    """Outcome of a single route fetch."""
    DEFINITION = "definition"
    REDIRECT = "redirect"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class FetchOutcome:
    """Result of resolving a definition for one request."""
    status: FetchStatus
    definition: Optional[DashboardDefinition] = None
    redirect_to: Optional[str] = None
    from_cache: bool = False

    @classmethod
    def of(cls, definition: DashboardDefinition, from_cache: bool = False) -> "FetchOutcome":
        return cls(FetchStatus.DEFINITION, definition=definition, from_cache=from_cache)

    @classmethod
    def redirect(cls, target: str) -> "FetchOutcome":
        return cls(FetchStatus.REDIRECT, redirect_to=target)

    @classmethod
    def cancelled(cls) -> "FetchOutcome":
        return cls(FetchStatus.CANCELLED)


class LoadStatus(Enum):
    """Outcome of loading a scene."""
    OK = "ok"
    NOT_FOUND = "not_found"
    CANCELLED = "cancelled"
    TRANSPORT_ERROR = "transport_error"


@dataclass(frozen=True)
class LoadResult:
    """Ok(scene) | NotFound | Cancelled | TransportError(detail)."""
    status: LoadStatus
    scene: Optional["DashboardScene"] = None
    detail: Optional[str] = None
    redirect_to: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status is LoadStatus.OK

    @classmethod
    def success(cls, scene: "DashboardScene") -> "LoadResult":
        return cls(LoadStatus.OK, scene=scene)

    @classmethod
    def not_found(cls, detail: str = "Dashboard not found", redirect_to: Optional[str] = None) -> "LoadResult":
        return cls(LoadStatus.NOT_FOUND, detail=detail, redirect_to=redirect_to)

    @classmethod
    def cancelled(cls) -> "LoadResult":
        return cls(LoadStatus.CANCELLED)

    @classmethod
    def transport_error(cls, detail: str) -> "LoadResult":
        return cls(LoadStatus.TRANSPORT_ERROR, detail=detail)
