"""Observable page lifecycle state."""

import logging
from dataclasses import dataclass, replace
from typing import Any, Callable, Dict, Generic, List, Optional, TypeVar

from .scene import DashboardScene

logger = logging.getLogger(__name__)

S = TypeVar("S")


@dataclass(frozen=True)
class LifecycleState:
    """State visible to the page: idle, loading, loaded or errored."""
    scene: Optional[DashboardScene] = None
    panel_editor: Optional[Any] = None
    is_loading: bool = False
    load_error: Optional[str] = None

    @property
    def phase(self) -> str:
        if self.is_loading:
            return "loading"
        if self.load_error is not None:
            return "error"
        if self.scene is not None:
            return "loaded"
        return "idle"

    def to_dict(self) -> Dict[str, Any]:
        scene = self.scene
        return {
            "phase": self.phase,
            "isLoading": self.is_loading,
            "loadError": self.load_error,
            "hasPanelEditor": self.panel_editor is not None,
            "dashboard": None if scene is None else {
                "uid": scene.uid,
                "title": scene.title,
                "panelCount": len(scene.panels),
                "isUrlSyncing": scene.is_url_syncing,
            },
        }


class StateManagerBase(Generic[S]):
    """Holds an immutable state value and notifies subscribers on change."""

    def __init__(self, initial_state: S):
        self._state = initial_state
        self._subscribers: List[Callable[[S], None]] = []

    @property
    def state(self) -> S:
        return self._state

    def set_state(self, **changes: Any) -> None:
        self._state = replace(self._state, **changes)
        for subscriber in list(self._subscribers):
            try:
                subscriber(self._state)
            except Exception as e:
                logger.error(f"State subscriber failed: {e}")

    def subscribe(self, subscriber: Callable[[S], None]) -> Callable[[], None]:
        """Register a subscriber; returns a callable that unsubscribes it."""
        self._subscribers.append(subscriber)

        def unsubscribe() -> None:
            if subscriber in self._subscribers:
                self._subscribers.remove(subscriber)

        return unsubscribe
