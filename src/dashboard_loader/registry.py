"""Registry of the dashboard currently active in the application."""

import logging
from typing import Callable, List, Optional

from .scene import DashboardScene

logger = logging.getLogger(__name__)


class CurrentDashboardRegistry:
    """Holds the active dashboard and notifies listeners when it changes."""

    def __init__(self):
        self._current: Optional[DashboardScene] = None
        self._listeners: List[Callable[[Optional[DashboardScene]], None]] = []

    def get_current(self) -> Optional[DashboardScene]:
        return self._current

    def set_current(self, scene: Optional[DashboardScene]) -> None:
        self._current = scene
        for listener in list(self._listeners):
            listener(scene)

    def add_listener(self, listener: Callable[[Optional[DashboardScene]], None]) -> None:
        self._listeners.append(listener)
