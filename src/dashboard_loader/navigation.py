"""Navigation model built from folder ancestry for breadcrumbs."""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .models import FolderDTO

logger = logging.getLogger(__name__)


@dataclass
class NavModelItem:
    """One breadcrumb node; ``parent_item`` points one level up."""
    id: str
    text: str
    url: Optional[str] = None
    parent_item: Optional["NavModelItem"] = None

    def ancestry(self) -> List["NavModelItem"]:
        """Return this item and its parents, nearest first."""
        items = []
        node: Optional[NavModelItem] = self
        while node is not None:
            items.append(node)
            node = node.parent_item
        return items


def _folder_nav_id(uid: str) -> str:
    return f"folder-dashboards-{uid}"


def build_nav_model(folder: FolderDTO) -> NavModelItem:
    """Build the breadcrumb chain for a folder.

    ``folder.parents`` is ordered root first, so the last parent becomes the
    direct parent of the folder item.
    """
    parent: Optional[NavModelItem] = None
    for ancestor in folder.parents:
        parent = NavModelItem(
            id=_folder_nav_id(ancestor.uid),
            text=ancestor.title,
            url=ancestor.url,
            parent_item=parent,
        )

    return NavModelItem(
        id=_folder_nav_id(folder.uid),
        text=folder.title,
        url=folder.url,
        parent_item=parent,
    )


@dataclass
class NavIndexStore:
    """Shared navigation state indexed by nav item id."""
    items: Dict[str, NavModelItem] = field(default_factory=dict)

    def update(self, nav_model: NavModelItem) -> None:
        """Index the item and all of its ancestors."""
        for item in nav_model.ancestry():
            self.items[item.id] = item
        logger.debug(f"Nav index updated with {nav_model.id}")

    def get(self, item_id: str) -> Optional[NavModelItem]:
        return self.items.get(item_id)
