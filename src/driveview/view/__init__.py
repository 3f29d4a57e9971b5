"""View-state components for driveview."""

from __future__ import annotations

from .breadcrumbs import BreadcrumbResolver
from .cache import ItemCache, PendingRemoval
from .drag_select import DragPhase, DragSelectController, Rect
from .mover import DragDropMover, DragToken
from .projector import SortKey, SortOrder, project
from .selection import SelectionState
from .uploads import UploadQueue

__all__ = [
    "project",
    "SortKey",
    "SortOrder",
    "ItemCache",
    "PendingRemoval",
    "SelectionState",
    "DragSelectController",
    "DragPhase",
    "Rect",
    "DragDropMover",
    "DragToken",
    "BreadcrumbResolver",
    "UploadQueue",
]
