"""Rectangular (rubber-band) drag selection."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Optional

from .selection import SelectionState

logger = logging.getLogger(__name__)

PRIMARY_BUTTON: int = 0


@dataclass(slots=True, frozen=True)
class Rect:
    """Axis-aligned rectangle in screen coordinates."""

    x: float
    y: float
    w: float
    h: float

    @classmethod
    def from_points(cls, x0: float, y0: float, x1: float, y1: float) -> Rect:
        return cls(min(x0, x1), min(y0, y1), abs(x1 - x0), abs(y1 - y0))

    @property
    def is_empty(self) -> bool:
        """Zero area, which includes a purely vertical or horizontal drag line."""
        return self.w == 0 or self.h == 0

    def intersects(self, other: Rect) -> bool:
        return (
            self.x < other.x + other.w
            and other.x < self.x + self.w
            and self.y < other.y + other.h
            and other.y < self.y + self.h
        )


class DragPhase(str, Enum):
    IDLE = "idle"
    DRAGGING = "dragging"


class DragSelectController:
    """
    Idle -> Dragging -> Idle.

    The rendering layer supplies, on every move, a snapshot of the visible
    rows' rectangles keyed by entry id (same coordinate space as the pointer).
    Rows that are not in the snapshot are never hit.
    """

    def __init__(self, selection: SelectionState) -> None:
        self._selection = selection
        self.phase = DragPhase.IDLE
        self._origin: Optional[tuple[float, float]] = None
        self._rect: Optional[Rect] = None
        self._base: frozenset[str] = frozenset()

    @property
    def rect(self) -> Optional[Rect]:
        return self._rect

    @property
    def is_dragging(self) -> bool:
        return self.phase is DragPhase.DRAGGING

    def pointer_down(
        self,
        x: float,
        y: float,
        *,
        on_background: bool,
        button: int = PRIMARY_BUTTON,
        modifier: bool = False,
    ) -> bool:
        """
        Start a drag if the press is a primary-button press on empty background.

        Returns True when a drag started.
        """
        if button != PRIMARY_BUTTON or not on_background or self.is_dragging:
            return False

        if modifier:
            self._base = self._selection.selected_ids
        else:
            self._selection.clear()
            self._base = frozenset()

        self.phase = DragPhase.DRAGGING
        self._origin = (x, y)
        self._rect = Rect(x, y, 0, 0)
        logger.debug("Drag-select started at (%s, %s)", x, y)
        return True

    def pointer_move(self, x: float, y: float, rows: Mapping[str, Rect]) -> None:
        if not self.is_dragging or self._origin is None:
            return

        x0, y0 = self._origin
        rect = Rect.from_points(x0, y0, x, y)
        self._rect = rect

        hits: set[str] = set()
        if not rect.is_empty:
            hits = {entry_id for entry_id, row in rows.items() if rect.intersects(row)}
        self._selection.replace(self._base | hits)

    def pointer_up(self) -> None:
        if not self.is_dragging:
            return
        self.phase = DragPhase.IDLE
        self._origin = None
        self._rect = None
        self._base = frozenset()
        logger.debug("Drag-select finished with %d selected", len(self._selection))

    def pointer_leave(self) -> None:
        """Leaving the window ends the drag like a release would."""
        self.pointer_up()
