"""Selection state for the projected listing."""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Sequence

logger = logging.getLogger(__name__)


class SelectionState:
    """
    Selected entry ids plus the shift-click anchor.

    Every transition is evaluated against the current projected order, set
    via set_order(). Ids not in that order are never selected.
    """

    def __init__(self, *, clear_on_navigate: bool = False) -> None:
        self.clear_on_navigate = clear_on_navigate
        self._order: list[str] = []
        self._index: dict[str, int] = {}
        self._selected: set[str] = set()
        self._anchor: Optional[str] = None

    # ----------------------------
    # Read APIs
    # ----------------------------
    @property
    def selected_ids(self) -> frozenset[str]:
        return frozenset(self._selected)

    @property
    def anchor_id(self) -> Optional[str]:
        return self._anchor

    @property
    def order(self) -> list[str]:
        return list(self._order)

    def is_selected(self, entry_id: str) -> bool:
        return entry_id in self._selected

    def selected_in_order(self) -> list[str]:
        """Selected ids in display order."""
        return [i for i in self._order if i in self._selected]

    def __len__(self) -> int:
        return len(self._selected)

    # ----------------------------
    # Listing changes
    # ----------------------------
    def set_order(self, ids: Sequence[str], *, navigated: bool = False) -> None:
        """
        Install a new projected order.

        navigated=True marks a change of view identity (different scope); the
        selection is then cleared or pruned depending on clear_on_navigate.
        Re-projections of the same view (sort, filter, refresh) always prune.
        """
        self._order = list(ids)
        self._index = {entry_id: i for i, entry_id in enumerate(self._order)}

        if navigated and self.clear_on_navigate:
            self._selected.clear()
            self._anchor = None
            return

        dropped = self._selected.difference(self._index)
        if dropped:
            logger.debug("Pruning %d selected ids no longer listed", len(dropped))
            self._selected.difference_update(dropped)
        if self._anchor is not None and self._anchor not in self._index:
            self._anchor = None

    # ----------------------------
    # Transitions
    # ----------------------------
    def click(self, entry_id: str, *, ctrl: bool = False, shift: bool = False) -> None:
        """Apply a row click with modifier flags (ctrl covers Cmd as well)."""
        if entry_id not in self._index:
            return

        if shift and self._anchor is not None and self._anchor in self._index:
            i = self._index[entry_id]
            j = self._index[self._anchor]
            lo, hi = min(i, j), max(i, j)
            self._selected = set(self._order[lo : hi + 1])
            return

        if ctrl and not shift:
            if entry_id in self._selected:
                self._selected.discard(entry_id)
            else:
                self._selected.add(entry_id)
                self._anchor = entry_id
            return

        self._selected = {entry_id}
        self._anchor = entry_id

    def select_all(self) -> None:
        self._selected = set(self._order)

    def clear(self) -> None:
        """Escape or background click: drop the selection and the anchor."""
        self._selected.clear()
        self._anchor = None

    def replace(self, ids: Iterable[str]) -> None:
        """Set the selection wholesale (used by drag-select); unknown ids are ignored."""
        self._selected = {i for i in ids if i in self._index}

