"""Drag-and-drop moves of entries into folders."""

from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Mapping, Optional

from driveview.api.protocol import DriveApi
from driveview.errors import DriveViewError, LocalPreconditionError
from driveview.models import EntryKind, MoveResult

from .cache import ItemCache
from .validators import find_cycle, validate_not_noop_move, validate_not_self_drop

logger = logging.getLogger(__name__)

_drag_serials = itertools.count(1)


@dataclass(slots=True, frozen=True)
class DragToken:
    """Snapshot of the dragged entry taken when the drag began."""

    entry_id: str
    kind: EntryKind
    parent_id: Optional[str]
    name: str
    serial: int


class DragDropMover:
    """
    One draggable source at a time, folder rows (or crumbs) as drop targets.

    drag_over() answers from what is already known (cached rows and parent
    links learned by the breadcrumb resolver); drop() re-checks and walks the
    rest of the destination's ancestor chain through get_entry_meta().
    """

    def __init__(
        self,
        api: DriveApi,
        cache: ItemCache,
        *,
        parent_links: Optional[Mapping[str, Optional[str]]] = None,
        max_hops: int = 25,
        refresh: Optional[Callable[[], Awaitable[Any]]] = None,
    ) -> None:
        self._api = api
        self._cache = cache
        self._parent_links = parent_links if parent_links is not None else {}
        self._fetched_links: dict[str, Optional[str]] = {}
        self.max_hops = max_hops
        self._refresh = refresh or cache.refresh
        self._token: Optional[DragToken] = None
        self.drop_target_id: Optional[str] = None

    @property
    def token(self) -> Optional[DragToken]:
        return self._token

    def begin_drag(self, entry_id: str) -> DragToken:
        entry = self._cache.get(entry_id)
        if entry is None:
            raise LocalPreconditionError(
                "Dragged item is not in the current listing",
                details={"entry_id": entry_id},
            )
        self._token = DragToken(
            entry_id=entry.id,
            kind=entry.kind,
            parent_id=entry.parent_id,
            name=entry.name,
            serial=next(_drag_serials),
        )
        self._fetched_links.clear()
        logger.debug("Drag started for %s", entry_id)
        return self._token

    def drag_over(self, folder_id: Optional[str]) -> bool:
        """Accept or reject hovering the current drag over folder_id; updates the highlight."""
        if self._token is None:
            self.drop_target_id = None
            return False
        try:
            self._check_local(self._token, folder_id)
        except LocalPreconditionError:
            self.drop_target_id = None
            return False
        self.drop_target_id = folder_id
        return True

    def drag_leave(self) -> None:
        self.drop_target_id = None

    def end_drag(self) -> None:
        self._token = None
        self.drop_target_id = None

    async def drop(self, folder_id: Optional[str], token: Optional[DragToken] = None) -> MoveResult:
        """
        Validate and perform the move of the dragged entry into folder_id (None = root).

        Exactly one move request is sent for an accepted drop; the listing is
        refreshed only after it succeeds.
        """
        token = token or self._token
        self.drop_target_id = None
        if token is None:
            return MoveResult(status="rejected", new_parent_id=folder_id, reason="Nothing is being dragged")

        try:
            self._check_local(token, folder_id)
            if token.kind is EntryKind.FOLDER:
                await self._check_ancestry(token.entry_id, folder_id)
        except LocalPreconditionError as exc:
            logger.debug("Drop of %s onto %s rejected: %s", token.entry_id, folder_id, exc)
            self.end_drag()
            return MoveResult(
                status="rejected",
                entry_id=token.entry_id,
                new_parent_id=folder_id,
                reason=str(exc),
                error=exc,
            )
        except DriveViewError as exc:
            logger.warning("Could not verify drop target %s: %s", folder_id, exc)
            self.end_drag()
            return _failed(token, folder_id, exc)

        try:
            await self._api.move_entry(token.entry_id, folder_id)
        except DriveViewError as exc:
            logger.warning("Move of %s failed: %s", token.entry_id, exc)
            self.end_drag()
            return _failed(token, folder_id, exc)

        logger.info("Moved %s into %s", token.entry_id, folder_id or "root")
        self.end_drag()
        try:
            await self._refresh()
        except DriveViewError as exc:
            logger.warning("Refresh after move failed: %s", exc)
        return MoveResult(status="moved", entry_id=token.entry_id, new_parent_id=folder_id)

    # ----------------------------
    # Internals
    # ----------------------------
    def _check_local(self, token: DragToken, folder_id: Optional[str]) -> None:
        validate_not_self_drop(token.entry_id, folder_id)
        validate_not_noop_move(token.parent_id, folder_id)
        if folder_id is not None:
            target = self._cache.get(folder_id)
            if target is not None and not target.is_folder:
                raise LocalPreconditionError("Drop target is not a folder")
        if token.kind is EntryKind.FOLDER:
            cyclic, _ = find_cycle(token.entry_id, folder_id, self._known_parent, max_hops=self.max_hops)
            if cyclic:
                raise LocalPreconditionError("Cannot move a folder into its own subfolder")

    async def _check_ancestry(self, entry_id: str, folder_id: Optional[str]) -> None:
        while True:
            cyclic, unknown = find_cycle(entry_id, folder_id, self._known_parent, max_hops=self.max_hops)
            if cyclic:
                raise LocalPreconditionError("Cannot move a folder into its own subfolder")
            if unknown is None:
                return
            meta = await self._api.get_entry_meta(unknown)
            self._fetched_links[unknown] = meta.parent_id

    def _known_parent(self, entry_id: str) -> tuple[bool, Optional[str]]:
        entry = self._cache.get(entry_id)
        if entry is not None:
            return True, entry.parent_id
        if entry_id in self._parent_links:
            return True, self._parent_links[entry_id]
        if entry_id in self._fetched_links:
            return True, self._fetched_links[entry_id]
        return False, None


def _failed(token: DragToken, folder_id: Optional[str], exc: DriveViewError) -> MoveResult:
    return MoveResult(
        status="failed",
        entry_id=token.entry_id,
        new_parent_id=folder_id,
        reason=str(exc),
        error=exc,
    )
