"""DriveDashboard: one active view wired to the collaborator API."""

from __future__ import annotations

import asyncio
import logging
from typing import Optional, Sequence

from driveview.api.protocol import DriveApi, Scope
from driveview.config import ClientConfig
from driveview.errors import DriveViewError, LocalPreconditionError, describe_error
from driveview.models import (
    BatchResult,
    BulkAction,
    Crumb,
    Entry,
    MoveResult,
    OperationResult,
    UploadItem,
)
from driveview.notify import LoggingNotifier, Notifier
from driveview.session import Session
from driveview.util.mime import Category
from driveview.view import (
    BreadcrumbResolver,
    DragDropMover,
    DragSelectController,
    ItemCache,
    SelectionState,
    SortKey,
    SortOrder,
    UploadQueue,
    project,
)
from driveview.view.validators import validate_name

logger = logging.getLogger(__name__)


class DriveDashboard:
    """
    Owns the state of the active view: listing, projection, selection,
    drag interactions, breadcrumbs and uploads.

    Policy:
        - Every mutation is a request followed by a full refresh of the
          listing; nothing is patched locally except optimistic removals,
          which are rolled back if the request fails.
        - A failed operation produces exactly one error notification; batch
          operations report each failed item separately.
        - Local precondition failures never reach the API.
    """

    def __init__(
        self,
        api: DriveApi,
        config: Optional[ClientConfig] = None,
        *,
        notifier: Optional[Notifier] = None,
    ) -> None:
        self.config = config or ClientConfig()
        self._api = api
        self.notifier: Notifier = notifier or LoggingNotifier()

        self.cache = ItemCache(api)
        self.selection = SelectionState(clear_on_navigate=self.config.clear_selection_on_navigate)
        self.drag_select = DragSelectController(self.selection)
        self.breadcrumbs = BreadcrumbResolver(
            api,
            root_label=self.config.root_label,
            max_hops=self.config.max_breadcrumb_hops,
        )
        self.mover = DragDropMover(
            api,
            self.cache,
            parent_links=self.breadcrumbs.parent_links,
            max_hops=self.config.max_breadcrumb_hops,
            refresh=self.refresh,
        )
        self.uploads = UploadQueue(
            api,
            on_batch_complete=self.refresh,
            max_upload_size=self.config.max_upload_size,
        )

        self.sort_by: SortKey = "name"
        self.order: SortOrder = "asc"
        self.category: Optional[Category] = None
        self.search_text: str = ""

        self._rows: list[Entry] = []
        self._shown_scope: Optional[Scope] = None
        self._nav_generation = 0

    @classmethod
    def from_session(cls, session: Session, *, notifier: Optional[Notifier] = None) -> DriveDashboard:
        return cls(session.api, session.config, notifier=notifier)

    # ----------------------------
    # Read APIs
    # ----------------------------
    @property
    def scope(self) -> Optional[Scope]:
        return self.cache.scope

    @property
    def rows(self) -> list[Entry]:
        """Projected display list."""
        return list(self._rows)

    @property
    def crumbs(self) -> list[Crumb]:
        return self.breadcrumbs.crumbs

    @property
    def current_folder_id(self) -> Optional[str]:
        scope = self.cache.scope
        if scope is None or scope.kind != "folder":
            return None
        return scope.folder_id

    def selected_entries(self) -> list[Entry]:
        by_id = {e.id: e for e in self._rows}
        return [by_id[i] for i in self.selection.selected_in_order()]

    # ----------------------------
    # Navigation / projection
    # ----------------------------
    async def navigate(self, scope: Scope) -> bool:
        """
        Switch the active view. Listing and breadcrumbs load concurrently;
        whichever finishes after a newer navigate() started is discarded.

        If the listing fails, the previous view stays active: its scope, rows
        and breadcrumbs are kept.
        """
        logger.debug("Navigating to %s", scope)
        self._nav_generation += 1
        gen = self._nav_generation
        previous = self.breadcrumbs.crumbs

        crumbs = (
            self.breadcrumbs.navigate(scope.folder_id)
            if scope.kind == "folder"
            else self._reset_crumbs()
        )
        loaded, _ = await asyncio.gather(self._load(scope), crumbs)
        if not loaded and gen == self._nav_generation:
            self.breadcrumbs.restore(previous)
        return loaded

    async def open_folder(self, folder_id: Optional[str]) -> bool:
        return await self.navigate(Scope.folder(folder_id))

    async def go_up(self) -> bool:
        """Open the parent of the current folder (per the breadcrumbs)."""
        if self.current_folder_id is None:
            return False
        parent = self.breadcrumbs.parent_crumb()
        return await self.open_folder(parent.id if parent else None)

    async def refresh(self) -> bool:
        """Reload the active scope wholesale."""
        if self.cache.scope is None:
            return False
        return await self._load(self.cache.scope)

    def set_sort(self, sort_by: SortKey, order: SortOrder = "asc") -> None:
        self.sort_by, self.order = sort_by, order
        self.reproject()

    def set_category(self, category: Optional[Category]) -> None:
        self.category = category
        self.reproject()

    def set_search_text(self, text: str) -> None:
        self.search_text = text
        self.reproject()

    def reproject(self) -> None:
        scope = self.cache.scope
        self._rows = project(
            self.cache.items,
            self.sort_by,
            self.order,
            self.category,
            self.search_text,
            trash_view=bool(scope and scope.is_trash),
        )
        navigated = scope != self._shown_scope
        self.selection.set_order([e.id for e in self._rows], navigated=navigated)
        self._shown_scope = scope

    # ----------------------------
    # Selection shortcuts
    # ----------------------------
    def click(self, entry_id: str, *, ctrl: bool = False, shift: bool = False) -> None:
        self.selection.click(entry_id, ctrl=ctrl, shift=shift)

    def select_all(self) -> None:
        self.selection.select_all()

    def clear_selection(self) -> None:
        self.selection.clear()

    # ----------------------------
    # Mutations
    # ----------------------------
    async def create_folder(self, name: str) -> Optional[Entry]:
        try:
            clean = validate_name(name, "Folder name")
        except LocalPreconditionError:
            self.notifier.notify("error", "Enter a folder name.")
            return None

        try:
            entry = await self._api.create_folder(clean, self.current_folder_id)
        except DriveViewError as exc:
            self._report(exc, "Failed to create folder.")
            return None

        self.notifier.notify("success", "Folder created.")
        await self.refresh()
        return entry

    async def rename(self, entry_id: str, new_name: str) -> bool:
        """Rename an entry; blank or unchanged names are ignored without a request."""
        entry = self.cache.get(entry_id)
        clean = (new_name or "").strip()
        if entry is None or not clean or clean == entry.name:
            return False

        try:
            await self._api.rename_entry(entry_id, clean)
        except DriveViewError as exc:
            self._report(exc, "Rename failed.")
            return False

        self.notifier.notify("success", "Renamed.")
        await self.refresh()
        return True

    async def toggle_star(self, entry_id: str) -> bool:
        entry = self.cache.get(entry_id)
        if entry is None:
            return False
        try:
            await self._api.star_entry(entry_id, not entry.is_starred)
        except DriveViewError as exc:
            self._report(exc, "Failed to update star.")
            return False
        await self.refresh()
        return True

    async def star(self, entry_ids: Sequence[str]) -> BatchResult:
        """Star all of entry_ids, or unstar them if every one is already starred."""
        entries = [e for e in (self.cache.get(i) for i in entry_ids) if e is not None]
        starred = not (entries and all(e.is_starred for e in entries))
        try:
            batch = await self._api.bulk_star([e.id for e in entries], starred)
        except DriveViewError as exc:
            self._report(exc, "Failed to update stars.")
            return _all_failed("star" if starred else "unstar", [e.id for e in entries], exc)
        self._report_batch(batch)
        await self.refresh()
        return batch

    async def trash(self, entry_ids: Sequence[str]) -> BatchResult:
        return await self._optimistic(entry_ids, self._each(entry_ids, "trash", self._api.trash_entry))

    async def restore(self, entry_ids: Sequence[str]) -> BatchResult:
        return await self._optimistic(
            entry_ids, self._each(entry_ids, "restore", self._api.restore_entry)
        )

    async def delete_forever(self, entry_ids: Sequence[str]) -> BatchResult:
        return await self._optimistic(entry_ids, self._bulk_delete(entry_ids))

    async def empty_trash(self) -> bool:
        try:
            await self._api.empty_trash()
        except DriveViewError as exc:
            self._report(exc, "Failed to empty trash.")
            return False
        self.notifier.notify("success", "Trash emptied.")
        await self.refresh()
        return True

    async def bulk_action(self, action: BulkAction) -> BatchResult:
        """Apply a toolbar action to the current selection."""
        ids = self.selection.selected_in_order()
        if action is BulkAction.STAR:
            batch = await self.star(ids)
        elif action is BulkAction.TRASH:
            batch = await self.trash(ids)
        elif action is BulkAction.RESTORE:
            batch = await self.restore(ids)
        elif action is BulkAction.DELETE:
            batch = await self.delete_forever(ids)
        else:
            raise ValueError(f"Unsupported bulk action: {action!r}")
        if not batch.failed:
            self.selection.clear()
        return batch

    # ----------------------------
    # Drag and drop / uploads
    # ----------------------------
    async def drop(self, folder_id: Optional[str]) -> MoveResult:
        token = self.mover.token
        result = await self.mover.drop(folder_id)
        if result.status == "moved" and token is not None:
            self.notifier.notify("success", f'Moved "{token.name}".')
        elif result.status == "failed":
            self.notifier.notify("error", result.reason or "Move failed.")
        return result

    def upload(self, paths: Sequence[str]) -> asyncio.Task[list[UploadItem]]:
        """Upload into the open folder (root for non-folder views)."""
        return self.uploads.enqueue(paths, self.current_folder_id)

    def upload_folder(self, local_dir: str) -> asyncio.Task[list[UploadItem]]:
        """Upload a local folder tree into the open folder, keeping its structure."""
        return self.uploads.enqueue_folder(local_dir, self.current_folder_id)

    # ----------------------------
    # Internals
    # ----------------------------
    async def _load(self, scope: Scope) -> bool:
        try:
            loaded = await self.cache.load(scope)
        except DriveViewError as exc:
            self._report(exc, "Failed to load files.")
            return False
        if loaded:
            self.reproject()
        return loaded

    async def _reset_crumbs(self) -> list[Crumb]:
        self.breadcrumbs.reset()
        return self.breadcrumbs.crumbs

    async def _optimistic(self, entry_ids: Sequence[str], work) -> BatchResult:
        kept = self.selection.selected_ids
        pending = self.cache.remove_tentative(entry_ids)
        self.reproject()

        batch: BatchResult = await work
        if batch.failed:
            self.cache.rollback(pending)
            self.reproject()
            self.selection.replace(kept)
        self._report_batch(batch)
        await self.refresh()
        return batch

    async def _each(self, entry_ids: Sequence[str], action: str, call) -> BatchResult:
        async def one(entry_id: str) -> OperationResult:
            try:
                await call(entry_id)
            except DriveViewError as exc:
                return _failed_result(entry_id, action, exc)
            return OperationResult(entry_id=entry_id, action=action, status="success")

        results = await asyncio.gather(*(one(i) for i in entry_ids))
        return BatchResult(action=action, results=list(results))

    async def _bulk_delete(self, entry_ids: Sequence[str]) -> BatchResult:
        try:
            return await self._api.bulk_delete_forever(list(entry_ids))
        except DriveViewError as exc:
            return _all_failed("delete", entry_ids, exc)

    def _report(self, exc: DriveViewError, fallback: str) -> None:
        logger.warning("%s %s", fallback, exc)
        self.notifier.notify("error", describe_error(exc))

    def _report_batch(self, batch: BatchResult) -> None:
        for failure in batch.failed:
            name = self._name_of(failure.entry_id)
            self.notifier.notify("error", f"{name}: {failure.error_message or 'failed'}")
        done = len(batch.succeeded)
        if done:
            noun = "item" if done == 1 else "items"
            self.notifier.notify("success", f"{batch.action.capitalize()}: {done} {noun}")

    def _name_of(self, entry_id: str) -> str:
        entry = self.cache.get(entry_id)
        return entry.name if entry is not None else entry_id


def _failed_result(entry_id: str, action: str, exc: DriveViewError) -> OperationResult:
    return OperationResult(
        entry_id=entry_id,
        action=action,
        status="failed",
        error_type=exc.__class__.__name__,
        error_message=str(exc),
        error_details=exc.details or None,
    )


def _all_failed(action: str, entry_ids: Sequence[str], exc: DriveViewError) -> BatchResult:
    return BatchResult(action=action, results=[_failed_result(i, action, exc) for i in entry_ids])
