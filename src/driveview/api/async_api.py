"""Event-loop adapter for a synchronous collaborator API."""

from __future__ import annotations

import asyncio
import functools
from typing import Any, Callable, Optional, Sequence, TypeVar

from driveview.models import BatchResult, Entry

from .protocol import ProgressCallback, Scope

T = TypeVar("T")


class AsyncDriveApi:
    """
    Run each call of a blocking collaborator (e.g. GoogleDriveApi) in a worker
    thread so the event loop is never blocked.

    Upload progress is reported from the worker thread; it is handed back to
    the loop with call_soon_threadsafe so callbacks only touch view state on
    the loop thread.
    """

    def __init__(self, backend: Any) -> None:
        self._backend = backend

    @property
    def backend(self) -> Any:
        return self._backend

    async def list_entries(self, scope: Scope) -> list[Entry]:
        return await self._call(self._backend.list_entries, scope)

    async def get_entry_meta(self, entry_id: str) -> Entry:
        return await self._call(self._backend.get_entry_meta, entry_id)

    async def create_folder(self, name: str, parent_id: Optional[str]) -> Entry:
        return await self._call(self._backend.create_folder, name, parent_id)

    async def rename_entry(self, entry_id: str, new_name: str) -> Entry:
        return await self._call(self._backend.rename_entry, entry_id, new_name)

    async def move_entry(self, entry_id: str, new_parent_id: Optional[str]) -> None:
        await self._call(self._backend.move_entry, entry_id, new_parent_id)

    async def star_entry(self, entry_id: str, starred: bool = True) -> None:
        await self._call(self._backend.star_entry, entry_id, starred)

    async def bulk_star(self, entry_ids: Sequence[str], starred: bool = True) -> BatchResult:
        return await self._call(self._backend.bulk_star, list(entry_ids), starred)

    async def trash_entry(self, entry_id: str) -> None:
        await self._call(self._backend.trash_entry, entry_id)

    async def restore_entry(self, entry_id: str) -> None:
        await self._call(self._backend.restore_entry, entry_id)

    async def delete_forever(self, entry_id: str) -> None:
        await self._call(self._backend.delete_forever, entry_id)

    async def bulk_delete_forever(self, entry_ids: Sequence[str]) -> BatchResult:
        return await self._call(self._backend.bulk_delete_forever, list(entry_ids))

    async def empty_trash(self) -> None:
        await self._call(self._backend.empty_trash)

    async def upload_file(
        self,
        path: str,
        parent_id: Optional[str],
        on_progress: Optional[ProgressCallback] = None,
    ) -> Entry:
        callback = None
        if on_progress is not None:
            loop = asyncio.get_running_loop()

            def callback(percent: int) -> None:
                loop.call_soon_threadsafe(on_progress, percent)

        return await self._call(self._backend.upload_file, path, parent_id, callback)

    async def _call(self, func: Callable[..., T], *args: Any) -> T:
        return await asyncio.to_thread(functools.partial(func, *args))
