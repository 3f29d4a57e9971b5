"""Upload queue: concurrent uploads with per-item progress."""

from __future__ import annotations

import asyncio
import logging
import os
from typing import Any, Awaitable, Callable, Optional, Sequence

from driveview.api.protocol import DriveApi
from driveview.errors import DriveViewError, LocalPreconditionError, describe_error
from driveview.models import UploadItem, UploadStatus
from driveview.util.format import format_size
from driveview.util.ids import new_batch_id, new_local_id

logger = logging.getLogger(__name__)

# Relative directory ("" = the batch's parent) -> task resolving to its folder id.
_FolderTasks = dict[str, "asyncio.Task[Optional[str]]"]


class UploadQueue:
    """
    Tracks uploads started through enqueue() / enqueue_folder().

    Each call is a batch: its uploads run concurrently and independently.
    Once every upload of the batch is terminal and at least one completed,
    on_batch_complete is awaited once for the whole batch. Terminal items
    stay in the queue until clear() is called.
    """

    def __init__(
        self,
        api: DriveApi,
        *,
        on_batch_complete: Optional[Callable[[], Awaitable[Any]]] = None,
        on_change: Optional[Callable[[UploadItem], None]] = None,
        max_upload_size: Optional[int] = None,
    ) -> None:
        self._api = api
        self._on_batch_complete = on_batch_complete
        self._on_change = on_change
        self.max_upload_size = max_upload_size
        self._items: dict[str, UploadItem] = {}
        self._tasks: set[asyncio.Task[list[UploadItem]]] = set()

    # ----------------------------
    # Read APIs
    # ----------------------------
    @property
    def items(self) -> list[UploadItem]:
        return list(self._items.values())

    def get(self, local_id: str) -> Optional[UploadItem]:
        return self._items.get(local_id)

    def count(self, status: UploadStatus) -> int:
        return sum(1 for item in self._items.values() if item.status is status)

    @property
    def is_busy(self) -> bool:
        return any(not item.status.is_terminal for item in self._items.values())

    # ----------------------------
    # Operations
    # ----------------------------
    def enqueue(
        self,
        paths: Sequence[str],
        parent_id: Optional[str],
        *,
        relative_paths: Optional[Sequence[str]] = None,
    ) -> asyncio.Task[list[UploadItem]]:
        """
        Queue one upload per path and start them all at once.

        relative_paths, when given, pairs each path with a "dir/sub/name"
        path below parent_id; missing folders on that path are created
        (once per batch) before the file is uploaded into the innermost one.

        Must be called from a running event loop. Returns the task that
        finishes when the whole batch is terminal.
        """
        if relative_paths is not None and len(relative_paths) != len(paths):
            raise ValueError("relative_paths must match paths one to one")

        batch_id = new_batch_id()
        batch: list[UploadItem] = []
        for i, path in enumerate(paths):
            item = UploadItem(
                local_id=new_local_id(),
                name=os.path.basename(path) or path,
                path=path,
                batch_id=batch_id,
                status=UploadStatus.UPLOADING,
                progress=0,
                relative_path=relative_paths[i] if relative_paths is not None else None,
            )
            self._items[item.local_id] = item
            batch.append(item)
            self._changed(item)

        logger.debug("Enqueued %d uploads (batch %s)", len(batch), batch_id)
        task = asyncio.get_running_loop().create_task(self._run_batch(batch, parent_id))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    def enqueue_folder(self, local_dir: str, parent_id: Optional[str]) -> asyncio.Task[list[UploadItem]]:
        """
        Upload every file below local_dir, recreating its folder structure
        (the picked folder itself included) under parent_id.

        Raises:
            LocalPreconditionError: if local_dir is not a directory.
        """
        if not os.path.isdir(local_dir):
            raise LocalPreconditionError("Not a folder", details={"path": local_dir})

        root = os.path.normpath(local_dir)
        top = os.path.basename(root)
        paths: list[str] = []
        relative: list[str] = []
        for dirpath, dirnames, filenames in os.walk(root):
            dirnames.sort()
            for filename in sorted(filenames):
                path = os.path.join(dirpath, filename)
                rel = os.path.relpath(path, root).replace(os.sep, "/")
                paths.append(path)
                relative.append(f"{top}/{rel}")
        return self.enqueue(paths, parent_id, relative_paths=relative)

    async def upload(self, paths: Sequence[str], parent_id: Optional[str]) -> list[UploadItem]:
        """enqueue() and wait for the batch."""
        return await self.enqueue(paths, parent_id)

    async def join(self) -> None:
        """Wait for every batch still running."""
        if self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    def clear(self) -> int:
        """Drop terminal items (the user dismissed them). Returns how many were removed."""
        done = [k for k, item in self._items.items() if item.status.is_terminal]
        for key in done:
            del self._items[key]
        return len(done)

    # ----------------------------
    # Internals
    # ----------------------------
    async def _run_batch(self, batch: list[UploadItem], parent_id: Optional[str]) -> list[UploadItem]:
        folders: _FolderTasks = {}
        outcomes = await asyncio.gather(
            *(self._upload_one(item, parent_id, folders) for item in batch),
            return_exceptions=True,
        )

        completed = sum(1 for item in batch if item.status is UploadStatus.COMPLETED)
        logger.info(
            "Upload batch finished: %d completed, %d failed",
            completed,
            len(batch) - completed,
        )
        if completed and self._on_batch_complete is not None:
            try:
                await self._on_batch_complete()
            except DriveViewError as exc:
                logger.warning("Refresh after uploads failed: %s", exc)

        for outcome in outcomes:
            if isinstance(outcome, BaseException):
                raise outcome
        return batch

    async def _upload_one(self, item: UploadItem, parent_id: Optional[str], folders: _FolderTasks) -> None:
        problem = self._check_size(item)
        if problem is not None:
            self._fail(item, problem)
            return

        try:
            target = parent_id
            if item.relative_path is not None:
                target = await self._folder_for(_parent_dir(item.relative_path), parent_id, folders)
            entry = await self._api.upload_file(
                item.path,
                target,
                lambda percent: self._progress(item, percent),
            )
        except DriveViewError as exc:
            logger.warning("Upload of %s failed: %s", item.name, exc)
            self._fail(item, describe_error(exc))
            return
        except Exception as exc:
            logger.exception("Unexpected error uploading %s", item.name)
            self._fail(item, str(exc) or exc.__class__.__name__)
            raise

        item.status = UploadStatus.COMPLETED
        item.progress = 100
        item.entry_id = entry.id
        self._changed(item)

    async def _folder_for(self, rel_dir: str, parent_id: Optional[str], folders: _FolderTasks) -> Optional[str]:
        """Folder id for rel_dir, creating it (and its ancestors) once per batch."""
        if not rel_dir:
            return parent_id
        task = folders.get(rel_dir)
        if task is None:
            task = asyncio.get_running_loop().create_task(self._create_dir(rel_dir, parent_id, folders))
            folders[rel_dir] = task
        return await task

    async def _create_dir(self, rel_dir: str, parent_id: Optional[str], folders: _FolderTasks) -> Optional[str]:
        outer, _, name = rel_dir.rpartition("/")
        container = await self._folder_for(outer, parent_id, folders)
        entry = await self._api.create_folder(name, container)
        logger.debug("Created upload folder %s as %s", rel_dir, entry.id)
        return entry.id

    def _check_size(self, item: UploadItem) -> Optional[str]:
        if item.relative_path is not None and _parent_dir(item.relative_path) is None:
            return "Invalid relative path"
        if self.max_upload_size is None:
            return None
        try:
            size = os.path.getsize(item.path)
        except OSError as exc:
            return f"Cannot read file: {exc.strerror or exc}"
        if size > self.max_upload_size:
            return f"File exceeds the {format_size(self.max_upload_size)} upload limit"
        return None

    def _progress(self, item: UploadItem, percent: int) -> None:
        if item.status is not UploadStatus.UPLOADING:
            return
        percent = max(0, min(100, int(percent)))
        if percent <= item.progress:
            return
        item.progress = percent
        self._changed(item)

    def _fail(self, item: UploadItem, message: str) -> None:
        item.status = UploadStatus.ERROR
        item.error_message = message
        self._changed(item)

    def _changed(self, item: UploadItem) -> None:
        if self._on_change is not None:
            self._on_change(item)


def _parent_dir(relative_path: str) -> Optional[str]:
    """"a/b/c.txt" -> "a/b"; None when the path is empty or escapes upwards."""
    parts = [p for p in relative_path.split("/") if p and p != "."]
    if not parts or ".." in parts:
        return None
    return "/".join(parts[:-1])
