"""Collaborator API contract consumed by the view components."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Literal, Optional, Protocol, Sequence

from driveview.models import BatchResult, Entry

ScopeKind = Literal["folder", "starred", "trash", "search"]
ProgressCallback = Callable[[int], None]


@dataclass(slots=True, frozen=True)
class Scope:
    """
    The logical source of a listing.

    folder_id is only meaningful for folder scopes (None = root); query only
    for search scopes.
    """

    kind: ScopeKind
    folder_id: Optional[str] = None
    query: str = ""

    @classmethod
    def folder(cls, folder_id: Optional[str] = None) -> Scope:
        return cls(kind="folder", folder_id=folder_id)

    @classmethod
    def starred(cls) -> Scope:
        return cls(kind="starred")

    @classmethod
    def trash(cls) -> Scope:
        return cls(kind="trash")

    @classmethod
    def search(cls, query: str) -> Scope:
        return cls(kind="search", query=query)

    @property
    def is_trash(self) -> bool:
        return self.kind == "trash"


class DriveApi(Protocol):
    """Async operations the view layer needs from the remote drive."""

    async def list_entries(self, scope: Scope) -> list[Entry]: ...

    async def get_entry_meta(self, entry_id: str) -> Entry: ...

    async def create_folder(self, name: str, parent_id: Optional[str]) -> Entry: ...

    async def rename_entry(self, entry_id: str, new_name: str) -> Entry: ...

    async def move_entry(self, entry_id: str, new_parent_id: Optional[str]) -> None: ...

    async def star_entry(self, entry_id: str, starred: bool = True) -> None: ...

    async def bulk_star(self, entry_ids: Sequence[str], starred: bool = True) -> BatchResult: ...

    async def trash_entry(self, entry_id: str) -> None: ...

    async def restore_entry(self, entry_id: str) -> None: ...

    async def delete_forever(self, entry_id: str) -> None: ...

    async def bulk_delete_forever(self, entry_ids: Sequence[str]) -> BatchResult: ...

    async def empty_trash(self) -> None: ...

    async def upload_file(
        self,
        path: str,
        parent_id: Optional[str],
        on_progress: Optional[ProgressCallback] = None,
    ) -> Entry: ...
