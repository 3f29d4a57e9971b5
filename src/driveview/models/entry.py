"""Data model for Drive entries (files and folders)."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


class EntryKind(str, Enum):
    """Entry variants."""

    FILE = "file"
    FOLDER = "folder"


@dataclass(slots=True)
class Entry:
    """
    One file or folder as reported by the collaborator API.

    Notes:
        - parent_id is None for entries that live directly under the root.
        - Folders have no size and no mime_type.
        - is_starred is independent of the trash state.
    """

    id: str
    name: str
    kind: EntryKind
    parent_id: Optional[str] = None

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    size: Optional[int] = None
    mime_type: Optional[str] = None

    is_starred: bool = False
    is_trashed: bool = False
    trashed_at: Optional[datetime] = None

    @property
    def is_folder(self) -> bool:
        return self.kind is EntryKind.FOLDER


@dataclass(slots=True, frozen=True)
class Crumb:
    """One step of a breadcrumb path. id is None for the root crumb."""

    id: Optional[str]
    name: str
