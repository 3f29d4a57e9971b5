"""Upload queue item model."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class UploadStatus(str, Enum):
    QUEUED = "queued"
    UPLOADING = "uploading"
    COMPLETED = "completed"
    ERROR = "error"

    @property
    def is_terminal(self) -> bool:
        return self in (UploadStatus.COMPLETED, UploadStatus.ERROR)


@dataclass(slots=True)
class UploadItem:
    """State of one queued upload."""

    local_id: str
    name: str
    path: str
    batch_id: str
    status: UploadStatus = UploadStatus.QUEUED
    progress: int = 0

    # "album/2024/a.jpg" for folder uploads; None for plain file uploads.
    relative_path: Optional[str] = None
    entry_id: Optional[str] = None
    error_message: Optional[str] = None
