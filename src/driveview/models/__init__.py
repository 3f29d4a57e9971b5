"""Public model exports for driveview."""

from __future__ import annotations

from .actions import BulkAction
from .entry import Crumb, Entry, EntryKind
from .results import BatchResult, MoveResult, MoveStatus, OperationResult, OperationStatus
from .upload import UploadItem, UploadStatus

__all__ = [
    "Entry",
    "EntryKind",
    "Crumb",
    "BulkAction",
    "OperationStatus",
    "MoveStatus",
    "OperationResult",
    "BatchResult",
    "MoveResult",
    "UploadItem",
    "UploadStatus",
]
