"""Bulk actions available on a selection."""

from __future__ import annotations

from enum import Enum


class BulkAction(str, Enum):
    """Actions offered by the selection toolbar."""

    STAR = "star"
    TRASH = "trash"
    RESTORE = "restore"
    DELETE = "delete"
