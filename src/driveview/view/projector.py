"""Sort/filter projection of a listing into display order."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Callable, Literal, Optional, Sequence

from driveview.models import Entry
from driveview.util.mime import Category, matches_category

SortKey = Literal["name", "size", "type", "date"]
SortOrder = Literal["asc", "desc"]

SORT_KEYS: tuple[str, ...] = ("name", "size", "type", "date")

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def project(
    items: Sequence[Entry],
    sort_by: SortKey = "name",
    order: SortOrder = "asc",
    category: Optional[Category] = None,
    search_text: str = "",
    *,
    trash_view: bool = False,
) -> list[Entry]:
    """
    Return the display list for a raw listing.

    Rules:
        - search_text: case-insensitive substring on name; blank disables it.
        - category: folders are dropped, files kept by MIME classification.
        - All folders precede all files; `order` only reverses the ordering
          inside each group.
        - Ties keep the input order, so the result is deterministic.
    """
    if sort_by not in SORT_KEYS:
        raise ValueError(f"Unknown sort key: {sort_by!r}")
    if order not in ("asc", "desc"):
        raise ValueError(f"Unknown sort order: {order!r}")

    needle = search_text.strip().casefold() if search_text else ""

    selected: list[Entry] = []
    for item in items:
        if needle and needle not in item.name.casefold():
            continue
        if category is not None and (item.is_folder or not matches_category(item.mime_type, category)):
            continue
        selected.append(item)

    key = _sort_key(sort_by, trash_view=trash_view)
    reverse = order == "desc"
    folders = sorted((e for e in selected if e.is_folder), key=key, reverse=reverse)
    files = sorted((e for e in selected if not e.is_folder), key=key, reverse=reverse)
    return folders + files


def _sort_key(sort_by: str, *, trash_view: bool) -> Callable[[Entry], Any]:
    if sort_by == "name":
        return lambda e: e.name.casefold()
    if sort_by == "size":
        return lambda e: e.size or 0
    if sort_by == "type":
        return lambda e: e.mime_type or ""
    return lambda e: _view_timestamp(e, trash_view=trash_view)


def _view_timestamp(entry: Entry, *, trash_view: bool) -> datetime:
    if trash_view and entry.trashed_at is not None:
        return entry.trashed_at
    return entry.created_at or _EPOCH
