"""Display helpers for entry rows."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from .time import now_utc, normalize_dt

_SIZE_UNITS: tuple[str, ...] = ("B", "KB", "MB", "GB", "TB", "PB")


def format_size(size: Optional[int], decimals: int = 1) -> str:
    """
    Format a byte count, e.g. 1536 -> "1.5 KB".

    None (folders, unknown) renders as an em dash placeholder.
    """
    if size is None:
        return "—"
    if size <= 0:
        return "0 B"
    i = 0
    while size >= 1024 ** (i + 1) and i < len(_SIZE_UNITS) - 1:
        i += 1
    value = round(size / (1024**i), max(decimals, 0))
    if value == int(value):
        return f"{int(value)} {_SIZE_UNITS[i]}"
    return f"{value} {_SIZE_UNITS[i]}"


def format_relative_time(dt: datetime, *, now: Optional[datetime] = None) -> str:
    """Short relative age such as "5m ago"; falls back to the date after a week."""
    dt = normalize_dt(dt)
    ref = normalize_dt(now) if now is not None else now_utc()
    seconds = int((ref - dt).total_seconds())

    if seconds < 60:
        return "Just now"
    if seconds < 3600:
        return f"{seconds // 60}m ago"
    if seconds < 86400:
        return f"{seconds // 3600}h ago"
    if seconds < 604800:
        return f"{seconds // 86400}d ago"
    return dt.date().isoformat()
