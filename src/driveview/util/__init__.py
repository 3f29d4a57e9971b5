from .format import format_relative_time, format_size
from .ids import new_batch_id, new_local_id, new_uuid
from .mime import (
    DOCUMENT_MIME_MARKERS,
    FOLDER_MIME,
    is_document,
    is_folder,
    is_image,
    is_video,
    matches_category,
)
from .time import now_utc, normalize_dt, parse_optional_rfc3339, parse_rfc3339

__all__ = [
    "new_uuid",
    "new_local_id",
    "new_batch_id",
    "FOLDER_MIME",
    "DOCUMENT_MIME_MARKERS",
    "is_folder",
    "is_image",
    "is_video",
    "is_document",
    "matches_category",
    "now_utc",
    "parse_rfc3339",
    "normalize_dt",
    "parse_optional_rfc3339",
    "format_size",
    "format_relative_time",
]
