from __future__ import annotations

from typing import Literal, Optional

FOLDER_MIME: str = "application/vnd.google-apps.folder"

Category = Literal["image", "video", "document"]

# Substrings that mark a MIME type as a document.
DOCUMENT_MIME_MARKERS: tuple[str, ...] = ("pdf", "word", "document", "text")


def is_folder(mime_type: Optional[str]) -> bool:
    return mime_type == FOLDER_MIME


def is_image(mime_type: Optional[str]) -> bool:
    return bool(mime_type) and mime_type.lower().startswith("image/")  # type: ignore[union-attr]


def is_video(mime_type: Optional[str]) -> bool:
    return bool(mime_type) and mime_type.lower().startswith("video/")  # type: ignore[union-attr]


def is_document(mime_type: Optional[str]) -> bool:
    if not mime_type:
        return False
    m = mime_type.lower()
    return any(marker in m for marker in DOCUMENT_MIME_MARKERS)


def matches_category(mime_type: Optional[str], category: Category) -> bool:
    """Return True if a file's MIME type belongs to the given category."""
    if category == "image":
        return is_image(mime_type)
    if category == "video":
        return is_video(mime_type)
    if category == "document":
        return is_document(mime_type)
    raise ValueError(f"Unknown category: {category!r}")
