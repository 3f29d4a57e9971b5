"""Client configuration for driveview."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Mapping, Optional

DRIVE_FULL_SCOPE: str = "https://www.googleapis.com/auth/drive"


@dataclass(slots=True, frozen=True)
class ClientConfig:
    """
    Settings shared by the view components and the collaborator API.

    Attributes:
        root_label: Name shown for the root crumb.
        max_breadcrumb_hops: Hop cap for parent-chain walks (breadcrumbs, cycle guard).
        clear_selection_on_navigate: If True, navigation clears the selection;
            otherwise the selection is pruned to the entries still listed.
        supports_all_drives: Include shared drives in Drive API requests.
        scopes: OAuth scopes requested by the session.
        max_upload_size: Upload size limit in bytes; None disables the check.
    """

    root_label: str = "My Drive"
    max_breadcrumb_hops: int = 25
    clear_selection_on_navigate: bool = False
    supports_all_drives: bool = True
    scopes: tuple[str, ...] = (DRIVE_FULL_SCOPE,)
    max_upload_size: Optional[int] = None

    def __post_init__(self) -> None:
        if not isinstance(self.root_label, str) or not self.root_label.strip():
            raise ValueError("ClientConfig.root_label must be a non-empty string")
        if not isinstance(self.max_breadcrumb_hops, int) or self.max_breadcrumb_hops < 1:
            raise ValueError("ClientConfig.max_breadcrumb_hops must be a positive int")
        if not self.scopes or not all(isinstance(s, str) and s.strip() for s in self.scopes):
            raise ValueError("ClientConfig.scopes must be a non-empty sequence of strings")
        if self.max_upload_size is not None and self.max_upload_size <= 0:
            raise ValueError("ClientConfig.max_upload_size must be positive or None")

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]]) -> ClientConfig:
        """
        Build a config from a loosely-typed mapping (e.g. a JSON settings file).

        Missing keys keep their defaults; unknown keys are ignored.
        """
        if not data:
            return cls()
        known = {f.name for f in fields(cls)}
        kwargs = {k: v for k, v in data.items() if k in known}
        if "scopes" in kwargs and not isinstance(kwargs["scopes"], tuple):
            kwargs["scopes"] = tuple(kwargs["scopes"])
        return cls(**kwargs)
