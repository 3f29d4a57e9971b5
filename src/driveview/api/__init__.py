"""Collaborator API exports for driveview."""

from __future__ import annotations

from .async_api import AsyncDriveApi
from .google_drive import GoogleDriveApi, build_scope_query
from .protocol import DriveApi, ProgressCallback, Scope, ScopeKind

__all__ = [
    "DriveApi",
    "Scope",
    "ScopeKind",
    "ProgressCallback",
    "GoogleDriveApi",
    "AsyncDriveApi",
    "build_scope_query",
]
