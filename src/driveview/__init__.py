"""driveview public API."""

from __future__ import annotations

from driveview.api import AsyncDriveApi, DriveApi, GoogleDriveApi, Scope
from driveview.auth import AuthInfo, OAuthClient
from driveview.config import ClientConfig
from driveview.dashboard import DriveDashboard
from driveview.errors import (
    ApiError,
    AuthError,
    ConflictError,
    DriveViewError,
    HttpErrorInfo,
    InvalidArgumentError,
    InvalidStateError,
    LocalPreconditionError,
    NetworkError,
    NotFoundError,
    PermissionError,
    QuotaExceededError,
    RateLimitError,
    RejectedOperationError,
    map_http_error,
)
from driveview.models import (
    BatchResult,
    BulkAction,
    Crumb,
    Entry,
    EntryKind,
    MoveResult,
    OperationResult,
    UploadItem,
    UploadStatus,
)
from driveview.notify import LoggingNotifier, Notifier, RecordingNotifier
from driveview.session import Session
from driveview.view import (
    BreadcrumbResolver,
    DragDropMover,
    DragSelectController,
    ItemCache,
    Rect,
    SelectionState,
    UploadQueue,
    project,
)

__all__ = [
    # High-level
    "DriveDashboard",
    "Session",
    "ClientConfig",
    # Auth
    "AuthInfo",
    "OAuthClient",
    # Collaborator API
    "DriveApi",
    "Scope",
    "GoogleDriveApi",
    "AsyncDriveApi",
    # View components
    "project",
    "ItemCache",
    "SelectionState",
    "DragSelectController",
    "Rect",
    "DragDropMover",
    "BreadcrumbResolver",
    "UploadQueue",
    # Models
    "Entry",
    "EntryKind",
    "Crumb",
    "BulkAction",
    "BatchResult",
    "OperationResult",
    "MoveResult",
    "UploadItem",
    "UploadStatus",
    # Notifications
    "Notifier",
    "LoggingNotifier",
    "RecordingNotifier",
    # Errors
    "DriveViewError",
    "LocalPreconditionError",
    "InvalidStateError",
    "NetworkError",
    "RejectedOperationError",
    "AuthError",
    "PermissionError",
    "InvalidArgumentError",
    "NotFoundError",
    "ConflictError",
    "RateLimitError",
    "QuotaExceededError",
    "ApiError",
    "HttpErrorInfo",
    "map_http_error",
]
