"""Public error exports for driveview."""

from __future__ import annotations

from .exceptions import (
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
    describe_error,
    map_http_error,
)

__all__ = [
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
    "describe_error",
]
