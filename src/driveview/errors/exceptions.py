"""Exception hierarchy and HTTP error mapping for driveview."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


class DriveViewError(Exception):
    """
    Base exception for driveview.

    Attributes:
        details: Optional structured information (e.g., HTTP status, reason).
        cause: Optional original exception that triggered this error.
    """

    def __init__(
        self,
        message: str,
        *,
        details: Optional[dict[str, Any]] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self.details = details or {}
        self.cause = cause


class LocalPreconditionError(DriveViewError):
    """Raised when an operation is disallowed before any request is sent."""


class InvalidStateError(DriveViewError):
    """Raised when the library is used in an invalid state (e.g., session closed)."""


class NetworkError(DriveViewError):
    """Raised when the request could not reach the collaborator API."""


class RejectedOperationError(DriveViewError):
    """Base for errors where the collaborator answered with a semantic error."""


class AuthError(RejectedOperationError):
    """Raised when OAuth authentication/refresh fails (HTTP 401)."""


class PermissionError(RejectedOperationError):
    """Raised when access is denied (HTTP 403 non-quota)."""


class InvalidArgumentError(RejectedOperationError):
    """Raised when request arguments are invalid (HTTP 400, etc.)."""


class NotFoundError(RejectedOperationError):
    """Raised when an entry is not found (HTTP 404)."""


class ConflictError(RejectedOperationError):
    """Raised on conflicts such as duplicate names (HTTP 409/412)."""


class RateLimitError(RejectedOperationError):
    """Raised when rate-limited (HTTP 429)."""


class QuotaExceededError(RejectedOperationError):
    """Raised when quota is exceeded (HTTP 403 with quota-related reason)."""


class ApiError(RejectedOperationError):
    """Raised for unclassified API errors (5xx, unknown 4xx, etc.)."""


@dataclass(frozen=True)
class HttpErrorInfo:
    """Lightweight HTTP error information for mapping to driveview exceptions."""

    status_code: int
    reason: str | None = None
    message: str | None = None
    details: dict[str, Any] | None = None


_QUOTA_REASON_KEYWORDS: tuple[str, ...] = (
    "quota",
    "rateLimitExceeded",
    "userRateLimitExceeded",
    "dailyLimitExceeded",
    "usageLimits",
    "storageQuotaExceeded",
)


def _is_quota_reason(reason: str | None) -> bool:
    if not reason:
        return False
    return any(key.lower() in reason.lower() for key in _QUOTA_REASON_KEYWORDS)


def map_http_error(
    info: HttpErrorInfo,
    *,
    cause: Optional[BaseException] = None,
) -> RejectedOperationError:
    """
    Map an HTTP error response to a driveview exception.

    Policy:
        - 401 -> AuthError
        - 403 -> PermissionError (default), but QuotaExceededError if quota-related
        - 404 -> NotFoundError
        - 409/412 -> ConflictError
        - 429 -> RateLimitError
        - 400 -> InvalidArgumentError
        - 5xx -> ApiError
        - otherwise -> ApiError
    """
    details: dict[str, Any] = {
        "status_code": info.status_code,
        "reason": info.reason,
    }
    if info.details:
        details.update(info.details)

    message = info.message or f"HTTP error {info.status_code}"
    if 500 <= info.status_code <= 599 and not info.message:
        message = "Server error. Please try again later."

    if info.status_code == 400:
        return InvalidArgumentError(message, details=details, cause=cause)
    if info.status_code == 401:
        return AuthError(message, details=details, cause=cause)
    if info.status_code == 403:
        if _is_quota_reason(info.reason):
            return QuotaExceededError(message, details=details, cause=cause)
        return PermissionError(message, details=details, cause=cause)
    if info.status_code == 404:
        return NotFoundError(message, details=details, cause=cause)
    if info.status_code in (409, 412):
        return ConflictError(message, details=details, cause=cause)
    if info.status_code == 429:
        return RateLimitError(message, details=details, cause=cause)

    return ApiError(message, details=details, cause=cause)


def describe_error(exc: BaseException) -> str:
    """Return the single-line text shown to the user for a failed operation."""
    text = str(exc).strip()
    if isinstance(exc, NetworkError):
        return text or "Unable to connect to the server."
    return text or exc.__class__.__name__
