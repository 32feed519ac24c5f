"""
Custom exceptions for the Wanderplan backend.

Every failure a caller can see maps onto one of a small number of kinds:
missing identity, a record that is missing or owned by someone else, a
failing third-party service, or invalid input. Auth provider failures carry
their own category so each gets a distinct user-facing message.
"""

from typing import Optional, Dict, Any
from enum import Enum


class ErrorCode(str, Enum):
    """Standardized error codes for the application."""

    # Identity errors
    UNAUTHENTICATED = "UNAUTHENTICATED"
    AUTH_PROVIDER_ERROR = "AUTH_PROVIDER_ERROR"

    # Store errors
    NOT_FOUND_OR_UNAUTHORIZED = "NOT_FOUND_OR_UNAUTHORIZED"
    NOT_FOUND = "NOT_FOUND"

    # Remote errors
    REMOTE_SERVICE_ERROR = "REMOTE_SERVICE_ERROR"

    # Rate limiting errors
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"

    # Generic errors
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"


class AuthErrorKind(str, Enum):
    """Categories of auth provider failure, each with its own message."""

    INVALID_CREDENTIALS = "invalid_credentials"
    EMAIL_IN_USE = "email_in_use"
    INVALID_TOKEN = "invalid_token"
    NETWORK = "network"
    POPUP_BLOCKED = "popup_blocked"
    POPUP_CLOSED = "popup_closed"
    UNKNOWN = "unknown"


AUTH_ERROR_MESSAGES: Dict[AuthErrorKind, str] = {
    AuthErrorKind.INVALID_CREDENTIALS: "Invalid email or password.",
    AuthErrorKind.EMAIL_IN_USE: "An account with this email already exists.",
    AuthErrorKind.INVALID_TOKEN: "Your session is invalid or has expired. Please sign in again.",
    AuthErrorKind.NETWORK: "Network error. Please check your internet connection and try again.",
    AuthErrorKind.POPUP_BLOCKED: "Popup was blocked by your browser. Please allow popups for this site and try again.",
    AuthErrorKind.POPUP_CLOSED: "Google sign-in was cancelled. Please try again and complete the sign-in process.",
    AuthErrorKind.UNKNOWN: "Failed to sign in. Please try again.",
}

AUTH_ERROR_STATUS: Dict[AuthErrorKind, int] = {
    AuthErrorKind.INVALID_CREDENTIALS: 401,
    AuthErrorKind.EMAIL_IN_USE: 409,
    AuthErrorKind.INVALID_TOKEN: 401,
    AuthErrorKind.NETWORK: 503,
    AuthErrorKind.POPUP_BLOCKED: 400,
    AuthErrorKind.POPUP_CLOSED: 400,
    AuthErrorKind.UNKNOWN: 400,
}


class WanderplanException(Exception):
    """Base exception for the Wanderplan backend."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 500
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.status_code = status_code


class UnauthenticatedError(WanderplanException):
    """Raised when an operation needs a session identity and there is none."""

    def __init__(self, message: str = "User not authenticated"):
        super().__init__(
            message=message,
            error_code=ErrorCode.UNAUTHENTICATED,
            status_code=401
        )


class NotFoundOrUnauthorizedError(WanderplanException):
    """
    Raised when a record does not exist or belongs to another user.

    The two cases are deliberately indistinguishable to the caller.
    """

    def __init__(self, resource: str, record_id: Optional[str] = None):
        details = {"resource": resource}
        if record_id is not None:
            details["id"] = record_id
        super().__init__(
            message=f"{resource.capitalize()} not found or unauthorized",
            error_code=ErrorCode.NOT_FOUND_OR_UNAUTHORIZED,
            details=details,
            status_code=404
        )
        self.resource = resource


class NotFoundError(WanderplanException):
    """Raised for unknown public resources such as catalog entries."""

    def __init__(self, resource: str, record_id: str):
        super().__init__(
            message=f"{resource.capitalize()} '{record_id}' not found",
            error_code=ErrorCode.NOT_FOUND,
            details={"resource": resource, "id": record_id},
            status_code=404
        )


class RemoteServiceError(WanderplanException):
    """Raised when a third-party API fails, is unreachable or returns an unexpected shape."""

    def __init__(
        self,
        service_name: str,
        message: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        merged = {"service_name": service_name}
        merged.update(details or {})
        super().__init__(
            message=message or f"Service '{service_name}' is temporarily unavailable",
            error_code=ErrorCode.REMOTE_SERVICE_ERROR,
            details=merged,
            status_code=502
        )
        self.service_name = service_name


class ValidationError(WanderplanException):
    """Raised when user input is rejected before any store or remote call."""

    def __init__(self, message: str, field: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        merged = dict(details or {})
        if field:
            merged["field"] = field
        super().__init__(
            message=message,
            error_code=ErrorCode.VALIDATION_ERROR,
            details=merged,
            status_code=422
        )
        self.field = field


class AuthProviderError(WanderplanException):
    """Raised by the auth provider; ``kind`` selects the user-facing message."""

    def __init__(self, kind: AuthErrorKind, details: Optional[Dict[str, Any]] = None):
        merged = {"kind": kind.value}
        merged.update(details or {})
        super().__init__(
            message=AUTH_ERROR_MESSAGES[kind],
            error_code=ErrorCode.AUTH_PROVIDER_ERROR,
            details=merged,
            status_code=AUTH_ERROR_STATUS[kind]
        )
        self.kind = kind


class RateLimitExceededError(WanderplanException):
    """Raised when a client exceeds its request budget."""

    def __init__(self, limit_per_minute: int, retry_after_seconds: int):
        super().__init__(
            message=f"Rate limit of {limit_per_minute} requests per minute exceeded",
            error_code=ErrorCode.RATE_LIMIT_EXCEEDED,
            details={
                "limit_per_minute": limit_per_minute,
                "retry_after_seconds": retry_after_seconds,
            },
            status_code=429
        )
