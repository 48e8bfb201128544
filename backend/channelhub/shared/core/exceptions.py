"""
Custom Exceptions

Application-specific exceptions with explicit error kinds, HTTP status codes
and error codes.

Exception Hierarchy:
====================
    ChannelHubException (base)             ErrorKind
       │
       ├── ValidationError (400)          VALIDATION    ← Malformed input, weak password
       ├── AuthenticationError (401)      UNAUTHORIZED  ← Bad credentials, bad/expired/used token
       ├── AuthorizationError (403)       FORBIDDEN     ← Authenticated but not allowed
       ├── NotFoundError (404)            NOT_FOUND     ← No matching identity
       │      ├── UserNotFoundError
       │      └── ChannelNotFoundError
       ├── ConflictError (409)            CONFLICT      ← Handle or email already taken
       │      └── DuplicateResourceError
       ├── ServiceUnavailableError (503)  UNAVAILABLE   ← Store or media timeout
       │      └── ExternalServiceError
       └── InternalError (500)            INTERNAL      ← Signing failures, invariants broken

Every exception carries its ErrorKind so callers can branch on the kind
instead of on the concrete class, and the API boundary maps kinds 1:1 onto
status codes.

Private Failure Reasons:
========================
AuthenticationError accepts a ``reason`` (AuthFailure) describing which check
failed (expired signature, stored token mismatch, ...). The reason is kept on
the instance for logging and is never part of ``to_dict()``.

Usage:
======
    from channelhub.shared.core.exceptions import NotFoundError, ValidationError

    raise NotFoundError("User", user_id)
    raise ValidationError("Invalid email format", details={"field": "email"})
    raise AuthenticationError("Invalid refresh token", reason=AuthFailure.EXPIRED)
"""

from enum import Enum
from typing import Any, Optional


class ErrorKind(str, Enum):
    """Externally visible error categories."""

    VALIDATION = "VALIDATION"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    UNAVAILABLE = "UNAVAILABLE"
    INTERNAL = "INTERNAL"

    @property
    def status_code(self) -> int:
        return _STATUS_BY_KIND[self]


_STATUS_BY_KIND = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.UNAUTHORIZED: 401,
    ErrorKind.FORBIDDEN: 403,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.CONFLICT: 409,
    ErrorKind.UNAVAILABLE: 503,
    ErrorKind.INTERNAL: 500,
}


class AuthFailure(str, Enum):
    """Internal reason an authentication attempt was rejected (log only)."""

    MISSING = "missing"
    MALFORMED = "malformed"
    EXPIRED = "expired"
    USER_NOT_FOUND = "user_not_found"
    TOKEN_MISMATCH = "token_mismatch"
    ROTATION_RACE = "rotation_race"
    BAD_PASSWORD = "bad_password"


class ChannelHubException(Exception):
    """
    Base exception for all ChannelHub application errors.

    Attributes:
        message: Human-readable error message
        kind: ErrorKind category
        status_code: HTTP status code derived from the kind
        error_code: Machine-readable error code
        details: Additional error context (safe to expose)
    """

    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(
        self,
        message: str,
        kind: Optional[ErrorKind] = None,
        error_code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        self.message = message
        if kind is not None:
            self.kind = kind
        self.error_code = error_code or f"{self.kind.value}_ERROR"
        self.details = details or {}
        super().__init__(self.message)

    @property
    def status_code(self) -> int:
        return self.kind.status_code

    def to_dict(self) -> dict[str, Any]:
        """
        Convert exception to dictionary for API response.

        Returns:
            Dictionary with success flag, message and error details
        """
        return {
            "success": False,
            "message": self.message,
            "error": {
                "code": self.error_code,
                "message": self.message,
                "details": self.details,
            },
        }


# ═══════════════════════════════════════════════════════════════════════════════
# VALIDATION (400)
# ═══════════════════════════════════════════════════════════════════════════════


class ValidationError(ChannelHubException):
    """
    Validation error (400 Bad Request).

    Raised when input data fails format, length or policy checks.
    """

    kind = ErrorKind.VALIDATION

    def __init__(
        self,
        message: str = "Validation failed",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message=message, error_code="VALIDATION_ERROR", details=details)


# ═══════════════════════════════════════════════════════════════════════════════
# AUTHENTICATION & AUTHORIZATION ERRORS (401, 403)
# ═══════════════════════════════════════════════════════════════════════════════


class AuthenticationError(ChannelHubException):
    """
    Authentication failed error (401 Unauthorized).

    Raised when:
    - Credentials are missing or wrong
    - A token is malformed, expired, of the wrong type or already used
    - The refresh token no longer matches the stored session

    The ``reason`` distinguishes these cases internally; the public message
    should stay generic.
    """

    kind = ErrorKind.UNAUTHORIZED

    def __init__(
        self,
        message: str = "Authentication failed",
        reason: Optional[AuthFailure] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        self.reason = reason
        super().__init__(message=message, error_code="AUTHENTICATION_ERROR", details=details)


class AuthorizationError(ChannelHubException):
    """
    Authorization failed error (403 Forbidden).

    Raised when user is authenticated but lacks permission.
    """

    kind = ErrorKind.FORBIDDEN

    def __init__(
        self,
        message: str = "Access denied",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message=message, error_code="AUTHORIZATION_ERROR", details=details)


# ═══════════════════════════════════════════════════════════════════════════════
# NOT FOUND ERRORS (404)
# ═══════════════════════════════════════════════════════════════════════════════


class NotFoundError(ChannelHubException):
    """
    Resource not found error (404 Not Found).

    Example:
        raise NotFoundError("User", user_id)
        # Message: "User with id 'abc-123' not found"
    """

    kind = ErrorKind.NOT_FOUND

    def __init__(
        self,
        resource: str,
        resource_id: Optional[str] = None,
        message: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        if message is None:
            message = f"{resource} not found"
            if resource_id:
                message = f"{resource} with id '{resource_id}' not found"
        super().__init__(message=message, error_code="NOT_FOUND", details=details)


class UserNotFoundError(NotFoundError):
    """User not found error."""

    def __init__(self, user_id: Optional[str] = None, message: Optional[str] = None) -> None:
        super().__init__(resource="User", resource_id=user_id, message=message)


class ChannelNotFoundError(NotFoundError):
    """No user owns the requested channel handle."""

    def __init__(self, handle: str) -> None:
        super().__init__(resource="Channel", message=f"Channel '{handle}' not found")


# ═══════════════════════════════════════════════════════════════════════════════
# CONFLICT ERRORS (409)
# ═══════════════════════════════════════════════════════════════════════════════


class ConflictError(ChannelHubException):
    """
    Resource conflict error (409 Conflict).

    Example:
        raise ConflictError("Email is already registered")
    """

    kind = ErrorKind.CONFLICT

    def __init__(
        self,
        message: str = "Resource conflict",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message=message, error_code="CONFLICT", details=details)


class DuplicateResourceError(ConflictError):
    """Specific case of conflict when trying to create a duplicate resource."""

    def __init__(
        self,
        message: str = "Resource already exists",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message=message, details=details)


# ═══════════════════════════════════════════════════════════════════════════════
# SERVICE ERRORS (503, 500)
# ═══════════════════════════════════════════════════════════════════════════════


class ServiceUnavailableError(ChannelHubException):
    """
    Service temporarily unavailable error (503).

    Raised when the database or media store does not answer in time.
    """

    kind = ErrorKind.UNAVAILABLE

    def __init__(
        self,
        message: str = "Service temporarily unavailable",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message=message, error_code="SERVICE_UNAVAILABLE", details=details)


class ExternalServiceError(ServiceUnavailableError):
    """More specific error for external collaborator failures."""

    def __init__(
        self,
        service_name: str,
        message: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        msg = message or f"{service_name} service error"
        extra_details = details or {}
        extra_details["service"] = service_name
        super().__init__(message=msg, details=extra_details)


class InternalError(ChannelHubException):
    """Unexpected failure such as a token that could not be signed (500)."""

    kind = ErrorKind.INTERNAL

    def __init__(self, message: str = "An unexpected error occurred") -> None:
        super().__init__(message=message, error_code="INTERNAL_ERROR")
