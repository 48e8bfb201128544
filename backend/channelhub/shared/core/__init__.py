"""
Core Module

Provides core functionality shared across the application:
- Structured logging
- Custom exceptions and error kinds

Usage:
======
    from channelhub.shared.core.logging import logger, get_logger
    from channelhub.shared.core.exceptions import ChannelHubException, NotFoundError

    logger.info("Starting operation", user_id=user_id)
"""

from channelhub.shared.core.logging import (
    logger,
    get_logger,
    log_context,
    clear_log_context,
)
from channelhub.shared.core.exceptions import (
    ErrorKind,
    AuthFailure,
    ChannelHubException,
    ValidationError,
    AuthenticationError,
    AuthorizationError,
    NotFoundError,
    UserNotFoundError,
    ChannelNotFoundError,
    ConflictError,
    DuplicateResourceError,
    ServiceUnavailableError,
    ExternalServiceError,
    InternalError,
)

__all__ = [
    # Logging
    "logger",
    "get_logger",
    "log_context",
    "clear_log_context",
    # Exceptions
    "ErrorKind",
    "AuthFailure",
    "ChannelHubException",
    "ValidationError",
    "AuthenticationError",
    "AuthorizationError",
    "NotFoundError",
    "UserNotFoundError",
    "ChannelNotFoundError",
    "ConflictError",
    "DuplicateResourceError",
    "ServiceUnavailableError",
    "ExternalServiceError",
    "InternalError",
]
