"""
Logging Configuration

Structured logging setup using structlog for consistent, parseable logs.

Log Output:
===========
Development:
    2024-01-15 10:30:00 [info     ] Refresh token rotated          user_id=550e8400-e29b-...

Production (JSON):
    {"timestamp": "2024-01-15T10:30:00", "level": "warning", "event": "Refresh token rejected",
     "reason": "token_mismatch", "user_id": "550e8400-..."}

Security Notes:
===============
Authentication failures are logged with their private reason (expired,
malformed, token_mismatch, ...). The reason never reaches the HTTP response,
so the log is the only place where the cases can be told apart.
Never pass raw tokens or passwords as log fields.

Usage:
======
    from channelhub.shared.core.logging import logger, get_logger, log_context

    logger.info("User registered", user_id=user_id, handle=handle)

    auth_logger = get_logger("auth")
    auth_logger.warning("Refresh token rejected", reason="expired")

    # Add context to all subsequent logs of the current request
    log_context(request_id=request_id)
"""

import logging
import sys
from typing import Any

import structlog
from structlog.typing import Processor

from channelhub.config.settings import settings


# Third-party loggers that are chatty at INFO
_QUIET_LOGGERS = ("botocore", "boto3", "urllib3", "aiosqlite")


def setup_logging(level: str = "INFO", json_output: bool = False) -> None:
    """
    Configure structured logging for the application.

    Args:
        level: Standard logging level name
        json_output: Render JSON lines instead of coloured console output
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level.upper()),
    )
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if json_output:
        processors: list[Processor] = shared_processors + [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = shared_processors + [
            structlog.dev.ConsoleRenderer(colors=True),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """
    Get a structured logger instance.

    Args:
        name: Logger name, defaults to module name if not specified

    Returns:
        Configured structlog logger
    """
    return structlog.get_logger(name)


def log_context(**kwargs: Any) -> None:
    """
    Add context variables to all subsequent log calls.

    Context is stored in context variables and automatically included
    in all log messages until cleared or the request ends.
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_log_context() -> None:
    """Clear all context variables (call at the end of each request)."""
    structlog.contextvars.clear_contextvars()


setup_logging(level=settings.LOG_LEVEL, json_output=not settings.is_development)

logger = get_logger("channelhub")
