"""
Error Handler Middleware

Global exception handling for the API.

Provides consistent error responses across all endpoints by catching
exceptions and converting them to standardized JSON responses.

Error Response Format:
======================
    {
        "success": false,
        "message": "Channel 'bob' not found",
        "error": {
            "code": "NOT_FOUND",
            "message": "Channel 'bob' not found",
            "details": {}
        }
    }

Exception Handling:
===================
1. ChannelHubException subclasses → status from their ErrorKind, to_dict()
2. RequestValidationError         → 400 with field locations
3. IntegrityError                 → 409 (unique index beat the pre-check)
4. Other exceptions               → 500 with generic message (details hidden)

Authentication failures are logged with their private reason; the response
only carries the public message.

Usage:
======
    from channelhub.api.middleware.error_handler import setup_exception_handlers

    app = FastAPI()
    setup_exception_handlers(app)
"""

from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError

from channelhub.shared.core.exceptions import (
    AuthenticationError,
    ChannelHubException,
    ConflictError,
    InternalError,
)
from channelhub.shared.core.logging import logger


def _error_body(code: str, message: str, details: dict[str, Any] | None = None) -> dict[str, Any]:
    return {
        "success": False,
        "message": message,
        "error": {"code": code, "message": message, "details": details or {}},
    }


def setup_exception_handlers(app: FastAPI) -> None:
    """
    Set up global exception handlers.

    Should be called during application initialization to register
    exception handlers for all routes.

    Args:
        app: FastAPI application instance
    """

    @app.exception_handler(ChannelHubException)
    async def channelhub_exception_handler(
        request: Request,
        exc: ChannelHubException,
    ) -> JSONResponse:
        """
        Handle application exceptions.

        All custom exceptions inherit from ChannelHubException and include:
        - kind / status_code: Error category and its HTTP status
        - error_code: Machine-readable error code
        - message: Human-readable message
        - details: Additional context
        """
        log_fields: dict[str, Any] = {
            "error_code": exc.error_code,
            "message": exc.message,
            "status_code": exc.status_code,
            "path": request.url.path,
        }
        if isinstance(exc, AuthenticationError) and exc.reason is not None:
            log_fields["reason"] = exc.reason.value

        if isinstance(exc, InternalError):
            logger.error("Application error", **log_fields)
        else:
            logger.warning("Application error", **log_fields)

        return JSONResponse(
            status_code=exc.status_code,
            content=exc.to_dict(),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """
        Handle request validation errors.

        These occur when the body, form or query doesn't match the expected schema.
        """
        errors = [
            {
                "loc": [str(part) for part in error.get("loc", ())],
                "msg": error.get("msg", ""),
                "type": error.get("type", ""),
            }
            for error in exc.errors()
        ]
        logger.warning(
            "Validation error",
            errors=errors,
            path=request.url.path,
        )
        return JSONResponse(
            status_code=400,
            content=_error_body("VALIDATION_ERROR", "Request validation failed", {"errors": errors}),
        )

    @app.exception_handler(IntegrityError)
    async def integrity_exception_handler(
        request: Request,
        exc: IntegrityError,
    ) -> JSONResponse:
        """Unique constraint violations from concurrent writes."""
        logger.warning(
            "Integrity error",
            error=str(exc.orig),
            path=request.url.path,
        )
        return JSONResponse(
            status_code=409,
            content=ConflictError("Resource already exists").to_dict(),
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """
        Handle unexpected exceptions.

        Catches any unhandled exception and returns a generic error.
        Full error details are logged but not exposed to clients.
        """
        logger.error(
            "Unexpected error",
            error=str(exc),
            error_type=type(exc).__name__,
            path=request.url.path,
            exc_info=True,
        )
        return JSONResponse(
            status_code=500,
            content=InternalError().to_dict(),
        )
