"""
API Middleware

Custom middleware for the FastAPI application.

Components:
===========
- error_handler: Global exception handling
- logging_middleware: Request id log context and access logging

Usage:
======
    from channelhub.api.middleware import setup_exception_handlers, LoggingMiddleware

    app = FastAPI()
    setup_exception_handlers(app)
    app.add_middleware(LoggingMiddleware)
"""

from channelhub.api.middleware.error_handler import setup_exception_handlers
from channelhub.api.middleware.logging_middleware import LoggingMiddleware, REQUEST_ID_HEADER

__all__ = [
    "setup_exception_handlers",
    "LoggingMiddleware",
    "REQUEST_ID_HEADER",
]
