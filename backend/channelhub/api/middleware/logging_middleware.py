"""
Request Logging Middleware

Binds a request id to the structlog context for the lifetime of a request,
so every log line emitted while handling it carries the same id.

    → X-Request-ID: 3f2a...      (taken from the client, or generated)
    log_context(request_id, method, path)
    ... handler logs ...
    "Request completed" status_code=200 duration_ms=12.4
    clear_log_context()
    ← X-Request-ID: 3f2a...
"""

import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from channelhub.shared.core.logging import clear_log_context, get_logger, log_context


REQUEST_ID_HEADER = "X-Request-ID"

logger = get_logger("channelhub.http")


class LoggingMiddleware(BaseHTTPMiddleware):
    """Per-request log context and one access line per request."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex

        clear_log_context()
        log_context(request_id=request_id, method=request.method, path=request.url.path)
        started = time.perf_counter()
        try:
            response = await call_next(request)
            logger.info(
                "Request completed",
                status_code=response.status_code,
                duration_ms=round((time.perf_counter() - started) * 1000, 1),
            )
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            clear_log_context()
