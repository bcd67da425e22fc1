"""
QuickPaste Backend - Access Log Middleware
===========================================

What:  Writes one line per request to the `quickpaste.access` logger.
When:  Runs inside RequestIDMiddleware, so the request ID is already set.

Logged: method, path, status, response size, duration, request ID.
Never logged: paste bodies, in either direction.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from quickpaste.middleware.request_id import request_id_var

access_logger = logging.getLogger("quickpaste.access")

# Polled by orchestrators
UNLOGGED_PATHS = frozenset({"/health"})


def level_for_status(status: int) -> int:
    """ERROR for 5xx, WARNING for 4xx, INFO otherwise."""
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in UNLOGGED_PATHS:
            return await call_next(request)

        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        size = response.headers.get("content-length", "-")
        access_logger.log(
            level_for_status(response.status_code),
            "[%s] %s %s -> %d (%s bytes, %.1fms)",
            request_id_var.get(),
            request.method,
            request.url.path,
            response.status_code,
            size,
            elapsed_ms,
        )
        return response
