"""
Hub Foundation: Access Log Middleware
======================================

What:  One log line per request: method, path, query, status, duration.
How:   Times the downstream call and logs at a level chosen from the status:
       5xx → ERROR, 4xx → WARNING, everything else → INFO.
When:  After RequestIDMiddleware, so the request ID is available.

Example line:
    GET /api/v1/artworks?limit=50 200 12.4ms [3f2a9c1b] from 10.0.0.7

Only the query string is logged, never headers; ?ids= lists are truncated
so a thousand-id request does not produce a multi-kilobyte log line.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from hub_foundation.middleware.request_id import request_id_var

logger = logging.getLogger("hub_foundation.access")

# Longest query string written to the access log
MAX_LOGGED_QUERY = 200

# Paths polled by orchestrators; logging them drowns real traffic
QUIET_PATHS = {"/health"}


def loggable_query(query: str) -> str:
    if len(query) <= MAX_LOGGED_QUERY:
        return query
    return query[:MAX_LOGGED_QUERY] + "..."


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs each request with its status code and duration."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path in QUIET_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start_time) * 1000

        status = response.status_code
        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        client_ip = request.client.host if request.client else "unknown"
        query = loggable_query(request.url.query)
        target = f"{path}?{query}" if query else path
        rid = request_id_var.get("")

        logger.log(
            log_level,
            "%s %s %d %.1fms [%s] from %s",
            request.method,
            target,
            status,
            duration_ms,
            rid,
            client_ip,
            extra={
                "request_id": rid,
                "method": request.method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
            },
        )

        return response
