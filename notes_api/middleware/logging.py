"""
Notes API — Request Timing & Logging Middleware
===============================================

What:  Measures every request, exposes the duration in X-Response-Time and
       writes one access-log line per request.
Why:   Enables monitoring, debugging and performance analysis; the header
       lets clients see server-side latency.
When:  Just inside RequestIDMiddleware, so the request ID is available and
       rejected requests (429/413) are logged too.

Log line:
    GET /api/v1/users 200 3.4ms [550e8400-...] from 192.168.1.100

Fields carried on each record:
    ✅ method, path, status, duration, client IP, request ID
    ❌ never the body or credential headers (user emails live in bodies)
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from notes_api.middleware.request_id import request_id_var

logger = logging.getLogger("notes_api.access")

RESPONSE_TIME_HEADER = "X-Response-Time"

# Probed every few seconds by orchestrators; logging them drowns real traffic
QUIET_PATHS = {"/health", "/ping"}


def format_response_time(start_time: float) -> str:
    return f"{(time.perf_counter() - start_time) * 1000:.2f}ms"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Times each request, sets X-Response-Time and logs the outcome."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        start_time = time.perf_counter()

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000
        response.headers[RESPONSE_TIME_HEADER] = f"{duration_ms:.2f}ms"

        path = request.url.path
        if path in QUIET_PATHS:
            return response

        client_ip = request.client.host if request.client else "unknown"
        rid = request_id_var.get("")

        # 5xx → ERROR, 4xx → WARNING, everything else → INFO
        status = response.status_code
        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        logger.log(
            log_level,
            "%s %s %d %.1fms [%s] from %s",
            request.method,
            path,
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
