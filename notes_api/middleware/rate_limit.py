"""
Notes API — Rate Limiting Middleware
====================================

What:  Per-IP sliding window rate limiter.
Why:   Protects the API from abuse; rejected requests never reach routing,
       validation or the database.
How:   Tracks request timestamps per IP in memory.
When:  Before routing, after request ID and logging (so 429s are traced).

Algorithm: Sliding Window
    1. Each IP gets a list of request timestamps
    2. On each request, drop timestamps older than the window
    3. If the remaining count >= RATE_LIMIT_MAX_REQUESTS, reject with 429
    4. Otherwise record the current timestamp and let the request through

Limits:
    State lives in this process only. Several workers each enforce their
    own window.
"""

import logging
import time
from collections import defaultdict
from typing import Dict, List

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from notes_api.config import settings
from notes_api.envelope import error_response
from notes_api.exceptions import RateLimitExceededError

logger = logging.getLogger(__name__)


class RateLimitMiddleware(BaseHTTPMiddleware):
    """
    In-memory sliding window rate limiter.

    Configuration (read per request, so tests can patch settings):
        rate_limit_max_requests: Max requests per window (default: 100)
        rate_limit_window_ms:    Window duration (default: 900000 = 15 minutes)

    Response headers:
        RateLimit-Limit / RateLimit-Remaining on every limited path
        Retry-After on 429 responses
    """

    EXCLUDED_PATHS = {"/health", "/ping", "/api-docs", "/openapi.json", "/redoc"}

    # Forget IPs that went quiet once every CLEANUP_INTERVAL tracked requests
    CLEANUP_INTERVAL = 1000

    def __init__(self, app, **kwargs):
        super().__init__(app, **kwargs)
        self._requests: Dict[str, List[float]] = defaultdict(list)
        self._request_count = 0

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in self.EXCLUDED_PATHS:
            return await call_next(request)

        client_ip = request.client.host if request.client else "unknown"
        limit = settings.rate_limit_max_requests
        window = settings.rate_limit_window_seconds

        now = time.time()
        window_start = now - window

        self._requests[client_ip] = [
            ts for ts in self._requests[client_ip] if ts > window_start
        ]

        if len(self._requests[client_ip]) >= limit:
            oldest = self._requests[client_ip][0]
            retry_after = int(oldest + window - now) + 1

            logger.warning(
                "Rate limit exceeded for IP %s: %d requests in %.0fs window",
                client_ip,
                len(self._requests[client_ip]),
                window,
            )

            exc = RateLimitExceededError(retry_after=retry_after)
            return error_response(
                exc.message,
                exc.status_code,
                error=exc.error_code,
                headers={
                    "Retry-After": str(retry_after),
                    "RateLimit-Limit": str(limit),
                    "RateLimit-Remaining": "0",
                },
            )

        self._requests[client_ip].append(now)
        remaining = limit - len(self._requests[client_ip])

        self._request_count += 1
        if self._request_count % self.CLEANUP_INTERVAL == 0:
            self._cleanup_inactive_ips(window_start)

        response = await call_next(request)
        response.headers["RateLimit-Limit"] = str(limit)
        response.headers["RateLimit-Remaining"] = str(remaining)
        return response

    def _cleanup_inactive_ips(self, window_start: float) -> None:
        inactive_ips = [
            ip for ip, timestamps in self._requests.items()
            if not timestamps or max(timestamps) < window_start
        ]
        for ip in inactive_ips:
            del self._requests[ip]

        if inactive_ips:
            logger.debug("Cleaned up %d inactive IP entries", len(inactive_ips))
