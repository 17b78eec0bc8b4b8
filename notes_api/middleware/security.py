"""
Notes API — Security Middleware
===============================

What:  Payload size enforcement and static security response headers.

PayloadSizeMiddleware:
    Rejects requests whose Content-Length exceeds MAX_PAYLOAD_BYTES with a
    413 envelope before the body is read. Bodies sent without a
    Content-Length are counted as they stream in by read_json_body.

SecurityHeadersMiddleware:
    X-API-Version:          API version served
    X-Content-Type-Options: nosniff
    X-Frame-Options:        DENY
    X-XSS-Protection:       1; mode=block
"""

import logging
from typing import Dict

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from notes_api.config import settings
from notes_api.envelope import error_response
from notes_api.exceptions import PayloadTooLargeError

logger = logging.getLogger(__name__)


class PayloadSizeMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        content_length = request.headers.get("content-length")
        if content_length and content_length.isdigit():
            if int(content_length) > settings.max_payload_bytes:
                exc = PayloadTooLargeError(max_bytes=settings.max_payload_bytes)
                logger.warning(
                    "Rejected %s %s: payload of %s bytes exceeds %d",
                    request.method,
                    request.url.path,
                    content_length,
                    settings.max_payload_bytes,
                )
                return error_response(exc.message, exc.status_code, error=exc.error_code)

        return await call_next(request)


def security_headers() -> Dict[str, str]:
    """Also applied by the 500 handler, which runs outside this middleware."""
    return {
        "X-API-Version": settings.api_version,
        "X-Content-Type-Options": "nosniff",
        "X-Frame-Options": "DENY",
        "X-XSS-Protection": "1; mode=block",
    }


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        response = await call_next(request)
        response.headers.update(security_headers())
        return response
