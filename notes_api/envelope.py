"""
Notes API — Response Envelope Builder
=====================================

What:  Builds the success/error JSON envelope used by every endpoint.
Who:   Controllers (success, not-found, conflict), global exception handlers
       and middleware that reject requests before routing.

Envelope:
    success  → {success, message, data?, timestamp, requestId}
    error    → {success: false, message, error?, statusCode, timestamp,
                requestId, stack?}
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from notes_api.middleware.request_id import REQUEST_ID_HEADER, request_id_var
from notes_api.schemas.common import ApiResponse, ErrorResponse


def utc_timestamp() -> str:
    """Current time as ISO 8601 with millisecond precision and a Z suffix."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def current_request_id(request: Optional[Request] = None) -> str:
    """
    Request ID of the request being served.

    Exception handlers for bare Exceptions run outside the middleware stack
    where the ContextVar is not visible; request.state still carries the ID.
    """
    rid = request_id_var.get("")
    if not rid and request is not None:
        rid = getattr(request.state, "request_id", "")
    return rid


def success_response(
    data: Any = None,
    message: str = "Success",
    status_code: int = 200,
) -> JSONResponse:
    rid = current_request_id()
    body = ApiResponse(
        success=True,
        message=message,
        data=data,
        timestamp=utc_timestamp(),
        request_id=rid,
    )
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json", by_alias=True, exclude_none=True),
    )


def created_response(data: Any = None, message: str = "Resource created successfully") -> JSONResponse:
    return success_response(data, message, status_code=201)


def no_content_response() -> Response:
    return Response(status_code=204)


def error_response(
    message: str,
    status_code: int = 500,
    error: Optional[str] = None,
    stack: Optional[str] = None,
    headers: Optional[Dict[str, str]] = None,
    request: Optional[Request] = None,
) -> JSONResponse:
    rid = current_request_id(request)
    body = ErrorResponse(
        success=False,
        message=message,
        error=error,
        status_code=status_code,
        timestamp=utc_timestamp(),
        request_id=rid,
        stack=stack,
    )
    response_headers = dict(headers or {})
    if rid:
        response_headers.setdefault(REQUEST_ID_HEADER, rid)
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json", by_alias=True, exclude_none=True),
        headers=response_headers,
    )
