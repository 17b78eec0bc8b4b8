"""
Notes API — Request ID Middleware
=================================

What:  Assigns a unique ID to each incoming request and adds it to the response.
Why:   Every log line and every envelope (`requestId`) of one request share
       the same ID, so a client-reported ID leads straight to the logs.
How:   Stores the ID in a ContextVar (read by the envelope builder and the
       access log) and in request.state (read by exception handlers that run
       outside this middleware), then returns it in the X-Request-ID header.
When:  Outermost middleware: even rate-limited and oversized requests get an ID.
"""

import time
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local storage for the current request ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

REQUEST_ID_HEADER = "X-Request-ID"


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Behavior:
        1. Reuse the client's X-Request-ID header when present
        2. Otherwise generate a UUID4
        3. Publish it to request_id_var and request.state.request_id, and
           stamp request.state.start_time for handlers outside the stack
        4. Echo it in the response headers
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())

        request_id_var.set(rid)
        request.state.request_id = rid
        request.state.start_time = time.perf_counter()

        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = rid
        return response
