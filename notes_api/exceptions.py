"""
Notes API — Custom Exception Hierarchy
======================================

What:  Defines application-specific exceptions for the error taxonomy.
Why:   Each exception carries the HTTP status it maps to, so global handlers
       and middleware can render a consistent error envelope.
How:   Each exception class carries a message, a status code and an optional
       context dict (logged, never returned to the client).
Who:   Raised by the validation dependency, controllers and middleware.

Exception Hierarchy:
    NotesApiError (base)
    ├── ValidationError          → 400 Bad Request (field-level detail)
    ├── NotFoundError            → 404 Not Found
    ├── ConflictError            → 409 Conflict (uniqueness violation)
    └── OperationalError         → explicit status (500 by default)
        ├── PayloadTooLargeError → 413 Payload Too Large
        └── RateLimitExceededError → 429 Too Many Requests

    Anything else reaching the global handler is an unexpected error → 500.
"""

from typing import Any, Dict, List, Optional


class NotesApiError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:      User-facing error description (safe to return in API response)
        status_code:  HTTP status the error maps to
        error_code:   Machine-readable code placed in the envelope's `error` field
        context:      Additional debug info (logged but NOT returned to client)
    """

    status_code: int = 500
    error_code: str = "internal_server_error"

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        status_code: Optional[int] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(NotesApiError):
    """
    Raised when client input fails validation.

    `errors` holds one {"field", "message"} entry per failing field; the
    message already lists them as "field: message" pairs.
    """

    status_code = 400
    error_code = "validation_error"

    def __init__(
        self,
        message: str = "Validation failed",
        errors: Optional[List[Dict[str, str]]] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        self.errors = errors or []
        if self.errors:
            ctx["errors"] = self.errors
        super().__init__(message=message, context=ctx)


class NotFoundError(NotesApiError):
    """Raised when a requested resource does not exist."""

    status_code = 404
    error_code = "not_found"

    def __init__(
        self,
        message: str = "Resource not found",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class ConflictError(NotesApiError):
    """
    Raised when a write would violate a uniqueness constraint.

    Repositories raise this when the database rejects a duplicate key, so a
    race between a controller's uniqueness check and the write still ends
    in a 409 instead of a generic failure.
    """

    status_code = 409
    error_code = "conflict"

    def __init__(
        self,
        message: str = "Resource already exists",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class OperationalError(NotesApiError):
    """
    Raised deliberately with an explicit status code.

    Controllers wrap unexpected repository failures in one of these with a
    fixed endpoint message ("Failed to create user") so the original error
    detail stays in the server logs.
    """

    error_code = "operational_error"

    def __init__(
        self,
        message: str = "An error occurred",
        status_code: int = 500,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, status_code=status_code, context=context)


class PayloadTooLargeError(OperationalError):
    """Raised when a request body, declared or streamed, exceeds MAX_PAYLOAD_BYTES."""

    error_code = "payload_too_large"

    def __init__(self, max_bytes: int, context: Optional[Dict[str, Any]] = None):
        ctx = context or {}
        ctx["max_bytes"] = max_bytes
        super().__init__(message="Request payload too large", status_code=413, context=ctx)
        self.max_bytes = max_bytes


class RateLimitExceededError(OperationalError):
    """
    Raised when a client exceeds the per-IP request rate limit.

    Response includes a Retry-After header with the seconds until the
    oldest request in the window expires.
    """

    error_code = "rate_limit_exceeded"

    def __init__(self, retry_after: int = 60, context: Optional[Dict[str, Any]] = None):
        ctx = context or {}
        ctx["retry_after"] = retry_after
        super().__init__(
            message="Too many requests from this IP, please try again later.",
            status_code=429,
            context=ctx,
        )
        self.retry_after = retry_after
