"""
Notes API — Shared Pydantic Schemas
===================================

What:  The response envelope, pagination metadata and health payload shared
       by every endpoint.
Why:   Clients parse one envelope shape for every response:

           {
               "success": true,
               "message": "Users retrieved successfully",
               "data": {...},
               "timestamp": "2024-01-15T12:00:00.000Z",
               "requestId": "550e8400-e29b-41d4-a716-446655440000"
           }

       Error envelopes set success=false and add `error` and `statusCode`.

Naming:
    Python attributes are snake_case; JSON keys are camelCase through the
    `to_camel` alias generator on CamelModel.
"""

from datetime import datetime, timezone
from typing import Annotated, Any, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model exposing camelCase JSON keys while accepting both spellings."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ApiResponse(CamelModel):
    """Success envelope returned by every 2xx endpoint that has a body."""

    success: bool = Field(description="Whether the request succeeded")
    message: str = Field(description="Human-readable outcome")
    data: Optional[Any] = Field(default=None, description="Response payload")
    error: Optional[str] = Field(default=None, description="Machine-readable error code")
    timestamp: str = Field(description="Response time (UTC ISO 8601)")
    request_id: str = Field(description="Request correlation ID")


class ErrorResponse(ApiResponse):
    """
    Error envelope.

    `stack` is only populated for unexpected errors outside production.
    """

    status_code: int = Field(description="HTTP status code")
    stack: Optional[str] = Field(default=None, description="Stack trace (non-production only)")


class PaginationMeta(CamelModel):
    """
    Page metadata for list responses.

    Invariants:
        total_pages = ceil(total / limit)
        has_next    = offset + limit < total
        has_prev    = page > 1
    """

    page: int
    limit: int
    total: int
    total_pages: int
    has_next: bool
    has_prev: bool


class HealthData(CamelModel):
    """Payload of GET /health."""

    status: str = Field(description="OK when the database is reachable, DEGRADED otherwise")
    timestamp: str
    uptime: float = Field(description="Seconds since the process started serving")
    environment: str
    version: str
    database: str = Field(description="connected | disconnected")


def as_utc(value: datetime) -> datetime:
    """Naive timestamps (SQLite drops the offset) are UTC; aware ones are converted."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


# Serialized as ISO 8601 with a Z suffix
UtcDatetime = Annotated[datetime, AfterValidator(as_utc)]
