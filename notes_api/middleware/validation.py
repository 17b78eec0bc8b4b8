"""
Notes API — Request Validation
==============================

What:  Applies Pydantic schemas to a request's body, path params and query.
Why:   Handlers receive typed, defaulted values; malformed input never
       reaches a controller.
How:   `validate(...)` builds a FastAPI dependency returning a
       ValidatedRequest. The Starlette request is left untouched; the
       validated segments travel as a request-scoped value instead.

Rules:
    - Segments are checked in order body → params → query
    - The first failing segment raises ValidationError (400) listing every
      failing field of that segment; later segments are not checked
    - Message format: "Validation failed: title: Title is required, userId: Field required"
    - A body that is not JSON → "Invalid JSON payload"; an empty body → {}
    - A body larger than MAX_PAYLOAD_BYTES → 413, even without Content-Length

Usage in a route:
    @router.post("")
    async def create_note(
        validated: ValidatedRequest = Depends(validate(body=CreateNoteRequest, sanitize=True)),
    ): ...
"""

import json
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Optional, Sequence, Type

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from starlette.requests import Request

from notes_api.config import settings
from notes_api.exceptions import PayloadTooLargeError, ValidationError

logger = logging.getLogger(__name__)

MAX_STRING_LENGTH = 10_000


@dataclass(frozen=True)
class ValidatedRequest:
    body: Optional[Any] = None
    params: Optional[Any] = None
    query: Optional[Any] = None


def format_validation_errors(
    errors: Sequence[Dict[str, Any]], segment: str = "body"
) -> ValidationError:
    """
    Convert Pydantic error dicts into one ValidationError.

    Field paths are dotted ("items.0.title"); an error on the segment as a
    whole (e.g. a JSON array sent as the body) is reported under the
    segment name.
    """
    items: List[Dict[str, str]] = []
    for err in errors:
        field = ".".join(str(part) for part in err.get("loc", ())) or segment
        items.append({
            "field": field,
            "message": err.get("msg") or "Invalid value",
            "code": err.get("type") or "invalid",
        })

    if items:
        message = "Validation failed: " + ", ".join(
            f"{item['field']}: {item['message']}" for item in items
        )
    else:
        message = "Validation failed"
    return ValidationError(message, errors=items, context={"segment": segment})


def validate_segment(schema: Type[BaseModel], data: Any, segment: str) -> BaseModel:
    try:
        return schema.model_validate(data)
    except PydanticValidationError as e:
        raise format_validation_errors(e.errors(), segment) from e


def sanitize_input(value: Any) -> Any:
    """Trim strings, drop angle brackets and cap length, recursively."""
    if isinstance(value, str):
        return value.strip().replace("<", "").replace(">", "")[:MAX_STRING_LENGTH]
    if isinstance(value, list):
        return [sanitize_input(item) for item in value]
    if isinstance(value, dict):
        return {key: sanitize_input(item) for key, item in value.items()}
    return value


async def read_json_body(request: Request) -> Any:
    """
    Read and decode the JSON body, enforcing MAX_PAYLOAD_BYTES on the bytes
    actually received (a chunked upload carries no Content-Length).
    """
    limit = settings.max_payload_bytes
    chunks: List[bytes] = []
    received = 0
    async for chunk in request.stream():
        received += len(chunk)
        if received > limit:
            logger.warning(
                "Rejected %s %s: streamed body exceeds %d bytes",
                request.method,
                request.url.path,
                limit,
            )
            raise PayloadTooLargeError(max_bytes=limit)
        chunks.append(chunk)

    raw = b"".join(chunks)
    if not raw.strip():
        return {}
    try:
        return json.loads(raw)
    except ValueError as e:
        logger.debug("Rejected malformed JSON body: %s", e)
        raise ValidationError("Invalid JSON payload") from e


def validate(
    body: Optional[Type[BaseModel]] = None,
    params: Optional[Type[BaseModel]] = None,
    query: Optional[Type[BaseModel]] = None,
    sanitize: bool = False,
) -> Callable[[Request], Awaitable[ValidatedRequest]]:
    """Build a dependency validating the given request segments."""

    async def dependency(request: Request) -> ValidatedRequest:
        validated: Dict[str, Any] = {}

        if body is not None:
            payload = await read_json_body(request)
            if sanitize:
                payload = sanitize_input(payload)
            validated["body"] = validate_segment(body, payload, "body")

        if params is not None:
            validated["params"] = validate_segment(params, dict(request.path_params), "params")

        if query is not None:
            validated["query"] = validate_segment(query, dict(request.query_params), "query")

        return ValidatedRequest(**validated)

    return dependency
