"""
Notes API — Base Controller
===========================

What:  Envelope helpers and failure wrapping shared by all controllers.
"""

import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional, Type

from pydantic import BaseModel
from starlette.responses import JSONResponse, Response

from notes_api.envelope import (
    created_response,
    error_response,
    no_content_response,
    success_response,
)
from notes_api.exceptions import NotesApiError, OperationalError
from notes_api.repositories.base import PaginatedResult

logger = logging.getLogger(__name__)


class BaseController:
    """Response helpers; subclasses add the endpoint handlers."""

    # ── Serialization ─────────────────────────────────────────────────────

    @staticmethod
    def serialize(schema: Type[BaseModel], entity: Any) -> Dict[str, Any]:
        """Read an ORM entity through an output schema into camelCase JSON."""
        return schema.model_validate(entity).model_dump(mode="json", by_alias=True)

    def serialize_page(self, schema: Type[BaseModel], result: PaginatedResult) -> Dict[str, Any]:
        return {
            "data": [self.serialize(schema, item) for item in result.data],
            "pagination": result.pagination.model_dump(by_alias=True),
        }

    # ── Success envelopes ─────────────────────────────────────────────────

    def send_success(
        self, data: Any = None, message: str = "Success", status_code: int = 200
    ) -> JSONResponse:
        return success_response(data, message, status_code)

    def send_created(
        self, data: Any = None, message: str = "Resource created successfully"
    ) -> JSONResponse:
        return created_response(data, message)

    def send_no_content(self) -> Response:
        return no_content_response()

    # ── Error envelopes ───────────────────────────────────────────────────

    def send_error(
        self,
        message: str = "An error occurred",
        status_code: int = 500,
        error: Optional[str] = None,
    ) -> JSONResponse:
        return error_response(message, status_code, error=error)

    def send_bad_request(self, message: str = "Bad request", error: Optional[str] = None) -> JSONResponse:
        return self.send_error(message, 400, error)

    def send_not_found(self, message: str = "Resource not found") -> JSONResponse:
        return self.send_error(message, 404, "not_found")

    def send_conflict(self, message: str = "Resource already exists") -> JSONResponse:
        return self.send_error(message, 409, "conflict")

    # ── Failure wrapping ──────────────────────────────────────────────────

    @contextmanager
    def failure_message(self, message: str) -> Iterator[None]:
        """
        Re-raise unexpected errors as OperationalError(message, 500).

        Application errors (NotesApiError) pass through untouched; the
        original exception is logged with its traceback and chained.
        """
        try:
            yield
        except NotesApiError:
            raise
        except Exception as e:
            logger.error("%s: %s", message, e, exc_info=True)
            raise OperationalError(message, status_code=500) from e
