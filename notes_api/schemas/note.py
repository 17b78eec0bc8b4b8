"""
Notes API — Note Schemas
========================

What:  Input schemas for the note endpoints and the note response model.

Differences from the user schemas:
    - NoteQuery defaults to newest-first (sortOrder=desc)
    - NoteQuery accepts a `userId` filter
    - Note bodies are sanitized (trimmed, angle brackets removed) before
      validation by the routes
"""

from typing import Optional

from pydantic import Field, field_validator
from pydantic_core import PydanticCustomError

from notes_api.pagination import MAX_PAGE
from notes_api.schemas.common import CamelModel, UtcDatetime
from notes_api.schemas.user import SortOrder


def check_title(value: str) -> str:
    if len(value) < 1:
        raise PydanticCustomError("title_required", "Title is required")
    if len(value) > 200:
        raise PydanticCustomError("title_too_long", "Title too long")
    return value


def check_content(value: str) -> str:
    if len(value) < 1:
        raise PydanticCustomError("content_required", "Content is required")
    return value


class CreateNoteRequest(CamelModel):
    title: str
    content: str
    user_id: str

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        return check_title(v)

    @field_validator("content")
    @classmethod
    def validate_content(cls, v: str) -> str:
        return check_content(v)

    @field_validator("user_id")
    @classmethod
    def validate_user_id(cls, v: str) -> str:
        if not v:
            raise PydanticCustomError("user_id_required", "User ID is required")
        return v


class UpdateNoteRequest(CamelModel):
    """Body of PUT /notes/{id}. The owner of a note cannot be changed."""

    title: Optional[str] = None
    content: Optional[str] = None

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: Optional[str]) -> Optional[str]:
        return v if v is None else check_title(v)

    @field_validator("content")
    @classmethod
    def validate_content(cls, v: Optional[str]) -> Optional[str]:
        return v if v is None else check_content(v)


class NoteParams(CamelModel):
    id: str

    @field_validator("id")
    @classmethod
    def validate_id(cls, v: str) -> str:
        if not v:
            raise PydanticCustomError("id_required", "Note ID is required")
        return v


class UserNoteParams(CamelModel):
    user_id: str

    @field_validator("user_id")
    @classmethod
    def validate_user_id(cls, v: str) -> str:
        if not v:
            raise PydanticCustomError("user_id_required", "User ID is required")
        return v


class NoteQuery(CamelModel):
    """Query string of GET /notes and GET /users/{userId}/notes."""

    page: int = Field(default=1, ge=1, le=MAX_PAGE)
    limit: int = Field(default=10, ge=1, le=100)
    sort_by: Optional[str] = None
    sort_order: SortOrder = "desc"
    user_id: Optional[str] = None


class NoteAuthor(CamelModel):
    """Author summary embedded in every note."""

    id: str
    name: str
    email: str


class NoteResponse(CamelModel):
    id: str
    title: str
    content: str
    user_id: str
    created_at: UtcDatetime
    updated_at: UtcDatetime
    user: Optional[NoteAuthor] = None
