"""
Notes API — User Schemas
========================

What:  Input schemas for the user endpoints (body, path params, query) and
       the user response model.
How:   Applied by the `validate()` dependency; custom messages are raised as
       PydanticCustomError so they reach the client verbatim, e.g.
       "Validation failed: email: Invalid email format".
"""

import re
from typing import Literal, Optional

from email_validator import EmailNotValidError, validate_email
from pydantic import Field, field_validator
from pydantic_core import PydanticCustomError

from notes_api.pagination import MAX_PAGE
from notes_api.schemas.common import CamelModel, UtcDatetime

Role = Literal["admin", "user"]
SortOrder = Literal["asc", "desc"]

# At least one lowercase letter, one uppercase letter and one digit
_PASSWORD_PATTERN = re.compile(r"^(?=.*[a-z])(?=.*[A-Z])(?=.*\d)")


def check_email(value: str) -> str:
    try:
        # Syntax only, like the original service; reserved test domains pass.
        validate_email(value, check_deliverability=False, test_environment=True)
    except EmailNotValidError:
        raise PydanticCustomError("invalid_email", "Invalid email format")
    return value


def check_name(value: str) -> str:
    if len(value) < 1:
        raise PydanticCustomError("name_required", "Name is required")
    if len(value) > 100:
        raise PydanticCustomError("name_too_long", "Name too long")
    return value


def check_password(value: str) -> str:
    if len(value) < 8:
        raise PydanticCustomError("password_too_short", "Password must be at least 8 characters")
    if not _PASSWORD_PATTERN.match(value):
        raise PydanticCustomError(
            "password_too_weak",
            "Password must contain at least one lowercase letter, "
            "one uppercase letter, and one number",
        )
    return value


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class CreateUserRequest(CamelModel):
    """Body of POST /users. The password is validated, never stored."""

    email: str
    name: str
    password: str
    role: Role = "user"

    @field_validator("email")
    @classmethod
    def validate_email_field(cls, v: str) -> str:
        return check_email(v)

    @field_validator("name")
    @classmethod
    def validate_name_field(cls, v: str) -> str:
        return check_name(v)

    @field_validator("password")
    @classmethod
    def validate_password_field(cls, v: str) -> str:
        return check_password(v)


class UpdateUserRequest(CamelModel):
    """Body of PUT /users/{id}; every field optional."""

    email: Optional[str] = None
    name: Optional[str] = None
    role: Optional[Role] = None

    @field_validator("email")
    @classmethod
    def validate_email_field(cls, v: Optional[str]) -> Optional[str]:
        return v if v is None else check_email(v)

    @field_validator("name")
    @classmethod
    def validate_name_field(cls, v: Optional[str]) -> Optional[str]:
        return v if v is None else check_name(v)


class UserParams(CamelModel):
    id: str

    @field_validator("id")
    @classmethod
    def validate_id(cls, v: str) -> str:
        if not v:
            raise PydanticCustomError("id_required", "User ID is required")
        return v


class UserQuery(CamelModel):
    """Query string of GET /users."""

    page: int = Field(default=1, ge=1, le=MAX_PAGE)
    limit: int = Field(default=10, ge=1, le=100)
    sort_by: Optional[str] = None
    sort_order: SortOrder = "asc"
    search: Optional[str] = None


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class UserResponse(CamelModel):
    id: str
    email: str
    name: str
    role: Role
    created_at: UtcDatetime
    updated_at: UtcDatetime
