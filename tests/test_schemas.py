"""
Notes API — Schema Tests
========================

What we test:
    ✅ Custom messages surface verbatim
    ✅ Defaults (role, page, limit, sort order)
    ✅ camelCase input and output
    ✅ Query coercion of numeric strings
"""

import pytest
from pydantic import ValidationError

from notes_api.schemas.note import CreateNoteRequest, NoteQuery, UpdateNoteRequest
from notes_api.schemas.user import CreateUserRequest, UpdateUserRequest, UserQuery

VALID_USER = {
    "email": "jane@example.com",
    "name": "Jane Doe",
    "password": "Secret123",
}


def messages(exc_info) -> list:
    return [err["msg"] for err in exc_info.value.errors()]


class TestCreateUserRequest:

    def test_valid_with_default_role(self):
        user = CreateUserRequest.model_validate(VALID_USER)
        assert user.role == "user"
        assert user.email == "jane@example.com"

    def test_invalid_email(self):
        with pytest.raises(ValidationError) as exc_info:
            CreateUserRequest.model_validate({**VALID_USER, "email": "not-an-email"})
        assert messages(exc_info) == ["Invalid email format"]

    def test_empty_name(self):
        with pytest.raises(ValidationError) as exc_info:
            CreateUserRequest.model_validate({**VALID_USER, "name": ""})
        assert messages(exc_info) == ["Name is required"]

    def test_name_too_long(self):
        with pytest.raises(ValidationError) as exc_info:
            CreateUserRequest.model_validate({**VALID_USER, "name": "x" * 101})
        assert messages(exc_info) == ["Name too long"]

    def test_short_password(self):
        with pytest.raises(ValidationError) as exc_info:
            CreateUserRequest.model_validate({**VALID_USER, "password": "Ab1"})
        assert messages(exc_info) == ["Password must be at least 8 characters"]

    def test_weak_password(self):
        with pytest.raises(ValidationError) as exc_info:
            CreateUserRequest.model_validate({**VALID_USER, "password": "alllowercase1"})
        assert messages(exc_info) == [
            "Password must contain at least one lowercase letter, "
            "one uppercase letter, and one number"
        ]

    def test_unknown_role_rejected(self):
        with pytest.raises(ValidationError):
            CreateUserRequest.model_validate({**VALID_USER, "role": "superuser"})

    def test_missing_fields_reported_together(self):
        with pytest.raises(ValidationError) as exc_info:
            CreateUserRequest.model_validate({})
        locs = {err["loc"][0] for err in exc_info.value.errors()}
        assert locs == {"email", "name", "password"}


class TestUpdateUserRequest:

    def test_all_optional(self):
        update = UpdateUserRequest.model_validate({})
        assert update.model_dump(exclude_none=True) == {}

    def test_partial_email_checked(self):
        with pytest.raises(ValidationError) as exc_info:
            UpdateUserRequest.model_validate({"email": "bad"})
        assert messages(exc_info) == ["Invalid email format"]


class TestQueries:

    def test_user_query_defaults(self):
        query = UserQuery.model_validate({})
        assert (query.page, query.limit, query.sort_order) == (1, 10, "asc")

    def test_note_query_defaults_to_desc(self):
        assert NoteQuery.model_validate({}).sort_order == "desc"

    def test_numeric_strings_coerced(self):
        query = NoteQuery.model_validate({"page": "2", "limit": "25", "userId": "u-1"})
        assert query.page == 2
        assert query.limit == 25
        assert query.user_id == "u-1"

    def test_limit_above_maximum_rejected(self):
        with pytest.raises(ValidationError):
            NoteQuery.model_validate({"limit": "1000"})

    def test_dump_uses_camel_case(self):
        dumped = NoteQuery.model_validate({"sortBy": "title"}).model_dump(by_alias=True)
        assert dumped["sortBy"] == "title"
        assert dumped["sortOrder"] == "desc"


class TestNoteRequests:

    def test_create_note_messages(self):
        with pytest.raises(ValidationError) as exc_info:
            CreateNoteRequest.model_validate({"title": "", "content": "", "userId": ""})
        assert set(messages(exc_info)) == {
            "Title is required",
            "Content is required",
            "User ID is required",
        }

    def test_title_too_long(self):
        with pytest.raises(ValidationError) as exc_info:
            CreateNoteRequest.model_validate({"title": "t" * 201, "content": "c", "userId": "u"})
        assert messages(exc_info) == ["Title too long"]

    def test_accepts_snake_case_too(self):
        note = CreateNoteRequest.model_validate({"title": "t", "content": "c", "user_id": "u"})
        assert note.user_id == "u"

    def test_update_note_partial(self):
        update = UpdateNoteRequest.model_validate({"title": "New"})
        assert update.model_dump(exclude_none=True) == {"title": "New"}
