"""
Notes API — User Controller Unit Tests
======================================

What:  UserController against in-memory and mocked repositories.
Why:   Precondition order and envelope mapping are business rules; they are
       tested without HTTP or a database.

What we test:
    ✅ Create → 201 envelope, password never returned
    ✅ Duplicate email → 409, including a lost race on insert
    ✅ Update checks existence before email uniqueness, skips the check when
       the email is unchanged
    ✅ Delete → 204 then 404
    ✅ Unexpected repository errors → OperationalError with a fixed message
"""

import json

import pytest

from notes_api.controllers.users import UserController
from notes_api.exceptions import ConflictError, OperationalError
from notes_api.schemas.user import CreateUserRequest, UpdateUserRequest


def body_of(response) -> dict:
    return json.loads(response.body)


def new_user(email="jane@example.com", name="Jane Doe", role="user") -> CreateUserRequest:
    return CreateUserRequest(email=email, name=name, password="Secret123", role=role)


class TestUserControllerCreate:

    @pytest.mark.asyncio
    async def test_create_user_success(self, user_repository):
        controller = UserController(user_repository)

        response = await controller.create_user(new_user(role="admin"))

        assert response.status_code == 201
        body = body_of(response)
        assert body["success"] is True
        assert body["message"] == "User created successfully"
        assert body["data"]["email"] == "jane@example.com"
        assert body["data"]["role"] == "admin"
        assert "password" not in body["data"]
        assert set(body["data"]) == {"id", "email", "name", "role", "createdAt", "updatedAt"}

    @pytest.mark.asyncio
    async def test_duplicate_email_conflict(self, user_repository):
        controller = UserController(user_repository)
        await controller.create_user(new_user())

        response = await controller.create_user(new_user(name="Someone Else"))

        assert response.status_code == 409
        body = body_of(response)
        assert body["success"] is False
        assert body["message"] == "User with this email already exists"
        assert body["statusCode"] == 409

    @pytest.mark.asyncio
    async def test_conflict_raised_by_write(self, mock_user_repository):
        """A concurrent insert can win between the lookup and the write."""
        mock_user_repository.find_by_email.return_value = None
        mock_user_repository.create.side_effect = ConflictError("User with this email already exists")
        controller = UserController(mock_user_repository)

        response = await controller.create_user(new_user())

        assert response.status_code == 409

    @pytest.mark.asyncio
    async def test_password_not_passed_to_repository(self, mock_user_repository, user_repository):
        mock_user_repository.find_by_email.return_value = None
        mock_user_repository.create.side_effect = user_repository.create
        controller = UserController(mock_user_repository)

        await controller.create_user(new_user())

        data = mock_user_repository.create.await_args.args[0]
        assert "password" not in data

    @pytest.mark.asyncio
    async def test_unexpected_error_wrapped(self, mock_user_repository):
        mock_user_repository.find_by_email.side_effect = RuntimeError("connection reset")
        controller = UserController(mock_user_repository)

        with pytest.raises(OperationalError) as exc_info:
            await controller.create_user(new_user())

        assert exc_info.value.message == "Failed to create user"
        assert exc_info.value.status_code == 500


class TestUserControllerRead:

    @pytest.mark.asyncio
    async def test_get_missing_user(self, user_repository):
        response = await UserController(user_repository).get_user_by_id("missing")

        assert response.status_code == 404
        assert body_of(response)["message"] == "User not found"

    @pytest.mark.asyncio
    async def test_get_existing_user(self, user_repository):
        controller = UserController(user_repository)
        created = body_of(await controller.create_user(new_user()))["data"]

        response = await controller.get_user_by_id(created["id"])

        assert response.status_code == 200
        assert body_of(response)["data"] == created

    @pytest.mark.asyncio
    async def test_list_clamps_and_searches(self, user_repository):
        controller = UserController(user_repository)
        await controller.create_user(new_user("alice@example.com", "Alice"))
        await controller.create_user(new_user("bob@example.com", "Bob"))
        await controller.create_user(new_user("carol@example.com", "Carol"))

        response = await controller.get_users({"limit": "1000", "page": "0", "search": "BOB"})

        body = body_of(response)
        assert body["message"] == "Users retrieved successfully"
        assert [u["name"] for u in body["data"]["data"]] == ["Bob"]
        assert body["data"]["pagination"]["limit"] == 100
        assert body["data"]["pagination"]["page"] == 1
        assert body["data"]["pagination"]["total"] == 1

    @pytest.mark.asyncio
    async def test_list_sorted_by_name(self, user_repository):
        controller = UserController(user_repository)
        for name in ("Carol", "Alice", "Bob"):
            await controller.create_user(new_user(f"{name.lower()}@example.com", name))

        body = body_of(await controller.get_users({"sortBy": "name", "sortOrder": "desc"}))

        assert [u["name"] for u in body["data"]["data"]] == ["Carol", "Bob", "Alice"]

    @pytest.mark.asyncio
    async def test_list_failure_wrapped(self, mock_user_repository):
        mock_user_repository.find_all.side_effect = RuntimeError("boom")

        with pytest.raises(OperationalError) as exc_info:
            await UserController(mock_user_repository).get_users({})

        assert exc_info.value.message == "Failed to retrieve users"


class TestUserControllerUpdate:

    @pytest.mark.asyncio
    async def test_update_missing_user_checked_first(self, mock_user_repository):
        mock_user_repository.find_by_id.return_value = None
        controller = UserController(mock_user_repository)

        response = await controller.update_user("missing", UpdateUserRequest(email="x@example.com"))

        assert response.status_code == 404
        mock_user_repository.exists.assert_not_awaited()
        mock_user_repository.update.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_update_to_taken_email(self, user_repository):
        controller = UserController(user_repository)
        await controller.create_user(new_user("taken@example.com", "Taken"))
        target = body_of(await controller.create_user(new_user()))["data"]

        response = await controller.update_user(target["id"], UpdateUserRequest(email="taken@example.com"))

        assert response.status_code == 409
        assert body_of(response)["message"] == "User with this email already exists"

    @pytest.mark.asyncio
    async def test_unchanged_email_skips_uniqueness_check(self, mock_user_repository, user_repository):
        existing = await user_repository.create({"email": "jane@example.com", "name": "Jane"})
        mock_user_repository.find_by_id.return_value = existing
        mock_user_repository.update.side_effect = user_repository.update
        controller = UserController(mock_user_repository)

        response = await controller.update_user(
            existing.id, UpdateUserRequest(email="jane@example.com", name="Janet")
        )

        assert response.status_code == 200
        assert body_of(response)["data"]["name"] == "Janet"
        mock_user_repository.exists.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_partial_update_keeps_other_fields(self, user_repository):
        controller = UserController(user_repository)
        created = body_of(await controller.create_user(new_user(role="admin")))["data"]

        response = await controller.update_user(created["id"], UpdateUserRequest(name="Renamed"))

        data = body_of(response)["data"]
        assert data["name"] == "Renamed"
        assert data["email"] == created["email"]
        assert data["role"] == "admin"
        assert body_of(response)["message"] == "User updated successfully"


class TestUserControllerDelete:

    @pytest.mark.asyncio
    async def test_delete_twice(self, user_repository):
        controller = UserController(user_repository)
        created = body_of(await controller.create_user(new_user()))["data"]

        first = await controller.delete_user(created["id"])
        second = await controller.delete_user(created["id"])

        assert first.status_code == 204
        assert first.body == b""
        assert second.status_code == 404

    @pytest.mark.asyncio
    async def test_delete_failure_wrapped(self, mock_user_repository):
        mock_user_repository.delete.side_effect = RuntimeError("boom")

        with pytest.raises(OperationalError) as exc_info:
            await UserController(mock_user_repository).delete_user("u-1")

        assert exc_info.value.message == "Failed to delete user"
