"""
Notes API — User Controller
===========================

What:  Handlers for the /users resource.
Who:   Called by routes/users.py with validated input and a UserRepository.

Precondition order (kept stable):
    create:  email lookup → insert
    update:  user exists → email re-check (only when the email changes) → update

The password on CreateUserRequest is validated by the schema and then
dropped here; it is never passed to the repository.
"""

import logging
from typing import Any, Mapping, Optional

from starlette.responses import JSONResponse, Response

from notes_api.controllers.base import BaseController
from notes_api.exceptions import ConflictError
from notes_api.pagination import get_pagination_params
from notes_api.repositories.base import UserRepository
from notes_api.repositories.users import DUPLICATE_EMAIL_MESSAGE
from notes_api.schemas.user import CreateUserRequest, UpdateUserRequest, UserResponse

logger = logging.getLogger(__name__)

USER_NOT_FOUND = "User not found"


class UserController(BaseController):
    def __init__(self, user_repository: UserRepository):
        self.user_repository = user_repository

    async def get_users(self, query: Mapping[str, Any]) -> JSONResponse:
        """
        List users, clamping page/limit rather than rejecting them.

        `query` is the raw query mapping (camelCase keys); `search` filters
        on name or email.
        """
        with self.failure_message("Failed to retrieve users"):
            pagination = get_pagination_params(query, default_sort_order="asc")
            search: Optional[str] = query.get("search")
            if not isinstance(search, str) or not search:
                search = None

            result = await self.user_repository.find_all(pagination, search)
            return self.send_success(
                self.serialize_page(UserResponse, result),
                "Users retrieved successfully",
            )

    async def get_user_by_id(self, user_id: str) -> JSONResponse:
        with self.failure_message("Failed to retrieve user"):
            user = await self.user_repository.find_by_id(user_id)
            if user is None:
                return self.send_not_found(USER_NOT_FOUND)

            return self.send_success(
                self.serialize(UserResponse, user),
                "User retrieved successfully",
            )

    async def create_user(self, body: CreateUserRequest) -> JSONResponse:
        with self.failure_message("Failed to create user"):
            existing = await self.user_repository.find_by_email(body.email)
            if existing is not None:
                return self.send_conflict(DUPLICATE_EMAIL_MESSAGE)

            try:
                user = await self.user_repository.create({
                    "email": body.email,
                    "name": body.name,
                    "role": body.role,
                })
            except ConflictError as e:
                # Lost a race with a concurrent insert of the same email
                return self.send_conflict(e.message)

            return self.send_created(
                self.serialize(UserResponse, user),
                "User created successfully",
            )

    async def update_user(self, user_id: str, body: UpdateUserRequest) -> JSONResponse:
        with self.failure_message("Failed to update user"):
            existing = await self.user_repository.find_by_id(user_id)
            if existing is None:
                return self.send_not_found(USER_NOT_FOUND)

            changes = body.model_dump(exclude_none=True)

            new_email = changes.get("email")
            if new_email and new_email != existing.email:
                if await self.user_repository.exists(new_email):
                    return self.send_conflict(DUPLICATE_EMAIL_MESSAGE)

            try:
                user = await self.user_repository.update(user_id, changes)
            except ConflictError as e:
                return self.send_conflict(e.message)

            if user is None:
                return self.send_not_found(USER_NOT_FOUND)

            return self.send_success(
                self.serialize(UserResponse, user),
                "User updated successfully",
            )

    async def delete_user(self, user_id: str) -> Response:
        with self.failure_message("Failed to delete user"):
            deleted = await self.user_repository.delete(user_id)
            if not deleted:
                return self.send_not_found(USER_NOT_FOUND)
            return self.send_no_content()
