"""
Notes API — User Route Handlers
===============================

What:  HTTP surface of the /users resource (mounted under /api/v1).
How:   Each handler declares the schemas to validate, then hands the
       validated values to UserController / NoteController.

Endpoints:
    GET    /users                 list (page/limit are clamped, never rejected)
    GET    /users/{id}            detail
    POST   /users                 create
    PUT    /users/{id}            partial update
    DELETE /users/{id}            delete (the user's notes go with it)
    GET    /users/{user_id}/notes notes owned by one user
"""

import logging

from fastapi import APIRouter, Depends, Request
from starlette.responses import Response

from notes_api.config import settings
from notes_api.controllers import NoteController, UserController
from notes_api.dependencies import get_note_controller, get_user_controller
from notes_api.middleware.validation import ValidatedRequest, validate
from notes_api.schemas.common import ApiResponse, ErrorResponse
from notes_api.schemas.note import NoteQuery, UserNoteParams
from notes_api.schemas.user import CreateUserRequest, UpdateUserRequest, UserParams

logger = logging.getLogger(__name__)

# ── Router Configuration ──────────────────────────────────────────────────
router = APIRouter(prefix=f"{settings.api_base_path}/users", tags=["Users"])

NOT_FOUND = {404: {"description": "User not found", "model": ErrorResponse}}
BAD_REQUEST = {400: {"description": "Validation failed", "model": ErrorResponse}}
CONFLICT = {409: {"description": "Email already registered", "model": ErrorResponse}}


@router.get(
    "",
    responses={200: {"description": "Paginated users", "model": ApiResponse}},
    summary="List users",
    description=(
        "Returns a page of users. `page` and `limit` are clamped to valid "
        "ranges (limit ≤ 100). `search` matches name or email, case-insensitively."
    ),
)
async def list_users(
    request: Request,
    controller: UserController = Depends(get_user_controller),
) -> Response:
    return await controller.get_users(dict(request.query_params))


@router.get(
    "/{id}",
    responses={200: {"description": "User", "model": ApiResponse}, **NOT_FOUND},
    summary="Get a user by ID",
)
async def get_user(
    validated: ValidatedRequest = Depends(validate(params=UserParams)),
    controller: UserController = Depends(get_user_controller),
) -> Response:
    return await controller.get_user_by_id(validated.params.id)


@router.post(
    "",
    status_code=201,
    responses={
        201: {"description": "User created", "model": ApiResponse},
        **BAD_REQUEST,
        **CONFLICT,
    },
    summary="Create a user",
    description="The password is checked for strength and is never stored or returned.",
)
async def create_user(
    validated: ValidatedRequest = Depends(validate(body=CreateUserRequest)),
    controller: UserController = Depends(get_user_controller),
) -> Response:
    return await controller.create_user(validated.body)


@router.put(
    "/{id}",
    responses={
        200: {"description": "User updated", "model": ApiResponse},
        **BAD_REQUEST,
        **NOT_FOUND,
        **CONFLICT,
    },
    summary="Update a user",
)
async def update_user(
    validated: ValidatedRequest = Depends(validate(body=UpdateUserRequest, params=UserParams)),
    controller: UserController = Depends(get_user_controller),
) -> Response:
    return await controller.update_user(validated.params.id, validated.body)


@router.delete(
    "/{id}",
    status_code=204,
    responses={204: {"description": "User deleted"}, **NOT_FOUND},
    summary="Delete a user and their notes",
)
async def delete_user(
    validated: ValidatedRequest = Depends(validate(params=UserParams)),
    controller: UserController = Depends(get_user_controller),
) -> Response:
    return await controller.delete_user(validated.params.id)


@router.get(
    "/{user_id}/notes",
    responses={200: {"description": "Paginated notes of the user", "model": ApiResponse}, **NOT_FOUND},
    summary="List the notes of a user",
)
async def list_user_notes(
    validated: ValidatedRequest = Depends(validate(params=UserNoteParams, query=NoteQuery)),
    controller: NoteController = Depends(get_note_controller),
) -> Response:
    return await controller.get_notes_by_user_id(
        validated.params.user_id,
        validated.query.model_dump(by_alias=True),
    )
