"""
Notes API — Note Route Handlers
===============================

What:  HTTP surface of the /notes resource (mounted under /api/v1).
How:   Validates input with the note schemas, then delegates to
       NoteController. Note bodies are sanitized (trimmed, angle brackets
       removed, capped at 10,000 characters) before validation.

Endpoints:
    GET    /notes                        list, optional ?userId=
    GET    /notes/{id}                   detail
    POST   /notes                        create (owner must exist)
    PUT    /notes/{id}                   partial update
    DELETE /notes/{id}                   delete
    GET    /notes/users/{user_id}/notes  notes owned by one user

Unlike GET /users, list queries here are validated strictly: limit > 100
is a 400, not a clamp.
"""

import logging

from fastapi import APIRouter, Depends
from starlette.responses import Response

from notes_api.config import settings
from notes_api.controllers import NoteController
from notes_api.dependencies import get_note_controller
from notes_api.middleware.validation import ValidatedRequest, validate
from notes_api.schemas.common import ApiResponse, ErrorResponse
from notes_api.schemas.note import (
    CreateNoteRequest,
    NoteParams,
    NoteQuery,
    UpdateNoteRequest,
    UserNoteParams,
)

logger = logging.getLogger(__name__)

# ── Router Configuration ──────────────────────────────────────────────────
router = APIRouter(prefix=f"{settings.api_base_path}/notes", tags=["Notes"])

NOT_FOUND = {404: {"description": "Note (or owning user) not found", "model": ErrorResponse}}
BAD_REQUEST = {400: {"description": "Validation failed", "model": ErrorResponse}}


@router.get(
    "",
    responses={200: {"description": "Paginated notes", "model": ApiResponse}, **BAD_REQUEST},
    summary="List notes",
    description="Newest first by default. Filter by owner with `userId`.",
)
async def list_notes(
    validated: ValidatedRequest = Depends(validate(query=NoteQuery)),
    controller: NoteController = Depends(get_note_controller),
) -> Response:
    return await controller.get_notes(validated.query.model_dump(by_alias=True))


@router.get(
    "/users/{user_id}/notes",
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


@router.get(
    "/{id}",
    responses={200: {"description": "Note", "model": ApiResponse}, **NOT_FOUND},
    summary="Get a note by ID",
)
async def get_note(
    validated: ValidatedRequest = Depends(validate(params=NoteParams)),
    controller: NoteController = Depends(get_note_controller),
) -> Response:
    return await controller.get_note_by_id(validated.params.id)


@router.post(
    "",
    status_code=201,
    responses={
        201: {"description": "Note created", "model": ApiResponse},
        **BAD_REQUEST,
        **NOT_FOUND,
    },
    summary="Create a note",
)
async def create_note(
    validated: ValidatedRequest = Depends(validate(body=CreateNoteRequest, sanitize=True)),
    controller: NoteController = Depends(get_note_controller),
) -> Response:
    return await controller.create_note(validated.body)


@router.put(
    "/{id}",
    responses={
        200: {"description": "Note updated", "model": ApiResponse},
        **BAD_REQUEST,
        **NOT_FOUND,
    },
    summary="Update a note",
)
async def update_note(
    validated: ValidatedRequest = Depends(
        validate(body=UpdateNoteRequest, params=NoteParams, sanitize=True)
    ),
    controller: NoteController = Depends(get_note_controller),
) -> Response:
    return await controller.update_note(validated.params.id, validated.body)


@router.delete(
    "/{id}",
    status_code=204,
    responses={204: {"description": "Note deleted"}, **NOT_FOUND},
    summary="Delete a note",
)
async def delete_note(
    validated: ValidatedRequest = Depends(validate(params=NoteParams)),
    controller: NoteController = Depends(get_note_controller),
) -> Response:
    return await controller.delete_note(validated.params.id)
