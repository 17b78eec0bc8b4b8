"""
Notes API — Note Controller
===========================

What:  Handlers for the /notes resource and the per-user note listing.
Who:   Called by routes/notes.py and routes/users.py.

Every note returned embeds its author summary (`user: {id, name, email}`).
Notes default to newest first; `sortOrder=asc` flips that.
"""

import logging
from typing import Any, Mapping

from starlette.responses import JSONResponse, Response

from notes_api.controllers.base import BaseController
from notes_api.pagination import get_pagination_params
from notes_api.repositories.base import NoteRepository, UserRepository
from notes_api.schemas.note import CreateNoteRequest, NoteResponse, UpdateNoteRequest

logger = logging.getLogger(__name__)

NOTE_NOT_FOUND = "Note not found"
USER_NOT_FOUND = "User not found"


class NoteController(BaseController):
    def __init__(self, note_repository: NoteRepository, user_repository: UserRepository):
        self.note_repository = note_repository
        self.user_repository = user_repository

    async def get_notes(self, query: Mapping[str, Any]) -> JSONResponse:
        with self.failure_message("Failed to retrieve notes"):
            pagination = get_pagination_params(query, default_sort_order="desc")
            user_id = query.get("userId") or None

            result = await self.note_repository.find_all(pagination, user_id)
            return self.send_success(
                self.serialize_page(NoteResponse, result),
                "Notes retrieved successfully",
            )

    async def get_note_by_id(self, note_id: str) -> JSONResponse:
        with self.failure_message("Failed to retrieve note"):
            note = await self.note_repository.find_by_id(note_id)
            if note is None:
                return self.send_not_found(NOTE_NOT_FOUND)

            return self.send_success(
                self.serialize(NoteResponse, note),
                "Note retrieved successfully",
            )

    async def get_notes_by_user_id(self, user_id: str, query: Mapping[str, Any]) -> JSONResponse:
        with self.failure_message("Failed to retrieve user notes"):
            pagination = get_pagination_params(query, default_sort_order="desc")

            user = await self.user_repository.find_by_id(user_id)
            if user is None:
                return self.send_not_found(USER_NOT_FOUND)

            result = await self.note_repository.find_by_user_id(user_id, pagination)
            return self.send_success(
                self.serialize_page(NoteResponse, result),
                "User notes retrieved successfully",
            )

    async def create_note(self, body: CreateNoteRequest) -> JSONResponse:
        with self.failure_message("Failed to create note"):
            # Owner must exist before the insert
            user = await self.user_repository.find_by_id(body.user_id)
            if user is None:
                return self.send_not_found(USER_NOT_FOUND)

            note = await self.note_repository.create({
                "title": body.title,
                "content": body.content,
                "user_id": body.user_id,
            })
            logger.debug("Note %s created for user %s", note.id, user.id)

            return self.send_created(
                self.serialize(NoteResponse, note),
                "Note created successfully",
            )

    async def update_note(self, note_id: str, body: UpdateNoteRequest) -> JSONResponse:
        with self.failure_message("Failed to update note"):
            note = await self.note_repository.update(note_id, body.model_dump(exclude_none=True))
            if note is None:
                return self.send_not_found(NOTE_NOT_FOUND)

            return self.send_success(
                self.serialize(NoteResponse, note),
                "Note updated successfully",
            )

    async def delete_note(self, note_id: str) -> Response:
        with self.failure_message("Failed to delete note"):
            deleted = await self.note_repository.delete(note_id)
            if not deleted:
                return self.send_not_found(NOTE_NOT_FOUND)
            return self.send_no_content()
