"""
Notes API — Note Controller Unit Tests
======================================

What we test:
    ✅ Create checks the owner before writing; 404 "User not found" otherwise
    ✅ Every note embeds its author summary
    ✅ Listing defaults to newest first and filters by userId
    ✅ Per-user listing requires the user to exist
    ✅ Update/delete of a missing note → 404
    ✅ Unexpected repository errors → OperationalError with a fixed message
"""

import json
from datetime import timedelta

import pytest

from notes_api.controllers.notes import NoteController
from notes_api.exceptions import OperationalError
from notes_api.schemas.note import CreateNoteRequest, UpdateNoteRequest


def body_of(response) -> dict:
    return json.loads(response.body)


class TestNoteController:

    @pytest.fixture(autouse=True)
    def _setup(self, note_repository, user_repository):
        self.notes = note_repository
        self.users = user_repository
        self.controller = NoteController(note_repository, user_repository)

    async def make_user(self, email="owner@example.com", name="Owner"):
        return await self.users.create({"email": email, "name": name})

    @pytest.mark.asyncio
    async def test_create_for_unknown_user(self):
        response = await self.controller.create_note(
            CreateNoteRequest(title="T", content="C", user_id="nobody")
        )

        assert response.status_code == 404
        assert body_of(response)["message"] == "User not found"
        assert self.notes.store.notes == {}

    @pytest.mark.asyncio
    async def test_create_embeds_author(self):
        owner = await self.make_user()

        response = await self.controller.create_note(
            CreateNoteRequest(title="Groceries", content="Milk", user_id=owner.id)
        )

        assert response.status_code == 201
        body = body_of(response)
        assert body["message"] == "Note created successfully"
        assert body["data"]["title"] == "Groceries"
        assert body["data"]["userId"] == owner.id
        assert body["data"]["user"] == {"id": owner.id, "name": "Owner", "email": "owner@example.com"}

    @pytest.mark.asyncio
    async def test_get_missing_note(self):
        response = await self.controller.get_note_by_id("missing")

        assert response.status_code == 404
        assert body_of(response)["message"] == "Note not found"

    @pytest.mark.asyncio
    async def test_list_newest_first_by_default(self):
        owner = await self.make_user()
        first = await self.notes.create({"title": "first", "content": "1", "user_id": owner.id})
        second = await self.notes.create({"title": "second", "content": "2", "user_id": owner.id})
        second.created_at = first.created_at + timedelta(seconds=1)

        body = body_of(await self.controller.get_notes({}))

        assert body["message"] == "Notes retrieved successfully"
        assert [n["title"] for n in body["data"]["data"]] == ["second", "first"]

        ascending = body_of(await self.controller.get_notes({"sortOrder": "asc"}))
        assert [n["title"] for n in ascending["data"]["data"]] == ["first", "second"]

    @pytest.mark.asyncio
    async def test_list_filters_by_user(self):
        alice = await self.make_user("alice@example.com", "Alice")
        bob = await self.make_user("bob@example.com", "Bob")
        await self.notes.create({"title": "a", "content": "a", "user_id": alice.id})
        await self.notes.create({"title": "b", "content": "b", "user_id": bob.id})

        body = body_of(await self.controller.get_notes({"userId": bob.id}))

        assert [n["title"] for n in body["data"]["data"]] == ["b"]
        assert body["data"]["pagination"]["total"] == 1

    @pytest.mark.asyncio
    async def test_user_notes_requires_existing_user(self):
        response = await self.controller.get_notes_by_user_id("nobody", {})

        assert response.status_code == 404
        assert body_of(response)["message"] == "User not found"

    @pytest.mark.asyncio
    async def test_user_notes(self):
        owner = await self.make_user()
        await self.notes.create({"title": "mine", "content": "x", "user_id": owner.id})

        response = await self.controller.get_notes_by_user_id(owner.id, {"limit": "5"})

        body = body_of(response)
        assert body["message"] == "User notes retrieved successfully"
        assert body["data"]["pagination"]["limit"] == 5
        assert [n["title"] for n in body["data"]["data"]] == ["mine"]

    @pytest.mark.asyncio
    async def test_update_note(self):
        owner = await self.make_user()
        note = await self.notes.create({"title": "old", "content": "body", "user_id": owner.id})

        response = await self.controller.update_note(note.id, UpdateNoteRequest(title="new"))

        data = body_of(response)["data"]
        assert data["title"] == "new"
        assert data["content"] == "body"
        assert body_of(response)["message"] == "Note updated successfully"

    @pytest.mark.asyncio
    async def test_update_missing_note(self):
        response = await self.controller.update_note("missing", UpdateNoteRequest(title="x"))
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_delete_twice(self):
        owner = await self.make_user()
        note = await self.notes.create({"title": "t", "content": "c", "user_id": owner.id})

        assert (await self.controller.delete_note(note.id)).status_code == 204
        assert (await self.controller.delete_note(note.id)).status_code == 404


class TestNoteControllerFailures:

    @pytest.mark.asyncio
    async def test_create_failure_wrapped(self, mock_note_repository, user_repository):
        owner = await user_repository.create({"email": "o@example.com", "name": "O"})
        mock_note_repository.create.side_effect = RuntimeError("disk full")
        controller = NoteController(mock_note_repository, user_repository)

        with pytest.raises(OperationalError) as exc_info:
            await controller.create_note(CreateNoteRequest(title="t", content="c", user_id=owner.id))

        assert exc_info.value.message == "Failed to create note"
        assert isinstance(exc_info.value.__cause__, RuntimeError)

    @pytest.mark.asyncio
    async def test_list_failure_wrapped(self, mock_note_repository, mock_user_repository):
        mock_note_repository.find_all.side_effect = RuntimeError("timeout")
        controller = NoteController(mock_note_repository, mock_user_repository)

        with pytest.raises(OperationalError) as exc_info:
            await controller.get_notes({})

        assert exc_info.value.message == "Failed to retrieve notes"
