"""
Notes API — In-Memory Repositories
==================================

What:  Dict-backed implementations of the repository contracts.
Why:   Controller tests run against these without a database.
How:   Both repositories share one explicitly owned InMemoryStore, created
       per test (or per process for local experiments). Nothing here is
       module-level state, and nothing is safe to share between concurrent
       writers.

Entities are plain (transient) ORM instances, so the controllers and
response schemas treat them exactly like rows loaded by SQLAlchemy.
"""

import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, TypeVar

from notes_api.exceptions import ConflictError
from notes_api.models.note import Note
from notes_api.models.user import User, utcnow
from notes_api.pagination import PaginationParams, build_pagination_meta
from notes_api.repositories.base import (
    NOTE_SORT_FIELDS,
    USER_SORT_FIELDS,
    NoteRepository,
    PaginatedResult,
    UserRepository,
    resolve_sort_field,
)
from notes_api.repositories.users import DUPLICATE_EMAIL_MESSAGE

E = TypeVar("E", User, Note)


@dataclass
class InMemoryStore:
    users: Dict[str, User] = field(default_factory=dict)
    notes: Dict[str, Note] = field(default_factory=dict)


def _paginate(
    items: Iterable[E], pagination: PaginationParams, sort_field: str
) -> PaginatedResult[E]:
    ordered: List[E] = sorted(
        items,
        key=lambda e: (getattr(e, sort_field), e.id),
        reverse=pagination.sort_order == "desc",
    )
    window = ordered[pagination.offset:pagination.offset + pagination.limit]
    return PaginatedResult(
        data=window,
        pagination=build_pagination_meta(pagination.page, pagination.limit, len(ordered)),
    )


class InMemoryUserRepository(UserRepository):
    def __init__(self, store: InMemoryStore):
        self.store = store

    async def find_all(
        self, pagination: PaginationParams, search: Optional[str] = None
    ) -> PaginatedResult[User]:
        users: Iterable[User] = self.store.users.values()
        if search:
            needle = search.lower()
            users = [u for u in users if needle in u.name.lower() or needle in u.email.lower()]
        return _paginate(users, pagination, resolve_sort_field(USER_SORT_FIELDS, pagination.sort_by))

    async def find_by_id(self, user_id: str) -> Optional[User]:
        return self.store.users.get(user_id)

    async def find_by_email(self, email: str) -> Optional[User]:
        return next((u for u in self.store.users.values() if u.email == email), None)

    async def create(self, data: Dict[str, Any]) -> User:
        if await self.exists(data["email"]):
            raise ConflictError(DUPLICATE_EMAIL_MESSAGE, context={"email": data["email"]})
        now = utcnow()
        user = User(
            id=str(uuid.uuid4()),
            role="user",
            created_at=now,
            updated_at=now,
        )
        for key, value in data.items():
            setattr(user, key, value)
        self.store.users[user.id] = user
        return user

    async def update(self, user_id: str, data: Dict[str, Any]) -> Optional[User]:
        user = self.store.users.get(user_id)
        if user is None:
            return None
        new_email = data.get("email")
        if new_email and new_email != user.email and await self.exists(new_email):
            raise ConflictError(DUPLICATE_EMAIL_MESSAGE, context={"email": new_email})
        for key, value in data.items():
            setattr(user, key, value)
        user.updated_at = utcnow()
        return user

    async def delete(self, user_id: str) -> bool:
        if self.store.users.pop(user_id, None) is None:
            return False
        for note_id in [n.id for n in self.store.notes.values() if n.user_id == user_id]:
            del self.store.notes[note_id]
        return True

    async def exists(self, email: str) -> bool:
        return await self.find_by_email(email) is not None


class InMemoryNoteRepository(NoteRepository):
    def __init__(self, store: InMemoryStore):
        self.store = store

    async def find_all(
        self, pagination: PaginationParams, user_id: Optional[str] = None
    ) -> PaginatedResult[Note]:
        notes: Iterable[Note] = self.store.notes.values()
        if user_id:
            notes = [n for n in notes if n.user_id == user_id]
        return _paginate(notes, pagination, resolve_sort_field(NOTE_SORT_FIELDS, pagination.sort_by))

    async def find_by_id(self, note_id: str) -> Optional[Note]:
        return self.store.notes.get(note_id)

    async def create(self, data: Dict[str, Any]) -> Note:
        now = utcnow()
        note = Note(id=str(uuid.uuid4()), created_at=now, updated_at=now, **data)
        owner = self.store.users.get(note.user_id)
        if owner is not None:
            note.user = owner
        self.store.notes[note.id] = note
        return note

    async def update(self, note_id: str, data: Dict[str, Any]) -> Optional[Note]:
        note = self.store.notes.get(note_id)
        if note is None:
            return None
        for key, value in data.items():
            setattr(note, key, value)
        note.updated_at = utcnow()
        return note

    async def delete(self, note_id: str) -> bool:
        return self.store.notes.pop(note_id, None) is not None
