"""
Notes API — Abstract Repository Contracts
=========================================

What:  Interfaces every repository implementation must satisfy.
Why:   Controllers are written against these contracts; the SQLAlchemy and
       in-memory implementations are interchangeable.
How:   ABC with abstract async methods, the same shape the service layer
       uses for any swappable backend.

Sorting:
    `sort_by` uses API field names (camelCase). Only whitelisted fields are
    sortable; anything else falls back to createdAt. Ties are broken by id
    so pages never overlap.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Generic, List, Mapping, Optional, TypeVar

from notes_api.models.note import Note
from notes_api.models.user import User
from notes_api.pagination import PaginationParams
from notes_api.schemas.common import PaginationMeta

T = TypeVar("T")

DEFAULT_SORT_FIELD = "created_at"

USER_SORT_FIELDS: Mapping[str, str] = {
    "createdAt": "created_at",
    "updatedAt": "updated_at",
    "name": "name",
    "email": "email",
}

NOTE_SORT_FIELDS: Mapping[str, str] = {
    "createdAt": "created_at",
    "updatedAt": "updated_at",
    "title": "title",
}


def resolve_sort_field(allowed: Mapping[str, str], sort_by: Optional[str]) -> str:
    """Map an API sort field to a model attribute, defaulting to created_at."""
    if sort_by is None:
        return DEFAULT_SORT_FIELD
    if sort_by in allowed:
        return allowed[sort_by]
    if sort_by in allowed.values():
        return sort_by
    return DEFAULT_SORT_FIELD


@dataclass
class PaginatedResult(Generic[T]):
    """A page of entities plus metadata; `pagination.total` counts all matches."""

    data: List[T]
    pagination: PaginationMeta


class UserRepository(ABC):
    """Persistence contract for users."""

    @abstractmethod
    async def find_all(
        self, pagination: PaginationParams, search: Optional[str] = None
    ) -> PaginatedResult[User]:
        """Page of users; `search` matches name OR email, case-insensitively."""

    @abstractmethod
    async def find_by_id(self, user_id: str) -> Optional[User]:
        ...

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[User]:
        ...

    @abstractmethod
    async def create(self, data: Dict[str, Any]) -> User:
        """Raises ConflictError when the email is already taken."""

    @abstractmethod
    async def update(self, user_id: str, data: Dict[str, Any]) -> Optional[User]:
        """None when the user does not exist; ConflictError on duplicate email."""

    @abstractmethod
    async def delete(self, user_id: str) -> bool:
        """False when the user does not exist. Removes the user's notes too."""

    @abstractmethod
    async def exists(self, email: str) -> bool:
        ...


class NoteRepository(ABC):
    """Persistence contract for notes."""

    @abstractmethod
    async def find_all(
        self, pagination: PaginationParams, user_id: Optional[str] = None
    ) -> PaginatedResult[Note]:
        """Page of notes, optionally only those owned by `user_id`."""

    @abstractmethod
    async def find_by_id(self, note_id: str) -> Optional[Note]:
        ...

    async def find_by_user_id(
        self, user_id: str, pagination: PaginationParams
    ) -> PaginatedResult[Note]:
        return await self.find_all(pagination, user_id)

    @abstractmethod
    async def create(self, data: Dict[str, Any]) -> Note:
        ...

    @abstractmethod
    async def update(self, note_id: str, data: Dict[str, Any]) -> Optional[Note]:
        ...

    @abstractmethod
    async def delete(self, note_id: str) -> bool:
        ...
