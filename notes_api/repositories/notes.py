"""
Notes API — SQLAlchemy Note Repository
======================================

Every loaded note carries its author (Note.user is joined eagerly), so the
controllers can render the embedded `user` summary without further queries.
"""

import logging
from typing import Any, Dict, Optional

from sqlalchemy import asc, delete, desc, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from notes_api.models.note import Note
from notes_api.models.user import User, utcnow
from notes_api.pagination import PaginationParams, build_pagination_meta
from notes_api.repositories.base import (
    NOTE_SORT_FIELDS,
    NoteRepository,
    PaginatedResult,
    resolve_sort_field,
)

logger = logging.getLogger(__name__)


class SQLAlchemyNoteRepository(NoteRepository):
    """Note repository bound to one request's AsyncSession."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_all(
        self, pagination: PaginationParams, user_id: Optional[str] = None
    ) -> PaginatedResult[Note]:
        count_query = select(func.count()).select_from(Note)
        query = select(Note)

        if user_id:
            count_query = count_query.where(Note.user_id == user_id)
            query = query.where(Note.user_id == user_id)

        total = (await self.session.execute(count_query)).scalar_one()

        column = getattr(Note, resolve_sort_field(NOTE_SORT_FIELDS, pagination.sort_by))
        direction = desc if pagination.sort_order == "desc" else asc
        query = (
            query.order_by(direction(column), direction(Note.id))
            .offset(pagination.offset)
            .limit(pagination.limit)
        )
        notes = list((await self.session.execute(query)).scalars().all())

        return PaginatedResult(
            data=notes,
            pagination=build_pagination_meta(pagination.page, pagination.limit, total),
        )

    async def find_by_id(self, note_id: str) -> Optional[Note]:
        return await self.session.get(Note, note_id)

    async def create(self, data: Dict[str, Any]) -> Note:
        note = Note(**data)
        # The owner was loaded by the controller's existence check, so this
        # is an identity-map hit rather than a query
        owner = await self.session.get(User, note.user_id)
        if owner is not None:
            note.user = owner
        self.session.add(note)
        await self.session.flush()
        logger.info("Note created: %s (user=%s)", note.id, note.user_id)
        return note

    async def update(self, note_id: str, data: Dict[str, Any]) -> Optional[Note]:
        note = await self.session.get(Note, note_id)
        if note is None:
            return None

        for field, value in data.items():
            setattr(note, field, value)
        note.updated_at = utcnow()

        await self.session.flush()
        return note

    async def delete(self, note_id: str) -> bool:
        result = await self.session.execute(delete(Note).where(Note.id == note_id))
        return result.rowcount > 0
