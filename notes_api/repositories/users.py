"""
Notes API — SQLAlchemy User Repository
======================================

Query plans:
    find_all:  SELECT count(*) FROM users WHERE <search>
               SELECT ... FROM users WHERE <search> ORDER BY <field>, id
               LIMIT :limit OFFSET :offset
    find_by_email / exists: served by the unique index on users.email
"""

import logging
from typing import Any, Dict, Optional

from sqlalchemy import asc, delete, desc, func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from notes_api.exceptions import ConflictError
from notes_api.models.note import Note
from notes_api.models.user import User, utcnow
from notes_api.pagination import PaginationParams, build_pagination_meta
from notes_api.repositories.base import (
    USER_SORT_FIELDS,
    PaginatedResult,
    UserRepository,
    resolve_sort_field,
)

logger = logging.getLogger(__name__)

DUPLICATE_EMAIL_MESSAGE = "User with this email already exists"


class SQLAlchemyUserRepository(UserRepository):
    """User repository bound to one request's AsyncSession."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_all(
        self, pagination: PaginationParams, search: Optional[str] = None
    ) -> PaginatedResult[User]:
        count_query = select(func.count()).select_from(User)
        query = select(User)

        if search:
            condition = or_(
                User.name.icontains(search, autoescape=True),
                User.email.icontains(search, autoescape=True),
            )
            count_query = count_query.where(condition)
            query = query.where(condition)

        total = (await self.session.execute(count_query)).scalar_one()

        column = getattr(User, resolve_sort_field(USER_SORT_FIELDS, pagination.sort_by))
        direction = desc if pagination.sort_order == "desc" else asc
        query = (
            query.order_by(direction(column), direction(User.id))
            .offset(pagination.offset)
            .limit(pagination.limit)
        )
        users = list((await self.session.execute(query)).scalars().all())

        return PaginatedResult(
            data=users,
            pagination=build_pagination_meta(pagination.page, pagination.limit, total),
        )

    async def find_by_id(self, user_id: str) -> Optional[User]:
        return await self.session.get(User, user_id)

    async def find_by_email(self, email: str) -> Optional[User]:
        result = await self.session.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def create(self, data: Dict[str, Any]) -> User:
        user = User(**data)
        self.session.add(user)
        await self._flush_or_conflict(email=user.email)
        logger.info("User created: %s", user.id)
        return user

    async def update(self, user_id: str, data: Dict[str, Any]) -> Optional[User]:
        user = await self.session.get(User, user_id)
        if user is None:
            return None

        for field, value in data.items():
            setattr(user, field, value)
        user.updated_at = utcnow()

        await self._flush_or_conflict(email=user.email)
        return user

    async def delete(self, user_id: str) -> bool:
        # Notes go first: the FK cascade is not enforced on every backend
        await self.session.execute(delete(Note).where(Note.user_id == user_id))
        result = await self.session.execute(delete(User).where(User.id == user_id))
        deleted = result.rowcount > 0
        if deleted:
            logger.info("User deleted: %s", user_id)
        return deleted

    async def exists(self, email: str) -> bool:
        result = await self.session.execute(select(User.id).where(User.email == email))
        return result.scalar_one_or_none() is not None

    async def _flush_or_conflict(self, email: str) -> None:
        """Flush pending changes, translating a unique violation into ConflictError."""
        try:
            await self.session.flush()
        except IntegrityError as e:
            await self.session.rollback()
            logger.warning("Unique constraint violated for email %s", email)
            raise ConflictError(DUPLICATE_EMAIL_MESSAGE, context={"email": email}) from e
