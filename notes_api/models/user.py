"""
Notes API — User SQLAlchemy Model
=================================

What:  ORM model representing the `users` table.
Who:   Used by SQLAlchemyUserRepository and by Alembic for schema management.

Table Design Rationale:
    - String UUID primary key generated in Python: portable across PostgreSQL
      and the SQLite database used by the test suite
    - email: unique index; the index is the final guard for email uniqueness
      (the controller's pre-check alone is racy)
    - role: short enum-like string ('admin' | 'user')
    - No password column: passwords are validated on input and discarded
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from notes_api.database import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(Base):
    """A registered user; owns zero or more notes."""

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
    )

    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        index=True,
    )

    name: Mapped[str] = mapped_column(String(100), nullable=False)

    role: Mapped[str] = mapped_column(String(20), nullable=False, default="user")

    # Python-side defaults keep the values available right after flush,
    # which avoids an implicit refresh (not allowed on AsyncSession)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}', role='{self.role}')>"
