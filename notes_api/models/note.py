"""
Notes API — Note SQLAlchemy Model
=================================

What:  ORM model representing the `notes` table.
Who:   Used by SQLAlchemyNoteRepository and by Alembic for schema management.

Table Design Rationale:
    - user_id: FK to users.id with ON DELETE CASCADE; deleting a user removes
      their notes
    - user: many-to-one loaded with a JOIN so every note carries its author
      summary without lazy loading (lazy loads are not allowed on AsyncSession)
    - Index on (user_id, created_at): serves the per-user listing sorted by
      creation time, the most common note query
"""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from notes_api.database import Base
from notes_api.models.user import User, utcnow


class Note(Base):
    """A text note owned by a user."""

    __tablename__ = "notes"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
    )

    title: Mapped[str] = mapped_column(String(200), nullable=False)

    content: Mapped[str] = mapped_column(Text, nullable=False)

    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )

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

    user: Mapped[User] = relationship(User, lazy="joined")

    __table_args__ = (
        Index("idx_notes_user_id_created_at", "user_id", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, title='{self.title}', user_id={self.user_id})>"
