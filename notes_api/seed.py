"""
Demo data: `python -m notes_api.seed`.

Creates two users and three notes. Users are looked up by email first and
notes are only added to an empty table, so running it twice changes nothing.
"""

import asyncio
import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from notes_api.database import async_session_factory, dispose_engine
from notes_api.main import setup_logging
from notes_api.models.note import Note
from notes_api.models.user import User

logger = logging.getLogger(__name__)

DEMO_USERS = [
    {"email": "john@example.com", "name": "John Doe", "role": "user"},
    {"email": "admin@example.com", "name": "Admin User", "role": "admin"},
]

DEMO_NOTES = [
    (
        "john@example.com",
        "Welcome Note",
        "This is your first note! You can create, edit, and delete notes.",
    ),
    (
        "john@example.com",
        "API Documentation",
        "Check out the API documentation at /api-docs for more information about available endpoints.",
    ),
    (
        "admin@example.com",
        "Admin Note",
        "This is an admin note with important system information.",
    ),
]


async def seed(session: AsyncSession) -> None:
    users = {}
    for data in DEMO_USERS:
        user = (
            await session.execute(select(User).where(User.email == data["email"]))
        ).scalar_one_or_none()
        if user is None:
            user = User(**data)
            session.add(user)
            await session.flush()
            logger.info("Created user %s", user.email)
        users[user.email] = user

    notes_count = (await session.execute(select(func.count()).select_from(Note))).scalar_one()
    if notes_count == 0:
        session.add_all(
            [
                Note(title=title, content=content, user_id=users[email].id)
                for email, title, content in DEMO_NOTES
            ]
        )
        logger.info("Created %d notes", len(DEMO_NOTES))
    else:
        logger.info("Notes table already has %d rows; skipping notes", notes_count)

    await session.commit()


async def main() -> None:
    try:
        async with async_session_factory() as session:
            await seed(session)
    finally:
        await dispose_engine()


def run() -> None:
    """Console entry: the app's logging setup, then one seeding pass."""
    setup_logging()
    asyncio.run(main())


if __name__ == "__main__":
    run()
