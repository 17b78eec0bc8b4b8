"""
Notes API — Request-Scoped Dependencies
=======================================

What:  FastAPI providers that build repositories and controllers per request.
Why:   Controllers never open sessions themselves. Tests swap the session
       (or the engine) through `app.dependency_overrides`.
How:   FastAPI caches a dependency within one request, so the user and note
       repositories of a request share the same AsyncSession and the same
       transaction.
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from notes_api import database
from notes_api.controllers import HealthController, NoteController, UserController
from notes_api.database import get_db_session
from notes_api.repositories import (
    NoteRepository,
    SQLAlchemyNoteRepository,
    SQLAlchemyUserRepository,
    UserRepository,
)


def get_engine() -> AsyncEngine:
    return database.engine


def get_user_repository(session: AsyncSession = Depends(get_db_session)) -> UserRepository:
    return SQLAlchemyUserRepository(session)


def get_note_repository(session: AsyncSession = Depends(get_db_session)) -> NoteRepository:
    return SQLAlchemyNoteRepository(session)


def get_user_controller(
    users: UserRepository = Depends(get_user_repository),
) -> UserController:
    return UserController(users)


def get_note_controller(
    notes: NoteRepository = Depends(get_note_repository),
    users: UserRepository = Depends(get_user_repository),
) -> NoteController:
    return NoteController(notes, users)


def get_health_controller(bind: AsyncEngine = Depends(get_engine)) -> HealthController:
    return HealthController(bind)
