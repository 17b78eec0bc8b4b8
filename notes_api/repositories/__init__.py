# Repositories package init
"""
Notes API — Repositories Layer
==============================

What:  Persistence access per entity, hidden behind abstract contracts.
Why:   Controllers depend on UserRepository / NoteRepository only, so the
       storage engine can be swapped without touching request handling.

Repository Inventory:
    - base.py:       UserRepository, NoteRepository (abstract), PaginatedResult
    - users.py:      SQLAlchemyUserRepository
    - notes.py:      SQLAlchemyNoteRepository
    - memory.py:     InMemoryStore + in-memory implementations (tests, local runs)

Failure semantics shared by every implementation:
    - update/delete of a missing id → None / False, never an exception
    - a duplicate unique key on write → ConflictError
"""

from notes_api.repositories.base import NoteRepository, PaginatedResult, UserRepository
from notes_api.repositories.notes import SQLAlchemyNoteRepository
from notes_api.repositories.users import SQLAlchemyUserRepository

__all__ = [
    "NoteRepository",
    "PaginatedResult",
    "SQLAlchemyNoteRepository",
    "SQLAlchemyUserRepository",
    "UserRepository",
]
