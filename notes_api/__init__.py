"""
Notes API — Application Package Initializer
===========================================

What: Marks the `notes_api` directory as a Python package.
Why:  Enables module imports like `from notes_api.config import settings`.
Who:  Used implicitly by Python's import system and explicitly by Alembic, pytest, and uvicorn.

Architecture Note:
    The service follows a layered architecture:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns, request validation
    ├─────────────────────────────────────┤
    │      Controllers (Orchestration)    │  ← Preconditions, envelopes
    ├─────────────────────────────────────┤
    │     Repositories (Persistence)      │  ← CRUD + pagination per entity
    ├─────────────────────────────────────┤
    │     Models & Schemas (Data)         │  ← SQLAlchemy ORM + Pydantic
    └─────────────────────────────────────┘

    Controllers only ever talk to the abstract repository contracts, so the
    SQLAlchemy implementations can be swapped for the in-memory ones in tests.
"""

__version__ = "1.0.0"
