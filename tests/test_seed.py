"""
Notes API — Seed Script Tests
=============================

What we test:
    ✅ Demo users and notes are created on an empty database
    ✅ A second run changes nothing
    ✅ The console entry configures logging through the app's setup_logging
"""

import pytest
from sqlalchemy import func, select

from notes_api import seed as seed_module
from notes_api.models.note import Note
from notes_api.models.user import User


async def count(session, model) -> int:
    return (await session.execute(select(func.count()).select_from(model))).scalar_one()


class TestSeed:

    @pytest.mark.asyncio
    async def test_seed_is_idempotent(self, db_session):
        await seed_module.seed(db_session)
        await seed_module.seed(db_session)

        assert await count(db_session, User) == len(seed_module.DEMO_USERS)
        assert await count(db_session, Note) == len(seed_module.DEMO_NOTES)

        admin = (
            await db_session.execute(select(User).where(User.email == "admin@example.com"))
        ).scalar_one()
        assert admin.role == "admin"

    def test_run_uses_app_logging_setup(self, monkeypatch):
        calls = []

        async def fake_main():
            calls.append("main")

        monkeypatch.setattr(seed_module, "setup_logging", lambda: calls.append("logging"))
        monkeypatch.setattr(seed_module, "main", fake_main)

        seed_module.run()

        assert calls == ["logging", "main"]
