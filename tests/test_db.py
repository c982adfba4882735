"""Application engine lifecycle."""

import pytest
import pytest_asyncio
from sqlalchemy import func, select

from dnd_game.errors import DatabaseNotInitializedError
from dnd_game.infra import db
from dnd_game.infra.config import settings
from dnd_game.models.db_models import User


@pytest_asyncio.fixture
async def closed():
    yield
    await db.close_database()


def test_engine_unavailable_before_init():
    with pytest.raises(DatabaseNotInitializedError):
        db.get_engine()
    with pytest.raises(DatabaseNotInitializedError):
        db.get_session_factory()


@pytest.mark.asyncio
async def test_init_is_idempotent_and_closable(closed):
    engine = await db.init_database("test")
    assert await db.init_database("test") is engine
    assert db.get_engine() is engine

    async for session in db.get_db():
        assert await session.scalar(select(func.count()).select_from(User)) == 0

    await db.close_database()
    with pytest.raises(DatabaseNotInitializedError):
        db.get_engine()


@pytest.mark.asyncio
async def test_development_init_seeds_empty_store(closed, tmp_path, monkeypatch):
    path = tmp_path / "nested" / "dev.db"
    monkeypatch.setattr(settings, "db_filename", str(path))
    monkeypatch.setattr(settings, "bcrypt_rounds", 4)

    await db.init_database("development")

    assert path.exists()
    async with db.get_session_factory()() as session:
        assert await session.scalar(select(func.count()).select_from(User)) == 4
