"""Shared fixtures: in-memory stores, migrated to head or left empty."""

import uuid

import pytest
import pytest_asyncio
from sqlalchemy import create_engine
from sqlalchemy.ext.asyncio import async_sessionmaker

from dnd_game.infra.config import TestConnection, resolve_connection
from dnd_game.infra.db import create_engine_for, run_migrations


@pytest_asyncio.fixture
async def engine():
    """Application engine on a fresh in-memory store at head."""
    conn = resolve_connection("test")
    engine = create_engine_for(conn)
    await run_migrations(engine, conn)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    factory = async_sessionmaker(engine, expire_on_commit=False)
    async with factory() as session:
        yield session


@pytest.fixture
def connection():
    """Sync connection on an empty in-memory store, as Alembic sees it."""
    conn = TestConnection()
    engine = create_engine(conn.sync_url, **conn.sync_engine_kwargs())
    with engine.connect() as c:
        yield c
    engine.dispose()


# --- row helpers (plain dicts for Core inserts) ---


def user_row(name: str, **overrides) -> dict:
    row = {
        "id": uuid.uuid4(),
        "email": f"{name}@example.com",
        "username": name,
        "display_name": name.title(),
        "password_hash": "x",
    }
    row.update(overrides)
    return row


def character_row(user_id: uuid.UUID, name: str = "Hero", **overrides) -> dict:
    row = {
        "id": uuid.uuid4(),
        "user_id": user_id,
        "name": name,
        "class": "fighter",
        "race": "human",
        "hp_current": 10,
        "hp_maximum": 10,
        "armor_class": 15,
        "proficiency_bonus": 2,
        "speed": 30,
        "strength": 16,
        "dexterity": 12,
        "constitution": 14,
        "intelligence": 10,
        "wisdom": 10,
        "charisma": 8,
        "background": "Soldier",
        "alignment": "Neutral",
    }
    row.update(overrides)
    return row


def session_row(dm_user_id: uuid.UUID | None, name: str = "Table", **overrides) -> dict:
    row = {"id": uuid.uuid4(), "name": name, "dm_user_id": dm_user_id}
    row.update(overrides)
    return row


def player_row(game_id: uuid.UUID, user_id: uuid.UUID, character_id: uuid.UUID | None, **overrides) -> dict:
    row = {"id": uuid.uuid4(), "game_id": game_id, "user_id": user_id, "character_id": character_id}
    row.update(overrides)
    return row
