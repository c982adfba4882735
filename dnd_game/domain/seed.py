"""Demo data for development stores.

Seeding wipes the game tables and inserts four users (admin, DM and two
players), two characters, one map and one waiting game session. Every demo
account shares ``DEMO_PASSWORD``.
"""

from __future__ import annotations

import logging
import uuid

from passlib.context import CryptContext
from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from dnd_game.infra.config import settings
from dnd_game.models.db_models import (
    AuthToken,
    Character,
    ChatMessage,
    DiceRoll,
    GameAction,
    GameEvent,
    GamePlayer,
    GameSession,
    Map,
    User,
)
from dnd_game.models.payloads import (
    AISettings,
    Bounds,
    GameState,
    InventoryItem,
    MapNpc,
    MapRoom,
    Position,
    Spell,
    UserPreferences,
    UserStats,
)

logger = logging.getLogger(__name__)

DEMO_PASSWORD = "password123"

# Children before parents
_CLEARED = (
    ChatMessage, DiceRoll, GameEvent, GameAction, GamePlayer,
    GameSession, Map, Character, AuthToken, User,
)


def hash_password(password: str, rounds: int | None = None) -> str:
    ctx = CryptContext(
        schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds or settings.bcrypt_rounds
    )
    return ctx.hash(password)


def verify_password(password: str, hashed: str) -> bool:
    return CryptContext(schemes=["bcrypt"], deprecated="auto").verify(password, hashed)


async def has_users(db: AsyncSession) -> bool:
    count = await db.scalar(select(func.count()).select_from(User))
    return bool(count)


def _item_id() -> str:
    return str(uuid.uuid4())


def _users(password_hash: str) -> list[User]:
    return [
        User(
            email="admin@dndaigame.com",
            username="admin",
            display_name="Admin",
            password_hash=password_hash,
            role="admin",
            is_verified=True,
            preferences=UserPreferences().to_json(),
            stats=UserStats().to_json(),
        ),
        User(
            email="dm@dndaigame.com",
            username="dungeon_master",
            display_name="Dungeon Master",
            password_hash=password_hash,
            role="dm",
            is_verified=True,
            preferences=UserPreferences().to_json(),
            stats=UserStats(
                games_played=5,
                total_play_time=1200,
                achievements_unlocked=["first_session", "experienced_dm"],
            ).to_json(),
        ),
        User(
            email="player1@dndaigame.com",
            username="aragorn_ranger",
            display_name="Aragorn",
            password_hash=password_hash,
            role="player",
            is_verified=True,
            preferences=UserPreferences(theme="light", auto_roll_dice=True).to_json(),
            stats=UserStats(
                games_played=3,
                total_play_time=600,
                characters_created=2,
                achievements_unlocked=["first_character", "first_level_up"],
            ).to_json(),
        ),
        User(
            email="player2@dndaigame.com",
            username="gandalf_wizard",
            display_name="Gandalf",
            password_hash=password_hash,
            role="player",
            is_verified=True,
            preferences=UserPreferences(
                sound_enabled=False, show_combat_animations=False
            ).to_json(),
            stats=UserStats(
                games_played=8,
                total_play_time=1800,
                characters_created=3,
                achievements_unlocked=[
                    "first_character", "first_level_up", "spell_master", "veteran_player",
                ],
            ).to_json(),
        ),
    ]


def _characters(ranger_owner: User, wizard_owner: User) -> list[Character]:
    strider = Character(
        user_id=ranger_owner.id,
        name="Strider",
        class_="ranger",
        race="human",
        level=5,
        experience=6500,
        hp_current=45,
        hp_maximum=45,
        armor_class=16,
        proficiency_bonus=3,
        speed=30,
        strength=14,
        dexterity=18,
        constitution=16,
        intelligence=12,
        wisdom=15,
        charisma=10,
        skills={"athletics": 5, "perception": 8, "survival": 8, "stealth": 7},
        inventory=[
            InventoryItem(id=_item_id(), name="Longbow", type="weapon").to_json(),
            InventoryItem(id=_item_id(), name="Leather Armor", type="armor").to_json(),
            InventoryItem(id=_item_id(), name="Health Potion", type="consumable", quantity=3).to_json(),
        ],
        spells=[],
        background="Outlander",
        alignment="Lawful Good",
        personality_traits="I am always polite and respectful.",
        ideals="People deserve to be treated with dignity and respect.",
        bonds="I will face any challenge to win the approval of my family.",
        flaws="I have a weakness for the vices of the city.",
    )
    gandalf = Character(
        user_id=wizard_owner.id,
        name="Gandalf the Grey",
        class_="wizard",
        race="human",
        level=10,
        experience=64000,
        hp_current=60,
        hp_maximum=60,
        armor_class=12,
        proficiency_bonus=4,
        speed=30,
        strength=10,
        dexterity=12,
        constitution=14,
        intelligence=20,
        wisdom=18,
        charisma=16,
        skills={"arcana": 15, "history": 10, "investigation": 10, "insight": 9},
        inventory=[
            InventoryItem(id=_item_id(), name="Staff of Power", type="weapon").to_json(),
            InventoryItem(id=_item_id(), name="Robes of the Archmagi", type="armor").to_json(),
            InventoryItem(id=_item_id(), name="Spell Component Pouch", type="tool").to_json(),
        ],
        spells=[
            Spell(id=_item_id(), name="Fireball", level=3, school="evocation").to_json(),
            Spell(id=_item_id(), name="Magic Missile", level=1, school="evocation").to_json(),
            Spell(id=_item_id(), name="Shield", level=1, school="abjuration").to_json(),
        ],
        background="Sage",
        alignment="Chaotic Good",
        personality_traits="I am horribly, horribly awkward in social situations.",
        ideals="Knowledge is power, and the key to all other forms of power.",
        bonds="The workshop where I learned my trade is the most important place in the world to me.",
        flaws="I speak without really thinking through my words, invariably insulting others.",
    )
    return [strider, gandalf]


def _goblin_cave(creator: User) -> Map:
    return Map(
        name="Goblin Cave",
        description="A dark cave system infested with goblins and their wolf companions.",
        type="cave",
        width=20,
        height=20,
        theme="goblin lair",
        difficulty="easy",
        recommended_level=3,
        tiles=[],
        rooms=[
            MapRoom(
                id=_item_id(), name="Cave Entrance", type="entrance",
                bounds=Bounds(x=0, y=0, width=5, height=5),
            ).to_json(),
            MapRoom(
                id=_item_id(), name="Goblin Warren", type="chamber",
                bounds=Bounds(x=10, y=10, width=8, height=8),
            ).to_json(),
        ],
        npcs=[
            MapNpc(
                id=_item_id(), name="Goblin Chief", race="goblin", level=3, disposition="hostile"
            ).to_json(),
        ],
        starting_position=Position(x=1, y=1).to_json(),
        is_public=True,
        created_by=creator.id,
    )


async def seed(db: AsyncSession, rounds: int | None = None) -> dict[str, int]:
    """Replace the game tables' contents with the demo data set."""
    for model in _CLEARED:
        await db.execute(delete(model))

    users = _users(hash_password(DEMO_PASSWORD, rounds))
    db.add_all(users)
    await db.flush()
    _admin, dm, ranger, wizard = users

    characters = _characters(ranger, wizard)
    cave = _goblin_cave(dm)
    db.add_all([*characters, cave])
    await db.flush()

    session = GameSession(
        name="The Lost Mines of Phandelver",
        description="A classic D&D adventure for new players.",
        dm_user_id=dm.id,
        max_players=4,
        status="waiting",
        current_map_id=cave.id,
        game_state=GameState().to_json(),
        is_public=True,
        ai_settings=AISettings().to_json(),
    )
    db.add(session)
    await db.commit()

    summary = {"users": len(users), "characters": len(characters), "maps": 1, "game_sessions": 1}
    logger.info("Seeded demo data: %s", ", ".join(f"{v} {k}" for k, v in summary.items()))
    return summary
