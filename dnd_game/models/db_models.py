"""SQLAlchemy ORM models mirroring the schema at the catalog head."""

from __future__ import annotations

import uuid
from datetime import date as date_type, datetime, timezone
from decimal import Decimal

from sqlalchemy import (
    JSON,
    Boolean,
    CheckConstraint,
    Date,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    Numeric,
    String,
    Text,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

from dnd_game.models import payloads

# Naming convention for constraints — required for Alembic batch mode (SQLite)
convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

USER_ROLES = ("player", "dm", "admin")
PRIVACY_LEVELS = ("public", "friends", "private")
CHARACTER_CLASSES = (
    "barbarian", "bard", "cleric", "druid", "fighter", "monk",
    "paladin", "ranger", "rogue", "sorcerer", "warlock", "wizard",
)
CHARACTER_RACES = (
    "human", "elf", "dwarf", "halfling", "dragonborn", "gnome",
    "half-elf", "half-orc", "tiefling",
)
GAME_STATUSES = ("waiting", "active", "paused", "completed")
PLAYER_ROLES = ("player", "co_dm", "observer")
MAP_TYPES = ("dungeon", "overworld", "building", "cave", "forest", "city")
MAP_DIFFICULTIES = ("easy", "medium", "hard", "deadly")
ACTION_TYPES = (
    "attack", "cast_spell", "move", "interact", "dialogue", "inventory",
    "skill_check", "saving_throw",
)
EVENT_TYPES = (
    "combat_start", "combat_end", "level_up", "item_found", "npc_interaction",
    "story_event", "player_death", "quest_complete",
)
MESSAGE_TYPES = ("player", "dm", "system", "ai", "whisper", "ooc")
TOKEN_TYPES = ("access", "refresh", "reset_password", "verify_email")
FRIENDSHIP_STATUSES = ("pending", "accepted", "blocked")
INVITATION_STATUSES = ("pending", "accepted", "declined", "expired")
BILLING_PERIODS = ("monthly", "yearly")
SUBSCRIPTION_STATUSES = ("active", "canceled", "past_due", "unpaid", "incomplete")
PAYMENT_STATUSES = ("succeeded", "pending", "failed", "canceled", "refunded")
POST_TYPES = ("text", "achievement", "game_highlight", "character_showcase")
NOTIFICATION_TYPES = (
    "friend_request", "friend_accepted", "message_received", "game_invitation",
    "game_started", "post_liked", "post_commented", "achievement_unlocked",
)


def _enum(values: tuple[str, ...], name: str) -> Enum:
    return Enum(*values, name=name, native_enum=False, create_constraint=True)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    metadata = MetaData(naming_convention=convention)


class _Timestamps:
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow
    )


class User(_Timestamps, Base):
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    username: Mapped[str] = mapped_column(String(50), nullable=False, unique=True)
    display_name: Mapped[str] = mapped_column(String(100), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(_enum(USER_ROLES, "user_role"), default="player")
    is_verified: Mapped[bool] = mapped_column(Boolean, default=False)
    is_online: Mapped[bool] = mapped_column(Boolean, default=False)
    last_login_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    preferences: Mapped[dict] = mapped_column(JSON, default=payloads.default_preferences)
    stats: Mapped[dict] = mapped_column(JSON, default=payloads.default_stats)

    # Profile (revision 0015)
    bio: Mapped[str | None] = mapped_column(Text, nullable=True)
    avatar_url: Mapped[str | None] = mapped_column(String(255), nullable=True)
    banner_url: Mapped[str | None] = mapped_column(String(255), nullable=True)
    location: Mapped[str | None] = mapped_column(String(100), nullable=True)
    interests: Mapped[list] = mapped_column(JSON, default=list)
    social_links: Mapped[dict] = mapped_column(JSON, default=dict)
    privacy_level: Mapped[str] = mapped_column(
        _enum(PRIVACY_LEVELS, "privacy_level"), default="public"
    )
    profile_updated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    characters: Mapped[list[Character]] = relationship(
        back_populates="user", cascade="all, delete-orphan", passive_deletes=True
    )
    game_links: Mapped[list[GamePlayer]] = relationship(
        back_populates="user", cascade="all, delete-orphan", passive_deletes=True
    )
    auth_tokens: Mapped[list[AuthToken]] = relationship(
        back_populates="user", cascade="all, delete-orphan", passive_deletes=True
    )
    hosted_games: Mapped[list[GameSession]] = relationship(
        back_populates="dm", passive_deletes=True
    )

    def __str__(self) -> str:
        return f"{self.username} ({str(self.id)[:8]})"

    __table_args__ = (
        Index("ix_users_email", "email"),
        Index("ix_users_username", "username"),
        Index("ix_users_is_online", "is_online"),
    )


class Character(_Timestamps, Base):
    __tablename__ = "characters"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    class_: Mapped[str] = mapped_column(
        "class", _enum(CHARACTER_CLASSES, "character_class"), nullable=False
    )
    race: Mapped[str] = mapped_column(_enum(CHARACTER_RACES, "character_race"), nullable=False)
    level: Mapped[int] = mapped_column(Integer, default=1)
    experience: Mapped[int] = mapped_column(Integer, default=0)

    hp_current: Mapped[int] = mapped_column(Integer, nullable=False)
    hp_maximum: Mapped[int] = mapped_column(Integer, nullable=False)
    hp_temporary: Mapped[int] = mapped_column(Integer, default=0)

    armor_class: Mapped[int] = mapped_column(Integer, nullable=False)
    proficiency_bonus: Mapped[int] = mapped_column(Integer, nullable=False)
    speed: Mapped[int] = mapped_column(Integer, nullable=False)

    strength: Mapped[int] = mapped_column(Integer, nullable=False)
    dexterity: Mapped[int] = mapped_column(Integer, nullable=False)
    constitution: Mapped[int] = mapped_column(Integer, nullable=False)
    intelligence: Mapped[int] = mapped_column(Integer, nullable=False)
    wisdom: Mapped[int] = mapped_column(Integer, nullable=False)
    charisma: Mapped[int] = mapped_column(Integer, nullable=False)

    skills: Mapped[dict] = mapped_column(JSON, default=dict)  # {"perception": 8, ...}
    inventory: Mapped[list] = mapped_column(JSON, default=list)  # [InventoryItem]
    spells: Mapped[list] = mapped_column(JSON, default=list)  # [Spell]

    background: Mapped[str] = mapped_column(String(100), nullable=False)
    alignment: Mapped[str] = mapped_column(String(50), nullable=False)
    personality_traits: Mapped[str | None] = mapped_column(Text, nullable=True)
    ideals: Mapped[str | None] = mapped_column(Text, nullable=True)
    bonds: Mapped[str | None] = mapped_column(Text, nullable=True)
    flaws: Mapped[str | None] = mapped_column(Text, nullable=True)
    avatar_url: Mapped[str | None] = mapped_column(String(255), nullable=True)

    user: Mapped[User] = relationship(back_populates="characters")

    def __str__(self) -> str:
        return f"{self.name} (lv{self.level} {self.race} {self.class_})"

    __table_args__ = (
        Index("ix_characters_user_id", "user_id"),
        Index("ix_characters_class", "class"),
        Index("ix_characters_race", "race"),
        Index("ix_characters_level", "level"),
    )


class GameSession(_Timestamps, Base):
    """A game table: its DM, seated players and everything that happens at it."""

    __tablename__ = "game_sessions"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    dm_user_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    max_players: Mapped[int] = mapped_column(Integer, default=6)
    status: Mapped[str] = mapped_column(_enum(GAME_STATUSES, "game_status"), default="waiting")
    current_map_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("maps.id", ondelete="SET NULL"), nullable=True
    )
    game_state: Mapped[dict] = mapped_column(JSON, default=dict)
    is_public: Mapped[bool] = mapped_column(Boolean, default=True)
    password_hash: Mapped[str | None] = mapped_column(String(255), nullable=True)
    session_duration: Mapped[int | None] = mapped_column(Integer, nullable=True)  # minutes
    ai_settings: Mapped[dict] = mapped_column(JSON, default=payloads.default_ai_settings)
    last_active_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)

    dm: Mapped[User | None] = relationship(back_populates="hosted_games")
    current_map: Mapped[Map | None] = relationship(foreign_keys=[current_map_id])
    players: Mapped[list[GamePlayer]] = relationship(
        back_populates="game", cascade="all, delete-orphan", passive_deletes=True
    )
    actions: Mapped[list[GameAction]] = relationship(
        back_populates="game", cascade="all, delete-orphan", passive_deletes=True
    )
    events: Mapped[list[GameEvent]] = relationship(
        back_populates="game", cascade="all, delete-orphan", passive_deletes=True
    )
    chat_messages: Mapped[list[ChatMessage]] = relationship(
        back_populates="game", cascade="all, delete-orphan", passive_deletes=True
    )
    invitations: Mapped[list[GameInvitation]] = relationship(
        back_populates="game", cascade="all, delete-orphan", passive_deletes=True
    )

    def __str__(self) -> str:
        return f"{self.name} ({self.status})"

    __table_args__ = (
        Index("ix_game_sessions_dm_user_id", "dm_user_id"),
        Index("ix_game_sessions_status", "status"),
        Index("ix_game_sessions_is_public", "is_public"),
        Index("ix_game_sessions_last_active_at", "last_active_at"),
    )


class GamePlayer(_Timestamps, Base):
    """A user's seat in a game; observers sit without a character."""

    __tablename__ = "game_players"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    game_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("game_sessions.id", ondelete="CASCADE"), nullable=False
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    character_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("characters.id", ondelete="CASCADE"), nullable=True
    )
    is_online: Mapped[bool] = mapped_column(Boolean, default=True)
    joined_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)
    last_active_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)
    role: Mapped[str] = mapped_column(_enum(PLAYER_ROLES, "player_role"), default="player")
    game_settings: Mapped[dict] = mapped_column(JSON, default=dict)

    game: Mapped[GameSession] = relationship(back_populates="players")
    user: Mapped[User] = relationship(back_populates="game_links")
    character: Mapped[Character | None] = relationship()

    def __str__(self) -> str:
        return f"{self.role} ({str(self.user_id)[:8]} in {str(self.game_id)[:8]})"

    __table_args__ = (
        UniqueConstraint("game_id", "user_id"),
        Index("ix_game_players_game_id", "game_id"),
        Index("ix_game_players_user_id", "user_id"),
        Index("ix_game_players_character_id", "character_id"),
        Index("ix_game_players_is_online", "is_online"),
        Index("ix_game_players_joined_at", "joined_at"),
    )


class Map(_Timestamps, Base):
    __tablename__ = "maps"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    type: Mapped[str] = mapped_column(_enum(MAP_TYPES, "map_type"), nullable=False)
    width: Mapped[int] = mapped_column(Integer, nullable=False)
    height: Mapped[int] = mapped_column(Integer, nullable=False)
    theme: Mapped[str] = mapped_column(String(100), nullable=False)  # "goblin lair"
    difficulty: Mapped[str] = mapped_column(
        _enum(MAP_DIFFICULTIES, "map_difficulty"), nullable=False
    )
    recommended_level: Mapped[int] = mapped_column(Integer, nullable=False)

    tiles: Mapped[list] = mapped_column(JSON, nullable=False)  # 2D grid of MapTile
    rooms: Mapped[list] = mapped_column(JSON, default=list)
    npcs: Mapped[list] = mapped_column(JSON, default=list)
    starting_position: Mapped[dict] = mapped_column(JSON, nullable=False)  # {"x": 1, "y": 1}

    ai_generation_prompt: Mapped[str | None] = mapped_column(Text, nullable=True)
    ai_metadata: Mapped[dict] = mapped_column(JSON, default=dict)

    is_public: Mapped[bool] = mapped_column(Boolean, default=True)
    created_by: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    thumbnail_url: Mapped[str | None] = mapped_column(String(255), nullable=True)
    full_image_url: Mapped[str | None] = mapped_column(String(255), nullable=True)

    creator: Mapped[User | None] = relationship(foreign_keys=[created_by])

    def __str__(self) -> str:
        return f"{self.name} ({self.type}, {self.width}x{self.height})"

    __table_args__ = (
        Index("ix_maps_type", "type"),
        Index("ix_maps_difficulty", "difficulty"),
        Index("ix_maps_recommended_level", "recommended_level"),
        Index("ix_maps_is_public", "is_public"),
        Index("ix_maps_created_by", "created_by"),
        Index("ix_maps_theme", "theme"),
    )


class GameAction(_Timestamps, Base):
    __tablename__ = "game_actions"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    game_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("game_sessions.id", ondelete="CASCADE"), nullable=False
    )
    player_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("game_players.id", ondelete="CASCADE"), nullable=False
    )
    type: Mapped[str] = mapped_column(_enum(ACTION_TYPES, "action_type"), nullable=False)
    description: Mapped[str] = mapped_column(String(500), nullable=False)
    data: Mapped[dict] = mapped_column(JSON, default=dict)
    resolved: Mapped[bool] = mapped_column(Boolean, default=False)
    result: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    timestamp: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)
    ai_processed: Mapped[bool] = mapped_column(Boolean, default=False)
    ai_response: Mapped[str | None] = mapped_column(Text, nullable=True)

    game: Mapped[GameSession] = relationship(back_populates="actions")
    player: Mapped[GamePlayer] = relationship()

    def __str__(self) -> str:
        return f"{self.type}: {self.description[:40]}"

    __table_args__ = (
        Index("ix_game_actions_game_id", "game_id"),
        Index("ix_game_actions_player_id", "player_id"),
        Index("ix_game_actions_type", "type"),
        Index("ix_game_actions_resolved", "resolved"),
        Index("ix_game_actions_timestamp", "timestamp"),
        Index("ix_game_actions_ai_processed", "ai_processed"),
    )


class GameEvent(_Timestamps, Base):
    __tablename__ = "game_events"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    game_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("game_sessions.id", ondelete="CASCADE"), nullable=False
    )
    type: Mapped[str] = mapped_column(_enum(EVENT_TYPES, "event_type"), nullable=False)
    description: Mapped[str] = mapped_column(String(500), nullable=False)
    data: Mapped[dict] = mapped_column(JSON, default=dict)
    timestamp: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)
    players_involved: Mapped[list] = mapped_column(JSON, default=list)  # game_players ids
    is_public: Mapped[bool] = mapped_column(Boolean, default=True)
    # Only consulted when is_public is false
    visible_to_players: Mapped[list] = mapped_column(JSON, default=list)
    ai_narrative: Mapped[str | None] = mapped_column(Text, nullable=True)
    ai_metadata: Mapped[dict] = mapped_column(JSON, default=dict)

    game: Mapped[GameSession] = relationship(back_populates="events")

    def __str__(self) -> str:
        return f"{self.type}: {self.description[:40]}"

    __table_args__ = (
        Index("ix_game_events_game_id", "game_id"),
        Index("ix_game_events_type", "type"),
        Index("ix_game_events_timestamp", "timestamp"),
        Index("ix_game_events_is_public", "is_public"),
    )


class DiceRoll(_Timestamps, Base):
    __tablename__ = "dice_rolls"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    game_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("game_sessions.id", ondelete="CASCADE"), nullable=False
    )
    player_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("game_players.id", ondelete="CASCADE"), nullable=False
    )
    type: Mapped[str] = mapped_column(String(50), nullable=False)  # "d20", "2d6", "damage"
    result: Mapped[int] = mapped_column(Integer, nullable=False)  # after modifiers
    rolls: Mapped[list] = mapped_column(JSON, nullable=False)
    modifier: Mapped[int] = mapped_column(Integer, default=0)
    description: Mapped[str] = mapped_column(String(200), nullable=False)
    timestamp: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)
    context: Mapped[str | None] = mapped_column(String(100), nullable=True)
    related_action_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("game_actions.id", ondelete="SET NULL"), nullable=True
    )
    is_critical: Mapped[bool] = mapped_column(Boolean, default=False)
    has_advantage: Mapped[bool] = mapped_column(Boolean, default=False)
    has_disadvantage: Mapped[bool] = mapped_column(Boolean, default=False)

    game: Mapped[GameSession] = relationship()
    player: Mapped[GamePlayer] = relationship()
    related_action: Mapped[GameAction | None] = relationship()

    def __str__(self) -> str:
        return f"{self.type} = {self.result}"

    __table_args__ = (
        Index("ix_dice_rolls_game_id", "game_id"),
        Index("ix_dice_rolls_player_id", "player_id"),
        Index("ix_dice_rolls_type", "type"),
        Index("ix_dice_rolls_timestamp", "timestamp"),
        Index("ix_dice_rolls_context", "context"),
        Index("ix_dice_rolls_is_critical", "is_critical"),
        Index("ix_dice_rolls_related_action_id", "related_action_id"),
    )


class ChatMessage(_Timestamps, Base):
    """In-game chat line. Deletion is a flag, rows are kept."""

    __tablename__ = "chat_messages"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    game_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("game_sessions.id", ondelete="CASCADE"), nullable=False
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    message: Mapped[str] = mapped_column(Text, nullable=False)
    type: Mapped[str] = mapped_column(_enum(MESSAGE_TYPES, "message_type"), default="player")
    timestamp: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)
    metadata_: Mapped[dict] = mapped_column("metadata", JSON, default=dict)
    is_deleted: Mapped[bool] = mapped_column(Boolean, default=False)
    deleted_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    whisper_to_user_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=True
    )
    is_private: Mapped[bool] = mapped_column(Boolean, default=False)
    trigger_ai_response: Mapped[bool] = mapped_column(Boolean, default=False)
    ai_response: Mapped[str | None] = mapped_column(Text, nullable=True)

    game: Mapped[GameSession] = relationship(back_populates="chat_messages")
    user: Mapped[User] = relationship(foreign_keys=[user_id])
    whisper_to: Mapped[User | None] = relationship(foreign_keys=[whisper_to_user_id])

    def soft_delete(self) -> None:
        self.is_deleted = True
        self.deleted_at = _utcnow()

    __table_args__ = (
        Index("ix_chat_messages_game_id", "game_id"),
        Index("ix_chat_messages_user_id", "user_id"),
        Index("ix_chat_messages_type", "type"),
        Index("ix_chat_messages_timestamp", "timestamp"),
        Index("ix_chat_messages_is_deleted", "is_deleted"),
        Index("ix_chat_messages_whisper_to_user_id", "whisper_to_user_id"),
        Index("ix_chat_messages_is_private", "is_private"),
    )


class AuthToken(_Timestamps, Base):
    __tablename__ = "auth_tokens"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    token: Mapped[str] = mapped_column(String(500), nullable=False)
    type: Mapped[str] = mapped_column(_enum(TOKEN_TYPES, "token_type"), nullable=False)
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    is_revoked: Mapped[bool] = mapped_column(Boolean, default=False)
    revoked_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    device_info: Mapped[str | None] = mapped_column(String(500), nullable=True)

    user: Mapped[User] = relationship(back_populates="auth_tokens")

    __table_args__ = (
        Index("ix_auth_tokens_user_id", "user_id"),
        Index("ix_auth_tokens_token", "token"),
        Index("ix_auth_tokens_type", "type"),
        Index("ix_auth_tokens_expires_at", "expires_at"),
        Index("ix_auth_tokens_is_revoked", "is_revoked"),
    )


# --- Subscriptions (revision 0012) ---


class SubscriptionPlan(_Timestamps, Base):
    __tablename__ = "subscription_plans"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    slug: Mapped[str] = mapped_column(String(50), nullable=False, unique=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)  # monthly, dollars
    currency: Mapped[str | None] = mapped_column(String(3), default="USD")
    billing_period: Mapped[str | None] = mapped_column(
        _enum(BILLING_PERIODS, "billing_period"), default="monthly"
    )
    # None means unlimited
    max_characters: Mapped[int | None] = mapped_column(Integer, nullable=True)
    max_simultaneous_games: Mapped[int | None] = mapped_column(Integer, nullable=True)
    max_players_per_game: Mapped[int | None] = mapped_column(Integer, nullable=True)
    ai_dm_access: Mapped[bool | None] = mapped_column(Boolean, default=False)
    ai_map_generation: Mapped[bool | None] = mapped_column(Boolean, default=False)
    premium_character_options: Mapped[bool | None] = mapped_column(Boolean, default=False)
    voice_chat: Mapped[bool | None] = mapped_column(Boolean, default=False)
    custom_campaigns: Mapped[bool | None] = mapped_column(Boolean, default=False)
    priority_support: Mapped[bool | None] = mapped_column(Boolean, default=False)
    storage_gb: Mapped[int | None] = mapped_column(Integer, default=1)
    features: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    is_active: Mapped[bool | None] = mapped_column(Boolean, default=True)
    sort_order: Mapped[int | None] = mapped_column(Integer, default=0)

    def __str__(self) -> str:
        return self.name

    __table_args__ = (
        Index("ix_subscription_plans_is_active_sort_order", "is_active", "sort_order"),
    )


class UserSubscription(_Timestamps, Base):
    __tablename__ = "user_subscriptions"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    plan_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("subscription_plans.id", ondelete="RESTRICT"), nullable=False
    )
    stripe_subscription_id: Mapped[str | None] = mapped_column(String(100), nullable=True)
    stripe_customer_id: Mapped[str | None] = mapped_column(String(100), nullable=True)
    status: Mapped[str | None] = mapped_column(
        _enum(SUBSCRIPTION_STATUSES, "subscription_status"), default="active"
    )
    current_period_start: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    current_period_end: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    trial_start: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    trial_end: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    canceled_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    ended_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    currency: Mapped[str | None] = mapped_column(String(3), default="USD")
    billing_period: Mapped[str | None] = mapped_column(String(20), default="monthly")
    metadata_: Mapped[dict | None] = mapped_column("metadata", JSON, nullable=True)

    user: Mapped[User] = relationship()
    plan: Mapped[SubscriptionPlan] = relationship()

    __table_args__ = (
        Index("ix_user_subscriptions_user_id_status", "user_id", "status"),
        Index("ix_user_subscriptions_stripe_subscription_id", "stripe_subscription_id"),
        Index("ix_user_subscriptions_current_period_end", "current_period_end"),
    )


class SubscriptionUsage(_Timestamps, Base):
    __tablename__ = "subscription_usage"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    subscription_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("user_subscriptions.id", ondelete="CASCADE"), nullable=False
    )
    metric: Mapped[str] = mapped_column(String(50), nullable=False)  # "ai_requests", ...
    count: Mapped[int | None] = mapped_column(Integer, default=0)
    date: Mapped[date_type] = mapped_column(Date, nullable=False)
    details: Mapped[dict | None] = mapped_column(JSON, nullable=True)

    __table_args__ = (
        UniqueConstraint("user_id", "subscription_id", "metric", "date"),
        Index("ix_subscription_usage_date_metric", "date", "metric"),
    )


class PaymentHistory(_Timestamps, Base):
    __tablename__ = "payment_history"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    subscription_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("user_subscriptions.id", ondelete="CASCADE"), nullable=False
    )
    stripe_payment_intent_id: Mapped[str | None] = mapped_column(String(100), nullable=True)
    stripe_invoice_id: Mapped[str | None] = mapped_column(String(100), nullable=True)
    amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    currency: Mapped[str | None] = mapped_column(String(3), default="USD")
    status: Mapped[str] = mapped_column(_enum(PAYMENT_STATUSES, "payment_status"), nullable=False)
    payment_method: Mapped[str | None] = mapped_column(String(50), nullable=True)
    failure_reason: Mapped[str | None] = mapped_column(Text, nullable=True)
    metadata_: Mapped[dict | None] = mapped_column("metadata", JSON, nullable=True)
    processed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    __table_args__ = (
        Index("ix_payment_history_user_id_status", "user_id", "status"),
        Index("ix_payment_history_stripe_payment_intent_id", "stripe_payment_intent_id"),
        Index("ix_payment_history_processed_at", "processed_at"),
    )


# --- Social (revision 0014) ---


class Friendship(_Timestamps, Base):
    """Directed friend request. (A, B) and (B, A) are distinct rows."""

    __tablename__ = "friendships"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    requester_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    receiver_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    status: Mapped[str] = mapped_column(
        _enum(FRIENDSHIP_STATUSES, "friendship_status"), default="pending"
    )

    requester: Mapped[User] = relationship(foreign_keys=[requester_id])
    receiver: Mapped[User] = relationship(foreign_keys=[receiver_id])

    __table_args__ = (
        UniqueConstraint("requester_id", "receiver_id"),
        CheckConstraint("requester_id != receiver_id", name="not_self"),
        Index("ix_friendships_requester_id_status", "requester_id", "status"),
        Index("ix_friendships_receiver_id_status", "receiver_id", "status"),
    )


class DirectMessage(Base):
    __tablename__ = "direct_messages"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    sender_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    receiver_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)
    is_read: Mapped[bool] = mapped_column(Boolean, default=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)
    read_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    __table_args__ = (
        Index(
            "ix_direct_messages_sender_id_receiver_id_created_at",
            "sender_id",
            "receiver_id",
            "created_at",
        ),
        Index("ix_direct_messages_receiver_id_is_read", "receiver_id", "is_read"),
    )


class GameInvitation(Base):
    __tablename__ = "game_invitations"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    game_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("game_sessions.id", ondelete="CASCADE"), nullable=False
    )
    inviter_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    invitee_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    status: Mapped[str] = mapped_column(
        _enum(INVITATION_STATUSES, "invitation_status"), default="pending"
    )
    message: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)
    responded_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    expires_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    game: Mapped[GameSession] = relationship(back_populates="invitations")

    __table_args__ = (
        UniqueConstraint("game_id", "invitee_id"),
        Index("ix_game_invitations_invitee_id_status", "invitee_id", "status"),
        Index("ix_game_invitations_game_id_status", "game_id", "status"),
    )


# --- Profiles and posts (revisions 0015, 0016) ---


class UserPost(Base):
    __tablename__ = "user_posts"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)
    media_urls: Mapped[list] = mapped_column(JSON, default=list)
    post_type: Mapped[str] = mapped_column(_enum(POST_TYPES, "post_type"), default="text")
    metadata_: Mapped[dict] = mapped_column("metadata", JSON, default=dict)
    is_public: Mapped[bool] = mapped_column(Boolean, default=True)
    likes_count: Mapped[int] = mapped_column(Integer, default=0)
    comments_count: Mapped[int] = mapped_column(Integer, default=0)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow
    )
    attached_game_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("game_sessions.id", ondelete="SET NULL"), nullable=True
    )

    user: Mapped[User] = relationship()
    attached_game: Mapped[GameSession | None] = relationship()
    likes: Mapped[list[PostLike]] = relationship(
        back_populates="post", cascade="all, delete-orphan", passive_deletes=True
    )
    comments: Mapped[list[PostComment]] = relationship(
        back_populates="post", cascade="all, delete-orphan", passive_deletes=True
    )

    __table_args__ = (
        Index("ix_user_posts_user_id_created_at", "user_id", "created_at"),
        Index("ix_user_posts_post_type_is_public", "post_type", "is_public"),
        Index("ix_user_posts_created_at", "created_at"),
        Index("ix_user_posts_attached_game_id", "attached_game_id"),
    )


class Notification(Base):
    __tablename__ = "notifications"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    type: Mapped[str] = mapped_column(
        _enum(NOTIFICATION_TYPES, "notification_type"), nullable=False
    )
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    data: Mapped[dict] = mapped_column(JSON, default=dict)
    is_read: Mapped[bool] = mapped_column(Boolean, default=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)
    read_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    __table_args__ = (
        Index("ix_notifications_user_id_is_read", "user_id", "is_read"),
        Index("ix_notifications_user_id_created_at", "user_id", "created_at"),
        Index("ix_notifications_type", "type"),
    )


class PostLike(Base):
    __tablename__ = "post_likes"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    post_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("user_posts.id", ondelete="CASCADE"), nullable=False
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)

    post: Mapped[UserPost] = relationship(back_populates="likes")

    __table_args__ = (
        UniqueConstraint("post_id", "user_id"),
        Index("ix_post_likes_post_id", "post_id"),
        Index("ix_post_likes_user_id", "user_id"),
    )


class PostComment(Base):
    __tablename__ = "post_comments"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    post_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("user_posts.id", ondelete="CASCADE"), nullable=False
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow
    )

    post: Mapped[UserPost] = relationship(back_populates="comments")

    __table_args__ = (
        Index("ix_post_comments_post_id_created_at", "post_id", "created_at"),
        Index("ix_post_comments_user_id", "user_id"),
    )
