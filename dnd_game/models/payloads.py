"""Pydantic shapes for the JSON columns.

The store does not enforce these; they pin down what the application layer
writes so payloads do not drift. Stored keys are camelCase.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Payload(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    def to_json(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")


# users.preferences / users.stats


class UserPreferences(Payload):
    theme: Literal["light", "dark"] = "dark"
    notifications: bool = True
    sound_enabled: bool = True
    auto_roll_dice: bool = False
    show_combat_animations: bool = True


class UserStats(Payload):
    games_played: int = Field(default=0, ge=0)
    total_play_time: int = Field(default=0, ge=0)  # minutes
    characters_created: int = Field(default=0, ge=0)
    achievements_unlocked: list[str] = Field(default_factory=list)


# game_sessions.ai_settings / game_sessions.game_state


class AISettings(Payload):
    difficulty_level: Literal["easy", "medium", "hard"] = "medium"
    ai_personality: str = "helpful"
    auto_generation: bool = True
    voice_enabled: bool = False


class GameState(Payload):
    current_turn: int = 0
    round_number: int = 1
    initiative: list[Any] = Field(default_factory=list)


# characters.inventory / characters.spells


class InventoryItem(Payload):
    id: str
    name: str
    type: str
    quantity: int = Field(default=1, ge=0)


class Spell(Payload):
    id: str
    name: str
    level: int = Field(ge=0, le=9)
    school: str


# maps.starting_position / maps.rooms / maps.npcs


class Position(Payload):
    x: int
    y: int


class Bounds(Payload):
    x: int
    y: int
    width: int
    height: int


class MapRoom(Payload):
    id: str
    name: str
    type: Literal["chamber", "corridor", "entrance", "treasure", "boss", "puzzle", "trap"]
    bounds: Bounds


class MapNpc(Payload):
    id: str
    name: str
    race: str
    level: int = Field(ge=1)
    disposition: Literal["hostile", "neutral", "friendly"]


def default_preferences() -> dict[str, Any]:
    return UserPreferences().to_json()


def default_stats() -> dict[str, Any]:
    return UserStats().to_json()


def default_ai_settings() -> dict[str, Any]:
    return AISettings().to_json()
