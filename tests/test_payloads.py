"""JSON column shapes agree with the server-side defaults."""

import pytest
from pydantic import ValidationError

from dnd_game.infra.migrate import script_directory
from dnd_game.models.payloads import (
    MapRoom,
    UserStats,
    default_ai_settings,
    default_preferences,
    default_stats,
)


def _module(revision: str):
    return script_directory().get_revision(revision).module


def test_user_defaults_match_server_defaults():
    users = _module("0001")
    assert default_preferences() == users.DEFAULT_PREFERENCES
    assert default_stats() == users.DEFAULT_STATS


def test_ai_settings_default_matches_server_default():
    assert default_ai_settings() == _module("0003").DEFAULT_AI_SETTINGS


def test_keys_are_camel_case():
    stats = UserStats(games_played=2, achievements_unlocked=["first_session"]).to_json()
    assert stats["gamesPlayed"] == 2
    assert stats["achievementsUnlocked"] == ["first_session"]
    assert "games_played" not in stats


def test_stored_shape_reads_back():
    stats = UserStats.model_validate({"gamesPlayed": 3, "totalPlayTime": 90})
    assert stats.games_played == 3
    assert stats.total_play_time == 90


def test_unknown_room_type_rejected():
    with pytest.raises(ValidationError):
        MapRoom(id="r1", name="Hall", type="ballroom", bounds={"x": 0, "y": 0, "width": 1, "height": 1})
