"""Integrity rules the schema enforces at head."""

from decimal import Decimal

import pytest
from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError

from dnd_game.models.db_models import (
    Character,
    ChatMessage,
    Friendship,
    GameInvitation,
    GamePlayer,
    GameSession,
    Map,
    PostLike,
    SubscriptionPlan,
    User,
    UserPost,
    UserSubscription,
)


def _user(name: str, **kw) -> User:
    return User(
        email=kw.pop("email", f"{name}@example.com"),
        username=name,
        display_name=name.title(),
        password_hash="x",
        **kw,
    )


def _character(user: User, name: str = "Hero") -> Character:
    return Character(
        user_id=user.id, name=name, class_="fighter", race="human",
        hp_current=10, hp_maximum=10, armor_class=15, proficiency_bonus=2, speed=30,
        strength=16, dexterity=12, constitution=14, intelligence=10, wisdom=10, charisma=8,
        background="Soldier", alignment="Neutral",
    )


async def _table(db, dm: User | None = None) -> GameSession:
    game = GameSession(name="Table", dm_user_id=dm.id if dm else None)
    db.add(game)
    await db.flush()
    return game


@pytest.mark.asyncio
async def test_duplicate_email_rejected(db_session):
    db = db_session
    db.add(_user("first", email="same@example.com"))
    await db.commit()

    db.add(_user("second", email="same@example.com"))
    with pytest.raises(IntegrityError):
        await db.commit()
    await db.rollback()

    count = await db.scalar(select(func.count()).select_from(User))
    assert count == 1


@pytest.mark.asyncio
async def test_duplicate_username_rejected(db_session):
    db = db_session
    db.add(_user("taken", email="a@example.com"))
    await db.flush()
    db.add(_user("taken", email="b@example.com"))
    with pytest.raises(IntegrityError):
        await db.flush()


@pytest.mark.asyncio
async def test_defaults_filled_in(db_session):
    db = db_session
    user = _user("fresh")
    db.add(user)
    await db.flush()

    assert user.role == "player"
    assert user.privacy_level == "public"
    assert user.preferences["theme"] == "dark"
    assert user.stats["achievementsUnlocked"] == []

    game = await _table(db, user)
    assert game.status == "waiting"
    assert game.max_players == 6
    assert game.ai_settings["difficultyLevel"] == "medium"


@pytest.mark.asyncio
async def test_role_outside_vocabulary_rejected(db_session):
    db = db_session
    db.add(_user("odd", role="wizard"))
    with pytest.raises(IntegrityError):
        await db.flush()


@pytest.mark.asyncio
async def test_friendship_with_self_rejected(db_session):
    db = db_session
    user = _user("loner")
    db.add(user)
    await db.flush()

    db.add(Friendship(requester_id=user.id, receiver_id=user.id))
    with pytest.raises(IntegrityError):
        await db.flush()


@pytest.mark.asyncio
async def test_friendship_uniqueness_is_directional(db_session):
    db = db_session
    a, b = _user("alice"), _user("bob")
    db.add_all([a, b])
    await db.flush()

    db.add(Friendship(requester_id=a.id, receiver_id=b.id))
    await db.flush()
    # The reverse request is a different row
    db.add(Friendship(requester_id=b.id, receiver_id=a.id))
    await db.flush()

    db.add(Friendship(requester_id=a.id, receiver_id=b.id))
    with pytest.raises(IntegrityError):
        await db.flush()


@pytest.mark.asyncio
async def test_duplicate_seat_rejected(db_session):
    db = db_session
    user = _user("player")
    db.add(user)
    await db.flush()
    game = await _table(db)

    db.add(GamePlayer(game_id=game.id, user_id=user.id))
    await db.flush()
    db.add(GamePlayer(game_id=game.id, user_id=user.id))
    with pytest.raises(IntegrityError):
        await db.flush()


@pytest.mark.asyncio
async def test_seat_without_character_allowed(db_session):
    db = db_session
    user = _user("observer")
    db.add(user)
    await db.flush()
    game = await _table(db)

    seat = GamePlayer(game_id=game.id, user_id=user.id, role="observer")
    db.add(seat)
    await db.flush()
    assert seat.character_id is None


@pytest.mark.asyncio
async def test_deleting_dm_keeps_session(db_session):
    db = db_session
    dm = _user("dm")
    db.add(dm)
    await db.flush()
    game = await _table(db, dm)
    await db.commit()

    await db.execute(delete(User).where(User.id == dm.id))
    await db.commit()

    row = (await db.execute(
        select(GameSession.id, GameSession.dm_user_id).where(GameSession.id == game.id)
    )).one()
    assert row.dm_user_id is None


@pytest.mark.asyncio
async def test_deleting_session_removes_seats(db_session):
    db = db_session
    user = _user("seated")
    db.add(user)
    await db.flush()
    character = _character(user)
    db.add(character)
    game = await _table(db)
    db.add(GamePlayer(game_id=game.id, user_id=user.id, character_id=character.id))
    db.add(GameInvitation(game_id=game.id, inviter_id=user.id, invitee_id=user.id))
    await db.commit()

    await db.execute(delete(GameSession).where(GameSession.id == game.id))
    await db.commit()

    seats = await db.scalar(select(func.count()).select_from(GamePlayer))
    invitations = await db.scalar(select(func.count()).select_from(GameInvitation))
    assert seats == 0
    assert invitations == 0
    # Players and characters outlive the table
    assert await db.scalar(select(func.count()).select_from(Character)) == 1


@pytest.mark.asyncio
async def test_deleting_map_clears_current_map(db_session):
    db = db_session
    cave = Map(
        name="Cave", type="cave", width=5, height=5, theme="damp", difficulty="easy",
        recommended_level=1, tiles=[], starting_position={"x": 0, "y": 0},
    )
    db.add(cave)
    await db.flush()
    game = GameSession(name="Delve", current_map_id=cave.id)
    db.add(game)
    await db.commit()

    await db.execute(delete(Map).where(Map.id == cave.id))
    await db.commit()

    current = await db.scalar(select(GameSession.current_map_id).where(GameSession.id == game.id))
    assert current is None


@pytest.mark.asyncio
async def test_plan_in_use_cannot_be_deleted(db_session):
    db = db_session
    user = _user("subscriber")
    plan = SubscriptionPlan(name="Premium", slug="premium", price=Decimal("9.99"))
    db.add_all([user, plan])
    await db.flush()
    db.add(UserSubscription(user_id=user.id, plan_id=plan.id, amount=Decimal("9.99")))
    await db.commit()

    with pytest.raises(IntegrityError):
        await db.execute(delete(SubscriptionPlan).where(SubscriptionPlan.id == plan.id))
        await db.commit()


@pytest.mark.asyncio
async def test_post_liked_once_per_user(db_session):
    db = db_session
    user = _user("liker")
    db.add(user)
    await db.flush()
    post = UserPost(user_id=user.id, content="first!")
    db.add(post)
    await db.flush()

    db.add(PostLike(post_id=post.id, user_id=user.id))
    await db.flush()
    db.add(PostLike(post_id=post.id, user_id=user.id))
    with pytest.raises(IntegrityError):
        await db.flush()


@pytest.mark.asyncio
async def test_deleting_game_detaches_posts(db_session):
    db = db_session
    user = _user("poster")
    db.add(user)
    await db.flush()
    game = await _table(db, user)
    post = UserPost(user_id=user.id, content="gg", attached_game_id=game.id)
    db.add(post)
    await db.commit()

    await db.execute(delete(GameSession).where(GameSession.id == game.id))
    await db.commit()

    attached = await db.scalar(select(UserPost.attached_game_id).where(UserPost.id == post.id))
    assert attached is None


@pytest.mark.asyncio
async def test_soft_deleted_message_is_kept(db_session):
    db = db_session
    user = _user("chatter")
    db.add(user)
    await db.flush()
    game = await _table(db, user)
    message = ChatMessage(game_id=game.id, user_id=user.id, message="hello")
    db.add(message)
    await db.flush()

    message.soft_delete()
    await db.commit()
    db.expunge_all()

    stored = await db.get(ChatMessage, message.id)
    assert stored.is_deleted is True
    assert stored.deleted_at is not None
    assert stored.type == "player"
