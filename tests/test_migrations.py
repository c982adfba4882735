"""Schema catalog behaviour driven through the runner on in-memory stores."""

import uuid

import pytest
import sqlalchemy as sa
from alembic import command
from sqlalchemy import inspect

from dnd_game.errors import DestructiveRollbackError, MigrationError
from dnd_game.infra import migrate
from dnd_game.infra.catalog import load_catalog
from dnd_game.infra.config import DevelopmentConnection, settings
from dnd_game.models.db_models import Base
from tests.conftest import character_row, player_row, session_row, user_row

REVISIONS = [entry.revision for entry in load_catalog()]


def _app_tables(conn) -> set[str]:
    return set(inspect(conn).get_table_names()) - {"alembic_version"}


def _snapshot(conn) -> dict:
    """Structural shape of every application table."""
    insp = inspect(conn)
    shape = {}
    for table in sorted(_app_tables(conn)):
        shape[table] = {
            "columns": sorted(
                (c["name"], str(c["type"]), c["nullable"], c["default"])
                for c in insp.get_columns(table)
            ),
            "indexes": sorted(
                (i["name"], tuple(i["column_names"]), bool(i["unique"]))
                for i in insp.get_indexes(table)
            ),
            "unique": sorted(tuple(u["column_names"]) for u in insp.get_unique_constraints(table)),
            # enum vocabularies and not_self live here
            "checks": sorted(
                (ck["name"], ck["sqltext"]) for ck in insp.get_check_constraints(table)
            ),
            "foreign_keys": sorted(
                (
                    tuple(fk["constrained_columns"]),
                    fk["referred_table"],
                    tuple(fk["referred_columns"]),
                    (fk.get("options") or {}).get("ondelete"),
                )
                for fk in insp.get_foreign_keys(table)
            ),
        }
    return shape


def _insert(conn, table: str, row: dict) -> None:
    # Reflection-free insert; UUIDs stored the way sa.Uuid stores them on SQLite
    values = {k: v.hex if isinstance(v, uuid.UUID) else v for k, v in row.items()}
    conn.execute(sa.table(table, *[sa.column(k) for k in values]).insert().values(**values))


def _count(conn, table: str) -> int:
    return conn.execute(sa.text(f"SELECT COUNT(*) FROM {table}")).scalar_one()


def _seat_players(conn, with_character: int, without_character: int):
    """One table with some seats holding characters and some empty-handed."""
    dm = user_row("dm")
    _insert(conn, "users", dm)
    game = session_row(dm["id"])
    _insert(conn, "game_sessions", game)

    full, empty = [], []
    for i in range(with_character):
        user = user_row(f"hero{i}")
        _insert(conn, "users", user)
        character = character_row(user["id"])
        _insert(conn, "characters", character)
        seat = player_row(game["id"], user["id"], character["id"])
        _insert(conn, "game_players", seat)
        full.append(seat["id"])
    for i in range(without_character):
        user = user_row(f"watcher{i}")
        _insert(conn, "users", user)
        seat = player_row(game["id"], user["id"], None, role="observer")
        _insert(conn, "game_players", seat)
        empty.append(seat["id"])
    return game["id"], full, empty


# --- catalog ordering ---


def test_catalog_is_ordered_and_linear():
    assert REVISIONS == [f"{n:04d}" for n in range(1, 17)]
    entries = load_catalog()
    assert entries[0].down_revision is None
    for prev, entry in zip(entries, entries[1:]):
        assert entry.down_revision == prev.revision


def test_only_0013_is_lossy():
    assert [e.revision for e in load_catalog() if e.destructive] == ["0013"]


# --- full run ---


def test_full_upgrade_then_full_downgrade(connection):
    applied = migrate.upgrade(connection=connection)
    assert applied == REVISIONS
    assert migrate.current(connection=connection) == "0016"
    assert _app_tables(connection) == set(Base.metadata.tables)

    reverted = migrate.downgrade("base", connection=connection)
    assert reverted == list(reversed(REVISIONS))
    assert _app_tables(connection) == set()
    assert migrate.current(connection=connection) is None


def test_upgrade_is_idempotent(connection):
    migrate.upgrade(connection=connection)
    assert migrate.upgrade(connection=connection) == []
    assert migrate.current(connection=connection) == "0016"


def test_head_matches_orm_models(connection):
    migrate.upgrade(connection=connection)
    insp = inspect(connection)
    for name, table in Base.metadata.tables.items():
        reflected = {c["name"]: c for c in insp.get_columns(name)}
        assert set(reflected) == {c.name for c in table.columns}, name
        for column in table.columns:
            if column.primary_key:
                continue
            assert reflected[column.name]["nullable"] == column.nullable, f"{name}.{column.name}"
        assert {i["name"] for i in insp.get_indexes(name)} == {i.name for i in table.indexes}, name


def test_empty_store_has_nothing_to_downgrade(connection):
    assert migrate.current(connection=connection) is None
    assert migrate.downgrade("base", connection=connection) == []


# --- per revision reversibility ---


@pytest.mark.parametrize("revision", REVISIONS)
def test_downgrade_restores_previous_shape(connection, revision):
    index = REVISIONS.index(revision)
    previous = REVISIONS[index - 1] if index else None
    if previous:
        migrate.upgrade(previous, connection=connection)
    before = _snapshot(connection)

    assert migrate.upgrade(revision, connection=connection) == [revision]
    assert _snapshot(connection) != before

    assert migrate.downgrade(previous or "base", connection=connection) == [revision]
    assert _snapshot(connection) == before
    assert migrate.current(connection=connection) == previous


def test_relative_downgrade(connection):
    migrate.upgrade(connection=connection)
    assert migrate.downgrade("-2", connection=connection) == ["0016", "0015"]
    assert migrate.current(connection=connection) == "0014"


def test_rows_survive_table_rebuilds(connection):
    migrate.upgrade("0010", connection=connection)
    game_id, full, _ = _seat_players(connection, with_character=2, without_character=0)

    # 0011 and 0013 rebuild game_sessions and game_players on SQLite
    migrate.upgrade("0013", connection=connection)
    assert _count(connection, "game_sessions") == 1
    assert _count(connection, "game_players") == 2
    assert _count(connection, "characters") == 2


# --- lossy rollback of 0013 ---


def test_lossy_downgrade_refused_without_confirmation(connection):
    migrate.upgrade("0013", connection=connection)
    _seat_players(connection, with_character=1, without_character=2)

    with pytest.raises(DestructiveRollbackError) as excinfo:
        migrate.downgrade("0012", connection=connection)

    assert excinfo.value.revision == "0013"
    assert excinfo.value.rows == 2
    assert migrate.current(connection=connection) == "0013"
    assert _count(connection, "game_players") == 3


def test_lossy_downgrade_refused_before_anything_is_reverted(connection):
    migrate.upgrade(connection=connection)
    _seat_players(connection, with_character=0, without_character=1)

    with pytest.raises(DestructiveRollbackError):
        migrate.downgrade("0012", connection=connection)
    assert migrate.current(connection=connection) == "0016"


def test_lossless_downgrade_across_0013_needs_no_confirmation(connection):
    migrate.upgrade("0013", connection=connection)
    _seat_players(connection, with_character=2, without_character=0)

    assert migrate.downgrade("0012", connection=connection) == ["0013"]
    assert _count(connection, "game_players") == 2


def test_confirmed_lossy_downgrade_keeps_only_full_seats(connection):
    migrate.upgrade("0013", connection=connection)
    game_id, full, empty = _seat_players(connection, with_character=1, without_character=1)
    _insert(connection, "game_actions", {
        "id": uuid.uuid4(), "game_id": game_id, "player_id": empty[0],
        "type": "move", "description": "wanders off",
    })

    migrate.downgrade("0012", connection=connection, confirm_destructive=True)

    assert migrate.current(connection=connection) == "0012"
    seats = connection.execute(sa.text("SELECT id, character_id FROM game_players")).all()
    assert [row.id for row in seats] == [full[0].hex]
    assert seats[0].character_id is not None
    assert _count(connection, "game_actions") == 0

    columns = {c["name"]: c for c in inspect(connection).get_columns("game_players")}
    assert columns["character_id"]["nullable"] is False


def test_lossy_downgrade_rechecks_rows_under_lock(connection, monkeypatch):
    migrate.upgrade("0013", connection=connection)
    _seat_players(connection, with_character=1, without_character=1)
    # Seats that appear after the runner's own count still block the revert
    monkeypatch.setattr(migrate, "_guard_destructive", lambda *args: None)

    with pytest.raises(DestructiveRollbackError) as excinfo:
        migrate.downgrade("0012", connection=connection)

    assert excinfo.value.rows == 1
    assert migrate.current(connection=connection) == "0013"
    assert _count(connection, "game_players") == 2


# --- failures ---


def test_failed_revision_is_reported_and_later_ones_skipped(connection):
    migrate.upgrade("0013", connection=connection)
    # Squat on the table 0014 creates
    connection.execute(sa.text("CREATE TABLE friendships (id INTEGER PRIMARY KEY)"))
    connection.commit()

    with pytest.raises(MigrationError) as excinfo:
        migrate.upgrade(connection=connection)

    assert excinfo.value.revision == "0014"
    assert excinfo.value.direction == "upgrade"
    assert excinfo.value.__cause__ is not None
    assert migrate.current(connection=connection) == "0013"
    assert "user_posts" not in _app_tables(connection)


def test_unknown_target_is_a_migration_error(connection):
    with pytest.raises(MigrationError):
        migrate.upgrade("9999", connection=connection)
    assert migrate.current(connection=connection) is None


# --- engines owned by the runner ---


def test_runner_opens_development_store(tmp_path):
    conn = DevelopmentConnection(filename=tmp_path / "nested" / "game.db")

    assert migrate.upgrade(conn_config=conn) == REVISIONS
    assert (tmp_path / "nested" / "game.db").exists()
    assert migrate.current(conn_config=conn) == "0016"
    assert migrate.upgrade(conn_config=conn) == []


def test_alembic_env_creates_development_directory(tmp_path, monkeypatch):
    conn = DevelopmentConnection(filename=tmp_path / "fresh" / "game.db")
    monkeypatch.setitem(settings.__dict__, "connection", conn)

    command.upgrade(migrate.alembic_config(), "0001")

    assert (tmp_path / "fresh" / "game.db").exists()
    assert migrate.current(conn_config=conn) == "0001"


# --- mutual exclusion ---


class _RecordingConnection:
    """Just enough of a Connection to watch the advisory lock calls."""

    def __init__(self, dialect_name: str):
        self.dialect = type("Dialect", (), {"name": dialect_name})()
        self.statements: list[str] = []
        self.commits = 0

    def in_transaction(self) -> bool:
        return False

    def execute(self, statement):
        self.statements.append(str(statement))

    def commit(self):
        self.commits += 1


def test_postgres_runs_hold_advisory_lock():
    conn = _RecordingConnection("postgresql")
    with pytest.raises(RuntimeError):
        with migrate.migration_lock(conn):
            assert len(conn.statements) == 1
            raise RuntimeError("boom")

    assert "pg_advisory_lock" in conn.statements[0]
    assert "pg_advisory_unlock" in conn.statements[1]
    assert conn.commits == 1


def test_sqlite_runs_take_no_lock():
    conn = _RecordingConnection("sqlite")
    with migrate.migration_lock(conn):
        pass
    assert conn.statements == []
