"""Drives Alembic's command API for the schema catalog.

Alembic owns version bookkeeping and up/down application. This module adds
what the deployment needs around it: it reports which revision failed, it
refuses lossy rollbacks unless the operator confirms, and it serializes
concurrent runs on PostgreSQL.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from pathlib import Path

from alembic import command
from alembic.config import Config
from alembic.runtime.migration import MigrationContext
from alembic.script import Script, ScriptDirectory
from alembic.script.revision import RevisionError
from alembic.util import CommandError
from sqlalchemy import Connection, create_engine, func, select

from dnd_game.errors import DestructiveRollbackError, MigrationError
from dnd_game.infra.config import ConnectionConfig, DevelopmentConnection, settings

logger = logging.getLogger(__name__)

SCRIPT_LOCATION = Path(__file__).resolve().parents[2] / "alembic"

# Application-wide key for pg_advisory_lock ("dnd_db").
MIGRATION_LOCK_KEY = 0x646E645F6462


def alembic_config(connection: Connection | None = None) -> Config:
    """Alembic config pointing at the catalog, optionally bound to a connection."""
    cfg = Config()
    cfg.set_main_option("script_location", str(SCRIPT_LOCATION))
    if connection is not None:
        cfg.attributes["connection"] = connection
    cfg.attributes["applied"] = []
    return cfg


def script_directory() -> ScriptDirectory:
    return ScriptDirectory.from_config(alembic_config())


@contextmanager
def migration_lock(connection: Connection) -> Iterator[None]:
    """Hold a session-level advisory lock for the duration of a run.

    Only PostgreSQL is locked; SQLite stores are single-runner by deployment.
    """
    if connection.dialect.name != "postgresql":
        yield
        return

    external = connection.in_transaction()
    logger.info("Waiting for migration lock %#x", MIGRATION_LOCK_KEY)
    connection.execute(select(func.pg_advisory_lock(MIGRATION_LOCK_KEY)))
    try:
        yield
    finally:
        connection.execute(select(func.pg_advisory_unlock(MIGRATION_LOCK_KEY)))
        if not external:
            connection.commit()
        logger.info("Released migration lock")


@contextmanager
def _connect(
    connection: Connection | None, conn_config: ConnectionConfig | None
) -> Iterator[Connection]:
    if connection is not None:
        yield connection
        return

    conn_config = conn_config or settings.connection
    if isinstance(conn_config, DevelopmentConnection):
        conn_config.filename.parent.mkdir(parents=True, exist_ok=True)
    engine = create_engine(conn_config.sync_url, **conn_config.sync_engine_kwargs())
    try:
        with engine.connect() as conn:
            yield conn
    finally:
        engine.dispose()


def current(
    *, connection: Connection | None = None, conn_config: ConnectionConfig | None = None
) -> str | None:
    """Revision the store is at, or None for an empty store."""
    with _connect(connection, conn_config) as conn:
        external = conn.in_transaction()
        try:
            return MigrationContext.configure(conn).get_current_revision()
        finally:
            if not external:
                conn.commit()


def upgrade(
    target: str = "head",
    *,
    connection: Connection | None = None,
    conn_config: ConnectionConfig | None = None,
) -> list[str]:
    """Apply revisions up to ``target``; returns the revisions applied, in order."""
    with _connect(connection, conn_config) as conn:
        cfg = alembic_config(conn)
        logger.info("Upgrading schema to %s", target)
        _run(command.upgrade, cfg, target, "upgrade")

    applied = cfg.attributes["applied"]
    if applied:
        logger.info("Applied %d revision(s): %s", len(applied), ", ".join(applied))
    else:
        logger.info("Schema already at %s", target)
    return applied


def downgrade(
    target: str,
    *,
    connection: Connection | None = None,
    conn_config: ConnectionConfig | None = None,
    confirm_destructive: bool = False,
) -> list[str]:
    """Revert revisions down to ``target`` (an id, ``base`` or ``-N``).

    Raises DestructiveRollbackError, before anything is reverted, when a
    revision on the path deletes rows and ``confirm_destructive`` is false.
    """
    with _connect(connection, conn_config) as conn:
        cfg = alembic_config(conn)
        cfg.attributes["confirm_destructive"] = confirm_destructive
        script = ScriptDirectory.from_config(cfg)

        external = conn.in_transaction()
        try:
            start = MigrationContext.configure(conn).get_current_revision()
            if start is None:
                logger.info("Store is empty; nothing to downgrade")
                return []
            target = _resolve_downgrade_target(script, start, target)
            for revision in _downgrade_path(script, start, target):
                _guard_destructive(conn, revision, confirm_destructive)
        finally:
            if not external:
                conn.commit()

        logger.info("Downgrading schema from %s to %s", start, target)
        _run(command.downgrade, cfg, target, "downgrade")

    reverted = cfg.attributes["applied"]
    logger.info("Reverted %d revision(s): %s", len(reverted), ", ".join(reverted))
    return reverted


def _run(fn: Callable[[Config, str], None], cfg: Config, target: str, direction: str) -> None:
    try:
        fn(cfg, target)
    except DestructiveRollbackError:
        raise
    except Exception as exc:
        revision = _failed_revision(cfg, direction, target)
        logger.error("Schema %s failed at revision %s: %s", direction, revision, exc)
        raise MigrationError(revision, direction) from exc


def _downgrade_path(script: ScriptDirectory, start: str, target: str) -> list[Script]:
    try:
        return list(script.iterate_revisions(start, target))
    except (CommandError, RevisionError) as exc:
        raise MigrationError(None, "downgrade", f"Cannot downgrade from {start} to {target}: {exc}") from exc


def _resolve_downgrade_target(script: ScriptDirectory, start: str, target: str) -> str:
    if not (target.startswith("-") and target[1:].isdigit()):
        return target
    revision: str | None = start
    for _ in range(int(target[1:])):
        if revision is None:
            raise MigrationError(None, "downgrade", f"Cannot step {target} below base")
        revision = script.get_revision(revision).down_revision
    return revision or "base"


def _guard_destructive(conn: Connection, revision: Script, confirmed: bool) -> None:
    module = revision.module
    if not getattr(module, "destructive_downgrade", False):
        return
    rows = module.count_downgrade_losses(conn)
    if not rows:
        return
    if not confirmed:
        raise DestructiveRollbackError(revision.revision, rows)
    logger.warning(
        "Downgrading past %s deletes %d row(s); proceeding on operator confirmation",
        revision.revision,
        rows,
    )


def _failed_revision(cfg: Config, direction: str, target: str) -> str | None:
    """First revision on the planned path that did not complete."""
    if "starting_revision" not in cfg.attributes:
        return None
    start = cfg.attributes["starting_revision"]
    done = set(cfg.attributes["applied"])
    script = ScriptDirectory.from_config(cfg)
    try:
        if direction == "upgrade":
            path = list(reversed(list(script.iterate_revisions(target, start or "base"))))
        elif start is not None:
            path = list(script.iterate_revisions(start, target))
        else:
            path = []
    except (CommandError, RevisionError):
        return None
    return next((rev.revision for rev in path if rev.revision not in done), None)
