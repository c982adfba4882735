"""``dnd-db`` command line: schema migrations and demo data."""

from __future__ import annotations

import asyncio
import functools
import logging

import click
from sqlalchemy.ext.asyncio import async_sessionmaker

from dnd_game.domain import seed as seed_mod
from dnd_game.errors import DatabaseError
from dnd_game.infra import catalog, db, migrate
from dnd_game.infra.config import ConnectionConfig, resolve_connection, settings
from dnd_game.infra.log import setup_logging

logger = logging.getLogger(__name__)


def _db_errors(fn):
    """Report storage-layer failures as a one-line error and exit code 1."""
    @functools.wraps(fn)
    def wrapper(*args, **kwargs):
        try:
            return fn(*args, **kwargs)
        except DatabaseError as exc:
            raise click.ClickException(str(exc)) from exc
    return wrapper


def _connection(ctx: click.Context) -> ConnectionConfig:
    return resolve_connection(ctx.obj["environment"])


@click.group()
@click.option(
    "--env", "environment", default=None,
    help="development, test or production. Defaults to APP_ENV.",
)
@click.option("--log-level", default=None, help="Overrides LOG_LEVEL.")
@click.pass_context
def cli(ctx: click.Context, environment: str | None, log_level: str | None) -> None:
    """Manage the game database."""
    setup_logging(log_level)
    ctx.obj = {"environment": environment or settings.app_env}


@cli.command()
@click.argument("revision", default="head")
@click.pass_context
@_db_errors
def upgrade(ctx: click.Context, revision: str) -> None:
    """Apply revisions up to REVISION (default: head)."""
    applied = migrate.upgrade(revision, conn_config=_connection(ctx))
    if not applied:
        click.echo(f"Already at {revision}")
    for rev in applied:
        click.echo(f"Applied {rev}")


@cli.command()
@click.argument("revision")
@click.option("--yes", is_flag=True, help="Confirm rollbacks that delete rows.")
@click.pass_context
@_db_errors
def downgrade(ctx: click.Context, revision: str, yes: bool) -> None:
    """Revert revisions down to REVISION (an id, 'base' or '-N')."""
    reverted = migrate.downgrade(
        revision, conn_config=_connection(ctx), confirm_destructive=yes
    )
    if not reverted:
        click.echo("Nothing to revert")
    for rev in reverted:
        click.echo(f"Reverted {rev}")


@cli.command()
@click.pass_context
@_db_errors
def current(ctx: click.Context) -> None:
    """Print the revision the store is at."""
    revision = migrate.current(conn_config=_connection(ctx))
    click.echo(revision or "(empty)")


@cli.command()
def history() -> None:
    """List catalog revisions, oldest first."""
    for entry in catalog.load_catalog():
        click.echo(str(entry))


@cli.command()
def check() -> None:
    """Validate catalog ordering and revision modules."""
    problems = catalog.validate_catalog()
    for problem in problems:
        click.echo(problem, err=True)
    if problems:
        raise click.ClickException(f"{len(problems)} catalog problem(s)")
    entries = catalog.load_catalog()
    click.echo(f"Catalog OK: {len(entries)} revisions, head {entries[-1].revision}")


async def _seed(conn: ConnectionConfig, force: bool) -> dict[str, int] | None:
    engine = db.create_engine_for(conn)
    try:
        await db.run_migrations(engine, conn)
        async with async_sessionmaker(engine, expire_on_commit=False)() as session:
            if not force and await seed_mod.has_users(session):
                return None
            return await seed_mod.seed(session)
    finally:
        await engine.dispose()


@cli.command()
@click.option("--force", is_flag=True, help="Reseed even if users exist (wipes game data).")
@click.pass_context
@_db_errors
def seed(ctx: click.Context, force: bool) -> None:
    """Migrate to head and load the demo data set."""
    conn = _connection(ctx)
    if conn.environment == "production" and not force:
        raise click.ClickException("Refusing to seed production without --force")
    summary = asyncio.run(_seed(conn, force))
    if summary is None:
        click.echo("Users already exist; skipping (use --force to reseed)")
        return
    click.echo("Seeded " + ", ".join(f"{count} {name}" for name, count in summary.items()))


@cli.command("config")
@click.pass_context
@_db_errors
def show_config(ctx: click.Context) -> None:
    """Show the resolved connection (password hidden)."""
    conn = _connection(ctx)
    click.echo(f"environment: {conn.environment}")
    click.echo(f"url:         {conn.url.render_as_string(hide_password=True)}")
    click.echo(f"sync url:    {conn.sync_url.render_as_string(hide_password=True)}")
    for key, value in conn.engine_kwargs().items():
        if key == "poolclass":
            value = value.__name__
        click.echo(f"{key + ':':<13}{value}")
