from logging.config import fileConfig

from sqlalchemy import engine_from_config, pool
from alembic import context

from dnd_game.infra.config import DevelopmentConnection, settings
from dnd_game.infra.migrate import migration_lock

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name, disable_existing_loggers=False)

# Use the app's database URL (single source of truth), converted to sync.
# configparser treats "%" as interpolation, so escape it for passwords.
if config.attributes.get("connection") is None:
    config.set_main_option("sqlalchemy.url", settings.database_url_sync.replace("%", "%%"))

from dnd_game.models.db_models import Base
target_metadata = Base.metadata


def _record_step(ctx, step, heads, run_args) -> None:
    config.attributes.setdefault("applied", []).append(step.up_revision_id)


def run_migrations_offline() -> None:
    url = config.get_main_option("sqlalchemy.url")
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        render_as_batch=True,
    )
    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection) -> None:
    # A caller that already holds a transaction owns commit/rollback.
    external = connection.in_transaction()

    context.configure(
        connection=connection,
        target_metadata=target_metadata,
        render_as_batch=True,
        transaction_per_migration=True,
        on_version_apply=_record_step,
    )

    with migration_lock(connection):
        config.attributes["starting_revision"] = context.get_context().get_current_revision()
        if not external:
            connection.commit()
        with context.begin_transaction():
            context.run_migrations()


def run_migrations_online() -> None:
    connection = config.attributes.get("connection")
    if connection is not None:
        do_run_migrations(connection)
        return

    if isinstance(settings.connection, DevelopmentConnection):
        settings.connection.filename.parent.mkdir(parents=True, exist_ok=True)

    # Foreign keys stay off here (the SQLite default): batch-mode table
    # rebuilds drop the old table, which would otherwise cascade to children.
    engine_kwargs = {"poolclass": pool.NullPool, **settings.connection.sync_engine_kwargs()}
    connectable = engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        **engine_kwargs,
    )
    with connectable.connect() as connection:
        do_run_migrations(connection)
    connectable.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
