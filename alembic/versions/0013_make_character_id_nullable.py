"""make game_players.character_id nullable

Observers and DMs can take a seat without a character.

Revision ID: 0013
Revises: 0012
Create Date: 2025-07-15 14:30:00.000000
"""
import logging
from typing import Sequence, Union

from alembic import context, op
import sqlalchemy as sa

from dnd_game.errors import DestructiveRollbackError


revision: str = '0013'
down_revision: Union[str, None] = '0012'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

# Downgrade deletes seats without a character; the runner asks before crossing it.
destructive_downgrade = True

logger = logging.getLogger(__name__)

_SEATS_WITHOUT_CHARACTER = 'SELECT id FROM game_players WHERE character_id IS NULL'


def count_downgrade_losses(connection: sa.Connection) -> int:
    """Rows of game_players the downgrade would delete."""
    return connection.execute(
        sa.text('SELECT COUNT(*) FROM game_players WHERE character_id IS NULL')
    ).scalar_one()


def upgrade() -> None:
    # SQLite: shadow table copy (create, copy, drop, rename). PostgreSQL: ALTER COLUMN.
    with op.batch_alter_table('game_players') as batch_op:
        batch_op.alter_column('character_id', existing_type=sa.Uuid(), nullable=True)


def _confirmed() -> bool:
    # Set by the runner, or `alembic downgrade -x confirm_destructive=true`
    if context.config.attributes.get('confirm_destructive'):
        return True
    x_args = context.get_x_argument(as_dictionary=True)
    return x_args.get('confirm_destructive', '').lower() == 'true'


def downgrade() -> None:
    # Recounted here, under the migration lock; rows may have appeared since the runner checked
    lost = count_downgrade_losses(op.get_bind())
    if lost and not _confirmed():
        raise DestructiveRollbackError(revision, lost)
    if lost:
        logger.warning('Deleting %d game_players row(s) without a character', lost)

    # Migrations run with SQLite foreign keys off, so the cascade is spelled out
    op.execute(
        'UPDATE dice_rolls SET related_action_id = NULL WHERE related_action_id IN '
        f'(SELECT id FROM game_actions WHERE player_id IN ({_SEATS_WITHOUT_CHARACTER}))'
    )
    op.execute(f'DELETE FROM dice_rolls WHERE player_id IN ({_SEATS_WITHOUT_CHARACTER})')
    op.execute(f'DELETE FROM game_actions WHERE player_id IN ({_SEATS_WITHOUT_CHARACTER})')
    op.execute('DELETE FROM game_players WHERE character_id IS NULL')

    with op.batch_alter_table('game_players') as batch_op:
        batch_op.alter_column('character_id', existing_type=sa.Uuid(), nullable=False)
