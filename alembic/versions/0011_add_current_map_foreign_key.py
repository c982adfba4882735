"""add game_sessions.current_map_id foreign key

Revision ID: 0011
Revises: 0010
Create Date: 2025-07-01 10:50:00.000000
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = '0011'
down_revision: Union[str, None] = '0010'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # SQLite cannot ALTER ADD CONSTRAINT; batch mode rebuilds the table there
    with op.batch_alter_table('game_sessions') as batch_op:
        batch_op.create_foreign_key(
            op.f('fk_game_sessions_current_map_id_maps'),
            'maps',
            ['current_map_id'],
            ['id'],
            ondelete='SET NULL',
        )


def downgrade() -> None:
    with op.batch_alter_table('game_sessions') as batch_op:
        batch_op.drop_constraint(op.f('fk_game_sessions_current_map_id_maps'), type_='foreignkey')
