"""add user_posts.attached_game_id

Revision ID: 0016
Revises: 0015
Create Date: 2025-08-19 10:45:00.000000
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = '0016'
down_revision: Union[str, None] = '0015'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    with op.batch_alter_table('user_posts') as batch_op:
        batch_op.add_column(sa.Column('attached_game_id', sa.Uuid(), nullable=True))
        batch_op.create_foreign_key(
            op.f('fk_user_posts_attached_game_id_game_sessions'),
            'game_sessions',
            ['attached_game_id'],
            ['id'],
            ondelete='SET NULL',
        )
    op.create_index('ix_user_posts_attached_game_id', 'user_posts', ['attached_game_id'])


def downgrade() -> None:
    op.drop_index('ix_user_posts_attached_game_id', table_name='user_posts')
    with op.batch_alter_table('user_posts') as batch_op:
        batch_op.drop_constraint(op.f('fk_user_posts_attached_game_id_game_sessions'), type_='foreignkey')
        batch_op.drop_column('attached_game_id')
