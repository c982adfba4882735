"""create game_actions

Revision ID: 0006
Revises: 0005
Create Date: 2025-07-01 10:25:00.000000
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = '0006'
down_revision: Union[str, None] = '0005'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'game_actions',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('game_id', sa.Uuid(), sa.ForeignKey('game_sessions.id', ondelete='CASCADE'), nullable=False),
        sa.Column('player_id', sa.Uuid(), sa.ForeignKey('game_players.id', ondelete='CASCADE'), nullable=False),
        sa.Column(
            'type',
            sa.Enum(
                'attack', 'cast_spell', 'move', 'interact', 'dialogue', 'inventory',
                'skill_check', 'saving_throw',
                name='action_type', native_enum=False, create_constraint=True,
            ),
            nullable=False,
        ),
        sa.Column('description', sa.String(length=500), nullable=False),
        sa.Column('data', sa.JSON(), server_default='{}', nullable=False),
        sa.Column('resolved', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('result', sa.JSON(), nullable=True),
        sa.Column('timestamp', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('ai_processed', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('ai_response', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index('ix_game_actions_game_id', 'game_actions', ['game_id'])
    op.create_index('ix_game_actions_player_id', 'game_actions', ['player_id'])
    op.create_index('ix_game_actions_type', 'game_actions', ['type'])
    op.create_index('ix_game_actions_resolved', 'game_actions', ['resolved'])
    op.create_index('ix_game_actions_timestamp', 'game_actions', ['timestamp'])
    op.create_index('ix_game_actions_ai_processed', 'game_actions', ['ai_processed'])


def downgrade() -> None:
    op.drop_table('game_actions')
