"""create game_players

Revision ID: 0004
Revises: 0003
Create Date: 2025-07-01 10:15:00.000000
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = '0004'
down_revision: Union[str, None] = '0003'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'game_players',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('game_id', sa.Uuid(), sa.ForeignKey('game_sessions.id', ondelete='CASCADE'), nullable=False),
        sa.Column('user_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('character_id', sa.Uuid(), sa.ForeignKey('characters.id', ondelete='CASCADE'), nullable=False),
        sa.Column('is_online', sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column('joined_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('last_active_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column(
            'role',
            sa.Enum('player', 'co_dm', 'observer', name='player_role', native_enum=False, create_constraint=True),
            server_default='player',
            nullable=False,
        ),
        sa.Column('game_settings', sa.JSON(), server_default='{}', nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        # One seat per user per game
        sa.UniqueConstraint('game_id', 'user_id'),
    )
    op.create_index('ix_game_players_game_id', 'game_players', ['game_id'])
    op.create_index('ix_game_players_user_id', 'game_players', ['user_id'])
    op.create_index('ix_game_players_character_id', 'game_players', ['character_id'])
    op.create_index('ix_game_players_is_online', 'game_players', ['is_online'])
    op.create_index('ix_game_players_joined_at', 'game_players', ['joined_at'])


def downgrade() -> None:
    op.drop_table('game_players')
