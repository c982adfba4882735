"""create game_sessions

Revision ID: 0003
Revises: 0002
Create Date: 2025-07-01 10:10:00.000000
"""
import json
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = '0003'
down_revision: Union[str, None] = '0002'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

DEFAULT_AI_SETTINGS = {
    'difficultyLevel': 'medium',
    'aiPersonality': 'helpful',
    'autoGeneration': True,
    'voiceEnabled': False,
}


def upgrade() -> None:
    op.create_table(
        'game_sessions',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('dm_user_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='SET NULL'), nullable=True),
        sa.Column('max_players', sa.Integer(), server_default=sa.text('6'), nullable=False),
        sa.Column(
            'status',
            sa.Enum(
                'waiting', 'active', 'paused', 'completed',
                name='game_status', native_enum=False, create_constraint=True,
            ),
            server_default='waiting',
            nullable=False,
        ),
        # maps does not exist yet; the foreign key is added in 0011
        sa.Column('current_map_id', sa.Uuid(), nullable=True),
        sa.Column('game_state', sa.JSON(), server_default='{}', nullable=False),
        sa.Column('is_public', sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=True),
        sa.Column('session_duration', sa.Integer(), nullable=True),
        sa.Column('ai_settings', sa.JSON(), server_default=json.dumps(DEFAULT_AI_SETTINGS), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('last_active_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index('ix_game_sessions_dm_user_id', 'game_sessions', ['dm_user_id'])
    op.create_index('ix_game_sessions_status', 'game_sessions', ['status'])
    op.create_index('ix_game_sessions_is_public', 'game_sessions', ['is_public'])
    op.create_index('ix_game_sessions_last_active_at', 'game_sessions', ['last_active_at'])


def downgrade() -> None:
    op.drop_table('game_sessions')
