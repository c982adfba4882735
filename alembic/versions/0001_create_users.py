"""create users

Revision ID: 0001
Revises:
Create Date: 2025-07-01 10:00:00.000000
"""
import json
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = '0001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

DEFAULT_PREFERENCES = {
    'theme': 'dark',
    'notifications': True,
    'soundEnabled': True,
    'autoRollDice': False,
    'showCombatAnimations': True,
}
DEFAULT_STATS = {
    'gamesPlayed': 0,
    'totalPlayTime': 0,
    'charactersCreated': 0,
    'achievementsUnlocked': [],
}


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('email', sa.String(length=255), nullable=False, unique=True),
        sa.Column('username', sa.String(length=50), nullable=False, unique=True),
        sa.Column('display_name', sa.String(length=100), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column(
            'role',
            sa.Enum('player', 'dm', 'admin', name='user_role', native_enum=False, create_constraint=True),
            server_default='player',
            nullable=False,
        ),
        sa.Column('is_verified', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('is_online', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('last_login_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('preferences', sa.JSON(), server_default=json.dumps(DEFAULT_PREFERENCES), nullable=False),
        sa.Column('stats', sa.JSON(), server_default=json.dumps(DEFAULT_STATS), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index('ix_users_email', 'users', ['email'])
    op.create_index('ix_users_username', 'users', ['username'])
    op.create_index('ix_users_is_online', 'users', ['is_online'])


def downgrade() -> None:
    op.drop_table('users')
