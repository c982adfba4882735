"""create game_events

Revision ID: 0007
Revises: 0006
Create Date: 2025-07-01 10:30:00.000000
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = '0007'
down_revision: Union[str, None] = '0006'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'game_events',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('game_id', sa.Uuid(), sa.ForeignKey('game_sessions.id', ondelete='CASCADE'), nullable=False),
        sa.Column(
            'type',
            sa.Enum(
                'combat_start', 'combat_end', 'level_up', 'item_found', 'npc_interaction',
                'story_event', 'player_death', 'quest_complete',
                name='event_type', native_enum=False, create_constraint=True,
            ),
            nullable=False,
        ),
        sa.Column('description', sa.String(length=500), nullable=False),
        sa.Column('data', sa.JSON(), server_default='{}', nullable=False),
        sa.Column('timestamp', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('players_involved', sa.JSON(), server_default='[]', nullable=False),
        sa.Column('is_public', sa.Boolean(), server_default=sa.true(), nullable=False),
        # Only consulted for private events
        sa.Column('visible_to_players', sa.JSON(), server_default='[]', nullable=False),
        sa.Column('ai_narrative', sa.Text(), nullable=True),
        sa.Column('ai_metadata', sa.JSON(), server_default='{}', nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index('ix_game_events_game_id', 'game_events', ['game_id'])
    op.create_index('ix_game_events_type', 'game_events', ['type'])
    op.create_index('ix_game_events_timestamp', 'game_events', ['timestamp'])
    op.create_index('ix_game_events_is_public', 'game_events', ['is_public'])


def downgrade() -> None:
    op.drop_table('game_events')
