"""create chat_messages

Revision ID: 0009
Revises: 0008
Create Date: 2025-07-01 10:40:00.000000
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = '0009'
down_revision: Union[str, None] = '0008'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'chat_messages',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('game_id', sa.Uuid(), sa.ForeignKey('game_sessions.id', ondelete='CASCADE'), nullable=False),
        sa.Column('user_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column(
            'type',
            sa.Enum(
                'player', 'dm', 'system', 'ai', 'whisper', 'ooc',
                name='message_type', native_enum=False, create_constraint=True,
            ),
            server_default='player',
            nullable=False,
        ),
        sa.Column('timestamp', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('metadata', sa.JSON(), server_default='{}', nullable=False),

        # Soft delete
        sa.Column('is_deleted', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('deleted_at', sa.DateTime(timezone=True), nullable=True),

        sa.Column(
            'whisper_to_user_id',
            sa.Uuid(),
            sa.ForeignKey('users.id', ondelete='CASCADE'),
            nullable=True,
        ),
        sa.Column('is_private', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('trigger_ai_response', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('ai_response', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index('ix_chat_messages_game_id', 'chat_messages', ['game_id'])
    op.create_index('ix_chat_messages_user_id', 'chat_messages', ['user_id'])
    op.create_index('ix_chat_messages_type', 'chat_messages', ['type'])
    op.create_index('ix_chat_messages_timestamp', 'chat_messages', ['timestamp'])
    op.create_index('ix_chat_messages_is_deleted', 'chat_messages', ['is_deleted'])
    op.create_index('ix_chat_messages_whisper_to_user_id', 'chat_messages', ['whisper_to_user_id'])
    op.create_index('ix_chat_messages_is_private', 'chat_messages', ['is_private'])


def downgrade() -> None:
    op.drop_table('chat_messages')
