"""create friendships, direct_messages, game_invitations

Revision ID: 0014
Revises: 0013
Create Date: 2025-07-22 11:00:00.000000
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = '0014'
down_revision: Union[str, None] = '0013'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'friendships',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('requester_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('receiver_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column(
            'status',
            sa.Enum(
                'pending', 'accepted', 'blocked',
                name='friendship_status', native_enum=False, create_constraint=True,
            ),
            server_default='pending',
            nullable=False,
        ),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        # Directional: (A, B) and (B, A) may both exist
        sa.UniqueConstraint('requester_id', 'receiver_id'),
        sa.CheckConstraint('requester_id != receiver_id', name='not_self'),
    )
    op.create_index('ix_friendships_requester_id_status', 'friendships', ['requester_id', 'status'])
    op.create_index('ix_friendships_receiver_id_status', 'friendships', ['receiver_id', 'status'])

    op.create_table(
        'direct_messages',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('sender_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('receiver_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('is_read', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('read_at', sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index(
        'ix_direct_messages_sender_id_receiver_id_created_at',
        'direct_messages',
        ['sender_id', 'receiver_id', 'created_at'],
    )
    op.create_index('ix_direct_messages_receiver_id_is_read', 'direct_messages', ['receiver_id', 'is_read'])

    op.create_table(
        'game_invitations',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('game_id', sa.Uuid(), sa.ForeignKey('game_sessions.id', ondelete='CASCADE'), nullable=False),
        sa.Column('inviter_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('invitee_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column(
            'status',
            sa.Enum(
                'pending', 'accepted', 'declined', 'expired',
                name='invitation_status', native_enum=False, create_constraint=True,
            ),
            server_default='pending',
            nullable=False,
        ),
        sa.Column('message', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('responded_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('expires_at', sa.DateTime(timezone=True), nullable=True),
        sa.UniqueConstraint('game_id', 'invitee_id'),
    )
    op.create_index('ix_game_invitations_invitee_id_status', 'game_invitations', ['invitee_id', 'status'])
    op.create_index('ix_game_invitations_game_id_status', 'game_invitations', ['game_id', 'status'])


def downgrade() -> None:
    op.drop_table('game_invitations')
    op.drop_table('direct_messages')
    op.drop_table('friendships')
