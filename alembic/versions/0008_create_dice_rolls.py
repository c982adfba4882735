"""create dice_rolls

Revision ID: 0008
Revises: 0007
Create Date: 2025-07-01 10:35:00.000000
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = '0008'
down_revision: Union[str, None] = '0007'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'dice_rolls',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('game_id', sa.Uuid(), sa.ForeignKey('game_sessions.id', ondelete='CASCADE'), nullable=False),
        sa.Column('player_id', sa.Uuid(), sa.ForeignKey('game_players.id', ondelete='CASCADE'), nullable=False),
        sa.Column('type', sa.String(length=50), nullable=False),
        sa.Column('result', sa.Integer(), nullable=False),
        sa.Column('rolls', sa.JSON(), nullable=False),
        sa.Column('modifier', sa.Integer(), server_default=sa.text('0'), nullable=False),
        sa.Column('description', sa.String(length=200), nullable=False),
        sa.Column('timestamp', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('context', sa.String(length=100), nullable=True),
        sa.Column(
            'related_action_id',
            sa.Uuid(),
            sa.ForeignKey('game_actions.id', ondelete='SET NULL'),
            nullable=True,
        ),
        sa.Column('is_critical', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('has_advantage', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('has_disadvantage', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index('ix_dice_rolls_game_id', 'dice_rolls', ['game_id'])
    op.create_index('ix_dice_rolls_player_id', 'dice_rolls', ['player_id'])
    op.create_index('ix_dice_rolls_type', 'dice_rolls', ['type'])
    op.create_index('ix_dice_rolls_timestamp', 'dice_rolls', ['timestamp'])
    op.create_index('ix_dice_rolls_context', 'dice_rolls', ['context'])
    op.create_index('ix_dice_rolls_is_critical', 'dice_rolls', ['is_critical'])
    op.create_index('ix_dice_rolls_related_action_id', 'dice_rolls', ['related_action_id'])


def downgrade() -> None:
    op.drop_table('dice_rolls')
