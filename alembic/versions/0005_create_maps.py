"""create maps

Revision ID: 0005
Revises: 0004
Create Date: 2025-07-01 10:20:00.000000
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = '0005'
down_revision: Union[str, None] = '0004'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'maps',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column(
            'type',
            sa.Enum(
                'dungeon', 'overworld', 'building', 'cave', 'forest', 'city',
                name='map_type', native_enum=False, create_constraint=True,
            ),
            nullable=False,
        ),
        sa.Column('width', sa.Integer(), nullable=False),
        sa.Column('height', sa.Integer(), nullable=False),
        sa.Column('theme', sa.String(length=100), nullable=False),
        sa.Column(
            'difficulty',
            sa.Enum(
                'easy', 'medium', 'hard', 'deadly',
                name='map_difficulty', native_enum=False, create_constraint=True,
            ),
            nullable=False,
        ),
        sa.Column('recommended_level', sa.Integer(), nullable=False),

        # Layout
        sa.Column('tiles', sa.JSON(), nullable=False),
        sa.Column('rooms', sa.JSON(), server_default='[]', nullable=False),
        sa.Column('npcs', sa.JSON(), server_default='[]', nullable=False),
        sa.Column('starting_position', sa.JSON(), nullable=False),

        # Generation
        sa.Column('ai_generation_prompt', sa.Text(), nullable=True),
        sa.Column('ai_metadata', sa.JSON(), server_default='{}', nullable=False),

        sa.Column('is_public', sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column('created_by', sa.Uuid(), sa.ForeignKey('users.id', ondelete='SET NULL'), nullable=True),
        sa.Column('thumbnail_url', sa.String(length=255), nullable=True),
        sa.Column('full_image_url', sa.String(length=255), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index('ix_maps_type', 'maps', ['type'])
    op.create_index('ix_maps_difficulty', 'maps', ['difficulty'])
    op.create_index('ix_maps_recommended_level', 'maps', ['recommended_level'])
    op.create_index('ix_maps_is_public', 'maps', ['is_public'])
    op.create_index('ix_maps_created_by', 'maps', ['created_by'])
    op.create_index('ix_maps_theme', 'maps', ['theme'])


def downgrade() -> None:
    op.drop_table('maps')
