"""create characters

Revision ID: 0002
Revises: 0001
Create Date: 2025-07-01 10:05:00.000000
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = '0002'
down_revision: Union[str, None] = '0001'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'characters',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('user_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column(
            'class',
            sa.Enum(
                'barbarian', 'bard', 'cleric', 'druid', 'fighter', 'monk',
                'paladin', 'ranger', 'rogue', 'sorcerer', 'warlock', 'wizard',
                name='character_class', native_enum=False, create_constraint=True,
            ),
            nullable=False,
        ),
        sa.Column(
            'race',
            sa.Enum(
                'human', 'elf', 'dwarf', 'halfling', 'dragonborn', 'gnome',
                'half-elf', 'half-orc', 'tiefling',
                name='character_race', native_enum=False, create_constraint=True,
            ),
            nullable=False,
        ),
        sa.Column('level', sa.Integer(), server_default=sa.text('1'), nullable=False),
        sa.Column('experience', sa.Integer(), server_default=sa.text('0'), nullable=False),

        # Hit points
        sa.Column('hp_current', sa.Integer(), nullable=False),
        sa.Column('hp_maximum', sa.Integer(), nullable=False),
        sa.Column('hp_temporary', sa.Integer(), server_default=sa.text('0'), nullable=False),

        # Combat stats
        sa.Column('armor_class', sa.Integer(), nullable=False),
        sa.Column('proficiency_bonus', sa.Integer(), nullable=False),
        sa.Column('speed', sa.Integer(), nullable=False),

        # Ability scores
        sa.Column('strength', sa.Integer(), nullable=False),
        sa.Column('dexterity', sa.Integer(), nullable=False),
        sa.Column('constitution', sa.Integer(), nullable=False),
        sa.Column('intelligence', sa.Integer(), nullable=False),
        sa.Column('wisdom', sa.Integer(), nullable=False),
        sa.Column('charisma', sa.Integer(), nullable=False),

        sa.Column('skills', sa.JSON(), server_default='{}', nullable=False),
        sa.Column('inventory', sa.JSON(), server_default='[]', nullable=False),
        sa.Column('spells', sa.JSON(), server_default='[]', nullable=False),

        # Background and roleplay
        sa.Column('background', sa.String(length=100), nullable=False),
        sa.Column('alignment', sa.String(length=50), nullable=False),
        sa.Column('personality_traits', sa.Text(), nullable=True),
        sa.Column('ideals', sa.Text(), nullable=True),
        sa.Column('bonds', sa.Text(), nullable=True),
        sa.Column('flaws', sa.Text(), nullable=True),
        sa.Column('avatar_url', sa.String(length=255), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index('ix_characters_user_id', 'characters', ['user_id'])
    op.create_index('ix_characters_class', 'characters', ['class'])
    op.create_index('ix_characters_race', 'characters', ['race'])
    op.create_index('ix_characters_level', 'characters', ['level'])


def downgrade() -> None:
    op.drop_table('characters')
