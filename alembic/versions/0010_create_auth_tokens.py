"""create auth_tokens

Revision ID: 0010
Revises: 0009
Create Date: 2025-07-01 10:45:00.000000
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = '0010'
down_revision: Union[str, None] = '0009'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'auth_tokens',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('user_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('token', sa.String(length=500), nullable=False),
        sa.Column(
            'type',
            sa.Enum(
                'access', 'refresh', 'reset_password', 'verify_email',
                name='token_type', native_enum=False, create_constraint=True,
            ),
            nullable=False,
        ),
        sa.Column('expires_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('is_revoked', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('revoked_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('device_info', sa.String(length=500), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    # Lookup index only; uniqueness of tokens is not enforced
    op.create_index('ix_auth_tokens_user_id', 'auth_tokens', ['user_id'])
    op.create_index('ix_auth_tokens_token', 'auth_tokens', ['token'])
    op.create_index('ix_auth_tokens_type', 'auth_tokens', ['type'])
    op.create_index('ix_auth_tokens_expires_at', 'auth_tokens', ['expires_at'])
    op.create_index('ix_auth_tokens_is_revoked', 'auth_tokens', ['is_revoked'])


def downgrade() -> None:
    op.drop_table('auth_tokens')
