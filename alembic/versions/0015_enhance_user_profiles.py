"""user profile columns, posts, notifications, likes, comments

Revision ID: 0015
Revises: 0014
Create Date: 2025-08-05 16:20:00.000000
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = '0015'
down_revision: Union[str, None] = '0014'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    with op.batch_alter_table('users') as batch_op:
        batch_op.add_column(sa.Column('bio', sa.Text(), nullable=True))
        batch_op.add_column(sa.Column('avatar_url', sa.String(length=255), nullable=True))
        batch_op.add_column(sa.Column('banner_url', sa.String(length=255), nullable=True))
        batch_op.add_column(sa.Column('location', sa.String(length=100), nullable=True))
        batch_op.add_column(sa.Column('interests', sa.JSON(), server_default='[]', nullable=False))
        batch_op.add_column(sa.Column('social_links', sa.JSON(), server_default='{}', nullable=False))
        # Constraint is added by name below so downgrade can drop it before the column
        batch_op.add_column(
            sa.Column(
                'privacy_level',
                sa.Enum(
                    'public', 'friends', 'private',
                    name='privacy_level', native_enum=False, create_constraint=False,
                ),
                server_default='public',
                nullable=False,
            )
        )
        batch_op.add_column(sa.Column('profile_updated_at', sa.DateTime(timezone=True), nullable=True))
        batch_op.create_check_constraint(
            op.f('ck_users_privacy_level'),
            "privacy_level IN ('public', 'friends', 'private')",
        )

    op.create_table(
        'user_posts',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('user_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('media_urls', sa.JSON(), server_default='[]', nullable=False),
        sa.Column(
            'post_type',
            sa.Enum(
                'text', 'achievement', 'game_highlight', 'character_showcase',
                name='post_type', native_enum=False, create_constraint=True,
            ),
            server_default='text',
            nullable=False,
        ),
        sa.Column('metadata', sa.JSON(), server_default='{}', nullable=False),
        sa.Column('is_public', sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column('likes_count', sa.Integer(), server_default=sa.text('0'), nullable=False),
        sa.Column('comments_count', sa.Integer(), server_default=sa.text('0'), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index('ix_user_posts_user_id_created_at', 'user_posts', ['user_id', 'created_at'])
    op.create_index('ix_user_posts_post_type_is_public', 'user_posts', ['post_type', 'is_public'])
    op.create_index('ix_user_posts_created_at', 'user_posts', ['created_at'])

    op.create_table(
        'notifications',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('user_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column(
            'type',
            sa.Enum(
                'friend_request', 'friend_accepted', 'message_received', 'game_invitation',
                'game_started', 'post_liked', 'post_commented', 'achievement_unlocked',
                name='notification_type', native_enum=False, create_constraint=True,
            ),
            nullable=False,
        ),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('data', sa.JSON(), server_default='{}', nullable=False),
        sa.Column('is_read', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('read_at', sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index('ix_notifications_user_id_is_read', 'notifications', ['user_id', 'is_read'])
    op.create_index('ix_notifications_user_id_created_at', 'notifications', ['user_id', 'created_at'])
    op.create_index('ix_notifications_type', 'notifications', ['type'])

    op.create_table(
        'post_likes',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('post_id', sa.Uuid(), sa.ForeignKey('user_posts.id', ondelete='CASCADE'), nullable=False),
        sa.Column('user_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        # One like per user per post
        sa.UniqueConstraint('post_id', 'user_id'),
    )
    op.create_index('ix_post_likes_post_id', 'post_likes', ['post_id'])
    op.create_index('ix_post_likes_user_id', 'post_likes', ['user_id'])

    op.create_table(
        'post_comments',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('post_id', sa.Uuid(), sa.ForeignKey('user_posts.id', ondelete='CASCADE'), nullable=False),
        sa.Column('user_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index('ix_post_comments_post_id_created_at', 'post_comments', ['post_id', 'created_at'])
    op.create_index('ix_post_comments_user_id', 'post_comments', ['user_id'])


def downgrade() -> None:
    op.drop_table('post_comments')
    op.drop_table('post_likes')
    op.drop_table('notifications')
    op.drop_table('user_posts')

    with op.batch_alter_table('users') as batch_op:
        batch_op.drop_constraint(op.f('ck_users_privacy_level'), type_='check')
        batch_op.drop_column('profile_updated_at')
        batch_op.drop_column('privacy_level')
        batch_op.drop_column('social_links')
        batch_op.drop_column('interests')
        batch_op.drop_column('location')
        batch_op.drop_column('banner_url')
        batch_op.drop_column('avatar_url')
        batch_op.drop_column('bio')
