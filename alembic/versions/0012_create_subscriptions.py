"""create subscription tables

Revision ID: 0012
Revises: 0011
Create Date: 2025-07-08 09:00:00.000000
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = '0012'
down_revision: Union[str, None] = '0011'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'subscription_plans',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('slug', sa.String(length=50), nullable=False, unique=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('price', sa.Numeric(10, 2), nullable=False),
        sa.Column('currency', sa.String(length=3), server_default='USD'),
        sa.Column(
            'billing_period',
            sa.Enum('monthly', 'yearly', name='billing_period', native_enum=False, create_constraint=True),
            server_default='monthly',
        ),
        # NULL limits mean unlimited
        sa.Column('max_characters', sa.Integer(), nullable=True),
        sa.Column('max_simultaneous_games', sa.Integer(), nullable=True),
        sa.Column('max_players_per_game', sa.Integer(), nullable=True),
        sa.Column('ai_dm_access', sa.Boolean(), server_default=sa.false()),
        sa.Column('ai_map_generation', sa.Boolean(), server_default=sa.false()),
        sa.Column('premium_character_options', sa.Boolean(), server_default=sa.false()),
        sa.Column('voice_chat', sa.Boolean(), server_default=sa.false()),
        sa.Column('custom_campaigns', sa.Boolean(), server_default=sa.false()),
        sa.Column('priority_support', sa.Boolean(), server_default=sa.false()),
        sa.Column('storage_gb', sa.Integer(), server_default=sa.text('1')),
        sa.Column('features', sa.JSON(), nullable=True),
        sa.Column('is_active', sa.Boolean(), server_default=sa.true()),
        sa.Column('sort_order', sa.Integer(), server_default=sa.text('0')),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index(
        'ix_subscription_plans_is_active_sort_order', 'subscription_plans', ['is_active', 'sort_order']
    )

    op.create_table(
        'user_subscriptions',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('user_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        # A plan with subscribers cannot be deleted
        sa.Column(
            'plan_id', sa.Uuid(), sa.ForeignKey('subscription_plans.id', ondelete='RESTRICT'), nullable=False
        ),
        sa.Column('stripe_subscription_id', sa.String(length=100), nullable=True),
        sa.Column('stripe_customer_id', sa.String(length=100), nullable=True),
        sa.Column(
            'status',
            sa.Enum(
                'active', 'canceled', 'past_due', 'unpaid', 'incomplete',
                name='subscription_status', native_enum=False, create_constraint=True,
            ),
            server_default='active',
        ),
        sa.Column('current_period_start', sa.DateTime(timezone=True), nullable=True),
        sa.Column('current_period_end', sa.DateTime(timezone=True), nullable=True),
        sa.Column('trial_start', sa.DateTime(timezone=True), nullable=True),
        sa.Column('trial_end', sa.DateTime(timezone=True), nullable=True),
        sa.Column('canceled_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('ended_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('amount', sa.Numeric(10, 2), nullable=False),
        sa.Column('currency', sa.String(length=3), server_default='USD'),
        sa.Column('billing_period', sa.String(length=20), server_default='monthly'),
        sa.Column('metadata', sa.JSON(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index('ix_user_subscriptions_user_id_status', 'user_subscriptions', ['user_id', 'status'])
    op.create_index(
        'ix_user_subscriptions_stripe_subscription_id', 'user_subscriptions', ['stripe_subscription_id']
    )
    op.create_index('ix_user_subscriptions_current_period_end', 'user_subscriptions', ['current_period_end'])

    op.create_table(
        'subscription_usage',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('user_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column(
            'subscription_id',
            sa.Uuid(),
            sa.ForeignKey('user_subscriptions.id', ondelete='CASCADE'),
            nullable=False,
        ),
        sa.Column('metric', sa.String(length=50), nullable=False),
        sa.Column('count', sa.Integer(), server_default=sa.text('0')),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('details', sa.JSON(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        # One counter per metric per day
        sa.UniqueConstraint('user_id', 'subscription_id', 'metric', 'date'),
    )
    op.create_index('ix_subscription_usage_date_metric', 'subscription_usage', ['date', 'metric'])

    op.create_table(
        'payment_history',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('user_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column(
            'subscription_id',
            sa.Uuid(),
            sa.ForeignKey('user_subscriptions.id', ondelete='CASCADE'),
            nullable=False,
        ),
        sa.Column('stripe_payment_intent_id', sa.String(length=100), nullable=True),
        sa.Column('stripe_invoice_id', sa.String(length=100), nullable=True),
        sa.Column('amount', sa.Numeric(10, 2), nullable=False),
        sa.Column('currency', sa.String(length=3), server_default='USD'),
        sa.Column(
            'status',
            sa.Enum(
                'succeeded', 'pending', 'failed', 'canceled', 'refunded',
                name='payment_status', native_enum=False, create_constraint=True,
            ),
            nullable=False,
        ),
        sa.Column('payment_method', sa.String(length=50), nullable=True),
        sa.Column('failure_reason', sa.Text(), nullable=True),
        sa.Column('metadata', sa.JSON(), nullable=True),
        sa.Column('processed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index('ix_payment_history_user_id_status', 'payment_history', ['user_id', 'status'])
    op.create_index(
        'ix_payment_history_stripe_payment_intent_id', 'payment_history', ['stripe_payment_intent_id']
    )
    op.create_index('ix_payment_history_processed_at', 'payment_history', ['processed_at'])


def downgrade() -> None:
    op.drop_table('payment_history')
    op.drop_table('subscription_usage')
    op.drop_table('user_subscriptions')
    op.drop_table('subscription_plans')
