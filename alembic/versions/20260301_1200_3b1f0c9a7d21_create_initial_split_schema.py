"""Create initial split schema

Revision ID: 3b1f0c9a7d21
Revises:
Create Date: 2026-03-01 12:00:00.000000+00:00

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '3b1f0c9a7d21'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema with constraints and indexes."""

    # =================================================================
    # TABLE: users
    # =================================================================
    op.create_table(
        'users',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('wallet_address', sa.String(length=42), nullable=False),
        sa.Column('display_name', sa.String(length=100), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('username', sa.String(length=50), nullable=True),
        sa.Column('avatar_url', sa.Text(), nullable=True),
        sa.Column('total_splits_created', sa.Integer(), nullable=False),
        sa.Column('total_splits_joined', sa.Integer(), nullable=False),
        sa.Column('total_amount_split', sa.DECIMAL(20, 6), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.Column('last_active_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint(
            "wallet_address ~ '^0x[0-9a-f]{40}$'",
            name='valid_wallet_address'
        ),
        sa.CheckConstraint(
            'total_splits_created >= 0 AND total_splits_joined >= 0',
            name='non_negative_split_counters'
        )
    )
    op.create_index(
        op.f('ix_users_wallet_address'), 'users', ['wallet_address'], unique=True
    )
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=False)
    op.create_index(op.f('ix_users_username'), 'users', ['username'], unique=False)
    op.create_index(
        op.f('ix_users_total_splits_created'),
        'users',
        ['total_splits_created'],
        unique=False
    )
    op.create_index(
        op.f('ix_users_total_amount_split'),
        'users',
        ['total_amount_split'],
        unique=False
    )
    op.create_index(
        op.f('ix_users_last_active_at'), 'users', ['last_active_at'], unique=False
    )

    # =================================================================
    # TABLE: splits
    # =================================================================
    op.create_table(
        'splits',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('split_id', sa.Integer(), nullable=False),
        sa.Column('contract_address', sa.String(length=42), nullable=False),
        sa.Column('tx_hash', sa.String(length=66), nullable=False),
        sa.Column('block_number', sa.BigInteger(), nullable=True),
        sa.Column('is_confirmed', sa.Boolean(), nullable=False),
        sa.Column('creator_address', sa.String(length=42), nullable=False),
        sa.Column('description', sa.String(length=500), nullable=False),
        sa.Column('total_amount', sa.DECIMAL(20, 6), nullable=False),
        sa.Column('currency', sa.String(length=10), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('is_completed', sa.Boolean(), nullable=True),
        sa.Column('is_cancelled', sa.Boolean(), nullable=True),
        sa.Column(
            'participants',
            postgresql.JSONB(astext_type=sa.Text()),
            nullable=False
        ),
        sa.Column('category', sa.String(length=20), nullable=True),
        sa.Column('note', sa.Text(), nullable=True),
        sa.Column('image_url', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.Column('completed_at', sa.DateTime(), nullable=True),
        sa.Column('cancelled_at', sa.DateTime(), nullable=True),
        sa.Column('expires_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint('split_id > 0', name='positive_split_id'),
        sa.CheckConstraint('total_amount >= 0.01', name='min_total_amount'),
        sa.CheckConstraint(
            "status IN ('pending', 'active', 'completed', 'cancelled')",
            name='valid_split_status'
        )
    )
    op.create_index(op.f('ix_splits_split_id'), 'splits', ['split_id'], unique=True)
    op.create_index(op.f('ix_splits_tx_hash'), 'splits', ['tx_hash'], unique=True)
    op.create_index(
        op.f('ix_splits_contract_address'),
        'splits',
        ['contract_address'],
        unique=False
    )
    op.create_index(
        op.f('ix_splits_is_confirmed'), 'splits', ['is_confirmed'], unique=False
    )
    op.create_index(
        op.f('ix_splits_creator_address'),
        'splits',
        ['creator_address'],
        unique=False
    )
    op.create_index(op.f('ix_splits_status'), 'splits', ['status'], unique=False)
    op.create_index(op.f('ix_splits_category'), 'splits', ['category'], unique=False)
    op.create_index(
        op.f('ix_splits_created_at'), 'splits', ['created_at'], unique=False
    )
    op.create_index(
        op.f('ix_splits_expires_at'), 'splits', ['expires_at'], unique=False
    )
    # Composite indexes for listing queries
    op.create_index(
        'ix_splits_creator_created',
        'splits',
        ['creator_address', 'created_at'],
        unique=False
    )
    op.create_index(
        'ix_splits_status_created',
        'splits',
        ['status', 'created_at'],
        unique=False
    )

    # =================================================================
    # TABLE: split_participants
    # =================================================================
    op.create_table(
        'split_participants',
        sa.Column('split_pk', sa.Uuid(), nullable=False),
        sa.Column('wallet_address', sa.String(length=42), nullable=False),
        sa.ForeignKeyConstraint(['split_pk'], ['splits.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('split_pk', 'wallet_address')
    )
    op.create_index(
        op.f('ix_split_participants_wallet_address'),
        'split_participants',
        ['wallet_address'],
        unique=False
    )

    # =================================================================
    # TABLE: transaction_logs
    # =================================================================
    op.create_table(
        'transaction_logs',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('split_id', sa.Uuid(), nullable=False),
        sa.Column('wallet_address', sa.String(length=42), nullable=False),
        sa.Column('tx_hash', sa.String(length=66), nullable=False),
        sa.Column('block_number', sa.BigInteger(), nullable=True),
        sa.Column('block_timestamp', sa.DateTime(), nullable=True),
        sa.Column('type', sa.String(length=20), nullable=False),
        sa.Column('amount', sa.DECIMAL(20, 6), nullable=False),
        sa.Column('gas_used', sa.BigInteger(), nullable=True),
        sa.Column('gas_price', sa.BigInteger(), nullable=True),
        sa.Column('gas_cost', sa.DECIMAL(38, 18), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('error_message', sa.Text(), nullable=True),
        sa.Column('confirmations', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['split_id'], ['splits.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint(
            "type IN ('payment', 'refund', 'completion', 'creation')",
            name='valid_transaction_type'
        ),
        sa.CheckConstraint(
            "status IN ('pending', 'success', 'failed', 'reverted')",
            name='valid_transaction_status'
        ),
        sa.CheckConstraint('amount >= 0', name='non_negative_amount')
    )
    op.create_index(
        op.f('ix_transaction_logs_split_id'),
        'transaction_logs',
        ['split_id'],
        unique=False
    )
    op.create_index(
        op.f('ix_transaction_logs_wallet_address'),
        'transaction_logs',
        ['wallet_address'],
        unique=False
    )
    op.create_index(
        op.f('ix_transaction_logs_tx_hash'),
        'transaction_logs',
        ['tx_hash'],
        unique=True
    )
    op.create_index(
        op.f('ix_transaction_logs_block_number'),
        'transaction_logs',
        ['block_number'],
        unique=False
    )
    op.create_index(
        op.f('ix_transaction_logs_type'), 'transaction_logs', ['type'], unique=False
    )
    op.create_index(
        op.f('ix_transaction_logs_status'),
        'transaction_logs',
        ['status'],
        unique=False
    )
    op.create_index(
        op.f('ix_transaction_logs_confirmations'),
        'transaction_logs',
        ['confirmations'],
        unique=False
    )
    op.create_index(
        op.f('ix_transaction_logs_created_at'),
        'transaction_logs',
        ['created_at'],
        unique=False
    )
    op.create_index(
        'ix_transaction_logs_split_created',
        'transaction_logs',
        ['split_id', 'created_at'],
        unique=False
    )
    op.create_index(
        'ix_transaction_logs_wallet_created',
        'transaction_logs',
        ['wallet_address', 'created_at'],
        unique=False
    )

    # =================================================================
    # TABLE: notifications
    # =================================================================
    op.create_table(
        'notifications',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('recipient_address', sa.String(length=42), nullable=False),
        sa.Column('split_id', sa.Uuid(), nullable=True),
        sa.Column('type', sa.String(length=30), nullable=False),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('message', sa.String(length=1000), nullable=False),
        sa.Column(
            'channels', postgresql.JSONB(astext_type=sa.Text()), nullable=False
        ),
        sa.Column('is_read', sa.Boolean(), nullable=True),
        sa.Column('read_at', sa.DateTime(), nullable=True),
        sa.Column('is_sent', sa.Boolean(), nullable=True),
        sa.Column('sent_at', sa.DateTime(), nullable=True),
        sa.Column('send_attempts', sa.Integer(), nullable=True),
        sa.Column('last_send_attempt_at', sa.DateTime(), nullable=True),
        sa.Column('data', postgresql.JSONB(astext_type=sa.Text()), nullable=True),
        sa.Column('priority', sa.String(length=10), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['split_id'], ['splits.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(
        op.f('ix_notifications_recipient_address'),
        'notifications',
        ['recipient_address'],
        unique=False
    )
    op.create_index(
        op.f('ix_notifications_split_id'),
        'notifications',
        ['split_id'],
        unique=False
    )
    op.create_index(
        op.f('ix_notifications_type'), 'notifications', ['type'], unique=False
    )
    op.create_index(
        op.f('ix_notifications_is_read'), 'notifications', ['is_read'], unique=False
    )
    op.create_index(
        op.f('ix_notifications_is_sent'), 'notifications', ['is_sent'], unique=False
    )
    op.create_index(
        op.f('ix_notifications_created_at'),
        'notifications',
        ['created_at'],
        unique=False
    )
    op.create_index(
        'ix_notifications_recipient_read_created',
        'notifications',
        ['recipient_address', 'is_read', 'created_at'],
        unique=False
    )


def downgrade() -> None:
    """Drop all tables."""
    op.drop_table('notifications')
    op.drop_table('transaction_logs')
    op.drop_table('split_participants')
    op.drop_table('splits')
    op.drop_table('users')
