"""initial_models

Revision ID: 001
Revises: 
Create Date: 2026-10-19 10:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Create creators table
    op.create_table(
        'creators',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('username', sa.String(64), nullable=False),
        sa.Column('display_name', sa.String(255), nullable=False),
        sa.Column('wallet_address', sa.String(66), nullable=False),
        sa.Column('sui_name_service', sa.String(255), nullable=True),
        sa.Column('bio', sa.Text(), nullable=True),
        sa.Column('avatar', sa.String(1024), nullable=True),
        sa.Column('twitter_handle', sa.String(255), nullable=True),
        sa.Column('website_url', sa.String(1024), nullable=True),
        sa.Column('custom_message', sa.Text(), nullable=True),
        sa.Column('min_donation_amount', sa.Float(), nullable=False, server_default='1.0'),
        sa.Column('is_verified', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(), nullable=True, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), nullable=True, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('email'),
        sa.UniqueConstraint('username'),
        sa.UniqueConstraint('wallet_address'),
    )
    op.create_index('idx_creator_wallet_address', 'creators', ['wallet_address'])

    # Create payments table
    op.create_table(
        'payments',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('tx_hash', sa.String(128), nullable=False),
        sa.Column('amount', sa.Float(), nullable=False),
        sa.Column('currency', sa.String(16), nullable=False, server_default='SUI'),
        sa.Column('message', sa.Text(), nullable=True),
        sa.Column('donor_name', sa.String(255), nullable=True),
        sa.Column('donor_email', sa.String(255), nullable=True),
        sa.Column('is_anonymous', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('from_address', sa.String(66), nullable=False),
        sa.Column('to_address', sa.String(66), nullable=False),
        sa.Column('block_height', sa.BigInteger(), nullable=True),
        sa.Column('timestamp', sa.DateTime(), nullable=False),
        sa.Column('creator_id', sa.String(36), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['creator_id'], ['creators.id']),
        sa.UniqueConstraint('tx_hash'),
    )
    op.create_index('idx_payment_creator_id', 'payments', ['creator_id'])
    op.create_index('idx_payment_timestamp', 'payments', ['timestamp'])

    # Create links table
    op.create_table(
        'links',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('slug', sa.String(255), nullable=False),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('button_text', sa.String(100), nullable=False, server_default='Support Me'),
        sa.Column('theme', sa.String(50), nullable=False, server_default='default'),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('click_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('creator_id', sa.String(36), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), nullable=True, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['creator_id'], ['creators.id']),
        sa.UniqueConstraint('slug'),
    )
    op.create_index('idx_link_creator_id', 'links', ['creator_id'])

    # Create analytics table
    op.create_table(
        'analytics',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('creator_id', sa.String(36), nullable=False),
        sa.Column('date', sa.String(10), nullable=False),
        sa.Column('total_payments', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('total_amount', sa.Float(), nullable=False, server_default='0.0'),
        sa.Column('unique_donors', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('average_amount', sa.Float(), nullable=False, server_default='0.0'),
        sa.Column('profile_views', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('link_clicks', sa.Integer(), nullable=False, server_default='0'),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['creator_id'], ['creators.id']),
        sa.UniqueConstraint('creator_id', 'date', name='uq_analytics_creator_date'),
    )


def downgrade() -> None:
    op.drop_table('analytics')
    op.drop_index('idx_link_creator_id', table_name='links')
    op.drop_table('links')
    op.drop_index('idx_payment_timestamp', table_name='payments')
    op.drop_index('idx_payment_creator_id', table_name='payments')
    op.drop_table('payments')
    op.drop_index('idx_creator_wallet_address', table_name='creators')
    op.drop_table('creators')
