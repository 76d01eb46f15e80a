"""Create artists, event_registrations and payments tables.

Revision ID: 0001_initial_tables
Revises:
Create Date: 2026-10-19
"""
from alembic import op
import sqlalchemy as sa

revision = '0001_initial_tables'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        'artists',
        sa.Column('artist_id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('first_name', sa.String(100), nullable=False),
        sa.Column('last_name', sa.String(100), nullable=False),
        sa.Column('email', sa.String(255), nullable=False, unique=True),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('phone_number', sa.String(50), nullable=False),
        sa.Column('city', sa.String(100), nullable=False),
        sa.Column('state', sa.String(100), nullable=False),
        sa.Column('country', sa.String(100), nullable=False),
        sa.Column('bio', sa.Text(), nullable=True),
        sa.Column('profile_image', sa.String(500), nullable=True),
        sa.Column('is_verified', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('verification_token_hash', sa.String(64), nullable=True),
        sa.Column('verification_token_expires', sa.DateTime(), nullable=True),
        sa.Column('reset_password_token_hash', sa.String(64), nullable=True),
        sa.Column('reset_password_expires', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
    )
    op.create_index('ix_artists_verification_token_hash', 'artists', ['verification_token_hash'])
    op.create_index('ix_artists_reset_password_token_hash', 'artists', ['reset_password_token_hash'])

    op.create_table(
        'event_registrations',
        sa.Column('registration_id', sa.String(40), primary_key=True),
        sa.Column('event_id', sa.Integer(), nullable=False),
        sa.Column('event_name', sa.String(255), nullable=False),
        sa.Column('event_date', sa.String(50), nullable=False),
        sa.Column('event_venue', sa.String(255), nullable=False),
        sa.Column('event_time', sa.String(50), nullable=False),
        sa.Column('first_name', sa.String(100), nullable=False),
        sa.Column('middle_name', sa.String(100), nullable=True),
        sa.Column('last_name', sa.String(100), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('contact', sa.String(50), nullable=False),
        sa.Column('address1', sa.String(255), nullable=False),
        sa.Column('address2', sa.String(255), nullable=True),
        sa.Column('city', sa.String(100), nullable=False),
        sa.Column('state', sa.String(100), nullable=False),
        sa.Column('zipcode', sa.String(20), nullable=False),
        sa.Column('payment_amount', sa.Numeric(10, 2), nullable=False, server_default='0'),
        sa.Column('payment_status', sa.String(20), nullable=False, server_default='pending'),
        sa.Column('payment_id', sa.String(40), nullable=True),
        sa.Column('registration_date', sa.DateTime(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
    )
    op.create_index('ix_event_registrations_event_id', 'event_registrations', ['event_id'])
    op.create_index('ix_event_registrations_email', 'event_registrations', ['email'])

    op.create_table(
        'payments',
        sa.Column('payment_id', sa.String(40), primary_key=True),
        sa.Column('registration_id', sa.String(40), nullable=True),
        sa.Column('gateway_order_id', sa.String(255), nullable=False, unique=True),
        sa.Column('order_id', sa.String(50), nullable=False),
        sa.Column('amount', sa.Numeric(10, 2), nullable=False),
        sa.Column('currency', sa.String(3), nullable=False, server_default='USD'),
        sa.Column('payment_method', sa.String(30), nullable=False, server_default='card'),
        sa.Column('payment_status', sa.String(20), nullable=False, server_default='pending'),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('full_name', sa.String(255), nullable=True),
        sa.Column('address1', sa.String(255), nullable=True),
        sa.Column('address2', sa.String(255), nullable=True),
        sa.Column('city', sa.String(100), nullable=True),
        sa.Column('state', sa.String(100), nullable=True),
        sa.Column('is_donation', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('event_name', sa.String(255), nullable=True),
        sa.Column('event_date', sa.String(50), nullable=True),
        sa.Column('event_venue', sa.String(255), nullable=True),
        sa.Column('event_time', sa.String(50), nullable=True),
        sa.Column('payment_date', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
    )
    op.create_index('ix_payments_registration_id', 'payments', ['registration_id'])
    op.create_index('ix_payments_payment_status', 'payments', ['payment_status'])


def downgrade() -> None:
    op.drop_index('ix_payments_payment_status', table_name='payments')
    op.drop_index('ix_payments_registration_id', table_name='payments')
    op.drop_table('payments')
    op.drop_index('ix_event_registrations_email', table_name='event_registrations')
    op.drop_index('ix_event_registrations_event_id', table_name='event_registrations')
    op.drop_table('event_registrations')
    op.drop_index('ix_artists_reset_password_token_hash', table_name='artists')
    op.drop_index('ix_artists_verification_token_hash', table_name='artists')
    op.drop_table('artists')
