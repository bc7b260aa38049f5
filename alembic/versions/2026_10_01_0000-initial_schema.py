"""Initial schema - clients, bids and tenant mail settings.

Revision ID: initial_schema
Revises:
Create Date: 2026-10-01 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = 'initial_schema'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

BID_STATUSES = ('Pending', 'Waiting Client', 'Waiting Bid', 'Discarded', 'Won', 'Lost')
BID_DECISIONS = ('Pending', 'Participate', 'Discard')
SETTLEMENT_STATUSES = ('AwaitingInvoice', 'Pending', 'Paid')


def upgrade() -> None:
    # Create enum types
    bidstatus = postgresql.ENUM(*BID_STATUSES, name='bidstatus')
    bidstatus.create(op.get_bind(), checkfirst=True)

    biddecision = postgresql.ENUM(*BID_DECISIONS, name='biddecision')
    biddecision.create(op.get_bind(), checkfirst=True)

    settlementstatus = postgresql.ENUM(*SETTLEMENT_STATUSES, name='settlementstatus')
    settlementstatus.create(op.get_bind(), checkfirst=True)

    # Create clients table
    op.create_table(
        'clients',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('tenant_id', sa.String(length=64), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('company', sa.String(length=500), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('contract_value', sa.Numeric(precision=15, scale=2), nullable=True),
        sa.Column('commission_rate', sa.Numeric(precision=5, scale=2), server_default='0', nullable=False),
        sa.Column('is_active', sa.Boolean(), server_default=sa.text('true'), nullable=False),
        sa.Column('access_token', sa.String(length=64), nullable=True),
        sa.Column('auth_user_id', sa.String(length=64), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_clients_tenant_id', 'clients', ['tenant_id'], unique=False)
    op.create_index('ix_clients_access_token', 'clients', ['access_token'], unique=True)
    op.create_index('ix_clients_auth_user_id', 'clients', ['auth_user_id'], unique=True)

    # Create bids table
    op.create_table(
        'bids',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('tenant_id', sa.String(length=64), nullable=False),
        sa.Column('client_id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(length=1000), nullable=False),
        sa.Column('deadline', sa.Date(), nullable=False),
        sa.Column('link_docs', sa.String(length=2000), nullable=True),
        sa.Column('attachments', sa.JSON(), server_default=sa.text("'[]'"), nullable=False),
        sa.Column('status', postgresql.ENUM(*BID_STATUSES, name='bidstatus', create_type=False), server_default='Pending', nullable=False),
        sa.Column('decision', postgresql.ENUM(*BID_DECISIONS, name='biddecision', create_type=False), server_default='Pending', nullable=False),
        sa.Column('decision_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('notified', sa.Boolean(), server_default=sa.text('false'), nullable=False),
        sa.Column('reminder_sent_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('summary_sent_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('final_value', sa.Numeric(precision=15, scale=2), nullable=True),
        sa.Column('commission_rate', sa.Numeric(precision=5, scale=2), nullable=True),
        sa.Column('settlement_status', postgresql.ENUM(*SETTLEMENT_STATUSES, name='settlementstatus', create_type=False), server_default='AwaitingInvoice', nullable=False),
        sa.ForeignKeyConstraint(['client_id'], ['clients.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_bids_tenant_id', 'bids', ['tenant_id'], unique=False)
    op.create_index('ix_bids_client_id', 'bids', ['client_id'], unique=False)
    op.create_index('ix_bids_status', 'bids', ['status'], unique=False)
    op.create_index('ix_bids_reminder_scan', 'bids', ['status', 'notified', 'deadline'], unique=False)
    op.create_index('ix_bids_tenant_deadline', 'bids', ['tenant_id', 'deadline'], unique=False)

    # Create tenant_settings table
    op.create_table(
        'tenant_settings',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('tenant_id', sa.String(length=64), nullable=False),
        sa.Column('smtp_host', sa.String(length=255), nullable=True),
        sa.Column('smtp_port', sa.Integer(), nullable=True),
        sa.Column('smtp_user', sa.String(length=255), nullable=True),
        sa.Column('smtp_password', sa.String(length=255), nullable=True),
        sa.Column('sender_name', sa.String(length=255), nullable=True),
        sa.Column('reminder_subject', sa.String(length=500), nullable=True),
        sa.Column('reminder_body', sa.Text(), nullable=True),
        sa.Column('summary_subject', sa.String(length=500), nullable=True),
        sa.Column('summary_body', sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_tenant_settings_tenant_id', 'tenant_settings', ['tenant_id'], unique=True)


def downgrade() -> None:
    # Drop tables
    op.drop_table('tenant_settings')
    op.drop_table('bids')
    op.drop_table('clients')

    # Drop enum types
    op.execute('DROP TYPE IF EXISTS settlementstatus')
    op.execute('DROP TYPE IF EXISTS biddecision')
    op.execute('DROP TYPE IF EXISTS bidstatus')
