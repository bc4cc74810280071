"""create_calendar_schema

Revision ID: 4d2a9c1e7b30
Revises:
Create Date: 2026-10-19 09:12:44.318207

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = '4d2a9c1e7b30'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _id_column() -> sa.Column:
    return sa.Column(
        'id',
        sa.BigInteger().with_variant(sa.Integer(), 'sqlite'),
        primary_key=True,
        autoincrement=True,
    )


def _ref(name: str, nullable: bool = False) -> sa.Column:
    return sa.Column(name, sa.BigInteger().with_variant(sa.Integer(), 'sqlite'), nullable=nullable)


def _json() -> sa.types.TypeEngine:
    return sa.JSON().with_variant(postgresql.JSONB(), 'postgresql')


def _timestamps() -> list:
    return [
        sa.Column('created_at', sa.DateTime(), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=True),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=True),
    ]


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table('companies',
        _id_column(),
        sa.Column('ticker', sa.String(length=20), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('sector', sa.String(length=100), nullable=False),
        sa.Column('subsector', sa.String(length=100), nullable=False),
        sa.Column('industry', sa.String(length=100), nullable=True),
        sa.Column('is_active', sa.Boolean(), server_default=sa.true(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_companies')),
    )
    op.create_index(op.f('ix_companies_id'), 'companies', ['id'], unique=False)
    op.create_index(op.f('ix_companies_ticker'), 'companies', ['ticker'], unique=True)
    op.create_index(op.f('ix_companies_name'), 'companies', ['name'], unique=False)
    op.create_index(op.f('ix_companies_subsector'), 'companies', ['subsector'], unique=False)
    op.create_index(op.f('ix_companies_is_active'), 'companies', ['is_active'], unique=False)

    op.create_table('organizations',
        _id_column(),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('org_type', sa.String(length=50), nullable=False),
        sa.Column('sector', sa.String(length=100), nullable=True),
        sa.Column('subsector', sa.String(length=100), nullable=True),
        sa.Column('website', sa.String(length=255), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('is_active', sa.Boolean(), server_default=sa.true(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_organizations')),
    )
    op.create_index(op.f('ix_organizations_id'), 'organizations', ['id'], unique=False)
    op.create_index(op.f('ix_organizations_name'), 'organizations', ['name'], unique=False)

    op.create_table('users',
        _id_column(),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('full_name', sa.String(length=255), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.Column('last_login_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_users')),
    )
    op.create_index(op.f('ix_users_id'), 'users', ['id'], unique=False)
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)

    op.create_table('events',
        _id_column(),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('start_date', sa.DateTime(), nullable=False),
        sa.Column('end_date', sa.DateTime(), nullable=False),
        sa.Column('event_type', sa.String(length=50), server_default='standard', nullable=False),
        sa.Column('location_type', sa.String(length=50), nullable=False),
        sa.Column('location_details', _json(), nullable=True),
        sa.Column('virtual_details', _json(), nullable=True),
        sa.Column('weather_location', sa.String(length=255), nullable=True),
        sa.Column('is_active', sa.Boolean(), server_default=sa.true(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_events')),
    )
    op.create_index(op.f('ix_events_id'), 'events', ['id'], unique=False)
    op.create_index(op.f('ix_events_is_active'), 'events', ['is_active'], unique=False)
    op.create_index('idx_events_active_dates', 'events', ['is_active', 'start_date'], unique=False)

    op.create_table('event_companies',
        _id_column(),
        _ref('event_id'),
        _ref('company_id'),
        sa.Column('created_at', sa.DateTime(), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=True),
        sa.ForeignKeyConstraint(['event_id'], ['events.id'], name=op.f('fk_event_companies_event_id_events'), ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['company_id'], ['companies.id'], name=op.f('fk_event_companies_company_id_companies'), ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_event_companies')),
        sa.UniqueConstraint('event_id', 'company_id', name='uq_event_companies_pair'),
    )
    op.create_index(op.f('ix_event_companies_id'), 'event_companies', ['id'], unique=False)
    op.create_index(op.f('ix_event_companies_event_id'), 'event_companies', ['event_id'], unique=False)
    op.create_index(op.f('ix_event_companies_company_id'), 'event_companies', ['company_id'], unique=False)

    op.create_table('event_hosts',
        _id_column(),
        _ref('event_id'),
        sa.Column('host_type', sa.String(length=50), nullable=False),
        _ref('host_id', nullable=True),
        _ref('primary_company_id', nullable=True),
        sa.Column('companies_snapshot', _json(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['event_id'], ['events.id'], name=op.f('fk_event_hosts_event_id_events'), ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_event_hosts')),
    )
    op.create_index(op.f('ix_event_hosts_id'), 'event_hosts', ['id'], unique=False)
    op.create_index(op.f('ix_event_hosts_event_id'), 'event_hosts', ['event_id'], unique=False)

    op.create_table('user_event_responses',
        _id_column(),
        _ref('user_id'),
        _ref('event_id'),
        sa.Column('response_status', sa.String(length=50), nullable=False),
        sa.Column('response_date', sa.DateTime(), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['event_id'], ['events.id'], name=op.f('fk_user_event_responses_event_id_events'), ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_user_event_responses')),
        sa.UniqueConstraint('user_id', 'event_id', name='uq_user_event_responses_pair'),
    )
    op.create_index(op.f('ix_user_event_responses_id'), 'user_event_responses', ['id'], unique=False)
    op.create_index(op.f('ix_user_event_responses_user_id'), 'user_event_responses', ['user_id'], unique=False)
    op.create_index(op.f('ix_user_event_responses_event_id'), 'user_event_responses', ['event_id'], unique=False)

    op.create_table('user_subscriptions',
        _id_column(),
        _ref('user_id'),
        sa.Column('subsector', sa.String(length=255), nullable=False),
        sa.Column('payment_status', sa.String(length=50), server_default='pending', nullable=False),
        sa.Column('is_active', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('expires_at', sa.DateTime(), nullable=True),
        sa.Column('billing_reference', sa.String(length=255), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_user_subscriptions')),
        sa.UniqueConstraint('billing_reference', name=op.f('uq_user_subscriptions_billing_reference')),
    )
    op.create_index(op.f('ix_user_subscriptions_id'), 'user_subscriptions', ['id'], unique=False)
    op.create_index(op.f('ix_user_subscriptions_user_id'), 'user_subscriptions', ['user_id'], unique=False)
    op.create_index(
        'uq_user_subscriptions_active_subsector',
        'user_subscriptions',
        ['user_id', 'subsector'],
        unique=True,
        postgresql_where=sa.text('is_active'),
        sqlite_where=sa.text('is_active = 1'),
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index('uq_user_subscriptions_active_subsector', table_name='user_subscriptions')
    op.drop_index(op.f('ix_user_subscriptions_user_id'), table_name='user_subscriptions')
    op.drop_index(op.f('ix_user_subscriptions_id'), table_name='user_subscriptions')
    op.drop_table('user_subscriptions')

    op.drop_index(op.f('ix_user_event_responses_event_id'), table_name='user_event_responses')
    op.drop_index(op.f('ix_user_event_responses_user_id'), table_name='user_event_responses')
    op.drop_index(op.f('ix_user_event_responses_id'), table_name='user_event_responses')
    op.drop_table('user_event_responses')

    op.drop_index(op.f('ix_event_hosts_event_id'), table_name='event_hosts')
    op.drop_index(op.f('ix_event_hosts_id'), table_name='event_hosts')
    op.drop_table('event_hosts')

    op.drop_index(op.f('ix_event_companies_company_id'), table_name='event_companies')
    op.drop_index(op.f('ix_event_companies_event_id'), table_name='event_companies')
    op.drop_index(op.f('ix_event_companies_id'), table_name='event_companies')
    op.drop_table('event_companies')

    op.drop_index('idx_events_active_dates', table_name='events')
    op.drop_index(op.f('ix_events_is_active'), table_name='events')
    op.drop_index(op.f('ix_events_id'), table_name='events')
    op.drop_table('events')

    op.drop_index(op.f('ix_users_email'), table_name='users')
    op.drop_index(op.f('ix_users_id'), table_name='users')
    op.drop_table('users')

    op.drop_index(op.f('ix_organizations_name'), table_name='organizations')
    op.drop_index(op.f('ix_organizations_id'), table_name='organizations')
    op.drop_table('organizations')

    op.drop_index(op.f('ix_companies_is_active'), table_name='companies')
    op.drop_index(op.f('ix_companies_subsector'), table_name='companies')
    op.drop_index(op.f('ix_companies_name'), table_name='companies')
    op.drop_index(op.f('ix_companies_ticker'), table_name='companies')
    op.drop_index(op.f('ix_companies_id'), table_name='companies')
    op.drop_table('companies')
