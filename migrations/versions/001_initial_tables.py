"""Create membership tables

Revision ID: 001
Revises:
Create Date: 2026-01-12 10:00:00.000000

"""
from typing import List, Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

ID = sa.String(36)


def _address_columns() -> List[sa.Column]:
    return [
        sa.Column('street', sa.String(200), nullable=False),
        sa.Column('number', sa.String(20), nullable=False),
        sa.Column('district', sa.String(120), nullable=False),
        sa.Column('city', sa.String(120), nullable=False),
        sa.Column('state', sa.String(2), nullable=False),
        sa.Column('zip_code', sa.String(8), nullable=False),
        sa.Column('country', sa.String(60), nullable=False),
        sa.Column('complement', sa.String(200), nullable=True),
    ]


def _timestamps() -> List[sa.Column]:
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
    ]


def upgrade() -> None:
    """Create membership tables"""

    # 1. Users and families
    op.create_table('users',
        sa.Column('id', ID, nullable=False),
        sa.Column('first_name', sa.String(100), nullable=False),
        sa.Column('last_name', sa.String(100), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('phone', sa.String(30), nullable=True),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('roles', sa.JSON(), nullable=False, comment='List of role names'),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table('families',
        sa.Column('id', ID, nullable=False),
        sa.Column('holder_id', ID, nullable=False),
        sa.Column('status', sa.String(20), nullable=False),
        sa.Column('affiliated_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('affiliation_expires_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['holder_id'], ['users.id']),
        sa.UniqueConstraint('holder_id'),
    )

    op.create_table('dependants',
        sa.Column('id', ID, nullable=False),
        sa.Column('family_id', ID, nullable=False),
        sa.Column('first_name', sa.String(100), nullable=False),
        sa.Column('last_name', sa.String(100), nullable=False),
        sa.Column('birthdate', sa.Date(), nullable=False),
        sa.Column('relationship', sa.String(20), nullable=False),
        sa.Column('sex', sa.String(10), nullable=False),
        sa.Column('type', sa.String(20), nullable=False),
        sa.Column('email', sa.String(255), nullable=True),
        sa.Column('phone', sa.String(30), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['family_id'], ['families.id'], ondelete='CASCADE'),
    )
    op.create_index('ix_dependants_family_id', 'dependants', ['family_id'])

    # 2. Clubs and the requests to open them
    op.create_table('clubs',
        sa.Column('id', ID, nullable=False),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('principal_id', ID, nullable=False),
        sa.Column('max_members', sa.Integer(), nullable=True),
        *_address_columns(),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['principal_id'], ['users.id']),
        sa.UniqueConstraint('principal_id'),
    )
    op.create_index('ix_clubs_name', 'clubs', ['name'])
    op.create_index('ix_clubs_city', 'clubs', ['city'])
    op.create_index('ix_clubs_state', 'clubs', ['state'])

    op.create_table('club_requests',
        sa.Column('id', ID, nullable=False),
        sa.Column('club_name', sa.String(200), nullable=False),
        sa.Column('max_members', sa.Integer(), nullable=True),
        sa.Column('requester_id', ID, nullable=False),
        sa.Column('status', sa.String(20), nullable=False),
        sa.Column('requested_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('resolved_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('rejection_reason', sa.Text(), nullable=True),
        *_address_columns(),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['requester_id'], ['users.id']),
    )
    op.create_index('ix_club_requests_requester_id', 'club_requests', ['requester_id'])
    op.create_index('ix_club_requests_status', 'club_requests', ['status'])
    op.create_index('ix_club_requests_city', 'club_requests', ['city'])
    op.create_index('ix_club_requests_state', 'club_requests', ['state'])

    # 3. Enrollment requests and memberships
    op.create_table('enrollment_requests',
        sa.Column('id', ID, nullable=False),
        sa.Column('family_id', ID, nullable=False),
        sa.Column('dependant_id', ID, nullable=False),
        sa.Column('club_id', ID, nullable=False),
        sa.Column('status', sa.String(20), nullable=False),
        sa.Column('requested_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('resolved_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('rejection_reason', sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['family_id'], ['families.id']),
        sa.ForeignKeyConstraint(['dependant_id'], ['dependants.id']),
        sa.ForeignKeyConstraint(['club_id'], ['clubs.id']),
    )
    op.create_index('ix_enrollment_requests_family_id', 'enrollment_requests', ['family_id'])
    op.create_index('ix_enrollment_requests_club_id', 'enrollment_requests', ['club_id'])
    # One PENDING request per (dependant, club)
    op.create_index(
        'uq_enrollment_requests_pending_pair',
        'enrollment_requests',
        ['dependant_id', 'club_id'],
        unique=True,
        postgresql_where=sa.text("status = 'PENDING'"),
        sqlite_where=sa.text("status = 'PENDING'"),
    )

    op.create_table('club_memberships',
        sa.Column('id', ID, nullable=False),
        sa.Column('club_id', ID, nullable=False),
        sa.Column('member_id', ID, nullable=False),
        sa.Column('family_id', ID, nullable=False),
        sa.Column('status', sa.String(20), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['club_id'], ['clubs.id']),
        sa.ForeignKeyConstraint(['member_id'], ['dependants.id']),
        sa.ForeignKeyConstraint(['family_id'], ['families.id']),
        sa.UniqueConstraint('member_id', 'club_id', name='uq_club_memberships_member_club'),
    )
    op.create_index('ix_club_memberships_club_id', 'club_memberships', ['club_id'])

    # 4. Payments and trainings
    op.create_table('transactions',
        sa.Column('id', ID, nullable=False),
        sa.Column('family_id', ID, nullable=False),
        sa.Column('gateway', sa.String(50), nullable=False),
        sa.Column('gateway_transaction_id', sa.String(120), nullable=False),
        sa.Column('payment_method', sa.String(20), nullable=False),
        sa.Column('amount_cents', sa.Integer(), nullable=False),
        sa.Column('status', sa.String(20), nullable=False),
        sa.Column('gateway_payload', sa.JSON(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['family_id'], ['families.id']),
        sa.UniqueConstraint('gateway_transaction_id'),
    )
    op.create_index('ix_transactions_family_id', 'transactions', ['family_id'])

    op.create_table('trainings',
        sa.Column('id', ID, nullable=False),
        sa.Column('title', sa.String(200), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('youtube_url', sa.String(500), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )

    # 5. Tournaments, registrations and their outbound sync
    op.create_table('tournaments',
        sa.Column('id', ID, nullable=False),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('type', sa.String(20), nullable=False),
        sa.Column('registration_start_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('registration_end_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('start_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('deleted_at', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.Column('version', sa.Integer(), nullable=False, server_default='1'),
        sa.PrimaryKeyConstraint('id'),
    )

    op.create_table('registrations',
        sa.Column('id', ID, nullable=False),
        sa.Column('tournament_id', ID, nullable=False),
        sa.Column('competitor_id', ID, nullable=False),
        sa.Column('status', sa.String(20), nullable=False),
        sa.Column('type', sa.String(20), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['tournament_id'], ['tournaments.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['competitor_id'], ['dependants.id']),
    )
    op.create_index('ix_registrations_tournament_id', 'registrations', ['tournament_id'])
    op.create_index('ix_registrations_competitor_id', 'registrations', ['competitor_id'])

    op.create_table('registration_syncs',
        sa.Column('id', ID, nullable=False),
        sa.Column('registration_id', ID, nullable=False),
        sa.Column('status', sa.String(20), nullable=False),
        sa.Column('attempts', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('last_attempt_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('next_attempt_at', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['registration_id'], ['registrations.id'], ondelete='CASCADE'),
        sa.UniqueConstraint('registration_id'),
    )


def downgrade() -> None:
    """Drop membership tables"""
    op.drop_table('registration_syncs')
    op.drop_table('registrations')
    op.drop_table('tournaments')
    op.drop_table('trainings')
    op.drop_table('transactions')
    op.drop_table('club_memberships')
    op.drop_table('enrollment_requests')
    op.drop_table('club_requests')
    op.drop_table('clubs')
    op.drop_table('dependants')
    op.drop_table('families')
    op.drop_table('users')
