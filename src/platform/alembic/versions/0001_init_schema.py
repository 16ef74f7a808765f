"""init_schema

Revision ID: 0001
Revises:
Create Date: 2026-10-19

Schema:
- user: accounts (user / admin)
- session: language-test sessions with seat counters guarded by CHECK constraints
- booking: one row per reservation, UUID primary key; a partial unique index keeps
  at most one non-cancelled booking per (user, session)
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0001'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


ACTIVE_BOOKING_PREDICATE = sa.text("status <> 'cancelled'")


def upgrade() -> None:
    """Create all tables with final schema."""

    op.create_table(
        'user',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('hashed_password', sa.String(length=255), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('role', sa.String(length=20), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column(
            'created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
        sa.Column(
            'updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_user_email'), 'user', ['email'], unique=True)

    op.create_table(
        'session',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('language', sa.String(length=30), nullable=False),
        sa.Column('level', sa.String(length=2), nullable=True),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('time', sa.String(length=5), nullable=False),
        sa.Column('location', sa.String(length=200), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('total_seats', sa.Integer(), nullable=False),
        sa.Column('available_seats', sa.Integer(), nullable=False),
        sa.Column('duration_minutes', sa.Integer(), nullable=False),
        sa.Column('price', sa.Float(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column(
            'created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
        sa.Column(
            'updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
        sa.CheckConstraint('available_seats >= 0', name='ck_session_available_seats_non_negative'),
        sa.CheckConstraint(
            'available_seats <= total_seats', name='ck_session_available_seats_within_total'
        ),
        sa.CheckConstraint('total_seats > 0', name='ck_session_total_seats_positive'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_session_language'), 'session', ['language'])
    op.create_index('ix_session_listing', 'session', ['is_active', 'date', 'time'])

    op.create_table(
        'booking',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('session_id', sa.Uuid(), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('cancellation_reason', sa.String(length=500), nullable=True),
        sa.Column('cancelled_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column(
            'created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
        sa.Column(
            'updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
        sa.ForeignKeyConstraint(['user_id'], ['user.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_booking_user_id'), 'booking', ['user_id'])
    op.create_index(op.f('ix_booking_session_id'), 'booking', ['session_id'])
    op.create_index(
        'uq_booking_user_session_active',
        'booking',
        ['user_id', 'session_id'],
        unique=True,
        postgresql_where=ACTIVE_BOOKING_PREDICATE,
        sqlite_where=ACTIVE_BOOKING_PREDICATE,
    )


def downgrade() -> None:
    op.drop_index('uq_booking_user_session_active', table_name='booking')
    op.drop_index(op.f('ix_booking_session_id'), table_name='booking')
    op.drop_index(op.f('ix_booking_user_id'), table_name='booking')
    op.drop_table('booking')
    op.drop_index('ix_session_listing', table_name='session')
    op.drop_index(op.f('ix_session_language'), table_name='session')
    op.drop_table('session')
    op.drop_index(op.f('ix_user_email'), table_name='user')
    op.drop_table('user')
