"""init_venue_ticketing_schema

Revision ID: 0001
Revises:
Create Date: 2026-10-19

Schema:
- user: accounts (attendee / admin / superadmin)
- venue, venue_section: venues and their ordered sections
- seat: the arena seat map, one row per physical seat
- event: events with their fixed ticket types (JSON)
- ticket: one row per sellable unit; status changes are guarded updates
- ticket_history: one row per lifecycle transition
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0001'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamp(name: str) -> sa.Column:
    return sa.Column(
        name, sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False
    )


def upgrade() -> None:
    """Create all tables with final schema."""

    # ========== Identity ==========
    op.create_table(
        'user',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('hashed_password', sa.String(length=255), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('role', sa.String(length=20), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        _timestamp('created_at'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_user_email'), 'user', ['email'], unique=True)

    # ========== Venue ==========
    op.create_table(
        'venue',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('admin_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('location', sa.String(length=255), nullable=False),
        sa.Column('capacity', sa.Integer(), nullable=False),
        sa.Column('has_sections', sa.Boolean(), nullable=False),
        _timestamp('created_at'),
        _timestamp('updated_at'),
        sa.ForeignKeyConstraint(['admin_id'], ['user.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_venue_admin_id'), 'venue', ['admin_id'])

    op.create_table(
        'venue_section',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('venue_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('capacity', sa.Integer(), nullable=False),
        sa.Column('position', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['venue_id'], ['venue.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('venue_id', 'name', name='uq_venue_section_name'),
    )
    op.create_index(op.f('ix_venue_section_venue_id'), 'venue_section', ['venue_id'])

    op.create_table(
        'seat',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('section_id', sa.Integer(), nullable=False),
        sa.Column('number', sa.Integer(), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('held_by', sa.Integer(), nullable=True),
        sa.Column('held_at', sa.DateTime(timezone=True), nullable=True),
        _timestamp('updated_at'),
        sa.ForeignKeyConstraint(['section_id'], ['venue_section.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('section_id', 'number', name='uq_seat_section_number'),
    )
    op.create_index(op.f('ix_seat_section_id'), 'seat', ['section_id'])
    op.create_index(op.f('ix_seat_held_by'), 'seat', ['held_by'])

    # ========== Ticketing ==========
    op.create_table(
        'event',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('admin_id', sa.Integer(), nullable=False),
        sa.Column('venue_id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('start_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('end_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('artist_lineup', sa.JSON(), nullable=False),
        sa.Column('image_urls', sa.JSON(), nullable=False),
        sa.Column('ticket_types', sa.JSON(), nullable=False),
        _timestamp('created_at'),
        _timestamp('updated_at'),
        sa.ForeignKeyConstraint(['admin_id'], ['user.id']),
        sa.ForeignKeyConstraint(['venue_id'], ['venue.id'], ondelete='RESTRICT'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_event_admin_id'), 'event', ['admin_id'])
    op.create_index(op.f('ix_event_venue_id'), 'event', ['venue_id'])
    op.create_index(op.f('ix_event_end_date'), 'event', ['end_date'])

    op.create_table(
        'ticket',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('event_id', sa.Integer(), nullable=False),
        sa.Column('venue_id', sa.Integer(), nullable=False),
        sa.Column('seat_id', sa.Integer(), nullable=True),
        sa.Column('ticket_type', sa.String(length=100), nullable=False),
        sa.Column('section_name', sa.String(length=100), nullable=True),
        sa.Column('seat_number', sa.String(length=120), nullable=True),
        sa.Column('price', sa.Numeric(10, 2), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('attendee_id', sa.Integer(), nullable=True),
        sa.Column('qr_token', sa.String(length=1024), nullable=True),
        sa.Column('reserved_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('purchased_at', sa.DateTime(timezone=True), nullable=True),
        _timestamp('created_at'),
        _timestamp('updated_at'),
        sa.ForeignKeyConstraint(['event_id'], ['event.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['venue_id'], ['venue.id']),
        sa.ForeignKeyConstraint(['seat_id'], ['seat.id'], ondelete='RESTRICT'),
        sa.ForeignKeyConstraint(['attendee_id'], ['user.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('event_id', 'seat_id', name='uq_ticket_event_seat'),
        sa.UniqueConstraint('qr_token'),
        sa.CheckConstraint('price >= 0', name='ck_ticket_price_non_negative'),
        sa.CheckConstraint(
            "status NOT IN ('sold', 'used') OR (attendee_id IS NOT NULL AND qr_token IS NOT NULL)",
            name='ck_ticket_owned_has_attendee',
        ),
        sa.CheckConstraint(
            "status NOT IN ('available', 'cancelled', 'refunded') OR attendee_id IS NULL",
            name='ck_ticket_open_has_no_attendee',
        ),
    )
    op.create_index(op.f('ix_ticket_event_id'), 'ticket', ['event_id'])
    op.create_index(op.f('ix_ticket_attendee_id'), 'ticket', ['attendee_id'])
    op.create_index(
        'ix_ticket_event_type_status', 'ticket', ['event_id', 'ticket_type', 'status']
    )

    op.create_table(
        'ticket_history',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('ticket_id', sa.Integer(), nullable=False),
        sa.Column('from_status', sa.String(length=20), nullable=False),
        sa.Column('to_status', sa.String(length=20), nullable=False),
        sa.Column('attendee_id', sa.Integer(), nullable=True),
        _timestamp('occurred_at'),
        sa.ForeignKeyConstraint(['ticket_id'], ['ticket.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_ticket_history_ticket_id'), 'ticket_history', ['ticket_id'])


def downgrade() -> None:
    """Drop all tables in reverse dependency order."""
    op.drop_table('ticket_history')
    op.drop_table('ticket')
    op.drop_table('event')
    op.drop_table('seat')
    op.drop_table('venue_section')
    op.drop_table('venue')
    op.drop_index(op.f('ix_user_email'), table_name='user')
    op.drop_table('user')
