from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from src.platform.database.orm_db_setting import Base


class TicketModel(Base):
    __tablename__ = 'ticket'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    event_id: Mapped[int] = mapped_column(
        Integer, ForeignKey('event.id', ondelete='CASCADE'), nullable=False, index=True
    )
    venue_id: Mapped[int] = mapped_column(Integer, ForeignKey('venue.id'), nullable=False)
    seat_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey('seat.id', ondelete='RESTRICT'), nullable=True
    )
    ticket_type: Mapped[str] = mapped_column(String(100), nullable=False)
    section_name: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    seat_number: Mapped[Optional[str]] = mapped_column(String(120), nullable=True)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    status: Mapped[str] = mapped_column(String(20), default='available', nullable=False)
    attendee_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey('user.id'), nullable=True, index=True
    )
    qr_token: Mapped[Optional[str]] = mapped_column(String(1024), nullable=True, unique=True)
    reserved_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    purchased_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    __table_args__ = (
        UniqueConstraint('event_id', 'seat_id', name='uq_ticket_event_seat'),
        CheckConstraint('price >= 0', name='ck_ticket_price_non_negative'),
        CheckConstraint(
            "status NOT IN ('sold', 'used') OR (attendee_id IS NOT NULL AND qr_token IS NOT NULL)",
            name='ck_ticket_owned_has_attendee',
        ),
        CheckConstraint(
            "status NOT IN ('available', 'cancelled', 'refunded') OR attendee_id IS NULL",
            name='ck_ticket_open_has_no_attendee',
        ),
        Index('ix_ticket_event_type_status', 'event_id', 'ticket_type', 'status'),
    )
