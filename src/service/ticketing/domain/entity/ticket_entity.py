from datetime import datetime
from decimal import Decimal
from typing import Optional

import attrs

from src.service.ticketing.domain.enum.ticket_status import TicketStatus


@attrs.define
class TicketEntity:
    event_id: int
    venue_id: int
    ticket_type: str
    price: Decimal
    status: TicketStatus = TicketStatus.AVAILABLE
    section_name: Optional[str] = None
    seat_number: Optional[str] = None
    seat_id: Optional[int] = None
    attendee_id: Optional[int] = None
    qr_token: Optional[str] = attrs.field(default=None, repr=False)
    reserved_at: Optional[datetime] = None
    purchased_at: Optional[datetime] = None
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def is_general_admission(self) -> bool:
        return self.seat_number is None
