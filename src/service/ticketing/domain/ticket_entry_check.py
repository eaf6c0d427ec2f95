"""
Entry validation of a scanned ticket, after its token signature has been verified.

Order of checks: ticket exists, status is sold or used with the same token on the row,
the event has not ended.
"""

from datetime import datetime
from typing import Optional

from src.platform.exception.exceptions import ConflictError, ExpiredTicketError, NotFoundError
from src.service.ticketing.domain.entity.event_entity import EventEntity
from src.service.ticketing.domain.entity.ticket_entity import TicketEntity
from src.service.ticketing.domain.ticket_lifecycle import OWNED_STATUSES, describe


def check_ticket_entry(
    *,
    ticket: Optional[TicketEntity],
    event: Optional[EventEntity],
    token: str,
    now: datetime,
) -> tuple[TicketEntity, EventEntity]:
    if ticket is None or event is None:
        raise NotFoundError('Ticket not found')

    if ticket.status not in OWNED_STATUSES:
        raise ConflictError(
            f'Ticket {ticket.id} is {ticket.status.value}, expected {describe(OWNED_STATUSES)}'
        )
    if ticket.qr_token != token:
        # a cancelled-then-resold unit keeps its id but gets a new token
        raise ConflictError(f'Ticket {ticket.id} token has been superseded')

    if event.has_ended(now=now):
        raise ExpiredTicketError(f'Event {event.id} has ended')

    return ticket, event
