"""Entity builders shared by the unit and API tests"""

from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Any, List

from src.service.ticketing.domain.entity.event_entity import EventEntity, TicketType
from src.service.ticketing.domain.entity.ticket_entity import TicketEntity
from src.service.ticketing.domain.enum.ticket_status import TicketStatus
from src.service.venue.domain.entity.venue_entity import SectionEntity, VenueEntity


def make_sectioned_venue(
    *sections: tuple[str, int], venue_id: int = 1, admin_id: int = 1
) -> VenueEntity:
    return VenueEntity(
        id=venue_id,
        admin_id=admin_id,
        name='Riverside Arena',
        location='1 Harbour Road',
        capacity=sum(capacity for _, capacity in sections),
        has_sections=True,
        sections=[
            SectionEntity(id=position + 1, name=name, capacity=capacity, position=position)
            for position, (name, capacity) in enumerate(sections)
        ],
    )


def make_ga_venue(capacity: int, *, venue_id: int = 2, admin_id: int = 1) -> VenueEntity:
    return VenueEntity(
        id=venue_id,
        admin_id=admin_id,
        name='Open Field',
        location='North Park',
        capacity=capacity,
        has_sections=False,
    )


def make_event(
    *,
    event_id: int = 5,
    admin_id: int = 1,
    venue_id: int = 1,
    ends_in: timedelta = timedelta(days=2),
    ticket_types: List[TicketType] | None = None,
) -> EventEntity:
    now = datetime.now(timezone.utc)
    return EventEntity(
        id=event_id,
        admin_id=admin_id,
        venue_id=venue_id,
        title='Summer Night',
        start_date=now + ends_in - timedelta(hours=4),
        end_date=now + ends_in,
        ticket_types=ticket_types
        or [TicketType(type='A', price=Decimal('50.00'), quantity=60, available=60)],
    )


def make_ticket(**overrides: Any) -> TicketEntity:
    fields: dict[str, Any] = {
        'id': 100,
        'event_id': 5,
        'venue_id': 1,
        'ticket_type': 'A',
        'price': Decimal('50.00'),
        'status': TicketStatus.AVAILABLE,
        'section_name': 'A',
        'seat_number': 'A-1',
        'seat_id': 1,
    }
    fields.update(overrides)
    return TicketEntity(**fields)
