"""
Event Ticketing Aggregate - Aggregate Root for Event Ticketing

[DDD Design Principles]
- EventTicketingAggregate is the Aggregate Root
- Event and Ticket are entities within the aggregate
- The event row and its ticket pool are persisted in the same unit of work

[Business Invariants]
- Ticket types pass the CapacityValidator against the venue
- Sectioned venue: min(quantity, section capacity) tickets per section, labelled
  "{section}-1".."{section}-N" and pointing at arena seats 1..N of that section
- General admission: quantity tickets per type, never more than the venue capacity
"""

from datetime import datetime
from typing import Any, Iterator, List, Mapping, Optional, Sequence

import attrs

from src.platform.exception.exceptions import IntegrityError
from src.platform.logging.loguru_io import Logger
from src.service.ticketing.domain.capacity_validator import CapacityValidator
from src.service.ticketing.domain.entity.event_entity import EventEntity, TicketType
from src.service.ticketing.domain.entity.ticket_entity import TicketEntity
from src.service.ticketing.domain.enum.ticket_status import TicketStatus
from src.service.venue.app.interface.i_seat_query_repo import SeatIdMap
from src.service.venue.domain.entity.venue_entity import VenueEntity


@Logger.io
def seat_labels(section_name: str, count: int) -> Iterator[str]:
    """Deterministic seat labels `{section}-1` .. `{section}-{count}`"""
    for number in range(1, count + 1):
        yield f'{section_name}-{number}'


def parse_seat_label(label: str) -> tuple[str, int]:
    """Inverse of seat_labels; section names may themselves contain dashes"""
    section_name, _, number = label.rpartition('-')
    return section_name, int(number)


@attrs.define
class EventTicketingAggregate:
    event: EventEntity
    venue: VenueEntity

    # Tickets collection - entities within aggregate
    tickets: List[TicketEntity] = attrs.field(factory=list)

    @classmethod
    @Logger.io
    def create_event_with_tickets(
        cls,
        *,
        admin_id: int,
        venue: VenueEntity,
        title: str,
        description: str,
        start_date: datetime,
        end_date: datetime,
        ticket_types: Sequence[Mapping[str, Any]],
        artist_lineup: Optional[List[str]] = None,
        image_urls: Optional[List[str]] = None,
    ) -> 'EventTicketingAggregate':
        """
        Aggregate root factory: validates everything that can be validated before a write.
        Tickets are generated by `generate_tickets` once the event has an id.
        """
        assert venue.id is not None
        validated_types = CapacityValidator.validate_ticket_types(
            venue=venue, ticket_types=ticket_types
        )

        event = EventEntity(
            admin_id=admin_id,
            venue_id=venue.id,
            title=title.strip() if isinstance(title, str) else title,
            description=description or '',
            start_date=start_date,
            end_date=end_date,
            artist_lineup=list(artist_lineup or []),
            image_urls=list(image_urls or []),
            ticket_types=validated_types,
        )
        return cls(event=event, venue=venue)

    @Logger.io(truncate_content=True)
    def generate_tickets(self, *, seat_id_map: Optional[SeatIdMap] = None) -> List[TicketEntity]:
        """
        Materialize the full ticket pool. Must be called after the event is persisted.

        Args:
            seat_id_map: (section name, seat number) -> arena seat id, required for
                sectioned venues
        """
        if not self.event.id:
            raise ValueError('Event must be persisted before generating tickets')
        if self.tickets:
            raise ValueError('Tickets already generated for this event')

        if self.venue.has_sections:
            self.tickets = self._generate_sectioned(seat_id_map or {})
        else:
            self.tickets = self._generate_general_admission()

        Logger.base.info(f'🎫 Generated {len(self.tickets)} tickets for event {self.event.id}')
        return self.tickets

    def _new_ticket(self, ticket_type: TicketType, **fields: Any) -> TicketEntity:
        assert self.event.id is not None and self.venue.id is not None
        return TicketEntity(
            event_id=self.event.id,
            venue_id=self.venue.id,
            ticket_type=ticket_type.type,
            price=ticket_type.price,
            status=TicketStatus.AVAILABLE,
            **fields,
        )

    def _generate_sectioned(self, seat_id_map: SeatIdMap) -> List[TicketEntity]:
        tickets: List[TicketEntity] = []
        for section in self.venue.sections:
            ticket_type = self.event.ticket_type(section.name)
            if ticket_type is None:
                Logger.base.warning(
                    f'⚠️ Section {section.name} has no ticket type; no tickets generated'
                )
                continue

            count = min(ticket_type.quantity, section.capacity)
            for number, label in enumerate(seat_labels(section.name, count), start=1):
                seat_id = seat_id_map.get((section.name, number))
                if seat_id is None:
                    raise IntegrityError(f'Seat {label} is missing from the venue seat map')
                tickets.append(
                    self._new_ticket(
                        ticket_type, section_name=section.name, seat_number=label, seat_id=seat_id
                    )
                )
        return tickets

    def _generate_general_admission(self) -> List[TicketEntity]:
        tickets: List[TicketEntity] = []
        remaining = self.venue.capacity
        for ticket_type in self.event.ticket_types:
            count = min(ticket_type.quantity, remaining)
            tickets.extend(
                self._new_ticket(ticket_type, section_name=ticket_type.type) for _ in range(count)
            )
            remaining -= count
        return tickets

    @property
    def total_tickets_count(self) -> int:
        return len(self.tickets)
