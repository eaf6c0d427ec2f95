from src.service.ticketing.domain.entity.event_entity import EventEntity, TicketType
from src.service.ticketing.domain.entity.ticket_entity import TicketEntity
from src.service.ticketing.domain.enum.ticket_status import TicketStatus
from src.service.ticketing.driven_adapter.model.event_model import EventModel
from src.service.ticketing.driven_adapter.model.ticket_model import TicketModel


def model_to_event(event_model: EventModel) -> EventEntity:
    return EventEntity(
        id=event_model.id,
        admin_id=event_model.admin_id,
        venue_id=event_model.venue_id,
        title=event_model.title,
        description=event_model.description,
        start_date=event_model.start_date,
        end_date=event_model.end_date,
        artist_lineup=list(event_model.artist_lineup or []),
        image_urls=list(event_model.image_urls or []),
        ticket_types=[TicketType.from_dict(data) for data in event_model.ticket_types or []],
        created_at=event_model.created_at,
        updated_at=event_model.updated_at,
    )


def model_to_ticket(ticket_model: TicketModel) -> TicketEntity:
    return TicketEntity(
        id=ticket_model.id,
        event_id=ticket_model.event_id,
        venue_id=ticket_model.venue_id,
        seat_id=ticket_model.seat_id,
        ticket_type=ticket_model.ticket_type,
        section_name=ticket_model.section_name,
        seat_number=ticket_model.seat_number,
        price=ticket_model.price,
        status=TicketStatus(ticket_model.status),
        attendee_id=ticket_model.attendee_id,
        qr_token=ticket_model.qr_token,
        reserved_at=ticket_model.reserved_at,
        purchased_at=ticket_model.purchased_at,
        created_at=ticket_model.created_at,
        updated_at=ticket_model.updated_at,
    )
