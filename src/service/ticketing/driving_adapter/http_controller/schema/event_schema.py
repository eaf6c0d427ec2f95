"""
Event API Schemas - Pydantic models for request/response

Event creation and update are multipart forms (images ride along), so the structured
fields `tickets` and `artist_lineup` arrive as strings and are parsed here.
"""

from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional

import orjson
from pydantic import BaseModel

from src.platform.exception.exceptions import ValidationError
from src.service.ticketing.domain.entity.event_entity import EventEntity


def parse_ticket_types(raw: str) -> List[Dict[str, Any]]:
    """`tickets` form field: a JSON array of {type, price, quantity}"""
    try:
        ticket_types = orjson.loads(raw)
    except orjson.JSONDecodeError as e:
        raise ValidationError(f'tickets must be a JSON array: {e}')

    if not isinstance(ticket_types, list) or not all(isinstance(t, dict) for t in ticket_types):
        raise ValidationError('tickets must be a JSON array of objects')
    return ticket_types


def parse_artist_lineup(raw: Optional[str]) -> Optional[List[str]]:
    """`artist_lineup` form field: a JSON array of names, or a comma separated list"""
    if raw is None:
        return None
    raw = raw.strip()
    if not raw:
        return []

    if raw.startswith('['):
        try:
            lineup = orjson.loads(raw)
        except orjson.JSONDecodeError as e:
            raise ValidationError(f'artist_lineup must be a JSON array or a comma list: {e}')
        if not isinstance(lineup, list):
            raise ValidationError('artist_lineup must be a JSON array or a comma list')
        return [str(artist).strip() for artist in lineup if str(artist).strip()]

    return [artist.strip() for artist in raw.split(',') if artist.strip()]


class TicketTypeResponse(BaseModel):
    type: str
    price: Decimal
    quantity: int
    available: int


class EventResponse(BaseModel):
    id: int
    admin_id: int
    venue_id: int
    title: str
    description: str
    start_date: datetime
    end_date: datetime
    artist_lineup: List[str]
    image_urls: List[str]
    ticket_types: List[TicketTypeResponse]
    created_at: Optional[datetime] = None

    @classmethod
    def from_entity(
        cls, event: EventEntity, availability: Optional[Dict[str, int]] = None
    ) -> 'EventResponse':
        """`availability` (type -> live count) overrides the count stored at creation"""
        return cls(
            id=event.id or 0,
            admin_id=event.admin_id,
            venue_id=event.venue_id,
            title=event.title,
            description=event.description,
            start_date=event.start_date,
            end_date=event.end_date,
            artist_lineup=event.artist_lineup,
            image_urls=event.image_urls,
            ticket_types=[
                TicketTypeResponse(
                    type=ticket_type.type,
                    price=ticket_type.price,
                    quantity=ticket_type.quantity,
                    available=(
                        availability.get(ticket_type.type, 0)
                        if availability is not None
                        else ticket_type.available
                    ),
                )
                for ticket_type in event.ticket_types
            ],
            created_at=event.created_at,
        )


class EventCreateResponse(BaseModel):
    event: EventResponse
    generated_ticket_count: int


class EventListResponse(BaseModel):
    items: List[EventResponse]
    total: int
    limit: int
    offset: int
    has_more: bool
