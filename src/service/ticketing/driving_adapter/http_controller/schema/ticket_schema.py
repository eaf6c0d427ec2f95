"""
Ticket API Schemas - Pydantic models for request/response
"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field

from src.service.ticketing.domain.entity.event_entity import EventEntity
from src.service.ticketing.domain.entity.ticket_entity import TicketEntity


class PurchaseByTypeRequest(BaseModel):
    ticket_type: str = Field(..., min_length=1)

    class Config:
        json_schema_extra = {'example': {'ticket_type': 'VIP'}}


class TicketTokenRequest(BaseModel):
    token: str = Field(..., min_length=1)


class TicketResponse(BaseModel):
    id: int
    event_id: int
    venue_id: int
    ticket_type: str
    price: Decimal
    status: str
    section_name: Optional[str] = None
    seat_number: Optional[str] = None
    seat_id: Optional[int] = None
    attendee_id: Optional[int] = None
    reserved_at: Optional[datetime] = None
    purchased_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, ticket: TicketEntity) -> 'TicketResponse':
        return cls(
            id=ticket.id or 0,
            event_id=ticket.event_id,
            venue_id=ticket.venue_id,
            ticket_type=ticket.ticket_type,
            price=ticket.price,
            status=ticket.status.value,
            section_name=ticket.section_name,
            seat_number=ticket.seat_number,
            seat_id=ticket.seat_id,
            attendee_id=ticket.attendee_id,
            reserved_at=ticket.reserved_at,
            purchased_at=ticket.purchased_at,
        )


class TicketDetailResponse(TicketResponse):
    event_title: str
    start_date: datetime
    end_date: datetime
    qr_token: Optional[str] = None

    @classmethod
    def from_entities(cls, ticket: TicketEntity, event: EventEntity) -> 'TicketDetailResponse':
        return cls(
            **TicketResponse.from_entity(ticket).model_dump(),
            event_title=event.title,
            start_date=event.start_date,
            end_date=event.end_date,
            qr_token=ticket.qr_token,
        )


class SectionTicketsResponse(BaseModel):
    section: str
    count: int
    tickets: List[TicketResponse]


class AvailableTicketsResponse(BaseModel):
    event_id: int
    total: int
    sections: List[SectionTicketsResponse]


class BookedTicketsResponse(BaseModel):
    items: List[TicketResponse]
    total: int
    limit: int
    offset: int
    has_more: bool


class TicketValidationResponse(BaseModel):
    valid: bool = True
    ticket_id: int
    event_id: int
    event_title: str
    ticket_type: str
    status: str
    section_name: Optional[str] = None
    seat_number: Optional[str] = None
    attendee_id: Optional[int] = None

    @classmethod
    def from_entities(
        cls, ticket: TicketEntity, event: EventEntity
    ) -> 'TicketValidationResponse':
        return cls(
            ticket_id=ticket.id or 0,
            event_id=event.id or 0,
            event_title=event.title,
            ticket_type=ticket.ticket_type,
            status=ticket.status.value,
            section_name=ticket.section_name,
            seat_number=ticket.seat_number,
            attendee_id=ticket.attendee_id,
        )
