from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Dict, List, Optional

import attrs

from src.platform.exception.exceptions import ValidationError


def _validate_non_empty_string(instance: object, attribute: attrs.Attribute, value: str) -> None:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f'Event {attribute.name} cannot be empty')


def as_utc(value: datetime) -> datetime:
    """Offset-less input is taken as UTC; aware input is converted to UTC"""
    if value.tzinfo is None or value.utcoffset() is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


@attrs.define(frozen=True)
class TicketType:
    """A named class of sellable unit declared at event creation"""

    type: str
    price: Decimal
    quantity: int
    available: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            'type': self.type,
            'price': str(self.price),
            'quantity': self.quantity,
            'available': self.available,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'TicketType':
        return cls(
            type=data['type'],
            price=Decimal(str(data['price'])),
            quantity=int(data['quantity']),
            available=int(data.get('available', data['quantity'])),
        )


@attrs.define
class EventEntity:
    admin_id: int
    venue_id: int
    title: str = attrs.field(validator=_validate_non_empty_string)
    start_date: datetime = attrs.field(converter=as_utc)
    end_date: datetime = attrs.field(converter=as_utc)
    description: str = ''
    artist_lineup: List[str] = attrs.field(factory=list)
    image_urls: List[str] = attrs.field(factory=list)
    ticket_types: List[TicketType] = attrs.field(factory=list)
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __attrs_post_init__(self) -> None:
        self.validate_dates()

    def validate_dates(self) -> None:
        if self.end_date <= self.start_date:
            raise ValidationError('end_date must be after start_date')

    def has_ended(self, *, now: datetime) -> bool:
        return self.end_date <= as_utc(now)

    def ticket_type(self, name: str) -> Optional[TicketType]:
        return next((tt for tt in self.ticket_types if tt.type == name), None)
