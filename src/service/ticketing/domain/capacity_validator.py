"""
Capacity Validator

Checks ticket-type declarations against a venue before anything is written.
Rules run in order and the first failure wins:

1. every entry has a non-empty type, a non-negative numeric price and a non-negative
   integer quantity
2. sectioned venue: types are exactly the section names (no duplicates, omissions or
   extras) and each quantity fits its section
3. general admission: types are unique and the quantities fit the venue
4. `available` / `availableTickets` is clamped to [0, quantity], defaulting to quantity
"""

from collections import Counter
from decimal import Decimal, InvalidOperation
from typing import Any, List, Mapping, Optional, Sequence

from src.platform.exception.exceptions import ValidationError
from src.service.ticketing.domain.entity.event_entity import TicketType
from src.service.venue.domain.entity.venue_entity import VenueEntity


_AVAILABLE_KEYS = ('available', 'availableTickets')


def _parse_price(value: Any) -> Optional[Decimal]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float, Decimal)):
        price = Decimal(str(value))
    elif isinstance(value, str) and value.strip():
        try:
            price = Decimal(value.strip())
        except InvalidOperation:
            return None
    else:
        return None
    if not price.is_finite() or price < 0:
        return None
    return price.quantize(Decimal('0.01'))


def _is_non_negative_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


def _clamp_available(entry: Mapping[str, Any], quantity: int) -> int:
    raw = next((entry[key] for key in _AVAILABLE_KEYS if entry.get(key) is not None), None)
    if raw is None:
        return quantity
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        raise ValidationError(f'Ticket available must be a number, got {raw!r}')
    return max(0, min(int(raw), quantity))


class CapacityValidator:
    @staticmethod
    def validate_ticket_types(
        *, venue: VenueEntity, ticket_types: Sequence[Mapping[str, Any]]
    ) -> List[TicketType]:
        if not isinstance(ticket_types, (list, tuple)) or not ticket_types:
            raise ValidationError('tickets must be a non-empty list')

        # Rule 1: shape of each entry
        parsed: List[tuple[str, Decimal, int, Mapping[str, Any]]] = []
        for index, entry in enumerate(ticket_types):
            if not isinstance(entry, Mapping):
                raise ValidationError(f'tickets[{index}] must be an object')

            type_name = entry.get('type')
            if not isinstance(type_name, str) or not type_name.strip():
                raise ValidationError(f'tickets[{index}].type cannot be empty')

            price = _parse_price(entry.get('price'))
            if price is None:
                raise ValidationError(f'tickets[{index}].price must be a non-negative number')

            quantity = entry.get('quantity')
            if not _is_non_negative_int(quantity):
                raise ValidationError(f'tickets[{index}].quantity must be a non-negative integer')

            parsed.append((type_name.strip(), price, quantity, entry))

        names = [name for name, _, _, _ in parsed]
        duplicates = sorted(name for name, count in Counter(names).items() if count > 1)
        if duplicates:
            raise ValidationError(f'Duplicate ticket types: {", ".join(duplicates)}')

        if venue.has_sections:
            # Rule 2: bijection with the sections
            section_names = {section.name for section in venue.sections}
            missing = sorted(section_names - set(names))
            extra = sorted(set(names) - section_names)
            if missing or extra:
                raise ValidationError(
                    'Ticket types must match the venue sections exactly'
                    f' (missing: {missing or "none"}, unknown: {extra or "none"})'
                )
            for name, _, quantity, _ in parsed:
                section = venue.section_by_name(name)
                assert section is not None
                if quantity > section.capacity:
                    raise ValidationError(
                        f'Ticket type {name} quantity ({quantity}) exceeds section capacity '
                        f'({section.capacity})'
                    )
        else:
            # Rule 3: general admission fits the venue
            total = sum(quantity for _, _, quantity, _ in parsed)
            if total > venue.capacity:
                raise ValidationError(
                    f'Total ticket quantity ({total}) exceeds venue capacity ({venue.capacity})'
                )

        # Rule 4
        return [
            TicketType(
                type=name,
                price=price,
                quantity=quantity,
                available=_clamp_available(entry, quantity),
            )
            for name, price, quantity, entry in parsed
        ]

    @classmethod
    def validate_venue_change(
        cls,
        *,
        current_venue: VenueEntity,
        new_venue: VenueEntity,
        ticket_types: Sequence[TicketType],
    ) -> None:
        """
        An event may move only to a venue of the same seating kind that accepts its fixed
        ticket types. Since every quantity fits its new section, so do the seats already
        generated.
        """
        if current_venue.has_sections != new_venue.has_sections:
            raise ValidationError('New venue must have the same seating kind as the current one')

        cls.validate_ticket_types(
            venue=new_venue, ticket_types=[tt.to_dict() for tt in ticket_types]
        )
