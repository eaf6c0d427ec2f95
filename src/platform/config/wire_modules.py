"""
Wire Modules Configuration

Defines the modules that need dependency injection wiring.
Shared between production and test environments.
"""

from types import ModuleType

from src.service.identity.app.command import create_user_use_case
from src.service.identity.driving_adapter.http_controller import user_controller
from src.service.identity.driving_adapter.http_controller.auth import current_user
from src.service.ticketing.app.command import (
    cancel_ticket_use_case,
    check_in_ticket_use_case,
    create_event_and_tickets_use_case,
    delete_event_use_case,
    purchase_ticket_use_case,
    reserve_ticket_use_case,
    update_event_use_case,
)
from src.service.ticketing.app.query import (
    get_event_use_case,
    get_ticket_use_case,
    list_events_use_case,
    list_tickets_use_case,
    validate_ticket_use_case,
)
from src.service.venue.app.command import (
    create_venue_use_case,
    delete_venue_use_case,
    seat_reservation_use_case,
    update_seat_status_use_case,
    update_venue_use_case,
)
from src.service.venue.app.query import (
    get_venue_use_case,
    list_section_seats_use_case,
    list_venues_use_case,
)


WIRE_MODULES: list[ModuleType] = [
    # identity
    create_user_use_case,
    user_controller,
    current_user,
    # venue
    create_venue_use_case,
    update_venue_use_case,
    delete_venue_use_case,
    seat_reservation_use_case,
    update_seat_status_use_case,
    get_venue_use_case,
    list_venues_use_case,
    list_section_seats_use_case,
    # ticketing
    create_event_and_tickets_use_case,
    update_event_use_case,
    delete_event_use_case,
    reserve_ticket_use_case,
    purchase_ticket_use_case,
    cancel_ticket_use_case,
    check_in_ticket_use_case,
    get_event_use_case,
    list_events_use_case,
    list_tickets_use_case,
    get_ticket_use_case,
    validate_ticket_use_case,
]
