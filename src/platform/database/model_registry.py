"""Imports every ORM model so `Base.metadata` knows the full schema (alembic, create_all)"""

from src.service.identity.driven_adapter.model.user_model import UserModel
from src.service.ticketing.driven_adapter.model.event_model import EventModel
from src.service.ticketing.driven_adapter.model.ticket_history_model import TicketHistoryModel
from src.service.ticketing.driven_adapter.model.ticket_model import TicketModel
from src.service.venue.driven_adapter.model.seat_model import SeatModel
from src.service.venue.driven_adapter.model.venue_model import VenueModel, VenueSectionModel


__all__ = [
    'UserModel',
    'VenueModel',
    'VenueSectionModel',
    'SeatModel',
    'EventModel',
    'TicketModel',
    'TicketHistoryModel',
]
