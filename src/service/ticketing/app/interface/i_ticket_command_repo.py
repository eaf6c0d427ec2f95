from abc import ABC, abstractmethod
from datetime import datetime
from typing import Iterable, List, Optional

from src.service.ticketing.domain.entity.ticket_entity import TicketEntity
from src.service.ticketing.domain.enum.ticket_status import TicketStatus
from src.service.venue.app.interface.i_seat_query_repo import SeatIdMap


class ITicketCommandRepo(ABC):
    """
    Ticket Command Repository - write side, always used inside a unit of work

    Every status change is a conditional UPDATE guarded by the expected status; None
    means no row matched. A TicketHistory row is written in the same transaction for
    every transition.
    """

    @abstractmethod
    async def bulk_create(self, *, tickets: List[TicketEntity]) -> int:
        pass

    @abstractmethod
    async def get_for_update(self, *, ticket_id: int) -> Optional[TicketEntity]:
        """Load a ticket holding its row lock until the transaction ends"""
        pass

    @abstractmethod
    async def lock_event_tickets(self, *, event_id: int, statuses: Iterable[TicketStatus]) -> int:
        """
        Lock every ticket row of the event (FOR UPDATE, id order) and count those in
        `statuses`. Concurrent transitions on the pool wait until the transaction ends.
        """
        pass

    @abstractmethod
    async def lock_first_available(
        self, *, event_id: int, ticket_type: str
    ) -> Optional[TicketEntity]:
        """Lowest available row of the type, locked FOR UPDATE SKIP LOCKED"""
        pass

    @abstractmethod
    async def reserve(
        self, *, ticket_id: int, attendee_id: int, reserved_at: datetime
    ) -> Optional[TicketEntity]:
        """available -> reserved"""
        pass

    @abstractmethod
    async def release(self, *, ticket_id: int) -> Optional[TicketEntity]:
        """reserved -> available"""
        pass

    @abstractmethod
    async def release_expired_holds(
        self, *, cutoff: datetime, event_id: Optional[int] = None
    ) -> int:
        """reserved rows held since before `cutoff` -> available, optionally for one event"""
        pass

    @abstractmethod
    async def purchase(
        self,
        *,
        ticket_id: int,
        expected: TicketStatus,
        attendee_id: int,
        qr_token: str,
        purchased_at: datetime,
    ) -> Optional[TicketEntity]:
        """available | reserved -> sold"""
        pass

    @abstractmethod
    async def check_in(self, *, ticket_id: int, qr_token: str) -> Optional[TicketEntity]:
        """sold -> used, only for the token stored on the row"""
        pass

    @abstractmethod
    async def close_and_reopen(
        self, *, ticket_id: int, target: TicketStatus
    ) -> Optional[TicketEntity]:
        """sold -> cancelled | refunded, then the same row reopens as available"""
        pass

    @abstractmethod
    async def repoint_seats(self, *, event_id: int, venue_id: int, seat_id_map: SeatIdMap) -> int:
        """Move an event's tickets onto another venue's arena; returns rows updated"""
        pass
