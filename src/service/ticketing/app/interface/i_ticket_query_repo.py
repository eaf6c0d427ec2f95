from abc import ABC, abstractmethod
from typing import Iterable, List, Optional, Tuple

from src.service.ticketing.domain.entity.ticket_entity import TicketEntity
from src.service.ticketing.domain.enum.ticket_status import TicketStatus


class ITicketQueryRepo(ABC):
    @abstractmethod
    async def get_by_id(self, *, ticket_id: int) -> Optional[TicketEntity]:
        pass

    @abstractmethod
    async def list_available_by_event(self, *, event_id: int) -> List[TicketEntity]:
        """Available tickets ordered by section then id"""
        pass

    @abstractmethod
    async def list_by_attendee(self, *, attendee_id: int) -> List[TicketEntity]:
        pass

    @abstractmethod
    async def list_booked(
        self,
        *,
        admin_id: Optional[int],
        statuses: Iterable[TicketStatus],
        limit: int,
        offset: int,
    ) -> Tuple[List[TicketEntity], int]:
        """Tickets of the admin's events (all events when admin_id is None)"""
        pass
