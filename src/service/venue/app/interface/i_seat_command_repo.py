from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from src.service.venue.domain.entity.seat_entity import SeatEntity
from src.service.venue.domain.entity.venue_entity import SectionEntity
from src.service.venue.domain.enum.seat_status import SeatStatus


class ISeatCommandRepo(ABC):
    """Seat arena writes. Every status change is a conditional update."""

    @abstractmethod
    async def create_for_sections(self, *, sections: List[SectionEntity]) -> int:
        """Materialize seats 1..capacity for each section; returns the number created"""
        pass

    @abstractmethod
    async def reserve(
        self, *, seat_ids: List[int], attendee_id: int, held_at: datetime
    ) -> List[int]:
        """Available -> Selected for the given seats; returns the ids that flipped"""
        pass

    @abstractmethod
    async def release(self, *, seat_ids: List[int]) -> int:
        """Force seats back to Available and clear the holder; returns rows touched"""
        pass

    @abstractmethod
    async def update_status(self, *, seat_id: int, status: SeatStatus) -> Optional[SeatEntity]:
        pass
