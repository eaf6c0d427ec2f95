from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Set, Tuple

from src.service.venue.domain.entity.seat_entity import SeatEntity


# (section name, seat number) -> seat id
SeatIdMap = Dict[Tuple[str, int], int]


class ISeatQueryRepo(ABC):
    @abstractmethod
    async def get_by_id(self, *, seat_id: int) -> Optional[SeatEntity]:
        pass

    @abstractmethod
    async def get_venue_admin_id(self, *, seat_id: int) -> Optional[int]:
        """Admin owning the venue the seat belongs to"""
        pass

    @abstractmethod
    async def find_existing_ids(self, *, seat_ids: List[int]) -> Set[int]:
        pass

    @abstractmethod
    async def list_by_section(
        self, *, section_id: int, only_available: bool = False
    ) -> List[SeatEntity]:
        """Seats of a section ordered by number"""
        pass

    @abstractmethod
    async def map_seat_ids(self, *, venue_id: int) -> SeatIdMap:
        pass
