from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from src.service.venue.domain.entity.venue_entity import VenueEntity


class IVenueQueryRepo(ABC):
    """Venue Query Repository - read side"""

    @abstractmethod
    async def get_by_id(self, *, venue_id: int) -> Optional[VenueEntity]:
        """Venue with its sections ordered by position"""
        pass

    @abstractmethod
    async def list_venues(self, *, limit: int, offset: int) -> Tuple[List[VenueEntity], int]:
        """Page of venues plus the total count"""
        pass

    @abstractmethod
    async def has_events(self, *, venue_id: int) -> bool:
        pass
