from abc import ABC, abstractmethod
from typing import List

from src.service.venue.domain.entity.venue_entity import SectionEntity, VenueEntity


class IVenueCommandRepo(ABC):
    """Venue Command Repository - write side, always used inside a unit of work"""

    @abstractmethod
    async def create(self, *, venue: VenueEntity) -> VenueEntity:
        """Insert venue and sections; returned sections carry their ids"""
        pass

    @abstractmethod
    async def update_details(self, *, venue: VenueEntity) -> VenueEntity:
        """Update name, location, capacity and has_sections"""
        pass

    @abstractmethod
    async def replace_sections(
        self, *, venue_id: int, sections: List[SectionEntity]
    ) -> List[SectionEntity]:
        """Drop the old sections (their seats cascade) and insert the new ones"""
        pass

    @abstractmethod
    async def delete(self, *, venue_id: int) -> None:
        pass
