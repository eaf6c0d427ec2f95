from abc import ABC, abstractmethod
from datetime import datetime
from typing import Dict, List, Optional, Tuple

from src.service.ticketing.domain.entity.event_entity import EventEntity


class IEventQueryRepo(ABC):
    @abstractmethod
    async def get_by_id(self, *, event_id: int) -> Optional[EventEntity]:
        pass

    @abstractmethod
    async def list_events(
        self,
        *,
        limit: int,
        offset: int,
        venue_id: Optional[int] = None,
        ends_after: Optional[datetime] = None,
    ) -> Tuple[List[EventEntity], int]:
        """Page of events ordered by start date plus the total count"""
        pass

    @abstractmethod
    async def count_available_by_type(self, *, event_ids: List[int]) -> Dict[int, Dict[str, int]]:
        """event id -> ticket type -> number of rows currently available"""
        pass
