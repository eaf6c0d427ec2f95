from abc import ABC, abstractmethod

from src.service.ticketing.domain.entity.event_entity import EventEntity


class IEventCommandRepo(ABC):
    """Event Command Repository - write side, always used inside a unit of work"""

    @abstractmethod
    async def create(self, *, event: EventEntity) -> EventEntity:
        """Insert the event row and flush so the returned entity carries its id"""
        pass

    @abstractmethod
    async def update(self, *, event: EventEntity) -> EventEntity:
        """Update the mutable fields; ticket types are never rewritten"""
        pass

    @abstractmethod
    async def delete(self, *, event_id: int) -> None:
        """Delete the event; its ticket pool and history go with it"""
        pass
