from typing import Dict, Self, Tuple

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.interface.i_event_query_repo import IEventQueryRepo
from src.service.ticketing.domain.entity.event_entity import EventEntity


class GetEventUseCase:
    def __init__(self, *, event_query_repo: IEventQueryRepo) -> None:
        self.event_query_repo = event_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        event_query_repo: IEventQueryRepo = Depends(Provide[Container.event_query_repo]),
    ) -> Self:
        return cls(event_query_repo=event_query_repo)

    @Logger.io
    async def get_by_id(self, *, event_id: int) -> Tuple[EventEntity, Dict[str, int]]:
        """Event plus ticket type -> currently available count, derived from the ticket rows"""
        event = await self.event_query_repo.get_by_id(event_id=event_id)
        if event is None:
            Logger.base.warning(f'⚠️ [GET_EVENT] Event {event_id} not found')
            raise NotFoundError(f'Event not found: {event_id}')

        availability = await self.event_query_repo.count_available_by_type(event_ids=[event_id])
        return event, availability.get(event_id, {})
