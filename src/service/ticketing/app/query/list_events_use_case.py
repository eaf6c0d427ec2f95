from datetime import datetime, timezone
from typing import Dict, List, Optional, Self, Tuple

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.core_setting import settings
from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.interface.i_event_query_repo import IEventQueryRepo
from src.service.ticketing.domain.entity.event_entity import EventEntity


class ListEventsUseCase:
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
    async def list_events(
        self,
        *,
        limit: int,
        offset: int,
        upcoming_only: bool = False,
        venue_id: Optional[int] = None,
    ) -> Tuple[List[EventEntity], int, Dict[int, Dict[str, int]]]:
        """
        Page of events, the total count, and per-event availability by ticket type.
        `upcoming_only` keeps events that have not ended yet.
        """
        limit = max(1, min(limit, settings.MAX_PAGE_LIMIT))
        offset = max(0, offset)
        ends_after = datetime.now(timezone.utc) if upcoming_only else None

        events, total = await self.event_query_repo.list_events(
            limit=limit, offset=offset, venue_id=venue_id, ends_after=ends_after
        )
        availability = (
            await self.event_query_repo.count_available_by_type(
                event_ids=[event.id for event in events if event.id is not None]
            )
            if events
            else {}
        )

        Logger.base.info(f'📋 [LIST_EVENTS] {len(events)} of {total} events (offset={offset})')
        return events, total, availability
