from collections import defaultdict
from datetime import datetime
from typing import Dict, List, Optional, Tuple

from sqlalchemy import func, select

from src.platform.database.session_scoped_repo import SessionScopedRepo
from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.interface.i_event_query_repo import IEventQueryRepo
from src.service.ticketing.domain.entity.event_entity import EventEntity
from src.service.ticketing.domain.enum.ticket_status import TicketStatus
from src.service.ticketing.driven_adapter.model.event_model import EventModel
from src.service.ticketing.driven_adapter.model.ticket_model import TicketModel
from src.service.ticketing.driven_adapter.repo.ticketing_mapper import model_to_event


class EventQueryRepoImpl(SessionScopedRepo, IEventQueryRepo):
    @Logger.io
    async def get_by_id(self, *, event_id: int) -> Optional[EventEntity]:
        async with self._get_session() as session:
            event_model = await session.get(EventModel, event_id)
            return model_to_event(event_model) if event_model else None

    @Logger.io
    async def list_events(
        self,
        *,
        limit: int,
        offset: int,
        venue_id: Optional[int] = None,
        ends_after: Optional[datetime] = None,
    ) -> Tuple[List[EventEntity], int]:
        conditions = []
        if venue_id is not None:
            conditions.append(EventModel.venue_id == venue_id)
        if ends_after is not None:
            conditions.append(EventModel.end_date > ends_after)

        async with self._get_session() as session:
            total = await session.scalar(
                select(func.count()).select_from(EventModel).where(*conditions)
            )
            result = await session.execute(
                select(EventModel)
                .where(*conditions)
                .order_by(EventModel.start_date, EventModel.id)
                .limit(limit)
                .offset(offset)
            )
            events = [model_to_event(event_model) for event_model in result.scalars().all()]

        return events, total or 0

    @Logger.io
    async def count_available_by_type(self, *, event_ids: List[int]) -> Dict[int, Dict[str, int]]:
        if not event_ids:
            return {}

        async with self._get_session() as session:
            result = await session.execute(
                select(TicketModel.event_id, TicketModel.ticket_type, func.count())
                .where(
                    TicketModel.event_id.in_(event_ids),
                    TicketModel.status == TicketStatus.AVAILABLE.value,
                )
                .group_by(TicketModel.event_id, TicketModel.ticket_type)
            )

            counts: Dict[int, Dict[str, int]] = defaultdict(dict)
            for event_id, ticket_type, count in result.all():
                counts[event_id][ticket_type] = count
            return dict(counts)
