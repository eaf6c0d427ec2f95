from typing import Iterable, List, Optional, Tuple

from sqlalchemy import func, select

from src.platform.database.session_scoped_repo import SessionScopedRepo
from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.interface.i_ticket_query_repo import ITicketQueryRepo
from src.service.ticketing.domain.entity.ticket_entity import TicketEntity
from src.service.ticketing.domain.enum.ticket_status import TicketStatus
from src.service.ticketing.driven_adapter.model.event_model import EventModel
from src.service.ticketing.driven_adapter.model.ticket_model import TicketModel
from src.service.ticketing.driven_adapter.repo.ticketing_mapper import model_to_ticket


class TicketQueryRepoImpl(SessionScopedRepo, ITicketQueryRepo):
    @Logger.io
    async def get_by_id(self, *, ticket_id: int) -> Optional[TicketEntity]:
        async with self._get_session() as session:
            ticket_model = await session.get(TicketModel, ticket_id)
            return model_to_ticket(ticket_model) if ticket_model else None

    @Logger.io(truncate_content=True)
    async def list_available_by_event(self, *, event_id: int) -> List[TicketEntity]:
        async with self._get_session() as session:
            result = await session.execute(
                select(TicketModel)
                .where(
                    TicketModel.event_id == event_id,
                    TicketModel.status == TicketStatus.AVAILABLE.value,
                )
                .order_by(TicketModel.section_name, TicketModel.seat_id, TicketModel.id)
            )
            return [model_to_ticket(ticket_model) for ticket_model in result.scalars().all()]

    @Logger.io
    async def list_by_attendee(self, *, attendee_id: int) -> List[TicketEntity]:
        async with self._get_session() as session:
            result = await session.execute(
                select(TicketModel)
                .where(TicketModel.attendee_id == attendee_id)
                .order_by(TicketModel.purchased_at.desc().nulls_last(), TicketModel.id)
            )
            return [model_to_ticket(ticket_model) for ticket_model in result.scalars().all()]

    @Logger.io
    async def list_booked(
        self,
        *,
        admin_id: Optional[int],
        statuses: Iterable[TicketStatus],
        limit: int,
        offset: int,
    ) -> Tuple[List[TicketEntity], int]:
        conditions = [TicketModel.status.in_([status.value for status in statuses])]
        if admin_id is not None:
            conditions.append(EventModel.admin_id == admin_id)

        base = select(TicketModel).join(EventModel, EventModel.id == TicketModel.event_id)

        async with self._get_session() as session:
            total = await session.scalar(
                select(func.count())
                .select_from(TicketModel)
                .join(EventModel, EventModel.id == TicketModel.event_id)
                .where(*conditions)
            )
            result = await session.execute(
                base.where(*conditions)
                .order_by(TicketModel.purchased_at.desc().nulls_last(), TicketModel.id)
                .limit(limit)
                .offset(offset)
            )
            tickets = [model_to_ticket(ticket_model) for ticket_model in result.scalars().all()]

        return tickets, total or 0
