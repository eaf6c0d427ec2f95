from datetime import datetime
from typing import Any, Iterable, List, Optional

from sqlalchemy import insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.database.session_scoped_repo import SessionScopedRepo
from src.platform.exception.exceptions import IntegrityError
from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.interface.i_ticket_command_repo import ITicketCommandRepo
from src.service.ticketing.domain.aggregate.event_ticketing_aggregate import parse_seat_label
from src.service.ticketing.domain.entity.ticket_entity import TicketEntity
from src.service.ticketing.domain.enum.ticket_status import TicketStatus
from src.service.ticketing.domain.ticket_lifecycle import REOPENING_STATUSES, ensure_transition
from src.service.ticketing.driven_adapter.model.ticket_history_model import TicketHistoryModel
from src.service.ticketing.driven_adapter.model.ticket_model import TicketModel
from src.service.ticketing.driven_adapter.repo.ticketing_mapper import model_to_ticket
from src.service.venue.app.interface.i_seat_query_repo import SeatIdMap


# Values that put a row back into the pool
_OPEN_ROW: dict[str, Any] = {
    'attendee_id': None,
    'qr_token': None,
    'reserved_at': None,
    'purchased_at': None,
}


class TicketCommandRepoImpl(SessionScopedRepo, ITicketCommandRepo):
    @Logger.io(truncate_content=True)
    async def bulk_create(self, *, tickets: List[TicketEntity]) -> int:
        if not tickets:
            return 0

        rows = [
            {
                'event_id': ticket.event_id,
                'venue_id': ticket.venue_id,
                'seat_id': ticket.seat_id,
                'ticket_type': ticket.ticket_type,
                'section_name': ticket.section_name,
                'seat_number': ticket.seat_number,
                'price': ticket.price,
                'status': ticket.status.value,
            }
            for ticket in tickets
        ]
        async with self._get_session() as session:
            await session.execute(insert(TicketModel), rows)

        return len(rows)

    @Logger.io
    async def get_for_update(self, *, ticket_id: int) -> Optional[TicketEntity]:
        async with self._get_session() as session:
            result = await session.execute(
                select(TicketModel).where(TicketModel.id == ticket_id).with_for_update()
            )
            ticket_model = result.scalar_one_or_none()
            return model_to_ticket(ticket_model) if ticket_model else None

    @Logger.io
    async def lock_event_tickets(self, *, event_id: int, statuses: Iterable[TicketStatus]) -> int:
        wanted = {status.value for status in statuses}
        async with self._get_session() as session:
            # FOR UPDATE cannot carry an aggregate, so lock the rows and count here
            result = await session.execute(
                select(TicketModel.status)
                .where(TicketModel.event_id == event_id)
                .order_by(TicketModel.id)
                .with_for_update()
            )
            return sum(1 for status in result.scalars() if status in wanted)

    @Logger.io
    async def lock_first_available(
        self, *, event_id: int, ticket_type: str
    ) -> Optional[TicketEntity]:
        async with self._get_session() as session:
            result = await session.execute(
                select(TicketModel)
                .where(
                    TicketModel.event_id == event_id,
                    TicketModel.ticket_type == ticket_type,
                    TicketModel.status == TicketStatus.AVAILABLE.value,
                )
                .order_by(TicketModel.seat_id, TicketModel.id)
                .limit(1)
                .with_for_update(skip_locked=True)
            )
            ticket_model = result.scalar_one_or_none()
            return model_to_ticket(ticket_model) if ticket_model else None

    @Logger.io
    async def reserve(
        self, *, ticket_id: int, attendee_id: int, reserved_at: datetime
    ) -> Optional[TicketEntity]:
        async with self._get_session() as session:
            return await self._transition(
                session,
                ticket_id=ticket_id,
                expected=TicketStatus.AVAILABLE,
                target=TicketStatus.RESERVED,
                values={'attendee_id': attendee_id, 'reserved_at': reserved_at},
            )

    @Logger.io
    async def release(self, *, ticket_id: int) -> Optional[TicketEntity]:
        async with self._get_session() as session:
            return await self._transition(
                session,
                ticket_id=ticket_id,
                expected=TicketStatus.RESERVED,
                target=TicketStatus.AVAILABLE,
                values=_OPEN_ROW,
            )

    @Logger.io
    async def release_expired_holds(
        self, *, cutoff: datetime, event_id: Optional[int] = None
    ) -> int:
        conditions = [
            TicketModel.status == TicketStatus.RESERVED.value,
            TicketModel.reserved_at < cutoff,
        ]
        if event_id is not None:
            conditions.append(TicketModel.event_id == event_id)

        async with self._get_session() as session:
            result = await session.execute(
                update(TicketModel)
                .where(*conditions)
                .values(status=TicketStatus.AVAILABLE.value, **_OPEN_ROW)
                .returning(TicketModel.id)
                .execution_options(synchronize_session=False)
            )
            released_ids = list(result.scalars().all())
            if released_ids:
                await session.execute(
                    insert(TicketHistoryModel),
                    [
                        {
                            'ticket_id': ticket_id,
                            'from_status': TicketStatus.RESERVED.value,
                            'to_status': TicketStatus.AVAILABLE.value,
                            'attendee_id': None,
                        }
                        for ticket_id in released_ids
                    ],
                )
            return len(released_ids)

    @Logger.io
    async def purchase(
        self,
        *,
        ticket_id: int,
        expected: TicketStatus,
        attendee_id: int,
        qr_token: str,
        purchased_at: datetime,
    ) -> Optional[TicketEntity]:
        async with self._get_session() as session:
            return await self._transition(
                session,
                ticket_id=ticket_id,
                expected=expected,
                target=TicketStatus.SOLD,
                values={
                    'attendee_id': attendee_id,
                    'qr_token': qr_token,
                    'purchased_at': purchased_at,
                    'reserved_at': None,
                },
            )

    @Logger.io
    async def check_in(self, *, ticket_id: int, qr_token: str) -> Optional[TicketEntity]:
        async with self._get_session() as session:
            return await self._transition(
                session,
                ticket_id=ticket_id,
                expected=TicketStatus.SOLD,
                target=TicketStatus.USED,
                values={},
                extra_conditions=[TicketModel.qr_token == qr_token],
            )

    @Logger.io
    async def close_and_reopen(
        self, *, ticket_id: int, target: TicketStatus
    ) -> Optional[TicketEntity]:
        if target not in REOPENING_STATUSES:
            raise ValueError(f'{target.value} does not reopen a ticket')

        async with self._get_session() as session:
            holder = await session.scalar(
                select(TicketModel.attendee_id).where(TicketModel.id == ticket_id)
            )
            closed = await self._transition(
                session,
                ticket_id=ticket_id,
                expected=TicketStatus.SOLD,
                target=target,
                values=_OPEN_ROW,
                history_attendee_id=holder,
            )
            if closed is None:
                return None

            # Same unit goes back on sale
            return await self._transition(
                session,
                ticket_id=ticket_id,
                expected=target,
                target=TicketStatus.AVAILABLE,
                values={},
                check_graph=False,
            )

    @Logger.io
    async def repoint_seats(self, *, event_id: int, venue_id: int, seat_id_map: SeatIdMap) -> int:
        async with self._get_session() as session:
            result = await session.execute(
                select(TicketModel.id, TicketModel.seat_number).where(
                    TicketModel.event_id == event_id
                )
            )
            rows = []
            for ticket_id, seat_number in result.all():
                seat_id = None
                if seat_number is not None:
                    seat_id = seat_id_map.get(parse_seat_label(seat_number))
                    if seat_id is None:
                        raise IntegrityError(f'Seat {seat_number} does not exist in venue {venue_id}')
                rows.append({'id': ticket_id, 'venue_id': venue_id, 'seat_id': seat_id})

            if rows:
                # ORM bulk UPDATE by primary key
                await session.execute(update(TicketModel), rows)
            return len(rows)

    async def _transition(
        self,
        session: AsyncSession,
        *,
        ticket_id: int,
        expected: TicketStatus,
        target: TicketStatus,
        values: dict[str, Any],
        extra_conditions: Optional[list] = None,
        check_graph: bool = True,
        history_attendee_id: Optional[int] = None,
    ) -> Optional[TicketEntity]:
        if check_graph:
            ensure_transition(expected, target)

        result = await session.execute(
            update(TicketModel)
            .where(
                TicketModel.id == ticket_id,
                TicketModel.status == expected.value,
                *(extra_conditions or []),
            )
            .values(status=target.value, **values)
            .returning(TicketModel)
        )
        ticket_model = result.scalar_one_or_none()
        if ticket_model is None:
            return None

        session.add(
            TicketHistoryModel(
                ticket_id=ticket_id,
                from_status=expected.value,
                to_status=target.value,
                attendee_id=history_attendee_id or ticket_model.attendee_id,
            )
        )
        await session.flush()
        return model_to_ticket(ticket_model)
