from datetime import datetime
from typing import List, Optional

from sqlalchemy import insert, update

from src.platform.database.session_scoped_repo import SessionScopedRepo
from src.platform.logging.loguru_io import Logger
from src.service.venue.app.interface.i_seat_command_repo import ISeatCommandRepo
from src.service.venue.domain.entity.seat_entity import SeatEntity
from src.service.venue.domain.entity.venue_entity import SectionEntity
from src.service.venue.domain.enum.seat_status import SeatStatus
from src.service.venue.driven_adapter.model.seat_model import SeatModel
from src.service.venue.driven_adapter.repo.venue_mapper import model_to_seat


class SeatCommandRepoImpl(SessionScopedRepo, ISeatCommandRepo):
    @Logger.io
    async def create_for_sections(self, *, sections: List[SectionEntity]) -> int:
        rows = [
            {'section_id': section.id, 'number': number, 'status': SeatStatus.AVAILABLE.value}
            for section in sections
            for number in range(1, section.capacity + 1)
        ]
        if not rows:
            return 0

        async with self._get_session() as session:
            await session.execute(insert(SeatModel), rows)

        Logger.base.info(f'💺 [SEATS] Materialized {len(rows)} seats in {len(sections)} sections')
        return len(rows)

    @Logger.io
    async def reserve(
        self, *, seat_ids: List[int], attendee_id: int, held_at: datetime
    ) -> List[int]:
        async with self._get_session() as session:
            result = await session.execute(
                update(SeatModel)
                .where(
                    SeatModel.id.in_(seat_ids),
                    SeatModel.status == SeatStatus.AVAILABLE.value,
                )
                .values(status=SeatStatus.SELECTED.value, held_by=attendee_id, held_at=held_at)
                .returning(SeatModel.id)
            )
            return list(result.scalars().all())

    @Logger.io
    async def release(self, *, seat_ids: List[int]) -> int:
        async with self._get_session() as session:
            result = await session.execute(
                update(SeatModel)
                .where(SeatModel.id.in_(seat_ids))
                .values(status=SeatStatus.AVAILABLE.value, held_by=None, held_at=None)
                .returning(SeatModel.id)
            )
            return len(result.scalars().all())

    @Logger.io
    async def update_status(self, *, seat_id: int, status: SeatStatus) -> Optional[SeatEntity]:
        values: dict = {'status': status.value}
        if status in (SeatStatus.AVAILABLE, SeatStatus.UNAVAILABLE):
            values |= {'held_by': None, 'held_at': None}

        async with self._get_session() as session:
            result = await session.execute(
                update(SeatModel)
                .where(SeatModel.id == seat_id)
                .values(**values)
                .returning(SeatModel)
            )
            seat_model = result.scalar_one_or_none()
            return model_to_seat(seat_model) if seat_model else None
