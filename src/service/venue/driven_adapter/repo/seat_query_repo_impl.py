from typing import List, Optional, Set

from sqlalchemy import select

from src.platform.database.session_scoped_repo import SessionScopedRepo
from src.platform.logging.loguru_io import Logger
from src.service.venue.app.interface.i_seat_query_repo import ISeatQueryRepo, SeatIdMap
from src.service.venue.domain.entity.seat_entity import SeatEntity
from src.service.venue.domain.enum.seat_status import SeatStatus
from src.service.venue.driven_adapter.model.seat_model import SeatModel
from src.service.venue.driven_adapter.model.venue_model import VenueModel, VenueSectionModel
from src.service.venue.driven_adapter.repo.venue_mapper import model_to_seat


class SeatQueryRepoImpl(SessionScopedRepo, ISeatQueryRepo):
    @Logger.io
    async def get_by_id(self, *, seat_id: int) -> Optional[SeatEntity]:
        async with self._get_session() as session:
            result = await session.execute(
                select(SeatModel, VenueSectionModel.name)
                .join(VenueSectionModel, VenueSectionModel.id == SeatModel.section_id)
                .where(SeatModel.id == seat_id)
            )
            row = result.one_or_none()
            return model_to_seat(row[0], section_name=row[1]) if row else None

    @Logger.io
    async def get_venue_admin_id(self, *, seat_id: int) -> Optional[int]:
        async with self._get_session() as session:
            result = await session.execute(
                select(VenueModel.admin_id)
                .join(VenueSectionModel, VenueSectionModel.venue_id == VenueModel.id)
                .join(SeatModel, SeatModel.section_id == VenueSectionModel.id)
                .where(SeatModel.id == seat_id)
            )
            return result.scalar_one_or_none()

    @Logger.io
    async def find_existing_ids(self, *, seat_ids: List[int]) -> Set[int]:
        async with self._get_session() as session:
            result = await session.execute(select(SeatModel.id).where(SeatModel.id.in_(seat_ids)))
            return set(result.scalars().all())

    @Logger.io
    async def list_by_section(
        self, *, section_id: int, only_available: bool = False
    ) -> List[SeatEntity]:
        stmt = (
            select(SeatModel, VenueSectionModel.name)
            .join(VenueSectionModel, VenueSectionModel.id == SeatModel.section_id)
            .where(SeatModel.section_id == section_id)
            .order_by(SeatModel.number)
        )
        if only_available:
            stmt = stmt.where(SeatModel.status == SeatStatus.AVAILABLE.value)

        async with self._get_session() as session:
            result = await session.execute(stmt)
            return [model_to_seat(seat, section_name=name) for seat, name in result.all()]

    @Logger.io(truncate_content=True)
    async def map_seat_ids(self, *, venue_id: int) -> SeatIdMap:
        async with self._get_session() as session:
            result = await session.execute(
                select(VenueSectionModel.name, SeatModel.number, SeatModel.id)
                .join(SeatModel, SeatModel.section_id == VenueSectionModel.id)
                .where(VenueSectionModel.venue_id == venue_id)
            )
            return {(name, number): seat_id for name, number, seat_id in result.all()}
