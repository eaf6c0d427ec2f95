from typing import List, Optional, Tuple

from sqlalchemy import column, exists, func, select, table

from src.platform.database.session_scoped_repo import SessionScopedRepo
from src.platform.logging.loguru_io import Logger
from src.service.venue.app.interface.i_venue_query_repo import IVenueQueryRepo
from src.service.venue.domain.entity.venue_entity import VenueEntity
from src.service.venue.driven_adapter.model.venue_model import VenueModel
from src.service.venue.driven_adapter.repo.venue_mapper import model_to_venue


# Lightweight handle on the ticketing service's event table; avoids importing its models
_event_table = table('event', column('id'), column('venue_id'))


class VenueQueryRepoImpl(SessionScopedRepo, IVenueQueryRepo):
    @Logger.io
    async def get_by_id(self, *, venue_id: int) -> Optional[VenueEntity]:
        async with self._get_session() as session:
            result = await session.execute(select(VenueModel).where(VenueModel.id == venue_id))
            venue_model = result.scalar_one_or_none()
            return model_to_venue(venue_model) if venue_model else None

    @Logger.io
    async def list_venues(self, *, limit: int, offset: int) -> Tuple[List[VenueEntity], int]:
        async with self._get_session() as session:
            total = (await session.execute(select(func.count(VenueModel.id)))).scalar_one()
            result = await session.execute(
                select(VenueModel).order_by(VenueModel.id).limit(limit).offset(offset)
            )
            venues = [model_to_venue(m) for m in result.scalars().all()]
            Logger.base.info(f'🏟️ [LIST_VENUES] {len(venues)}/{total} venues (offset={offset})')
            return venues, total

    @Logger.io
    async def has_events(self, *, venue_id: int) -> bool:
        async with self._get_session() as session:
            result = await session.execute(
                select(exists().where(_event_table.c.venue_id == venue_id))
            )
            return bool(result.scalar())
