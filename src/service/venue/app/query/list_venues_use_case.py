from typing import List, Self, Tuple

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.core_setting import settings
from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.venue.app.interface.i_venue_query_repo import IVenueQueryRepo
from src.service.venue.domain.entity.venue_entity import VenueEntity


class ListVenuesUseCase:
    def __init__(self, *, venue_query_repo: IVenueQueryRepo) -> None:
        self.venue_query_repo = venue_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        venue_query_repo: IVenueQueryRepo = Depends(Provide[Container.venue_query_repo]),
    ) -> Self:
        return cls(venue_query_repo=venue_query_repo)

    @Logger.io
    async def list_venues(self, *, limit: int, offset: int) -> Tuple[List[VenueEntity], int]:
        """Page of venues with the total count; limit is capped at MAX_PAGE_LIMIT"""
        limit = max(1, min(limit, settings.MAX_PAGE_LIMIT))
        offset = max(0, offset)

        venues, total = await self.venue_query_repo.list_venues(limit=limit, offset=offset)
        Logger.base.info(f'📋 [LIST_VENUES] {len(venues)} of {total} venues (offset={offset})')
        return venues, total
