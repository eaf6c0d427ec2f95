from typing import List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.venue.app.interface.i_seat_query_repo import ISeatQueryRepo
from src.service.venue.domain.entity.seat_entity import SeatEntity


class ListSectionSeatsUseCase:
    def __init__(self, *, seat_query_repo: ISeatQueryRepo) -> None:
        self.seat_query_repo = seat_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        seat_query_repo: ISeatQueryRepo = Depends(Provide[Container.seat_query_repo]),
    ) -> Self:
        return cls(seat_query_repo=seat_query_repo)

    @Logger.io
    async def list_seats(self, *, section_id: int, only_available: bool = False) -> List[SeatEntity]:
        return await self.seat_query_repo.list_by_section(
            section_id=section_id, only_available=only_available
        )
