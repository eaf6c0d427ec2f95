from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.identity.domain.authorization_policy import (
    Action,
    AuthorizationPolicy,
    Ownership,
)
from src.service.identity.domain.entity.user_entity import UserEntity
from src.service.venue.domain.entity.seat_entity import SeatEntity
from src.service.venue.domain.enum.seat_status import SeatStatus


class UpdateSeatStatusUseCase:
    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow

    @classmethod
    @inject
    def depends(cls, uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work])) -> Self:
        return cls(uow=uow)

    @Logger.io
    async def update_status(
        self, *, actor: UserEntity, seat_id: int, status: SeatStatus
    ) -> SeatEntity:
        async with self.uow:
            admin_id = await self.uow.seat_query_repo.get_venue_admin_id(seat_id=seat_id)
            if admin_id is None:
                raise NotFoundError(f'Seat not found: {seat_id}')
            AuthorizationPolicy.ensure(actor, Action.MANAGE_VENUE, Ownership(admin_id=admin_id))

            seat = await self.uow.seat_command_repo.update_status(seat_id=seat_id, status=status)
            if seat is None:
                raise NotFoundError(f'Seat not found: {seat_id}')
            await self.uow.commit()

        Logger.base.info(f'💺 [SEAT_STATUS] Seat {seat_id} -> {status.value}')
        return seat
