from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import ConflictError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.identity.domain.authorization_policy import Action, AuthorizationPolicy
from src.service.identity.domain.entity.user_entity import UserEntity


class DeleteVenueUseCase:
    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow

    @classmethod
    @inject
    def depends(cls, uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work])) -> Self:
        return cls(uow=uow)

    @Logger.io
    async def delete_venue(self, *, actor: UserEntity, venue_id: int) -> None:
        async with self.uow:
            venue = await self.uow.venue_query_repo.get_by_id(venue_id=venue_id)
            if venue is None:
                raise NotFoundError(f'Venue not found: {venue_id}')
            AuthorizationPolicy.ensure(actor, Action.MANAGE_VENUE, venue)

            if await self.uow.venue_query_repo.has_events(venue_id=venue_id):
                raise ConflictError('Venue has events; delete them first')

            await self.uow.venue_command_repo.delete(venue_id=venue_id)
            await self.uow.commit()

        Logger.base.info(f'🗑️ [DELETE_VENUE] Venue {venue_id} deleted')
