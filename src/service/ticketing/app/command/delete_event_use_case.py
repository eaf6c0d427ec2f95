from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import ConflictError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.identity.domain.authorization_policy import Action, AuthorizationPolicy
from src.service.identity.domain.entity.user_entity import UserEntity
from src.service.ticketing.domain.enum.ticket_status import TicketStatus


# A pool with any of these cannot be dropped
HELD_STATUSES = (TicketStatus.RESERVED, TicketStatus.SOLD, TicketStatus.USED)


class DeleteEventUseCase:
    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow

    @classmethod
    @inject
    def depends(cls, uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work])) -> Self:
        return cls(uow=uow)

    @Logger.io
    async def delete_event(self, *, actor: UserEntity, event_id: int) -> None:
        async with self.uow:
            event = await self.uow.event_query_repo.get_by_id(event_id=event_id)
            if event is None:
                raise NotFoundError(f'Event not found: {event_id}')
            AuthorizationPolicy.ensure(actor, Action.MANAGE_EVENT, event)

            # Purchases and holds on the pool wait behind these row locks until the delete
            # commits, then find their row gone
            held = await self.uow.ticket_command_repo.lock_event_tickets(
                event_id=event_id, statuses=HELD_STATUSES
            )
            if held:
                raise ConflictError(f'Event has {held} reserved, sold or used tickets')

            await self.uow.event_command_repo.delete(event_id=event_id)
            await self.uow.commit()

        Logger.base.info(f'🗑️ [DELETE_EVENT] Event {event_id} deleted')
