from datetime import datetime, timezone
from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import ConflictError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.ticketing_metrics import metrics
from src.service.identity.domain.authorization_policy import (
    Action,
    AuthorizationPolicy,
    Ownership,
)
from src.service.identity.domain.entity.user_entity import UserEntity
from src.service.ticketing.domain.entity.ticket_entity import TicketEntity
from src.service.ticketing.domain.enum.ticket_status import TicketStatus


class ReserveTicketUseCase:
    """Short holds on a single ticket during checkout"""

    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow

    @classmethod
    @inject
    def depends(cls, uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work])) -> Self:
        return cls(uow=uow)

    @Logger.io
    async def reserve_ticket(self, *, ticket_id: int, attendee: UserEntity) -> TicketEntity:
        AuthorizationPolicy.ensure(attendee, Action.PURCHASE_TICKET)
        assert attendee.id is not None
        now = datetime.now(timezone.utc)

        async with self.uow:
            ticket = await self.uow.ticket_query_repo.get_by_id(ticket_id=ticket_id)
            if ticket is None:
                raise NotFoundError(f'Ticket not found: {ticket_id}')
            event = await self.uow.event_query_repo.get_by_id(event_id=ticket.event_id)
            if event is None or event.has_ended(now=now):
                raise ConflictError(f'Event {ticket.event_id} is no longer on sale')

            reserved = await self.uow.ticket_command_repo.reserve(
                ticket_id=ticket_id, attendee_id=attendee.id, reserved_at=now
            )
            if reserved is None:
                metrics.record_ticket_transition(
                    from_status=ticket.status.value, to_status='reserved', result='conflict'
                )
                raise ConflictError(f'Ticket {ticket_id} is not available')
            await self.uow.commit()

        metrics.record_ticket_transition(
            from_status='available', to_status='reserved', result='success'
        )
        Logger.base.info(f'⏳ [RESERVE_TICKET] Ticket {ticket_id} held by {attendee.id}')
        return reserved

    @Logger.io
    async def release_ticket(self, *, ticket_id: int, actor: UserEntity) -> TicketEntity:
        async with self.uow:
            ticket = await self.uow.ticket_query_repo.get_by_id(ticket_id=ticket_id)
            if ticket is None:
                raise NotFoundError(f'Ticket not found: {ticket_id}')
            event = await self.uow.event_query_repo.get_by_id(event_id=ticket.event_id)
            assert event is not None
            AuthorizationPolicy.ensure(
                actor,
                Action.MANAGE_TICKET,
                Ownership(admin_id=event.admin_id, attendee_id=ticket.attendee_id),
            )

            if ticket.status != TicketStatus.RESERVED:
                raise ConflictError(f'Ticket {ticket_id} is {ticket.status.value}, not reserved')

            released = await self.uow.ticket_command_repo.release(ticket_id=ticket_id)
            if released is None:
                raise ConflictError(f'Ticket {ticket_id} is no longer reserved')
            await self.uow.commit()

        metrics.record_ticket_transition(
            from_status='reserved', to_status='available', result='success'
        )
        Logger.base.info(f'🔓 [RELEASE_TICKET] Ticket {ticket_id} released by {actor.id}')
        return released
