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
from src.service.shared_kernel.app.interface.i_mail_sender import IMailSender
from src.service.ticketing.domain.entity.ticket_entity import TicketEntity
from src.service.ticketing.domain.enum.ticket_status import TicketStatus


class CancelTicketUseCase:
    """
    sold -> cancelled | refunded, by the ticket's attendee or the event's admin.

    The transition is recorded in the ticket history and the same row goes back on sale
    as available with attendee and QR token cleared. Used tickets are never reopened.
    """

    def __init__(self, *, uow: AbstractUnitOfWork, mail_sender: IMailSender) -> None:
        self.uow = uow
        self.mail_sender = mail_sender

    @classmethod
    @inject
    def depends(
        cls,
        uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work]),
        mail_sender: IMailSender = Depends(Provide[Container.mail_sender]),
    ) -> Self:
        return cls(uow=uow, mail_sender=mail_sender)

    @Logger.io
    async def cancel_ticket(self, *, ticket_id: int, actor: UserEntity) -> TicketEntity:
        return await self._close(ticket_id=ticket_id, actor=actor, target=TicketStatus.CANCELLED)

    @Logger.io
    async def refund_ticket(self, *, ticket_id: int, actor: UserEntity) -> TicketEntity:
        return await self._close(ticket_id=ticket_id, actor=actor, target=TicketStatus.REFUNDED)

    async def _close(
        self, *, ticket_id: int, actor: UserEntity, target: TicketStatus
    ) -> TicketEntity:
        async with self.uow:
            ticket = await self.uow.ticket_command_repo.get_for_update(ticket_id=ticket_id)
            if ticket is None:
                raise NotFoundError(f'Ticket not found: {ticket_id}')
            event = await self.uow.event_query_repo.get_by_id(event_id=ticket.event_id)
            assert event is not None
            AuthorizationPolicy.ensure(
                actor,
                Action.MANAGE_TICKET,
                Ownership(admin_id=event.admin_id, attendee_id=ticket.attendee_id),
            )

            if ticket.status != TicketStatus.SOLD:
                metrics.record_ticket_transition(
                    from_status=ticket.status.value, to_status=target.value, result='conflict'
                )
                raise ConflictError(
                    f'Only sold tickets can be {target.value}; ticket {ticket_id} is '
                    f'{ticket.status.value}'
                )

            holder = (
                await self.uow.user_query_repo.get_by_id(user_id=ticket.attendee_id)
                if ticket.attendee_id is not None
                else None
            )
            reopened = await self.uow.ticket_command_repo.close_and_reopen(
                ticket_id=ticket_id, target=target
            )
            if reopened is None:
                raise ConflictError(f'Ticket {ticket_id} is no longer sold')
            await self.uow.commit()

        metrics.record_ticket_transition(
            from_status='sold', to_status=target.value, result='success'
        )
        Logger.base.info(
            f'↩️ [{target.name}] Ticket {ticket_id} {target.value} by {actor.id}, back on sale'
        )

        if holder is not None:
            try:
                await self.mail_sender.send_ticket_closed(
                    to=holder.email, ticket_id=ticket_id, event_title=event.title, reason=target.value
                )
            except Exception as e:
                Logger.base.warning(f'⚠️ [{target.name}] Notice for ticket {ticket_id} failed: {e}')

        return reopened
