from datetime import datetime, timezone
from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import ConflictError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.ticketing_metrics import metrics
from src.service.identity.domain.authorization_policy import Action, AuthorizationPolicy
from src.service.identity.domain.entity.user_entity import UserEntity
from src.service.ticketing.app.interface.i_qr_token_signer import IQrTokenSigner
from src.service.ticketing.domain.entity.ticket_entity import TicketEntity
from src.service.ticketing.domain.enum.ticket_status import TicketStatus
from src.service.ticketing.domain.ticket_entry_check import check_ticket_entry


class CheckInTicketUseCase:
    """sold -> used at the gate, by the admin of the ticket's event"""

    def __init__(self, *, uow: AbstractUnitOfWork, qr_token_signer: IQrTokenSigner) -> None:
        self.uow = uow
        self.qr_token_signer = qr_token_signer

    @classmethod
    @inject
    def depends(
        cls,
        uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work]),
        qr_token_signer: IQrTokenSigner = Depends(Provide[Container.qr_token_signer]),
    ) -> Self:
        return cls(uow=uow, qr_token_signer=qr_token_signer)

    @Logger.io
    async def check_in(self, *, token: str, actor: UserEntity) -> TicketEntity:
        claims = self.qr_token_signer.verify(token)
        ticket_id = int(claims['tid'])
        now = datetime.now(timezone.utc)

        async with self.uow:
            ticket = await self.uow.ticket_command_repo.get_for_update(ticket_id=ticket_id)
            event = (
                await self.uow.event_query_repo.get_by_id(event_id=ticket.event_id)
                if ticket is not None
                else None
            )
            ticket, event = check_ticket_entry(ticket=ticket, event=event, token=token, now=now)
            AuthorizationPolicy.ensure(actor, Action.CHECK_IN_TICKET, event)

            if ticket.status == TicketStatus.USED:
                metrics.record_ticket_transition(
                    from_status='used', to_status='used', result='conflict'
                )
                raise ConflictError(f'Ticket {ticket_id} has already been used')

            used = await self.uow.ticket_command_repo.check_in(ticket_id=ticket_id, qr_token=token)
            if used is None:
                raise ConflictError(f'Ticket {ticket_id} is no longer valid for entry')
            await self.uow.commit()

        metrics.record_ticket_transition(from_status='sold', to_status='used', result='success')
        Logger.base.info(f'🚪 [CHECK_IN] Ticket {ticket_id} admitted by {actor.id}')
        return used
