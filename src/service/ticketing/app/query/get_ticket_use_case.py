from typing import Self, Tuple

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import ConflictError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.identity.domain.authorization_policy import (
    Action,
    AuthorizationPolicy,
    Ownership,
)
from src.service.identity.domain.entity.user_entity import UserEntity
from src.service.ticketing.app.interface.i_event_query_repo import IEventQueryRepo
from src.service.ticketing.app.interface.i_qr_code_renderer import IQrCodeRenderer
from src.service.ticketing.app.interface.i_ticket_query_repo import ITicketQueryRepo
from src.service.ticketing.domain.entity.event_entity import EventEntity
from src.service.ticketing.domain.entity.ticket_entity import TicketEntity


class GetTicketUseCase:
    def __init__(
        self,
        *,
        ticket_query_repo: ITicketQueryRepo,
        event_query_repo: IEventQueryRepo,
        qr_code_renderer: IQrCodeRenderer,
    ) -> None:
        self.ticket_query_repo = ticket_query_repo
        self.event_query_repo = event_query_repo
        self.qr_code_renderer = qr_code_renderer

    @classmethod
    @inject
    def depends(
        cls,
        ticket_query_repo: ITicketQueryRepo = Depends(Provide[Container.ticket_query_repo]),
        event_query_repo: IEventQueryRepo = Depends(Provide[Container.event_query_repo]),
        qr_code_renderer: IQrCodeRenderer = Depends(Provide[Container.qr_code_renderer]),
    ) -> Self:
        return cls(
            ticket_query_repo=ticket_query_repo,
            event_query_repo=event_query_repo,
            qr_code_renderer=qr_code_renderer,
        )

    @Logger.io
    async def get_by_id(
        self, *, ticket_id: int, actor: UserEntity
    ) -> Tuple[TicketEntity, EventEntity]:
        """Visible to the attendee holding the ticket and to the event's admin"""
        ticket = await self.ticket_query_repo.get_by_id(ticket_id=ticket_id)
        if ticket is None:
            raise NotFoundError(f'Ticket not found: {ticket_id}')
        event = await self.event_query_repo.get_by_id(event_id=ticket.event_id)
        if event is None:
            raise NotFoundError(f'Event not found: {ticket.event_id}')

        AuthorizationPolicy.ensure(
            actor,
            Action.MANAGE_TICKET,
            Ownership(admin_id=event.admin_id, attendee_id=ticket.attendee_id),
        )
        return ticket, event

    @Logger.io(truncate_content=True)
    async def get_qr_image(self, *, ticket_id: int, actor: UserEntity) -> bytes:
        ticket, _ = await self.get_by_id(ticket_id=ticket_id, actor=actor)
        if not ticket.qr_token:
            raise ConflictError(f'Ticket {ticket_id} has no QR code until it is purchased')
        return self.qr_code_renderer.render_png(ticket.qr_token)
