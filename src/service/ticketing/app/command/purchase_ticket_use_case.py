from datetime import datetime, timedelta, timezone
from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.core_setting import settings
from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import ConflictError, NotFoundError, ValidationError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.ticketing_metrics import metrics
from src.service.identity.domain.authorization_policy import Action, AuthorizationPolicy
from src.service.identity.domain.entity.user_entity import UserEntity
from src.service.shared_kernel.app.interface.i_mail_sender import IMailSender
from src.service.ticketing.app.interface.i_qr_token_signer import IQrTokenSigner
from src.service.ticketing.domain.entity.event_entity import EventEntity
from src.service.ticketing.domain.entity.ticket_entity import TicketEntity
from src.service.ticketing.domain.enum.ticket_status import TicketStatus


class PurchaseTicketUseCase:
    """
    available -> sold (or reserved -> sold for the holder, or for anyone once the hold
    has expired).

    The row is locked before the lifecycle check and the write itself is still guarded by
    the status read under that lock, so of two concurrent buyers exactly one wins and the
    other gets a ConflictError.
    """

    def __init__(
        self,
        *,
        uow: AbstractUnitOfWork,
        qr_token_signer: IQrTokenSigner,
        mail_sender: IMailSender,
        hold_seconds: int = settings.TICKET_HOLD_SECONDS,
    ) -> None:
        self.uow = uow
        self.qr_token_signer = qr_token_signer
        self.mail_sender = mail_sender
        self.hold_seconds = hold_seconds

    @classmethod
    @inject
    def depends(
        cls,
        uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work]),
        qr_token_signer: IQrTokenSigner = Depends(Provide[Container.qr_token_signer]),
        mail_sender: IMailSender = Depends(Provide[Container.mail_sender]),
    ) -> Self:
        return cls(uow=uow, qr_token_signer=qr_token_signer, mail_sender=mail_sender)

    @Logger.io
    async def purchase_ticket(self, *, ticket_id: int, attendee: UserEntity) -> TicketEntity:
        AuthorizationPolicy.ensure(attendee, Action.PURCHASE_TICKET)
        now = datetime.now(timezone.utc)

        async with self.uow:
            ticket = await self.uow.ticket_command_repo.get_for_update(ticket_id=ticket_id)
            if ticket is None:
                raise NotFoundError(f'Ticket not found: {ticket_id}')
            event = await self._event_on_sale(event_id=ticket.event_id, now=now)

            sold = await self._sell(ticket=ticket, event=event, attendee=attendee, now=now)
            await self.uow.commit()

        await self._notify(sold=sold, event=event, attendee=attendee)
        return sold

    @Logger.io
    async def purchase_by_type(
        self, *, event_id: int, ticket_type: str, attendee: UserEntity
    ) -> TicketEntity:
        """Buy the first available ticket (lowest seat) of a type"""
        AuthorizationPolicy.ensure(attendee, Action.PURCHASE_TICKET)
        now = datetime.now(timezone.utc)

        async with self.uow:
            event = await self._event_on_sale(event_id=event_id, now=now)
            if event.ticket_type(ticket_type) is None:
                raise ValidationError(f'Event {event_id} has no ticket type {ticket_type}')

            await self.uow.ticket_command_repo.release_expired_holds(
                cutoff=self._hold_cutoff(now), event_id=event_id
            )
            ticket = await self.uow.ticket_command_repo.lock_first_available(
                event_id=event_id, ticket_type=ticket_type
            )
            if ticket is None:
                metrics.record_ticket_transition(
                    from_status='available', to_status='sold', result='conflict'
                )
                raise ConflictError(f'No {ticket_type} tickets left for event {event_id}')

            sold = await self._sell(ticket=ticket, event=event, attendee=attendee, now=now)
            await self.uow.commit()

        await self._notify(sold=sold, event=event, attendee=attendee)
        return sold

    def _hold_cutoff(self, now: datetime) -> datetime:
        return now - timedelta(seconds=self.hold_seconds)

    async def _event_on_sale(self, *, event_id: int, now: datetime) -> EventEntity:
        event = await self.uow.event_query_repo.get_by_id(event_id=event_id)
        if event is None:
            raise NotFoundError(f'Event not found: {event_id}')
        if event.has_ended(now=now):
            raise ConflictError(f'Event {event_id} has ended')
        return event

    def _ensure_purchasable(self, *, ticket: TicketEntity, attendee: UserEntity, now: datetime):
        if ticket.status == TicketStatus.AVAILABLE:
            return
        if ticket.status == TicketStatus.RESERVED and (
            ticket.attendee_id == attendee.id
            or (ticket.reserved_at is not None and ticket.reserved_at < self._hold_cutoff(now))
        ):
            return
        raise ConflictError(f'Ticket {ticket.id} is not available')

    async def _sell(
        self, *, ticket: TicketEntity, event: EventEntity, attendee: UserEntity, now: datetime
    ) -> TicketEntity:
        assert ticket.id is not None and attendee.id is not None
        try:
            self._ensure_purchasable(ticket=ticket, attendee=attendee, now=now)
        except ConflictError:
            metrics.record_ticket_transition(
                from_status=ticket.status.value, to_status='sold', result='conflict'
            )
            raise

        qr_token = self.qr_token_signer.sign(
            ticket=ticket, event=event, issued_at=now, attendee_id=attendee.id
        )
        sold = await self.uow.ticket_command_repo.purchase(
            ticket_id=ticket.id,
            expected=ticket.status,
            attendee_id=attendee.id,
            qr_token=qr_token,
            purchased_at=now,
        )
        if sold is None:
            metrics.record_ticket_transition(
                from_status=ticket.status.value, to_status='sold', result='conflict'
            )
            raise ConflictError(f'Ticket {ticket.id} is not available')

        metrics.record_ticket_transition(
            from_status=ticket.status.value, to_status='sold', result='success'
        )
        Logger.base.info(f'🎟️ [PURCHASE] Ticket {ticket.id} sold to attendee {attendee.id}')
        return sold

    async def _notify(self, *, sold: TicketEntity, event: EventEntity, attendee: UserEntity):
        assert sold.id is not None
        try:
            await self.mail_sender.send_ticket_confirmation(
                to=attendee.email,
                ticket_id=sold.id,
                event_title=event.title,
                seat=sold.seat_number or sold.section_name or sold.ticket_type,
                price=sold.price,
            )
        except Exception as e:
            # the sale is committed; a mail failure must not undo it
            Logger.base.warning(f'⚠️ [PURCHASE] Confirmation mail for ticket {sold.id} failed: {e}')
