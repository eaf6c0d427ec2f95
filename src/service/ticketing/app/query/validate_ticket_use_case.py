from datetime import datetime, timezone
from typing import Self, Tuple

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import (
    ConflictError,
    ExpiredTicketError,
    InvalidTicketTokenError,
    NotFoundError,
)
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.ticketing_metrics import metrics
from src.service.ticketing.app.interface.i_event_query_repo import IEventQueryRepo
from src.service.ticketing.app.interface.i_qr_token_signer import IQrTokenSigner
from src.service.ticketing.app.interface.i_ticket_query_repo import ITicketQueryRepo
from src.service.ticketing.domain.entity.event_entity import EventEntity
from src.service.ticketing.domain.entity.ticket_entity import TicketEntity
from src.service.ticketing.domain.ticket_entry_check import check_ticket_entry


class ValidateTicketUseCase:
    """Read-only entry validation of a scanned QR token; nothing is written"""

    def __init__(
        self,
        *,
        qr_token_signer: IQrTokenSigner,
        ticket_query_repo: ITicketQueryRepo,
        event_query_repo: IEventQueryRepo,
    ) -> None:
        self.qr_token_signer = qr_token_signer
        self.ticket_query_repo = ticket_query_repo
        self.event_query_repo = event_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        qr_token_signer: IQrTokenSigner = Depends(Provide[Container.qr_token_signer]),
        ticket_query_repo: ITicketQueryRepo = Depends(Provide[Container.ticket_query_repo]),
        event_query_repo: IEventQueryRepo = Depends(Provide[Container.event_query_repo]),
    ) -> Self:
        return cls(
            qr_token_signer=qr_token_signer,
            ticket_query_repo=ticket_query_repo,
            event_query_repo=event_query_repo,
        )

    @Logger.io
    async def validate(self, *, token: str) -> Tuple[TicketEntity, EventEntity]:
        try:
            claims = self.qr_token_signer.verify(token)
            ticket = await self.ticket_query_repo.get_by_id(ticket_id=int(claims['tid']))
            event = (
                await self.event_query_repo.get_by_id(event_id=ticket.event_id)
                if ticket is not None
                else None
            )
            ticket, event = check_ticket_entry(
                ticket=ticket, event=event, token=token, now=datetime.now(timezone.utc)
            )
        except InvalidTicketTokenError:
            metrics.record_qr_validation(result='invalid')
            raise
        except NotFoundError:
            metrics.record_qr_validation(result='not_found')
            raise
        except ConflictError:
            metrics.record_qr_validation(result='conflict')
            raise
        except ExpiredTicketError:
            metrics.record_qr_validation(result='expired')
            raise

        metrics.record_qr_validation(result='valid')
        Logger.base.info(f'✅ [VALIDATE] Ticket {ticket.id} valid for event {event.id}')
        return ticket, event
