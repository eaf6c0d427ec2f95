from typing import Dict, Iterable, List, Optional, Self, Tuple

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.core_setting import settings
from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.identity.domain.authorization_policy import Action, AuthorizationPolicy
from src.service.identity.domain.entity.user_entity import UserEntity, UserRole
from src.service.ticketing.app.interface.i_event_query_repo import IEventQueryRepo
from src.service.ticketing.app.interface.i_ticket_query_repo import ITicketQueryRepo
from src.service.ticketing.domain.entity.ticket_entity import TicketEntity
from src.service.ticketing.domain.enum.ticket_status import TicketStatus
from src.service.ticketing.domain.ticket_lifecycle import OWNED_STATUSES


GENERAL_ADMISSION = 'General Admission'


class ListTicketsUseCase:
    def __init__(
        self, *, ticket_query_repo: ITicketQueryRepo, event_query_repo: IEventQueryRepo
    ) -> None:
        self.ticket_query_repo = ticket_query_repo
        self.event_query_repo = event_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        ticket_query_repo: ITicketQueryRepo = Depends(Provide[Container.ticket_query_repo]),
        event_query_repo: IEventQueryRepo = Depends(Provide[Container.event_query_repo]),
    ) -> Self:
        return cls(ticket_query_repo=ticket_query_repo, event_query_repo=event_query_repo)

    @Logger.io(truncate_content=True)
    async def list_available_by_section(self, *, event_id: int) -> Dict[str, List[TicketEntity]]:
        """Available tickets of an event grouped by section; GA tickets share one group"""
        if await self.event_query_repo.get_by_id(event_id=event_id) is None:
            raise NotFoundError(f'Event not found: {event_id}')

        tickets = await self.ticket_query_repo.list_available_by_event(event_id=event_id)
        grouped: Dict[str, List[TicketEntity]] = {}
        for ticket in tickets:
            section = GENERAL_ADMISSION if ticket.is_general_admission else ticket.section_name
            grouped.setdefault(section or GENERAL_ADMISSION, []).append(ticket)

        Logger.base.info(
            f'🎫 [LIST_AVAILABLE] Event {event_id}: {len(tickets)} tickets '
            f'in {len(grouped)} sections'
        )
        return grouped

    @Logger.io(truncate_content=True)
    async def list_mine(self, *, attendee: UserEntity) -> List[TicketEntity]:
        assert attendee.id is not None
        return await self.ticket_query_repo.list_by_attendee(attendee_id=attendee.id)

    @Logger.io(truncate_content=True)
    async def list_booked(
        self,
        *,
        actor: UserEntity,
        statuses: Optional[Iterable[TicketStatus]] = None,
        limit: int,
        offset: int,
    ) -> Tuple[List[TicketEntity], int]:
        """Booked tickets of the admin's own events; a superadmin sees every event"""
        AuthorizationPolicy.ensure(actor, Action.VIEW_BOOKED_TICKETS)
        limit = max(1, min(limit, settings.MAX_PAGE_LIMIT))
        offset = max(0, offset)

        return await self.ticket_query_repo.list_booked(
            admin_id=None if actor.role == UserRole.SUPERADMIN else actor.id,
            statuses=list(statuses) if statuses else sorted(OWNED_STATUSES),
            limit=limit,
            offset=offset,
        )
