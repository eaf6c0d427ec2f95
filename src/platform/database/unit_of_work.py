"""
Unit of Work Pattern - one session and one transaction shared by every repository

Architecture:
- UoW owns the session lifecycle (opened on enter, closed on exit)
- UoW owns commit/rollback; leaving the block without commit rolls back
- Repositories created inside the UoW share its session
- Use cases coordinate several repositories through the UoW
"""

from __future__ import annotations

import abc
from contextlib import AbstractAsyncContextManager
from typing import TYPE_CHECKING, Any, Callable, Optional

from sqlalchemy.ext.asyncio import AsyncSession


if TYPE_CHECKING:
    from src.service.identity.app.interface.i_user_query_repo import IUserQueryRepo
    from src.service.ticketing.app.interface.i_event_command_repo import IEventCommandRepo
    from src.service.ticketing.app.interface.i_event_query_repo import IEventQueryRepo
    from src.service.ticketing.app.interface.i_ticket_command_repo import ITicketCommandRepo
    from src.service.ticketing.app.interface.i_ticket_query_repo import ITicketQueryRepo
    from src.service.venue.app.interface.i_seat_command_repo import ISeatCommandRepo
    from src.service.venue.app.interface.i_seat_query_repo import ISeatQueryRepo
    from src.service.venue.app.interface.i_venue_command_repo import IVenueCommandRepo
    from src.service.venue.app.interface.i_venue_query_repo import IVenueQueryRepo


class AbstractUnitOfWork(abc.ABC):
    """
    Usage:
        async with uow:
            venue = await uow.venue_query_repo.get_by_id(venue_id=venue_id)
            await uow.event_command_repo.create(event=...)
            await uow.commit()
    """

    user_query_repo: IUserQueryRepo

    venue_command_repo: IVenueCommandRepo
    venue_query_repo: IVenueQueryRepo
    seat_command_repo: ISeatCommandRepo
    seat_query_repo: ISeatQueryRepo

    event_command_repo: IEventCommandRepo
    event_query_repo: IEventQueryRepo
    ticket_command_repo: ITicketCommandRepo
    ticket_query_repo: ITicketQueryRepo

    async def __aenter__(self) -> AbstractUnitOfWork:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.rollback()

    async def commit(self) -> None:
        await self._commit()

    @abc.abstractmethod
    async def _commit(self) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    async def rollback(self) -> None:
        raise NotImplementedError


class SqlAlchemyUnitOfWork(AbstractUnitOfWork):
    def __init__(
        self, session_factory: Callable[[], AbstractAsyncContextManager[AsyncSession]]
    ) -> None:
        self.session_factory = session_factory
        self.session: Optional[AsyncSession] = None
        self._session_context: Optional[AbstractAsyncContextManager[AsyncSession]] = None

    async def __aenter__(self) -> AbstractUnitOfWork:
        from src.service.identity.driven_adapter.repo.user_query_repo_impl import (
            UserQueryRepoImpl,
        )
        from src.service.ticketing.driven_adapter.repo.event_command_repo_impl import (
            EventCommandRepoImpl,
        )
        from src.service.ticketing.driven_adapter.repo.event_query_repo_impl import (
            EventQueryRepoImpl,
        )
        from src.service.ticketing.driven_adapter.repo.ticket_command_repo_impl import (
            TicketCommandRepoImpl,
        )
        from src.service.ticketing.driven_adapter.repo.ticket_query_repo_impl import (
            TicketQueryRepoImpl,
        )
        from src.service.venue.driven_adapter.repo.seat_command_repo_impl import (
            SeatCommandRepoImpl,
        )
        from src.service.venue.driven_adapter.repo.seat_query_repo_impl import SeatQueryRepoImpl
        from src.service.venue.driven_adapter.repo.venue_command_repo_impl import (
            VenueCommandRepoImpl,
        )
        from src.service.venue.driven_adapter.repo.venue_query_repo_impl import (
            VenueQueryRepoImpl,
        )

        self._session_context = self.session_factory()
        self.session = await self._session_context.__aenter__()

        self.user_query_repo = UserQueryRepoImpl(session=self.session)
        self.venue_command_repo = VenueCommandRepoImpl(session=self.session)
        self.venue_query_repo = VenueQueryRepoImpl(session=self.session)
        self.seat_command_repo = SeatCommandRepoImpl(session=self.session)
        self.seat_query_repo = SeatQueryRepoImpl(session=self.session)
        self.event_command_repo = EventCommandRepoImpl(session=self.session)
        self.event_query_repo = EventQueryRepoImpl(session=self.session)
        self.ticket_command_repo = TicketCommandRepoImpl(session=self.session)
        self.ticket_query_repo = TicketQueryRepoImpl(session=self.session)

        return await super().__aenter__()

    async def __aexit__(self, *args: Any) -> None:
        try:
            await super().__aexit__(*args)
        finally:
            if self._session_context is not None:
                await self._session_context.__aexit__(*args)
            self._session_context = None
            self.session = None

    async def _commit(self) -> None:
        assert self.session is not None, 'UnitOfWork used outside of `async with`'
        await self.session.commit()

    async def rollback(self) -> None:
        if self.session is not None:
            await self.session.rollback()
