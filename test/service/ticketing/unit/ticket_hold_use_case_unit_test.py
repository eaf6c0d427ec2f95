"""
Unit tests for ticket holds

Test Focus:
1. available -> reserved for attendees while the event is on sale
2. Release only from reserved, by the holder or the event admin
3. The sweeper use case releases holds older than the hold window
"""

from datetime import datetime, timedelta, timezone
from unittest.mock import ANY

import pytest

from src.platform.exception.exceptions import ConflictError, ForbiddenError
from src.service.ticketing.app.command.release_expired_holds_use_case import (
    ReleaseExpiredHoldsUseCase,
)
from src.service.ticketing.app.command.reserve_ticket_use_case import ReserveTicketUseCase
from src.service.ticketing.domain.enum.ticket_status import TicketStatus
from test.factories import make_event, make_ticket


@pytest.fixture
def use_case(uow):
    uow.event_query_repo.get_by_id.return_value = make_event()
    return ReserveTicketUseCase(uow=uow)


def _held(attendee_id: int = 10):
    return make_ticket(
        status=TicketStatus.RESERVED,
        attendee_id=attendee_id,
        reserved_at=datetime.now(timezone.utc),
    )


@pytest.mark.unit
class TestReserveTicket:
    @pytest.mark.asyncio
    async def test_available_ticket_is_held(self, use_case, uow, attendee):
        uow.ticket_query_repo.get_by_id.return_value = make_ticket()
        uow.ticket_command_repo.reserve.return_value = _held()

        held = await use_case.reserve_ticket(ticket_id=100, attendee=attendee)

        assert held.status == TicketStatus.RESERVED
        uow.ticket_command_repo.reserve.assert_awaited_once_with(
            ticket_id=100, attendee_id=10, reserved_at=ANY
        )
        assert uow.committed == 1

    @pytest.mark.asyncio
    async def test_already_held_ticket_is_a_conflict(self, use_case, uow, attendee):
        uow.ticket_query_repo.get_by_id.return_value = _held(attendee_id=11)
        uow.ticket_command_repo.reserve.return_value = None

        with pytest.raises(ConflictError):
            await use_case.reserve_ticket(ticket_id=100, attendee=attendee)

        assert uow.committed == 0

    @pytest.mark.asyncio
    async def test_ended_event_cannot_be_held(self, use_case, uow, attendee):
        uow.ticket_query_repo.get_by_id.return_value = make_ticket()
        uow.event_query_repo.get_by_id.return_value = make_event(ends_in=-timedelta(hours=1))

        with pytest.raises(ConflictError, match='no longer on sale'):
            await use_case.reserve_ticket(ticket_id=100, attendee=attendee)


@pytest.mark.unit
class TestReleaseTicket:
    @pytest.mark.asyncio
    async def test_holder_releases(self, use_case, uow, attendee):
        uow.ticket_query_repo.get_by_id.return_value = _held()
        uow.ticket_command_repo.release.return_value = make_ticket()

        released = await use_case.release_ticket(ticket_id=100, actor=attendee)

        assert released.status == TicketStatus.AVAILABLE
        assert uow.committed == 1

    @pytest.mark.asyncio
    async def test_event_admin_releases_any_hold(self, use_case, uow, admin):
        uow.ticket_query_repo.get_by_id.return_value = _held()
        uow.ticket_command_repo.release.return_value = make_ticket()

        await use_case.release_ticket(ticket_id=100, actor=admin)

        uow.ticket_command_repo.release.assert_awaited_once_with(ticket_id=100)

    @pytest.mark.asyncio
    async def test_other_attendee_is_forbidden(self, use_case, uow, other_attendee):
        uow.ticket_query_repo.get_by_id.return_value = _held()

        with pytest.raises(ForbiddenError):
            await use_case.release_ticket(ticket_id=100, actor=other_attendee)

    @pytest.mark.asyncio
    async def test_sold_ticket_cannot_be_released(self, use_case, uow, attendee):
        uow.ticket_query_repo.get_by_id.return_value = make_ticket(
            status=TicketStatus.SOLD, attendee_id=10
        )

        with pytest.raises(ConflictError, match='not reserved'):
            await use_case.release_ticket(ticket_id=100, actor=attendee)

        uow.ticket_command_repo.release.assert_not_awaited()


@pytest.mark.unit
class TestReleaseExpiredHolds:
    @pytest.mark.asyncio
    async def test_cutoff_is_now_minus_hold_window(self, uow):
        uow.ticket_command_repo.release_expired_holds.return_value = 3
        before = datetime.now(timezone.utc)

        released = await ReleaseExpiredHoldsUseCase(uow=uow, hold_seconds=60).execute()

        cutoff = uow.ticket_command_repo.release_expired_holds.await_args.kwargs['cutoff']
        assert released == 3
        assert before - timedelta(seconds=61) < cutoff <= datetime.now(timezone.utc) - timedelta(
            seconds=60
        )
        assert uow.committed == 1
