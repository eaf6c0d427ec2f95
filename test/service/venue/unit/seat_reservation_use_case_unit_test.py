"""
Unit tests for SeatReservationUseCase

Test Focus:
1. All-or-nothing holds: a partial flip is rolled back and reported as a conflict
2. Unknown seat ids are reported before any write
3. Release is idempotent
"""

from unittest.mock import ANY

import pytest

from src.platform.exception.exceptions import ConflictError, NotFoundError, ValidationError
from src.service.venue.app.command.seat_reservation_use_case import SeatReservationUseCase


@pytest.fixture
def use_case(uow):
    uow.seat_query_repo.find_existing_ids.return_value = {1, 2, 3}
    return SeatReservationUseCase(uow=uow)


@pytest.mark.unit
class TestReserveSeats:
    @pytest.mark.asyncio
    async def test_all_seats_held(self, use_case, uow, attendee):
        uow.seat_command_repo.reserve.return_value = [1, 2, 3]

        held = await use_case.reserve_seats(seat_ids=[3, 1, 2, 1], attendee=attendee)

        assert held == [1, 2, 3]
        uow.seat_command_repo.reserve.assert_awaited_once_with(
            seat_ids=[1, 2, 3], attendee_id=10, held_at=ANY
        )
        assert uow.committed == 1

    @pytest.mark.asyncio
    async def test_one_taken_seat_rolls_back_the_whole_request(self, use_case, uow, attendee):
        uow.seat_command_repo.reserve.return_value = [1, 3]

        with pytest.raises(ConflictError, match=r'\[2\]'):
            await use_case.reserve_seats(seat_ids=[1, 2, 3], attendee=attendee)

        assert uow.committed == 0
        assert uow.rolled_back == 1

    @pytest.mark.asyncio
    async def test_unknown_seat_is_not_found(self, use_case, uow, attendee):
        with pytest.raises(NotFoundError, match=r'\[9\]'):
            await use_case.reserve_seats(seat_ids=[1, 9], attendee=attendee)

        uow.seat_command_repo.reserve.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_empty_request_is_rejected(self, use_case, attendee):
        with pytest.raises(ValidationError):
            await use_case.reserve_seats(seat_ids=[], attendee=attendee)


@pytest.mark.unit
class TestReleaseSeats:
    @pytest.mark.asyncio
    async def test_release_reports_flipped_count(self, use_case, uow):
        uow.seat_command_repo.release.return_value = 2

        assert await use_case.release_seats(seat_ids=[1, 2, 3]) == 2
        assert uow.committed == 1

    @pytest.mark.asyncio
    async def test_releasing_free_seats_is_a_no_op(self, use_case, uow):
        uow.seat_command_repo.release.return_value = 0

        assert await use_case.release_seats(seat_ids=[1]) == 0
