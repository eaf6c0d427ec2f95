"""
Integration test for SeatCommandRepoImpl against PostgreSQL

Test Focus:
1. Holds are all-or-nothing: one unavailable seat rolls back the whole request
2. Overlapping concurrent holds: one wins, the loser leaves no partial hold behind
3. Release is idempotent
"""

import asyncio
from datetime import datetime, timezone

import pytest

from src.platform.exception.exceptions import ConflictError
from src.service.venue.app.command.create_venue_use_case import CreateVenueUseCase
from src.service.venue.app.command.seat_reservation_use_case import SeatReservationUseCase
from src.service.venue.domain.entity.venue_entity import SectionEntity
from src.service.venue.domain.enum.seat_status import SeatStatus
from src.service.venue.driven_adapter.repo.seat_query_repo_impl import SeatQueryRepoImpl


pytestmark = pytest.mark.integration


@pytest.fixture
async def seat_ids(new_uow, stored_users) -> list[int]:
    """Seat ids of section A, seats 1..4 in order"""
    venue = await CreateVenueUseCase(uow=new_uow()).create_venue(
        actor=stored_users['admin'],
        name='Riverside Arena',
        location='1 Harbour Road',
        capacity=4,
        has_sections=True,
        sections=[SectionEntity(name='A', capacity=4)],
    )
    async with new_uow() as uow:
        seat_id_map = await uow.seat_query_repo.map_seat_ids(venue_id=venue.id)
    return [seat_id_map[('A', number)] for number in range(1, 5)]


async def _statuses(session_factory, seat_ids: list[int]) -> list[SeatStatus]:
    repo = SeatQueryRepoImpl(session_factory=session_factory)
    return [(await repo.get_by_id(seat_id=seat_id)).status for seat_id in seat_ids]


class TestReserveSeats:
    @pytest.mark.asyncio
    async def test_reserved_seats_record_the_holder(
        self, new_uow, session_factory, stored_users, seat_ids
    ):
        attendee = stored_users['attendee']

        reserved = await SeatReservationUseCase(uow=new_uow()).reserve_seats(
            seat_ids=seat_ids[:2], attendee=attendee
        )

        assert reserved == sorted(seat_ids[:2])
        seat = await SeatQueryRepoImpl(session_factory=session_factory).get_by_id(
            seat_id=seat_ids[0]
        )
        assert seat.status == SeatStatus.SELECTED
        assert seat.held_by == attendee.id
        assert seat.held_at is not None
        assert await _statuses(session_factory, seat_ids[2:]) == [SeatStatus.AVAILABLE] * 2

    @pytest.mark.asyncio
    async def test_one_unavailable_seat_rolls_back_the_whole_request(
        self, new_uow, session_factory, stored_users, seat_ids
    ):
        await SeatReservationUseCase(uow=new_uow()).reserve_seats(
            seat_ids=[seat_ids[1]], attendee=stored_users['other_attendee']
        )

        with pytest.raises(ConflictError, match=str(seat_ids[1])):
            await SeatReservationUseCase(uow=new_uow()).reserve_seats(
                seat_ids=seat_ids[:3], attendee=stored_users['attendee']
            )

        assert await _statuses(session_factory, seat_ids) == [
            SeatStatus.AVAILABLE,
            SeatStatus.SELECTED,
            SeatStatus.AVAILABLE,
            SeatStatus.AVAILABLE,
        ]

    @pytest.mark.asyncio
    async def test_partial_update_inside_the_transaction_is_not_committed(
        self, new_uow, session_factory, stored_users, seat_ids
    ):
        await SeatReservationUseCase(uow=new_uow()).reserve_seats(
            seat_ids=[seat_ids[2]], attendee=stored_users['other_attendee']
        )

        async with new_uow() as uow:
            reserved = await uow.seat_command_repo.reserve(
                seat_ids=seat_ids,
                attendee_id=stored_users['attendee'].id,
                held_at=datetime.now(timezone.utc),
            )
            # Leaving without commit

        assert sorted(reserved) == sorted([seat_ids[0], seat_ids[1], seat_ids[3]])
        assert await _statuses(session_factory, seat_ids) == [
            SeatStatus.AVAILABLE,
            SeatStatus.AVAILABLE,
            SeatStatus.SELECTED,
            SeatStatus.AVAILABLE,
        ]

    @pytest.mark.asyncio
    async def test_overlapping_holds_race_and_the_loser_leaves_nothing_behind(
        self, new_uow, session_factory, stored_users, seat_ids
    ):
        results = await asyncio.gather(
            SeatReservationUseCase(uow=new_uow()).reserve_seats(
                seat_ids=seat_ids[:2], attendee=stored_users['attendee']
            ),
            SeatReservationUseCase(uow=new_uow()).reserve_seats(
                seat_ids=seat_ids[1:3], attendee=stored_users['other_attendee']
            ),
            return_exceptions=True,
        )

        winners = [result for result in results if isinstance(result, list)]
        assert len(winners) == 1
        assert sum(isinstance(result, ConflictError) for result in results) == 1

        statuses = dict(zip(seat_ids, await _statuses(session_factory, seat_ids)))
        held = {seat_id for seat_id, status in statuses.items() if status == SeatStatus.SELECTED}
        assert held == set(winners[0])


class TestReleaseSeats:
    @pytest.mark.asyncio
    async def test_release_is_idempotent(self, new_uow, session_factory, stored_users, seat_ids):
        await SeatReservationUseCase(uow=new_uow()).reserve_seats(
            seat_ids=seat_ids[:2], attendee=stored_users['attendee']
        )

        first = await SeatReservationUseCase(uow=new_uow()).release_seats(seat_ids=seat_ids[:2])
        second = await SeatReservationUseCase(uow=new_uow()).release_seats(seat_ids=seat_ids[:2])

        assert first == 2
        assert second == 2
        seat = await SeatQueryRepoImpl(session_factory=session_factory).get_by_id(
            seat_id=seat_ids[0]
        )
        assert seat.status == SeatStatus.AVAILABLE
        assert seat.held_by is None
        assert seat.held_at is None
