"""
Unit tests for the venue command use cases

Test Focus:
1. Create: admins only, seats generated for every section
2. Update: owner-only; layout changes re-validated and blocked while events exist
3. Delete: blocked while events exist
4. Seat status changes by the venue owner
"""

import pytest

from src.platform.exception.exceptions import (
    ConflictError,
    ForbiddenError,
    IntegrityError,
    NotFoundError,
    ValidationError,
)
from src.service.venue.app.command.create_venue_use_case import CreateVenueUseCase
from src.service.venue.app.command.delete_venue_use_case import DeleteVenueUseCase
from src.service.venue.app.command.update_seat_status_use_case import UpdateSeatStatusUseCase
from src.service.venue.app.command.update_venue_use_case import UpdateVenueUseCase
from src.service.venue.domain.entity.seat_entity import SeatEntity
from src.service.venue.domain.entity.venue_entity import SectionEntity
from src.service.venue.domain.enum.seat_status import SeatStatus
from test.factories import make_sectioned_venue


@pytest.mark.unit
class TestCreateVenue:
    @pytest.mark.asyncio
    async def test_admin_creates_sectioned_venue_with_seats(self, uow, admin):
        uow.venue_command_repo.create.side_effect = lambda *, venue: make_sectioned_venue(
            ('A', 60), ('B', 40)
        )
        uow.seat_command_repo.create_for_sections.return_value = 100

        venue = await CreateVenueUseCase(uow=uow).create_venue(
            actor=admin,
            name='Riverside Arena',
            location='1 Harbour Road',
            capacity=100,
            has_sections=True,
            sections=[SectionEntity(name='A', capacity=60), SectionEntity(name='B', capacity=40)],
        )

        assert venue.id == 1
        uow.seat_command_repo.create_for_sections.assert_awaited_once_with(
            sections=venue.sections
        )
        assert uow.committed == 1

    @pytest.mark.asyncio
    async def test_invalid_layout_writes_nothing(self, uow, admin):
        with pytest.raises(ValidationError):
            await CreateVenueUseCase(uow=uow).create_venue(
                actor=admin,
                name='Riverside Arena',
                location='1 Harbour Road',
                capacity=100,
                has_sections=True,
                sections=[SectionEntity(name='A', capacity=10)],
            )

        uow.venue_command_repo.create.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_attendee_cannot_create(self, uow, attendee):
        with pytest.raises(ForbiddenError):
            await CreateVenueUseCase(uow=uow).create_venue(
                actor=attendee,
                name='Garage',
                location='Back street',
                capacity=10,
                has_sections=False,
                sections=[],
            )


@pytest.fixture
def update_use_case(uow):
    uow.venue_query_repo.get_by_id.return_value = make_sectioned_venue(('A', 60), ('B', 40))
    uow.venue_query_repo.has_events.return_value = False
    uow.venue_command_repo.replace_sections.side_effect = lambda *, venue_id, sections: sections
    return UpdateVenueUseCase(uow=uow)


@pytest.mark.unit
class TestUpdateVenue:
    @pytest.mark.asyncio
    async def test_rename_keeps_layout(self, update_use_case, uow, admin):
        updated = await update_use_case.update_venue(actor=admin, venue_id=1, name=' Harbour Hall ')

        assert updated.name == 'Harbour Hall'
        uow.venue_command_repo.replace_sections.assert_not_awaited()
        uow.venue_command_repo.update_details.assert_awaited_once()
        assert uow.committed == 1

    @pytest.mark.asyncio
    async def test_layout_change_regenerates_seats(self, update_use_case, uow, admin):
        await update_use_case.update_venue(
            actor=admin,
            venue_id=1,
            capacity=120,
            sections=[SectionEntity(name='A', capacity=80), SectionEntity(name='B', capacity=40)],
        )

        uow.venue_command_repo.replace_sections.assert_awaited_once()
        uow.seat_command_repo.create_for_sections.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_sum_mismatch_is_an_integrity_error(self, update_use_case, uow, admin):
        with pytest.raises(IntegrityError):
            await update_use_case.update_venue(actor=admin, venue_id=1, capacity=150)

        uow.venue_command_repo.update_details.assert_not_awaited()
        assert uow.committed == 0

    @pytest.mark.asyncio
    async def test_layout_change_with_events_is_a_conflict(self, update_use_case, uow, admin):
        uow.venue_query_repo.has_events.return_value = True

        with pytest.raises(ConflictError):
            await update_use_case.update_venue(
                actor=admin,
                venue_id=1,
                sections=[SectionEntity(name='A', capacity=50), SectionEntity(name='B', capacity=50)],
            )

        uow.venue_command_repo.replace_sections.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_switch_to_general_admission_drops_sections(self, update_use_case, uow, admin):
        updated = await update_use_case.update_venue(actor=admin, venue_id=1, has_sections=False)

        assert updated.sections == []
        assert not updated.has_sections

    @pytest.mark.asyncio
    async def test_other_admin_is_forbidden(self, update_use_case, other_admin):
        with pytest.raises(ForbiddenError):
            await update_use_case.update_venue(actor=other_admin, venue_id=1, name='Taken')

    @pytest.mark.asyncio
    async def test_superadmin_may_update_any_venue(self, update_use_case, superadmin):
        updated = await update_use_case.update_venue(actor=superadmin, venue_id=1, location='Pier 9')

        assert updated.location == 'Pier 9'

    @pytest.mark.asyncio
    async def test_unknown_venue_is_not_found(self, update_use_case, uow, admin):
        uow.venue_query_repo.get_by_id.return_value = None

        with pytest.raises(NotFoundError):
            await update_use_case.update_venue(actor=admin, venue_id=404, name='Ghost')


@pytest.mark.unit
class TestDeleteVenue:
    @pytest.mark.asyncio
    async def test_venue_with_events_is_kept(self, uow, admin):
        uow.venue_query_repo.get_by_id.return_value = make_sectioned_venue(('A', 10))
        uow.venue_query_repo.has_events.return_value = True

        with pytest.raises(ConflictError):
            await DeleteVenueUseCase(uow=uow).delete_venue(actor=admin, venue_id=1)

        uow.venue_command_repo.delete.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unused_venue_is_deleted(self, uow, admin):
        uow.venue_query_repo.get_by_id.return_value = make_sectioned_venue(('A', 10))
        uow.venue_query_repo.has_events.return_value = False

        await DeleteVenueUseCase(uow=uow).delete_venue(actor=admin, venue_id=1)

        uow.venue_command_repo.delete.assert_awaited_once_with(venue_id=1)
        assert uow.committed == 1


@pytest.mark.unit
class TestUpdateSeatStatus:
    @pytest.mark.asyncio
    async def test_owner_marks_seat_unavailable(self, uow, admin):
        uow.seat_query_repo.get_venue_admin_id.return_value = 1
        uow.seat_command_repo.update_status.return_value = SeatEntity(
            id=3, section_id=1, number=3, status=SeatStatus.UNAVAILABLE
        )

        seat = await UpdateSeatStatusUseCase(uow=uow).update_status(
            actor=admin, seat_id=3, status=SeatStatus.UNAVAILABLE
        )

        assert seat.status == SeatStatus.UNAVAILABLE
        assert uow.committed == 1

    @pytest.mark.asyncio
    async def test_unknown_seat_is_not_found(self, uow, admin):
        uow.seat_query_repo.get_venue_admin_id.return_value = None

        with pytest.raises(NotFoundError):
            await UpdateSeatStatusUseCase(uow=uow).update_status(
                actor=admin, seat_id=404, status=SeatStatus.AVAILABLE
            )

    @pytest.mark.asyncio
    async def test_other_admin_is_forbidden(self, uow, other_admin):
        uow.seat_query_repo.get_venue_admin_id.return_value = 1

        with pytest.raises(ForbiddenError):
            await UpdateSeatStatusUseCase(uow=uow).update_status(
                actor=other_admin, seat_id=3, status=SeatStatus.AVAILABLE
            )
