from typing import List

from fastapi import APIRouter, Depends, Query, status

from src.platform.config.core_setting import settings
from src.platform.logging.loguru_io import Logger
from src.service.identity.domain.entity.user_entity import UserEntity
from src.service.identity.driving_adapter.http_controller.auth.role_auth import require_admin
from src.service.venue.app.command.create_venue_use_case import CreateVenueUseCase
from src.service.venue.app.command.delete_venue_use_case import DeleteVenueUseCase
from src.service.venue.app.command.update_venue_use_case import UpdateVenueUseCase
from src.service.venue.app.query.get_venue_use_case import GetVenueUseCase
from src.service.venue.app.query.list_section_seats_use_case import ListSectionSeatsUseCase
from src.service.venue.app.query.list_venues_use_case import ListVenuesUseCase
from src.service.venue.driving_adapter.http_controller.schema.seat_schema import SeatResponse
from src.service.venue.driving_adapter.http_controller.schema.venue_schema import (
    VenueCreateRequest,
    VenueListResponse,
    VenueResponse,
    VenueUpdateRequest,
)


router = APIRouter()


@router.post('', status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_venue(
    request: VenueCreateRequest,
    current_user: UserEntity = Depends(require_admin),
    use_case: CreateVenueUseCase = Depends(CreateVenueUseCase.depends),
) -> VenueResponse:
    venue = await use_case.create_venue(
        actor=current_user,
        name=request.name,
        location=request.location,
        capacity=request.capacity,
        has_sections=request.has_sections,
        sections=[section.to_entity() for section in request.sections],
    )
    return VenueResponse.from_entity(venue)


@router.get('', status_code=status.HTTP_200_OK)
@Logger.io
async def list_venues(
    limit: int = Query(settings.DEFAULT_PAGE_LIMIT, ge=1),
    offset: int = Query(0, ge=0),
    use_case: ListVenuesUseCase = Depends(ListVenuesUseCase.depends),
) -> VenueListResponse:
    venues, total = await use_case.list_venues(limit=limit, offset=offset)
    return VenueListResponse(
        items=[VenueResponse.from_entity(venue) for venue in venues],
        total=total,
        limit=limit,
        offset=offset,
        has_more=offset + len(venues) < total,
    )


@router.get('/sections/{section_id}/seats', status_code=status.HTTP_200_OK)
@Logger.io
async def list_section_seats(
    section_id: int,
    available_only: bool = False,
    use_case: ListSectionSeatsUseCase = Depends(ListSectionSeatsUseCase.depends),
) -> List[SeatResponse]:
    seats = await use_case.list_seats(section_id=section_id, only_available=available_only)
    return [SeatResponse.from_entity(seat) for seat in seats]


@router.get('/{venue_id}', status_code=status.HTTP_200_OK)
@Logger.io
async def get_venue(
    venue_id: int,
    use_case: GetVenueUseCase = Depends(GetVenueUseCase.depends),
) -> VenueResponse:
    return VenueResponse.from_entity(await use_case.get_by_id(venue_id=venue_id))


@router.put('/{venue_id}', status_code=status.HTTP_200_OK)
@Logger.io
async def update_venue(
    venue_id: int,
    request: VenueUpdateRequest,
    current_user: UserEntity = Depends(require_admin),
    use_case: UpdateVenueUseCase = Depends(UpdateVenueUseCase.depends),
) -> VenueResponse:
    venue = await use_case.update_venue(
        actor=current_user,
        venue_id=venue_id,
        name=request.name,
        location=request.location,
        capacity=request.capacity,
        has_sections=request.has_sections,
        sections=(
            [section.to_entity() for section in request.sections]
            if request.sections is not None
            else None
        ),
    )
    return VenueResponse.from_entity(venue)


@router.delete('/{venue_id}', status_code=status.HTTP_204_NO_CONTENT)
@Logger.io
async def delete_venue(
    venue_id: int,
    current_user: UserEntity = Depends(require_admin),
    use_case: DeleteVenueUseCase = Depends(DeleteVenueUseCase.depends),
) -> None:
    await use_case.delete_venue(actor=current_user, venue_id=venue_id)
