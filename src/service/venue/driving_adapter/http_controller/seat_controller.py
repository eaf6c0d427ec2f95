from fastapi import APIRouter, Depends, status

from src.platform.logging.loguru_io import Logger
from src.service.identity.domain.entity.user_entity import UserEntity
from src.service.identity.driving_adapter.http_controller.auth.current_user import (
    get_current_user,
)
from src.service.identity.driving_adapter.http_controller.auth.role_auth import (
    require_admin,
    require_attendee,
)
from src.service.venue.app.command.seat_reservation_use_case import SeatReservationUseCase
from src.service.venue.app.command.update_seat_status_use_case import UpdateSeatStatusUseCase
from src.service.venue.domain.enum.seat_status import SeatStatus
from src.service.venue.driving_adapter.http_controller.schema.seat_schema import (
    SeatIdsRequest,
    SeatReleaseResponse,
    SeatReservationResponse,
    SeatResponse,
    SeatStatusRequest,
)


router = APIRouter()


@router.post('/reserve', status_code=status.HTTP_200_OK)
@Logger.io
async def reserve_seats(
    request: SeatIdsRequest,
    current_user: UserEntity = Depends(require_attendee),
    use_case: SeatReservationUseCase = Depends(SeatReservationUseCase.depends),
) -> SeatReservationResponse:
    seat_ids = await use_case.reserve_seats(seat_ids=request.seat_ids, attendee=current_user)
    return SeatReservationResponse(seat_ids=seat_ids, status=SeatStatus.SELECTED)


@router.post('/release', status_code=status.HTTP_200_OK)
@Logger.io
async def release_seats(
    request: SeatIdsRequest,
    current_user: UserEntity = Depends(get_current_user),
    use_case: SeatReservationUseCase = Depends(SeatReservationUseCase.depends),
) -> SeatReleaseResponse:
    released = await use_case.release_seats(seat_ids=request.seat_ids)
    return SeatReleaseResponse(released=released)


@router.put('/{seat_id}/status', status_code=status.HTTP_200_OK)
@Logger.io
async def update_seat_status(
    seat_id: int,
    request: SeatStatusRequest,
    current_user: UserEntity = Depends(require_admin),
    use_case: UpdateSeatStatusUseCase = Depends(UpdateSeatStatusUseCase.depends),
) -> SeatResponse:
    seat = await use_case.update_status(actor=current_user, seat_id=seat_id, status=request.status)
    return SeatResponse.from_entity(seat)
