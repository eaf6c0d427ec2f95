from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status

from src.platform.config.core_setting import settings
from src.platform.logging.loguru_io import Logger
from src.service.identity.domain.entity.user_entity import UserEntity
from src.service.identity.driving_adapter.http_controller.auth.current_user import (
    get_current_user,
)
from src.service.identity.driving_adapter.http_controller.auth.role_auth import (
    require_admin,
    require_attendee,
)
from src.service.ticketing.app.command.cancel_ticket_use_case import CancelTicketUseCase
from src.service.ticketing.app.command.check_in_ticket_use_case import CheckInTicketUseCase
from src.service.ticketing.app.command.purchase_ticket_use_case import PurchaseTicketUseCase
from src.service.ticketing.app.command.reserve_ticket_use_case import ReserveTicketUseCase
from src.service.ticketing.app.query.get_ticket_use_case import GetTicketUseCase
from src.service.ticketing.app.query.list_tickets_use_case import ListTicketsUseCase
from src.service.ticketing.app.query.validate_ticket_use_case import ValidateTicketUseCase
from src.service.ticketing.domain.enum.ticket_status import TicketStatus
from src.service.ticketing.driving_adapter.http_controller.schema.ticket_schema import (
    AvailableTicketsResponse,
    BookedTicketsResponse,
    PurchaseByTypeRequest,
    SectionTicketsResponse,
    TicketDetailResponse,
    TicketResponse,
    TicketTokenRequest,
    TicketValidationResponse,
)


router = APIRouter()


# Static paths first; `/{ticket_id}` would swallow them otherwise


@router.get('/me', status_code=status.HTTP_200_OK)
@Logger.io
async def list_my_tickets(
    current_user: UserEntity = Depends(require_attendee),
    use_case: ListTicketsUseCase = Depends(ListTicketsUseCase.depends),
) -> List[TicketResponse]:
    tickets = await use_case.list_mine(attendee=current_user)
    return [TicketResponse.from_entity(ticket) for ticket in tickets]


@router.get('/booked', status_code=status.HTTP_200_OK)
@Logger.io
async def list_booked_tickets(
    status_filter: Optional[List[TicketStatus]] = Query(None, alias='status'),
    limit: int = Query(settings.DEFAULT_PAGE_LIMIT, ge=1),
    offset: int = Query(0, ge=0),
    current_user: UserEntity = Depends(require_admin),
    use_case: ListTicketsUseCase = Depends(ListTicketsUseCase.depends),
) -> BookedTicketsResponse:
    tickets, total = await use_case.list_booked(
        actor=current_user, statuses=status_filter, limit=limit, offset=offset
    )
    return BookedTicketsResponse(
        items=[TicketResponse.from_entity(ticket) for ticket in tickets],
        total=total,
        limit=limit,
        offset=offset,
        has_more=offset + len(tickets) < total,
    )


@router.post('/validate', status_code=status.HTTP_200_OK)
@Logger.io
async def validate_ticket(
    request: TicketTokenRequest,
    use_case: ValidateTicketUseCase = Depends(ValidateTicketUseCase.depends),
) -> TicketValidationResponse:
    ticket, event = await use_case.validate(token=request.token)
    return TicketValidationResponse.from_entities(ticket, event)


@router.post('/check-in', status_code=status.HTTP_200_OK)
@Logger.io
async def check_in_ticket(
    request: TicketTokenRequest,
    current_user: UserEntity = Depends(require_admin),
    use_case: CheckInTicketUseCase = Depends(CheckInTicketUseCase.depends),
) -> TicketResponse:
    ticket = await use_case.check_in(token=request.token, actor=current_user)
    return TicketResponse.from_entity(ticket)


@router.get('/event/{event_id}/available', status_code=status.HTTP_200_OK)
@Logger.io
async def list_available_tickets(
    event_id: int,
    use_case: ListTicketsUseCase = Depends(ListTicketsUseCase.depends),
) -> AvailableTicketsResponse:
    grouped = await use_case.list_available_by_section(event_id=event_id)
    return AvailableTicketsResponse(
        event_id=event_id,
        total=sum(len(tickets) for tickets in grouped.values()),
        sections=[
            SectionTicketsResponse(
                section=section,
                count=len(tickets),
                tickets=[TicketResponse.from_entity(ticket) for ticket in tickets],
            )
            for section, tickets in grouped.items()
        ],
    )


@router.post('/event/{event_id}/purchase', status_code=status.HTTP_201_CREATED)
@Logger.io
async def purchase_by_type(
    event_id: int,
    request: PurchaseByTypeRequest,
    current_user: UserEntity = Depends(require_attendee),
    use_case: PurchaseTicketUseCase = Depends(PurchaseTicketUseCase.depends),
) -> TicketResponse:
    ticket = await use_case.purchase_by_type(
        event_id=event_id, ticket_type=request.ticket_type, attendee=current_user
    )
    return TicketResponse.from_entity(ticket)


@router.post('/{ticket_id}/book', status_code=status.HTTP_201_CREATED)
@Logger.io
async def purchase_ticket(
    ticket_id: int,
    current_user: UserEntity = Depends(require_attendee),
    use_case: PurchaseTicketUseCase = Depends(PurchaseTicketUseCase.depends),
) -> TicketResponse:
    ticket = await use_case.purchase_ticket(ticket_id=ticket_id, attendee=current_user)
    return TicketResponse.from_entity(ticket)


@router.post('/{ticket_id}/reserve', status_code=status.HTTP_200_OK)
@Logger.io
async def reserve_ticket(
    ticket_id: int,
    current_user: UserEntity = Depends(require_attendee),
    use_case: ReserveTicketUseCase = Depends(ReserveTicketUseCase.depends),
) -> TicketResponse:
    ticket = await use_case.reserve_ticket(ticket_id=ticket_id, attendee=current_user)
    return TicketResponse.from_entity(ticket)


@router.post('/{ticket_id}/release', status_code=status.HTTP_200_OK)
@Logger.io
async def release_ticket(
    ticket_id: int,
    current_user: UserEntity = Depends(get_current_user),
    use_case: ReserveTicketUseCase = Depends(ReserveTicketUseCase.depends),
) -> TicketResponse:
    ticket = await use_case.release_ticket(ticket_id=ticket_id, actor=current_user)
    return TicketResponse.from_entity(ticket)


@router.post('/{ticket_id}/cancel', status_code=status.HTTP_200_OK)
@Logger.io
async def cancel_ticket(
    ticket_id: int,
    current_user: UserEntity = Depends(get_current_user),
    use_case: CancelTicketUseCase = Depends(CancelTicketUseCase.depends),
) -> TicketResponse:
    ticket = await use_case.cancel_ticket(ticket_id=ticket_id, actor=current_user)
    return TicketResponse.from_entity(ticket)


@router.post('/{ticket_id}/refund', status_code=status.HTTP_200_OK)
@Logger.io
async def refund_ticket(
    ticket_id: int,
    current_user: UserEntity = Depends(get_current_user),
    use_case: CancelTicketUseCase = Depends(CancelTicketUseCase.depends),
) -> TicketResponse:
    ticket = await use_case.refund_ticket(ticket_id=ticket_id, actor=current_user)
    return TicketResponse.from_entity(ticket)


@router.get('/{ticket_id}/qrcode', status_code=status.HTTP_200_OK)
@Logger.io
async def get_ticket_qrcode(
    ticket_id: int,
    current_user: UserEntity = Depends(get_current_user),
    use_case: GetTicketUseCase = Depends(GetTicketUseCase.depends),
) -> Response:
    png = await use_case.get_qr_image(ticket_id=ticket_id, actor=current_user)
    return Response(content=png, media_type='image/png')


@router.get('/{ticket_id}', status_code=status.HTTP_200_OK)
@Logger.io
async def get_ticket(
    ticket_id: int,
    current_user: UserEntity = Depends(get_current_user),
    use_case: GetTicketUseCase = Depends(GetTicketUseCase.depends),
) -> TicketDetailResponse:
    ticket, event = await use_case.get_by_id(ticket_id=ticket_id, actor=current_user)
    return TicketDetailResponse.from_entities(ticket, event)
