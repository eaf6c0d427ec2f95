from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status

from src.platform.config.core_setting import settings
from src.platform.logging.loguru_io import Logger
from src.service.identity.domain.entity.user_entity import UserEntity
from src.service.identity.driving_adapter.http_controller.auth.role_auth import require_admin
from src.service.shared_kernel.domain.value_object.image_blob import ImageBlob
from src.service.ticketing.app.command.create_event_and_tickets_use_case import (
    CreateEventAndTicketsUseCase,
)
from src.service.ticketing.app.command.delete_event_use_case import DeleteEventUseCase
from src.service.ticketing.app.command.update_event_use_case import UpdateEventUseCase
from src.service.ticketing.app.query.get_event_use_case import GetEventUseCase
from src.service.ticketing.app.query.list_events_use_case import ListEventsUseCase
from src.service.ticketing.driving_adapter.http_controller.schema.event_schema import (
    EventCreateResponse,
    EventListResponse,
    EventResponse,
    parse_artist_lineup,
    parse_ticket_types,
)


router = APIRouter()


async def _read_images(images: Optional[List[UploadFile]]) -> List[ImageBlob]:
    return [
        ImageBlob(
            filename=image.filename or 'image',
            content_type=image.content_type or 'application/octet-stream',
            data=await image.read(),
        )
        for image in images or []
        if image.filename
    ]


@router.post('', status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_event(
    venue_id: int = Form(...),
    title: str = Form(..., min_length=1, max_length=255),
    start_date: datetime = Form(...),
    end_date: datetime = Form(...),
    tickets: str = Form(..., description='JSON array of {type, price, quantity}'),
    description: str = Form(''),
    artist_lineup: Optional[str] = Form(None, description='JSON array or comma list'),
    images: Optional[List[UploadFile]] = File(None),
    current_user: UserEntity = Depends(require_admin),
    use_case: CreateEventAndTicketsUseCase = Depends(CreateEventAndTicketsUseCase.depends),
) -> EventCreateResponse:
    aggregate, generated = await use_case.create_event_and_tickets(
        actor=current_user,
        venue_id=venue_id,
        title=title,
        description=description,
        start_date=start_date,
        end_date=end_date,
        ticket_types=parse_ticket_types(tickets),
        artist_lineup=parse_artist_lineup(artist_lineup),
        images=await _read_images(images),
    )
    return EventCreateResponse(
        event=EventResponse.from_entity(aggregate.event),
        generated_ticket_count=generated,
    )


@router.get('', status_code=status.HTTP_200_OK)
@Logger.io
async def list_events(
    limit: int = Query(settings.DEFAULT_PAGE_LIMIT, ge=1),
    offset: int = Query(0, ge=0),
    upcoming_only: bool = False,
    venue_id: Optional[int] = None,
    use_case: ListEventsUseCase = Depends(ListEventsUseCase.depends),
) -> EventListResponse:
    events, total, availability = await use_case.list_events(
        limit=limit, offset=offset, upcoming_only=upcoming_only, venue_id=venue_id
    )
    return EventListResponse(
        items=[
            EventResponse.from_entity(event, availability.get(event.id or 0, {}))
            for event in events
        ],
        total=total,
        limit=limit,
        offset=offset,
        has_more=offset + len(events) < total,
    )


@router.get('/{event_id}', status_code=status.HTTP_200_OK)
@Logger.io
async def get_event(
    event_id: int,
    use_case: GetEventUseCase = Depends(GetEventUseCase.depends),
) -> EventResponse:
    event, availability = await use_case.get_by_id(event_id=event_id)
    return EventResponse.from_entity(event, availability)


@router.put('/{event_id}', status_code=status.HTTP_200_OK)
@Logger.io
async def update_event(
    event_id: int,
    title: Optional[str] = Form(None, max_length=255),
    description: Optional[str] = Form(None),
    start_date: Optional[datetime] = Form(None),
    end_date: Optional[datetime] = Form(None),
    venue_id: Optional[int] = Form(None),
    artist_lineup: Optional[str] = Form(None),
    images: Optional[List[UploadFile]] = File(None),
    current_user: UserEntity = Depends(require_admin),
    use_case: UpdateEventUseCase = Depends(UpdateEventUseCase.depends),
) -> EventResponse:
    event = await use_case.update_event(
        actor=current_user,
        event_id=event_id,
        title=title,
        description=description,
        start_date=start_date,
        end_date=end_date,
        venue_id=venue_id,
        artist_lineup=parse_artist_lineup(artist_lineup),
        images=await _read_images(images),
    )
    return EventResponse.from_entity(event)


@router.delete('/{event_id}', status_code=status.HTTP_204_NO_CONTENT)
@Logger.io
async def delete_event(
    event_id: int,
    current_user: UserEntity = Depends(require_admin),
    use_case: DeleteEventUseCase = Depends(DeleteEventUseCase.depends),
) -> None:
    await use_case.delete_event(actor=current_user, event_id=event_id)
