from datetime import datetime
from typing import Any, List, Mapping, Optional, Self, Sequence

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.ticketing_metrics import metrics
from src.service.identity.domain.authorization_policy import Action, AuthorizationPolicy
from src.service.identity.domain.entity.user_entity import UserEntity
from src.service.shared_kernel.app.interface.i_image_storage import IImageStorage
from src.service.shared_kernel.domain.value_object.image_blob import ImageBlob
from src.service.ticketing.domain.aggregate.event_ticketing_aggregate import (
    EventTicketingAggregate,
)


class CreateEventAndTicketsUseCase:
    """
    Create an event and its full ticket pool.

    The event insert and the batch ticket insert share one unit of work: if generation
    fails, the event row is rolled back with it.
    """

    def __init__(self, *, uow: AbstractUnitOfWork, image_storage: IImageStorage) -> None:
        self.uow = uow
        self.image_storage = image_storage

    @classmethod
    @inject
    def depends(
        cls,
        uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work]),
        image_storage: IImageStorage = Depends(Provide[Container.image_storage]),
    ) -> Self:
        return cls(uow=uow, image_storage=image_storage)

    @Logger.io
    async def create_event_and_tickets(
        self,
        *,
        actor: UserEntity,
        venue_id: int,
        title: str,
        description: str,
        start_date: datetime,
        end_date: datetime,
        ticket_types: Sequence[Mapping[str, Any]],
        artist_lineup: Optional[List[str]] = None,
        images: Optional[List[ImageBlob]] = None,
    ) -> tuple[EventTicketingAggregate, int]:
        AuthorizationPolicy.ensure(actor, Action.CREATE_EVENT)
        assert actor.id is not None

        async with self.uow:
            venue = await self.uow.venue_query_repo.get_by_id(venue_id=venue_id)
            if venue is None:
                raise NotFoundError(f'Venue not found: {venue_id}')

            # Validates dates and ticket types before anything is written
            aggregate = EventTicketingAggregate.create_event_with_tickets(
                admin_id=actor.id,
                venue=venue,
                title=title,
                description=description,
                start_date=start_date,
                end_date=end_date,
                ticket_types=ticket_types,
                artist_lineup=artist_lineup,
            )

            aggregate.event.image_urls = [
                await self.image_storage.upload(
                    filename=image.filename, content_type=image.content_type, data=image.data
                )
                for image in images or []
            ]

            aggregate.event = await self.uow.event_command_repo.create(event=aggregate.event)

            seat_id_map = (
                await self.uow.seat_query_repo.map_seat_ids(venue_id=venue_id)
                if venue.has_sections
                else None
            )
            tickets = aggregate.generate_tickets(seat_id_map=seat_id_map)
            count = await self.uow.ticket_command_repo.bulk_create(tickets=tickets)

            await self.uow.commit()

        metrics.record_tickets_generated(
            kind='sectioned' if venue.has_sections else 'general_admission', count=count
        )
        Logger.base.info(
            f'✅ [CREATE_EVENT] Event {aggregate.event.id} at venue {venue_id} with {count} tickets'
        )
        return aggregate, count
