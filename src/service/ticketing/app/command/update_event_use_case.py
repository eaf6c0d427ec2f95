from datetime import datetime
from typing import List, Optional, Self

import attrs
from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import NotFoundError, ValidationError
from src.platform.logging.loguru_io import Logger
from src.service.identity.domain.authorization_policy import Action, AuthorizationPolicy
from src.service.identity.domain.entity.user_entity import UserEntity
from src.service.shared_kernel.app.interface.i_image_storage import IImageStorage
from src.service.shared_kernel.domain.value_object.image_blob import ImageBlob
from src.service.ticketing.domain.capacity_validator import CapacityValidator
from src.service.ticketing.domain.entity.event_entity import EventEntity


class UpdateEventUseCase:
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
    async def update_event(
        self,
        *,
        actor: UserEntity,
        event_id: int,
        title: Optional[str] = None,
        description: Optional[str] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
        venue_id: Optional[int] = None,
        artist_lineup: Optional[List[str]] = None,
        images: Optional[List[ImageBlob]] = None,
    ) -> EventEntity:
        """
        Owner-only update of the mutable fields. Ticket types stay fixed; a venue change
        re-points the existing ticket rows at the new venue's seats in the same
        transaction. New images replace the current ones.
        """
        async with self.uow:
            current = await self.uow.event_query_repo.get_by_id(event_id=event_id)
            if current is None:
                raise NotFoundError(f'Event not found: {event_id}')
            AuthorizationPolicy.ensure(actor, Action.MANAGE_EVENT, current)

            if title is not None and not title.strip():
                raise ValidationError('Event title cannot be empty')

            updated = attrs.evolve(
                current,
                title=title.strip() if title is not None else current.title,
                description=description if description is not None else current.description,
                start_date=start_date or current.start_date,
                end_date=end_date or current.end_date,
                artist_lineup=(
                    artist_lineup if artist_lineup is not None else current.artist_lineup
                ),
            )

            if venue_id is not None and venue_id != current.venue_id:
                await self._move_to_venue(event=updated, venue_id=venue_id)

            if images:
                updated.image_urls = [
                    await self.image_storage.upload(
                        filename=image.filename, content_type=image.content_type, data=image.data
                    )
                    for image in images
                ]

            saved = await self.uow.event_command_repo.update(event=updated)
            await self.uow.commit()

        Logger.base.info(f'✅ [UPDATE_EVENT] Event {event_id} updated')
        return saved

    async def _move_to_venue(self, *, event: EventEntity, venue_id: int) -> None:
        current_venue = await self.uow.venue_query_repo.get_by_id(venue_id=event.venue_id)
        new_venue = await self.uow.venue_query_repo.get_by_id(venue_id=venue_id)
        if new_venue is None:
            raise NotFoundError(f'Venue not found: {venue_id}')
        assert current_venue is not None

        CapacityValidator.validate_venue_change(
            current_venue=current_venue, new_venue=new_venue, ticket_types=event.ticket_types
        )

        seat_id_map = (
            await self.uow.seat_query_repo.map_seat_ids(venue_id=venue_id)
            if new_venue.has_sections
            else {}
        )
        moved = await self.uow.ticket_command_repo.repoint_seats(
            event_id=event.id, venue_id=venue_id, seat_id_map=seat_id_map
        )
        event.venue_id = venue_id
        Logger.base.info(
            f'🔀 [UPDATE_EVENT] Event {event.id} moved to venue {venue_id} ({moved} tickets)'
        )
