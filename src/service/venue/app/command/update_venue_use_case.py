from typing import List, Optional, Self

import attrs
from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import ConflictError, IntegrityError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.identity.domain.authorization_policy import Action, AuthorizationPolicy
from src.service.identity.domain.entity.user_entity import UserEntity
from src.service.venue.domain.entity.venue_entity import SectionEntity, VenueEntity


class UpdateVenueUseCase:
    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow

    @classmethod
    @inject
    def depends(cls, uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work])) -> Self:
        return cls(uow=uow)

    @Logger.io
    async def update_venue(
        self,
        *,
        actor: UserEntity,
        venue_id: int,
        name: Optional[str] = None,
        location: Optional[str] = None,
        capacity: Optional[int] = None,
        has_sections: Optional[bool] = None,
        sections: Optional[List[SectionEntity]] = None,
    ) -> VenueEntity:
        """
        Owner-only partial update.

        Layout fields (capacity, has_sections, sections) are re-validated as a whole; a
        result that breaks the section-sum invariant is an IntegrityError. Layout changes
        are refused while any event references the venue, because ticket rows point at
        the current seats.
        """
        async with self.uow:
            current = await self.uow.venue_query_repo.get_by_id(venue_id=venue_id)
            if current is None:
                raise NotFoundError(f'Venue not found: {venue_id}')
            AuthorizationPolicy.ensure(actor, Action.MANAGE_VENUE, current)

            updated = attrs.evolve(
                current,
                name=name.strip() if name is not None else current.name,
                location=location.strip() if location is not None else current.location,
                capacity=capacity if capacity is not None else current.capacity,
                has_sections=has_sections if has_sections is not None else current.has_sections,
                sections=(
                    VenueEntity.normalize_sections(sections)
                    if sections is not None
                    else ([] if has_sections is False else current.sections)
                ),
            )
            updated.validate_layout(error_cls=IntegrityError)

            layout_changed = not updated.same_layout_as(current)
            if layout_changed:
                if await self.uow.venue_query_repo.has_events(venue_id=venue_id):
                    raise ConflictError(
                        'Venue layout cannot change while events are scheduled at it'
                    )
                updated.sections = await self.uow.venue_command_repo.replace_sections(
                    venue_id=venue_id, sections=updated.sections
                )
                await self.uow.seat_command_repo.create_for_sections(sections=updated.sections)

            await self.uow.venue_command_repo.update_details(venue=updated)
            await self.uow.commit()

        Logger.base.info(
            f'✅ [UPDATE_VENUE] Venue {venue_id} updated (layout_changed={layout_changed})'
        )
        return updated
