from typing import List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.logging.loguru_io import Logger
from src.service.identity.domain.authorization_policy import Action, AuthorizationPolicy
from src.service.identity.domain.entity.user_entity import UserEntity
from src.service.venue.domain.entity.venue_entity import SectionEntity, VenueEntity


class CreateVenueUseCase:
    """
    Create a venue, its sections and (for sectioned venues) the seat arena in one
    transaction.
    """

    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow

    @classmethod
    @inject
    def depends(cls, uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work])) -> Self:
        return cls(uow=uow)

    @Logger.io
    async def create_venue(
        self,
        *,
        actor: UserEntity,
        name: str,
        location: str,
        capacity: int,
        has_sections: bool,
        sections: List[SectionEntity],
    ) -> VenueEntity:
        AuthorizationPolicy.ensure(actor, Action.CREATE_VENUE)
        assert actor.id is not None

        venue = VenueEntity.create(
            admin_id=actor.id,
            name=name,
            location=location,
            capacity=capacity,
            has_sections=has_sections,
            sections=sections,
        )

        async with self.uow:
            saved = await self.uow.venue_command_repo.create(venue=venue)
            seat_count = await self.uow.seat_command_repo.create_for_sections(
                sections=saved.sections
            )
            await self.uow.commit()

        Logger.base.info(
            f'✅ [CREATE_VENUE] Venue {saved.id} with {len(saved.sections)} sections, '
            f'{seat_count} seats'
        )
        return saved
