from typing import List

from sqlalchemy import delete, update

from src.platform.database.session_scoped_repo import SessionScopedRepo
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.venue.app.interface.i_venue_command_repo import IVenueCommandRepo
from src.service.venue.domain.entity.venue_entity import SectionEntity, VenueEntity
from src.service.venue.driven_adapter.model.venue_model import VenueModel, VenueSectionModel
from src.service.venue.driven_adapter.repo.venue_mapper import model_to_section, model_to_venue


class VenueCommandRepoImpl(SessionScopedRepo, IVenueCommandRepo):
    @Logger.io
    async def create(self, *, venue: VenueEntity) -> VenueEntity:
        async with self._get_session() as session:
            venue_model = VenueModel(
                admin_id=venue.admin_id,
                name=venue.name,
                location=venue.location,
                capacity=venue.capacity,
                has_sections=venue.has_sections,
                sections=[
                    VenueSectionModel(name=s.name, capacity=s.capacity, position=s.position)
                    for s in venue.sections
                ],
            )
            session.add(venue_model)
            await session.flush()
            await session.refresh(venue_model, attribute_names=['created_at', 'sections'])

            return model_to_venue(venue_model)

    @Logger.io
    async def update_details(self, *, venue: VenueEntity) -> VenueEntity:
        async with self._get_session() as session:
            result = await session.execute(
                update(VenueModel)
                .where(VenueModel.id == venue.id)
                .values(
                    name=venue.name,
                    location=venue.location,
                    capacity=venue.capacity,
                    has_sections=venue.has_sections,
                )
                .returning(VenueModel.id)
            )
            if result.scalar_one_or_none() is None:
                raise NotFoundError(f'Venue not found: {venue.id}')
            return venue

    @Logger.io
    async def replace_sections(
        self, *, venue_id: int, sections: List[SectionEntity]
    ) -> List[SectionEntity]:
        async with self._get_session() as session:
            await session.execute(
                delete(VenueSectionModel).where(VenueSectionModel.venue_id == venue_id)
            )
            section_models = [
                VenueSectionModel(
                    venue_id=venue_id, name=s.name, capacity=s.capacity, position=s.position
                )
                for s in sections
            ]
            session.add_all(section_models)
            await session.flush()

            return [model_to_section(m) for m in section_models]

    @Logger.io
    async def delete(self, *, venue_id: int) -> None:
        async with self._get_session() as session:
            await session.execute(delete(VenueModel).where(VenueModel.id == venue_id))
