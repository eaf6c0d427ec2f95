from sqlalchemy import delete, update

from src.platform.database.session_scoped_repo import SessionScopedRepo
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.interface.i_event_command_repo import IEventCommandRepo
from src.service.ticketing.domain.entity.event_entity import EventEntity
from src.service.ticketing.driven_adapter.model.event_model import EventModel
from src.service.ticketing.driven_adapter.repo.ticketing_mapper import model_to_event


class EventCommandRepoImpl(SessionScopedRepo, IEventCommandRepo):
    @Logger.io
    async def create(self, *, event: EventEntity) -> EventEntity:
        async with self._get_session() as session:
            event_model = EventModel(
                admin_id=event.admin_id,
                venue_id=event.venue_id,
                title=event.title,
                description=event.description,
                start_date=event.start_date,
                end_date=event.end_date,
                artist_lineup=event.artist_lineup,
                image_urls=event.image_urls,
                ticket_types=[tt.to_dict() for tt in event.ticket_types],
            )
            session.add(event_model)
            await session.flush()
            await session.refresh(event_model)

            return model_to_event(event_model)

    @Logger.io
    async def update(self, *, event: EventEntity) -> EventEntity:
        async with self._get_session() as session:
            result = await session.execute(
                update(EventModel)
                .where(EventModel.id == event.id)
                .values(
                    venue_id=event.venue_id,
                    title=event.title,
                    description=event.description,
                    start_date=event.start_date,
                    end_date=event.end_date,
                    artist_lineup=event.artist_lineup,
                    image_urls=event.image_urls,
                )
                .returning(EventModel)
            )
            event_model = result.scalar_one_or_none()
            if event_model is None:
                raise NotFoundError(f'Event not found: {event.id}')

            return model_to_event(event_model)

    @Logger.io
    async def delete(self, *, event_id: int) -> None:
        async with self._get_session() as session:
            await session.execute(delete(EventModel).where(EventModel.id == event_id))
