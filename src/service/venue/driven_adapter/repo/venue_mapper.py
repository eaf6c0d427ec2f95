from src.service.venue.domain.entity.seat_entity import SeatEntity
from src.service.venue.domain.entity.venue_entity import SectionEntity, VenueEntity
from src.service.venue.domain.enum.seat_status import SeatStatus
from src.service.venue.driven_adapter.model.seat_model import SeatModel
from src.service.venue.driven_adapter.model.venue_model import VenueModel, VenueSectionModel


def model_to_section(section_model: VenueSectionModel) -> SectionEntity:
    return SectionEntity(
        id=section_model.id,
        venue_id=section_model.venue_id,
        name=section_model.name,
        capacity=section_model.capacity,
        position=section_model.position,
    )


def model_to_venue(venue_model: VenueModel) -> VenueEntity:
    return VenueEntity(
        id=venue_model.id,
        admin_id=venue_model.admin_id,
        name=venue_model.name,
        location=venue_model.location,
        capacity=venue_model.capacity,
        has_sections=venue_model.has_sections,
        sections=[model_to_section(s) for s in venue_model.sections],
        created_at=venue_model.created_at,
    )


def model_to_seat(seat_model: SeatModel, section_name: str | None = None) -> SeatEntity:
    return SeatEntity(
        id=seat_model.id,
        section_id=seat_model.section_id,
        number=seat_model.number,
        status=SeatStatus(seat_model.status),
        held_by=seat_model.held_by,
        held_at=seat_model.held_at,
        section_name=section_name,
    )
