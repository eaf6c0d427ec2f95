from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from src.service.venue.domain.entity.seat_entity import SeatEntity
from src.service.venue.domain.enum.seat_status import SeatStatus


class SeatIdsRequest(BaseModel):
    seat_ids: List[int] = Field(..., min_length=1)

    class Config:
        json_schema_extra = {'example': {'seat_ids': [11, 12, 13]}}


class SeatStatusRequest(BaseModel):
    status: SeatStatus


class SeatResponse(BaseModel):
    id: int
    section_id: int
    section_name: Optional[str] = None
    number: int
    label: str
    status: SeatStatus
    held_by: Optional[int] = None
    held_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, seat: SeatEntity) -> 'SeatResponse':
        return cls(
            id=seat.id or 0,
            section_id=seat.section_id,
            section_name=seat.section_name,
            number=seat.number,
            label=seat.label,
            status=seat.status,
            held_by=seat.held_by,
            held_at=seat.held_at,
        )


class SeatReservationResponse(BaseModel):
    seat_ids: List[int]
    status: SeatStatus


class SeatReleaseResponse(BaseModel):
    released: int
