"""
Venue API Schemas - Pydantic models for request/response
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from src.service.venue.domain.entity.venue_entity import SectionEntity, VenueEntity


class SectionRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    capacity: int

    def to_entity(self) -> SectionEntity:
        return SectionEntity(name=self.name, capacity=self.capacity)


class VenueCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    location: str = Field(..., min_length=1, max_length=255)
    capacity: int
    has_sections: bool = False
    sections: List[SectionRequest] = Field(default_factory=list)

    class Config:
        json_schema_extra = {
            'example': {
                'name': 'Riverside Arena',
                'location': '1 Harbour Road',
                'capacity': 100,
                'has_sections': True,
                'sections': [{'name': 'A', 'capacity': 60}, {'name': 'B', 'capacity': 40}],
            }
        }


class VenueUpdateRequest(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    location: Optional[str] = Field(None, min_length=1, max_length=255)
    capacity: Optional[int] = None
    has_sections: Optional[bool] = None
    sections: Optional[List[SectionRequest]] = None


class SectionResponse(BaseModel):
    id: int
    name: str
    capacity: int
    position: int


class VenueResponse(BaseModel):
    id: int
    admin_id: int
    name: str
    location: str
    capacity: int
    has_sections: bool
    sections: List[SectionResponse]
    created_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, venue: VenueEntity) -> 'VenueResponse':
        return cls(
            id=venue.id or 0,
            admin_id=venue.admin_id,
            name=venue.name,
            location=venue.location,
            capacity=venue.capacity,
            has_sections=venue.has_sections,
            sections=[
                SectionResponse(
                    id=section.id or 0,
                    name=section.name,
                    capacity=section.capacity,
                    position=section.position,
                )
                for section in venue.sections
            ],
            created_at=venue.created_at,
        )


class VenueListResponse(BaseModel):
    items: List[VenueResponse]
    total: int
    limit: int
    offset: int
    has_more: bool
