"""
Venue Entity

[Business Invariants]
- capacity is a positive integer
- sectioned venue: sections non-empty, names unique, sum(section.capacity) == capacity
- general-admission venue: no sections
"""

from datetime import datetime
from typing import Any, Iterable, List, Optional, Type

import attrs

from src.platform.exception.exceptions import CustomBaseError, ValidationError


def _is_positive_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def _validate_non_empty_string(instance: object, attribute: attrs.Attribute, value: str) -> None:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f'Venue {attribute.name} cannot be empty')


@attrs.define
class SectionEntity:
    name: str
    capacity: int
    position: int = 0
    id: Optional[int] = None
    venue_id: Optional[int] = None


@attrs.define
class VenueEntity:
    admin_id: int
    name: str = attrs.field(validator=_validate_non_empty_string)
    location: str = attrs.field(validator=_validate_non_empty_string)
    capacity: int = 0
    has_sections: bool = False
    sections: List[SectionEntity] = attrs.field(factory=list)
    id: Optional[int] = None
    created_at: Optional[datetime] = None

    @classmethod
    def create(
        cls,
        *,
        admin_id: int,
        name: str,
        location: str,
        capacity: int,
        has_sections: bool,
        sections: Iterable[SectionEntity] = (),
    ) -> 'VenueEntity':
        venue = cls(
            admin_id=admin_id,
            name=name.strip(),
            location=location.strip(),
            capacity=capacity,
            has_sections=has_sections,
            sections=cls.normalize_sections(sections),
        )
        venue.validate_layout()
        return venue

    @staticmethod
    def normalize_sections(sections: Iterable[SectionEntity]) -> List[SectionEntity]:
        return [
            SectionEntity(
                name=section.name.strip() if isinstance(section.name, str) else section.name,
                capacity=section.capacity,
                position=position,
            )
            for position, section in enumerate(sections)
        ]

    def layout_error(self) -> Optional[str]:
        if not _is_positive_int(self.capacity):
            return 'Venue capacity must be a positive integer'

        if not self.has_sections:
            if self.sections:
                return 'Sections are not allowed when has_sections is false'
            return None

        if not self.sections:
            return 'Sections are required when has_sections is true'

        seen: set[str] = set()
        for section in self.sections:
            if not isinstance(section.name, str) or not section.name.strip():
                return 'Section name cannot be empty'
            if not _is_positive_int(section.capacity):
                return f'Section {section.name} capacity must be a positive integer'
            if section.name in seen:
                return f'Duplicate section name: {section.name}'
            seen.add(section.name)

        total = sum(section.capacity for section in self.sections)
        if total != self.capacity:
            return (
                f'Sum of section capacities ({total}) must equal venue capacity ({self.capacity})'
            )
        return None

    def validate_layout(self, error_cls: Type[CustomBaseError] = ValidationError) -> None:
        if message := self.layout_error():
            raise error_cls(message)  # type: ignore[call-arg]

    def same_layout_as(self, other: 'VenueEntity') -> bool:
        return (
            self.capacity == other.capacity
            and self.has_sections == other.has_sections
            and [(s.name, s.capacity) for s in self.sections]
            == [(s.name, s.capacity) for s in other.sections]
        )

    def section_by_name(self, name: str) -> Optional[SectionEntity]:
        return next((section for section in self.sections if section.name == name), None)
