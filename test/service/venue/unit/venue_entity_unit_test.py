"""
Unit tests for VenueEntity

Test Focus:
1. Sectioned venues: non-empty, unique names, capacities summing to the venue capacity
2. General-admission venues carry no sections
3. Names and locations are trimmed and required
"""

import pytest

from src.platform.exception.exceptions import IntegrityError, ValidationError
from src.service.venue.domain.entity.venue_entity import SectionEntity, VenueEntity


def _create(**overrides):
    fields = {
        'admin_id': 1,
        'name': 'Riverside Arena',
        'location': '1 Harbour Road',
        'capacity': 100,
        'has_sections': True,
        'sections': [SectionEntity(name='A', capacity=60), SectionEntity(name='B', capacity=40)],
    }
    fields.update(overrides)
    return VenueEntity.create(**fields)


@pytest.mark.unit
class TestVenueLayout:
    def test_sections_summing_to_capacity_are_accepted(self):
        venue = _create()

        assert [(s.name, s.capacity, s.position) for s in venue.sections] == [
            ('A', 60, 0),
            ('B', 40, 1),
        ]

    def test_sum_mismatch_is_rejected(self):
        with pytest.raises(ValidationError, match=r'\(90\) must equal venue capacity \(100\)'):
            _create(
                sections=[SectionEntity(name='A', capacity=60), SectionEntity(name='B', capacity=30)]
            )

    def test_sectioned_venue_needs_sections(self):
        with pytest.raises(ValidationError, match='Sections are required'):
            _create(sections=[])

    def test_duplicate_section_names_are_rejected(self):
        with pytest.raises(ValidationError, match='Duplicate section name: A'):
            _create(
                sections=[SectionEntity(name='A', capacity=50), SectionEntity(name=' A', capacity=50)]
            )

    def test_zero_capacity_section_is_rejected(self):
        with pytest.raises(ValidationError, match='capacity must be a positive integer'):
            _create(
                sections=[SectionEntity(name='A', capacity=100), SectionEntity(name='B', capacity=0)]
            )

    def test_general_admission_rejects_sections(self):
        with pytest.raises(ValidationError, match='not allowed'):
            _create(has_sections=False)

    def test_general_admission_without_sections(self):
        venue = _create(has_sections=False, sections=[])

        assert venue.sections == []
        assert venue.capacity == 100

    @pytest.mark.parametrize('capacity', [0, -5, True])
    def test_capacity_must_be_a_positive_integer(self, capacity):
        with pytest.raises(ValidationError, match='positive integer'):
            _create(has_sections=False, sections=[], capacity=capacity)

    def test_blank_name_is_rejected(self):
        with pytest.raises(ValidationError, match='name cannot be empty'):
            _create(name='   ')

    def test_layout_error_class_can_be_chosen(self):
        venue = _create()
        venue.capacity = 120

        with pytest.raises(IntegrityError):
            venue.validate_layout(error_cls=IntegrityError)
