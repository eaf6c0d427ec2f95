"""
Unit tests for EventTicketingAggregate

Test Focus:
1. Sectioned venue: one ticket per seat, labelled {section}-1..{section}-N
2. General admission: one ticket per declared unit, no seat labels
3. Invalid declarations never produce tickets
4. Event dates and title validation
"""

from datetime import datetime, timedelta, timezone

import pytest

from src.platform.exception.exceptions import IntegrityError, ValidationError
from src.service.ticketing.domain.aggregate.event_ticketing_aggregate import (
    EventTicketingAggregate,
    parse_seat_label,
    seat_labels,
)
from src.service.ticketing.domain.enum.ticket_status import TicketStatus
from test.factories import make_ga_venue, make_sectioned_venue


START = datetime(2030, 7, 1, 19, 0, tzinfo=timezone.utc)
END = START + timedelta(hours=4)


def _seat_map(*sections: tuple[str, int]) -> dict[tuple[str, int], int]:
    seat_ids: dict[tuple[str, int], int] = {}
    for name, capacity in sections:
        for number in range(1, capacity + 1):
            seat_ids[(name, number)] = len(seat_ids) + 1
    return seat_ids


def _create(venue, ticket_types, **overrides):
    fields = {
        'admin_id': 1,
        'venue': venue,
        'title': 'Summer Night',
        'description': '',
        'start_date': START,
        'end_date': END,
        'ticket_types': ticket_types,
    }
    fields.update(overrides)
    aggregate = EventTicketingAggregate.create_event_with_tickets(**fields)
    aggregate.event.id = 7
    return aggregate


@pytest.mark.unit
class TestSeatLabels:
    def test_labels_are_sequential_from_one(self):
        assert list(seat_labels('A', 3)) == ['A-1', 'A-2', 'A-3']

    def test_parse_keeps_dashes_in_section_name(self):
        assert parse_seat_label('Upper-East-12') == ('Upper-East', 12)


@pytest.mark.unit
class TestSectionedGeneration:
    def test_sixty_forty_sections_generate_one_hundred_labelled_tickets(self):
        venue = make_sectioned_venue(('A', 60), ('B', 40))
        aggregate = _create(
            venue,
            [
                {'type': 'A', 'price': 80, 'quantity': 60},
                {'type': 'B', 'price': 50, 'quantity': 40},
            ],
        )

        tickets = aggregate.generate_tickets(seat_id_map=_seat_map(('A', 60), ('B', 40)))

        assert len(tickets) == 100
        assert [t.seat_number for t in tickets if t.section_name == 'A'] == [
            f'A-{n}' for n in range(1, 61)
        ]
        assert [t.seat_number for t in tickets if t.section_name == 'B'] == [
            f'B-{n}' for n in range(1, 41)
        ]
        assert all(t.status == TicketStatus.AVAILABLE for t in tickets)
        assert all(t.event_id == 7 and t.venue_id == venue.id for t in tickets)
        assert len({t.seat_id for t in tickets}) == 100

    def test_declared_quantity_below_section_capacity_limits_tickets(self):
        venue = make_sectioned_venue(('A', 60), ('B', 40))
        aggregate = _create(
            venue,
            [
                {'type': 'A', 'price': 80, 'quantity': 10},
                {'type': 'B', 'price': 50, 'quantity': 0},
            ],
        )

        tickets = aggregate.generate_tickets(seat_id_map=_seat_map(('A', 60), ('B', 40)))

        assert [t.seat_number for t in tickets] == [f'A-{n}' for n in range(1, 11)]

    def test_missing_seat_in_map_is_an_integrity_error(self):
        aggregate = _create(
            make_sectioned_venue(('A', 2)), [{'type': 'A', 'price': 10, 'quantity': 2}]
        )

        with pytest.raises(IntegrityError, match='A-2'):
            aggregate.generate_tickets(seat_id_map={('A', 1): 1})


@pytest.mark.unit
class TestGeneralAdmissionGeneration:
    def test_one_ticket_per_declared_unit(self):
        aggregate = _create(
            make_ga_venue(100),
            [
                {'type': 'Standard', 'price': 30, 'quantity': 70},
                {'type': 'VIP', 'price': 90, 'quantity': 30},
            ],
        )

        tickets = aggregate.generate_tickets()

        assert aggregate.total_tickets_count == 100
        assert sum(t.ticket_type == 'VIP' for t in tickets) == 30
        assert all(t.seat_number is None and t.seat_id is None for t in tickets)
        assert all(t.is_general_admission for t in tickets)

    def test_over_capacity_declaration_generates_nothing(self):
        with pytest.raises(ValidationError):
            _create(
                make_ga_venue(100),
                [
                    {'type': 'Standard', 'price': 30, 'quantity': 80},
                    {'type': 'VIP', 'price': 90, 'quantity': 30},
                ],
            )

    def test_tickets_require_a_persisted_event(self):
        aggregate = _create(make_ga_venue(10), [{'type': 'GA', 'price': 5, 'quantity': 10}])
        aggregate.event.id = None

        with pytest.raises(ValueError, match='persisted'):
            aggregate.generate_tickets()

    def test_generation_runs_once(self):
        aggregate = _create(make_ga_venue(10), [{'type': 'GA', 'price': 5, 'quantity': 10}])
        aggregate.generate_tickets()

        with pytest.raises(ValueError, match='already generated'):
            aggregate.generate_tickets()


@pytest.mark.unit
class TestEventValidation:
    def test_end_before_start_is_rejected(self):
        with pytest.raises(ValidationError):
            _create(
                make_ga_venue(10),
                [{'type': 'GA', 'price': 5, 'quantity': 10}],
                end_date=START - timedelta(hours=1),
            )

    def test_blank_title_is_rejected(self):
        with pytest.raises(ValidationError, match='title cannot be empty'):
            _create(make_ga_venue(10), [{'type': 'GA', 'price': 5, 'quantity': 10}], title='  ')

    def test_mixed_offset_and_offset_less_dates_are_compared_in_utc(self):
        aggregate = _create(
            make_ga_venue(10),
            [{'type': 'GA', 'price': 5, 'quantity': 10}],
            start_date=datetime(2030, 7, 1, 19, 0),
            end_date=datetime(2030, 7, 1, 23, 0, tzinfo=timezone(timedelta(hours=2))),
        )

        assert aggregate.event.start_date == START
        assert aggregate.event.end_date == datetime(2030, 7, 1, 21, 0, tzinfo=timezone.utc)

    def test_offset_less_end_before_start_is_a_validation_error(self):
        with pytest.raises(ValidationError):
            _create(
                make_ga_venue(10),
                [{'type': 'GA', 'price': 5, 'quantity': 10}],
                end_date=datetime(2030, 7, 1, 18, 0),
            )
