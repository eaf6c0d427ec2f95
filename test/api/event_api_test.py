"""
HTTP tests for /api/event

Test Focus:
1. Multipart creation with ticket JSON, artist lineup and images
2. Capacity violations surface as 400 with nothing written
3. Listing and detail report live availability per ticket type
"""

from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock

import attrs
import orjson
import pytest

from src.service.ticketing.app.command.create_event_and_tickets_use_case import (
    CreateEventAndTicketsUseCase,
)
from src.service.ticketing.app.command.delete_event_use_case import DeleteEventUseCase
from src.service.ticketing.app.query.get_event_use_case import GetEventUseCase
from src.service.ticketing.app.query.list_events_use_case import ListEventsUseCase
from test.factories import make_event, make_ga_venue, make_sectioned_venue


START = datetime.now(timezone.utc) + timedelta(days=30)


def _form(**overrides):
    fields = {
        'venue_id': '1',
        'title': 'Summer Night',
        'start_date': START.isoformat(),
        'end_date': (START + timedelta(hours=4)).isoformat(),
        'tickets': orjson.dumps(
            [{'type': 'A', 'price': 80, 'quantity': 60}, {'type': 'B', 'price': 50, 'quantity': 40}]
        ).decode(),
        'artist_lineup': 'Band A, Band B',
    }
    fields.update(overrides)
    return fields


@pytest.fixture
def create_uow(uow, provide):
    uow.event_command_repo.create.side_effect = lambda *, event: attrs.evolve(event, id=7)
    uow.ticket_command_repo.bulk_create.side_effect = lambda *, tickets: len(tickets)
    storage = AsyncMock()
    storage.upload.side_effect = lambda *, filename, content_type, data: f'/static/uploads/{filename}'
    provide(
        CreateEventAndTicketsUseCase.depends,
        CreateEventAndTicketsUseCase(uow=uow, image_storage=storage),
    )
    return uow


@pytest.mark.api
class TestCreateEventApi:
    def test_sectioned_event_generates_one_hundred_tickets(
        self, client, login_as, admin, create_uow
    ):
        login_as(admin)
        create_uow.venue_query_repo.get_by_id.return_value = make_sectioned_venue(
            ('A', 60), ('B', 40)
        )
        create_uow.seat_query_repo.map_seat_ids.return_value = {
            **{('A', n): n for n in range(1, 61)},
            **{('B', n): 60 + n for n in range(1, 41)},
        }

        response = client.post(
            '/api/event',
            data=_form(),
            files=[('images', ('poster.png', b'\x89PNG fake', 'image/png'))],
        )

        assert response.status_code == 201
        body = response.json()
        assert body['generated_ticket_count'] == 100
        assert body['event']['id'] == 7
        assert body['event']['artist_lineup'] == ['Band A', 'Band B']
        assert body['event']['image_urls'] == ['/static/uploads/poster.png']
        assert [t['type'] for t in body['event']['ticket_types']] == ['A', 'B']

    def test_general_admission_over_capacity_is_400(self, client, login_as, admin, create_uow):
        login_as(admin)
        create_uow.venue_query_repo.get_by_id.return_value = make_ga_venue(100)
        tickets = [
            {'type': 'Standard', 'price': 30, 'quantity': 80},
            {'type': 'VIP', 'price': 90, 'quantity': 30},
        ]

        response = client.post(
            '/api/event', data=_form(venue_id='2', tickets=orjson.dumps(tickets).decode())
        )

        assert response.status_code == 400
        assert 'exceeds venue capacity' in response.json()['detail']
        create_uow.ticket_command_repo.bulk_create.assert_not_awaited()

    def test_malformed_tickets_json_is_400(self, client, login_as, admin, create_uow):
        login_as(admin)

        response = client.post('/api/event', data=_form(tickets='{not json'))

        assert response.status_code == 400

    def test_attendee_is_403(self, client, login_as, attendee, create_uow):
        login_as(attendee)

        assert client.post('/api/event', data=_form()).status_code == 403


@pytest.mark.api
class TestReadEventApi:
    def test_detail_reports_live_availability(self, client, provide):
        event_query_repo = AsyncMock()
        event_query_repo.get_by_id.return_value = make_event()
        event_query_repo.count_available_by_type.return_value = {5: {'A': 12}}
        provide(GetEventUseCase.depends, GetEventUseCase(event_query_repo=event_query_repo))

        response = client.get('/api/event/5')

        assert response.status_code == 200
        assert response.json()['ticket_types'][0]['available'] == 12

    def test_unknown_event_is_404(self, client, provide):
        event_query_repo = AsyncMock()
        event_query_repo.get_by_id.return_value = None
        provide(GetEventUseCase.depends, GetEventUseCase(event_query_repo=event_query_repo))

        assert client.get('/api/event/404').status_code == 404

    def test_list_pages(self, client, provide):
        event_query_repo = AsyncMock()
        event_query_repo.list_events.return_value = ([make_event()], 3)
        event_query_repo.count_available_by_type.return_value = {5: {'A': 60}}
        provide(ListEventsUseCase.depends, ListEventsUseCase(event_query_repo=event_query_repo))

        response = client.get('/api/event', params={'limit': 1, 'offset': 0})

        assert response.status_code == 200
        body = response.json()
        assert body['total'] == 3
        assert body['has_more'] is True
        assert body['items'][0]['ticket_types'][0]['available'] == 60


@pytest.mark.api
class TestDeleteEventApi:
    def test_sold_tickets_block_delete(self, client, login_as, admin, uow, provide):
        login_as(admin)
        uow.event_query_repo.get_by_id.return_value = make_event()
        uow.ticket_command_repo.lock_event_tickets.return_value = 1
        provide(DeleteEventUseCase.depends, DeleteEventUseCase(uow=uow))

        assert client.delete('/api/event/5').status_code == 409

    def test_empty_event_is_deleted(self, client, login_as, admin, uow, provide):
        login_as(admin)
        uow.event_query_repo.get_by_id.return_value = make_event()
        uow.ticket_command_repo.lock_event_tickets.return_value = 0
        provide(DeleteEventUseCase.depends, DeleteEventUseCase(uow=uow))

        assert client.delete('/api/event/5').status_code == 204
