"""
HTTP tests for /api/ticket

Test Focus:
1. Role gates: attendees buy, admins check in
2. Error mapping: conflict 409, forbidden 403, not found 404, invalid token 400,
   expired 410
3. QR image and ticket detail responses
"""

from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.service.ticketing.app.command.check_in_ticket_use_case import CheckInTicketUseCase
from src.service.ticketing.app.command.purchase_ticket_use_case import PurchaseTicketUseCase
from src.service.ticketing.app.query.get_ticket_use_case import GetTicketUseCase
from src.service.ticketing.app.query.list_tickets_use_case import ListTicketsUseCase
from src.service.ticketing.app.query.validate_ticket_use_case import ValidateTicketUseCase
from src.service.ticketing.domain.enum.ticket_status import TicketStatus
from src.service.ticketing.driven_adapter.qr.qr_code_renderer import QrCodeRenderer
from src.service.ticketing.driven_adapter.qr.qr_token_signer import QrTokenSigner
from test.factories import make_event, make_ticket


@pytest.fixture
def purchase_use_case(uow, provide):
    signer = MagicMock()
    signer.sign.return_value = 'signed-token'
    uow.event_query_repo.get_by_id.return_value = make_event()
    use_case = PurchaseTicketUseCase(uow=uow, qr_token_signer=signer, mail_sender=AsyncMock())
    provide(PurchaseTicketUseCase.depends, use_case)
    return use_case


@pytest.mark.api
class TestPurchaseApi:
    def test_attendee_buys_ticket(self, client, login_as, attendee, uow, purchase_use_case):
        login_as(attendee)
        uow.ticket_command_repo.get_for_update.return_value = make_ticket()
        uow.ticket_command_repo.purchase.return_value = make_ticket(
            status=TicketStatus.SOLD, attendee_id=10, qr_token='signed-token'
        )

        response = client.post('/api/ticket/100/book')

        assert response.status_code == 201
        body = response.json()
        assert body['status'] == 'sold'
        assert body['attendee_id'] == 10
        assert body['seat_number'] == 'A-1'
        assert 'qr_token' not in body

    def test_sold_ticket_is_409(self, client, login_as, other_attendee, uow, purchase_use_case):
        login_as(other_attendee)
        uow.ticket_command_repo.get_for_update.return_value = make_ticket(
            status=TicketStatus.SOLD, attendee_id=10
        )

        response = client.post('/api/ticket/100/book')

        assert response.status_code == 409
        assert response.json()['code'] == 'conflict'

    def test_admin_cannot_buy(self, client, login_as, admin, purchase_use_case):
        login_as(admin)

        assert client.post('/api/ticket/100/book').status_code == 403

    def test_anonymous_is_401(self, client, purchase_use_case):
        assert client.post('/api/ticket/100/book').status_code == 401

    def test_sold_out_type_is_409(self, client, login_as, attendee, uow, purchase_use_case):
        login_as(attendee)
        uow.ticket_command_repo.lock_first_available.return_value = None

        response = client.post('/api/ticket/event/5/purchase', json={'ticket_type': 'A'})

        assert response.status_code == 409
        assert 'No A tickets left' in response.json()['detail']


@pytest.fixture
def signer():
    return QrTokenSigner()


def _sold_with_token(signer, *, ends_in=timedelta(days=2)):
    event = make_event(ends_in=ends_in)
    ticket = make_ticket(status=TicketStatus.SOLD, attendee_id=10)
    ticket.qr_token = signer.sign(ticket=ticket, event=event, issued_at=datetime.now(timezone.utc))
    return ticket, event


@pytest.mark.api
class TestValidateAndCheckInApi:
    def _provide_validate(self, provide, signer, ticket, event):
        ticket_query_repo = AsyncMock()
        ticket_query_repo.get_by_id.return_value = ticket
        event_query_repo = AsyncMock()
        event_query_repo.get_by_id.return_value = event
        provide(
            ValidateTicketUseCase.depends,
            ValidateTicketUseCase(
                qr_token_signer=signer,
                ticket_query_repo=ticket_query_repo,
                event_query_repo=event_query_repo,
            ),
        )

    def test_valid_token(self, client, provide, signer):
        ticket, event = _sold_with_token(signer)
        self._provide_validate(provide, signer, ticket, event)

        response = client.post('/api/ticket/validate', json={'token': ticket.qr_token})

        assert response.status_code == 200
        assert response.json()['valid'] is True

    def test_forged_token_is_400(self, client, provide, signer):
        self._provide_validate(provide, signer, None, None)

        response = client.post('/api/ticket/validate', json={'token': 'forged'})

        assert response.status_code == 400

    def test_past_event_is_410(self, client, provide, signer):
        ticket, event = _sold_with_token(signer, ends_in=-timedelta(hours=1))
        self._provide_validate(provide, signer, ticket, event)

        response = client.post('/api/ticket/validate', json={'token': ticket.qr_token})

        assert response.status_code == 410

    def test_check_in_then_replay(self, client, provide, login_as, admin, uow, signer):
        login_as(admin)
        ticket, event = _sold_with_token(signer)
        uow.ticket_command_repo.get_for_update.return_value = ticket
        uow.event_query_repo.get_by_id.return_value = event
        uow.ticket_command_repo.check_in.return_value = make_ticket(
            status=TicketStatus.USED, attendee_id=10
        )
        provide(CheckInTicketUseCase.depends, CheckInTicketUseCase(uow=uow, qr_token_signer=signer))

        first = client.post('/api/ticket/check-in', json={'token': ticket.qr_token})
        ticket.status = TicketStatus.USED
        second = client.post('/api/ticket/check-in', json={'token': ticket.qr_token})

        assert first.status_code == 200
        assert first.json()['status'] == 'used'
        assert second.status_code == 409

    def test_attendee_cannot_check_in(self, client, login_as, attendee):
        login_as(attendee)

        assert client.post('/api/ticket/check-in', json={'token': 'x'}).status_code == 403


@pytest.mark.api
class TestTicketReadApi:
    @pytest.fixture
    def get_use_case(self, provide):
        ticket_query_repo = AsyncMock()
        event_query_repo = AsyncMock()
        event_query_repo.get_by_id.return_value = make_event()
        use_case = GetTicketUseCase(
            ticket_query_repo=ticket_query_repo,
            event_query_repo=event_query_repo,
            qr_code_renderer=QrCodeRenderer(),
        )
        provide(GetTicketUseCase.depends, use_case)
        return ticket_query_repo

    def test_holder_sees_detail_with_token(self, client, login_as, attendee, get_use_case):
        login_as(attendee)
        get_use_case.get_by_id.return_value = make_ticket(
            status=TicketStatus.SOLD, attendee_id=10, qr_token='signed-token'
        )

        response = client.get('/api/ticket/100')

        assert response.status_code == 200
        assert response.json()['qr_token'] == 'signed-token'
        assert response.json()['event_title'] == 'Summer Night'

    def test_qrcode_is_png(self, client, login_as, attendee, get_use_case):
        login_as(attendee)
        get_use_case.get_by_id.return_value = make_ticket(
            status=TicketStatus.SOLD, attendee_id=10, qr_token='signed-token'
        )

        response = client.get('/api/ticket/100/qrcode')

        assert response.status_code == 200
        assert response.headers['content-type'] == 'image/png'
        assert response.content.startswith(b'\x89PNG')

    def test_someone_elses_ticket_is_403(self, client, login_as, other_attendee, get_use_case):
        login_as(other_attendee)
        get_use_case.get_by_id.return_value = make_ticket(
            status=TicketStatus.SOLD, attendee_id=10, qr_token='signed-token'
        )

        assert client.get('/api/ticket/100').status_code == 403

    def test_available_tickets_grouped_by_section(self, client, provide):
        ticket_query_repo = AsyncMock()
        ticket_query_repo.list_available_by_event.return_value = [
            make_ticket(id=1, seat_number='A-1'),
            make_ticket(id=2, seat_number='A-2'),
            make_ticket(id=3, section_name='B', ticket_type='B', seat_number='B-1'),
        ]
        event_query_repo = AsyncMock()
        event_query_repo.get_by_id.return_value = make_event()
        provide(
            ListTicketsUseCase.depends,
            ListTicketsUseCase(
                ticket_query_repo=ticket_query_repo, event_query_repo=event_query_repo
            ),
        )

        response = client.get('/api/ticket/event/5/available')

        assert response.status_code == 200
        body = response.json()
        assert body['total'] == 3
        assert [(s['section'], s['count']) for s in body['sections']] == [('A', 2), ('B', 1)]
