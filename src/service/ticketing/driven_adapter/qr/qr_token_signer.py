"""
Signed QR payload for sold tickets.

The QR image encodes a compact HS256 JWT, so a scanner holding the key can check a ticket
without trusting the image content:

    {"typ": "ticket", "tid": 12, "eid": 3, "vid": 1, "sec": "VIP", "seat": "VIP-7",
     "price": "120.00", "sub": "<buyer id>", "jti": "<random>",
     "iat": <purchase time>, "exp": <event end>}

Every issue gets a fresh `jti`, so a unit resold within the same second still gets a token
that differs from the previous holder's.
"""

from datetime import datetime
from typing import Any, Dict, Optional
import uuid

import jwt

from src.platform.config.core_setting import settings
from src.platform.exception.exceptions import InvalidTicketTokenError
from src.service.ticketing.app.interface.i_qr_token_signer import IQrTokenSigner
from src.service.ticketing.domain.entity.event_entity import EventEntity
from src.service.ticketing.domain.entity.ticket_entity import TicketEntity


TOKEN_TYPE = 'ticket'
REQUIRED_CLAIMS = ['typ', 'tid', 'eid', 'jti', 'iat', 'exp']


class QrTokenSigner(IQrTokenSigner):
    def __init__(self) -> None:
        self.secret = settings.QR_TOKEN_SECRET.get_secret_value()
        self.algorithm = 'HS256'

    def sign(
        self,
        *,
        ticket: TicketEntity,
        event: EventEntity,
        issued_at: datetime,
        attendee_id: Optional[int] = None,
    ) -> str:
        holder = attendee_id if attendee_id is not None else ticket.attendee_id
        payload: Dict[str, Any] = {
            'typ': TOKEN_TYPE,
            'tid': ticket.id,
            'eid': ticket.event_id,
            'vid': ticket.venue_id,
            'sec': ticket.section_name,
            'seat': ticket.seat_number,
            'price': str(ticket.price),
            'jti': uuid.uuid4().hex,
            'iat': issued_at,
            'exp': event.end_date,
        }
        if holder is not None:
            payload['sub'] = str(holder)
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> Dict[str, Any]:
        """
        Check the signature only. Expiry is decided against the stored event, whose end
        date may have moved since the token was issued.
        """
        try:
            claims = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={'verify_exp': False, 'require': REQUIRED_CLAIMS},
            )
        except jwt.PyJWTError as e:
            raise InvalidTicketTokenError('Invalid ticket token') from e

        if claims.get('typ') != TOKEN_TYPE or not isinstance(claims.get('tid'), int):
            raise InvalidTicketTokenError('Invalid ticket token')
        return claims
