from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Dict, Optional

from src.service.ticketing.domain.entity.event_entity import EventEntity
from src.service.ticketing.domain.entity.ticket_entity import TicketEntity


class IQrTokenSigner(ABC):
    @abstractmethod
    def sign(
        self,
        *,
        ticket: TicketEntity,
        event: EventEntity,
        issued_at: datetime,
        attendee_id: Optional[int] = None,
    ) -> str:
        """Token for the unit as sold to `attendee_id` (defaults to the ticket's holder)"""
        pass

    @abstractmethod
    def verify(self, token: str) -> Dict[str, Any]:
        """Claims of a genuine token; raises InvalidTicketTokenError otherwise"""
        pass
