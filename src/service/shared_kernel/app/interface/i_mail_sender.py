from abc import ABC, abstractmethod
from decimal import Decimal
from typing import List, Optional


class IMailSender(ABC):
    """Outbound transactional mail"""

    @abstractmethod
    async def send_email(
        self, *, to: str, subject: str, body: str, cc: Optional[List[str]] = None
    ) -> bool:
        pass

    async def send_ticket_confirmation(
        self, *, to: str, ticket_id: int, event_title: str, seat: str, price: Decimal
    ) -> bool:
        subject = f'Your ticket for {event_title} - Ticket #{ticket_id}'
        body = f"""
        Thank you for your purchase!

        Event: {event_title}
        Ticket: #{ticket_id}
        Seat: {seat}
        Price: {price:.2f}

        Show the QR code from your ticket page at the entrance.
        """
        return await self.send_email(to=to, subject=subject, body=body.strip())

    async def send_ticket_closed(
        self, *, to: str, ticket_id: int, event_title: str, reason: str
    ) -> bool:
        subject = f'Ticket #{ticket_id} {reason} - {event_title}'
        body = f"""
        Your ticket #{ticket_id} for {event_title} has been {reason}.

        Its QR code is no longer valid.
        """
        return await self.send_email(to=to, subject=subject, body=body.strip())
