from enum import Enum


class TicketStatus(str, Enum):
    AVAILABLE = 'available'
    RESERVED = 'reserved'
    SOLD = 'sold'
    USED = 'used'
    CANCELLED = 'cancelled'
    REFUNDED = 'refunded'
