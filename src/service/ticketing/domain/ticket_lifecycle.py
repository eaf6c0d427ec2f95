"""
Ticket Lifecycle

    available -> reserved | sold
    reserved  -> sold | available        (purchase by the holder, release, hold timeout)
    sold      -> used | cancelled | refunded

used, cancelled and refunded are terminal for the transition. Cancelled and refunded rows
are reopened as available right after the transition is recorded, so the same seat unit
can be sold again; the history table keeps the trail.
"""

from typing import Dict, FrozenSet, Iterable

from src.platform.exception.exceptions import ConflictError
from src.service.ticketing.domain.enum.ticket_status import TicketStatus


TRANSITIONS: Dict[TicketStatus, FrozenSet[TicketStatus]] = {
    TicketStatus.AVAILABLE: frozenset({TicketStatus.RESERVED, TicketStatus.SOLD}),
    TicketStatus.RESERVED: frozenset({TicketStatus.SOLD, TicketStatus.AVAILABLE}),
    TicketStatus.SOLD: frozenset({TicketStatus.USED, TicketStatus.CANCELLED, TicketStatus.REFUNDED}),
    TicketStatus.USED: frozenset(),
    TicketStatus.CANCELLED: frozenset(),
    TicketStatus.REFUNDED: frozenset(),
}

# Statuses that carry an attendee and a QR token
OWNED_STATUSES: FrozenSet[TicketStatus] = frozenset({TicketStatus.SOLD, TicketStatus.USED})

# Terminal statuses that hand the row back to the pool
REOPENING_STATUSES: FrozenSet[TicketStatus] = frozenset(
    {TicketStatus.CANCELLED, TicketStatus.REFUNDED}
)


def can_transition(current: TicketStatus, target: TicketStatus) -> bool:
    return target in TRANSITIONS[current]


def sources_for(target: TicketStatus) -> FrozenSet[TicketStatus]:
    """Statuses a ticket may be in for `target` to be reachable"""
    return frozenset(status for status, targets in TRANSITIONS.items() if target in targets)


def ensure_transition(current: TicketStatus, target: TicketStatus) -> None:
    if not can_transition(current, target):
        raise ConflictError(f'Ticket cannot go from {current.value} to {target.value}')


def describe(statuses: Iterable[TicketStatus]) -> str:
    return ' or '.join(sorted(status.value for status in statuses))
