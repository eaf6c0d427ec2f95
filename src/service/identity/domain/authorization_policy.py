"""
Authorization capability: `can(actor, action, resource) -> bool`

Resources are duck-typed on ownership attributes:
- `admin_id`: the admin who owns a venue or an event
- `attendee_id`: the attendee who holds or owns a ticket
"""

from enum import StrEnum
from typing import Any, Optional

import attrs

from src.platform.exception.exceptions import ForbiddenError
from src.service.identity.domain.entity.user_entity import UserEntity, UserRole


class Action(StrEnum):
    CREATE_VENUE = 'create_venue'
    MANAGE_VENUE = 'manage_venue'
    CREATE_EVENT = 'create_event'
    MANAGE_EVENT = 'manage_event'
    PURCHASE_TICKET = 'purchase_ticket'
    MANAGE_TICKET = 'manage_ticket'
    CHECK_IN_TICKET = 'check_in_ticket'
    VIEW_BOOKED_TICKETS = 'view_booked_tickets'
    PROVISION_ADMIN = 'provision_admin'


@attrs.define(frozen=True)
class Ownership:
    """Ownership view of a resource: the admin owning it and, for tickets, the attendee"""

    admin_id: Optional[int]
    attendee_id: Optional[int] = None


class AuthorizationPolicy:
    @staticmethod
    def can(actor: UserEntity, action: Action, resource: Any = None) -> bool:
        if not actor.is_active:
            return False

        role = actor.role
        is_superadmin = role == UserRole.SUPERADMIN

        match action:
            case Action.PROVISION_ADMIN:
                return is_superadmin
            case Action.CREATE_VENUE | Action.CREATE_EVENT | Action.VIEW_BOOKED_TICKETS:
                return actor.is_admin
            case Action.MANAGE_VENUE | Action.MANAGE_EVENT | Action.CHECK_IN_TICKET:
                return is_superadmin or (
                    role == UserRole.ADMIN and _owner(resource, 'admin_id') == actor.id
                )
            case Action.PURCHASE_TICKET:
                return role == UserRole.ATTENDEE
            case Action.MANAGE_TICKET:
                if is_superadmin:
                    return True
                if role == UserRole.ADMIN:
                    return _owner(resource, 'admin_id') == actor.id
                return _owner(resource, 'attendee_id') == actor.id
        return False

    @classmethod
    def ensure(cls, actor: UserEntity, action: Action, resource: Any = None) -> None:
        if not cls.can(actor, action, resource):
            raise ForbiddenError(f'Not allowed to {action.value.replace("_", " ")}')


def _owner(resource: Any, attribute: str) -> Optional[int]:
    if resource is None:
        return None
    return getattr(resource, attribute, None)
