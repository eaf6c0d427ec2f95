from fastapi import Depends
from opentelemetry import trace

from src.platform.exception.exceptions import ForbiddenError
from src.service.identity.domain.entity.user_entity import UserEntity, UserRole
from src.service.identity.driving_adapter.http_controller.auth.current_user import (
    get_current_user,
)


tracer = trace.get_tracer(__name__)


def _require(current_user: UserEntity, *roles: UserRole) -> UserEntity:
    with tracer.start_as_current_span(
        'auth.require_role',
        attributes={
            'user.id': current_user.id or 0,
            'user.role': current_user.role.value,
            'auth.required': ','.join(role.value for role in roles),
        },
    ):
        if current_user.role not in roles:
            raise ForbiddenError(
                f'Only {" or ".join(role.value for role in roles)} can perform this action'
            )
        return current_user


async def require_attendee(current_user: UserEntity = Depends(get_current_user)) -> UserEntity:
    return _require(current_user, UserRole.ATTENDEE)


async def require_admin(current_user: UserEntity = Depends(get_current_user)) -> UserEntity:
    return _require(current_user, UserRole.ADMIN, UserRole.SUPERADMIN)


async def require_superadmin(current_user: UserEntity = Depends(get_current_user)) -> UserEntity:
    return _require(current_user, UserRole.SUPERADMIN)
