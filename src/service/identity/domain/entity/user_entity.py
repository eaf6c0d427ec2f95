from datetime import datetime
from enum import Enum
from typing import Optional

import attrs
from pydantic import SecretStr

from src.platform.exception.exceptions import (
    AuthenticationError,
    DomainError,
    ForbiddenError,
    LoginError,
)
from src.service.identity.app.interface.i_password_hasher import IPasswordHasher


class UserRole(str, Enum):
    ATTENDEE = 'attendee'
    ADMIN = 'admin'
    SUPERADMIN = 'superadmin'


@attrs.define
class UserEntity:
    email: str = ''
    name: str = ''
    hashed_password: str = attrs.field(default='', repr=False)  # Hide from repr for security
    id: Optional[int] = None
    role: UserRole = UserRole.ATTENDEE
    is_active: bool = True
    created_at: Optional[datetime] = None

    @property
    def is_admin(self) -> bool:
        return self.role in (UserRole.ADMIN, UserRole.SUPERADMIN)

    def validate_exists(self) -> None:
        if not self.id or not self.email:
            raise AuthenticationError('User not found')

    def validate_active(self) -> None:
        if not self.is_active:
            raise ForbiddenError('User is inactive')

    @staticmethod
    def validate_user_exists(user_entity: Optional['UserEntity']) -> 'UserEntity':
        if not user_entity:
            raise LoginError('LOGIN_BAD_CREDENTIALS')

        return user_entity

    @staticmethod
    def validate_role(role: UserRole | str) -> UserRole:
        valid_roles = [r.value for r in UserRole]
        value = role.value if isinstance(role, UserRole) else role
        if value not in valid_roles:
            raise DomainError(f'Invalid role: {role}. Must be one of: {", ".join(valid_roles)}')
        return UserRole(value)

    def set_password(self, plain_password: str, password_hasher: IPasswordHasher) -> None:
        if not isinstance(password_hasher, IPasswordHasher):
            raise TypeError('password_hasher must implement IPasswordHasher interface')

        self.hashed_password = password_hasher.hash_password(
            plain_password=SecretStr(plain_password)
        )
