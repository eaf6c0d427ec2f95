"""
Unit tests for identity

Test Focus:
1. Attendee sign-up and admin provisioning roles
2. Password hashing with bcrypt
3. JWT round trip into a UserEntity without a database lookup
"""

from unittest.mock import AsyncMock

import jwt
import pytest
from pydantic import SecretStr

from src.platform.exception.exceptions import AuthenticationError, ForbiddenError
from src.service.identity.app.command.create_user_use_case import CreateUserUseCase
from src.service.identity.domain.entity.user_entity import UserEntity, UserRole
from src.service.identity.driven_adapter.security.bcrypt_password_hasher import (
    BcryptPasswordHasher,
)
from src.service.identity.driving_adapter.http_controller.auth.jwt_auth import JwtAuth


@pytest.fixture
def user_command_repo():
    repo = AsyncMock()
    repo.create.side_effect = lambda *, user_entity: user_entity
    return repo


@pytest.fixture
def use_case(user_command_repo):
    return CreateUserUseCase(
        user_command_repo=user_command_repo, password_hasher=BcryptPasswordHasher()
    )


@pytest.mark.unit
class TestCreateUser:
    @pytest.mark.asyncio
    async def test_sign_up_is_always_an_attendee(self, use_case):
        user = await use_case.register_attendee(
            email='fan@example.com', password='P@ssw0rd', name='Fan'
        )

        assert user.role == UserRole.ATTENDEE
        assert user.hashed_password != 'P@ssw0rd'

    @pytest.mark.asyncio
    async def test_superadmin_provisions_admin(self, use_case, superadmin):
        user = await use_case.provision_admin(
            actor=superadmin, email='ops@example.com', password='P@ssw0rd', name='Ops'
        )

        assert user.role == UserRole.ADMIN

    @pytest.mark.asyncio
    async def test_admin_cannot_provision_admins(self, use_case, admin, user_command_repo):
        with pytest.raises(ForbiddenError):
            await use_case.provision_admin(
                actor=admin, email='ops@example.com', password='P@ssw0rd', name='Ops'
            )

        user_command_repo.create.assert_not_awaited()


@pytest.mark.unit
class TestBcryptPasswordHasher:
    def test_hash_and_verify(self):
        hasher = BcryptPasswordHasher()
        hashed = hasher.hash_password(plain_password=SecretStr('s3cret'))

        assert hasher.verify_password(plain_password=SecretStr('s3cret'), hashed_password=hashed)
        assert not hasher.verify_password(
            plain_password=SecretStr('wrong'), hashed_password=hashed
        )

    def test_malformed_hash_does_not_verify(self):
        assert not BcryptPasswordHasher().verify_password(
            plain_password=SecretStr('s3cret'), hashed_password='not-a-hash'
        )


@pytest.mark.unit
class TestJwtAuth:
    def test_token_round_trip(self, admin):
        auth = JwtAuth()

        user = auth.get_current_user_info_from_jwt(auth.create_jwt_token(admin))

        assert (user.id, user.email, user.role) == (1, 'admin@example.com', UserRole.ADMIN)

    def test_missing_token_is_unauthenticated(self):
        with pytest.raises(AuthenticationError, match='Not authenticated'):
            JwtAuth().get_current_user_info_from_jwt(None)

    def test_token_signed_elsewhere_is_invalid(self, admin):
        token = jwt.encode({'user_id': 1}, 'another-secret-of-decent-length!!', algorithm='HS256')

        with pytest.raises(AuthenticationError, match='Invalid token'):
            JwtAuth().get_current_user_info_from_jwt(token)

    def test_inactive_user_token_is_refused(self):
        auth = JwtAuth()
        inactive = UserEntity(id=3, email='x@example.com', name='X', is_active=False)

        with pytest.raises(ForbiddenError):
            auth.get_current_user_info_from_jwt(auth.create_jwt_token(inactive))
