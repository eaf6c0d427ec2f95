from typing import Optional

from pydantic import SecretStr
from sqlalchemy import select

from src.platform.database.session_scoped_repo import SessionScopedRepo
from src.platform.logging.loguru_io import Logger
from src.service.identity.app.interface.i_user_query_repo import IUserQueryRepo
from src.service.identity.domain.entity.user_entity import UserEntity, UserRole
from src.service.identity.driven_adapter.model.user_model import UserModel
from src.service.identity.driven_adapter.security.bcrypt_password_hasher import (
    BcryptPasswordHasher,
)


def model_to_user(user_model: UserModel) -> UserEntity:
    return UserEntity(
        id=user_model.id,
        email=user_model.email,
        name=user_model.name,
        hashed_password=user_model.hashed_password,
        role=UserRole(user_model.role),
        is_active=user_model.is_active,
        created_at=user_model.created_at,
    )


class UserQueryRepoImpl(SessionScopedRepo, IUserQueryRepo):
    password_hasher = BcryptPasswordHasher()

    @Logger.io
    async def get_by_id(self, *, user_id: int) -> Optional[UserEntity]:
        async with self._get_session() as session:
            user_model = await session.get(UserModel, user_id)
            return model_to_user(user_model) if user_model else None

    @Logger.io
    async def get_by_email(self, *, email: str) -> Optional[UserEntity]:
        async with self._get_session() as session:
            result = await session.execute(select(UserModel).where(UserModel.email == email))
            user_model = result.scalar_one_or_none()
            return model_to_user(user_model) if user_model else None

    @Logger.io
    async def exists_by_email(self, *, email: str) -> bool:
        async with self._get_session() as session:
            result = await session.execute(select(UserModel.id).where(UserModel.email == email))
            return result.scalar_one_or_none() is not None

    @Logger.io
    async def verify_password(self, *, email: str, plain_password: str) -> Optional[UserEntity]:
        user_entity = await self.get_by_email(email=email)
        if not user_entity:
            return None

        if not self.password_hasher.verify_password(
            plain_password=SecretStr(plain_password), hashed_password=user_entity.hashed_password
        ):
            return None

        return user_entity
