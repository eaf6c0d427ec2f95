from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.identity.app.interface.i_password_hasher import IPasswordHasher
from src.service.identity.app.interface.i_user_command_repo import IUserCommandRepo
from src.service.identity.domain.authorization_policy import Action, AuthorizationPolicy
from src.service.identity.domain.entity.user_entity import UserEntity, UserRole


class CreateUserUseCase:
    """Self-service attendee sign-up and superadmin-driven admin provisioning"""

    def __init__(
        self, *, user_command_repo: IUserCommandRepo, password_hasher: IPasswordHasher
    ) -> None:
        self.user_command_repo = user_command_repo
        self.password_hasher = password_hasher

    @classmethod
    @inject
    def depends(
        cls,
        user_command_repo: IUserCommandRepo = Depends(Provide[Container.user_command_repo]),
        password_hasher: IPasswordHasher = Depends(Provide[Container.password_hasher]),
    ) -> Self:
        return cls(user_command_repo=user_command_repo, password_hasher=password_hasher)

    @Logger.io
    async def register_attendee(self, *, email: str, password: str, name: str) -> UserEntity:
        user = await self._create(email=email, password=password, name=name, role=UserRole.ATTENDEE)
        Logger.base.info(f'👤 [REGISTER] Attendee {user.id} registered')
        return user

    @Logger.io
    async def provision_admin(
        self, *, actor: UserEntity, email: str, password: str, name: str
    ) -> UserEntity:
        AuthorizationPolicy.ensure(actor, Action.PROVISION_ADMIN)
        user = await self._create(email=email, password=password, name=name, role=UserRole.ADMIN)
        Logger.base.info(f'🛡️ [PROVISION_ADMIN] Admin {user.id} created by {actor.id}')
        return user

    @Logger.io
    async def create_superadmin(self, *, email: str, password: str, name: str) -> UserEntity:
        return await self._create(
            email=email, password=password, name=name, role=UserRole.SUPERADMIN
        )

    async def _create(self, *, email: str, password: str, name: str, role: UserRole) -> UserEntity:
        user_entity = UserEntity(email=email, name=name, role=UserEntity.validate_role(role))
        user_entity.set_password(password, self.password_hasher)
        return await self.user_command_repo.create(user_entity=user_entity)
