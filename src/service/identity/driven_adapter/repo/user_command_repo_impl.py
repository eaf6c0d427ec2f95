from sqlalchemy.exc import IntegrityError as SqlAlchemyIntegrityError

from src.platform.database.session_scoped_repo import SessionScopedRepo
from src.platform.exception.exceptions import ConflictError
from src.platform.logging.loguru_io import Logger
from src.service.identity.app.interface.i_user_command_repo import IUserCommandRepo
from src.service.identity.domain.entity.user_entity import UserEntity
from src.service.identity.driven_adapter.model.user_model import UserModel
from src.service.identity.driven_adapter.repo.user_query_repo_impl import model_to_user


class UserCommandRepoImpl(SessionScopedRepo, IUserCommandRepo):
    @Logger.io
    async def create(self, *, user_entity: UserEntity) -> UserEntity:
        async with self._get_session() as session:
            user_model = UserModel(
                email=user_entity.email,
                hashed_password=user_entity.hashed_password,
                name=user_entity.name,
                role=user_entity.role.value,
                is_active=user_entity.is_active,
            )

            session.add(user_model)
            try:
                await session.commit()
            except SqlAlchemyIntegrityError as e:
                await session.rollback()
                raise ConflictError(f'User with email {user_entity.email} already exists') from e
            await session.refresh(user_model)

            return model_to_user(user_model)
