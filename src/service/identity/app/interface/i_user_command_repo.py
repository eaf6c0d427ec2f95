from abc import ABC, abstractmethod

from src.service.identity.domain.entity.user_entity import UserEntity


class IUserCommandRepo(ABC):
    """User Command Repository - write side"""

    @abstractmethod
    async def create(self, *, user_entity: UserEntity) -> UserEntity:
        """Persist a new user; raises ConflictError when the email is taken"""
        pass
