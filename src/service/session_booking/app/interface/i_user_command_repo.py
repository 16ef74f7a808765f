from abc import ABC, abstractmethod

from src.service.session_booking.domain.entity.user_entity import UserEntity


class IUserCommandRepo(ABC):
    """User write operations"""

    @abstractmethod
    async def create(self, *, user_entity: UserEntity) -> UserEntity:
        """
        Raises:
            ConflictError: email already registered
        """
        pass

    @abstractmethod
    async def update(self, *, user_entity: UserEntity) -> UserEntity:
        """
        Raises:
            ConflictError: new email already registered
        """
        pass
