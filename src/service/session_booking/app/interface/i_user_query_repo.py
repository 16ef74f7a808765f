from abc import ABC, abstractmethod
from typing import Optional

from src.service.session_booking.domain.entity.user_entity import UserEntity


class IUserQueryRepo(ABC):
    """User read operations"""

    @abstractmethod
    async def get_by_email(self, *, email: str) -> Optional[UserEntity]:
        pass

    @abstractmethod
    async def get_by_id(self, *, user_id: int) -> Optional[UserEntity]:
        pass

    @abstractmethod
    async def exists_by_email(self, *, email: str) -> bool:
        pass
