from abc import ABC, abstractmethod
from typing import Optional

from uuid_utils import UUID

from src.service.session_booking.domain.entity.booking_entity import Booking


class IBookingQueryRepo(ABC):
    """Repository interface for booking read operations"""

    @abstractmethod
    async def get_by_id(self, *, booking_id: UUID) -> Optional[Booking]:
        pass

    @abstractmethod
    async def get_for_user(self, *, booking_id: UUID, user_id: int) -> Optional[Booking]:
        pass

    @abstractmethod
    async def exists_active(self, *, user_id: int, session_id: UUID) -> bool:
        """True when the user holds a non-cancelled booking for the session"""
        pass

    @abstractmethod
    async def list_by_user(
        self, *, user_id: int, offset: int, limit: int
    ) -> tuple[list[Booking], int]:
        """Newest first"""
        pass

    @abstractmethod
    async def list_active_by_user(self, *, user_id: int) -> list[Booking]:
        pass

    @abstractmethod
    async def count_active_by_session(self, *, session_id: UUID) -> int:
        pass
