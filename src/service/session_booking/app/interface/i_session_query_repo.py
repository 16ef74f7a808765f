from abc import ABC, abstractmethod
from datetime import date
from typing import Optional

from uuid_utils import UUID

from src.service.session_booking.domain.entity.session_entity import Session
from src.service.session_booking.domain.enum import Language, Level


class ISessionQueryRepo(ABC):
    """Repository interface for session read operations"""

    @abstractmethod
    async def get_by_id(self, *, session_id: UUID) -> Optional[Session]:
        pass

    @abstractmethod
    async def get_by_ids(self, *, session_ids: list[UUID]) -> dict[str, Session]:
        """Sessions keyed by str(id); ids that no longer exist are absent"""
        pass

    @abstractmethod
    async def list_available(
        self,
        *,
        today: date,
        offset: int,
        limit: int,
        language: Optional[Language] = None,
        level: Optional[Level] = None,
    ) -> tuple[list[Session], int]:
        """Active sessions dated today or later with a free seat, soonest first"""
        pass

    @abstractmethod
    async def list_all(self, *, offset: int, limit: int) -> tuple[list[Session], int]:
        """Every session, latest date first"""
        pass

    @abstractmethod
    async def list_upcoming(self, *, today: date, limit: int) -> list[Session]:
        pass

    @abstractmethod
    async def count_available(self, *, today: date) -> int:
        pass
