from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from uuid_utils import UUID

from src.service.session_booking.domain.entity.booking_entity import Booking


class IBookingCommandRepo(ABC):
    """
    Repository interface for booking writes.

    Both operations are meant to run inside a unit of work together with the
    session seat counter update.
    """

    @abstractmethod
    async def create(self, *, booking: Booking) -> Booking:
        """
        Insert a booking.

        Raises:
            ConflictError: the user already holds a non-cancelled booking for the
                session (rejected by the storage uniqueness constraint)
        """
        pass

    @abstractmethod
    async def cancel(
        self,
        *,
        booking_id: UUID,
        user_id: int,
        reason: Optional[str],
        cancelled_at: datetime,
    ) -> Optional[Booking]:
        """
        Move a booking owned by user_id to cancelled, only if it is not cancelled yet.

        Returns:
            The cancelled booking, or None when no row matched
        """
        pass
