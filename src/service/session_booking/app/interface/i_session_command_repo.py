"""
Session Command Repository Interface

The seat counters are never written back from an entity: every change to
available_seats is a conditional UPDATE evaluated by the database, so that
concurrent requests cannot overbook or double release.
"""

from abc import ABC, abstractmethod

from uuid_utils import UUID

from src.service.session_booking.domain.entity.session_entity import Session


class ISessionCommandRepo(ABC):
    @abstractmethod
    async def create(self, *, session: Session) -> Session:
        pass

    @abstractmethod
    async def update_details(self, *, session: Session) -> Session:
        """Persist the editable fields; seat counters are left untouched"""
        pass

    @abstractmethod
    async def resize_total_seats(self, *, session_id: UUID, total_seats: int) -> bool:
        """
        Set total_seats and shift available_seats by the same delta, only if the
        seats already booked still fit.

        Returns:
            False when the new total is smaller than the booked seats (or the session is gone)
        """
        pass

    @abstractmethod
    async def delete(self, *, session_id: UUID) -> bool:
        pass

    @abstractmethod
    async def reserve_seat(self, *, session_id: UUID) -> bool:
        """
        Decrement available_seats by one if it is currently > 0.

        Returns:
            False when no row matched (no seat left or session gone)
        """
        pass

    @abstractmethod
    async def release_seat(self, *, session_id: UUID) -> bool:
        """
        Increment available_seats by one, never beyond total_seats.

        Returns:
            False when the counter was already full (or session gone)
        """
        pass
