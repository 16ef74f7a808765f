from datetime import datetime, timezone
from enum import StrEnum
from typing import Optional

import attrs
from uuid_utils import UUID

from src.platform.exception.exceptions import InvalidStateError
from src.platform.logging.loguru_io import Logger
from src.service.session_booking.domain.entity.session_entity import Session


class BookingStatus(StrEnum):
    PENDING = 'pending'
    CONFIRMED = 'confirmed'
    CANCELLED = 'cancelled'
    COMPLETED = 'completed'


# Statuses that hold a seat
ACTIVE_BOOKING_STATUSES = (BookingStatus.PENDING, BookingStatus.CONFIRMED)


@attrs.define
class Booking:
    id: UUID
    session_id: UUID
    user_id: int
    status: BookingStatus = BookingStatus.CONFIRMED
    cancellation_reason: Optional[str] = None
    cancelled_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    # Resolved for display only, never persisted with the booking
    session: Optional[Session] = attrs.field(default=None, eq=False)

    @classmethod
    @Logger.io
    def create(cls, *, id: UUID, session_id: UUID, user_id: int) -> 'Booking':
        now = datetime.now(timezone.utc)
        return cls(
            id=id,
            session_id=session_id,
            user_id=user_id,
            status=BookingStatus.CONFIRMED,
            created_at=now,
            updated_at=now,
        )

    @property
    def is_active(self) -> bool:
        return self.status in ACTIVE_BOOKING_STATUSES

    def with_session(self, session: Optional[Session]) -> 'Booking':
        return attrs.evolve(self, session=session)

    @Logger.io
    def cancel(self, *, reason: Optional[str] = None) -> 'Booking':
        """
        Cancel booking (Domain validation)

        Raises:
            InvalidStateError: booking is already cancelled
        """
        if self.status == BookingStatus.CANCELLED:
            raise InvalidStateError('Booking already cancelled')

        now = datetime.now(timezone.utc)
        return attrs.evolve(
            self,
            status=BookingStatus.CANCELLED,
            cancellation_reason=reason,
            cancelled_at=now,
            updated_at=now,
        )

    @Logger.io
    def complete(self) -> 'Booking':
        if self.status != BookingStatus.CONFIRMED:
            raise InvalidStateError(f'Cannot complete a {self.status} booking')

        now = datetime.now(timezone.utc)
        return attrs.evolve(self, status=BookingStatus.COMPLETED, updated_at=now)
