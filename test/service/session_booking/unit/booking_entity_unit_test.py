import pytest
import uuid_utils

from src.platform.exception.exceptions import InvalidStateError
from src.service.session_booking.domain.entity.booking_entity import Booking, BookingStatus


def _booking() -> Booking:
    return Booking.create(id=uuid_utils.uuid7(), session_id=uuid_utils.uuid7(), user_id=1)


@pytest.mark.unit
class TestBooking:
    def test_create_is_confirmed_and_active(self) -> None:
        booking = _booking()

        assert booking.status == BookingStatus.CONFIRMED
        assert booking.is_active is True
        assert booking.created_at is not None

    def test_cancel_records_reason_and_time(self) -> None:
        cancelled = _booking().cancel(reason='Schedule conflict')

        assert cancelled.status == BookingStatus.CANCELLED
        assert cancelled.is_active is False
        assert cancelled.cancellation_reason == 'Schedule conflict'
        assert cancelled.cancelled_at is not None

    def test_cancel_twice_is_rejected(self) -> None:
        cancelled = _booking().cancel()

        with pytest.raises(InvalidStateError, match='already cancelled'):
            cancelled.cancel()

    def test_complete_only_from_confirmed(self) -> None:
        booking = _booking()

        assert booking.complete().status == BookingStatus.COMPLETED
        with pytest.raises(InvalidStateError):
            booking.cancel().complete()

    def test_pending_holds_a_seat(self) -> None:
        booking = Booking(
            id=uuid_utils.uuid7(),
            session_id=uuid_utils.uuid7(),
            user_id=1,
            status=BookingStatus.PENDING,
        )

        assert booking.is_active is True
