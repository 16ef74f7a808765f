"""
Unit tests for CancelBookingUseCase

The booking status flip is conditional; the seat is released only by the
cancellation that won it.
"""

import attrs
import pytest
import uuid_utils

from src.platform.exception.exceptions import (
    InvalidStateError,
    NotFoundError,
    ValidationFailedError,
)
from src.service.session_booking.app.command.cancel_booking_use_case import CancelBookingUseCase
from src.service.session_booking.domain.entity.booking_entity import Booking, BookingStatus
from test.service.session_booking.unit.fakes import FakeUnitOfWork, make_session


USER_ID = 7


@pytest.fixture
def use_case(fake_uow: FakeUnitOfWork) -> CancelBookingUseCase:
    return CancelBookingUseCase(uow=fake_uow)


@pytest.fixture
def booking() -> Booking:
    return Booking.create(id=uuid_utils.uuid7(), session_id=uuid_utils.uuid7(), user_id=USER_ID)


def _arrange_cancellable(fake_uow: FakeUnitOfWork, booking: Booking) -> None:
    fake_uow.booking_query_repo.get_for_user.return_value = booking
    fake_uow.booking_command_repo.cancel.return_value = booking.cancel(reason='Sick')
    fake_uow.session_command_repo.release_seat.return_value = True
    fake_uow.session_query_repo.get_by_id.return_value = make_session(available_seats=5)


@pytest.mark.unit
class TestCancelBookingUseCase:
    async def test_success__releases_seat_and_commits(
        self, use_case: CancelBookingUseCase, fake_uow: FakeUnitOfWork, booking: Booking
    ) -> None:
        _arrange_cancellable(fake_uow, booking)

        result = await use_case.cancel_booking(
            user_id=USER_ID, booking_id=booking.id, reason='Sick'
        )

        assert result.status == BookingStatus.CANCELLED
        assert result.cancellation_reason == 'Sick'
        assert result.session is not None
        fake_uow.session_command_repo.release_seat.assert_awaited_once_with(
            session_id=booking.session_id
        )
        assert fake_uow.committed is True

    async def test_not_owner_or_missing(
        self, use_case: CancelBookingUseCase, fake_uow: FakeUnitOfWork, booking: Booking
    ) -> None:
        fake_uow.booking_query_repo.get_for_user.return_value = None

        with pytest.raises(NotFoundError):
            await use_case.cancel_booking(user_id=USER_ID + 1, booking_id=booking.id)

        fake_uow.session_command_repo.release_seat.assert_not_awaited()

    async def test_already_cancelled(
        self, use_case: CancelBookingUseCase, fake_uow: FakeUnitOfWork, booking: Booking
    ) -> None:
        fake_uow.booking_query_repo.get_for_user.return_value = booking.cancel()

        with pytest.raises(InvalidStateError):
            await use_case.cancel_booking(user_id=USER_ID, booking_id=booking.id)

        fake_uow.booking_command_repo.cancel.assert_not_awaited()
        fake_uow.session_command_repo.release_seat.assert_not_awaited()

    async def test_lost_race__no_second_release(
        self, use_case: CancelBookingUseCase, fake_uow: FakeUnitOfWork, booking: Booking
    ) -> None:
        # Read as confirmed, but a concurrent cancellation flipped it first
        fake_uow.booking_query_repo.get_for_user.side_effect = [
            booking,
            attrs.evolve(booking, status=BookingStatus.CANCELLED),
        ]
        fake_uow.booking_command_repo.cancel.return_value = None

        with pytest.raises(InvalidStateError):
            await use_case.cancel_booking(user_id=USER_ID, booking_id=booking.id)

        fake_uow.session_command_repo.release_seat.assert_not_awaited()
        assert fake_uow.committed is False

    async def test_deleted_session__still_cancels(
        self, use_case: CancelBookingUseCase, fake_uow: FakeUnitOfWork, booking: Booking
    ) -> None:
        _arrange_cancellable(fake_uow, booking)
        fake_uow.session_command_repo.release_seat.return_value = False
        fake_uow.session_query_repo.get_by_id.return_value = None

        result = await use_case.cancel_booking(user_id=USER_ID, booking_id=booking.id)

        assert result.status == BookingStatus.CANCELLED
        assert result.session is None
        assert fake_uow.committed is True

    async def test_reason_too_long(
        self, use_case: CancelBookingUseCase, fake_uow: FakeUnitOfWork, booking: Booking
    ) -> None:
        with pytest.raises(ValidationFailedError):
            await use_case.cancel_booking(user_id=USER_ID, booking_id=booking.id, reason='x' * 501)

        fake_uow.booking_query_repo.get_for_user.assert_not_awaited()
