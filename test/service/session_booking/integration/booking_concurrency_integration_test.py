"""
Capacity guard against a real database

Bookings run concurrently through the use cases, one unit of work each, the
way parallel HTTP requests would. The seat counter and the active bookings must
always agree: never more bookings than seats, never a negative counter, and a
seat is given back exactly once per cancelled booking.
"""

import asyncio
from datetime import date, timedelta

import pytest
from uuid_utils import UUID
import uuid_utils

from src.platform.database.orm_db_setting import Database
from src.platform.database.unit_of_work import SqlAlchemyUnitOfWork
from src.platform.exception.exceptions import (
    CapacityExceededError,
    ConflictError,
    InvalidStateError,
)
from src.service.session_booking.app.command.cancel_booking_use_case import CancelBookingUseCase
from src.service.session_booking.app.command.create_booking_use_case import CreateBookingUseCase
from src.service.session_booking.app.command.update_session_use_case import UpdateSessionUseCase
from src.service.session_booking.app.query.list_bookings_use_case import ListBookingsUseCase
from src.service.session_booking.domain.entity.booking_entity import BookingStatus
from src.service.session_booking.domain.entity.session_entity import Session
from src.service.session_booking.domain.entity.user_entity import UserEntity
from src.service.session_booking.domain.enum import Language
from src.service.session_booking.driven_adapter.repo.booking_query_repo_impl import (
    BookingQueryRepoImpl,
)
from src.service.session_booking.driven_adapter.repo.session_command_repo_impl import (
    SessionCommandRepoImpl,
)
from src.service.session_booking.driven_adapter.repo.session_query_repo_impl import (
    SessionQueryRepoImpl,
)
from src.service.session_booking.driven_adapter.repo.user_command_repo_impl import (
    UserCommandRepoImpl,
)


@pytest.fixture
def database() -> Database:
    return Database()


@pytest.fixture
def session_query_repo(database: Database) -> SessionQueryRepoImpl:
    return SessionQueryRepoImpl(session_factory=database.session)


@pytest.fixture
def booking_query_repo(database: Database) -> BookingQueryRepoImpl:
    return BookingQueryRepoImpl(session_factory=database.session)


async def _create_users(database: Database, count: int) -> list[int]:
    repo = UserCommandRepoImpl(database.session)
    user_ids = []
    for i in range(count):
        user = await repo.create(
            user_entity=UserEntity(email=f'user{i}@test.com', name=f'User {i}', hashed_password='x')
        )
        assert user.id is not None
        user_ids.append(user.id)
    return user_ids


async def _create_session(database: Database, *, total_seats: int, days_ahead: int = 7) -> Session:
    return await SessionCommandRepoImpl(database.session).create(
        session=Session.create(
            id=uuid_utils.uuid7(),
            language=Language.ENGLISH,
            date=date.today() + timedelta(days=days_ahead),
            time='09:30',
            location='Salle 204',
            total_seats=total_seats,
        )
    )


def _book(database: Database, *, user_id: int, session_id: UUID):
    use_case = CreateBookingUseCase(uow=SqlAlchemyUnitOfWork(session_factory=database.session))
    return use_case.create_booking(user_id=user_id, session_id=str(session_id))


def _cancel(database: Database, *, user_id: int, booking_id: UUID):
    use_case = CancelBookingUseCase(uow=SqlAlchemyUnitOfWork(session_factory=database.session))
    return use_case.cancel_booking(user_id=user_id, booking_id=booking_id)


async def _available_seats(repo: SessionQueryRepoImpl, session_id: UUID) -> int:
    session = await repo.get_by_id(session_id=session_id)
    assert session is not None
    return session.available_seats


@pytest.mark.integration
class TestConcurrentBooking:
    async def test_never_more_bookings_than_seats(
        self,
        database: Database,
        session_query_repo: SessionQueryRepoImpl,
        booking_query_repo: BookingQueryRepoImpl,
    ) -> None:
        # Given: 3 seats and 10 users clicking at the same time
        session = await _create_session(database, total_seats=3)
        user_ids = await _create_users(database, 10)

        # When
        results = await asyncio.gather(
            *(_book(database, user_id=user_id, session_id=session.id) for user_id in user_ids),
            return_exceptions=True,
        )

        # Then
        succeeded = [r for r in results if not isinstance(r, BaseException)]
        failed = [r for r in results if isinstance(r, BaseException)]
        assert len(succeeded) == 3
        assert all(isinstance(error, CapacityExceededError) for error in failed)
        assert await _available_seats(session_query_repo, session.id) == 0
        assert await booking_query_repo.count_active_by_session(session_id=session.id) == 3

    async def test_last_seat__one_winner(
        self, database: Database, session_query_repo: SessionQueryRepoImpl
    ) -> None:
        # Given: one seat left, users A and B
        session = await _create_session(database, total_seats=1)
        user_a, user_b = await _create_users(database, 2)

        # When
        results = await asyncio.gather(
            _book(database, user_id=user_a, session_id=session.id),
            _book(database, user_id=user_b, session_id=session.id),
            return_exceptions=True,
        )

        # Then
        errors = [r for r in results if isinstance(r, BaseException)]
        assert len(errors) == 1
        assert isinstance(errors[0], CapacityExceededError)
        assert await _available_seats(session_query_repo, session.id) == 0

    async def test_double_submit_by_one_user__one_booking(
        self,
        database: Database,
        session_query_repo: SessionQueryRepoImpl,
        booking_query_repo: BookingQueryRepoImpl,
    ) -> None:
        session = await _create_session(database, total_seats=5)
        (user_id,) = await _create_users(database, 1)

        results = await asyncio.gather(
            *(_book(database, user_id=user_id, session_id=session.id) for _ in range(5)),
            return_exceptions=True,
        )

        errors = [r for r in results if isinstance(r, BaseException)]
        assert len(errors) == 4
        assert all(isinstance(error, ConflictError) for error in errors)
        # Losers rolled their seat back
        assert await _available_seats(session_query_repo, session.id) == 4
        assert await booking_query_repo.count_active_by_session(session_id=session.id) == 1

    async def test_concurrent_cancellations__seat_released_once(
        self, database: Database, session_query_repo: SessionQueryRepoImpl
    ) -> None:
        session = await _create_session(database, total_seats=2)
        user_a, user_b = await _create_users(database, 2)
        booking = await _book(database, user_id=user_a, session_id=session.id)
        await _book(database, user_id=user_b, session_id=session.id)

        results = await asyncio.gather(
            _cancel(database, user_id=user_a, booking_id=booking.id),
            _cancel(database, user_id=user_a, booking_id=booking.id),
            return_exceptions=True,
        )

        errors = [r for r in results if isinstance(r, BaseException)]
        assert len(errors) == 1
        assert isinstance(errors[0], InvalidStateError)
        assert await _available_seats(session_query_repo, session.id) == 1


@pytest.mark.integration
class TestBookingLifecycle:
    async def test_cancel_then_rebook(
        self, database: Database, session_query_repo: SessionQueryRepoImpl
    ) -> None:
        session = await _create_session(database, total_seats=2)
        (user_id,) = await _create_users(database, 1)

        booking = await _book(database, user_id=user_id, session_id=session.id)
        assert booking.session is not None
        assert booking.session.available_seats == 1

        cancelled = await _cancel(database, user_id=user_id, booking_id=booking.id)
        assert cancelled.status == BookingStatus.CANCELLED
        assert cancelled.session is not None
        assert cancelled.session.available_seats == 2

        # Cancelled rows do not count against the one-booking-per-session rule
        rebooked = await _book(database, user_id=user_id, session_id=session.id)
        assert rebooked.id != booking.id
        assert await _available_seats(session_query_repo, session.id) == 1

    async def test_second_booking_for_same_session(self, database: Database) -> None:
        session = await _create_session(database, total_seats=5)
        (user_id,) = await _create_users(database, 1)
        await _book(database, user_id=user_id, session_id=session.id)

        with pytest.raises(ConflictError):
            await _book(database, user_id=user_id, session_id=session.id)

    async def test_double_cancel__no_extra_seat(
        self, database: Database, session_query_repo: SessionQueryRepoImpl
    ) -> None:
        session = await _create_session(database, total_seats=3)
        (user_id,) = await _create_users(database, 1)
        booking = await _book(database, user_id=user_id, session_id=session.id)
        await _cancel(database, user_id=user_id, booking_id=booking.id)

        with pytest.raises(InvalidStateError):
            await _cancel(database, user_id=user_id, booking_id=booking.id)

        assert await _available_seats(session_query_repo, session.id) == 3

    async def test_yesterday_session_is_not_bookable(
        self, database: Database, session_query_repo: SessionQueryRepoImpl
    ) -> None:
        session = await _create_session(database, total_seats=3, days_ahead=-1)
        (user_id,) = await _create_users(database, 1)

        with pytest.raises(InvalidStateError):
            await _book(database, user_id=user_id, session_id=session.id)

        assert await _available_seats(session_query_repo, session.id) == 3

    async def test_bookings_outlive_deleted_session(self, database: Database) -> None:
        session = await _create_session(database, total_seats=3)
        (user_id,) = await _create_users(database, 1)
        booking = await _book(database, user_id=user_id, session_id=session.id)

        assert await SessionCommandRepoImpl(database.session).delete(session_id=session.id)

        page = await ListBookingsUseCase(
            booking_query_repo=BookingQueryRepoImpl(database.session),
            session_query_repo=SessionQueryRepoImpl(database.session),
        ).list_bookings(user_id=user_id)
        assert [item.id for item in page.items] == [booking.id]
        assert page.items[0].session is None


@pytest.mark.integration
class TestResize:
    async def test_shrink_below_booked_is_rejected(
        self, database: Database, session_query_repo: SessionQueryRepoImpl
    ) -> None:
        session = await _create_session(database, total_seats=3)
        user_ids = await _create_users(database, 2)
        for user_id in user_ids:
            await _book(database, user_id=user_id, session_id=session.id)

        use_case = UpdateSessionUseCase(uow=SqlAlchemyUnitOfWork(session_factory=database.session))
        with pytest.raises(InvalidStateError):
            await use_case.update_session(session_id=session.id, changes={'total_seats': 1})

        assert await _available_seats(session_query_repo, session.id) == 1

    async def test_resize_keeps_booked_seats(
        self, database: Database, session_query_repo: SessionQueryRepoImpl
    ) -> None:
        session = await _create_session(database, total_seats=3)
        user_ids = await _create_users(database, 2)
        for user_id in user_ids:
            await _book(database, user_id=user_id, session_id=session.id)

        use_case = UpdateSessionUseCase(uow=SqlAlchemyUnitOfWork(session_factory=database.session))
        grown = await use_case.update_session(session_id=session.id, changes={'total_seats': 6})
        assert (grown.total_seats, grown.available_seats) == (6, 4)

        use_case = UpdateSessionUseCase(uow=SqlAlchemyUnitOfWork(session_factory=database.session))
        shrunk = await use_case.update_session(session_id=session.id, changes={'total_seats': 2})
        assert (shrunk.total_seats, shrunk.available_seats) == (2, 0)

    async def test_seat_guard_at_repository_level(
        self, database: Database, session_query_repo: SessionQueryRepoImpl
    ) -> None:
        session = await _create_session(database, total_seats=1)
        repo = SessionCommandRepoImpl(database.session)

        assert await repo.release_seat(session_id=session.id) is False
        assert await repo.reserve_seat(session_id=session.id) is True
        assert await repo.reserve_seat(session_id=session.id) is False
        assert await _available_seats(session_query_repo, session.id) == 0
