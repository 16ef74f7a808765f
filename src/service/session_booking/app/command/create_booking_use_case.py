from datetime import datetime
import time
from typing import Self
from zoneinfo import ZoneInfo

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace
import uuid_utils

from src.platform.config.core_setting import settings
from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import (
    CapacityExceededError,
    ConflictError,
    CustomBaseError,
    InvalidStateError,
    NotFoundError,
)
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.booking_metrics import metrics
from src.service.session_booking.domain.entity.booking_entity import Booking
from src.service.session_booking.domain.validators import (
    raise_if_invalid,
    validate_booking_input,
)


_OUTCOMES: dict[type[CustomBaseError], str] = {
    NotFoundError: 'not_found',
    InvalidStateError: 'invalid_state',
    CapacityExceededError: 'capacity_exceeded',
    ConflictError: 'conflict',
}


class CreateBookingUseCase:
    """
    Reserve one seat of a session for a user.

    Flow (one transaction):
    1. Fail fast on the session state: exists, not past, active, seats left
    2. Fail fast on an existing non-cancelled booking
    3. Conditional decrement of available_seats (the capacity guard)
    4. Insert the booking; the partial unique index rejects a concurrent duplicate
    5. Commit

    Steps 1-2 only produce friendlier errors; 3-4 are what hold under concurrency.
    Any failure after step 3 leaves the UoW uncommitted, so the seat comes back
    with the rollback.
    """

    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work]),
    ) -> Self:
        return cls(uow=uow)

    @Logger.io
    async def create_booking(self, *, user_id: int, session_id: str) -> Booking:
        raise_if_invalid(validate_booking_input({'session_id': session_id}))
        session_uuid = uuid_utils.UUID(str(session_id))
        booking_id = uuid_utils.uuid7()

        start = time.perf_counter()
        with self.tracer.start_as_current_span(
            'use_case.create_booking',
            attributes={
                'booking.id': str(booking_id),
                'session.id': str(session_uuid),
                'user.id': user_id,
            },
        ):
            try:
                booking = await self._reserve(
                    booking_id=booking_id, user_id=user_id, session_id=session_uuid
                )
            except CustomBaseError as e:
                metrics.record_booking(
                    result=_OUTCOMES.get(type(e), 'rejected'),
                    duration=time.perf_counter() - start,
                )
                raise

        metrics.record_booking(result='success', duration=time.perf_counter() - start)
        if booking.session is not None:
            metrics.update_available_seats(
                session_id=str(booking.session_id),
                available_seats=booking.session.available_seats,
            )
        Logger.base.info(
            f'🎫 [CREATE-BOOKING] Booking {booking.id} confirmed for user {user_id} '
            f'on session {session_uuid}'
        )
        return booking

    async def _reserve(
        self, *, booking_id: uuid_utils.UUID, user_id: int, session_id: uuid_utils.UUID
    ) -> Booking:
        async with self.uow:
            session = await self.uow.session_query_repo.get_by_id(session_id=session_id)
            if not session:
                raise NotFoundError('Session not found')

            tz = ZoneInfo(settings.TIMEZONE)
            if session.is_past(now=datetime.now(tz), tz=tz):
                raise InvalidStateError('Session already occurred')
            if not session.is_active:
                raise InvalidStateError('Session is not active')
            if not session.has_available_seats:
                raise CapacityExceededError()

            if await self.uow.booking_query_repo.exists_active(
                user_id=user_id, session_id=session_id
            ):
                raise ConflictError('You already have a booking for this session')

            # Capacity guard: the database decides, a lost race fails fast
            if not await self.uow.session_command_repo.reserve_seat(session_id=session_id):
                # Zero rows: either full or deleted since the read above
                if not await self.uow.session_query_repo.get_by_id(session_id=session_id):
                    raise NotFoundError('Session not found')
                raise CapacityExceededError()

            booking = await self.uow.booking_command_repo.create(
                booking=Booking.create(id=booking_id, session_id=session_id, user_id=user_id)
            )
            refreshed = await self.uow.session_query_repo.get_by_id(session_id=session_id)

            await self.uow.commit()

        return booking.with_session(refreshed)
