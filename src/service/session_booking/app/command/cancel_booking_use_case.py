from datetime import datetime, timezone
from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace
import uuid_utils

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import CustomBaseError, InvalidStateError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.booking_metrics import metrics
from src.service.session_booking.domain.entity.booking_entity import Booking
from src.service.session_booking.domain.validators import (
    raise_if_invalid,
    validate_cancellation_input,
)


class CancelBookingUseCase:
    """
    Cancel a booking owned by the caller and give its seat back.

    The status change is conditional on the booking not being cancelled yet, so
    of two concurrent cancellations only one reaches the seat release.
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
    async def cancel_booking(
        self, *, user_id: int, booking_id: uuid_utils.UUID, reason: Optional[str] = None
    ) -> Booking:
        raise_if_invalid(validate_cancellation_input({'reason': reason}))

        with self.tracer.start_as_current_span(
            'use_case.cancel_booking',
            attributes={'booking.id': str(booking_id), 'user.id': user_id},
        ):
            try:
                booking = await self._cancel(user_id=user_id, booking_id=booking_id, reason=reason)
            except CustomBaseError:
                metrics.record_cancellation(result='rejected')
                raise

        metrics.record_cancellation(result='success')
        if booking.session is not None:
            metrics.update_available_seats(
                session_id=str(booking.session_id),
                available_seats=booking.session.available_seats,
            )
        Logger.base.info(f'↩️ [CANCEL-BOOKING] Booking {booking_id} cancelled by user {user_id}')
        return booking

    async def _cancel(
        self, *, user_id: int, booking_id: uuid_utils.UUID, reason: Optional[str]
    ) -> Booking:
        async with self.uow:
            booking = await self.uow.booking_query_repo.get_for_user(
                booking_id=booking_id, user_id=user_id
            )
            if not booking:
                raise NotFoundError('Booking not found')
            # Raises InvalidStateError when already cancelled
            cancelled = booking.cancel(reason=reason)

            persisted = await self.uow.booking_command_repo.cancel(
                booking_id=booking_id,
                user_id=user_id,
                reason=cancelled.cancellation_reason,
                cancelled_at=cancelled.cancelled_at or datetime.now(timezone.utc),
            )
            if persisted is None:
                # Lost the race against another cancellation (or a delete)
                current = await self.uow.booking_query_repo.get_for_user(
                    booking_id=booking_id, user_id=user_id
                )
                if not current:
                    raise NotFoundError('Booking not found')
                raise InvalidStateError('Booking already cancelled')

            if not await self.uow.session_command_repo.release_seat(session_id=booking.session_id):
                Logger.base.warning(
                    f'⚠️ [CANCEL-BOOKING] No seat released for session {booking.session_id} '
                    '(session deleted or already full)'
                )
            session = await self.uow.session_query_repo.get_by_id(session_id=booking.session_id)

            await self.uow.commit()

        return persisted.with_session(session)
