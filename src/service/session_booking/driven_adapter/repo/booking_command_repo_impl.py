"""
Booking Command Repository Implementation

Runs inside the unit of work of the calling use case: nothing here commits
when a UoW session is injected, so the booking row and the seat counter
change land in the same transaction.
"""

from contextlib import asynccontextmanager
from datetime import datetime
from typing import AsyncContextManager, AsyncIterator, Callable, Optional
import uuid

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from uuid_utils import UUID

from src.platform.exception.exceptions import ConflictError
from src.platform.logging.loguru_io import Logger
from src.service.session_booking.app.interface.i_booking_command_repo import (
    IBookingCommandRepo,
)
from src.service.session_booking.domain.entity.booking_entity import Booking, BookingStatus
from src.service.session_booking.driven_adapter.model.booking_model import BookingModel
from src.service.session_booking.driven_adapter.repo.booking_query_repo_impl import (
    BookingQueryRepoImpl,
)


class BookingCommandRepoImpl(IBookingCommandRepo):
    def __init__(
        self,
        session_factory: Callable[..., AsyncContextManager[AsyncSession]] | None = None,
        *,
        session: AsyncSession | None = None,
    ) -> None:
        self.session_factory = session_factory
        self.session = session

    @asynccontextmanager
    async def _get_session(self) -> AsyncIterator[AsyncSession]:
        if self.session is not None:
            yield self.session
        elif self.session_factory is not None:
            async with self.session_factory() as session:
                yield session
                await session.commit()
        else:
            raise RuntimeError('No session or session_factory available')

    @Logger.io
    async def create(self, *, booking: Booking) -> Booking:
        async with self._get_session() as db:
            model = BookingModel(
                id=uuid.UUID(str(booking.id)),
                session_id=uuid.UUID(str(booking.session_id)),
                user_id=booking.user_id,
                status=booking.status.value,
                created_at=booking.created_at,
                updated_at=booking.updated_at,
            )
            db.add(model)
            try:
                await db.flush()
            except IntegrityError as e:
                # Partial unique index on (user_id, session_id) for non-cancelled rows
                raise ConflictError('You already have a booking for this session') from e
            return booking

    @Logger.io
    async def cancel(
        self,
        *,
        booking_id: UUID,
        user_id: int,
        reason: Optional[str],
        cancelled_at: datetime,
    ) -> Optional[Booking]:
        db_booking_id = uuid.UUID(str(booking_id))
        async with self._get_session() as db:
            result = await db.execute(
                update(BookingModel)
                .where(
                    BookingModel.id == db_booking_id,
                    BookingModel.user_id == user_id,
                    BookingModel.status != BookingStatus.CANCELLED.value,
                )
                .values(
                    status=BookingStatus.CANCELLED.value,
                    cancellation_reason=reason,
                    cancelled_at=cancelled_at,
                    updated_at=cancelled_at,
                )
                .execution_options(synchronize_session=False)
            )
            if result.rowcount != 1:  # type: ignore[attr-defined]
                return None

            row = await db.execute(
                select(BookingModel)
                .where(BookingModel.id == db_booking_id)
                .execution_options(populate_existing=True)
            )
            return BookingQueryRepoImpl._to_entity(row.scalar_one())
