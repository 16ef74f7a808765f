from contextlib import asynccontextmanager
from typing import AsyncContextManager, AsyncIterator, Callable, Optional
import uuid

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from uuid_utils import UUID

from src.platform.logging.loguru_io import Logger
from src.service.session_booking.app.interface.i_booking_query_repo import IBookingQueryRepo
from src.service.session_booking.domain.entity.booking_entity import (
    ACTIVE_BOOKING_STATUSES,
    Booking,
    BookingStatus,
)
from src.service.session_booking.driven_adapter.model.booking_model import BookingModel


_ACTIVE_STATUS_VALUES = [status.value for status in ACTIVE_BOOKING_STATUSES]


class BookingQueryRepoImpl(IBookingQueryRepo):
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
        """
        Get session for query execution.

        If session is injected (from UoW), yield it directly without context management.
        Otherwise, use session_factory context manager.
        """
        if self.session is not None:
            yield self.session
        elif self.session_factory is not None:
            async with self.session_factory() as session:
                yield session
        else:
            raise RuntimeError('No session or session_factory available')

    @staticmethod
    def _to_entity(model: BookingModel) -> Booking:
        # SQLAlchemy returns stdlib uuid.UUID; entities carry uuid_utils.UUID
        return Booking(
            id=UUID(str(model.id)),
            session_id=UUID(str(model.session_id)),
            user_id=model.user_id,
            status=BookingStatus(model.status),
            cancellation_reason=model.cancellation_reason,
            cancelled_at=model.cancelled_at,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    @Logger.io
    async def get_by_id(self, *, booking_id: UUID) -> Optional[Booking]:
        async with self._get_session() as db:
            result = await db.execute(
                select(BookingModel).where(BookingModel.id == uuid.UUID(str(booking_id)))
            )
            model = result.scalar_one_or_none()
            return self._to_entity(model) if model else None

    @Logger.io
    async def get_for_user(self, *, booking_id: UUID, user_id: int) -> Optional[Booking]:
        async with self._get_session() as db:
            result = await db.execute(
                select(BookingModel).where(
                    BookingModel.id == uuid.UUID(str(booking_id)),
                    BookingModel.user_id == user_id,
                )
            )
            model = result.scalar_one_or_none()
            return self._to_entity(model) if model else None

    @Logger.io
    async def exists_active(self, *, user_id: int, session_id: UUID) -> bool:
        async with self._get_session() as db:
            result = await db.execute(
                select(BookingModel.id)
                .where(
                    BookingModel.user_id == user_id,
                    BookingModel.session_id == uuid.UUID(str(session_id)),
                    BookingModel.status != BookingStatus.CANCELLED.value,
                )
                .limit(1)
            )
            return result.scalar_one_or_none() is not None

    @Logger.io
    async def list_by_user(
        self, *, user_id: int, offset: int, limit: int
    ) -> tuple[list[Booking], int]:
        async with self._get_session() as db:
            total = await db.scalar(
                select(func.count(BookingModel.id)).where(BookingModel.user_id == user_id)
            )
            result = await db.execute(
                select(BookingModel)
                .where(BookingModel.user_id == user_id)
                # UUID7 ids are time ordered and break created_at ties
                .order_by(BookingModel.created_at.desc(), BookingModel.id.desc())
                .offset(offset)
                .limit(limit)
            )
            return [self._to_entity(model) for model in result.scalars()], total or 0

    @Logger.io
    async def list_active_by_user(self, *, user_id: int) -> list[Booking]:
        async with self._get_session() as db:
            result = await db.execute(
                select(BookingModel)
                .where(
                    BookingModel.user_id == user_id,
                    BookingModel.status.in_(_ACTIVE_STATUS_VALUES),
                )
                .order_by(BookingModel.created_at.desc(), BookingModel.id.desc())
            )
            return [self._to_entity(model) for model in result.scalars()]

    @Logger.io
    async def count_active_by_session(self, *, session_id: UUID) -> int:
        async with self._get_session() as db:
            total = await db.scalar(
                select(func.count(BookingModel.id)).where(
                    BookingModel.session_id == uuid.UUID(str(session_id)),
                    BookingModel.status.in_(_ACTIVE_STATUS_VALUES),
                )
            )
            return total or 0
