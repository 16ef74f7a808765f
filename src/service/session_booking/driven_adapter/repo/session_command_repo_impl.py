"""
Session Command Repository Implementation

Seat counters are only ever changed through single conditional UPDATE
statements; the database evaluates the guard and the write together, so the
rowcount tells whether the guard held.
"""

from contextlib import asynccontextmanager
from typing import AsyncContextManager, AsyncIterator, Callable
import uuid

from sqlalchemy import delete, update
from sqlalchemy.ext.asyncio import AsyncSession
from uuid_utils import UUID

from src.platform.logging.loguru_io import Logger
from src.service.session_booking.app.interface.i_session_command_repo import (
    ISessionCommandRepo,
)
from src.service.session_booking.domain.entity.session_entity import Session
from src.service.session_booking.driven_adapter.model.session_model import SessionModel
from src.service.session_booking.driven_adapter.repo.session_query_repo_impl import (
    SessionQueryRepoImpl,
)


class SessionCommandRepoImpl(ISessionCommandRepo):
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
        UoW-injected session is used as is (the UoW commits); otherwise each call
        opens its own session and commits on success.
        """
        if self.session is not None:
            yield self.session
        elif self.session_factory is not None:
            async with self.session_factory() as session:
                yield session
                await session.commit()
        else:
            raise RuntimeError('No session or session_factory available')

    @Logger.io
    async def create(self, *, session: Session) -> Session:
        async with self._get_session() as db:
            model = SessionModel(
                id=uuid.UUID(str(session.id)),
                language=session.language.value,
                level=session.level.value if session.level else None,
                date=session.date,
                time=session.time,
                location=session.location,
                description=session.description,
                total_seats=session.total_seats,
                available_seats=session.available_seats,
                duration_minutes=session.duration_minutes,
                price=session.price,
                is_active=session.is_active,
            )
            db.add(model)
            await db.flush()
            await db.refresh(model)
            return SessionQueryRepoImpl._to_entity(model)

    @Logger.io
    async def update_details(self, *, session: Session) -> Session:
        async with self._get_session() as db:
            stmt = (
                update(SessionModel)
                .where(SessionModel.id == uuid.UUID(str(session.id)))
                .values(
                    language=session.language.value,
                    level=session.level.value if session.level else None,
                    date=session.date,
                    time=session.time,
                    location=session.location,
                    description=session.description,
                    duration_minutes=session.duration_minutes,
                    price=session.price,
                    is_active=session.is_active,
                    updated_at=session.updated_at,
                )
                .execution_options(synchronize_session=False)
            )
            await db.execute(stmt)
            return session

    @Logger.io
    async def resize_total_seats(self, *, session_id: UUID, total_seats: int) -> bool:
        async with self._get_session() as db:
            stmt = (
                update(SessionModel)
                .where(
                    SessionModel.id == uuid.UUID(str(session_id)),
                    SessionModel.total_seats - SessionModel.available_seats <= total_seats,
                )
                .values(
                    available_seats=SessionModel.available_seats
                    + (total_seats - SessionModel.total_seats),
                    total_seats=total_seats,
                )
                .execution_options(synchronize_session=False)
            )
            result = await db.execute(stmt)
            return result.rowcount == 1  # type: ignore[attr-defined]

    @Logger.io
    async def delete(self, *, session_id: UUID) -> bool:
        async with self._get_session() as db:
            result = await db.execute(
                delete(SessionModel)
                .where(SessionModel.id == uuid.UUID(str(session_id)))
                .execution_options(synchronize_session=False)
            )
            return result.rowcount == 1  # type: ignore[attr-defined]

    @Logger.io
    async def reserve_seat(self, *, session_id: UUID) -> bool:
        async with self._get_session() as db:
            stmt = (
                update(SessionModel)
                .where(
                    SessionModel.id == uuid.UUID(str(session_id)),
                    SessionModel.available_seats > 0,
                )
                .values(available_seats=SessionModel.available_seats - 1)
                .execution_options(synchronize_session=False)
            )
            result = await db.execute(stmt)
            return result.rowcount == 1  # type: ignore[attr-defined]

    @Logger.io
    async def release_seat(self, *, session_id: UUID) -> bool:
        async with self._get_session() as db:
            stmt = (
                update(SessionModel)
                .where(
                    SessionModel.id == uuid.UUID(str(session_id)),
                    SessionModel.available_seats < SessionModel.total_seats,
                )
                .values(available_seats=SessionModel.available_seats + 1)
                .execution_options(synchronize_session=False)
            )
            result = await db.execute(stmt)
            return result.rowcount == 1  # type: ignore[attr-defined]
