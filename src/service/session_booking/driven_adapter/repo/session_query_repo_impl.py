from contextlib import asynccontextmanager
from datetime import date
from typing import AsyncContextManager, AsyncIterator, Callable, Optional
import uuid

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from uuid_utils import UUID

from src.platform.logging.loguru_io import Logger
from src.service.session_booking.app.interface.i_session_query_repo import ISessionQueryRepo
from src.service.session_booking.domain.entity.session_entity import Session
from src.service.session_booking.domain.enum import Language, Level
from src.service.session_booking.driven_adapter.model.session_model import SessionModel


class SessionQueryRepoImpl(ISessionQueryRepo):
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
            # Session injected by UoW
            yield self.session
        elif self.session_factory is not None:
            async with self.session_factory() as session:
                yield session
        else:
            raise RuntimeError('No session or session_factory available')

    @staticmethod
    def _to_entity(model: SessionModel) -> Session:
        return Session(
            id=UUID(str(model.id)),  # stdlib uuid.UUID -> uuid_utils.UUID
            language=Language(model.language),
            level=Level(model.level) if model.level else None,
            date=model.date,
            time=model.time,
            location=model.location,
            description=model.description,
            total_seats=model.total_seats,
            available_seats=model.available_seats,
            duration_minutes=model.duration_minutes,
            price=model.price,
            is_active=model.is_active,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    @staticmethod
    def _available_filter(
        today: date, language: Optional[Language] = None, level: Optional[Level] = None
    ) -> list:
        conditions = [
            SessionModel.is_active.is_(True),
            SessionModel.date >= today,
            SessionModel.available_seats > 0,
        ]
        if language is not None:
            conditions.append(SessionModel.language == language.value)
        if level is not None:
            conditions.append(SessionModel.level == level.value)
        return conditions

    @Logger.io
    async def get_by_id(self, *, session_id: UUID) -> Optional[Session]:
        async with self._get_session() as db:
            result = await db.execute(
                select(SessionModel)
                .where(SessionModel.id == uuid.UUID(str(session_id)))
                # Counters may have moved through a bulk UPDATE in this session
                .execution_options(populate_existing=True)
            )
            model = result.scalar_one_or_none()
            return self._to_entity(model) if model else None

    @Logger.io
    async def get_by_ids(self, *, session_ids: list[UUID]) -> dict[str, Session]:
        if not session_ids:
            return {}
        ids = {uuid.UUID(str(session_id)) for session_id in session_ids}
        async with self._get_session() as db:
            result = await db.execute(select(SessionModel).where(SessionModel.id.in_(ids)))
            return {str(model.id): self._to_entity(model) for model in result.scalars()}

    @Logger.io
    async def list_available(
        self,
        *,
        today: date,
        offset: int,
        limit: int,
        language: Optional[Language] = None,
        level: Optional[Level] = None,
    ) -> tuple[list[Session], int]:
        conditions = self._available_filter(today, language, level)
        async with self._get_session() as db:
            total = await db.scalar(select(func.count(SessionModel.id)).where(*conditions))
            result = await db.execute(
                select(SessionModel)
                .where(*conditions)
                .order_by(SessionModel.date.asc(), SessionModel.time.asc())
                .offset(offset)
                .limit(limit)
            )
            return [self._to_entity(model) for model in result.scalars()], total or 0

    @Logger.io
    async def list_all(self, *, offset: int, limit: int) -> tuple[list[Session], int]:
        async with self._get_session() as db:
            total = await db.scalar(select(func.count(SessionModel.id)))
            result = await db.execute(
                select(SessionModel)
                .order_by(SessionModel.date.desc(), SessionModel.time.desc())
                .offset(offset)
                .limit(limit)
            )
            return [self._to_entity(model) for model in result.scalars()], total or 0

    @Logger.io
    async def list_upcoming(self, *, today: date, limit: int) -> list[Session]:
        async with self._get_session() as db:
            result = await db.execute(
                select(SessionModel)
                .where(*self._available_filter(today))
                .order_by(SessionModel.date.asc(), SessionModel.time.asc())
                .limit(limit)
            )
            return [self._to_entity(model) for model in result.scalars()]

    @Logger.io
    async def count_available(self, *, today: date) -> int:
        async with self._get_session() as db:
            total = await db.scalar(
                select(func.count(SessionModel.id)).where(*self._available_filter(today))
            )
            return total or 0
