"""
Unit of Work Pattern - one database transaction shared by several repositories

Architecture:
- UoW owns the session lifecycle and commit/rollback
- Repositories receive the shared session from the UoW
- Use cases coordinate repositories inside ``async with uow``; leaving the block
  without ``commit()`` rolls everything back
"""

from __future__ import annotations

import abc
from contextlib import AsyncExitStack
from typing import TYPE_CHECKING, AsyncContextManager, Callable

from sqlalchemy.ext.asyncio import AsyncSession


if TYPE_CHECKING:
    from src.service.session_booking.app.interface.i_booking_command_repo import (
        IBookingCommandRepo,
    )
    from src.service.session_booking.app.interface.i_booking_query_repo import IBookingQueryRepo
    from src.service.session_booking.app.interface.i_session_command_repo import (
        ISessionCommandRepo,
    )
    from src.service.session_booking.app.interface.i_session_query_repo import ISessionQueryRepo


class AbstractUnitOfWork(abc.ABC):
    """
    Usage:
        async with uow:
            reserved = await uow.session_command_repo.reserve_seat(session_id=...)
            booking = await uow.booking_command_repo.create(booking=...)
            await uow.commit()
    """

    booking_command_repo: IBookingCommandRepo
    booking_query_repo: IBookingQueryRepo
    session_command_repo: ISessionCommandRepo
    session_query_repo: ISessionQueryRepo

    async def __aenter__(self) -> AbstractUnitOfWork:
        return self

    async def __aexit__(self, *args) -> None:
        await self.rollback()

    async def commit(self) -> None:
        await self._commit()

    @abc.abstractmethod
    async def _commit(self) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    async def rollback(self) -> None:
        raise NotImplementedError


class SqlAlchemyUnitOfWork(AbstractUnitOfWork):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]) -> None:
        self.session_factory = session_factory
        self.session: AsyncSession | None = None
        self._stack: AsyncExitStack | None = None

    async def __aenter__(self) -> AbstractUnitOfWork:
        from src.service.session_booking.driven_adapter.repo.booking_command_repo_impl import (
            BookingCommandRepoImpl,
        )
        from src.service.session_booking.driven_adapter.repo.booking_query_repo_impl import (
            BookingQueryRepoImpl,
        )
        from src.service.session_booking.driven_adapter.repo.session_command_repo_impl import (
            SessionCommandRepoImpl,
        )
        from src.service.session_booking.driven_adapter.repo.session_query_repo_impl import (
            SessionQueryRepoImpl,
        )

        self._stack = AsyncExitStack()
        self.session = await self._stack.enter_async_context(self.session_factory())

        # Repositories share the UoW session
        self.booking_command_repo = BookingCommandRepoImpl(session=self.session)
        self.booking_query_repo = BookingQueryRepoImpl(session=self.session)
        self.session_command_repo = SessionCommandRepoImpl(session=self.session)
        self.session_query_repo = SessionQueryRepoImpl(session=self.session)

        return await super().__aenter__()

    async def __aexit__(self, *args) -> None:
        try:
            await super().__aexit__(*args)
        finally:
            if self._stack is not None:
                await self._stack.aclose()
            self._stack = None
            self.session = None

    async def _commit(self) -> None:
        assert self.session is not None, 'commit() outside of "async with uow"'
        await self.session.commit()

    async def rollback(self) -> None:
        if self.session is not None:
            await self.session.rollback()
