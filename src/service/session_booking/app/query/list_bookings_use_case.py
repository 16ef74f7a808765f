from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.session_booking.app.dto import Page, PageRequest
from src.service.session_booking.app.interface.i_booking_query_repo import IBookingQueryRepo
from src.service.session_booking.app.interface.i_session_query_repo import ISessionQueryRepo
from src.service.session_booking.domain.entity.booking_entity import Booking


async def enrich_with_sessions(
    bookings: list[Booking], session_query_repo: ISessionQueryRepo
) -> list[Booking]:
    """Attach each booking's session; deleted sessions resolve to None"""
    sessions = await session_query_repo.get_by_ids(
        session_ids=list({booking.session_id for booking in bookings})
    )
    return [booking.with_session(sessions.get(str(booking.session_id))) for booking in bookings]


class ListBookingsUseCase:
    def __init__(
        self, *, booking_query_repo: IBookingQueryRepo, session_query_repo: ISessionQueryRepo
    ) -> None:
        self.booking_query_repo = booking_query_repo
        self.session_query_repo = session_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        booking_query_repo: IBookingQueryRepo = Depends(Provide[Container.booking_query_repo]),
        session_query_repo: ISessionQueryRepo = Depends(Provide[Container.session_query_repo]),
    ) -> Self:
        return cls(booking_query_repo=booking_query_repo, session_query_repo=session_query_repo)

    @Logger.io
    async def list_bookings(
        self,
        *,
        user_id: int,
        page: Optional[int] = None,
        items_per_page: Optional[int] = None,
    ) -> Page[Booking]:
        request = PageRequest.of(page=page, items_per_page=items_per_page)
        bookings, total = await self.booking_query_repo.list_by_user(
            user_id=user_id, offset=request.offset, limit=request.limit
        )
        items = await enrich_with_sessions(bookings, self.session_query_repo)
        return Page.build(items=items, total=total, request=request)

    @Logger.io
    async def list_active_bookings(self, *, user_id: int) -> list[Booking]:
        bookings = await self.booking_query_repo.list_active_by_user(user_id=user_id)
        return await enrich_with_sessions(bookings, self.session_query_repo)
