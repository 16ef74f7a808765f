from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from uuid_utils import UUID

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.session_booking.app.interface.i_booking_query_repo import IBookingQueryRepo
from src.service.session_booking.app.interface.i_session_query_repo import ISessionQueryRepo
from src.service.session_booking.domain.entity.booking_entity import Booking


class GetBookingUseCase:
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
    async def get_booking(self, *, user_id: int, booking_id: UUID) -> Booking:
        # Someone else's booking is reported as missing
        booking = await self.booking_query_repo.get_for_user(booking_id=booking_id, user_id=user_id)
        if not booking:
            raise NotFoundError('Booking not found')

        session = await self.session_query_repo.get_by_id(session_id=booking.session_id)
        return booking.with_session(session)
