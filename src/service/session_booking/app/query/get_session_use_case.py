from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from uuid_utils import UUID

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.session_booking.app.interface.i_session_query_repo import ISessionQueryRepo
from src.service.session_booking.domain.entity.session_entity import Session


class GetSessionUseCase:
    def __init__(self, *, session_query_repo: ISessionQueryRepo) -> None:
        self.session_query_repo = session_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        session_query_repo: ISessionQueryRepo = Depends(Provide[Container.session_query_repo]),
    ) -> Self:
        return cls(session_query_repo=session_query_repo)

    @Logger.io
    async def get_session(self, *, session_id: UUID) -> Session:
        session = await self.session_query_repo.get_by_id(session_id=session_id)
        if not session:
            raise NotFoundError('Session not found')
        return session
