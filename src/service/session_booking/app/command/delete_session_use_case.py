from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
import uuid_utils

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.booking_metrics import metrics
from src.service.session_booking.app.interface.i_session_command_repo import (
    ISessionCommandRepo,
)


class DeleteSessionUseCase:
    """Existing bookings are kept; they list with ``session = None`` afterwards"""

    def __init__(self, *, session_command_repo: ISessionCommandRepo) -> None:
        self.session_command_repo = session_command_repo

    @classmethod
    @inject
    def depends(
        cls,
        session_command_repo: ISessionCommandRepo = Depends(
            Provide[Container.session_command_repo]
        ),
    ) -> Self:
        return cls(session_command_repo=session_command_repo)

    @Logger.io
    async def delete_session(self, *, session_id: uuid_utils.UUID) -> None:
        if not await self.session_command_repo.delete(session_id=session_id):
            raise NotFoundError('Session not found')

        metrics.forget_session(session_id=str(session_id))
        Logger.base.info(f'🗑️ [DELETE-SESSION] Session {session_id} deleted')
