from datetime import date, datetime
from typing import Optional, Self
from zoneinfo import ZoneInfo

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.core_setting import settings
from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.session_booking.app.dto import Page, PageRequest
from src.service.session_booking.app.interface.i_session_query_repo import ISessionQueryRepo
from src.service.session_booking.domain.entity.session_entity import Session
from src.service.session_booking.domain.enum import Language, Level


DEFAULT_UPCOMING_LIMIT = 5


def local_today() -> date:
    return datetime.now(ZoneInfo(settings.TIMEZONE)).date()


class ListSessionsUseCase:
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
    async def list_available(
        self,
        *,
        page: Optional[int] = None,
        items_per_page: Optional[int] = None,
        language: Optional[Language] = None,
        level: Optional[Level] = None,
    ) -> Page[Session]:
        """Bookable sessions: active, from today on, with a free seat, soonest first"""
        request = PageRequest.of(page=page, items_per_page=items_per_page)
        items, total = await self.session_query_repo.list_available(
            today=local_today(),
            offset=request.offset,
            limit=request.limit,
            language=language,
            level=level,
        )
        return Page.build(items=items, total=total, request=request)

    @Logger.io
    async def list_all(
        self, *, page: Optional[int] = None, items_per_page: Optional[int] = None
    ) -> Page[Session]:
        request = PageRequest.of(page=page, items_per_page=items_per_page)
        items, total = await self.session_query_repo.list_all(
            offset=request.offset, limit=request.limit
        )
        return Page.build(items=items, total=total, request=request)

    @Logger.io
    async def list_upcoming(self, *, limit: int = DEFAULT_UPCOMING_LIMIT) -> list[Session]:
        limit = min(max(1, limit), settings.MAX_ITEMS_PER_PAGE)
        return await self.session_query_repo.list_upcoming(today=local_today(), limit=limit)

    @Logger.io
    async def count_available(self) -> int:
        return await self.session_query_repo.count_available(today=local_today())
