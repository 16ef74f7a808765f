from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from src.platform.logging.loguru_io import Logger
from src.platform.types import UtilsUUID7
from src.service.session_booking.app.command.create_session_use_case import CreateSessionUseCase
from src.service.session_booking.app.command.delete_session_use_case import DeleteSessionUseCase
from src.service.session_booking.app.command.update_session_use_case import UpdateSessionUseCase
from src.service.session_booking.app.query.get_session_use_case import GetSessionUseCase
from src.service.session_booking.app.query.list_sessions_use_case import (
    DEFAULT_UPCOMING_LIMIT,
    ListSessionsUseCase,
)
from src.service.session_booking.domain.entity.user_entity import UserEntity
from src.service.session_booking.domain.enum import Language, Level
from src.service.session_booking.driving_adapter.http_controller.auth.role_auth import (
    require_admin,
)
from src.service.session_booking.driving_adapter.http_controller.schema.session_schema import (
    SessionCountResponse,
    SessionCreateRequest,
    SessionPageResponse,
    SessionResponse,
    SessionUpdateRequest,
)


router = APIRouter()


@router.get('')
@Logger.io
async def list_available_sessions(
    page: int = Query(1),
    items_per_page: Optional[int] = Query(None),
    language: Optional[Language] = Query(None),
    level: Optional[Level] = Query(None),
    use_case: ListSessionsUseCase = Depends(ListSessionsUseCase.depends),
) -> SessionPageResponse:
    result = await use_case.list_available(
        page=page, items_per_page=items_per_page, language=language, level=level
    )
    return SessionPageResponse.from_page(result)


@router.get('/all')
@Logger.io
async def list_all_sessions(
    page: int = Query(1),
    items_per_page: Optional[int] = Query(None),
    _admin: UserEntity = Depends(require_admin),
    use_case: ListSessionsUseCase = Depends(ListSessionsUseCase.depends),
) -> SessionPageResponse:
    result = await use_case.list_all(page=page, items_per_page=items_per_page)
    return SessionPageResponse.from_page(result)


@router.get('/upcoming')
@Logger.io
async def list_upcoming_sessions(
    limit: int = Query(DEFAULT_UPCOMING_LIMIT),
    use_case: ListSessionsUseCase = Depends(ListSessionsUseCase.depends),
) -> List[SessionResponse]:
    sessions = await use_case.list_upcoming(limit=limit)
    return [SessionResponse.from_entity(session) for session in sessions]


@router.get('/count')
@Logger.io
async def count_available_sessions(
    use_case: ListSessionsUseCase = Depends(ListSessionsUseCase.depends),
) -> SessionCountResponse:
    return SessionCountResponse(count=await use_case.count_available())


@router.get('/{session_id}')
@Logger.io
async def get_session(
    session_id: UtilsUUID7,
    use_case: GetSessionUseCase = Depends(GetSessionUseCase.depends),
) -> SessionResponse:
    return SessionResponse.from_entity(await use_case.get_session(session_id=session_id))


@router.post('', status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_session(
    request: SessionCreateRequest,
    _admin: UserEntity = Depends(require_admin),
    use_case: CreateSessionUseCase = Depends(CreateSessionUseCase.depends),
) -> SessionResponse:
    session = await use_case.create_session(**request.model_dump())
    return SessionResponse.from_entity(session)


@router.patch('/{session_id}')
@Logger.io
async def update_session(
    session_id: UtilsUUID7,
    request: SessionUpdateRequest,
    _admin: UserEntity = Depends(require_admin),
    use_case: UpdateSessionUseCase = Depends(UpdateSessionUseCase.depends),
) -> SessionResponse:
    session = await use_case.update_session(
        session_id=session_id, changes=request.model_dump(exclude_unset=True)
    )
    return SessionResponse.from_entity(session)


@router.delete('/{session_id}', status_code=status.HTTP_204_NO_CONTENT)
@Logger.io
async def delete_session(
    session_id: UtilsUUID7,
    _admin: UserEntity = Depends(require_admin),
    use_case: DeleteSessionUseCase = Depends(DeleteSessionUseCase.depends),
) -> None:
    await use_case.delete_session(session_id=session_id)
