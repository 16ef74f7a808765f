from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, Response, status

from src.platform.config.core_setting import settings
from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.session_booking.app.command.register_user_use_case import RegisterUserUseCase
from src.service.session_booking.app.command.update_profile_use_case import (
    UpdateProfileUseCase,
)
from src.service.session_booking.app.interface.i_password_hasher import IPasswordHasher
from src.service.session_booking.app.interface.i_user_query_repo import IUserQueryRepo
from src.service.session_booking.app.query.get_user_use_case import GetUserUseCase
from src.service.session_booking.domain.entity.user_entity import UserEntity
from src.service.session_booking.driving_adapter.http_controller.auth.jwt_auth import JwtAuth
from src.service.session_booking.driving_adapter.http_controller.auth.role_auth import (
    get_current_user,
)
from src.service.session_booking.driving_adapter.http_controller.schema.user_schema import (
    CreateUserRequest,
    LoginRequest,
    UpdateProfileRequest,
    UserResponse,
)


# === API Router ===

router = APIRouter()


def _secret(value) -> str | None:
    return value.get_secret_value() if value is not None else None


def _set_auth_cookie(response: Response, jwt_auth: JwtAuth, user_entity: UserEntity) -> None:
    response.set_cookie(
        key=settings.AUTH_COOKIE_NAME,
        value=jwt_auth.create_jwt_token(user_entity),
        max_age=jwt_auth.max_age_seconds,
        httponly=True,
        samesite='lax',
        secure=settings.AUTH_COOKIE_SECURE,
    )


@router.post('', status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_user(
    request: CreateUserRequest,
    use_case: RegisterUserUseCase = Depends(RegisterUserUseCase.depends),
) -> UserResponse:
    user_entity = await use_case.register(
        name=request.name,
        email=request.email,
        password=_secret(request.password),
        confirm_password=_secret(request.confirm_password),
    )
    return UserResponse.from_entity(user_entity)


@router.post('/login')
@Logger.io
@inject
async def login(
    response: Response,
    request: LoginRequest,
    user_query_repo: IUserQueryRepo = Depends(Provide[Container.user_query_repo]),
    password_hasher: IPasswordHasher = Depends(Provide[Container.password_hasher]),
    jwt_auth: JwtAuth = Depends(Provide[Container.jwt_auth]),
) -> UserResponse:
    user_entity = await jwt_auth.authenticate_user(
        user_query_repo=user_query_repo,
        password_hasher=password_hasher,
        email=request.email.strip().lower(),
        password=request.password.get_secret_value(),
    )
    _set_auth_cookie(response, jwt_auth, user_entity)
    return UserResponse.from_entity(user_entity)


@router.post('/logout', status_code=status.HTTP_204_NO_CONTENT)
@Logger.io
async def logout(response: Response) -> None:
    response.delete_cookie(key=settings.AUTH_COOKIE_NAME)


@router.get('/me')
@Logger.io
async def get_me(
    current_user: UserEntity = Depends(get_current_user),
    use_case: GetUserUseCase = Depends(GetUserUseCase.depends),
) -> UserResponse:
    return UserResponse.from_entity(await use_case.get_user(user_id=current_user.id or 0))


@router.patch('/me')
@Logger.io
@inject
async def update_me(
    response: Response,
    request: UpdateProfileRequest,
    current_user: UserEntity = Depends(get_current_user),
    use_case: UpdateProfileUseCase = Depends(UpdateProfileUseCase.depends),
    jwt_auth: JwtAuth = Depends(Provide[Container.jwt_auth]),
) -> UserResponse:
    user_entity = await use_case.update_profile(
        user_id=current_user.id or 0,
        name=request.name,
        email=request.email,
        password=_secret(request.password),
        current_password=_secret(request.current_password),
    )
    # Token claims carry name and email
    _set_auth_cookie(response, jwt_auth, user_entity)
    return UserResponse.from_entity(user_entity)
