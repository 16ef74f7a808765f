from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import ConflictError
from src.platform.logging.loguru_io import Logger
from src.service.session_booking.app.interface.i_password_hasher import IPasswordHasher
from src.service.session_booking.app.interface.i_user_command_repo import IUserCommandRepo
from src.service.session_booking.app.interface.i_user_query_repo import IUserQueryRepo
from src.service.session_booking.domain.entity.user_entity import UserEntity, UserRole
from src.service.session_booking.domain.validators import (
    raise_if_invalid,
    validate_registration_input,
)


class RegisterUserUseCase:
    """Self sign-up always creates a plain user; administrators are seeded"""

    def __init__(
        self,
        *,
        user_command_repo: IUserCommandRepo,
        user_query_repo: IUserQueryRepo,
        password_hasher: IPasswordHasher,
    ) -> None:
        self.user_command_repo = user_command_repo
        self.user_query_repo = user_query_repo
        self.password_hasher = password_hasher

    @classmethod
    @inject
    def depends(
        cls,
        user_command_repo: IUserCommandRepo = Depends(Provide[Container.user_command_repo]),
        user_query_repo: IUserQueryRepo = Depends(Provide[Container.user_query_repo]),
        password_hasher: IPasswordHasher = Depends(Provide[Container.password_hasher]),
    ) -> Self:
        return cls(
            user_command_repo=user_command_repo,
            user_query_repo=user_query_repo,
            password_hasher=password_hasher,
        )

    @Logger.io
    async def register(
        self,
        *,
        name: Optional[str],
        email: Optional[str],
        password: Optional[str],
        confirm_password: Optional[str],
    ) -> UserEntity:
        raise_if_invalid(
            validate_registration_input(
                {
                    'name': name,
                    'email': email,
                    'password': password,
                    'confirm_password': confirm_password,
                }
            )
        )
        assert name is not None and email is not None and password is not None

        normalized_email = email.strip().lower()
        if await self.user_query_repo.exists_by_email(email=normalized_email):
            raise ConflictError('Email already registered')

        user_entity = UserEntity(
            email=normalized_email, name=name.strip(), role=UserRole.USER, is_active=True
        )
        user_entity.set_password(password, self.password_hasher)

        created = await self.user_command_repo.create(user_entity=user_entity)
        Logger.base.info(f'👤 [REGISTER] User {created.id} registered')
        return created
