from typing import Optional, Self

import attrs
from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import ConflictError, DomainError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.session_booking.app.interface.i_password_hasher import IPasswordHasher
from src.service.session_booking.app.interface.i_user_command_repo import IUserCommandRepo
from src.service.session_booking.app.interface.i_user_query_repo import IUserQueryRepo
from src.service.session_booking.domain.entity.user_entity import UserEntity
from src.service.session_booking.domain.validators import (
    raise_if_invalid,
    validate_profile_input,
)


class UpdateProfileUseCase:
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
    async def update_profile(
        self,
        *,
        user_id: int,
        name: Optional[str] = None,
        email: Optional[str] = None,
        password: Optional[str] = None,
        current_password: Optional[str] = None,
    ) -> UserEntity:
        raise_if_invalid(
            validate_profile_input(
                {
                    'name': name,
                    'email': email,
                    'password': password,
                    'current_password': current_password,
                }
            )
        )

        user = await self.user_query_repo.get_by_id(user_id=user_id)
        if not user:
            raise NotFoundError('User not found')

        changes: dict = {}
        if name is not None:
            changes['name'] = name.strip()
        if email is not None:
            normalized_email = email.strip().lower()
            if normalized_email != user.email:
                if await self.user_query_repo.exists_by_email(email=normalized_email):
                    raise ConflictError('Email already registered')
                changes['email'] = normalized_email

        updated = attrs.evolve(user, **changes)
        if password is not None:
            if not user.check_password(current_password or '', self.password_hasher):
                raise DomainError('Current password is incorrect')
            updated.set_password(password, self.password_hasher)

        return await self.user_command_repo.update(user_entity=updated)
