from typing import AsyncContextManager, Callable

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.exception.exceptions import ConflictError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.session_booking.app.interface.i_user_command_repo import IUserCommandRepo
from src.service.session_booking.domain.entity.user_entity import UserEntity
from src.service.session_booking.driven_adapter.model.user_model import UserModel
from src.service.session_booking.driven_adapter.repo.user_query_repo_impl import (
    UserQueryRepoImpl,
)


class UserCommandRepoImpl(IUserCommandRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]):
        self.session_factory = session_factory

    @Logger.io
    async def create(self, *, user_entity: UserEntity) -> UserEntity:
        async with self.session_factory() as session:
            user_model = UserModel(
                email=user_entity.email,
                hashed_password=user_entity.hashed_password,
                name=user_entity.name,
                role=user_entity.role.value,
                is_active=user_entity.is_active,
            )

            session.add(user_model)
            try:
                await session.commit()
            except IntegrityError as e:
                # Unique email, checked again by the database for concurrent sign-ups
                raise ConflictError('Email already registered') from e
            await session.refresh(user_model)

            return UserQueryRepoImpl._model_to_entity(user_model)

    @Logger.io
    async def update(self, *, user_entity: UserEntity) -> UserEntity:
        async with self.session_factory() as session:
            result = await session.execute(select(UserModel).where(UserModel.id == user_entity.id))
            user_model = result.scalar_one_or_none()
            if not user_model:
                raise NotFoundError('User not found')

            user_model.email = user_entity.email
            user_model.name = user_entity.name
            user_model.hashed_password = user_entity.hashed_password
            user_model.is_active = user_entity.is_active

            try:
                await session.commit()
            except IntegrityError as e:
                raise ConflictError('Email already registered') from e
            await session.refresh(user_model)

            return UserQueryRepoImpl._model_to_entity(user_model)
