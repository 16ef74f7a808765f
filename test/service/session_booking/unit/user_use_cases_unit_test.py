from typing import Any
from unittest.mock import AsyncMock

import pytest

from src.platform.exception.exceptions import (
    AuthenticationError,
    ConflictError,
    DomainError,
    ForbiddenError,
    ValidationFailedError,
)
from src.service.session_booking.app.command.register_user_use_case import RegisterUserUseCase
from src.service.session_booking.app.command.update_profile_use_case import (
    UpdateProfileUseCase,
)
from src.service.session_booking.domain.entity.user_entity import UserEntity, UserRole
from src.service.session_booking.driven_adapter.security.bcrypt_password_hasher import (
    BcryptPasswordHasher,
)
from src.service.session_booking.driving_adapter.http_controller.auth.jwt_auth import JwtAuth


PASSWORD = 'Passw0rdOk'


@pytest.fixture
def password_hasher() -> BcryptPasswordHasher:
    return BcryptPasswordHasher()


@pytest.fixture
def user_command_repo() -> AsyncMock:
    repo = AsyncMock()

    async def _echo(*, user_entity: UserEntity) -> UserEntity:
        if user_entity.id is None:
            user_entity.id = 1
        return user_entity

    repo.create.side_effect = _echo
    repo.update.side_effect = _echo
    return repo


@pytest.fixture
def user_query_repo() -> AsyncMock:
    repo = AsyncMock()
    repo.exists_by_email.return_value = False
    return repo


@pytest.fixture
def existing_user(password_hasher: BcryptPasswordHasher) -> UserEntity:
    user = UserEntity(id=3, email='camille@example.com', name='Camille')
    user.set_password(PASSWORD, password_hasher)
    return user


def _registration(**overrides: Any) -> dict[str, Any]:
    return {
        'name': 'Camille',
        'email': ' Camille@Example.com ',
        'password': PASSWORD,
        'confirm_password': PASSWORD,
    } | overrides


@pytest.mark.unit
class TestRegisterUserUseCase:
    async def test_registers_plain_user_with_hashed_password(
        self,
        user_command_repo: AsyncMock,
        user_query_repo: AsyncMock,
        password_hasher: BcryptPasswordHasher,
    ) -> None:
        use_case = RegisterUserUseCase(
            user_command_repo=user_command_repo,
            user_query_repo=user_query_repo,
            password_hasher=password_hasher,
        )

        user = await use_case.register(**_registration())

        assert user.email == 'camille@example.com'
        assert user.role == UserRole.USER
        assert user.hashed_password != PASSWORD
        assert user.check_password(PASSWORD, password_hasher) is True

    async def test_email_taken(
        self,
        user_command_repo: AsyncMock,
        user_query_repo: AsyncMock,
        password_hasher: BcryptPasswordHasher,
    ) -> None:
        user_query_repo.exists_by_email.return_value = True
        use_case = RegisterUserUseCase(
            user_command_repo=user_command_repo,
            user_query_repo=user_query_repo,
            password_hasher=password_hasher,
        )

        with pytest.raises(ConflictError):
            await use_case.register(**_registration())

        user_command_repo.create.assert_not_awaited()

    async def test_invalid_input(
        self,
        user_command_repo: AsyncMock,
        user_query_repo: AsyncMock,
        password_hasher: BcryptPasswordHasher,
    ) -> None:
        use_case = RegisterUserUseCase(
            user_command_repo=user_command_repo,
            user_query_repo=user_query_repo,
            password_hasher=password_hasher,
        )

        with pytest.raises(ValidationFailedError):
            await use_case.register(**_registration(confirm_password='different'))


@pytest.mark.unit
class TestUpdateProfileUseCase:
    async def test_change_password_requires_current_one(
        self,
        user_command_repo: AsyncMock,
        user_query_repo: AsyncMock,
        password_hasher: BcryptPasswordHasher,
        existing_user: UserEntity,
    ) -> None:
        user_query_repo.get_by_id.return_value = existing_user
        use_case = UpdateProfileUseCase(
            user_command_repo=user_command_repo,
            user_query_repo=user_query_repo,
            password_hasher=password_hasher,
        )

        with pytest.raises(DomainError, match='Current password is incorrect'):
            await use_case.update_profile(
                user_id=3, password='NewPassw0rd', current_password='Wrong0ne'
            )

        updated = await use_case.update_profile(
            user_id=3, password='NewPassw0rd', current_password=PASSWORD
        )
        assert updated.check_password('NewPassw0rd', password_hasher) is True

    async def test_email_taken_by_someone_else(
        self,
        user_command_repo: AsyncMock,
        user_query_repo: AsyncMock,
        password_hasher: BcryptPasswordHasher,
        existing_user: UserEntity,
    ) -> None:
        user_query_repo.get_by_id.return_value = existing_user
        user_query_repo.exists_by_email.return_value = True
        use_case = UpdateProfileUseCase(
            user_command_repo=user_command_repo,
            user_query_repo=user_query_repo,
            password_hasher=password_hasher,
        )

        with pytest.raises(ConflictError):
            await use_case.update_profile(user_id=3, email='taken@example.com')

        user_command_repo.update.assert_not_awaited()


@pytest.mark.unit
class TestJwtAuth:
    def test_token_round_trip(self) -> None:
        jwt_auth = JwtAuth()
        user = UserEntity(id=5, email='a@b.fr', name='Admin', role=UserRole.ADMIN)

        current = jwt_auth.get_current_user_info_from_jwt(jwt_auth.create_jwt_token(user))

        assert current.id == 5
        assert current.is_admin is True

    def test_missing_or_tampered_token(self) -> None:
        jwt_auth = JwtAuth()

        with pytest.raises(AuthenticationError):
            jwt_auth.get_current_user_info_from_jwt(None)
        with pytest.raises(AuthenticationError):
            jwt_auth.get_current_user_info_from_jwt('not.a.jwt')

    def test_inactive_user_token(self) -> None:
        jwt_auth = JwtAuth()
        token = jwt_auth.create_jwt_token(
            UserEntity(id=5, email='a@b.fr', name='Gone', is_active=False)
        )

        with pytest.raises(ForbiddenError):
            jwt_auth.get_current_user_info_from_jwt(token)

    async def test_authenticate_wrong_password(
        self,
        user_query_repo: AsyncMock,
        password_hasher: BcryptPasswordHasher,
        existing_user: UserEntity,
    ) -> None:
        user_query_repo.get_by_email.return_value = existing_user

        with pytest.raises(AuthenticationError, match='Invalid email or password'):
            await JwtAuth().authenticate_user(
                user_query_repo=user_query_repo,
                password_hasher=password_hasher,
                email=existing_user.email,
                password='Wrong0ne',
            )
