from datetime import date
from unittest.mock import AsyncMock

import attrs
import pytest

from src.platform.config.core_setting import settings
from src.platform.exception.exceptions import (
    InvalidStateError,
    NotFoundError,
    ValidationFailedError,
)
from src.service.session_booking.app.command.create_session_use_case import CreateSessionUseCase
from src.service.session_booking.app.command.delete_session_use_case import DeleteSessionUseCase
from src.service.session_booking.app.command.update_session_use_case import UpdateSessionUseCase
from src.service.session_booking.app.query.get_session_use_case import GetSessionUseCase
from src.service.session_booking.app.query.list_sessions_use_case import (
    ListSessionsUseCase,
    local_today,
)
from src.service.session_booking.domain.entity.session_entity import Session
from src.service.session_booking.domain.enum import Language, Level
from test.service.session_booking.unit.fakes import FakeUnitOfWork, make_session


@pytest.mark.unit
class TestCreateSessionUseCase:
    async def test_creates_with_all_seats_available(self) -> None:
        repo = AsyncMock()

        async def _create(*, session: Session) -> Session:
            return session

        repo.create.side_effect = _create
        use_case = CreateSessionUseCase(session_command_repo=repo)

        session = await use_case.create_session(
            language='Anglais',
            date='2030-06-15',
            time='9:30',
            location='Salle 204',
            total_seats=20,
            level='B2',
            price=45,
        )

        assert session.language == Language.ENGLISH
        assert session.level == Level.B2
        assert session.date == date(2030, 6, 15)
        assert session.time == '09:30'
        assert session.available_seats == 20
        assert session.price == 45.0
        repo.create.assert_awaited_once()

    async def test_validation_errors_stop_before_the_repo(self) -> None:
        repo = AsyncMock()
        use_case = CreateSessionUseCase(session_command_repo=repo)

        with pytest.raises(ValidationFailedError) as exc_info:
            await use_case.create_session(
                language='Klingon', date='tomorrow', time='9h', location='x', total_seats=0
            )

        assert {error.field for error in exc_info.value.errors} == {
            'language',
            'date',
            'time',
            'location',
            'total_seats',
        }
        repo.create.assert_not_awaited()


@pytest.mark.unit
class TestUpdateSessionUseCase:
    async def test_grow_capacity(self, fake_uow: FakeUnitOfWork) -> None:
        session = make_session(total_seats=10, available_seats=6)
        resized = attrs.evolve(session, total_seats=15, available_seats=11)
        fake_uow.session_query_repo.get_by_id.side_effect = [session, resized]
        fake_uow.session_command_repo.resize_total_seats.return_value = True

        result = await UpdateSessionUseCase(uow=fake_uow).update_session(
            session_id=session.id, changes={'total_seats': 15, 'time': '10:00'}
        )

        assert result.available_seats == 11
        fake_uow.session_command_repo.resize_total_seats.assert_awaited_once_with(
            session_id=session.id, total_seats=15
        )
        updated = fake_uow.session_command_repo.update_details.await_args.kwargs['session']
        assert updated.time == '10:00'
        assert fake_uow.committed is True

    async def test_shrink_below_booked_is_rejected(self, fake_uow: FakeUnitOfWork) -> None:
        session = make_session(total_seats=10, available_seats=6)
        fake_uow.session_query_repo.get_by_id.return_value = session

        with pytest.raises(InvalidStateError):
            await UpdateSessionUseCase(uow=fake_uow).update_session(
                session_id=session.id, changes={'total_seats': 3}
            )

        fake_uow.session_command_repo.resize_total_seats.assert_not_awaited()
        assert fake_uow.committed is False

    async def test_guarded_resize_lost_to_a_booking(self, fake_uow: FakeUnitOfWork) -> None:
        session = make_session(total_seats=10, available_seats=6)
        fake_uow.session_query_repo.get_by_id.return_value = session
        fake_uow.session_command_repo.resize_total_seats.return_value = False

        with pytest.raises(InvalidStateError):
            await UpdateSessionUseCase(uow=fake_uow).update_session(
                session_id=session.id, changes={'total_seats': 4}
            )

        assert fake_uow.committed is False

    async def test_unknown_session(self, fake_uow: FakeUnitOfWork) -> None:
        fake_uow.session_query_repo.get_by_id.return_value = None

        with pytest.raises(NotFoundError):
            await UpdateSessionUseCase(uow=fake_uow).update_session(
                session_id=make_session().id, changes={'location': 'Salle 12'}
            )

    def test_coerce_drops_cleared_required_fields(self) -> None:
        coerced = UpdateSessionUseCase._coerce(
            {'language': 'Espagnol', 'location': None, 'level': None, 'total_seats': 12}
        )

        assert coerced == {'language': Language.SPANISH, 'level': None}


@pytest.mark.unit
class TestDeleteSessionUseCase:
    async def test_delete(self) -> None:
        repo = AsyncMock()
        repo.delete.return_value = True
        session = make_session()

        await DeleteSessionUseCase(session_command_repo=repo).delete_session(session_id=session.id)

        repo.delete.assert_awaited_once_with(session_id=session.id)

    async def test_unknown_session(self) -> None:
        repo = AsyncMock()
        repo.delete.return_value = False

        with pytest.raises(NotFoundError):
            await DeleteSessionUseCase(session_command_repo=repo).delete_session(
                session_id=make_session().id
            )


@pytest.mark.unit
class TestSessionQueries:
    async def test_get_unknown_session(self) -> None:
        repo = AsyncMock()
        repo.get_by_id.return_value = None

        with pytest.raises(NotFoundError):
            await GetSessionUseCase(session_query_repo=repo).get_session(
                session_id=make_session().id
            )

    async def test_list_available_pages_from_local_today(self) -> None:
        repo = AsyncMock()
        repo.list_available.return_value = ([make_session()], 11)

        page = await ListSessionsUseCase(session_query_repo=repo).list_available(
            page=2, items_per_page=5, language=Language.ENGLISH
        )

        assert page.total == 11
        assert page.pages == 3
        assert page.current_page == 2
        repo.list_available.assert_awaited_once_with(
            today=local_today(), offset=5, limit=5, language=Language.ENGLISH, level=None
        )

    @pytest.mark.parametrize(
        'requested, expected', [(0, 1), (3, 3), (10_000, settings.MAX_ITEMS_PER_PAGE)]
    )
    async def test_upcoming_limit_is_clamped(self, requested: int, expected: int) -> None:
        repo = AsyncMock()
        repo.list_upcoming.return_value = []

        await ListSessionsUseCase(session_query_repo=repo).list_upcoming(limit=requested)

        assert repo.list_upcoming.await_args.kwargs['limit'] == expected
