from datetime import date
from typing import Any, Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
import uuid_utils

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.booking_metrics import metrics
from src.service.session_booking.app.interface.i_session_command_repo import (
    ISessionCommandRepo,
)
from src.service.session_booking.domain.entity.session_entity import (
    DEFAULT_DURATION_MINUTES,
    Session,
)
from src.service.session_booking.domain.enum import Language, Level
from src.service.session_booking.domain.validators import (
    raise_if_invalid,
    validate_session_input,
)


def parse_date(value: Any) -> date:
    return value if isinstance(value, date) else date.fromisoformat(str(value))


class CreateSessionUseCase:
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
    async def create_session(
        self,
        *,
        language: Any,
        date: Any,
        time: Any,
        location: Any,
        total_seats: Any,
        level: Any = None,
        description: Optional[str] = None,
        duration_minutes: Any = None,
        price: Any = None,
    ) -> Session:
        raise_if_invalid(
            validate_session_input(
                {
                    'language': language,
                    'date': date,
                    'time': time,
                    'location': location,
                    'total_seats': total_seats,
                    'level': level,
                    'description': description,
                    'duration_minutes': duration_minutes,
                    'price': price,
                }
            )
        )

        session = Session.create(
            id=uuid_utils.uuid7(),
            language=Language(language),
            date=parse_date(date),
            time=str(time),
            location=str(location),
            total_seats=total_seats,
            level=Level(level) if level else None,
            description=description or None,
            duration_minutes=(
                duration_minutes if duration_minutes is not None else DEFAULT_DURATION_MINUTES
            ),
            price=float(price) if price is not None else 0.0,
        )
        created = await self.session_command_repo.create(session=session)

        metrics.update_available_seats(
            session_id=str(created.id), available_seats=created.available_seats
        )
        Logger.base.info(
            f'🗓️ [CREATE-SESSION] {created.language} on {created.date} {created.time} '
            f'with {created.total_seats} seats'
        )
        return created
