from typing import Any, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
import uuid_utils

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import InvalidStateError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.booking_metrics import metrics
from src.service.session_booking.app.command.create_session_use_case import parse_date
from src.service.session_booking.domain.entity.session_entity import EDITABLE_FIELDS, Session
from src.service.session_booking.domain.enum import Language, Level
from src.service.session_booking.domain.validators import (
    raise_if_invalid,
    validate_session_input,
)


class UpdateSessionUseCase:
    """
    Edit a session. Only the fields present in ``changes`` are touched.

    A new total_seats keeps the booked seats booked: available_seats moves by the
    same delta, and a total below the booked count is rejected rather than clamped.
    The database re-checks that condition in the UPDATE itself, so a booking that
    lands between the read and the write cannot be overbooked by the resize.
    """

    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow

    @classmethod
    @inject
    def depends(
        cls,
        uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work]),
    ) -> Self:
        return cls(uow=uow)

    @staticmethod
    def _coerce(changes: dict[str, Any]) -> dict[str, Any]:
        coerced = {key: value for key, value in changes.items() if key in EDITABLE_FIELDS}
        if 'language' in coerced:
            coerced['language'] = Language(coerced['language'])
        if 'level' in coerced:
            coerced['level'] = Level(coerced['level']) if coerced['level'] else None
        if 'date' in coerced:
            coerced['date'] = parse_date(coerced['date'])
        if 'price' in coerced:
            coerced['price'] = float(coerced['price'])
        # Required columns cannot be cleared
        return {
            key: value
            for key, value in coerced.items()
            if value is not None or key in ('level', 'description')
        }

    @Logger.io
    async def update_session(
        self, *, session_id: uuid_utils.UUID, changes: dict[str, Any]
    ) -> Session:
        raise_if_invalid(validate_session_input(changes, partial=True))

        async with self.uow:
            session = await self.uow.session_query_repo.get_by_id(session_id=session_id)
            if not session:
                raise NotFoundError('Session not found')

            updated = session.update_details(**self._coerce(changes))

            new_total = changes.get('total_seats')
            if new_total is not None and new_total != session.total_seats:
                # Raises InvalidStateError below the booked seats
                updated.resize(total_seats=new_total)
                if not await self.uow.session_command_repo.resize_total_seats(
                    session_id=session_id, total_seats=new_total
                ):
                    raise InvalidStateError(
                        f'Cannot reduce total seats to {new_total}: more seats are already booked'
                    )

            await self.uow.session_command_repo.update_details(session=updated)
            refreshed = await self.uow.session_query_repo.get_by_id(session_id=session_id)

            await self.uow.commit()

        if refreshed is None:
            raise NotFoundError('Session not found')
        metrics.update_available_seats(
            session_id=str(refreshed.id), available_seats=refreshed.available_seats
        )
        Logger.base.info(f'✏️ [UPDATE-SESSION] Session {session_id} updated')
        return refreshed
