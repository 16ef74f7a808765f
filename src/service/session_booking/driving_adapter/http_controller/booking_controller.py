from typing import List, Optional

from fastapi import APIRouter, Body, Depends, Query, status
from opentelemetry import trace

from src.platform.logging.loguru_io import Logger
from src.platform.types import UtilsUUID7
from src.service.session_booking.app.command.cancel_booking_use_case import CancelBookingUseCase
from src.service.session_booking.app.command.create_booking_use_case import CreateBookingUseCase
from src.service.session_booking.app.query.get_booking_use_case import GetBookingUseCase
from src.service.session_booking.app.query.list_bookings_use_case import ListBookingsUseCase
from src.service.session_booking.domain.entity.user_entity import UserEntity
from src.service.session_booking.driving_adapter.http_controller.auth.role_auth import (
    get_current_user,
)
from src.service.session_booking.driving_adapter.http_controller.schema.booking_schema import (
    BookingCancelRequest,
    BookingCreateRequest,
    BookingPageResponse,
    BookingResponse,
)


router = APIRouter()
tracer = trace.get_tracer(__name__)


@router.post('', status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_booking(
    request: BookingCreateRequest,
    current_user: UserEntity = Depends(get_current_user),
    use_case: CreateBookingUseCase = Depends(CreateBookingUseCase.depends),
) -> BookingResponse:
    with tracer.start_as_current_span('controller.create_booking') as span:
        span.set_attribute('user_id', current_user.id or 0)
        booking = await use_case.create_booking(
            user_id=current_user.id or 0, session_id=request.session_id or ''
        )
        return BookingResponse.from_entity(booking)


@router.get('')
@Logger.io
async def list_my_bookings(
    page: int = Query(1),
    items_per_page: Optional[int] = Query(None),
    current_user: UserEntity = Depends(get_current_user),
    use_case: ListBookingsUseCase = Depends(ListBookingsUseCase.depends),
) -> BookingPageResponse:
    result = await use_case.list_bookings(
        user_id=current_user.id or 0, page=page, items_per_page=items_per_page
    )
    return BookingPageResponse.from_page(result)


@router.get('/active')
@Logger.io
async def list_my_active_bookings(
    current_user: UserEntity = Depends(get_current_user),
    use_case: ListBookingsUseCase = Depends(ListBookingsUseCase.depends),
) -> List[BookingResponse]:
    bookings = await use_case.list_active_bookings(user_id=current_user.id or 0)
    return [BookingResponse.from_entity(booking) for booking in bookings]


@router.get('/{booking_id}')
@Logger.io
async def get_booking(
    booking_id: UtilsUUID7,
    current_user: UserEntity = Depends(get_current_user),
    use_case: GetBookingUseCase = Depends(GetBookingUseCase.depends),
) -> BookingResponse:
    booking = await use_case.get_booking(user_id=current_user.id or 0, booking_id=booking_id)
    return BookingResponse.from_entity(booking)


@router.delete('/{booking_id}')
@Logger.io
async def cancel_booking(
    booking_id: UtilsUUID7,
    request: Optional[BookingCancelRequest] = Body(None),
    current_user: UserEntity = Depends(get_current_user),
    use_case: CancelBookingUseCase = Depends(CancelBookingUseCase.depends),
) -> BookingResponse:
    with tracer.start_as_current_span('controller.cancel_booking') as span:
        span.set_attribute('booking_id', str(booking_id))
        booking = await use_case.cancel_booking(
            user_id=current_user.id or 0,
            booking_id=booking_id,
            reason=request.reason if request else None,
        )
        return BookingResponse.from_entity(booking)
