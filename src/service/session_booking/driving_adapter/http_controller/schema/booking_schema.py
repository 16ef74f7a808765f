from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict

from src.platform.types import UtilsUUID7
from src.service.session_booking.app.dto import Page
from src.service.session_booking.domain.entity.booking_entity import Booking, BookingStatus
from src.service.session_booking.driving_adapter.http_controller.schema.session_schema import (
    SessionResponse,
)


class BookingCreateRequest(BaseModel):
    session_id: Optional[str] = None

    model_config = ConfigDict(
        json_schema_extra={'example': {'session_id': '01936d8f-5e73-7c4e-a9c5-123456789abc'}}
    )


class BookingCancelRequest(BaseModel):
    reason: Optional[str] = None

    model_config = ConfigDict(json_schema_extra={'example': {'reason': 'Schedule conflict'}})


class BookingResponse(BaseModel):
    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            'example': {
                'id': '01936d8f-6a10-7b2e-8c3d-abcdef012345',  # UUID7
                'session_id': '01936d8f-5e73-7c4e-a9c5-123456789abc',
                'user_id': 2,
                'status': 'confirmed',
                'cancellation_reason': None,
                'cancelled_at': None,
                'created_at': '2030-06-01T10:30:00Z',
                'updated_at': '2030-06-01T10:30:00Z',
                'session': None,
            }
        },
    )

    id: UtilsUUID7
    session_id: UtilsUUID7
    user_id: int
    status: BookingStatus
    cancellation_reason: Optional[str] = None
    cancelled_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    # None when the session has been deleted since
    session: Optional[SessionResponse] = None

    @classmethod
    def from_entity(cls, booking: Booking) -> 'BookingResponse':
        return cls.model_validate(booking, from_attributes=True)


class BookingPageResponse(BaseModel):
    items: List[BookingResponse]
    total: int
    pages: int
    current_page: int
    items_per_page: int

    @classmethod
    def from_page(cls, page: Page[Booking]) -> 'BookingPageResponse':
        return cls(
            items=[BookingResponse.from_entity(booking) for booking in page.items],
            total=page.total,
            pages=page.pages,
            current_page=page.current_page,
            items_per_page=page.items_per_page,
        )
