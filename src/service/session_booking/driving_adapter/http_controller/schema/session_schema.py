from datetime import date, datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict

from src.platform.types import UtilsUUID7
from src.service.session_booking.app.dto import Page
from src.service.session_booking.domain.entity.session_entity import Session
from src.service.session_booking.domain.enum import Language, Level


# Request fields stay loosely typed: the domain validators report every field error at once


class SessionCreateRequest(BaseModel):
    language: Optional[str] = None
    date: Optional[str] = None
    time: Optional[str] = None
    location: Optional[str] = None
    total_seats: Any = None
    level: Optional[str] = None
    description: Optional[str] = None
    duration_minutes: Any = None
    price: Any = None

    model_config = ConfigDict(
        json_schema_extra={
            'example': {
                'language': 'Anglais',
                'date': '2030-06-15',
                'time': '09:30',
                'location': 'Salle 204, 12 rue des Ecoles',
                'total_seats': 20,
                'level': 'B2',
                'description': 'TOEIC Listening & Reading',
                'duration_minutes': 120,
                'price': 45.0,
            }
        }
    )


class SessionUpdateRequest(SessionCreateRequest):
    is_active: Any = None

    model_config = ConfigDict(
        json_schema_extra={'example': {'total_seats': 25, 'time': '10:00', 'is_active': True}}
    )


class SessionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UtilsUUID7  # UUID7
    language: Language
    level: Optional[Level] = None
    date: date
    time: str
    location: str
    description: Optional[str] = None
    total_seats: int
    available_seats: int
    duration_minutes: int
    price: float
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, session: Session) -> 'SessionResponse':
        return cls.model_validate(session, from_attributes=True)


class SessionPageResponse(BaseModel):
    items: List[SessionResponse]
    total: int
    pages: int
    current_page: int
    items_per_page: int

    @classmethod
    def from_page(cls, page: Page[Session]) -> 'SessionPageResponse':
        return cls(
            items=[SessionResponse.from_entity(session) for session in page.items],
            total=page.total,
            pages=page.pages,
            current_page=page.current_page,
            items_per_page=page.items_per_page,
        )


class SessionCountResponse(BaseModel):
    count: int
