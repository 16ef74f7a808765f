from datetime import date, datetime, time, timezone
from typing import Optional
from zoneinfo import ZoneInfo

import attrs
from uuid_utils import UUID

from src.platform.exception.exceptions import DomainError, InvalidStateError
from src.platform.logging.loguru_io import Logger
from src.service.session_booking.domain.enum import Language, Level


MAX_TOTAL_SEATS = 100
DEFAULT_DURATION_MINUTES = 120

# Fields an administrator may edit directly; seat counters go through resize
EDITABLE_FIELDS = frozenset(
    {
        'language',
        'date',
        'time',
        'location',
        'description',
        'level',
        'duration_minutes',
        'price',
        'is_active',
    }
)


def normalize_time(value: str) -> str:
    """'9:05' -> '09:05' so that stored times sort lexically"""
    hours, minutes = value.strip().split(':')
    return f'{int(hours):02d}:{int(minutes):02d}'


@attrs.define
class Session:
    id: UUID
    language: Language
    date: date
    time: str
    location: str
    total_seats: int
    available_seats: int
    level: Optional[Level] = None
    description: Optional[str] = None
    duration_minutes: int = DEFAULT_DURATION_MINUTES
    price: float = 0.0
    is_active: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    @Logger.io
    def create(
        cls,
        *,
        id: UUID,
        language: Language,
        date: date,
        time: str,
        location: str,
        total_seats: int,
        level: Optional[Level] = None,
        description: Optional[str] = None,
        duration_minutes: int = DEFAULT_DURATION_MINUTES,
        price: float = 0.0,
    ) -> 'Session':
        if not 0 < total_seats <= MAX_TOTAL_SEATS:
            raise DomainError(f'total_seats must be between 1 and {MAX_TOTAL_SEATS}')

        now = datetime.now(timezone.utc)
        return cls(
            id=id,
            language=language,
            date=date,
            time=normalize_time(time),
            location=location.strip(),
            total_seats=total_seats,
            available_seats=total_seats,
            level=level,
            description=description,
            duration_minutes=duration_minutes,
            price=price,
            is_active=True,
            created_at=now,
            updated_at=now,
        )

    @property
    def booked_seats(self) -> int:
        return self.total_seats - self.available_seats

    @property
    def has_available_seats(self) -> bool:
        return self.available_seats > 0

    def starts_at(self, *, tz: ZoneInfo) -> datetime:
        hours, minutes = (int(part) for part in self.time.split(':'))
        return datetime.combine(self.date, time(hours, minutes), tzinfo=tz)

    def is_past(self, *, now: datetime, tz: ZoneInfo) -> bool:
        return self.starts_at(tz=tz) < now

    @Logger.io
    def update_details(self, **changes) -> 'Session':
        unknown = set(changes) - EDITABLE_FIELDS
        if unknown:
            raise DomainError(f'Fields cannot be edited: {", ".join(sorted(unknown))}')
        if 'time' in changes:
            changes['time'] = normalize_time(changes['time'])
        if 'location' in changes:
            changes['location'] = changes['location'].strip()
        return attrs.evolve(self, **changes, updated_at=datetime.now(timezone.utc))

    @Logger.io
    def resize(self, *, total_seats: int) -> 'Session':
        """
        Change capacity while keeping booked seats booked

        Raises:
            DomainError: total_seats outside 1..MAX_TOTAL_SEATS
            InvalidStateError: total_seats smaller than the seats already booked
        """
        if not 0 < total_seats <= MAX_TOTAL_SEATS:
            raise DomainError(f'total_seats must be between 1 and {MAX_TOTAL_SEATS}')
        if total_seats < self.booked_seats:
            raise InvalidStateError(
                f'Cannot reduce total seats to {total_seats}: {self.booked_seats} already booked'
            )
        return attrs.evolve(
            self,
            total_seats=total_seats,
            available_seats=total_seats - self.booked_seats,
            updated_at=datetime.now(timezone.utc),
        )
