"""
Input validators

One pure function per input shape. Each returns the list of field errors
(empty when valid) so that every problem is reported at once; callers turn a
non-empty list into ValidationFailedError with ``raise_if_invalid``.
"""

from collections.abc import Mapping
from datetime import date
import re
from typing import Any

import attrs
from uuid_utils import UUID

from src.platform.exception.exceptions import ValidationFailedError
from src.service.session_booking.domain.entity.session_entity import MAX_TOTAL_SEATS
from src.service.session_booking.domain.enum import Language, Level


TIME_PATTERN = re.compile(r'^([0-1]?[0-9]|2[0-3]):[0-5][0-9]$')
EMAIL_PATTERN = re.compile(r'^[^@\s]+@[^@\s]+\.[^@\s]+$')

LOCATION_MIN_LENGTH, LOCATION_MAX_LENGTH = 3, 200
DESCRIPTION_MAX_LENGTH = 1000
CANCELLATION_REASON_MAX_LENGTH = 500
NAME_MIN_LENGTH, NAME_MAX_LENGTH = 2, 100
PASSWORD_MIN_LENGTH, PASSWORD_MAX_LENGTH = 8, 100


@attrs.frozen
class FieldError:
    field: str
    message: str


def raise_if_invalid(errors: list[FieldError]) -> None:
    if errors:
        raise ValidationFailedError(errors)


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _check_length(
    errors: list[FieldError], field: str, value: str, *, min_length: int = 0, max_length: int
) -> None:
    if len(value) < min_length:
        errors.append(FieldError(field, f'must be at least {min_length} characters'))
    elif len(value) > max_length:
        errors.append(FieldError(field, f'must be at most {max_length} characters'))


def _check_enum(errors: list[FieldError], field: str, value: Any, enum_cls: type) -> None:
    allowed = [member.value for member in enum_cls]
    if value not in allowed:
        errors.append(FieldError(field, f'must be one of: {", ".join(allowed)}'))


def _check_date(errors: list[FieldError], field: str, value: Any) -> None:
    if isinstance(value, date):
        return
    try:
        date.fromisoformat(str(value))
    except ValueError:
        errors.append(FieldError(field, 'must be a date formatted YYYY-MM-DD'))


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def validate_session_input(data: Mapping[str, Any], *, partial: bool = False) -> list[FieldError]:
    """
    Session create (partial=False) or edit (partial=True) payload.

    On edit only the fields present are checked; a missing required field is
    an error only on create.
    """
    errors: list[FieldError] = []

    for field in ('language', 'date', 'time', 'location', 'total_seats'):
        if not partial and _is_blank(data.get(field)):
            errors.append(FieldError(field, 'is required'))

    if not _is_blank(data.get('language')):
        _check_enum(errors, 'language', data['language'], Language)

    if not _is_blank(data.get('date')):
        _check_date(errors, 'date', data['date'])

    if not _is_blank(data.get('time')) and not TIME_PATTERN.match(str(data['time'])):
        errors.append(FieldError('time', 'must be formatted HH:MM (24h)'))

    if not _is_blank(data.get('location')):
        _check_length(
            errors,
            'location',
            str(data['location']).strip(),
            min_length=LOCATION_MIN_LENGTH,
            max_length=LOCATION_MAX_LENGTH,
        )

    if data.get('description'):
        _check_length(
            errors, 'description', str(data['description']), max_length=DESCRIPTION_MAX_LENGTH
        )

    if data.get('total_seats') is not None:
        total_seats = data['total_seats']
        if not isinstance(total_seats, int) or isinstance(total_seats, bool):
            errors.append(FieldError('total_seats', 'must be an integer'))
        elif not 0 < total_seats <= MAX_TOTAL_SEATS:
            errors.append(FieldError('total_seats', f'must be between 1 and {MAX_TOTAL_SEATS}'))

    if data.get('level') is not None:
        _check_enum(errors, 'level', data['level'], Level)

    if data.get('duration_minutes') is not None:
        duration = data['duration_minutes']
        if not isinstance(duration, int) or isinstance(duration, bool) or duration <= 0:
            errors.append(FieldError('duration_minutes', 'must be a positive integer'))

    if data.get('price') is not None:
        price = data['price']
        if not _is_number(price) or price < 0:
            errors.append(FieldError('price', 'must be a number greater than or equal to 0'))

    if 'is_active' in data and data['is_active'] is not None:
        if not isinstance(data['is_active'], bool):
            errors.append(FieldError('is_active', 'must be a boolean'))

    return errors


def validate_booking_input(data: Mapping[str, Any]) -> list[FieldError]:
    session_id = data.get('session_id')
    if _is_blank(session_id):
        return [FieldError('session_id', 'is required')]
    try:
        UUID(str(session_id))
    except (ValueError, TypeError):
        return [FieldError('session_id', 'must be a valid session id')]
    return []


def validate_cancellation_input(data: Mapping[str, Any]) -> list[FieldError]:
    reason = data.get('reason')
    errors: list[FieldError] = []
    if reason is not None:
        _check_length(errors, 'reason', str(reason), max_length=CANCELLATION_REASON_MAX_LENGTH)
    return errors


def _check_password(errors: list[FieldError], field: str, password: str) -> None:
    if not PASSWORD_MIN_LENGTH <= len(password) <= PASSWORD_MAX_LENGTH:
        errors.append(
            FieldError(
                field,
                f'must be between {PASSWORD_MIN_LENGTH} and {PASSWORD_MAX_LENGTH} characters',
            )
        )
    if not (
        re.search(r'[a-z]', password)
        and re.search(r'[A-Z]', password)
        and re.search(r'\d', password)
    ):
        errors.append(
            FieldError(field, 'must contain a lowercase letter, an uppercase letter and a digit')
        )


def validate_registration_input(data: Mapping[str, Any]) -> list[FieldError]:
    errors: list[FieldError] = []

    name = data.get('name')
    if _is_blank(name):
        errors.append(FieldError('name', 'is required'))
    else:
        _check_length(
            errors, 'name', str(name).strip(), min_length=NAME_MIN_LENGTH, max_length=NAME_MAX_LENGTH
        )

    email = data.get('email')
    if _is_blank(email):
        errors.append(FieldError('email', 'is required'))
    elif not EMAIL_PATTERN.match(str(email).strip()):
        errors.append(FieldError('email', 'must be a valid email address'))

    password = data.get('password')
    if _is_blank(password):
        errors.append(FieldError('password', 'is required'))
    else:
        _check_password(errors, 'password', str(password))

    if data.get('confirm_password') != password:
        errors.append(FieldError('confirm_password', 'does not match password'))

    return errors


def validate_profile_input(data: Mapping[str, Any]) -> list[FieldError]:
    errors: list[FieldError] = []

    if data.get('name') is not None:
        _check_length(
            errors,
            'name',
            str(data['name']).strip(),
            min_length=NAME_MIN_LENGTH,
            max_length=NAME_MAX_LENGTH,
        )

    if data.get('email') is not None and not EMAIL_PATTERN.match(str(data['email']).strip()):
        errors.append(FieldError('email', 'must be a valid email address'))

    if data.get('password') is not None:
        _check_password(errors, 'password', str(data['password']))
        if _is_blank(data.get('current_password')):
            errors.append(FieldError('current_password', 'is required to change the password'))

    return errors
