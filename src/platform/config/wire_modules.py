"""
Wire Modules Configuration

Defines the modules that need dependency injection wiring.
Shared between production and test environments.
"""

from types import ModuleType

from src.service.session_booking.app.command import (
    cancel_booking_use_case,
    create_booking_use_case,
    create_session_use_case,
    delete_session_use_case,
    register_user_use_case,
    update_profile_use_case,
    update_session_use_case,
)
from src.service.session_booking.app.query import (
    get_booking_use_case,
    get_session_use_case,
    get_user_use_case,
    list_bookings_use_case,
    list_sessions_use_case,
)
from src.service.session_booking.driving_adapter.http_controller import user_controller
from src.service.session_booking.driving_adapter.http_controller.auth import role_auth


WIRE_MODULES: list[ModuleType] = [
    create_booking_use_case,
    cancel_booking_use_case,
    create_session_use_case,
    update_session_use_case,
    delete_session_use_case,
    register_user_use_case,
    update_profile_use_case,
    get_booking_use_case,
    list_bookings_use_case,
    get_session_use_case,
    list_sessions_use_case,
    get_user_use_case,
    role_auth,
    user_controller,
]
