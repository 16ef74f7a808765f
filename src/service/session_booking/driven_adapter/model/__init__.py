"""
Database Models

Import all models here to ensure they are registered with SQLAlchemy
"""

from src.service.session_booking.driven_adapter.model.booking_model import BookingModel
from src.service.session_booking.driven_adapter.model.session_model import SessionModel
from src.service.session_booking.driven_adapter.model.user_model import UserModel

__all__ = [
    'BookingModel',
    'SessionModel',
    'UserModel',
]
