"""Session Booking Domain Enums"""

from src.service.session_booking.domain.enum.language import Language
from src.service.session_booking.domain.enum.level import Level

__all__ = ['Language', 'Level']
