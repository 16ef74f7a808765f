"""Application layer DTOs"""

from src.service.session_booking.app.dto.page import Page, PageRequest

__all__ = ['Page', 'PageRequest']
