"""Bookings domain - Pricing, booking creation and status changes"""

from .router import router

__all__ = ["router"]
