"""
Booking Module

The booking engine is the only writer of route seat counters, reserved seat
identifiers and agent earnings. It includes:

- Booking creation with capacity, seat-level and total-amount validation
- Commission attribution from the caller's own approved agent profile
- Cancellation that releases seats and (optionally) reverses commission
- Booking lookups for owners and administrators

Key Components:
- booking_service.py: BookingEngine and booking number generation
- router.py: FastAPI endpoints for booking management
- schemas.py: Pydantic models for booking data structures
"""

from .router import router
from .booking_service import BookingEngine, generate_booking_number
from .schemas import Booking, BookingCreate, BookingCancellation, BookingStatus, PaymentStatus

__all__ = [
    "router",
    "BookingEngine",
    "generate_booking_number",
    "Booking",
    "BookingCreate",
    "BookingCancellation",
    "BookingStatus",
    "PaymentStatus"
]
