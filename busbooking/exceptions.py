"""Domain errors raised by the booking core."""

from typing import Any, Dict, List, Optional


class DomainError(Exception):
    """Base domain error with customizable message and status code."""

    def __init__(self, message: str, status_code: int = 400):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class ValidationError(DomainError):
    """Malformed or out-of-range input (400), optionally with field-level detail."""

    def __init__(self, message: str, errors: Optional[List[Dict[str, Any]]] = None):
        self.errors = errors or []
        super().__init__(message, 400)


class NotFoundError(DomainError):
    """Unknown route, booking, bus or agent (404)."""

    def __init__(self, message: str):
        super().__init__(message, 404)


class InsufficientCapacityError(DomainError):
    """Requested seat count exceeds what the route has left (400)."""

    def __init__(self, message: str = "Not enough seats available"):
        super().__init__(message, 400)


class ForbiddenError(DomainError):
    def __init__(self, message: str = "Forbidden"):
        super().__init__(message, 403)


class AlreadyCancelledError(DomainError):
    def __init__(self, message: str = "Booking already cancelled"):
        super().__init__(message, 400)


class ConflictError(DomainError):
    """Unique constraint clash that the caller may retry (409)."""

    def __init__(self, message: str):
        super().__init__(message, 409)


class SeatAlreadyReservedError(ConflictError):
    def __init__(self, seat_numbers: List[str]):
        self.seat_numbers = list(seat_numbers)
        super().__init__(f"Seats already reserved: {', '.join(self.seat_numbers)}")
