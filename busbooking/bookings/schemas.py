from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import List, Optional
from datetime import datetime
from decimal import Decimal
from enum import Enum
from busbooking.config import settings

class BookingStatus(str, Enum):
    """Booking lifecycle: pending -> confirmed -> cancelled | completed"""
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"

class PaymentStatus(str, Enum):
    """Payment lifecycle, independent of the booking status"""
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"
    REFUNDED = "refunded"

class BookingCreate(BaseModel):
    """Request to book seats on a route"""
    route_id: int
    passenger_name: str = Field(..., min_length=2, max_length=255)
    passenger_age: int = Field(..., ge=1, le=120)
    passenger_email: EmailStr
    passenger_phone: str = Field(..., min_length=10, max_length=20)
    seat_numbers: List[str]
    total_amount: Optional[Decimal] = Field(None, gt=0, max_digits=10, decimal_places=2)
    # Accepted for compatibility; commission is attributed from the caller's identity
    agent_id: Optional[int] = None

    @field_validator("seat_numbers")
    @classmethod
    def validate_seat_numbers(cls, v):
        seats = [seat.strip() for seat in v]
        if not seats:
            raise ValueError("At least one seat is required")
        if len(seats) > settings.MAX_SEATS_PER_BOOKING:
            raise ValueError(f"Maximum {settings.MAX_SEATS_PER_BOOKING} seats per booking")
        if any(not seat or len(seat) > 10 for seat in seats):
            raise ValueError("Seat identifiers must be 1-10 characters")
        if len(set(seats)) != len(seats):
            raise ValueError("Seat identifiers must be unique")
        return seats

class Booking(BaseModel):
    id: int
    booking_number: str
    route_id: int
    user_id: int
    agent_id: Optional[int] = None
    passenger_name: str
    passenger_age: int
    passenger_email: str
    passenger_phone: str
    seat_numbers: List[str]
    total_amount: Decimal
    commission_amount: Decimal
    status: BookingStatus
    payment_status: PaymentStatus
    booking_date: datetime

    class Config:
        from_attributes = True

class BookingCancellation(BaseModel):
    message: str
    booking_id: int
    status: BookingStatus
