from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List
from busbooking.database import get_db
from busbooking.auth import Caller, get_current_user
from busbooking.bookings.schemas import Booking, BookingCreate, BookingCancellation, BookingStatus
from busbooking.bookings.booking_service import BookingEngine

router = APIRouter()

@router.post("/", response_model=Booking, status_code=status.HTTP_201_CREATED)
def create_booking(
    request: BookingCreate,
    current_user: Caller = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Book seats on a route"""
    return BookingEngine(db).create_booking(request, current_user)

@router.get("/my", response_model=List[Booking])
def get_my_bookings(
    current_user: Caller = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get the caller's bookings, most recent first"""
    return BookingEngine(db).get_user_bookings(current_user.user_id)

@router.get("/number/{booking_number}", response_model=Booking)
def get_booking_by_number(
    booking_number: str,
    current_user: Caller = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get booking by booking number"""
    return BookingEngine(db).get_booking_by_number(booking_number, current_user)

@router.get("/{booking_id}", response_model=Booking)
def get_booking(
    booking_id: int,
    current_user: Caller = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get booking details by ID"""
    return BookingEngine(db).get_booking(booking_id, current_user)

@router.patch("/{booking_id}/cancel", response_model=BookingCancellation)
def cancel_booking(
    booking_id: int,
    current_user: Caller = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Cancel a booking and release its seats"""
    booking = BookingEngine(db).cancel_booking(booking_id, current_user)
    return BookingCancellation(
        message="Booking cancelled successfully",
        booking_id=booking.id,
        status=BookingStatus(booking.status)
    )
