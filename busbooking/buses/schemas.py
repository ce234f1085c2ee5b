from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime
from decimal import Decimal
from enum import Enum

class BusType(str, Enum):
    """Bus type enumeration"""
    AC_SLEEPER = "AC Sleeper"
    AC_SEATER = "AC Seater"
    NON_AC_SEATER = "Non-AC Seater"
    LUXURY_VOLVO = "Luxury Volvo"

class BusBase(BaseModel):
    name: str = Field(..., min_length=2, max_length=255)
    type: BusType
    amenities: List[str] = Field(default_factory=list)

class BusCreate(BusBase):
    plate_number: str = Field(..., min_length=5, max_length=50)
    total_seats: int = Field(..., ge=10, le=60)

class BusUpdate(BaseModel):
    """Seat capacity is fixed once a bus exists; routes derive their counters from it"""
    name: Optional[str] = Field(None, min_length=2, max_length=255)
    type: Optional[BusType] = None
    plate_number: Optional[str] = Field(None, min_length=5, max_length=50)
    amenities: Optional[List[str]] = None
    rating: Optional[Decimal] = Field(None, ge=0, le=5, decimal_places=2)
    is_active: Optional[bool] = None

class Bus(BusBase):
    id: int
    plate_number: str
    total_seats: int
    rating: Optional[Decimal] = None
    is_active: bool
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
