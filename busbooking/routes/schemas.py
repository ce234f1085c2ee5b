from pydantic import BaseModel, Field, model_validator
from typing import List, Optional
from datetime import datetime
from decimal import Decimal
from busbooking.routes.inventory import to_utc

class RouteBase(BaseModel):
    source: str = Field(..., min_length=1, max_length=255)
    destination: str = Field(..., min_length=1, max_length=255)
    departure_time: datetime
    arrival_time: datetime
    price: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2)

class RouteCreate(RouteBase):
    """Request schema for scheduling a trip; seats default to the bus capacity"""
    bus_id: int
    available_seats: Optional[int] = Field(None, ge=0)

    @model_validator(mode="after")
    def check_schedule(self):
        # Mixed naive/aware input is compared in UTC
        if to_utc(self.arrival_time) <= to_utc(self.departure_time):
            raise ValueError("arrival_time must be after departure_time")
        return self

class RouteUpdate(BaseModel):
    """Editable route attributes; the seat counter is owned by the booking engine"""
    source: Optional[str] = Field(None, min_length=1, max_length=255)
    destination: Optional[str] = Field(None, min_length=1, max_length=255)
    departure_time: Optional[datetime] = None
    arrival_time: Optional[datetime] = None
    price: Optional[Decimal] = Field(None, gt=0, max_digits=10, decimal_places=2)
    is_active: Optional[bool] = None

class Route(RouteBase):
    id: int
    bus_id: int
    available_seats: int
    is_active: bool
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class RouteSeatMap(BaseModel):
    """Seat occupancy of a route for the seat picker"""
    route_id: int
    total_seats: int
    available_seats: int
    reserved_seat_numbers: List[str]
