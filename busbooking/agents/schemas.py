from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime
from decimal import Decimal
from busbooking.config import settings
from busbooking.bookings.schemas import Booking

class AgentCreate(BaseModel):
    """Request to register the caller as a travel agent"""
    commission_rate: Decimal = Field(
        default=settings.DEFAULT_COMMISSION_RATE, ge=0, le=100, max_digits=5, decimal_places=2
    )

class CommissionUpdate(BaseModel):
    commission_rate: Decimal = Field(..., ge=0, le=100)

class Agent(BaseModel):
    id: int
    user_id: int
    commission_rate: Decimal
    total_earnings: Decimal
    total_bookings: int
    is_approved: bool
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class AgentStats(BaseModel):
    total_bookings: int
    total_earnings: Decimal
    commission_rate: Decimal
    recent_bookings: List[Booking]

class AgentDashboard(BaseModel):
    agent: Agent
    bookings: List[Booking]
    stats: AgentStats
