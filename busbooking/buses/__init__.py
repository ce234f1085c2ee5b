"""
Fleet management: admin-maintained buses with soft delete.
"""

from .router import router
from .service import BusService
from .schemas import Bus, BusCreate, BusUpdate, BusType

__all__ = ["router", "BusService", "Bus", "BusCreate", "BusUpdate", "BusType"]
