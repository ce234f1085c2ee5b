"""
Routes & Seat Inventory Module

Scheduled trips between two named points and the live seat inventory behind
them.

Key Components:
- inventory.py: InventoryStore with atomic seat reservation/release, seat
  identifier holds and route search
- service.py: admin route management (create, edit, soft delete, seat map)
- router.py: FastAPI endpoints for search and route management
- schemas.py: Pydantic models for request/response structures
"""

from .router import router
from .inventory import InventoryStore
from .service import RouteService
from .schemas import Route, RouteCreate, RouteUpdate, RouteSeatMap

__all__ = [
    "router",
    "InventoryStore",
    "RouteService",
    "Route",
    "RouteCreate",
    "RouteUpdate",
    "RouteSeatMap"
]
