from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session
from typing import List, Optional
from datetime import date
from busbooking.database import get_db
from busbooking.auth import Caller, require_admin
from busbooking.routes.schemas import Route, RouteCreate, RouteUpdate, RouteSeatMap
from busbooking.routes.service import RouteService
from busbooking.routes.inventory import InventoryStore

router = APIRouter()

@router.get("/search", response_model=List[Route])
def search_routes(
    source: Optional[str] = Query(None, description="Departure point"),
    destination: Optional[str] = Query(None, description="Arrival point"),
    travel_date: Optional[date] = Query(None, alias="date", description="Travel date (server timezone)"),
    db: Session = Depends(get_db)
):
    """Search active routes between two points, optionally on one day"""
    if not source or not destination:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Source and destination required"
        )

    return InventoryStore(db).search_routes(source, destination, travel_date)

@router.get("/", response_model=List[Route])
def get_routes(db: Session = Depends(get_db)):
    """Get all active routes"""
    return RouteService(db).get_routes()

@router.get("/{route_id}", response_model=Route)
def get_route(route_id: int, db: Session = Depends(get_db)):
    """Get route by ID"""
    route = RouteService(db).get_route(route_id)
    if not route:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Route not found"
        )
    return route

@router.get("/{route_id}/seats", response_model=RouteSeatMap)
def get_route_seats(route_id: int, db: Session = Depends(get_db)):
    """Get reserved seat identifiers for the seat picker"""
    return RouteService(db).get_seat_map(route_id)

@router.post("/", response_model=Route, status_code=status.HTTP_201_CREATED)
def create_route(
    route: RouteCreate,
    current_user: Caller = Depends(require_admin),
    db: Session = Depends(get_db)
):
    """Create route (admin only)"""
    return RouteService(db).create_route(route)

@router.patch("/{route_id}", response_model=Route)
def update_route(
    route_id: int,
    route_update: RouteUpdate,
    current_user: Caller = Depends(require_admin),
    db: Session = Depends(get_db)
):
    """Update route (admin only)"""
    return RouteService(db).update_route(route_id, route_update)

@router.delete("/{route_id}")
def delete_route(
    route_id: int,
    current_user: Caller = Depends(require_admin),
    db: Session = Depends(get_db)
):
    """Deactivate route (admin only)"""
    RouteService(db).delete_route(route_id)
    return {"message": "Route deleted successfully"}
