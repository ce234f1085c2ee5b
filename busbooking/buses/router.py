from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List
from busbooking.database import get_db
from busbooking.auth import Caller, require_admin
from busbooking.buses.schemas import Bus, BusCreate, BusUpdate
from busbooking.buses.service import BusService

router = APIRouter()

@router.get("/", response_model=List[Bus])
def get_buses(db: Session = Depends(get_db)):
    """Get all active buses"""
    return BusService.get_buses(db)

@router.get("/{bus_id}", response_model=Bus)
def get_bus(bus_id: int, db: Session = Depends(get_db)):
    """Get bus by ID"""
    bus = BusService.get_bus_by_id(db, bus_id)
    if not bus:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Bus not found"
        )
    return bus

@router.post("/", response_model=Bus, status_code=status.HTTP_201_CREATED)
def create_bus(
    bus: BusCreate,
    current_user: Caller = Depends(require_admin),
    db: Session = Depends(get_db)
):
    """Create bus (admin only)"""
    return BusService.create_bus(db, bus)

@router.patch("/{bus_id}", response_model=Bus)
def update_bus(
    bus_id: int,
    bus_update: BusUpdate,
    current_user: Caller = Depends(require_admin),
    db: Session = Depends(get_db)
):
    """Update bus (admin only)"""
    return BusService.update_bus(db, bus_id, bus_update)

@router.delete("/{bus_id}")
def delete_bus(
    bus_id: int,
    current_user: Caller = Depends(require_admin),
    db: Session = Depends(get_db)
):
    """Deactivate bus (admin only)"""
    BusService.delete_bus(db, bus_id)
    return {"message": "Bus deleted successfully"}
