from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from typing import List, Optional
from busbooking.models import Bus
from busbooking.buses.schemas import BusCreate, BusUpdate
from busbooking.exceptions import ConflictError, NotFoundError
from busbooking.logger_config import custom_logger

class BusService:
    @staticmethod
    def get_bus_by_id(db: Session, bus_id: int) -> Optional[Bus]:
        """Get bus by ID"""
        return db.query(Bus).filter(Bus.id == bus_id).first()

    @staticmethod
    def get_buses(db: Session, active_only: bool = True) -> List[Bus]:
        query = db.query(Bus)
        if active_only:
            query = query.filter(Bus.is_active == True)
        return query.order_by(Bus.id).all()

    @staticmethod
    def create_bus(db: Session, bus: BusCreate) -> Bus:
        """Register a new bus in the fleet"""
        db_bus = Bus(
            name=bus.name,
            type=bus.type.value,
            plate_number=bus.plate_number,
            total_seats=bus.total_seats,
            amenities=list(bus.amenities)
        )

        try:
            db.add(db_bus)
            db.commit()
            db.refresh(db_bus)
        except IntegrityError:
            db.rollback()
            raise ConflictError(f"Plate number {bus.plate_number} already registered")

        custom_logger.info(f"Bus {db_bus.id} ({db_bus.plate_number}) created with {db_bus.total_seats} seats")
        return db_bus

    @staticmethod
    def update_bus(db: Session, bus_id: int, bus_update: BusUpdate) -> Bus:
        db_bus = BusService.get_bus_by_id(db, bus_id)
        if not db_bus:
            raise NotFoundError("Bus not found")

        update_data = bus_update.model_dump(exclude_unset=True)
        if "type" in update_data and update_data["type"] is not None:
            update_data["type"] = update_data["type"].value

        for field, value in update_data.items():
            setattr(db_bus, field, value)

        try:
            db.commit()
            db.refresh(db_bus)
        except IntegrityError:
            db.rollback()
            raise ConflictError("Plate number already registered")
        return db_bus

    @staticmethod
    def delete_bus(db: Session, bus_id: int) -> Bus:
        """Soft delete: historical routes and bookings still reference the bus"""
        db_bus = BusService.get_bus_by_id(db, bus_id)
        if not db_bus:
            raise NotFoundError("Bus not found")

        db_bus.is_active = False
        db.commit()
        db.refresh(db_bus)
        custom_logger.info(f"Bus {bus_id} deactivated")
        return db_bus
