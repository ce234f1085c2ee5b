from sqlalchemy.orm import Session
from typing import List, Optional
from busbooking.models import Bus, Route
from busbooking.routes.schemas import RouteCreate, RouteUpdate, RouteSeatMap
from busbooking.routes.inventory import InventoryStore, as_stored_utc, to_utc
from busbooking.exceptions import NotFoundError, ValidationError
from busbooking.logger_config import custom_logger

class RouteService:
    """Admin-facing route management; seat counters are left to InventoryStore"""

    def __init__(self, db: Session):
        self.db = db
        self.inventory = InventoryStore(db)

    def get_route(self, route_id: int) -> Optional[Route]:
        return self.inventory.get_route(route_id)

    def get_routes(self) -> List[Route]:
        """Get all active routes"""
        return self.db.query(Route).filter(Route.is_active == True).order_by(Route.id).all()

    def get_seat_map(self, route_id: int) -> RouteSeatMap:
        route = self.inventory.get_route(route_id)
        if not route or not route.is_active:
            raise NotFoundError("Route not found")

        return RouteSeatMap(
            route_id=route.id,
            total_seats=route.bus.total_seats,
            available_seats=route.available_seats,
            reserved_seat_numbers=self.inventory.reserved_seat_numbers(route.id)
        )

    def create_route(self, route: RouteCreate) -> Route:
        """Schedule a trip on an active bus"""
        bus = self.db.get(Bus, route.bus_id)
        if not bus or not bus.is_active:
            raise NotFoundError("Bus not found")

        available_seats = bus.total_seats if route.available_seats is None else route.available_seats
        if available_seats > bus.total_seats:
            raise ValidationError(
                "available_seats cannot exceed the bus capacity",
                errors=[{
                    "loc": ["body", "available_seats"],
                    "msg": f"must be between 0 and {bus.total_seats}",
                    "type": "value_error"
                }]
            )

        db_route = Route(
            bus_id=bus.id,
            source=route.source,
            destination=route.destination,
            departure_time=to_utc(route.departure_time),
            arrival_time=to_utc(route.arrival_time),
            price=route.price,
            available_seats=available_seats
        )
        self.db.add(db_route)
        self.db.commit()
        self.db.refresh(db_route)

        custom_logger.info(
            f"Route {db_route.id} {db_route.source} -> {db_route.destination} "
            f"scheduled on bus {bus.id} with {available_seats} seats"
        )
        return db_route

    def update_route(self, route_id: int, route_update: RouteUpdate) -> Route:
        db_route = self.inventory.get_route(route_id)
        if not db_route:
            raise NotFoundError("Route not found")

        update_data = route_update.model_dump(exclude_unset=True)
        for field in ("departure_time", "arrival_time"):
            if update_data.get(field) is not None:
                update_data[field] = to_utc(update_data[field])

        departure = update_data.get("departure_time") or as_stored_utc(db_route.departure_time)
        arrival = update_data.get("arrival_time") or as_stored_utc(db_route.arrival_time)
        if arrival <= departure:
            raise ValidationError("arrival_time must be after departure_time")

        for field, value in update_data.items():
            if value is not None:
                setattr(db_route, field, value)

        self.db.commit()
        self.db.refresh(db_route)
        return db_route

    def delete_route(self, route_id: int) -> Route:
        """Soft delete: bookings keep referencing the route"""
        db_route = self.inventory.get_route(route_id)
        if not db_route:
            raise NotFoundError("Route not found")

        db_route.is_active = False
        self.db.commit()
        self.db.refresh(db_route)
        custom_logger.info(f"Route {route_id} deactivated")
        return db_route
