"""
Seat inventory for routes.

The route's `available_seats` counter and its reserved seat identifiers are
only ever written through `reserve_seats`/`release_seats` and
`hold_seat_numbers`/`free_seat_numbers`. Each counter change is a single
conditional UPDATE so concurrent bookings cannot both pass a capacity check.
None of these methods commit; the caller owns the transaction.
"""

from datetime import date, datetime, time, timedelta, timezone
from typing import Iterable, List, Optional
from zoneinfo import ZoneInfo

from sqlalchemy import case, delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from busbooking.config import settings
from busbooking.exceptions import InsufficientCapacityError, NotFoundError, SeatAlreadyReservedError
from busbooking.logger_config import custom_logger
from busbooking.models import Bus, Route, RouteSeat


def reference_timezone() -> ZoneInfo:
    return ZoneInfo(settings.TIMEZONE)


def to_utc(value: datetime) -> datetime:
    """Normalise a timestamp to UTC; naive values are read in the reference timezone"""
    if value.tzinfo is None:
        value = value.replace(tzinfo=reference_timezone())
    return value.astimezone(timezone.utc)


def as_stored_utc(value: datetime) -> datetime:
    """Timestamps come back naive from backends without timezone support; they were written as UTC"""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def day_bounds(day: date):
    """UTC [start, end) of a calendar day in the reference timezone"""
    tz = reference_timezone()
    start = datetime.combine(day, time.min, tzinfo=tz)
    end = datetime.combine(day + timedelta(days=1), time.min, tzinfo=tz)
    return start.astimezone(timezone.utc), end.astimezone(timezone.utc)


class InventoryStore:
    """Durable record of routes and their seat availability"""

    def __init__(self, db: Session):
        self.db = db

    def get_route(self, route_id: int) -> Optional[Route]:
        return self.db.get(Route, route_id)

    def reserve_seats(self, route_id: int, count: int) -> None:
        """Atomically take `count` seats off the route or raise InsufficientCapacityError"""
        if count <= 0:
            raise ValueError("count must be positive")

        result = self.db.execute(
            update(Route)
            .where(
                Route.id == route_id,
                Route.is_active == True,
                Route.available_seats >= count,
            )
            .values(available_seats=Route.available_seats - count)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            custom_logger.warning(f"Route {route_id}: cannot reserve {count} seat(s)")
            raise InsufficientCapacityError()

    def release_seats(self, route_id: int, count: int) -> None:
        """Atomically give `count` seats back, never exceeding the bus capacity"""
        if count <= 0:
            raise ValueError("count must be positive")

        capacity = self.db.scalar(
            select(Bus.total_seats).join(Route, Route.bus_id == Bus.id).where(Route.id == route_id)
        )
        if capacity is None:
            raise NotFoundError("Route not found")

        restored = Route.available_seats + count
        self.db.execute(
            update(Route)
            .where(Route.id == route_id)
            .values(available_seats=case((restored > capacity, capacity), else_=restored))
            .execution_options(synchronize_session=False)
        )

    def hold_seat_numbers(self, route_id: int, booking_id: int, seat_numbers: Iterable[str]) -> None:
        """Claim specific seat identifiers for a booking"""
        seat_numbers = list(seat_numbers)
        taken = self.db.scalars(
            select(RouteSeat.seat_number).where(
                RouteSeat.route_id == route_id,
                RouteSeat.seat_number.in_(seat_numbers),
            )
        ).all()
        if taken:
            raise SeatAlreadyReservedError(sorted(taken))

        self.db.add_all(
            RouteSeat(route_id=route_id, booking_id=booking_id, seat_number=seat)
            for seat in seat_numbers
        )
        try:
            self.db.flush()
        except IntegrityError:
            # Lost a race with a concurrent booking on one of the seats
            raise SeatAlreadyReservedError(seat_numbers)

    def free_seat_numbers(self, booking_id: int) -> None:
        self.db.execute(
            delete(RouteSeat)
            .where(RouteSeat.booking_id == booking_id)
            .execution_options(synchronize_session=False)
        )

    def reserved_seat_numbers(self, route_id: int) -> List[str]:
        return list(self.db.scalars(
            select(RouteSeat.seat_number)
            .where(RouteSeat.route_id == route_id)
            .order_by(RouteSeat.id)
        ).all())

    def search_routes(self, source: str, destination: str, travel_date: Optional[date] = None) -> List[Route]:
        """Active routes between two points, in insertion order"""
        query = select(Route).where(
            Route.source == source,
            Route.destination == destination,
            Route.is_active == True,
        )

        if travel_date:
            start, end = day_bounds(travel_date)
            query = query.where(Route.departure_time >= start, Route.departure_time < end)

        return list(self.db.scalars(query.order_by(Route.id)).all())
