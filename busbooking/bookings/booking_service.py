from typing import Any, Callable, Dict, List, Optional, Union
from decimal import Decimal
import secrets
import time

import pydantic
from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from busbooking.config import settings
from busbooking.models import Agent, Booking
from busbooking.auth.schemas import Caller
from busbooking.bookings.schemas import BookingCreate, BookingStatus, PaymentStatus
from busbooking.routes.inventory import InventoryStore
from busbooking.agents.ledger import AgentLedger, ZERO, to_money
from busbooking.exceptions import (
    AlreadyCancelledError, ConflictError, ForbiddenError,
    InsufficientCapacityError, NotFoundError, ValidationError
)
from busbooking.logger_config import custom_logger


def generate_booking_number(prefix: Optional[str] = None) -> str:
    """Human-referenceable booking number: prefix, epoch millis, random suffix"""
    prefix = prefix or settings.BOOKING_NUMBER_PREFIX
    return f"{prefix}-{int(time.time() * 1000)}-{secrets.token_hex(5).upper()}"


class BookingNumberCollision(Exception):
    pass


class BookingEngine:
    """Creates and cancels bookings while keeping route inventory, booking
    records and the agent ledger consistent.

    Every write path runs as one transaction on the injected session: it is
    committed once at the end and rolled back on any failure, so callers never
    observe a booking without its seats (or the reverse).
    """

    def __init__(
        self,
        db: Session,
        booking_number_generator: Callable[[], str] = generate_booking_number,
        reverse_commission_on_cancel: Optional[bool] = None
    ):
        self.db = db
        self.inventory = InventoryStore(db)
        self.ledger = AgentLedger(db)
        self._generate_booking_number = booking_number_generator
        if reverse_commission_on_cancel is None:
            reverse_commission_on_cancel = settings.REVERSE_COMMISSION_ON_CANCEL
        self.reverse_commission_on_cancel = reverse_commission_on_cancel

    # ------------------------------------------------------------------
    # Create
    # ------------------------------------------------------------------
    def create_booking(self, request: Union[BookingCreate, Dict[str, Any]], caller: Caller) -> Booking:
        """Book seats on a route for the caller"""

        request = self._coerce_request(request)
        self._validate_request(request)

        try:
            return self._create_booking(request, caller)
        except Exception:
            self.db.rollback()
            raise

    def _create_booking(self, request: BookingCreate, caller: Caller) -> Booking:
        route = self.inventory.get_route(request.route_id)
        if not route or not route.is_active:
            raise NotFoundError("Route not found")

        seat_count = len(request.seat_numbers)
        if route.available_seats < seat_count:
            raise InsufficientCapacityError()

        total_amount = to_money(Decimal(str(route.price)) * seat_count)
        if request.total_amount is not None and to_money(request.total_amount) != total_amount:
            raise ValidationError(
                "Total amount does not match seat count and route price",
                errors=[{
                    "loc": ["body", "total_amount"],
                    "msg": f"expected {total_amount}",
                    "type": "value_error"
                }]
            )

        # The caller's own agent profile decides attribution, never request.agent_id
        agent = self._resolve_agent(caller)
        agent_id = agent.id if agent else None
        commission_amount = self.ledger.compute_commission(total_amount, agent)

        max_attempts = max(1, settings.BOOKING_NUMBER_MAX_ATTEMPTS)
        for attempt in range(1, max_attempts + 1):
            booking_number = self._generate_booking_number()
            try:
                booking = self._write_booking(
                    request, caller, booking_number, total_amount, agent_id, commission_amount
                )
                self.db.commit()
            except BookingNumberCollision:
                self.db.rollback()
                custom_logger.warning(
                    f"Booking number {booking_number} collided (attempt {attempt}/{max_attempts})"
                )
                continue

            self.db.refresh(booking)
            custom_logger.info(
                f"Booking {booking.booking_number} created: route={booking.route_id} "
                f"user={booking.user_id} seats={booking.seat_numbers} total={booking.total_amount} "
                f"agent={booking.agent_id} commission={booking.commission_amount}"
            )
            return booking

        custom_logger.error(f"Could not allocate a unique booking number after {max_attempts} attempts")
        raise ConflictError("Could not allocate a unique booking number, please retry")

    def _write_booking(
        self,
        request: BookingCreate,
        caller: Caller,
        booking_number: str,
        total_amount: Decimal,
        agent_id: Optional[int],
        commission_amount: Decimal
    ) -> Booking:
        """The unit of work behind create_booking; does not commit"""

        existing = self.db.scalar(select(Booking.id).where(Booking.booking_number == booking_number))
        if existing is not None:
            raise BookingNumberCollision(booking_number)

        self.inventory.reserve_seats(request.route_id, len(request.seat_numbers))

        booking = Booking(
            booking_number=booking_number,
            route_id=request.route_id,
            user_id=caller.user_id,
            agent_id=agent_id,
            passenger_name=request.passenger_name,
            passenger_age=request.passenger_age,
            passenger_email=str(request.passenger_email),
            passenger_phone=request.passenger_phone,
            seat_numbers=list(request.seat_numbers),
            total_amount=total_amount,
            commission_amount=commission_amount,
            status=BookingStatus.PENDING.value,
            payment_status=PaymentStatus.PENDING.value
        )
        self.db.add(booking)
        try:
            self.db.flush()
        except IntegrityError as exc:
            if "booking_number" in str(exc.orig):
                raise BookingNumberCollision(booking_number) from exc
            raise

        self.inventory.hold_seat_numbers(request.route_id, booking.id, request.seat_numbers)

        if agent_id is not None and commission_amount > ZERO:
            self.ledger.record_booking(agent_id, commission_amount)

        return booking

    def _coerce_request(self, request: Union[BookingCreate, Dict[str, Any]]) -> BookingCreate:
        if isinstance(request, BookingCreate):
            return request
        try:
            return BookingCreate.model_validate(request)
        except pydantic.ValidationError as exc:
            errors = [
                {"loc": [str(part) for part in error["loc"]], "msg": error["msg"], "type": error["type"]}
                for error in exc.errors()
            ]
            raise ValidationError("Invalid booking request", errors=errors)

    def _validate_request(self, request: BookingCreate) -> None:
        """Re-check the seat rules, which must hold even for unvalidated models"""
        seats = request.seat_numbers or []
        if not 1 <= len(seats) <= settings.MAX_SEATS_PER_BOOKING:
            raise ValidationError(
                f"Between 1 and {settings.MAX_SEATS_PER_BOOKING} seats must be selected",
                errors=[{"loc": ["body", "seat_numbers"], "msg": "invalid seat count", "type": "value_error"}]
            )
        if len(set(seats)) != len(seats):
            raise ValidationError(
                "Seat identifiers must be unique",
                errors=[{"loc": ["body", "seat_numbers"], "msg": "duplicate seat", "type": "value_error"}]
            )
        if not 1 <= request.passenger_age <= 120:
            raise ValidationError(
                "Passenger age must be between 1 and 120",
                errors=[{"loc": ["body", "passenger_age"], "msg": "out of range", "type": "value_error"}]
            )

    def _resolve_agent(self, caller: Caller) -> Optional[Agent]:
        """Approved agent profile of the caller, if the caller books as an agent"""
        if not caller.is_agent:
            return None
        agent = self.ledger.get_by_user_id(caller.user_id)
        if not self.ledger.is_eligible_for_commission(agent):
            return None
        return agent

    # ------------------------------------------------------------------
    # Cancel
    # ------------------------------------------------------------------
    def cancel_booking(self, booking_id: int, caller: Caller) -> Booking:
        """Cancel a booking and give its seats (and commission) back"""
        try:
            booking, reversed_commission = self._cancel_booking(booking_id, caller)
        except Exception:
            self.db.rollback()
            raise

        self.db.refresh(booking)
        custom_logger.info(
            f"Booking {booking.booking_number} cancelled by user {caller.user_id}: "
            f"{len(booking.seat_numbers)} seat(s) released on route {booking.route_id}"
            + (f", commission {reversed_commission} reversed for agent {booking.agent_id}" if reversed_commission else "")
        )
        return booking

    def _cancel_booking(self, booking_id: int, caller: Caller):
        booking = self.db.get(Booking, booking_id)
        if not booking:
            raise NotFoundError("Booking not found")

        self._check_access(booking, caller)

        if booking.status == BookingStatus.CANCELLED.value:
            raise AlreadyCancelledError()

        route_id = booking.route_id
        seat_count = len(booking.seat_numbers)
        agent_id = booking.agent_id
        commission_amount = to_money(booking.commission_amount or 0)
        reverse_commission = (
            self.reverse_commission_on_cancel and agent_id is not None and commission_amount > ZERO
        )

        values = {"status": BookingStatus.CANCELLED.value}
        if reverse_commission:
            values["commission_amount"] = ZERO

        # Conditional on the current status so a concurrent cancel releases seats once
        result = self.db.execute(
            update(Booking)
            .where(Booking.id == booking_id, Booking.status != BookingStatus.CANCELLED.value)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            raise AlreadyCancelledError()

        self.inventory.release_seats(route_id, seat_count)
        self.inventory.free_seat_numbers(booking_id)

        if reverse_commission:
            self.ledger.reverse_booking(agent_id, commission_amount)

        self.db.commit()
        return booking, (commission_amount if reverse_commission else None)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def get_booking(self, booking_id: int, caller: Caller) -> Booking:
        booking = self.db.get(Booking, booking_id)
        if not booking:
            raise NotFoundError("Booking not found")
        self._check_access(booking, caller)
        return booking

    def get_booking_by_number(self, booking_number: str, caller: Caller) -> Booking:
        booking = self.db.query(Booking).filter(Booking.booking_number == booking_number).first()
        if not booking:
            raise NotFoundError("Booking not found")
        self._check_access(booking, caller)
        return booking

    def get_user_bookings(self, user_id: int) -> List[Booking]:
        """Bookings made by a user, newest first"""
        return (
            self.db.query(Booking)
            .filter(Booking.user_id == user_id)
            .order_by(Booking.booking_date.desc(), Booking.id.desc())
            .all()
        )

    def get_agent_bookings(self, agent_id: int) -> List[Booking]:
        return (
            self.db.query(Booking)
            .filter(Booking.agent_id == agent_id)
            .order_by(Booking.booking_date.desc(), Booking.id.desc())
            .all()
        )

    @staticmethod
    def _check_access(booking: Booking, caller: Caller) -> None:
        if booking.user_id != caller.user_id and not caller.is_admin:
            raise ForbiddenError()
