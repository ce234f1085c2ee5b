from datetime import datetime, timezone
from sqlalchemy import Column, Integer, BigInteger, String, Boolean, DateTime, ForeignKey, Numeric, JSON, CheckConstraint, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from busbooking.database import Base

# SQLite only autoincrements INTEGER PRIMARY KEY columns
BigIntegerId = BigInteger().with_variant(Integer, "sqlite")

def utcnow() -> datetime:
    return datetime.now(timezone.utc)

# ================================
# Users
# ================================
class User(Base):
    __tablename__ = "users"

    id = Column(BigIntegerId, primary_key=True, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    full_name = Column(String(255), nullable=False)
    phone = Column(String(20))
    role = Column(String(20), nullable=False, default="customer", index=True)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Relationships
    agent = relationship("Agent", back_populates="user", uselist=False)
    bookings = relationship("Booking", back_populates="user")

# ================================
# Agents (commission ledger)
# ================================
class Agent(Base):
    __tablename__ = "agents"
    __table_args__ = (
        CheckConstraint("commission_rate >= 0 AND commission_rate <= 100", name="ck_agents_commission_rate"),
        CheckConstraint("total_bookings >= 0", name="ck_agents_total_bookings"),
    )

    id = Column(BigIntegerId, primary_key=True, index=True)
    user_id = Column(BigInteger, ForeignKey("users.id"), unique=True, nullable=False)
    commission_rate = Column(Numeric(5, 2), nullable=False, default=8)
    total_earnings = Column(Numeric(10, 2), nullable=False, default=0)
    total_bookings = Column(Integer, nullable=False, default=0)
    is_approved = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    user = relationship("User", back_populates="agent")
    bookings = relationship("Booking", back_populates="agent")

# ================================
# Fleet
# ================================
class Bus(Base):
    __tablename__ = "buses"
    __table_args__ = (
        CheckConstraint("total_seats > 0", name="ck_buses_total_seats"),
    )

    id = Column(BigIntegerId, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    type = Column(String(50), nullable=False)
    plate_number = Column(String(50), unique=True, nullable=False)
    total_seats = Column(Integer, nullable=False)
    amenities = Column(JSON, nullable=False, default=list)
    rating = Column(Numeric(3, 2), default=4)
    is_active = Column(Boolean, nullable=False, default=True, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    routes = relationship("Route", back_populates="bus")

class Route(Base):
    __tablename__ = "routes"
    __table_args__ = (
        CheckConstraint("available_seats >= 0", name="ck_routes_available_seats"),
        CheckConstraint("price > 0", name="ck_routes_price"),
        CheckConstraint("arrival_time > departure_time", name="ck_routes_schedule"),
    )

    id = Column(BigIntegerId, primary_key=True, index=True)
    bus_id = Column(BigInteger, ForeignKey("buses.id"), nullable=False, index=True)
    source = Column(String(255), nullable=False, index=True)
    destination = Column(String(255), nullable=False, index=True)
    departure_time = Column(DateTime(timezone=True), nullable=False, index=True)
    arrival_time = Column(DateTime(timezone=True), nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    available_seats = Column(Integer, nullable=False)
    is_active = Column(Boolean, nullable=False, default=True, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    bus = relationship("Bus", back_populates="routes")
    bookings = relationship("Booking", back_populates="route")
    reserved_seats = relationship("RouteSeat", back_populates="route")

class RouteSeat(Base):
    """A seat identifier held by an active booking on a route"""
    __tablename__ = "route_seats"
    __table_args__ = (
        UniqueConstraint("route_id", "seat_number", name="uq_route_seats_route_seat"),
    )

    id = Column(BigIntegerId, primary_key=True, index=True)
    route_id = Column(BigInteger, ForeignKey("routes.id"), nullable=False, index=True)
    seat_number = Column(String(10), nullable=False)
    booking_id = Column(BigInteger, ForeignKey("bookings.id"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    route = relationship("Route", back_populates="reserved_seats")
    booking = relationship("Booking", back_populates="held_seats")

# ================================
# Bookings
# ================================
class Booking(Base):
    __tablename__ = "bookings"
    __table_args__ = (
        CheckConstraint("total_amount > 0", name="ck_bookings_total_amount"),
        CheckConstraint("passenger_age BETWEEN 1 AND 120", name="ck_bookings_passenger_age"),
    )

    id = Column(BigIntegerId, primary_key=True, index=True)
    booking_number = Column(String(50), unique=True, nullable=False, index=True)
    route_id = Column(BigInteger, ForeignKey("routes.id"), nullable=False, index=True)
    user_id = Column(BigInteger, ForeignKey("users.id"), nullable=False, index=True)
    agent_id = Column(BigInteger, ForeignKey("agents.id"), index=True)
    passenger_name = Column(String(255), nullable=False)
    passenger_age = Column(Integer, nullable=False)
    passenger_email = Column(String(255), nullable=False)
    passenger_phone = Column(String(20), nullable=False)
    seat_numbers = Column(JSON, nullable=False)
    total_amount = Column(Numeric(10, 2), nullable=False)
    commission_amount = Column(Numeric(10, 2), nullable=False, default=0)
    status = Column(String(20), nullable=False, default="pending", index=True)
    payment_status = Column(String(20), nullable=False, default="pending")
    booking_date = Column(DateTime(timezone=True), nullable=False, default=utcnow, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    route = relationship("Route", back_populates="bookings")
    user = relationship("User", back_populates="bookings")
    agent = relationship("Agent", back_populates="bookings")
    held_seats = relationship("RouteSeat", back_populates="booking")
