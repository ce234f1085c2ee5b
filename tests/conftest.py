"""
Test Configuration and Fixtures

This module provides:
- A fresh SQLite database per test (file based so worker threads share it)
- Factory fixtures for users, buses, routes and agents; each factory uses its
  own short-lived session so no test holds a lock across requests
- A FastAPI TestClient wired to the test database
- State readers that look at the database through a fresh session
"""

from datetime import datetime, timedelta, timezone
from decimal import Decimal
from itertools import count
from typing import Optional

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from busbooking.auth.schemas import Caller, UserRole
from busbooking.bookings.booking_service import BookingEngine
from busbooking.database import Base, build_engine, get_db
from busbooking.main import app
from busbooking.models import Agent, Bus, Route, User

_sequence = count(1)

DEFAULT_DEPARTURE = datetime(2030, 1, 15, 8, 0, tzinfo=timezone.utc)


@pytest.fixture
def engine(tmp_path):
    db_engine = build_engine(f"sqlite:///{tmp_path / 'busbooking_test.db'}")
    Base.metadata.create_all(bind=db_engine)
    yield db_engine
    db_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def booking_engine(db):
    return BookingEngine(db)


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


# =============================================================================
# Factories
# =============================================================================
@pytest.fixture
def make_user(session_factory):
    def _make(role: str = "customer", is_active: bool = True) -> Caller:
        n = next(_sequence)
        with session_factory() as session:
            user = User(
                email=f"{role}{n}@example.com",
                full_name=f"Test {role.title()} {n}",
                phone="+10000000000",
                role=role,
                is_active=is_active,
            )
            session.add(user)
            session.commit()
            return Caller(user_id=user.id, role=UserRole(role))
    return _make


@pytest.fixture
def make_agent(session_factory, make_user):
    def _make(commission_rate: str = "8.00", is_approved: bool = True) -> Caller:
        caller = make_user(role="agent")
        with session_factory() as session:
            session.add(Agent(
                user_id=caller.user_id,
                commission_rate=Decimal(commission_rate),
                is_approved=is_approved,
            ))
            session.commit()
        return caller
    return _make


@pytest.fixture
def make_route(session_factory):
    def _make(
        price: str = "30.00",
        total_seats: int = 40,
        available_seats: Optional[int] = None,
        source: str = "New York",
        destination: str = "Boston",
        departure: datetime = DEFAULT_DEPARTURE,
        is_active: bool = True,
    ) -> int:
        n = next(_sequence)
        with session_factory() as session:
            bus = Bus(
                name=f"Coach {n}",
                type="AC Seater",
                plate_number=f"TEST-{n:05d}",
                total_seats=total_seats,
                amenities=["WiFi"],
            )
            session.add(bus)
            session.flush()
            route = Route(
                bus_id=bus.id,
                source=source,
                destination=destination,
                departure_time=departure,
                arrival_time=departure + timedelta(hours=4),
                price=Decimal(price),
                available_seats=total_seats if available_seats is None else available_seats,
                is_active=is_active,
            )
            session.add(route)
            session.commit()
            return route.id
    return _make


# =============================================================================
# State readers (fresh session each call)
# =============================================================================
@pytest.fixture
def available_seats(session_factory):
    def _read(route_id: int) -> int:
        with session_factory() as session:
            return session.get(Route, route_id).available_seats
    return _read


@pytest.fixture
def agent_state(session_factory):
    def _read(user_id: int) -> Agent:
        with session_factory() as session:
            agent = session.query(Agent).filter(Agent.user_id == user_id).one()
            session.expunge(agent)
            return agent
    return _read

