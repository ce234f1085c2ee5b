"""Shared helpers for building requests and identities in tests."""

from busbooking.auth.schemas import Caller
from busbooking.auth.utils import create_access_token


def auth_headers(caller: Caller) -> dict:
    token = create_access_token(data={"sub": str(caller.user_id), "role": caller.role.value})
    return {"Authorization": f"Bearer {token}"}


def booking_request(route_id: int, seats, **overrides) -> dict:
    payload = {
        "route_id": route_id,
        "passenger_name": "Jane Traveller",
        "passenger_age": 34,
        "passenger_email": "jane@example.com",
        "passenger_phone": "+15551234567",
        "seat_numbers": list(seats),
    }
    payload.update(overrides)
    return payload
