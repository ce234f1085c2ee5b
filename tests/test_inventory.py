"""
Unit tests for InventoryStore

1. reserve/release adjust the counter atomically and respect its bounds
2. search matches exact source/destination, skips inactive routes, keeps insertion order
3. the date filter follows the configured reference timezone
"""

from datetime import date, datetime, timezone

import pytest

from busbooking.config import settings
from busbooking.exceptions import InsufficientCapacityError
from busbooking.routes.inventory import InventoryStore, day_bounds, to_utc


class TestSeatCounter:
    def test_reserve_decrements_available_seats(self, db, make_route, available_seats):
        route_id = make_route(total_seats=40)

        InventoryStore(db).reserve_seats(route_id, 3)
        db.commit()

        assert available_seats(route_id) == 37

    def test_reserve_exact_remaining_capacity(self, db, make_route, available_seats):
        route_id = make_route(total_seats=40, available_seats=2)

        InventoryStore(db).reserve_seats(route_id, 2)
        db.commit()

        assert available_seats(route_id) == 0

    def test_reserve_beyond_capacity_fails_without_change(self, db, make_route, available_seats):
        route_id = make_route(total_seats=40, available_seats=2)

        with pytest.raises(InsufficientCapacityError):
            InventoryStore(db).reserve_seats(route_id, 3)
        db.rollback()

        assert available_seats(route_id) == 2

    def test_reserve_on_inactive_route_fails(self, db, make_route):
        route_id = make_route(is_active=False)

        with pytest.raises(InsufficientCapacityError):
            InventoryStore(db).reserve_seats(route_id, 1)

    def test_reserve_rejects_non_positive_count(self, db, make_route):
        route_id = make_route()

        with pytest.raises(ValueError):
            InventoryStore(db).reserve_seats(route_id, 0)

    def test_release_increments_available_seats(self, db, make_route, available_seats):
        route_id = make_route(total_seats=40, available_seats=30)

        InventoryStore(db).release_seats(route_id, 4)
        db.commit()

        assert available_seats(route_id) == 34

    def test_release_is_capped_at_bus_capacity(self, db, make_route, available_seats):
        route_id = make_route(total_seats=40, available_seats=39)

        InventoryStore(db).release_seats(route_id, 5)
        db.commit()

        assert available_seats(route_id) == 40


class TestSearchRoutes:
    def test_exact_match_in_insertion_order(self, db, make_route):
        first = make_route(source="New York", destination="Boston")
        make_route(source="New York", destination="Washington DC")
        make_route(source="new york", destination="Boston")
        second = make_route(source="New York", destination="Boston")

        routes = InventoryStore(db).search_routes("New York", "Boston")

        assert [route.id for route in routes] == [first, second]

    def test_inactive_routes_are_excluded(self, db, make_route):
        make_route(is_active=False)
        active = make_route()

        routes = InventoryStore(db).search_routes("New York", "Boston")

        assert [route.id for route in routes] == [active]

    def test_date_filter_keeps_single_calendar_day(self, db, make_route):
        make_route(departure=datetime(2030, 3, 9, 23, 59, tzinfo=timezone.utc))
        morning = make_route(departure=datetime(2030, 3, 10, 0, 0, tzinfo=timezone.utc))
        evening = make_route(departure=datetime(2030, 3, 10, 23, 30, tzinfo=timezone.utc))
        make_route(departure=datetime(2030, 3, 11, 0, 0, tzinfo=timezone.utc))

        routes = InventoryStore(db).search_routes("New York", "Boston", date(2030, 3, 10))

        assert [route.id for route in routes] == [morning, evening]

    def test_date_filter_uses_reference_timezone(self, db, make_route, monkeypatch):
        # 20:00 UTC on Jan 1 is 01:30 on Jan 2 in India
        route_id = make_route(departure=datetime(2030, 1, 1, 20, 0, tzinfo=timezone.utc))
        store = InventoryStore(db)

        monkeypatch.setattr(settings, "TIMEZONE", "UTC")
        assert [r.id for r in store.search_routes("New York", "Boston", date(2030, 1, 1))] == [route_id]
        assert store.search_routes("New York", "Boston", date(2030, 1, 2)) == []

        monkeypatch.setattr(settings, "TIMEZONE", "Asia/Kolkata")
        assert store.search_routes("New York", "Boston", date(2030, 1, 1)) == []
        assert [r.id for r in store.search_routes("New York", "Boston", date(2030, 1, 2))] == [route_id]


class TestTimeHelpers:
    def test_day_bounds_in_reference_timezone(self, monkeypatch):
        monkeypatch.setattr(settings, "TIMEZONE", "Asia/Kolkata")

        start, end = day_bounds(date(2030, 1, 2))

        assert start == datetime(2030, 1, 1, 18, 30, tzinfo=timezone.utc)
        assert end == datetime(2030, 1, 2, 18, 30, tzinfo=timezone.utc)

    def test_naive_timestamps_are_read_in_reference_timezone(self, monkeypatch):
        monkeypatch.setattr(settings, "TIMEZONE", "Asia/Kolkata")

        assert to_utc(datetime(2030, 1, 2, 1, 30)) == datetime(2030, 1, 1, 20, 0, tzinfo=timezone.utc)
