#!/usr/bin/env python3

from datetime import datetime, timedelta, timezone
from decimal import Decimal

from busbooking.database import SessionLocal, init_db
from busbooking.models import User, Agent, Bus, Route, RouteSeat, Booking
from busbooking.auth.utils import create_access_token

def create_seed_data():
    init_db()
    db = SessionLocal()

    try:
        print("🚀 Creating seed data for BusLink...")

        # Clear existing data (in reverse dependency order)
        print("Clearing existing data...")
        db.query(RouteSeat).delete()
        db.query(Booking).delete()
        db.query(Route).delete()
        db.query(Bus).delete()
        db.query(Agent).delete()
        db.query(User).delete()

        # 1. Users
        print("Creating users...")
        admin = User(email="admin@buslink.com", full_name="Admin User", phone="+1234567890", role="admin")
        customer = User(email="customer@example.com", full_name="John Customer", phone="+1987654321", role="customer")
        agent_user = User(email="agent@buslink.com", full_name="Travel Agent Pro", phone="+1122334455", role="agent")
        db.add_all([admin, customer, agent_user])
        db.flush()

        # 2. Agent profile
        print("Creating agent profile...")
        db.add(Agent(user_id=agent_user.id, commission_rate=Decimal("8.00"), is_approved=True))

        # 3. Buses
        print("Creating buses...")
        buses = [
            Bus(name="Express Voyager", type="Luxury Volvo", plate_number="NY-2024-X", total_seats=40,
                amenities=["WiFi", "Charging Point", "Water Bottle", "Blanket"], rating=Decimal("4.8")),
            Bus(name="City Connector", type="AC Seater", plate_number="DC-5502-Y", total_seats=50,
                amenities=["WiFi", "Charging Point", "Water Bottle"], rating=Decimal("4.2")),
            Bus(name="Night Rider", type="AC Sleeper", plate_number="MA-9901-Z", total_seats=30,
                amenities=["WiFi", "Charging Point", "Blanket", "Pillow", "Reading Light"], rating=Decimal("4.5")),
        ]
        db.add_all(buses)
        db.flush()

        # 4. Routes for today and tomorrow
        print("Creating routes...")
        today = datetime.now(timezone.utc).replace(hour=0, minute=0, second=0, microsecond=0)
        schedule = [
            (buses[0], "New York", "Washington DC", 8, 4, Decimal("45.00")),
            (buses[1], "New York", "Boston", 10, 5, Decimal("35.00")),
            (buses[2], "Boston", "Washington DC", 22, 9, Decimal("60.00")),
        ]
        for day_offset in (0, 1):
            for bus, source, destination, hour, duration_hours, price in schedule:
                departure = today + timedelta(days=day_offset, hours=hour)
                db.add(Route(
                    bus_id=bus.id,
                    source=source,
                    destination=destination,
                    departure_time=departure,
                    arrival_time=departure + timedelta(hours=duration_hours),
                    price=price,
                    available_seats=bus.total_seats
                ))

        db.commit()

        print("✅ Seed data created successfully!")
        print("\nBearer tokens for local testing:")
        for user in (admin, customer, agent_user):
            token = create_access_token(data={"sub": str(user.id), "role": user.role})
            print(f"  {user.role:<8} {user.email}: {token}")

    except Exception as e:
        print(f"❌ Error creating seed data: {e}")
        db.rollback()
        raise
    finally:
        db.close()

if __name__ == "__main__":
    create_seed_data()
