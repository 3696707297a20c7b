"""
Pytest configuration and shared fixtures for testing the StayHub API.
"""
import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ["RATE_LIMIT_ENABLED"] = "false"

from datetime import date, datetime, timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from stayhub.circuit_breaker import store_circuit_breaker
from stayhub.database import Base
from stayhub.main import app
from stayhub.deps import get_db, get_password_hash
from stayhub import models


# Use an in-memory SQLite database for testing
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db_session():
    """
    Create a fresh database session for each test.
    """
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)
        store_circuit_breaker.close()


@pytest.fixture(scope="function")
def client(db_session):
    """
    Create a test client with the test database.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def make_user(db_session, email, password, role=None, full_name=None):
    user = models.User(
        email=email,
        full_name=full_name,
        hashed_password=get_password_hash(password),
    )
    db_session.add(user)
    db_session.commit()
    if role is not None:
        db_session.add(models.Profile(id=user.id, email=email, full_name=full_name, role=role))
        db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def admin_user(db_session):
    """
    Create an admin user with its profile.
    """
    return make_user(db_session, "admin@example.com", "adminpass123", role="ADMIN", full_name="Admin User")


@pytest.fixture
def regular_user(db_session):
    """
    Create a regular user with its profile.
    """
    return make_user(db_session, "guest@example.com", "guestpass123", role="USER", full_name="Guest User")


@pytest.fixture
def other_user(db_session):
    return make_user(db_session, "other@example.com", "otherpass123", role="USER")


@pytest.fixture
def new_user(db_session):
    """
    An identity that has no profile yet.
    """
    return make_user(db_session, "fresh@example.com", "freshpass123", full_name="Fresh Face")


def login(client, email, password) -> str:
    response = client.post(
        "/api/auth/login",
        params={"email": email, "password": password},
    )
    return response.json()["access_token"]


@pytest.fixture
def admin_token(client, admin_user):
    return login(client, "admin@example.com", "adminpass123")


@pytest.fixture
def regular_token(client, regular_user):
    return login(client, "guest@example.com", "guestpass123")


@pytest.fixture
def other_token(client, other_user):
    return login(client, "other@example.com", "otherpass123")


@pytest.fixture
def new_user_token(client, new_user):
    return login(client, "fresh@example.com", "freshpass123")


@pytest.fixture
def catalog(db_session):
    """
    Two countries, three cities and five hotels (one inactive).

    Creation order is fixed through ``created_at`` so rating ties are
    deterministic.
    """
    thailand = models.Country(name="Thailand", code="TH")
    indonesia = models.Country(name="Indonesia", code="ID")
    db_session.add_all([thailand, indonesia])
    db_session.flush()

    bangkok = models.City(name="Bangkok", country_id=thailand.id)
    phuket = models.City(name="Phuket", country_id=thailand.id)
    bali = models.City(name="Bali", country_id=indonesia.id)
    # shares a prefix with Bangkok, must not match it
    bangkok_noi = models.City(name="Bangkok Noi", country_id=thailand.id)
    db_session.add_all([bangkok, phuket, bali, bangkok_noi])
    db_session.flush()

    wifi = models.Amenity(name="WiFi", category="general")
    pool = models.Amenity(name="Pool", category="recreation")
    db_session.add_all([wifi, pool])
    db_session.flush()

    base = datetime(2026, 1, 1)
    hotels = {
        "riverside": models.Hotel(
            name="Riverside Bangkok", address="1 River Rd", city_id=bangkok.id,
            star_rating=4, created_at=base,
        ),
        "grand": models.Hotel(
            name="Grand Bangkok", address="2 Sukhumvit", city_id=bangkok.id,
            star_rating=5, created_at=base + timedelta(minutes=1),
        ),
        "beach": models.Hotel(
            name="Phuket Beach", address="3 Beach Rd", city_id=phuket.id,
            star_rating=4, created_at=base + timedelta(minutes=2),
        ),
        "ubud": models.Hotel(
            name="Ubud Retreat", address="4 Jungle Way", city_id=bali.id,
            star_rating=3, created_at=base + timedelta(minutes=3),
        ),
        "closed": models.Hotel(
            name="Closed Bangkok", address="5 Old Rd", city_id=bangkok.id,
            star_rating=5, is_active=False, created_at=base + timedelta(minutes=4),
        ),
        "noi": models.Hotel(
            name="Noi Guesthouse", address="6 Canal Rd", city_id=bangkok_noi.id,
            star_rating=None, created_at=base + timedelta(minutes=5),
        ),
    }
    db_session.add_all(hotels.values())
    db_session.flush()

    hotels["riverside"].amenities = [wifi, pool]
    hotels["grand"].amenities = [wifi]

    room_types = {
        "riverside_deluxe": models.RoomType(
            hotel_id=hotels["riverside"].id, name="Deluxe", max_occupancy=2,
            base_price_per_night=100.0, total_rooms=3,
        ),
        "riverside_family": models.RoomType(
            hotel_id=hotels["riverside"].id, name="Family", max_occupancy=4,
            base_price_per_night=180.0, total_rooms=2,
        ),
        "grand_suite": models.RoomType(
            hotel_id=hotels["grand"].id, name="Suite", max_occupancy=2,
            base_price_per_night=300.0,
        ),
        "beach_villa": models.RoomType(
            hotel_id=hotels["beach"].id, name="Villa", max_occupancy=6,
            base_price_per_night=450.0, is_active=False,
        ),
        "ubud_bungalow": models.RoomType(
            hotel_id=hotels["ubud"].id, name="Bungalow", max_occupancy=3,
            base_price_per_night=80.0,
        ),
    }
    db_session.add_all(room_types.values())
    db_session.flush()

    db_session.add_all(
        [
            models.HotelImage(hotel_id=hotels["riverside"].id, image_url="b.jpg", sort_order=2),
            models.HotelImage(hotel_id=hotels["riverside"].id, image_url="a.jpg", sort_order=1, is_primary=True),
        ]
    )
    db_session.commit()

    return {
        "countries": {"thailand": thailand, "indonesia": indonesia},
        "cities": {"bangkok": bangkok, "phuket": phuket, "bali": bali},
        "hotels": hotels,
        "room_types": room_types,
    }


@pytest.fixture
def sample_booking(db_session, admin_user):
    """
    Create an open booking slot with 10 of 10 seats left.
    """
    booking = models.LegacyBooking(
        title="Sunset Dinner Cruise",
        date=date(2026, 12, 1),
        time="18:00",
        location="Chao Phraya Pier",
        price=45.0,
        max_seats=10,
        available_seats=10,
        status="available",
        user_id=admin_user.id,
    )
    db_session.add(booking)
    db_session.commit()
    db_session.refresh(booking)
    return booking


def get_auth_header(token: str) -> dict:
    """
    Helper function to create authorization header.
    """
    return {"Authorization": f"Bearer {token}"}
