import uuid
from datetime import datetime

from sqlalchemy import (
    JSON,
    Boolean,
    CheckConstraint,
    Column,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from .config import Config
from .database import Base


def new_id() -> str:
    return str(uuid.uuid4())


hotel_amenities = Table(
    "hotel_amenities",
    Base.metadata,
    Column("hotel_id", String(36), ForeignKey("hotels.id"), primary_key=True),
    Column("amenity_id", String(36), ForeignKey("amenities.id"), primary_key=True),
)

room_type_amenities = Table(
    "room_type_amenities",
    Base.metadata,
    Column("room_type_id", String(36), ForeignKey("room_types.id"), primary_key=True),
    Column("amenity_id", String(36), ForeignKey("amenities.id"), primary_key=True),
)


# ----- Identity / profiles -----
class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=new_id)
    email = Column(String, unique=True, index=True, nullable=False)
    full_name = Column(String, nullable=True)
    hashed_password = Column(String, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    profile = relationship("Profile", back_populates="user", uselist=False)
    booking_requests = relationship("BookingRequest", back_populates="user")


class Profile(Base):
    __tablename__ = "profiles"

    id = Column(String(36), ForeignKey("users.id"), primary_key=True)
    email = Column(String, nullable=False)
    full_name = Column(String, nullable=True)
    phone = Column(String, nullable=True)
    role = Column(String, nullable=False, default="USER")  # USER, ADMIN, HOTEL_MANAGER
    is_verified = Column(Boolean, default=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    user = relationship("User", back_populates="profile")


# ----- Reference data -----
class Country(Base):
    __tablename__ = "countries"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String, nullable=False)
    code = Column(String(3), nullable=False, unique=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    cities = relationship("City", back_populates="country")


class City(Base):
    __tablename__ = "cities"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String, nullable=False, index=True)
    country_id = Column(String(36), ForeignKey("countries.id"), nullable=False)
    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    country = relationship("Country", back_populates="cities")
    hotels = relationship("Hotel", back_populates="city")


class Amenity(Base):
    __tablename__ = "amenities"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String, unique=True, nullable=False)
    icon = Column(String, nullable=True)
    category = Column(String, nullable=True)  # general, room, dining, recreation
    created_at = Column(DateTime, default=datetime.utcnow)


# ----- Catalog -----
class Hotel(Base):
    __tablename__ = "hotels"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    address = Column(String, nullable=False)
    city_id = Column(String(36), ForeignKey("cities.id"), nullable=False)
    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)
    star_rating = Column(Integer, nullable=True)
    phone = Column(String, nullable=True)
    email = Column(String, nullable=True)
    website = Column(String, nullable=True)
    check_in_time = Column(String, nullable=False, default="15:00")
    check_out_time = Column(String, nullable=False, default="11:00")
    is_active = Column(Boolean, default=True)
    # weak reference to the managing account
    manager_id = Column(String(36), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    __table_args__ = (
        CheckConstraint("star_rating IS NULL OR (star_rating >= 0 AND star_rating <= 5)", name="ck_hotels_star_rating"),
    )

    city = relationship("City", back_populates="hotels")
    images = relationship("HotelImage", back_populates="hotel", order_by="HotelImage.sort_order")
    amenities = relationship("Amenity", secondary=hotel_amenities)
    room_types = relationship("RoomType", back_populates="hotel")


class HotelImage(Base):
    __tablename__ = "hotel_images"

    id = Column(String(36), primary_key=True, default=new_id)
    hotel_id = Column(String(36), ForeignKey("hotels.id"), nullable=False)
    image_url = Column(String, nullable=False)
    alt_text = Column(String, nullable=True)
    is_primary = Column(Boolean, default=False, nullable=False)
    sort_order = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    # one primary image per hotel
    __table_args__ = (
        Index(
            "uq_hotel_images_primary",
            "hotel_id",
            unique=True,
            sqlite_where=is_primary == True,
            postgresql_where=is_primary == True,
        ),
    )

    hotel = relationship("Hotel", back_populates="images")


class RoomType(Base):
    __tablename__ = "room_types"

    id = Column(String(36), primary_key=True, default=new_id)
    hotel_id = Column(String(36), ForeignKey("hotels.id"), nullable=False)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    max_occupancy = Column(Integer, nullable=False)
    bed_type = Column(String, nullable=True)
    size_sqm = Column(Float, nullable=True)
    base_price_per_night = Column(Float, nullable=False)
    total_rooms = Column(Integer, nullable=False, default=Config.DEFAULT_ROOMS_PER_TYPE)
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    hotel = relationship("Hotel", back_populates="room_types")
    images = relationship("RoomTypeImage", back_populates="room_type", order_by="RoomTypeImage.sort_order")
    amenities = relationship("Amenity", secondary=room_type_amenities)
    inventory = relationship("RoomInventory", back_populates="room_type")


class RoomTypeImage(Base):
    __tablename__ = "room_type_images"

    id = Column(String(36), primary_key=True, default=new_id)
    room_type_id = Column(String(36), ForeignKey("room_types.id"), nullable=False)
    image_url = Column(String, nullable=False)
    alt_text = Column(String, nullable=True)
    is_primary = Column(Boolean, default=False, nullable=False)
    sort_order = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    __table_args__ = (
        Index(
            "uq_room_type_images_primary",
            "room_type_id",
            unique=True,
            sqlite_where=is_primary == True,
            postgresql_where=is_primary == True,
        ),
    )

    room_type = relationship("RoomType", back_populates="images")


class RoomInventory(Base):
    """Rooms already held for one room type on one night."""

    __tablename__ = "room_inventory"

    id = Column(String(36), primary_key=True, default=new_id)
    room_type_id = Column(String(36), ForeignKey("room_types.id"), nullable=False)
    date = Column(Date, nullable=False)
    rooms_held = Column(Integer, nullable=False, default=0)

    __table_args__ = (
        UniqueConstraint("room_type_id", "date", name="uq_room_inventory_day"),
        CheckConstraint("rooms_held >= 0", name="ck_room_inventory_held"),
    )

    room_type = relationship("RoomType", back_populates="inventory")


# ----- Legacy seat bookings -----
class LegacyBooking(Base):
    __tablename__ = "bookings"

    id = Column(String(36), primary_key=True, default=new_id)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    date = Column(Date, nullable=False)
    time = Column(String, nullable=False)
    location = Column(String, nullable=False)
    price = Column(Float, nullable=False)
    max_seats = Column(Integer, nullable=False)
    available_seats = Column(Integer, nullable=False)
    status = Column(String, nullable=False, default="available")  # available, booked, cancelled
    user_id = Column(String(36), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow)

    __table_args__ = (
        CheckConstraint(
            "available_seats >= 0 AND available_seats <= max_seats",
            name="ck_bookings_available_seats",
        ),
    )

    requests = relationship("BookingRequest", back_populates="booking")


class BookingRequest(Base):
    __tablename__ = "booking_requests"

    id = Column(String(36), primary_key=True, default=new_id)
    booking_id = Column(String(36), ForeignKey("bookings.id"), nullable=False)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False)
    seats = Column(Integer, nullable=False)
    status = Column(String, nullable=False, default="pending")  # pending, confirmed, cancelled
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow)

    booking = relationship("LegacyBooking", back_populates="requests")
    user = relationship("User", back_populates="booking_requests")


# ----- Provider onboarding -----
class ProviderApplication(Base):
    __tablename__ = "provider_applications"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), nullable=False, index=True)
    status = Column(String, nullable=False, default="pending")  # pending, approved, rejected
    admin_note = Column(Text, nullable=True)

    hotel_name = Column(String, nullable=True)
    hotel_description = Column(Text, nullable=True)
    hotel_street = Column(String, nullable=True)
    hotel_city = Column(String, nullable=True)
    hotel_state = Column(String, nullable=True)
    hotel_country = Column(String, nullable=True)
    hotel_zip_code = Column(String, nullable=True)
    hotel_phone = Column(String, nullable=True)
    hotel_email = Column(String, nullable=True)

    number_of_room_types = Column(Integer, nullable=True)
    total_number_of_rooms = Column(Integer, nullable=True)
    hotel_amenities = Column(JSON, nullable=True)
    room_types = Column(JSON, nullable=True)

    # whole submission, only set when the typed insert could not be stored
    application_data = Column(JSON, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class Draft(Base):
    __tablename__ = "drafts"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False)
    kind = Column(String, nullable=False)
    form_data = Column(JSON, nullable=False, default=dict)
    current_step = Column(Integer, nullable=False, default=1)
    completed_steps = Column(JSON, nullable=False, default=list)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    __table_args__ = (UniqueConstraint("user_id", "kind", name="uq_drafts_user_kind"),)
