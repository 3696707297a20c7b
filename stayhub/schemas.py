from datetime import date, datetime
from typing import List, Literal, Optional
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field, model_validator


# ----- Identity -----
class UserCreate(BaseModel):
    email: EmailStr
    password: str = Field(min_length=6)
    full_name: Optional[str] = None


class UserOut(BaseModel):
    id: str
    email: EmailStr
    full_name: Optional[str] = None

    class Config:
        from_attributes = True


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"


# ----- Profiles -----
class ProfileOut(BaseModel):
    id: str
    email: str
    full_name: Optional[str] = None
    phone: Optional[str] = None
    role: str
    is_verified: bool

    class Config:
        from_attributes = True


class ProfileRequest(BaseModel):
    userId: Optional[UUID] = None


class ProfileUpdate(BaseModel):
    full_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    phone: Optional[str] = Field(default=None, pattern=r"^\+?[\d\s\-()]+$")


class ProfileResult(BaseModel):
    success: bool = True
    profile: ProfileOut
    created: bool


# ----- Catalog -----
class CountryOut(BaseModel):
    id: str
    name: str
    code: str

    class Config:
        from_attributes = True


class CityOut(BaseModel):
    id: str
    name: str
    country_id: str
    country: Optional[CountryOut] = None

    class Config:
        from_attributes = True


class AmenityOut(BaseModel):
    id: str
    name: str
    icon: Optional[str] = None
    category: Optional[str] = None

    class Config:
        from_attributes = True


class ImageOut(BaseModel):
    id: str
    image_url: str
    alt_text: Optional[str] = None
    is_primary: bool
    sort_order: int

    class Config:
        from_attributes = True


class RoomTypeOut(BaseModel):
    id: str
    hotel_id: str
    name: str
    description: Optional[str] = None
    max_occupancy: int
    bed_type: Optional[str] = None
    size_sqm: Optional[float] = None
    base_price_per_night: float
    total_rooms: int
    is_active: bool
    images: List[ImageOut] = []
    amenities: List[AmenityOut] = []
    current_price: float
    available_rooms: int
    total_price: float


class HotelOut(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    address: str
    city_id: str
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    star_rating: Optional[int] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    website: Optional[str] = None
    check_in_time: str
    check_out_time: str
    is_active: bool
    manager_id: Optional[str] = None
    city: Optional[CityOut] = None
    images: List[ImageOut] = []
    amenities: List[AmenityOut] = []
    room_types: List[RoomTypeOut] = []


class HotelList(BaseModel):
    hotels: List[HotelOut]


class HotelDetail(BaseModel):
    hotel: HotelOut


class HotelSearchFilters(BaseModel):
    destination: Optional[str] = None
    country_id: Optional[UUID] = None
    check_in_date: Optional[date] = None
    check_out_date: Optional[date] = None
    num_guests: Optional[int] = None


# ----- Availability responses -----
class QuoteOut(BaseModel):
    room_type_id: str
    check_in: date
    check_out: date
    rooms: int
    nights: int
    nightly_rate: float
    total_cost: float
    available_rooms: int
    available: bool


# ----- Legacy bookings -----
BookingStatus = Literal["available", "booked", "cancelled"]
RequestStatus = Literal["pending", "confirmed", "cancelled"]


class LegacyBookingCreate(BaseModel):
    title: str = Field(min_length=1)
    description: Optional[str] = None
    date: date
    time: str
    location: str
    price: float = Field(ge=0)
    max_seats: int = Field(ge=1)
    available_seats: Optional[int] = Field(default=None, ge=0)
    status: BookingStatus = "available"

    @model_validator(mode="after")
    def check_seats(self):
        if self.available_seats is not None and self.available_seats > self.max_seats:
            raise ValueError("Available seats cannot exceed max seats")
        return self


class LegacyBookingOut(BaseModel):
    id: str
    title: str
    description: Optional[str] = None
    date: date
    time: str
    location: str
    price: float
    max_seats: int
    available_seats: int
    status: str
    user_id: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class BookingList(BaseModel):
    bookings: List[LegacyBookingOut]


class BookingResult(BaseModel):
    booking: LegacyBookingOut


class AdminBookingUpdate(BaseModel):
    status: BookingStatus
    available_seats: Optional[int] = Field(default=None, ge=0)


# ----- Booking requests -----
class BookingRequestCreate(BaseModel):
    booking_id: UUID
    seats: int = Field(ge=1, le=20)


class BookingRequestOut(BaseModel):
    id: str
    booking_id: str
    user_id: str
    seats: int
    status: str
    created_at: datetime
    updated_at: datetime
    booking: Optional[LegacyBookingOut] = None

    class Config:
        from_attributes = True


class RequestList(BaseModel):
    requests: List[BookingRequestOut]


class RequestResult(BaseModel):
    request: BookingRequestOut


# ----- Provider onboarding -----
class HotelBasicInfo(BaseModel):
    name: str = Field(min_length=1)
    street: str = Field(min_length=1)
    city: str = Field(min_length=1)
    state: str = Field(min_length=1)
    country: str = Field(min_length=1)
    zipCode: str = Field(min_length=1)
    phone: str = Field(min_length=1)
    email: EmailStr
    description: str = ""


class RoomSetup(BaseModel):
    numberOfRoomTypes: int = Field(ge=1)
    totalNumberOfRooms: int = Field(ge=1)
    amenities: List[str] = []


class RoomTypeDetail(BaseModel):
    id: Optional[str] = None
    name: str = Field(min_length=1)
    numberOfRooms: int = Field(ge=1)
    pricePerNight: float = Field(ge=0)
    maxOccupancy: int = Field(ge=1)
    amenities: List[str] = []
    # file names only, binaries go to file storage
    images: List[str] = []


class ProviderApplicationCreate(BaseModel):
    userId: Optional[UUID] = None
    basicInfo: HotelBasicInfo
    roomSetup: RoomSetup
    roomTypes: List[RoomTypeDetail] = Field(min_length=1)


class ApplicationRoomType(BaseModel):
    name: str
    number_of_rooms: int
    price_per_night: float
    max_occupancy: int
    amenities: List[str] = []
    images_count: int = 0


class ProviderApplicationOut(BaseModel):
    id: str
    user_id: str
    status: str
    admin_note: Optional[str] = None
    hotel_name: Optional[str] = None
    hotel_description: Optional[str] = None
    hotel_street: Optional[str] = None
    hotel_city: Optional[str] = None
    hotel_state: Optional[str] = None
    hotel_country: Optional[str] = None
    hotel_zip_code: Optional[str] = None
    hotel_phone: Optional[str] = None
    hotel_email: Optional[str] = None
    number_of_room_types: Optional[int] = None
    total_number_of_rooms: Optional[int] = None
    hotel_amenities: List[str] = []
    room_types: List[ApplicationRoomType] = []
    created_at: datetime
    updated_at: datetime


class ApplicationResult(BaseModel):
    success: bool = True
    message: str
    application: ProviderApplicationOut


class ApplicationList(BaseModel):
    success: bool = True
    applications: List[ProviderApplicationOut]


class ApplicationReview(BaseModel):
    status: Literal["pending", "approved", "rejected"]
    admin_note: Optional[str] = Field(default=None, max_length=1000)


# ----- Drafts -----
class DraftIn(BaseModel):
    form_data: dict
    current_step: int = Field(default=1, ge=1)
    completed_steps: List[int] = []


class DraftOut(BaseModel):
    kind: str
    form_data: dict
    current_step: int
    completed_steps: List[int]
    updated_at: datetime

    class Config:
        from_attributes = True
