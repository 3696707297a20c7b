from sqlalchemy.orm import Session, joinedload, selectinload

from .. import models, schemas
from ..errors import NotFound
from ..logger import setup_logger
from .availability import current_price, nights, rooms_left, total_cost

logger = setup_logger(__name__)


def _catalog_query(db: Session):
    return (
        db.query(models.Hotel)
        .options(
            joinedload(models.Hotel.city).joinedload(models.City.country),
            selectinload(models.Hotel.images),
            selectinload(models.Hotel.amenities),
            selectinload(models.Hotel.room_types).selectinload(models.RoomType.images),
            selectinload(models.Hotel.room_types).selectinload(models.RoomType.amenities),
        )
        .filter(models.Hotel.is_active == True)
    )


def room_type_out(db: Session, room_type: models.RoomType, check_in=None, check_out=None) -> schemas.RoomTypeOut:
    night_count = nights(check_in, check_out)
    price = current_price(room_type)
    if night_count:
        available = rooms_left(db, room_type, check_in, check_out)
    else:
        available = room_type.total_rooms

    return schemas.RoomTypeOut(
        id=room_type.id,
        hotel_id=room_type.hotel_id,
        name=room_type.name,
        description=room_type.description,
        max_occupancy=room_type.max_occupancy,
        bed_type=room_type.bed_type,
        size_sqm=room_type.size_sqm,
        base_price_per_night=room_type.base_price_per_night,
        total_rooms=room_type.total_rooms,
        is_active=room_type.is_active,
        images=[schemas.ImageOut.model_validate(img) for img in room_type.images],
        amenities=[schemas.AmenityOut.model_validate(a) for a in room_type.amenities],
        current_price=price,
        available_rooms=available,
        total_price=total_cost(price, night_count),
    )


def hotel_out(db: Session, hotel: models.Hotel, check_in=None, check_out=None) -> schemas.HotelOut:
    """Hotel with its city, images, flattened amenities and priced room types."""
    return schemas.HotelOut(
        id=hotel.id,
        name=hotel.name,
        description=hotel.description,
        address=hotel.address,
        city_id=hotel.city_id,
        latitude=hotel.latitude,
        longitude=hotel.longitude,
        star_rating=hotel.star_rating,
        phone=hotel.phone,
        email=hotel.email,
        website=hotel.website,
        check_in_time=hotel.check_in_time,
        check_out_time=hotel.check_out_time,
        is_active=hotel.is_active,
        manager_id=hotel.manager_id,
        city=schemas.CityOut.model_validate(hotel.city) if hotel.city else None,
        images=[schemas.ImageOut.model_validate(img) for img in hotel.images],
        amenities=[schemas.AmenityOut.model_validate(a) for a in hotel.amenities],
        room_types=[room_type_out(db, rt, check_in, check_out) for rt in hotel.room_types],
    )


def search_hotels(db: Session, filters: schemas.HotelSearchFilters) -> list[schemas.HotelOut]:
    """
    Resolve a filter set to active hotels, best rated first.

    - ``destination`` matches the city name exactly, ignoring case and
      surrounding whitespace. It is applied in memory after the fetch and
      takes precedence over ``country_id``.
    - ``country_id`` is applied in the query against the hotel's city.
    - ``num_guests`` keeps hotels with at least one active room type that
      fits the party.
    - With both dates given, room types report the rooms free on every night
      of the stay and the total price for the stay.

    Hotels with the same rating keep creation order; unrated hotels go last.
    """
    check_in, check_out = filters.check_in_date, filters.check_out_date
    if check_in is None or check_out is None:
        check_in = check_out = None
    # rejects an inverted range before touching the store
    nights(check_in, check_out)

    query = _catalog_query(db)
    destination = (filters.destination or "").strip()

    if destination:
        wanted = destination.casefold()
        hotels = [
            hotel
            for hotel in query.order_by(models.Hotel.created_at).all()
            if hotel.city is not None and hotel.city.name.casefold() == wanted
        ]
    else:
        if filters.country_id is not None:
            query = query.join(models.Hotel.city).filter(
                models.City.country_id == str(filters.country_id)
            )
        hotels = query.order_by(models.Hotel.created_at).all()

    if filters.num_guests is not None:
        hotels = [
            hotel
            for hotel in hotels
            if any(rt.is_active and rt.max_occupancy >= filters.num_guests for rt in hotel.room_types)
        ]

    hotels.sort(key=lambda h: h.star_rating if h.star_rating is not None else -1, reverse=True)
    logger.info("Hotel search %s matched %d hotel(s)", filters.model_dump(exclude_none=True), len(hotels))
    return [hotel_out(db, hotel, check_in, check_out) for hotel in hotels]


def get_hotel(db: Session, hotel_id: str, check_in=None, check_out=None) -> schemas.HotelOut:
    if check_in is None or check_out is None:
        check_in = check_out = None
    nights(check_in, check_out)
    hotel = _catalog_query(db).filter(models.Hotel.id == hotel_id).first()
    if not hotel:
        raise NotFound("Hotel not found")
    return hotel_out(db, hotel, check_in, check_out)
