from datetime import date
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from .. import schemas
from ..deps import get_db
from ..services import availability, hotel_search

router = APIRouter(prefix="/hotels", tags=["hotels"])


@router.get("", response_model=schemas.HotelList)
def search_hotels(
    db: Session = Depends(get_db),
    destination: Optional[str] = None,
    city_id: Optional[str] = Query(default=None, description="Legacy name of `destination`"),
    country_id: Optional[UUID] = None,
    check_in_date: Optional[date] = None,
    check_out_date: Optional[date] = None,
    num_guests: Optional[int] = Query(default=None, ge=1),
):
    """
    Search active hotels.

    Parameters
    ----------
    destination : str, optional
        City name, matched exactly ignoring case. ``city_id`` is accepted as
        an alias for older clients.
    country_id : UUID, optional
        Country of the hotel's city. Ignored when a destination is given.
    check_in_date, check_out_date : date, optional
        Stay dates (YYYY-MM-DD). With both set, room types report rooms free
        for the whole stay and the stay's total price.
    num_guests : int, optional
        Keep hotels with a room type that fits this many guests.
    """
    filters = schemas.HotelSearchFilters(
        destination=destination if destination is not None else city_id,
        country_id=country_id,
        check_in_date=check_in_date,
        check_out_date=check_out_date,
        num_guests=num_guests,
    )
    return {"hotels": hotel_search.search_hotels(db, filters)}


@router.get("/{hotel_id}", response_model=schemas.HotelDetail)
def get_hotel(
    hotel_id: str,
    db: Session = Depends(get_db),
    check_in_date: Optional[date] = None,
    check_out_date: Optional[date] = None,
):
    """
    Retrieve one active hotel with its room types.

    Raises a 404 error if the hotel does not exist or is inactive.
    """
    return {"hotel": hotel_search.get_hotel(db, hotel_id, check_in_date, check_out_date)}


@router.get("/{hotel_id}/room-types/{room_type_id}/quote", response_model=schemas.QuoteOut)
def quote_room_type(
    hotel_id: str,
    room_type_id: str,
    check_in: date,
    check_out: date,
    rooms: int = Query(default=1, ge=1),
    db: Session = Depends(get_db),
):
    """
    Price a stay and check whether enough rooms are free on every night.

    This does not hold any rooms.
    """
    return availability.quote(db, hotel_id, room_type_id, check_in, check_out, rooms)
