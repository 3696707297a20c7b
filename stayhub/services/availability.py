"""
Availability and pricing for room types.

Inventory is tracked per night in ``room_inventory``: a row holds the number
of rooms already taken for one room type on one date. A stay covers the
nights ``[check_in, check_out)``; a night without a ledger row has nothing
held yet. Searches and quotes only read the ledger; ``hold_rooms`` is the
write side that a room booking flow calls when it confirms a stay.
"""
import math
from datetime import date, timedelta

from sqlalchemy import func
from sqlalchemy.orm import Session

from .. import models
from ..errors import InsufficientCapacity, NotFound, ValidationFailed
from ..logger import setup_logger

logger = setup_logger(__name__)


def nights(check_in, check_out) -> int:
    """
    Number of nights between two dates, rounded up.

    Returns 0 when either date is missing.
    """
    if check_in is None or check_out is None:
        return 0
    seconds = (check_out - check_in).total_seconds()
    if seconds <= 0:
        raise ValidationFailed(
            "check_out_date",
            "Check-out date must be after check-in date",
            "invalid_date_range",
        )
    return math.ceil(seconds / 86400)


def total_cost(rate: float, night_count: int) -> float:
    # no dates selected: show the nightly rate
    if night_count > 0:
        return rate * night_count
    return rate


def current_price(room_type) -> float:
    price = getattr(room_type, "current_price", None)
    if price is not None:
        return price
    return room_type.base_price_per_night


def stay_dates(check_in: date, check_out: date) -> list[date]:
    return [check_in + timedelta(days=i) for i in range((check_out - check_in).days)]


def get_room_type(db: Session, room_type_id: str) -> models.RoomType:
    room_type = db.query(models.RoomType).filter(models.RoomType.id == room_type_id).first()
    if not room_type:
        raise NotFound("Room type not found")
    return room_type


def rooms_left(db: Session, room_type: models.RoomType, check_in: date, check_out: date) -> int:
    """Rooms of this type free on every night of the stay."""
    held = (
        db.query(func.max(models.RoomInventory.rooms_held))
        .filter(
            models.RoomInventory.room_type_id == room_type.id,
            models.RoomInventory.date >= check_in,
            models.RoomInventory.date < check_out,
        )
        .scalar()
    )
    return max(room_type.total_rooms - (held or 0), 0)


def is_available(
    db: Session,
    room_type_id: str,
    check_in: date,
    check_out: date,
    rooms_needed: int = 1,
) -> bool:
    room_type = get_room_type(db, room_type_id)
    nights(check_in, check_out)
    if rooms_needed < 1:
        raise ValidationFailed("rooms", "At least 1 room is required", "too_small")
    return rooms_left(db, room_type, check_in, check_out) >= rooms_needed


def hold_rooms(
    db: Session,
    room_type_id: str,
    check_in: date,
    check_out: date,
    rooms: int = 1,
) -> None:
    """
    Take ``rooms`` rooms for every night of the stay.

    Runs inside the caller's transaction; the caller commits. Each night is
    incremented only while it stays within ``total_rooms``, so two callers
    racing for the last room cannot both succeed. If any night is full the
    transaction is rolled back and ``InsufficientCapacity`` is raised.
    """
    room_type = get_room_type(db, room_type_id)
    nights(check_in, check_out)
    if rooms < 1:
        raise ValidationFailed("rooms", "At least 1 room is required", "too_small")

    days = stay_dates(check_in, check_out)
    known = {
        row.date
        for row in db.query(models.RoomInventory.date).filter(
            models.RoomInventory.room_type_id == room_type.id,
            models.RoomInventory.date >= check_in,
            models.RoomInventory.date < check_out,
        )
    }
    for day in days:
        if day not in known:
            db.add(models.RoomInventory(room_type_id=room_type.id, date=day, rooms_held=0))
    db.flush()

    updated = (
        db.query(models.RoomInventory)
        .filter(
            models.RoomInventory.room_type_id == room_type.id,
            models.RoomInventory.date >= check_in,
            models.RoomInventory.date < check_out,
            models.RoomInventory.rooms_held + rooms <= room_type.total_rooms,
        )
        .update(
            {models.RoomInventory.rooms_held: models.RoomInventory.rooms_held + rooms},
            synchronize_session=False,
        )
    )
    if updated != len(days):
        db.rollback()
        logger.warning(
            "Hold of %s room(s) for room type %s from %s to %s rejected",
            rooms, room_type_id, check_in, check_out,
        )
        raise InsufficientCapacity("Not enough rooms available for the selected dates")


def quote(
    db: Session,
    hotel_id: str,
    room_type_id: str,
    check_in: date,
    check_out: date,
    rooms: int = 1,
) -> dict:
    """Price and availability of one room type for a stay."""
    room_type = (
        db.query(models.RoomType)
        .join(models.Hotel)
        .filter(
            models.RoomType.id == room_type_id,
            models.RoomType.hotel_id == hotel_id,
            models.Hotel.is_active == True,
        )
        .first()
    )
    if not room_type:
        raise NotFound("Room type not found")

    night_count = nights(check_in, check_out)
    rate = current_price(room_type)
    left = rooms_left(db, room_type, check_in, check_out)
    return {
        "room_type_id": room_type.id,
        "check_in": check_in,
        "check_out": check_out,
        "rooms": rooms,
        "nights": night_count,
        "nightly_rate": rate,
        "total_cost": total_cost(rate, night_count) * rooms,
        "available_rooms": left,
        "available": room_type.is_active and left >= rooms,
    }
