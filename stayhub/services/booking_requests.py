"""
Seat requests against legacy booking slots.

The slot load, capacity check, seat decrement and request insert form one
unit of work. The decrement is a conditional update
(``available_seats >= seats``), so two requests racing for the same seats
cannot both be accepted even if both passed the initial check.
"""
from datetime import datetime

from sqlalchemy.orm import Session, selectinload

from .. import models
from ..circuit_breaker import guarded_commit
from ..errors import InsufficientCapacity, NotFound, ValidationFailed
from ..logger import setup_logger

logger = setup_logger(__name__)


def list_available_bookings(db: Session) -> list[models.LegacyBooking]:
    return (
        db.query(models.LegacyBooking)
        .filter(models.LegacyBooking.status == "available")
        .order_by(models.LegacyBooking.date.asc(), models.LegacyBooking.time.asc())
        .all()
    )


def list_all_bookings(db: Session) -> list[models.LegacyBooking]:
    return db.query(models.LegacyBooking).order_by(models.LegacyBooking.created_at.desc()).all()


def create_booking(db: Session, data: dict, user_id: str | None = None) -> models.LegacyBooking:
    if data.get("available_seats") is None:
        data["available_seats"] = data["max_seats"]
    booking = models.LegacyBooking(**data, user_id=user_id)
    db.add(booking)
    guarded_commit(db, "create booking slot")
    db.refresh(booking)
    logger.info("Booking slot %s created with %d seat(s)", booking.id, booking.max_seats)
    return booking


def update_booking(db: Session, booking_id: str, data: dict) -> models.LegacyBooking:
    booking = db.query(models.LegacyBooking).filter(models.LegacyBooking.id == booking_id).first()
    if not booking:
        raise NotFound("Booking not found")

    seats = data.get("available_seats")
    if seats is not None and seats > booking.max_seats:
        raise ValidationFailed(
            "available_seats",
            "Available seats cannot exceed max seats",
            "too_big",
        )

    for field, value in data.items():
        setattr(booking, field, value)
    booking.updated_at = datetime.utcnow()
    guarded_commit(db, "update booking slot")
    db.refresh(booking)
    return booking


def list_user_requests(db: Session, user_id: str) -> list[models.BookingRequest]:
    return (
        db.query(models.BookingRequest)
        .options(selectinload(models.BookingRequest.booking))
        .filter(models.BookingRequest.user_id == user_id)
        .order_by(models.BookingRequest.created_at.desc())
        .all()
    )


def _take_seats(db: Session, booking_id: str, seats: int) -> bool:
    updated = (
        db.query(models.LegacyBooking)
        .filter(
            models.LegacyBooking.id == booking_id,
            models.LegacyBooking.available_seats >= seats,
        )
        .update(
            {
                models.LegacyBooking.available_seats: models.LegacyBooking.available_seats - seats,
                models.LegacyBooking.updated_at: datetime.utcnow(),
            },
            synchronize_session=False,
        )
    )
    return updated == 1


def create_request(db: Session, user_id: str, booking_id: str, seats: int) -> models.BookingRequest:
    """
    Request ``seats`` seats on a booking slot for ``user_id``.

    Raises
    ------
    NotFound
        The slot does not exist; nothing is written.
    InsufficientCapacity
        Fewer than ``seats`` seats are left; nothing is written.
    """
    booking = db.query(models.LegacyBooking).filter(models.LegacyBooking.id == booking_id).first()
    if not booking:
        raise NotFound("Booking not found")

    if booking.available_seats < seats:
        logger.info(
            "Rejected request for %d seat(s) on %s: %d left",
            seats, booking_id, booking.available_seats,
        )
        raise InsufficientCapacity("Not enough seats available")

    if not _take_seats(db, booking_id, seats):
        db.rollback()
        logger.warning("Seats on %s were taken concurrently, rejecting request", booking_id)
        raise InsufficientCapacity("Not enough seats available")

    request = models.BookingRequest(
        booking_id=booking_id,
        user_id=user_id,
        seats=seats,
        status="pending",
    )
    db.add(request)
    guarded_commit(db, "create booking request")
    db.refresh(request)
    logger.info("Booking request %s created: %d seat(s) on %s", request.id, seats, booking_id)
    return request
