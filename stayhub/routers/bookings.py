from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from .. import schemas, models
from ..deps import get_db, require_roles
from ..services import booking_requests

router = APIRouter(prefix="/bookings", tags=["bookings"])


@router.get("", response_model=schemas.BookingList)
def list_bookings(db: Session = Depends(get_db)):
    """List booking slots that are still open, soonest first."""
    return {"bookings": booking_requests.list_available_bookings(db)}


@router.post("", response_model=schemas.BookingResult, status_code=201)
def create_booking(
    booking_in: schemas.LegacyBookingCreate,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(require_roles("ADMIN")),
):
    """
    Create a booking slot. *(Admin-only)*

    ``available_seats`` defaults to ``max_seats`` and may never exceed it.
    """
    booking = booking_requests.create_booking(db, booking_in.model_dump(), user_id=current_user.id)
    return {"booking": booking}
