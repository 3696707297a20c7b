from typing import Literal, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from .. import schemas, models
from ..deps import get_db, require_roles
from ..services import applications, booking_requests

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/bookings", response_model=schemas.BookingList)
def list_all_bookings(
    db: Session = Depends(get_db),
    _: models.User = Depends(require_roles("ADMIN")),
):
    """List every booking slot, newest first. *(Admin-only)*"""
    return {"bookings": booking_requests.list_all_bookings(db)}


@router.put("/bookings/{booking_id}", response_model=schemas.BookingResult)
def update_booking(
    booking_id: str,
    booking_update: schemas.AdminBookingUpdate,
    db: Session = Depends(get_db),
    _: models.User = Depends(require_roles("ADMIN")),
):
    """
    Change a slot's status and, optionally, its open seats. *(Admin-only)*

    Raises
    ------
    - 400 if ``available_seats`` exceeds the slot's ``max_seats``.
    - 404 if the slot does not exist.
    """
    booking = booking_requests.update_booking(
        db, booking_id, booking_update.model_dump(exclude_unset=True, exclude_none=True)
    )
    return {"booking": booking}


@router.get("/provider-applications", response_model=schemas.ApplicationList)
def list_applications(
    db: Session = Depends(get_db),
    status: Optional[Literal["pending", "approved", "rejected"]] = None,
    _: models.User = Depends(require_roles("ADMIN")),
):
    """List provider applications awaiting or past review. *(Admin-only)*"""
    rows = applications.list_applications(db, status)
    return {"success": True, "applications": [applications.application_out(a) for a in rows]}


@router.patch("/provider-applications/{application_id}", response_model=schemas.ProviderApplicationOut)
def review_application(
    application_id: str,
    review: schemas.ApplicationReview,
    db: Session = Depends(get_db),
    _: models.User = Depends(require_roles("ADMIN")),
):
    """Approve or reject an application, with an optional note. *(Admin-only)*"""
    application = applications.review_application(db, application_id, review.status, review.admin_note)
    return applications.application_out(application)
