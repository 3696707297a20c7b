from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from .. import schemas, models
from ..deps import get_db, get_current_user
from ..services import booking_requests

router = APIRouter(prefix="/booking-requests", tags=["booking-requests"])


@router.get("", response_model=schemas.RequestList)
def list_my_requests(
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
):
    """List the caller's seat requests, newest first, each with its slot."""
    return {"requests": booking_requests.list_user_requests(db, current_user.id)}


@router.post("", response_model=schemas.RequestResult, status_code=201)
def create_request(
    request_in: schemas.BookingRequestCreate,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
):
    """
    Request seats on a booking slot.

    The seats are taken from the slot in the same transaction that records
    the request.

    Raises
    ------
    - 404 if the slot does not exist.
    - 400 if fewer seats are left than requested.
    - 503 if the store circuit is open.
    """
    request = booking_requests.create_request(
        db,
        user_id=current_user.id,
        booking_id=str(request_in.booking_id),
        seats=request_in.seats,
    )
    return {"request": request}
