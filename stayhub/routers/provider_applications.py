from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from .. import schemas, models
from ..deps import get_db, get_current_user
from ..errors import Forbidden
from ..services import applications

router = APIRouter(prefix="/provider-applications", tags=["provider-applications"])


@router.post("", response_model=schemas.ApplicationResult, status_code=201)
def submit_application(
    application_in: schemas.ProviderApplicationCreate,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
):
    """
    Submit a hotel onboarding application for admin review.

    The applicant is the caller; a ``userId`` in the body must match it.
    The caller's onboarding draft is cleared once the application is stored.
    """
    if application_in.userId is not None and str(application_in.userId) != current_user.id:
        raise Forbidden("Cannot submit an application for another user")

    application = applications.submit_application(db, current_user.id, application_in)
    return {
        "success": True,
        "message": "Application submitted successfully",
        "application": applications.application_out(application),
    }


@router.get("", response_model=schemas.ApplicationList)
def list_my_applications(
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
):
    """List the caller's applications, newest first."""
    rows = applications.list_user_applications(db, current_user.id)
    return {"success": True, "applications": [applications.application_out(a) for a in rows]}
