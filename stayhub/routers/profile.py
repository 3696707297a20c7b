from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from .. import schemas, models
from ..deps import get_db, get_current_user, is_admin
from ..errors import Forbidden
from ..services import profiles

router = APIRouter(prefix="/profile", tags=["profile"])


@router.post("", response_model=schemas.ProfileResult)
def fetch_profile(
    payload: schemas.ProfileRequest | None = None,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
):
    """
    Fetch a profile, creating it from the identity when missing.

    ``userId`` defaults to the caller. Only admins may fetch someone else's.
    """
    user_id = str(payload.userId) if payload and payload.userId else current_user.id
    if user_id != current_user.id and not is_admin(db, current_user):
        raise Forbidden("Not allowed to read this profile")

    profile, created = profiles.fetch_or_create_profile(db, user_id)
    return {"success": True, "profile": schemas.ProfileOut.model_validate(profile), "created": created}


@router.patch("", response_model=schemas.ProfileOut)
def update_own_profile(
    profile_update: schemas.ProfileUpdate,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
):
    """Update the caller's name and phone number."""
    return profiles.update_profile(db, current_user.id, profile_update.model_dump(exclude_unset=True))
