from sqlalchemy.orm import Session

from .. import models
from ..circuit_breaker import guarded_commit
from ..errors import NotFound
from ..logger import setup_logger

logger = setup_logger(__name__)


def fetch_or_create_profile(db: Session, user_id: str) -> tuple[models.Profile, bool]:
    """
    Return the profile for ``user_id``, creating it from the identity record
    when it does not exist yet. The flag tells whether it was created.
    """
    profile = db.query(models.Profile).filter(models.Profile.id == user_id).first()
    if profile:
        return profile, False

    user = db.query(models.User).filter(models.User.id == user_id).first()
    if not user:
        raise NotFound("User not found")

    profile = models.Profile(id=user.id, email=user.email, full_name=user.full_name)
    db.add(profile)
    guarded_commit(db, "create profile")
    db.refresh(profile)
    logger.info("Profile created for user %s", user_id)
    return profile, True


def update_profile(db: Session, user_id: str, data: dict) -> models.Profile:
    profile, _ = fetch_or_create_profile(db, user_id)
    for field, value in data.items():
        setattr(profile, field, value)
    guarded_commit(db, "update profile")
    db.refresh(profile)
    return profile
