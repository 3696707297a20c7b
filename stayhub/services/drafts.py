"""Resumable form drafts, one per user and draft kind."""
from sqlalchemy.orm import Session

from .. import models
from ..circuit_breaker import guarded_commit
from ..errors import NotFound


def _find(db: Session, user_id: str, kind: str) -> models.Draft | None:
    return (
        db.query(models.Draft)
        .filter(models.Draft.user_id == user_id, models.Draft.kind == kind)
        .first()
    )


def get_draft(db: Session, user_id: str, kind: str) -> models.Draft:
    draft = _find(db, user_id, kind)
    if not draft:
        raise NotFound("Draft not found")
    return draft


def save_draft(
    db: Session,
    user_id: str,
    kind: str,
    form_data: dict,
    current_step: int = 1,
    completed_steps: list[int] | None = None,
) -> models.Draft:
    draft = _find(db, user_id, kind)
    if draft is None:
        draft = models.Draft(user_id=user_id, kind=kind)
        db.add(draft)
    draft.form_data = form_data
    draft.current_step = current_step
    draft.completed_steps = sorted(set(completed_steps or []))
    guarded_commit(db, "save draft")
    db.refresh(draft)
    return draft


def delete_draft(db: Session, user_id: str, kind: str, commit: bool = True) -> bool:
    draft = _find(db, user_id, kind)
    if draft is None:
        return False
    db.delete(draft)
    if commit:
        guarded_commit(db, "delete draft")
    return True
