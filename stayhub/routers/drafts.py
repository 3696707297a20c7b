from typing import Annotated

from fastapi import APIRouter, Depends, Path
from sqlalchemy.orm import Session

from .. import schemas, models
from ..deps import get_db, get_current_user
from ..errors import NotFound
from ..services import drafts

router = APIRouter(prefix="/drafts", tags=["drafts"])

DraftKind = Annotated[str, Path(pattern=r"^[a-z0-9_\-]{1,64}$")]


@router.get("/{kind}", response_model=schemas.DraftOut)
def get_draft(
    kind: DraftKind,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
):
    """Resume the caller's saved draft of this kind."""
    return drafts.get_draft(db, current_user.id, kind)


@router.put("/{kind}", response_model=schemas.DraftOut)
def save_draft(
    draft_in: schemas.DraftIn,
    kind: DraftKind,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
):
    """Save (or overwrite) the caller's draft of this kind."""
    return drafts.save_draft(
        db,
        current_user.id,
        kind,
        draft_in.form_data,
        draft_in.current_step,
        draft_in.completed_steps,
    )


@router.delete("/{kind}")
def discard_draft(
    kind: DraftKind,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
):
    """Discard the caller's draft of this kind."""
    if not drafts.delete_draft(db, current_user.id, kind):
        raise NotFound("Draft not found")
    return {"detail": "Draft deleted"}
