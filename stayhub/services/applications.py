"""
Provider (host) onboarding applications.

A submission is stored as one row. The typed columns are preferred; if the
store rejects them because the table has drifted from the model, the whole
submission is kept as a JSON blob in ``application_data`` instead, so a
schema problem never loses an application.
"""
from sqlalchemy.exc import OperationalError, ProgrammingError
from sqlalchemy.orm import Session

from .. import models, schemas
from ..circuit_breaker import guarded_commit
from ..errors import NotFound
from ..logger import setup_logger
from . import drafts

logger = setup_logger(__name__)

ONBOARDING_DRAFT = "hotel_onboarding"

TYPED_FIELDS = (
    "hotel_name",
    "hotel_description",
    "hotel_street",
    "hotel_city",
    "hotel_state",
    "hotel_country",
    "hotel_zip_code",
    "hotel_phone",
    "hotel_email",
    "number_of_room_types",
    "total_number_of_rooms",
    "hotel_amenities",
    "room_types",
)


def build_record(payload: schemas.ProviderApplicationCreate) -> dict:
    """Flatten the wizard payload into the stored shape."""
    info, setup = payload.basicInfo, payload.roomSetup
    return {
        "hotel_name": info.name,
        "hotel_description": info.description,
        "hotel_street": info.street,
        "hotel_city": info.city,
        "hotel_state": info.state,
        "hotel_country": info.country,
        "hotel_zip_code": info.zipCode,
        "hotel_phone": info.phone,
        "hotel_email": str(info.email),
        "number_of_room_types": setup.numberOfRoomTypes,
        "total_number_of_rooms": setup.totalNumberOfRooms,
        "hotel_amenities": list(setup.amenities),
        "room_types": [
            {
                "name": rt.name,
                "number_of_rooms": rt.numberOfRooms,
                "price_per_night": rt.pricePerNight,
                "max_occupancy": rt.maxOccupancy,
                "amenities": list(rt.amenities),
                "images_count": len(rt.images),
            }
            for rt in payload.roomTypes
        ],
    }


def _insert_typed(db: Session, user_id: str, record: dict) -> models.ProviderApplication:
    application = models.ProviderApplication(user_id=user_id, status="pending", **record)
    db.add(application)
    db.flush()
    return application


def _insert_fallback(db: Session, user_id: str, record: dict) -> models.ProviderApplication:
    application = models.ProviderApplication(
        user_id=user_id,
        status="pending",
        application_data=record,
    )
    db.add(application)
    return application


def submit_application(
    db: Session,
    user_id: str,
    payload: schemas.ProviderApplicationCreate,
) -> models.ProviderApplication:
    record = build_record(payload)
    try:
        application = _insert_typed(db, user_id, record)
    except (OperationalError, ProgrammingError):
        db.rollback()
        logger.exception("Typed insert of provider application failed, storing JSON blob")
        application = _insert_fallback(db, user_id, record)

    # image binaries are handed to file storage separately; only counts are kept
    drafts.delete_draft(db, user_id, ONBOARDING_DRAFT, commit=False)
    guarded_commit(db, "submit provider application")
    db.refresh(application)
    logger.info(
        "Provider application %s submitted by %s with %d room type(s)",
        application.id, user_id, len(record["room_types"]),
    )
    return application


def application_out(application: models.ProviderApplication) -> schemas.ProviderApplicationOut:
    """Same response shape for typed rows and JSON-blob rows."""
    blob = application.application_data or {}
    fields = {}
    for name in TYPED_FIELDS:
        value = getattr(application, name)
        fields[name] = value if value is not None else blob.get(name)
    fields["hotel_amenities"] = fields["hotel_amenities"] or []
    fields["room_types"] = fields["room_types"] or []

    return schemas.ProviderApplicationOut(
        id=application.id,
        user_id=application.user_id,
        status=application.status,
        admin_note=application.admin_note,
        created_at=application.created_at,
        updated_at=application.updated_at,
        **fields,
    )


def list_user_applications(db: Session, user_id: str) -> list[models.ProviderApplication]:
    return (
        db.query(models.ProviderApplication)
        .filter(models.ProviderApplication.user_id == user_id)
        .order_by(models.ProviderApplication.created_at.desc())
        .all()
    )


def list_applications(db: Session, status: str | None = None) -> list[models.ProviderApplication]:
    query = db.query(models.ProviderApplication)
    if status is not None:
        query = query.filter(models.ProviderApplication.status == status)
    return query.order_by(models.ProviderApplication.created_at.desc()).all()


def review_application(
    db: Session,
    application_id: str,
    status: str,
    admin_note: str | None = None,
) -> models.ProviderApplication:
    application = (
        db.query(models.ProviderApplication)
        .filter(models.ProviderApplication.id == application_id)
        .first()
    )
    if not application:
        raise NotFound("Application not found")

    application.status = status
    if admin_note is not None:
        application.admin_note = admin_note
    guarded_commit(db, "review provider application")
    db.refresh(application)
    logger.info("Provider application %s marked %s", application_id, status)
    return application
