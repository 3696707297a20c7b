from pybreaker import CircuitBreaker, CircuitBreakerError
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from .config import Config
from .errors import ServiceError, ServiceUnavailable, UpstreamStoreError, ValidationFailed
from .logger import setup_logger

logger = setup_logger(__name__)

# Guards commits against the entity store. Business rejections are not
# store failures and never trip the breaker.
store_circuit_breaker = CircuitBreaker(
    fail_max=Config.BREAKER_FAIL_MAX,
    reset_timeout=Config.BREAKER_RESET_TIMEOUT,
    exclude=[ServiceError],
    name="entity_store_breaker",
)


def guarded_commit(db, action: str) -> None:
    """
    Commit the session through the store breaker.

    Any store failure rolls the whole unit of work back, so a request is
    either fully persisted or not at all. A constraint violation is the
    caller's data, not a store outage, so it is reported as a 400 and does
    not count against the breaker.
    """

    @store_circuit_breaker
    def _commit():
        try:
            db.commit()
        except IntegrityError as e:
            db.rollback()
            logger.warning("Constraint violation while trying to %s: %s", action, e.orig)
            raise ValidationFailed(
                "body",
                "Request violates a data constraint",
                "constraint_violation",
            )

    try:
        _commit()
    except CircuitBreakerError:
        db.rollback()
        logger.error("Circuit open, refusing to %s", action)
        raise ServiceUnavailable(
            "Booking service temporarily unavailable (circuit open). Please try again later."
        )
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Store failure while trying to %s", action)
        raise UpstreamStoreError()
