from fastapi import Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from .errors import ServiceError, UpstreamStoreError, ValidationFailed
from .logger import setup_logger

logger = setup_logger(__name__)

# request parts FastAPI prefixes onto error locations
_LOCATIONS = ("body", "query", "path", "header", "cookie")


def validation_details(errors) -> list[dict]:
    """Flatten pydantic errors into ``{field, message, code}`` entries."""
    details = []
    for err in errors:
        loc = [str(part) for part in err.get("loc", ()) if part not in _LOCATIONS]
        details.append(
            {
                "field": ".".join(loc),
                "message": err.get("msg", "Invalid value"),
                "code": err.get("type", "invalid"),
            }
        )
    return details


def register_exception_handlers(app):
    """
    Register global exception handlers for standardized error responses.
    """

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=400,
            content={
                "error": "Validation failed",
                "detail": "Invalid request data",
                "path": str(request.url.path),
                "details": validation_details(exc.errors()),
            },
        )

    @app.exception_handler(ServiceError)
    async def service_exception_handler(request: Request, exc: ServiceError):
        content = {
            "error": exc.error,
            "detail": exc.message,
            "path": str(request.url.path),
        }
        if isinstance(exc, ValidationFailed):
            content["details"] = exc.details
        if isinstance(exc, UpstreamStoreError):
            # detail was logged where the store call failed
            content["detail"] = "Internal server error"
        return JSONResponse(status_code=exc.status_code, content=content)

    @app.exception_handler(SQLAlchemyError)
    async def store_exception_handler(request: Request, exc: SQLAlchemyError):
        logger.exception("Store error on %s", request.url.path)
        return JSONResponse(
            status_code=500,
            content={
                "error": "Internal server error",
                "detail": "Internal server error",
                "path": str(request.url.path),
            },
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": "HTTP error",
                "detail": exc.detail,
                "path": str(request.url.path),
            },
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s", request.url.path)
        return JSONResponse(
            status_code=500,
            content={
                "error": "Internal server error",
                "detail": "An unexpected error occurred",
                "path": str(request.url.path),
            },
        )
