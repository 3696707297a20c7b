from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from slowapi import Limiter
from slowapi.util import get_remote_address
from slowapi.middleware import SlowAPIMiddleware
from slowapi.errors import RateLimitExceeded

from .config import Config
from .database import Base, engine
from .routers import admin, auth, booking_requests, bookings, drafts, hotels, profile, provider_applications
from .error_handlers import register_exception_handlers
from .logger import setup_logger

logger = setup_logger("stayhub")

# -----------------------------------------
# Create DB tables
# -----------------------------------------
Base.metadata.create_all(bind=engine)

# -----------------------------------------
# Rate Limiter, per client IP
# -----------------------------------------
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[Config.RATE_LIMIT],
    enabled=Config.RATE_LIMIT_ENABLED,
)

app = FastAPI(
    title="StayHub Booking API",
    version="0.1.0",
    description="Hotel search, seat booking requests and provider onboarding.",
)

app.state.limiter = limiter
app.add_middleware(SlowAPIMiddleware)

# -----------------------------------------
# Global exception handlers
# -----------------------------------------
register_exception_handlers(app)


@app.exception_handler(RateLimitExceeded)
async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded):
    return JSONResponse(
        status_code=429,
        content={
            "detail": "Rate limit exceeded. Please try again later.",
            "error": "too_many_requests",
            "path": str(request.url.path),
        },
    )


# -----------------------------------------
# Routers, all under /api
# -----------------------------------------
for module in (auth, profile, hotels, bookings, booking_requests, admin, provider_applications, drafts):
    app.include_router(module.router, prefix="/api")


# -----------------------------------------
# Health check endpoint
# -----------------------------------------
@app.get("/health", tags=["health"])
def health_check():
    return {"status": "ok"}


logger.info("StayHub API ready (rate limit %s, enabled=%s)", Config.RATE_LIMIT, Config.RATE_LIMIT_ENABLED)
