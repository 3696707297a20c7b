import os
from dotenv import load_dotenv

load_dotenv()


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Config:
    # ------------------------
    # Database
    # ------------------------
    DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./stayhub.db")

    # ------------------------
    # Auth / JWT
    # ------------------------
    SECRET_KEY = os.getenv("SECRET_KEY", "CHANGE_THIS_SECRET_IN_REAL_PROJECT")
    JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
    ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "60"))

    # ------------------------
    # Rate limiting
    # ------------------------
    RATE_LIMIT = os.getenv("RATE_LIMIT", "60/minute")
    RATE_LIMIT_ENABLED = _flag("RATE_LIMIT_ENABLED", "true")

    # ------------------------
    # Logging
    # ------------------------
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
    LOG_FILE = os.getenv("LOG_FILE")

    # ------------------------
    # Circuit breaker around store writes
    # ------------------------
    BREAKER_FAIL_MAX = int(os.getenv("BREAKER_FAIL_MAX", "3"))
    BREAKER_RESET_TIMEOUT = int(os.getenv("BREAKER_RESET_TIMEOUT", "60"))

    # ------------------------
    # Profile client
    # ------------------------
    PROFILE_API_URL = os.getenv("PROFILE_API_URL", "http://localhost:8000")
    PROFILE_FETCH_RETRIES = int(os.getenv("PROFILE_FETCH_RETRIES", "3"))
    PROFILE_FETCH_DELAY = float(os.getenv("PROFILE_FETCH_DELAY", "1.0"))

    # ------------------------
    # Catalog
    # ------------------------
    DEFAULT_ROOMS_PER_TYPE = int(os.getenv("DEFAULT_ROOMS_PER_TYPE", "5"))
