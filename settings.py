"""Environment-backed settings for the transactions API."""

import os
import logging
from typing import List, Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)


if os.getenv("APP_ENV", "dev").strip().lower() not in {"test", "ci"}:
    load_dotenv()


def database_url() -> str:
    return os.getenv("DATABASE_URL") or os.getenv("MONGO_URI") or "mongodb://localhost:27017"


def database_name() -> str:
    return os.getenv("DATABASE_NAME") or "Roxiler"


def seed_source_url() -> Optional[str]:
    """Return the third-party URL the store is seeded from, if configured."""
    return os.getenv("SEED_SOURCE_URL") or os.getenv("API_URL")


def seed_timeout() -> float:
    raw = os.getenv("SEED_TIMEOUT_SECONDS", "30")
    try:
        return float(raw)
    except ValueError:
        logger.warning("seed_timeout_invalid value=%s; using 30", raw)
        return 30.0


def cors_allow_origins() -> List[str]:
    raw = os.getenv("CORS_ALLOW_ORIGINS", "*")
    origins = [origin.strip() for origin in raw.split(",") if origin.strip()]
    return origins or ["*"]


def log_level() -> str:
    return (os.getenv("LOG_LEVEL") or "INFO").strip().upper()


def port() -> int:
    return int(os.getenv("PORT", 8000))
