"""
Configuration helpers for the servicedesk backend.

Routers and services read settings through ``get_settings()`` instead of
fetching os.environ directly, so tests can swap the environment and clear
the cache.
"""

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
import os

DEFAULT_DATA_FILE = Path(__file__).resolve().parents[1] / "data.json"


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    public_base_url: str
    storage_backend: str
    data_file: str
    database_url: str
    admin_emails: frozenset[str]
    identity_header_prefix: str
    max_image_bytes: int
    booking_rate_limit: int
    booking_rate_window_seconds: int
    log_level: str


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _int(value: str, default: int = 0) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    def _csv(value: str | None) -> frozenset[str]:
        return frozenset(x.strip().lower() for x in (value or "").split(",") if x.strip())

    return Settings(
        app_env=(os.getenv("APP_ENV") or "dev").lower(),
        public_base_url=os.getenv("PUBLIC_BASE_URL", "http://localhost:8000").rstrip("/"),
        storage_backend=(os.getenv("STORAGE_BACKEND") or "json").strip().lower(),
        data_file=os.getenv("DATA_FILE") or str(DEFAULT_DATA_FILE),
        database_url=os.getenv("DATABASE_URL", ""),
        admin_emails=_csv(os.getenv("ADMIN_EMAILS")),
        identity_header_prefix=(os.getenv("IDENTITY_HEADER_PREFIX") or "x-user-").lower(),
        max_image_bytes=_int(os.getenv("MAX_IMAGE_BYTES", "2097152"), 2 * 1024 * 1024),
        booking_rate_limit=_int(os.getenv("BOOKING_RATE_LIMIT", "30"), 30),
        booking_rate_window_seconds=_int(os.getenv("BOOKING_RATE_WINDOW_SECONDS", "60"), 60),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
    )
