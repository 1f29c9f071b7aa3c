"""
Configuration helpers for the Capybara API.

Settings are read once from environment variables so that routers, services and
repositories never fetch os.environ directly.
"""

from dataclasses import dataclass
from functools import lru_cache
import os

STORAGE_BACKENDS = ("memory", "sql")


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    host: str
    port: int
    storage_backend: str
    postgres_host: str
    postgres_user: str
    postgres_password: str
    postgres_db: str
    postgres_port: int
    database_url: str
    request_timeout_seconds: float
    cors_origins: tuple[str, ...]
    log_level: str


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _int(value: str, default: int = 0) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    def _float(value: str, default: float = 0.0) -> float:
        try:
            return float(value)
        except (TypeError, ValueError):
            return default

    pg_host = os.getenv("POSTGRES_SERVICE_HOST", "localhost")
    pg_user = os.getenv("POSTGRES_USER", "postgres")
    pg_password = os.getenv("POSTGRES_PASSWORD", "postgres")
    pg_db = os.getenv("POSTGRES_DB", "capybaradb")
    pg_port = _int(os.getenv("POSTGRES_PORT", "5432"), 5432)
    default_url = f"postgresql+psycopg2://{pg_user}:{pg_password}@{pg_host}:{pg_port}/{pg_db}"

    backend = (os.getenv("STORAGE_BACKEND") or "memory").strip().lower()
    if backend not in STORAGE_BACKENDS:
        raise RuntimeError(f"STORAGE_BACKEND must be one of {', '.join(STORAGE_BACKENDS)}, got {backend!r}.")

    origins = tuple(o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip())

    return Settings(
        app_env=(os.getenv("APP_ENV") or "dev").lower(),
        host=os.getenv("HOST", "0.0.0.0"),
        port=_int(os.getenv("PORT", "3000"), 3000),
        storage_backend=backend,
        postgres_host=pg_host,
        postgres_user=pg_user,
        postgres_password=pg_password,
        postgres_db=pg_db,
        postgres_port=pg_port,
        database_url=(os.getenv("DATABASE_URL") or default_url).strip(),
        request_timeout_seconds=_float(os.getenv("REQUEST_TIMEOUT_SECONDS", "30"), 30.0),
        cors_origins=origins or ("*",),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
    )
