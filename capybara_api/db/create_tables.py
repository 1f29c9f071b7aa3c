"""Provision the database and create the capybara table.

Run once before starting the service with the SQL backend:

    python -m capybara_api.db.create_tables
"""
from __future__ import annotations

import logging

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import SQLAlchemyError

from capybara_api.core.config import get_settings
from capybara_api.core.log import configure_logging

from .session import Base, build_engine
from . import models  # noqa: F401  # ensure models are imported for metadata

logger = logging.getLogger(__name__)


def create_database(url: str) -> bool:
    """Create the target PostgreSQL database when missing. Returns True if created."""
    target = make_url(url)
    if target.get_backend_name() != "postgresql" or not target.database:
        return False
    admin_url = target.set(database="postgres")
    admin = create_engine(admin_url, isolation_level="AUTOCOMMIT", future=True)
    try:
        with admin.connect() as conn:
            exists = conn.execute(
                text("SELECT 1 FROM pg_database WHERE datname = :name"),
                {"name": target.database},
            ).first()
            if exists:
                logger.info("Database %s already exists.", target.database)
                return False
            conn.execute(text(f"CREATE DATABASE \"{target.database}\" WITH ENCODING 'UTF8' TEMPLATE template0"))
            logger.info("Database %s created successfully.", target.database)
            return True
    finally:
        admin.dispose()


def create_all(engine: Engine) -> None:
    Base.metadata.create_all(bind=engine)


def migrate(url: str) -> None:
    create_database(url)
    engine = build_engine(url)
    try:
        create_all(engine)
    finally:
        engine.dispose()
    logger.info("Migration completed successfully.")


if __name__ == "__main__":
    settings = get_settings()
    configure_logging(settings.log_level)
    try:
        migrate(settings.database_url)
    except SQLAlchemyError as exc:
        raise SystemExit(f"Migration failed: {exc}") from exc
