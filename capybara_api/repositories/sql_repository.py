"""Capybara data access backed by SQLAlchemy."""
from __future__ import annotations

from contextlib import contextmanager
from functools import wraps
from typing import Iterator, Optional

from sqlalchemy import delete, select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from capybara_api.db.models import CapybaraRow
from capybara_api.db.session import build_engine, build_sessionmaker
from capybara_api.domain.capybaras import Capybara, StorageError


def _storage_errors(func):
    """Surface any SQLAlchemy failure as StorageError with the driver message."""

    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except SQLAlchemyError as exc:
            raise StorageError(str(exc.orig if getattr(exc, "orig", None) else exc)) from exc

    return wrapper


# capybaras.id is a 32-bit INTEGER; larger ids cannot name a row
MAX_ID = 2**31 - 1


def _valid_id(capybara_id: int) -> bool:
    return 0 < capybara_id <= MAX_ID


def _to_capybara(row: CapybaraRow) -> Capybara:
    return Capybara.model_validate(row)


class SQLRepository:
    """CRUD helpers wrapping one SQLAlchemy session per operation."""

    def __init__(self, engine: Engine) -> None:
        self.engine = engine
        self._sessionmaker = build_sessionmaker(engine)

    @classmethod
    def from_url(cls, url: str) -> "SQLRepository":
        return cls(build_engine(url))

    @contextmanager
    def _session(self) -> Iterator[Session]:
        session: Session = self._sessionmaker()
        try:
            yield session
        finally:
            session.close()

    @_storage_errors
    def list_all(self) -> list[Capybara]:
        with self._session() as session:
            rows = session.execute(select(CapybaraRow).order_by(CapybaraRow.id)).scalars().all()
            return [_to_capybara(row) for row in rows]

    @_storage_errors
    def get_by_id(self, capybara_id: int) -> Optional[Capybara]:
        if not _valid_id(capybara_id):
            return None
        with self._session() as session:
            row = session.get(CapybaraRow, capybara_id)
            return _to_capybara(row) if row else None

    @_storage_errors
    def insert(self, name: str) -> Capybara:
        entity = CapybaraRow(name=name)
        with self._session() as session:
            session.add(entity)
            session.commit()
            session.refresh(entity)
            return _to_capybara(entity)

    @_storage_errors
    def update(self, capybara_id: int, name: str) -> Optional[Capybara]:
        if not _valid_id(capybara_id):
            return None
        with self._session() as session:
            row = session.get(CapybaraRow, capybara_id)
            if not row:
                return None
            row.name = name
            session.commit()
            session.refresh(row)
            return _to_capybara(row)

    @_storage_errors
    def delete(self, capybara_id: int) -> bool:
        if not _valid_id(capybara_id):
            return False
        with self._session() as session:
            result = session.execute(delete(CapybaraRow).where(CapybaraRow.id == capybara_id))
            session.commit()
            return bool(result.rowcount)

    def close(self) -> None:
        self.engine.dispose()
