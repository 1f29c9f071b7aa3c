"""SQLAlchemy models for the capybara table."""
from __future__ import annotations

from sqlalchemy import Column, Integer, Text

from .session import Base


class CapybaraRow(Base):
    __tablename__ = "capybaras"
    # never hand out an id twice, even after the highest row is deleted
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(Text, nullable=False)
