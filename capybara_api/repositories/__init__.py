"""
Persistence adapters.

Both adapters honour the CapybaraRepository contract; services depend on that
contract and never on the storage choice.
"""

from capybara_api.core.config import Settings

from .base import CapybaraRepository
from .memory_repository import MemoryRepository
from .sql_repository import SQLRepository


def build_repository(settings: Settings) -> CapybaraRepository:
    if settings.storage_backend == "sql":
        return SQLRepository.from_url(settings.database_url)
    return MemoryRepository()


__all__ = ["CapybaraRepository", "MemoryRepository", "SQLRepository", "build_repository"]
