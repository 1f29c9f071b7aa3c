"""Storage contract shared by the in-memory and SQL adapters."""
from __future__ import annotations

from typing import Optional, Protocol

from capybara_api.domain.capybaras import Capybara


class CapybaraRepository(Protocol):
    """Adapters return None/False for absence and raise StorageError on faults."""

    def list_all(self) -> list[Capybara]:
        ...

    def get_by_id(self, capybara_id: int) -> Optional[Capybara]:
        ...

    def insert(self, name: str) -> Capybara:
        ...

    def update(self, capybara_id: int, name: str) -> Optional[Capybara]:
        ...

    def delete(self, capybara_id: int) -> bool:
        ...

    def close(self) -> None:
        ...
