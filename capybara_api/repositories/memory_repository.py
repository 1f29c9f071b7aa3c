"""In-memory capybara storage, lives as long as the process."""
from __future__ import annotations

import threading
from typing import Optional

from capybara_api.domain.capybaras import Capybara


class MemoryRepository:
    """Ordered list of capybaras guarded by a lock.

    Ids come from a monotonic counter, so an id is never handed out twice even
    after deletions, and concurrent inserts cannot observe the same value.
    """

    def __init__(self) -> None:
        self._items: list[Capybara] = []
        self._next_id = 1
        self._lock = threading.Lock()

    def _index(self, capybara_id: int) -> int:
        for idx, item in enumerate(self._items):
            if item.id == capybara_id:
                return idx
        return -1

    def list_all(self) -> list[Capybara]:
        with self._lock:
            return [item.model_copy() for item in self._items]

    def get_by_id(self, capybara_id: int) -> Optional[Capybara]:
        with self._lock:
            idx = self._index(capybara_id)
            return self._items[idx].model_copy() if idx >= 0 else None

    def insert(self, name: str) -> Capybara:
        with self._lock:
            entity = Capybara(id=self._next_id, name=name)
            self._next_id += 1
            self._items.append(entity)
            return entity.model_copy()

    def update(self, capybara_id: int, name: str) -> Optional[Capybara]:
        with self._lock:
            idx = self._index(capybara_id)
            if idx < 0:
                return None
            self._items[idx] = Capybara(id=capybara_id, name=name)
            return self._items[idx].model_copy()

    def delete(self, capybara_id: int) -> bool:
        with self._lock:
            idx = self._index(capybara_id)
            if idx < 0:
                return False
            del self._items[idx]
            return True

    def close(self) -> None:
        pass
