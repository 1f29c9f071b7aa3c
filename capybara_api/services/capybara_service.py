"""Capybara use cases (list, lookup, create, rename, remove)."""

from __future__ import annotations

import logging
from typing import Any

from capybara_api.domain.capybaras import (
    Capybara,
    NotFoundError,
    require_name,
)
from capybara_api.repositories.base import CapybaraRepository

logger = logging.getLogger(__name__)


class CapybaraService:
    """Translates repository absence signals into the error taxonomy.

    StorageError raised by the repository propagates untouched.
    """

    def __init__(self, repository: CapybaraRepository) -> None:
        self.repository = repository

    def list_capybaras(self) -> list[Capybara]:
        return self.repository.list_all()

    def get_capybara(self, capybara_id: int) -> Capybara:
        entity = self.repository.get_by_id(capybara_id)
        if entity is None:
            raise NotFoundError(capybara_id)
        return entity

    def create_capybara(self, payload: Any) -> Capybara:
        name = require_name(payload)
        entity = self.repository.insert(name)
        logger.info("Created capybara %s", entity.id)
        return entity

    def update_capybara(self, capybara_id: int, payload: Any) -> Capybara:
        # existence first: a missing id is 404 whatever the body holds
        self.get_capybara(capybara_id)
        name = require_name(payload)
        entity = self.repository.update(capybara_id, name)
        if entity is None:
            raise NotFoundError(capybara_id)
        return entity

    def delete_capybara(self, capybara_id: int) -> None:
        if not self.repository.delete(capybara_id):
            raise NotFoundError(capybara_id)
        logger.info("Deleted capybara %s", capybara_id)
