"""Capybara entity, request schema and error taxonomy."""
from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

NAME_REQUIRED = "Name is required"
NOT_FOUND = "Capybara not found"


class Capybara(BaseModel):
    """A stored capybara."""

    model_config = ConfigDict(from_attributes=True, json_schema_extra={"example": {"id": 1, "name": "Fluffy"}})

    id: int = Field(description="The auto-generated id of the capybara")
    name: str = Field(description="The name of the capybara")


class CapybaraInput(BaseModel):
    """Body accepted by create and update."""

    model_config = ConfigDict(json_schema_extra={"example": {"name": "Fluffy"}})

    # Optional here so that a missing name is reported as 400, not as a schema error.
    name: Optional[str] = Field(default=None, description="The name of the capybara")


class CapybaraError(Exception):
    """Base exception for capybara workflows."""


class ValidationError(CapybaraError):
    """Raised when a required field is missing or empty."""

    def __init__(self, message: str = NAME_REQUIRED):
        super().__init__(message)
        self.message = message


class NotFoundError(CapybaraError):
    """Raised when no capybara has the requested id."""

    def __init__(self, capybara_id: int | None = None, message: str = NOT_FOUND):
        super().__init__(message)
        self.capybara_id = capybara_id
        self.message = message


class StorageError(CapybaraError):
    """Raised when the storage backend fails (connectivity, constraints, timeouts)."""


def decode_input(payload: Any) -> CapybaraInput:
    """Decode a raw JSON body into CapybaraInput or raise ValidationError."""
    if not isinstance(payload, dict):
        raise ValidationError()
    try:
        return CapybaraInput.model_validate(payload)
    except PydanticValidationError as exc:
        raise ValidationError() from exc


def require_name(payload: Any) -> str:
    """Return the non-empty name carried by a raw body or raise ValidationError."""
    name = decode_input(payload).name
    if not name:
        raise ValidationError()
    return name
