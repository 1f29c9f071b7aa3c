"""Domain types for the Capybara API."""

from .capybaras import (
    Capybara,
    CapybaraError,
    CapybaraInput,
    NotFoundError,
    StorageError,
    ValidationError,
)

__all__ = [
    "Capybara",
    "CapybaraError",
    "CapybaraInput",
    "NotFoundError",
    "StorageError",
    "ValidationError",
]
