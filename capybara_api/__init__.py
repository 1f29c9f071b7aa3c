"""Capybara API: CRUD over capybaras, backed by memory or SQL."""

__version__ = "1.0.0"
