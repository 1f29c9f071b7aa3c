"""
Core utilities shared across the Capybara API.

This package hosts configuration helpers (env vars) and cross-cutting
concerns such as logging. Routers, services and repositories depend on these
primitives instead of reading the environment themselves.
"""
