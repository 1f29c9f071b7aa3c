"""Process-wide logging setup."""
from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

_configured = False


def _level(value: str | None, default: int = logging.INFO) -> int:
    resolved = logging.getLevelName((value or "").strip().upper())
    return resolved if isinstance(resolved, int) else default


def configure_logging(level: str = "INFO") -> None:
    """Install a single stream handler on the root logger (idempotent).

    Unknown level names fall back to INFO.
    """
    global _configured
    root = logging.getLogger()
    root.setLevel(_level(level))
    if _configured:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
    _configured = True
