#!/usr/bin/env python3
"""
Add a capybara directly to the SQL database.

Usage:
  python scripts/add_capybara.py --name Fluffy
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

# Make the capybara_api package importable when run directly
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from capybara_api.core.config import get_settings  # noqa: E402
from capybara_api.repositories.sql_repository import SQLRepository  # noqa: E402


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Add a capybara to the SQL database")
    ap.add_argument("--name", required=True, help="Name of the capybara (e.g. Fluffy)")
    ap.add_argument("--database-url", help="Override DATABASE_URL")
    args = ap.parse_args(argv)

    name = (args.name or "").strip()
    if not name:
        raise SystemExit("Name is required")

    repo = SQLRepository.from_url(args.database_url or get_settings().database_url)
    try:
        entity = repo.insert(name)
    finally:
        repo.close()
    print("OK: capybara added")
    print(f"  id: {entity.id}")
    print(f"  name: {entity.name}")
    return 0


if __name__ == "__main__":
    try:
        sys.exit(main())
    except Exception as exc:  # pragma: no cover - CLI usage
        sys.stderr.write(f"Error: {exc}\n")
        raise SystemExit(1)
