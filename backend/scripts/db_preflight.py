"""Deployment preflight for the reference data service.

Usage:
    python scripts/db_preflight.py

Reads the same environment as the service and exits non-zero when a
production deployment would run on unsafe settings.
"""

from __future__ import annotations

import os
import sys
from typing import List, Mapping, Tuple

Check = Tuple[str, bool, str]


def _bool_env(env: Mapping[str, str], name: str, default: bool) -> bool:
    value = env.get(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "y", "on"}


def _int_env(env: Mapping[str, str], name: str, default: int) -> int:
    try:
        return int(env.get(name, default))
    except ValueError:
        return -1


def collect_checks(env: Mapping[str, str]) -> List[Check]:
    environment = env.get("ENVIRONMENT", "development").strip().lower()
    database_url = env.get("DATABASE_URL", "sqlite:///./referencedata.db")
    default_page_size = _int_env(env, "DEFAULT_PAGE_SIZE", 20)
    max_page_size = _int_env(env, "MAX_PAGE_SIZE", 1000)

    checks: List[Check] = [
        (
            "page sizes are positive and DEFAULT_PAGE_SIZE <= MAX_PAGE_SIZE",
            0 < default_page_size <= max_page_size,
            f"DEFAULT_PAGE_SIZE={default_page_size} MAX_PAGE_SIZE={max_page_size}",
        ),
    ]

    if environment in {"production", "prod"}:
        auto_create_tables = _bool_env(env, "AUTO_CREATE_TABLES", True)
        checks.extend(
            [
                (
                    "DATABASE_URL is not SQLite",
                    "sqlite" not in database_url.lower(),
                    f"DATABASE_URL={database_url}",
                ),
                (
                    "AUTO_CREATE_TABLES is disabled (schema comes from alembic)",
                    not auto_create_tables,
                    f"AUTO_CREATE_TABLES={auto_create_tables}",
                ),
                (
                    "SEARCH_PROFILING_ENABLED is off",
                    not _bool_env(env, "SEARCH_PROFILING_ENABLED", False),
                    "step timings are logged per search when enabled",
                ),
            ]
        )
    return checks


def run(env: Mapping[str, str] = os.environ) -> int:
    checks = collect_checks(env)
    print("ReferenceData DB Preflight")
    print(f"- environment: {env.get('ENVIRONMENT', 'development')}")

    failed = False
    for title, ok, detail in checks:
        print(f"[{'PASS' if ok else 'FAIL'}] {title} ({detail})")
        failed = failed or not ok

    if failed:
        print("\nPreflight failed. Resolve failed checks before deployment.")
        return 1
    print("\nPreflight passed.")
    return 0


if __name__ == "__main__":
    sys.exit(run())
