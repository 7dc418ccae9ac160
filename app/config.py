# app/config.py
# Role: Runtime configuration read from the environment (and an optional .env file).

"""
Settings for the finance tracker.

Environment variables:
    FINANCE_TRACKER_STORAGE           "memory" (default) or "sql"
    DATABASE_URL                      SQLAlchemy URL used when storage is "sql"
    FINANCE_TRACKER_SEED_SAMPLE_DATA  load the sample transactions into an empty store (default on)
    FINANCE_TRACKER_LOG_LEVEL         logging level name or number (default INFO)
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

from db import DEFAULT_DATABASE_URL

STORAGE_BACKENDS = ("memory", "sql")


def _env_truthy(name: str, default: str = "0") -> bool:
    v = os.getenv(name, default)
    return str(v).strip().lower() in ("1", "true", "yes", "y", "on")


@dataclass(frozen=True)
class Settings:
    storage: str = "memory"
    database_url: str = DEFAULT_DATABASE_URL
    seed_sample_data: bool = True
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if self.storage not in STORAGE_BACKENDS:
            raise ValueError(
                f"Unknown storage backend {self.storage!r}; expected one of {STORAGE_BACKENDS}"
            )


def load_settings() -> Settings:
    """Build Settings from the process environment."""
    load_dotenv()

    storage = (os.getenv("FINANCE_TRACKER_STORAGE") or "memory").strip().lower()

    return Settings(
        storage=storage,
        database_url=(os.getenv("DATABASE_URL") or DEFAULT_DATABASE_URL).strip(),
        seed_sample_data=_env_truthy("FINANCE_TRACKER_SEED_SAMPLE_DATA", "1"),
        log_level=(os.getenv("FINANCE_TRACKER_LOG_LEVEL") or "INFO").strip(),
    )
