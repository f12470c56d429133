"""Runtime settings, read from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

# When installed in editable mode the project root is the repo root.
PROJECT_ROOT = Path(__file__).resolve().parents[3]
DEFAULT_DATABASE_PATH = PROJECT_ROOT / "data" / "bookstore.db"


@dataclass(frozen=True)
class Settings:
    database_url: str
    environment: str = "development"
    log_level: str | None = None
    low_stock_threshold: int = 10
    echo_sql: bool = False

    @staticmethod
    def from_env() -> Settings:
        return Settings(
            database_url=os.getenv(
                "BOOKSTORE_DATABASE_URL", f"sqlite:///{DEFAULT_DATABASE_PATH}"
            ),
            environment=os.getenv("BOOKSTORE_ENV", "development").lower(),
            log_level=os.getenv("LOG_LEVEL"),
            low_stock_threshold=int(os.getenv("BOOKSTORE_LOW_STOCK_THRESHOLD", "10")),
            echo_sql=os.getenv("BOOKSTORE_ECHO_SQL", "").lower() in ("1", "true", "yes"),
        )
