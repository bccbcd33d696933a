"""Runtime settings, read from ``WINSTORE_*`` environment variables."""

from __future__ import annotations

import math
import os
from dataclasses import dataclass
from pathlib import Path

# When installed in editable mode the project root is the repo root.
_DATA_DIR = Path(__file__).resolve().parents[3] / "data"

DEFAULT_DATABASE_URL = f"sqlite:///{_DATA_DIR / 'winstore.db'}"
DEFAULT_LOCK_TIMEOUT = 5.0

_TRUE = {"1", "true", "yes", "on"}
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class Settings:
    database_url: str = DEFAULT_DATABASE_URL
    lock_timeout: float = DEFAULT_LOCK_TIMEOUT  # seconds a checkout waits for a row lock
    log_level: str = "WARNING"
    sql_echo: bool = False

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> Settings:
        env = os.environ if environ is None else environ
        raw_timeout = env.get("WINSTORE_LOCK_TIMEOUT", str(DEFAULT_LOCK_TIMEOUT))
        try:
            lock_timeout = float(raw_timeout)
        except ValueError:
            raise ValueError(f"WINSTORE_LOCK_TIMEOUT must be a number of seconds, got {raw_timeout!r}")
        if not math.isfinite(lock_timeout) or lock_timeout <= 0:
            raise ValueError("WINSTORE_LOCK_TIMEOUT must be positive")

        log_level = env.get("WINSTORE_LOG_LEVEL", "WARNING").strip().upper()
        if log_level not in LOG_LEVELS:
            raise ValueError(
                f"WINSTORE_LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, got {log_level!r}"
            )

        return cls(
            database_url=env.get("WINSTORE_DATABASE_URL", DEFAULT_DATABASE_URL),
            lock_timeout=lock_timeout,
            log_level=log_level,
            sql_echo=env.get("WINSTORE_SQL_ECHO", "").strip().lower() in _TRUE,
        )
