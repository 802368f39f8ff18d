"""Configuration for the persistence layer."""

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

DEFAULT_SCHEMA_PATH = Path(__file__).parent / "database" / "sql" / "001_initial.up.sql"


@dataclass(frozen=True)
class DatabaseConfig:
    """
    Immutable database settings handed to a Database at construction.

    busy_timeout is the number of seconds a connection waits for the
    SQLite write lock before the operation fails.
    """

    path: str = "chargeledger.db"
    busy_timeout: float = 5.0
    journal_mode: str = "WAL"
    synchronous: str = "NORMAL"
    schema_path: Path = field(default=DEFAULT_SCHEMA_PATH)

    @classmethod
    def from_env(cls, **overrides) -> "DatabaseConfig":
        """Build a config from CHARGELEDGER_* environment variables (and .env)."""
        load_dotenv()

        values = {
            "path": os.getenv("CHARGELEDGER_DB", cls.path),
            "busy_timeout": float(os.getenv("CHARGELEDGER_BUSY_TIMEOUT", str(cls.busy_timeout))),
        }
        values.update({key: value for key, value in overrides.items() if value is not None})
        return cls(**values)
