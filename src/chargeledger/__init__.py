"""
chargeledger - transactional telemetry persistence for an OCPP central system

Turns decoded charge box events (boots, status notifications, meter values,
session start/stop) into consistent SQLite state using aiosqlite.
"""

__version__ = "0.1.0"

from .config import DatabaseConfig
from .database import Database
from .services import OcppServiceStore

__all__ = ["Database", "DatabaseConfig", "OcppServiceStore"]
