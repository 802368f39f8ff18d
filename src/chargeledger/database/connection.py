"""Database connection and transaction management."""

import asyncio
import logging
import sqlite3
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from pathlib import Path

import aiosqlite

from ..config import DatabaseConfig

# Register datetime adapters to avoid Python 3.12+ deprecation warning
# See: https://docs.python.org/3/library/sqlite3.html#adapter-and-converter-recipes


def _adapt_datetime(val: datetime) -> str:
    """Convert datetime to a UTC ISO format string for SQLite storage.

    Naive values are taken to be UTC. A single offset keeps the stored text
    in time order.
    """
    if val.tzinfo is None:
        return val.replace(tzinfo=UTC).isoformat()
    return val.astimezone(UTC).isoformat()


def _convert_datetime(val: bytes) -> datetime:
    """Convert ISO format string from SQLite to an aware datetime."""
    parsed = datetime.fromisoformat(val.decode())
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed


sqlite3.register_adapter(datetime, _adapt_datetime)
sqlite3.register_converter("TIMESTAMP", _convert_datetime)

logger = logging.getLogger(__name__)


class Database:
    """
    Supplies scoped SQLite handles to the persistence services.

    Every write operation runs inside transaction(), which opens a dedicated
    connection so concurrent operations never interleave statements on a
    shared handle. connect() returns a long-lived connection for reads and
    schema initialization.
    """

    def __init__(self, config: DatabaseConfig | None = None):
        self.config = config or DatabaseConfig()
        self.connection: aiosqlite.Connection | None = None
        self._connect_lock = asyncio.Lock()

    async def _open(self) -> aiosqlite.Connection:
        """Open a new connection with the configured pragmas applied."""
        # isolation_level=None: transactions are started explicitly in transaction()
        conn = await aiosqlite.connect(
            self.config.path,
            timeout=self.config.busy_timeout,
            detect_types=sqlite3.PARSE_DECLTYPES,
            isolation_level=None,
        )
        conn.row_factory = aiosqlite.Row

        try:
            await conn.execute(f"PRAGMA journal_mode={self.config.journal_mode}")
            await conn.execute(f"PRAGMA synchronous={self.config.synchronous}")
            await conn.execute("PRAGMA temp_store=MEMORY")
            await conn.execute("PRAGMA foreign_keys=ON")
        except BaseException:
            await conn.close()
            raise
        return conn

    async def connect(self) -> aiosqlite.Connection:
        """Return the shared read connection, opening it on first use."""
        async with self._connect_lock:
            if self.connection is None:
                self.connection = await self._open()
        return self.connection

    async def disconnect(self):
        """Close the shared connection."""
        if self.connection:
            await self.connection.close()
            self.connection = None

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[aiosqlite.Connection]:
        """
        Run a block as one database transaction.

        Commits when the block exits normally and rolls back when it raises;
        the exception is re-raised to the caller either way.
        """
        conn = await self._open()
        try:
            # Write lock is held from the first statement
            await conn.execute("BEGIN IMMEDIATE")
            try:
                yield conn
            except BaseException:
                await conn.rollback()
                raise
            else:
                await conn.commit()
        finally:
            await conn.close()

    async def initialize_schema(self, schema_path: str | None = None):
        """Initialize database schema from SQL file."""
        conn = await self.connect()

        # Check if schema already exists
        cursor = await conn.execute(
            "SELECT name FROM sqlite_master WHERE type='table' AND name='chargebox'"
        )
        table_exists = await cursor.fetchone()

        if table_exists:
            logger.debug("Database schema already exists, skipping initialization")
            return

        schema_file = Path(schema_path) if schema_path else self.config.schema_path
        if not schema_file.exists():
            raise FileNotFoundError(f"Schema file not found: {schema_file}")

        await conn.executescript(schema_file.read_text())
        logger.info(f"Database schema initialized at {self.config.path}")

    async def __aenter__(self):
        """Async context manager entry."""
        return await self.connect()

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.disconnect()
