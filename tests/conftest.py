"""Pytest configuration and fixtures."""

import tempfile
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest

from chargeledger import Database, DatabaseConfig, OcppServiceStore


@pytest.fixture
async def temp_db():
    """Create a temporary SQLite database for testing."""
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as tmp:
        db_path = tmp.name

    # Initialize database with schema
    db = Database(DatabaseConfig(path=db_path))
    await db.initialize_schema()

    yield db

    # Cleanup
    await db.disconnect()
    for suffix in ("", "-wal", "-shm"):
        Path(db_path + suffix).unlink(missing_ok=True)


@pytest.fixture
async def db_connection(temp_db):
    """Provide a database connection for testing."""
    conn = await temp_db.connect()
    yield conn
    # Connection is cleaned up by temp_db fixture


@pytest.fixture
def store(temp_db):
    """OcppServiceStore bound to the temporary database."""
    return OcppServiceStore(temp_db)


async def register_charge_box(conn, charge_box_id: str):
    """Insert a charge box the way the operator's registration process would."""
    await conn.execute("INSERT INTO chargebox (chargeBoxId) VALUES (?)", (charge_box_id,))


async def create_reservation(conn, charge_box_id: str, id_tag: str = "TAG123", reservation_pk=None) -> int:
    """Insert a reservation the way reservation management would."""
    cursor = await conn.execute(
        """
        INSERT INTO reservation (reservation_pk, idTag, chargeBoxId, startDatetime, expiryDatetime)
        VALUES (?, ?, ?, ?, ?)
        RETURNING reservation_pk
        """,
        (
            reservation_pk,
            id_tag,
            charge_box_id,
            datetime.now(UTC),
            datetime.now(UTC) + timedelta(hours=1),
        ),
    )
    row = await cursor.fetchone()
    return row["reservation_pk"]


async def count_rows(conn, table: str, where: str = "", params: tuple = ()) -> int:
    query = f'SELECT COUNT(*) FROM "{table}"'
    if where:
        query += f" WHERE {where}"
    cursor = await conn.execute(query, params)
    row = await cursor.fetchone()
    return row[0]


@pytest.fixture
async def charge_box(db_connection):
    """A registered charge box with identity CP1."""
    await register_charge_box(db_connection, "CP1")
    return "CP1"


@pytest.fixture
async def connector_pk(store, charge_box, db_connection):
    """Connector CP1/1, registered through a first status notification."""
    result = await store.insert_connector_status(charge_box, 1, "Available")
    assert result
    return result.value
