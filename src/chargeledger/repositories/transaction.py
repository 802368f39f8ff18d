"""Repository for transaction operations."""

from datetime import datetime

from ..errors import TransactionNotFoundError
from ..models import Transaction
from .base import BaseRepository


class TransactionRepository(BaseRepository):
    """Handles database operations for charging sessions."""

    async def create(self, tx: Transaction) -> Transaction:
        """Insert an open session and fill in its transaction_pk."""
        query = """
            INSERT INTO "transaction" (
                connector_pk, idTag, startTimestamp, startValue
            ) VALUES (?, ?, ?, ?)
            RETURNING transaction_pk
        """

        cursor = await self._execute(
            query,
            (tx.connector_pk, tx.id_tag, tx.start_timestamp, tx.start_value),
        )

        row = await cursor.fetchone()
        tx.transaction_pk = row["transaction_pk"] if row else None
        return tx

    async def stop(self, transaction_pk: int, stop_timestamp: datetime, stop_value: str) -> int:
        """Set the stop fields. Returns the number of rows matched."""
        query = """
            UPDATE "transaction"
            SET stopTimestamp = ?,
                stopValue = ?
            WHERE transaction_pk = ?
        """
        cursor = await self._execute(query, (stop_timestamp, stop_value, transaction_pk))
        return cursor.rowcount

    async def get_connector_pk(self, transaction_pk: int) -> int:
        """Resolve the connector a session runs on, raising if the session is unknown."""
        row = await self._fetchone(
            'SELECT connector_pk FROM "transaction" WHERE transaction_pk = ?', (transaction_pk,)
        )
        if row is None:
            raise TransactionNotFoundError(transaction_pk)
        return row["connector_pk"]

    async def get_by_id(self, transaction_pk: int) -> Transaction | None:
        """Get transaction by primary key."""
        row = await self._fetchone(
            'SELECT * FROM "transaction" WHERE transaction_pk = ?', (transaction_pk,)
        )
        if row:
            return self._row_to_model(row)
        return None

    def _row_to_model(self, row) -> Transaction:
        """Convert database row to Transaction model."""
        return Transaction(
            transaction_pk=row["transaction_pk"],
            connector_pk=row["connector_pk"],
            id_tag=row["idTag"],
            start_timestamp=row["startTimestamp"],
            start_value=row["startValue"],
            stop_timestamp=row["stopTimestamp"],
            stop_value=row["stopValue"],
        )
