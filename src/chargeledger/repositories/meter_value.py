"""Repository for meter value operations."""

from enum import Enum

from ..models import MeterValue
from .base import BaseRepository


def attribute_value(attribute) -> str | None:
    """Storage form of an optional reading attribute: the enum value, the string, or NULL."""
    if attribute is None:
        return None
    if isinstance(attribute, Enum):
        return str(attribute.value)
    return str(attribute)


class MeterValueRepository(BaseRepository):
    """Handles database operations for meter values."""

    async def create_batch(self, meter_values: list[MeterValue]) -> int:
        """
        Insert all readings of one event with a single executemany.

        Returns the number of rows inserted.
        """
        query = """
            INSERT INTO connector_metervalue (
                connector_pk, transaction_pk, valueTimestamp, value,
                readingContext, format, measurand, location, unit
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
        """

        params = [
            (
                mv.connector_pk,
                mv.transaction_pk,
                mv.value_timestamp,
                mv.value,
                attribute_value(mv.reading_context),
                attribute_value(mv.format),
                attribute_value(mv.measurand),
                attribute_value(mv.location),
                attribute_value(mv.unit),
            )
            for mv in meter_values
        ]

        await self.conn.executemany(query, params)
        return len(params)

    async def get_for_connector(self, connector_pk: int, limit: int = 1000) -> list[MeterValue]:
        """Get recent meter values for a connector."""
        rows = await self._fetchall(
            """
            SELECT * FROM connector_metervalue
            WHERE connector_pk = ?
            ORDER BY valueTimestamp DESC
            LIMIT ?
            """,
            (connector_pk, limit),
        )
        return [self._row_to_model(row) for row in rows]

    async def get_for_transaction(self, transaction_pk: int, limit: int = 1000) -> list[MeterValue]:
        """Get meter values for a transaction."""
        rows = await self._fetchall(
            """
            SELECT * FROM connector_metervalue
            WHERE transaction_pk = ?
            ORDER BY valueTimestamp DESC
            LIMIT ?
            """,
            (transaction_pk, limit),
        )
        return [self._row_to_model(row) for row in rows]

    def _row_to_model(self, row) -> MeterValue:
        """Convert database row to MeterValue model."""
        return MeterValue(
            connector_pk=row["connector_pk"],
            transaction_pk=row["transaction_pk"],
            value_timestamp=row["valueTimestamp"],
            value=row["value"],
            reading_context=row["readingContext"],
            format=row["format"],
            measurand=row["measurand"],
            location=row["location"],
            unit=row["unit"],
        )
