"""Repository for connector operations."""

from ..errors import ConnectorNotFoundError
from ..models import Connector
from .base import BaseRepository


class ConnectorRepository(BaseRepository):
    """Handles database operations for connectors."""

    async def ensure(self, charge_box_id: str, connector_id: int) -> bool:
        """
        Create the connector row unless it already exists.

        Returns True when a new row was inserted. Only the
        (chargeBoxId, connectorId) uniqueness conflict is ignored; any other
        constraint violation (e.g. an unregistered charge box) raises.
        """
        cursor = await self._execute(
            """
            INSERT INTO connector (chargeBoxId, connectorId)
            VALUES (?, ?)
            ON CONFLICT(chargeBoxId, connectorId) DO NOTHING
            """,
            (charge_box_id, connector_id),
        )
        return cursor.rowcount >= 1

    async def get_pk(self, charge_box_id: str, connector_id: int) -> int:
        """Resolve the connector's primary key, raising if it is unknown."""
        row = await self._fetchone(
            "SELECT connector_pk FROM connector WHERE chargeBoxId = ? AND connectorId = ?",
            (charge_box_id, connector_id),
        )
        if row is None:
            raise ConnectorNotFoundError(charge_box_id, connector_id)
        return row["connector_pk"]

    async def get_by_charge_box_and_connector(
        self, charge_box_id: str, connector_id: int
    ) -> Connector | None:
        row = await self._fetchone(
            "SELECT * FROM connector WHERE chargeBoxId = ? AND connectorId = ?",
            (charge_box_id, connector_id),
        )
        if row:
            return self._row_to_model(row)
        return None

    def _row_to_model(self, row) -> Connector:
        """Convert database row to Connector model."""
        return Connector(
            connector_pk=row["connector_pk"],
            charge_box_id=row["chargeBoxId"],
            connector_id=row["connectorId"],
        )
