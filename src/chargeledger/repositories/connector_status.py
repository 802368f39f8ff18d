"""Repository for the connector status history."""

from ..models import ConnectorStatus
from .base import BaseRepository


class ConnectorStatusRepository(BaseRepository):
    """Appends to and reads the status history. Rows are never updated."""

    async def create(self, status: ConnectorStatus) -> ConnectorStatus:
        await self._execute(
            """
            INSERT INTO connector_status (
                connector_pk, statusTimestamp, status, errorCode,
                errorInfo, vendorId, vendorErrorCode
            ) VALUES (?, ?, ?, ?, ?, ?, ?)
            """,
            (
                status.connector_pk,
                status.status_timestamp,
                status.status,
                status.error_code,
                status.error_info,
                status.vendor_id,
                status.vendor_error_code,
            ),
        )
        return status

    async def get_for_connector(self, connector_pk: int) -> list[ConnectorStatus]:
        """Get a connector's status history, oldest first."""
        rows = await self._fetchall(
            """
            SELECT * FROM connector_status
            WHERE connector_pk = ?
            ORDER BY statusTimestamp
            """,
            (connector_pk,),
        )
        return [self._row_to_model(row) for row in rows]

    def _row_to_model(self, row) -> ConnectorStatus:
        return ConnectorStatus(
            connector_pk=row["connector_pk"],
            status_timestamp=row["statusTimestamp"],
            status=row["status"],
            error_code=row["errorCode"],
            error_info=row["errorInfo"],
            vendor_id=row["vendorId"],
            vendor_error_code=row["vendorErrorCode"],
        )
