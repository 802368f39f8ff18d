"""Connector registration and status history."""

import logging
from datetime import datetime

from ..logging_utils import log_persistence_event
from ..metrics import connectors_created_total, track_operation
from ..models import ConnectorStatus, Result
from ..repositories import ConnectorRepository, ConnectorStatusRepository
from .base import PersistenceService

logger = logging.getLogger(__name__)


class ConnectorStatusWriter(PersistenceService):
    """Stores status notifications, registering connectors on first sight."""

    async def insert_connector_status(
        self,
        charge_box_id: str,
        connector_id: int,
        status: str,
        timestamp: datetime | None = None,
        error_code: str | None = None,
        error_info: str | None = None,
        vendor_id: str | None = None,
        vendor_error_code: str | None = None,
    ) -> Result:
        """
        Ensure the connector exists and append one status row, atomically.

        A missing timestamp means the time of receipt. Failures roll back both
        steps and are logged; they never raise.
        """
        operation = "insert_connector_status"
        status_timestamp = timestamp or self.clock()

        with track_operation(operation):
            try:
                async with self.database.transaction() as conn:
                    connectors = ConnectorRepository(conn)
                    created = await connectors.ensure(charge_box_id, connector_id)
                    connector_pk = await connectors.get_pk(charge_box_id, connector_id)

                    await ConnectorStatusRepository(conn).create(
                        ConnectorStatus(
                            connector_pk=connector_pk,
                            status_timestamp=status_timestamp,
                            status=status,
                            error_code=error_code,
                            error_info=error_info,
                            vendor_id=vendor_id,
                            vendor_error_code=vendor_error_code,
                        )
                    )
            except Exception as e:
                return self._fail(
                    operation,
                    f"Execution of {operation} for chargebox '{charge_box_id}' and "
                    f"connectorId '{connector_id}' FAILED. Transaction rolled back.",
                    e,
                    charge_box_id=charge_box_id,
                    connector_id=connector_id,
                    status=status,
                )

        if created:
            connectors_created_total.inc()
            log_persistence_event(
                logger,
                operation,
                f"The connector {charge_box_id}/{connector_id} is NEW, and inserted into DB",
                charge_box_id=charge_box_id,
                connector_id=connector_id,
                connector_pk=connector_pk,
            )
        else:
            log_persistence_event(
                logger,
                operation,
                f"The connector {charge_box_id}/{connector_id} is ALREADY known to DB",
                charge_box_id=charge_box_id,
                level=logging.DEBUG,
                connector_id=connector_id,
                connector_pk=connector_pk,
            )
        return self._succeed(operation, connector_pk)

    async def insert_legacy_connector_status(
        self, charge_box_id: str, connector_id: int, status: str, error_code: str | None
    ) -> Result:
        """OCPP 1.2 status notification: no timestamp, no error info, no vendor fields."""
        return await self.insert_connector_status(
            charge_box_id, connector_id, status, error_code=error_code
        )
