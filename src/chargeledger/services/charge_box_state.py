"""Latest-known charge box attributes."""

import logging
from datetime import datetime

from ..logging_utils import log_error, log_persistence_event
from ..metrics import track_operation
from ..models import Result
from ..repositories import ChargeBoxRepository
from .base import PersistenceService

logger = logging.getLogger(__name__)


class ChargeBoxStateUpdater(PersistenceService):
    """
    Updates registration info, firmware/diagnostics status and heartbeat.

    Only the registration update matters to the caller (an unknown charge
    box must not have its boot accepted). The status and heartbeat updates
    are best-effort: failures are logged and reported in the Result only.
    """

    async def update_registration(
        self,
        endpoint_address: str | None,
        ocpp_version: str | None,
        vendor: str | None,
        model: str | None,
        point_serial: str | None,
        box_serial: str | None,
        fw_version: str | None,
        iccid: str | None,
        imsi: str | None,
        meter_type: str | None,
        meter_serial: str | None,
        charge_box_id: str,
        now: datetime | None = None,
    ) -> Result:
        """
        Store boot notification attributes and refresh the heartbeat.

        Returns a successful Result iff exactly one charge box matched, and a
        NOT_FOUND Result when the charge box is not registered.
        """
        operation = "update_registration"
        now = now or self.clock()

        with track_operation(operation):
            try:
                async with self.database.transaction() as conn:
                    count = await ChargeBoxRepository(conn).update_registration(
                        charge_box_id,
                        endpoint_address,
                        ocpp_version,
                        vendor,
                        model,
                        point_serial,
                        box_serial,
                        fw_version,
                        iccid,
                        imsi,
                        meter_type,
                        meter_serial,
                        now,
                    )
            except Exception as e:
                return self._fail(
                    operation,
                    f"Execution of {operation} for chargebox '{charge_box_id}' FAILED",
                    e,
                    charge_box_id=charge_box_id,
                )

        if count == 1:
            log_persistence_event(
                logger,
                operation,
                f"The chargebox '{charge_box_id}' is registered and its boot acknowledged",
                charge_box_id=charge_box_id,
                ocpp_version=ocpp_version,
            )
            return self._succeed(operation)

        log_error(
            logger,
            "not_registered",
            f"The chargebox '{charge_box_id}' is NOT registered and its boot NOT acknowledged",
            charge_box_id=charge_box_id,
            operation=operation,
        )
        return self._not_found(operation)

    async def update_firmware_status(self, charge_box_id: str, status: str) -> Result:
        return await self._update_status(
            "update_firmware_status",
            charge_box_id,
            lambda repo, ts: repo.update_firmware_status(charge_box_id, status, ts),
            status=status,
        )

    async def update_diagnostics_status(self, charge_box_id: str, status: str) -> Result:
        return await self._update_status(
            "update_diagnostics_status",
            charge_box_id,
            lambda repo, ts: repo.update_diagnostics_status(charge_box_id, status, ts),
            status=status,
        )

    async def update_heartbeat(self, charge_box_id: str, timestamp: datetime) -> Result:
        return await self._update_status(
            "update_heartbeat",
            charge_box_id,
            lambda repo, _: repo.update_heartbeat(charge_box_id, timestamp),
        )

    async def _update_status(self, operation: str, charge_box_id: str, update, **context) -> Result:
        """Run one best-effort single-column update stamped with the time of receipt."""
        received_at = self.clock()

        with track_operation(operation):
            try:
                async with self.database.transaction() as conn:
                    count = await update(ChargeBoxRepository(conn), received_at)
            except Exception as e:
                return self._fail(
                    operation,
                    f"Execution of {operation} for chargebox '{charge_box_id}' FAILED",
                    e,
                    charge_box_id=charge_box_id,
                    **context,
                )

        if count == 0:
            log_persistence_event(
                logger,
                operation,
                f"No chargebox '{charge_box_id}' to update",
                charge_box_id=charge_box_id,
                level=logging.WARNING,
                **context,
            )
            return self._not_found(operation)

        log_persistence_event(
            logger,
            operation,
            f"Chargebox '{charge_box_id}' updated",
            charge_box_id=charge_box_id,
            level=logging.DEBUG,
            **context,
        )
        return self._succeed(operation)
