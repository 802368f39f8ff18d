"""Repository for charge box operations."""

from datetime import datetime

from ..models import ChargeBox
from .base import BaseRepository


class ChargeBoxRepository(BaseRepository):
    """
    Updates attributes of registered charge boxes.

    Rows are created by the operator's registration process; every method
    here is an UPDATE and returns the number of rows it matched.
    """

    async def update_registration(
        self,
        charge_box_id: str,
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
        now: datetime,
    ) -> int:
        """Store the attributes reported in a boot notification."""
        query = """
            UPDATE chargebox
            SET endpointAddress = ?,
                ocppVersion = ?,
                chargePointVendor = ?,
                chargePointModel = ?,
                chargePointSerialNumber = ?,
                chargeBoxSerialNumber = ?,
                fwVersion = ?,
                iccid = ?,
                imsi = ?,
                meterType = ?,
                meterSerialNumber = ?,
                lastHeartbeatTimestamp = ?
            WHERE chargeBoxId = ?
        """
        cursor = await self._execute(
            query,
            (
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
                charge_box_id,
            ),
        )
        return cursor.rowcount

    async def update_firmware_status(self, charge_box_id: str, status: str, timestamp: datetime) -> int:
        cursor = await self._execute(
            "UPDATE chargebox SET fwUpdateStatus = ?, fwUpdateTimestamp = ? WHERE chargeBoxId = ?",
            (status, timestamp, charge_box_id),
        )
        return cursor.rowcount

    async def update_diagnostics_status(
        self, charge_box_id: str, status: str, timestamp: datetime
    ) -> int:
        cursor = await self._execute(
            "UPDATE chargebox SET diagnosticsStatus = ?, diagnosticsTimestamp = ? WHERE chargeBoxId = ?",
            (status, timestamp, charge_box_id),
        )
        return cursor.rowcount

    async def update_heartbeat(self, charge_box_id: str, timestamp: datetime) -> int:
        cursor = await self._execute(
            "UPDATE chargebox SET lastHeartbeatTimestamp = ? WHERE chargeBoxId = ?",
            (timestamp, charge_box_id),
        )
        return cursor.rowcount

    async def get_by_id(self, charge_box_id: str) -> ChargeBox | None:
        """Get charge box by its identity."""
        row = await self._fetchone("SELECT * FROM chargebox WHERE chargeBoxId = ?", (charge_box_id,))
        if row:
            return self._row_to_model(row)
        return None

    def _row_to_model(self, row) -> ChargeBox:
        """Convert database row to ChargeBox model."""
        return ChargeBox(
            charge_box_id=row["chargeBoxId"],
            endpoint_address=row["endpointAddress"],
            ocpp_version=row["ocppVersion"],
            charge_point_vendor=row["chargePointVendor"],
            charge_point_model=row["chargePointModel"],
            charge_point_serial_number=row["chargePointSerialNumber"],
            charge_box_serial_number=row["chargeBoxSerialNumber"],
            fw_version=row["fwVersion"],
            iccid=row["iccid"],
            imsi=row["imsi"],
            meter_type=row["meterType"],
            meter_serial_number=row["meterSerialNumber"],
            last_heartbeat_timestamp=row["lastHeartbeatTimestamp"],
            fw_update_status=row["fwUpdateStatus"],
            fw_update_timestamp=row["fwUpdateTimestamp"],
            diagnostics_status=row["diagnosticsStatus"],
            diagnostics_timestamp=row["diagnosticsTimestamp"],
        )
