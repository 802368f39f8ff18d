"""Tests for charge box state updates."""

import sqlite3
from datetime import UTC, datetime
from unittest.mock import AsyncMock, patch

import pytest

from chargeledger.models import Outcome
from chargeledger.repositories import ChargeBoxRepository
from chargeledger.services import ChargeBoxStateUpdater

BOOT = dict(
    endpoint_address="http://10.0.0.5:8080/steve",
    ocpp_version="1.5",
    vendor="ACME",
    model="Wallbox 22",
    point_serial="PS-1",
    box_serial="BS-1",
    fw_version="3.2.1",
    iccid="89490200001",
    imsi="262011234",
    meter_type="AC",
    meter_serial="MS-1",
)


@pytest.mark.unit
class TestChargeBoxStateUpdater:
    async def test_registration_of_known_charge_box(self, temp_db, charge_box, db_connection):
        updater = ChargeBoxStateUpdater(temp_db)
        now = datetime(2024, 5, 1, 12, 0, tzinfo=UTC)

        result = await updater.update_registration(**BOOT, charge_box_id="CP1", now=now)

        assert result
        assert result.outcome is Outcome.SUCCESS
        cb = await ChargeBoxRepository(db_connection).get_by_id("CP1")
        assert cb.charge_point_vendor == "ACME"
        assert cb.charge_point_model == "Wallbox 22"
        assert cb.fw_version == "3.2.1"
        assert cb.iccid == "89490200001"
        assert cb.last_heartbeat_timestamp == now

    async def test_registration_of_unknown_charge_box(self, temp_db, db_connection):
        """Test that an unregistered device is reported, not raised."""
        updater = ChargeBoxStateUpdater(temp_db)

        result = await updater.update_registration(**BOOT, charge_box_id="ROGUE")

        assert not result
        assert result.outcome is Outcome.NOT_FOUND
        assert await ChargeBoxRepository(db_connection).get_by_id("ROGUE") is None

    async def test_registration_failure(self, temp_db, charge_box):
        updater = ChargeBoxStateUpdater(temp_db)

        with patch.object(
            ChargeBoxRepository,
            "update_registration",
            AsyncMock(side_effect=sqlite3.OperationalError("unable to open database file")),
        ):
            result = await updater.update_registration(**BOOT, charge_box_id="CP1")

        assert result.outcome is Outcome.FAILURE

    async def test_firmware_status(self, temp_db, charge_box, db_connection):
        received = datetime(2024, 5, 1, 13, 0, tzinfo=UTC)
        updater = ChargeBoxStateUpdater(temp_db, clock=lambda: received)

        result = await updater.update_firmware_status("CP1", "Installed")

        assert result
        cb = await ChargeBoxRepository(db_connection).get_by_id("CP1")
        assert cb.fw_update_status == "Installed"
        assert cb.fw_update_timestamp == received
        assert cb.diagnostics_status is None

    async def test_diagnostics_status(self, temp_db, charge_box, db_connection):
        updater = ChargeBoxStateUpdater(temp_db)

        before = datetime.now(UTC)
        await updater.update_diagnostics_status("CP1", "Uploaded")

        cb = await ChargeBoxRepository(db_connection).get_by_id("CP1")
        assert cb.diagnostics_status == "Uploaded"
        assert cb.diagnostics_timestamp >= before
        assert cb.fw_update_status is None

    async def test_heartbeat(self, temp_db, charge_box, db_connection):
        updater = ChargeBoxStateUpdater(temp_db)
        ts = datetime(2024, 5, 1, 14, 0, tzinfo=UTC)

        result = await updater.update_heartbeat("CP1", ts)

        assert result
        cb = await ChargeBoxRepository(db_connection).get_by_id("CP1")
        assert cb.last_heartbeat_timestamp == ts
        assert cb.charge_point_vendor is None

    async def test_heartbeat_unknown_charge_box(self, temp_db):
        updater = ChargeBoxStateUpdater(temp_db)

        result = await updater.update_heartbeat("ROGUE", datetime.now(UTC))

        assert result.outcome is Outcome.NOT_FOUND

    async def test_best_effort_failure_is_swallowed(self, temp_db, charge_box):
        updater = ChargeBoxStateUpdater(temp_db)

        with patch.object(
            ChargeBoxRepository,
            "update_firmware_status",
            AsyncMock(side_effect=sqlite3.OperationalError("database is locked")),
        ):
            result = await updater.update_firmware_status("CP1", "Downloading")

        assert result.outcome is Outcome.FAILURE
        assert isinstance(result.error, sqlite3.OperationalError)
