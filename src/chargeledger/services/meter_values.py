"""Meter reading ingestion."""

import logging

import aiosqlite

from ..logging_utils import log_persistence_event
from ..metrics import connectors_created_total, meter_values_inserted_total, track_operation
from ..models import LegacyMeterValue, MeterValue, MeterValueSample, Result
from ..repositories import ConnectorRepository, MeterValueRepository, TransactionRepository
from .base import PersistenceService

logger = logging.getLogger(__name__)


def legacy_rows(values: list[LegacyMeterValue], connector_pk: int) -> list[MeterValue]:
    """Flatten OCPP 1.2 readings. They carry neither a session nor attributes."""
    return [
        MeterValue(connector_pk=connector_pk, value_timestamp=mv.timestamp, value=str(mv.value))
        for mv in values
    ]


def sample_rows(
    samples: list[MeterValueSample], connector_pk: int, transaction_pk: int | None
) -> list[MeterValue]:
    """Flatten OCPP 1.5 samples: one row per sampled value, stamped with its sample's time."""
    rows = []
    for sample in samples:
        for sampled in sample.sampled_values:
            rows.append(
                MeterValue(
                    connector_pk=connector_pk,
                    transaction_pk=transaction_pk,
                    value_timestamp=sample.timestamp,
                    value=sampled.value,
                    reading_context=sampled.context,
                    format=sampled.format,
                    measurand=sampled.measurand,
                    location=sampled.location,
                    unit=sampled.unit,
                )
            )
    return rows


class MeterValueRecorder(PersistenceService):
    """
    Persists the readings of one meter value event as a single batch.

    Every entry point resolves the connector once and inserts all readings
    in one transaction, so an event is stored completely or not at all.
    Failures are logged and swallowed.
    """

    async def insert_legacy_meter_values(
        self, charge_box_id: str, connector_id: int, values: list[LegacyMeterValue]
    ) -> Result:
        async def resolve(conn: aiosqlite.Connection):
            connector_pk, created = await self._ensure_connector(conn, charge_box_id, connector_id)
            return legacy_rows(values, connector_pk), created

        return await self._record(
            "insert_legacy_meter_values", resolve, charge_box_id, connector_id=connector_id
        )

    async def insert_meter_values(
        self,
        charge_box_id: str,
        connector_id: int,
        samples: list[MeterValueSample],
        transaction_id: int | None = None,
    ) -> Result:
        async def resolve(conn: aiosqlite.Connection):
            connector_pk, created = await self._ensure_connector(conn, charge_box_id, connector_id)
            return sample_rows(samples, connector_pk, transaction_id), created

        return await self._record(
            "insert_meter_values",
            resolve,
            charge_box_id,
            connector_id=connector_id,
            transaction_pk=transaction_id,
        )

    async def insert_transaction_meter_values(
        self, charge_box_id: str, transaction_id: int, samples: list[MeterValueSample]
    ) -> Result:
        """Store the readings sent along with a stop, on the session's own connector."""

        async def resolve(conn: aiosqlite.Connection):
            connector_pk = await TransactionRepository(conn).get_connector_pk(transaction_id)
            return sample_rows(samples, connector_pk, transaction_id), False

        return await self._record(
            "insert_transaction_meter_values",
            resolve,
            charge_box_id,
            transaction_pk=transaction_id,
        )

    async def _ensure_connector(
        self, conn: aiosqlite.Connection, charge_box_id: str, connector_id: int
    ) -> tuple[int, bool]:
        connectors = ConnectorRepository(conn)
        created = await connectors.ensure(charge_box_id, connector_id)
        return await connectors.get_pk(charge_box_id, connector_id), created

    async def _record(self, operation: str, resolve, charge_box_id: str, **context) -> Result:
        with track_operation(operation):
            try:
                async with self.database.transaction() as conn:
                    rows, created = await resolve(conn)
                    inserted = await MeterValueRepository(conn).create_batch(rows)
            except Exception as e:
                return self._fail(
                    operation,
                    f"Execution of {operation} for chargebox '{charge_box_id}' FAILED. "
                    "Transaction rolled back.",
                    e,
                    charge_box_id=charge_box_id,
                    **context,
                )

        if created:
            connectors_created_total.inc()
        meter_values_inserted_total.inc(inserted)
        log_persistence_event(
            logger,
            operation,
            f"Stored {inserted} meter values for chargebox '{charge_box_id}'",
            charge_box_id=charge_box_id,
            level=logging.DEBUG,
            count=inserted,
            **context,
        )
        return self._succeed(operation, inserted)
