"""Charging session ledger."""

import logging
from datetime import datetime

from ..logging_utils import log_persistence_event
from ..metrics import track_operation
from ..models import Result, Transaction
from ..repositories import ConnectorRepository, ReservationRepository, TransactionRepository
from .base import PersistenceService

logger = logging.getLogger(__name__)


class TransactionLedger(PersistenceService):
    """Creates and closes charging sessions."""

    async def start_transaction(
        self,
        charge_box_id: str,
        connector_id: int,
        id_tag: str,
        start_timestamp: datetime,
        start_value: str,
        reservation_id: int | None = None,
    ) -> Result[int]:
        """
        Open a session on a known connector and consume its reservation.

        The session insert and the reservation deletion commit together: if
        the reservation cannot be deleted (including when it does not exist)
        the session is rolled back as well. The caller gets the new
        transaction_pk in Result.value, or a failed Result with value None.
        """
        operation = "start_transaction"

        with track_operation(operation):
            try:
                async with self.database.transaction() as conn:
                    connector_pk = await ConnectorRepository(conn).get_pk(charge_box_id, connector_id)

                    tx = await TransactionRepository(conn).create(
                        Transaction(
                            connector_pk=connector_pk,
                            id_tag=id_tag,
                            start_timestamp=start_timestamp,
                            start_value=start_value,
                        )
                    )

                    if reservation_id is not None:
                        await ReservationRepository(conn).delete(reservation_id)
            except Exception as e:
                return self._fail(
                    operation,
                    f"Execution of {operation} for chargebox '{charge_box_id}' and "
                    f"connectorId '{connector_id}' FAILED. Transaction rolled back.",
                    e,
                    charge_box_id=charge_box_id,
                    connector_id=connector_id,
                    id_tag=id_tag,
                    reservation_id=reservation_id,
                )

        log_persistence_event(
            logger,
            operation,
            f"Transaction {tx.transaction_pk} started on {charge_box_id}/{connector_id}",
            charge_box_id=charge_box_id,
            connector_id=connector_id,
            transaction_pk=tx.transaction_pk,
            reservation_id=reservation_id,
        )
        return self._succeed(operation, tx.transaction_pk)

    async def start_legacy_transaction(
        self,
        charge_box_id: str,
        connector_id: int,
        id_tag: str,
        start_timestamp: datetime,
        start_value: str,
    ) -> Result[int]:
        """OCPP 1.2 start: sessions are never tied to a reservation."""
        return await self.start_transaction(
            charge_box_id, connector_id, id_tag, start_timestamp, start_value
        )

    async def stop_transaction(
        self, transaction_id: int, stop_timestamp: datetime, stop_value: str
    ) -> Result:
        """
        Record the end of a session.

        Best-effort: the prior stop state is not checked and failures are
        only logged.
        """
        operation = "stop_transaction"

        with track_operation(operation):
            try:
                async with self.database.transaction() as conn:
                    count = await TransactionRepository(conn).stop(
                        transaction_id, stop_timestamp, stop_value
                    )
            except Exception as e:
                return self._fail(
                    operation,
                    f"Execution of {operation} for transactionId '{transaction_id}' FAILED.",
                    e,
                    transaction_pk=transaction_id,
                )

        if count == 0:
            log_persistence_event(
                logger,
                operation,
                f"No transaction {transaction_id} to stop",
                level=logging.WARNING,
                transaction_pk=transaction_id,
            )
            return self._not_found(operation)

        log_persistence_event(
            logger,
            operation,
            f"Transaction {transaction_id} stopped",
            transaction_pk=transaction_id,
        )
        return self._succeed(operation)
