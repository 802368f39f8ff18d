"""Single entry point for the protocol layer."""

from collections.abc import Callable
from datetime import datetime

from ..database import Database
from .base import utc_now
from .charge_box_state import ChargeBoxStateUpdater
from .connector_status import ConnectorStatusWriter
from .meter_values import MeterValueRecorder
from .transactions import TransactionLedger


class OcppServiceStore:
    """
    Every persistence operation an OCPP service needs, behind one object.

    The services share the Database handle but no other state, so one store
    can serve any number of concurrent charge box connections.
    """

    def __init__(self, database: Database, clock: Callable[[], datetime] = utc_now):
        self.database = database
        self.charge_boxes = ChargeBoxStateUpdater(database, clock)
        self.connector_status = ConnectorStatusWriter(database, clock)
        self.meter_values = MeterValueRecorder(database, clock)
        self.transactions = TransactionLedger(database, clock)

        # Charge box state
        self.update_registration = self.charge_boxes.update_registration
        self.update_firmware_status = self.charge_boxes.update_firmware_status
        self.update_diagnostics_status = self.charge_boxes.update_diagnostics_status
        self.update_heartbeat = self.charge_boxes.update_heartbeat

        # Connector status
        self.insert_connector_status = self.connector_status.insert_connector_status
        self.insert_legacy_connector_status = self.connector_status.insert_legacy_connector_status

        # Meter values
        self.insert_meter_values = self.meter_values.insert_meter_values
        self.insert_legacy_meter_values = self.meter_values.insert_legacy_meter_values
        self.insert_transaction_meter_values = self.meter_values.insert_transaction_meter_values

        # Transactions
        self.start_transaction = self.transactions.start_transaction
        self.start_legacy_transaction = self.transactions.start_legacy_transaction
        self.stop_transaction = self.transactions.stop_transaction
