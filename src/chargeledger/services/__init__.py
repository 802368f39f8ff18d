from .charge_box_state import ChargeBoxStateUpdater
from .connector_status import ConnectorStatusWriter
from .meter_values import MeterValueRecorder
from .store import OcppServiceStore
from .transactions import TransactionLedger

__all__ = [
    "ChargeBoxStateUpdater",
    "ConnectorStatusWriter",
    "MeterValueRecorder",
    "OcppServiceStore",
    "TransactionLedger",
]
