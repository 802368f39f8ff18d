from .charge_box import ChargeBoxRepository
from .connector import ConnectorRepository
from .connector_status import ConnectorStatusRepository
from .meter_value import MeterValueRepository
from .reservation import ReservationRepository
from .transaction import TransactionRepository

__all__ = [
    "ChargeBoxRepository",
    "ConnectorRepository",
    "ConnectorStatusRepository",
    "MeterValueRepository",
    "ReservationRepository",
    "TransactionRepository",
]
