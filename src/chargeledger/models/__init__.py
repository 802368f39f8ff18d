from .domain import (
    ChargeBox,
    Connector,
    ConnectorStatus,
    LegacyMeterValue,
    MeterValue,
    MeterValueSample,
    Outcome,
    Reservation,
    Result,
    SampledValue,
    Transaction,
)

__all__ = [
    "ChargeBox",
    "Connector",
    "ConnectorStatus",
    "LegacyMeterValue",
    "MeterValue",
    "MeterValueSample",
    "Outcome",
    "Reservation",
    "Result",
    "SampledValue",
    "Transaction",
]
