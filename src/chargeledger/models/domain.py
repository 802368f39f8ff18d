"""Domain models for the telemetry persistence layer."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Generic, Optional, TypeVar

from ocpp.v16.enums import Location, Measurand, ReadingContext, UnitOfMeasure, ValueFormat

T = TypeVar("T")


@dataclass
class ChargeBox:
    """A registered charging station and its latest reported attributes."""

    charge_box_id: str
    endpoint_address: Optional[str] = None
    ocpp_version: Optional[str] = None
    charge_point_vendor: Optional[str] = None
    charge_point_model: Optional[str] = None
    charge_point_serial_number: Optional[str] = None
    charge_box_serial_number: Optional[str] = None
    fw_version: Optional[str] = None
    iccid: Optional[str] = None
    imsi: Optional[str] = None
    meter_type: Optional[str] = None
    meter_serial_number: Optional[str] = None
    last_heartbeat_timestamp: Optional[datetime] = None
    fw_update_status: Optional[str] = None
    fw_update_timestamp: Optional[datetime] = None
    diagnostics_status: Optional[str] = None
    diagnostics_timestamp: Optional[datetime] = None


@dataclass
class Connector:
    """A physical socket on a charge box."""

    connector_pk: Optional[int] = None
    charge_box_id: str = ""
    connector_id: int = 0


@dataclass
class ConnectorStatus:
    """One entry of a connector's append-only status history."""

    connector_pk: int
    status_timestamp: datetime
    status: Optional[str] = None
    error_code: Optional[str] = None
    error_info: Optional[str] = None
    vendor_id: Optional[str] = None
    vendor_error_code: Optional[str] = None


@dataclass
class MeterValue:
    """
    One stored meter reading.

    The optional attributes are NULL in storage when the device omitted them.
    """

    connector_pk: int
    value_timestamp: datetime
    value: str
    transaction_pk: Optional[int] = None
    reading_context: Optional[str] = None
    format: Optional[str] = None
    measurand: Optional[str] = None
    location: Optional[str] = None
    unit: Optional[str] = None


@dataclass
class Transaction:
    """A charging session. Open while stop_timestamp is None."""

    transaction_pk: Optional[int] = None
    connector_pk: int = 0
    id_tag: str = ""
    start_timestamp: Optional[datetime] = None
    start_value: str = ""
    stop_timestamp: Optional[datetime] = None
    stop_value: Optional[str] = None


@dataclass
class Reservation:
    """A hold on a charge box for a future session."""

    reservation_pk: Optional[int] = None
    id_tag: str = ""
    charge_box_id: str = ""
    start_datetime: Optional[datetime] = None
    expiry_datetime: Optional[datetime] = None


@dataclass
class LegacyMeterValue:
    """A reading in the OCPP 1.2 shape: a timestamp and a bare value."""

    timestamp: datetime
    value: int | float | str


@dataclass
class SampledValue:
    """
    A single value inside an OCPP 1.5 meter value sample.

    The attributes accept plain strings or the matching ocpp.v16.enums members
    (ReadingContext, ValueFormat, Measurand, Location, UnitOfMeasure).
    """

    value: str
    context: Optional[ReadingContext | str] = None
    format: Optional[ValueFormat | str] = None
    measurand: Optional[Measurand | str] = None
    location: Optional[Location | str] = None
    unit: Optional[UnitOfMeasure | str] = None

    @classmethod
    def from_ocpp(cls, payload: dict[str, Any]) -> "SampledValue":
        """Build from a decoded sampled_value entry (snake_case keys)."""
        return cls(
            value=str(payload["value"]),
            context=payload.get("context"),
            format=payload.get("format"),
            measurand=payload.get("measurand"),
            location=payload.get("location"),
            unit=payload.get("unit"),
        )


@dataclass
class MeterValueSample:
    """A group of sampled values taken at the same instant."""

    timestamp: datetime
    sampled_values: list[SampledValue] = field(default_factory=list)

    @classmethod
    def from_ocpp(cls, payload: dict[str, Any]) -> "MeterValueSample":
        """Build from a decoded meter_value entry as the ocpp library hands it over."""
        timestamp = payload["timestamp"]
        if isinstance(timestamp, str):
            timestamp = datetime.fromisoformat(timestamp.replace("Z", "+00:00"))
        return cls(
            timestamp=timestamp,
            sampled_values=[SampledValue.from_ocpp(v) for v in payload.get("sampled_value", [])],
        )


class Outcome(str, Enum):
    """How a persistence operation ended."""

    SUCCESS = "success"
    NOT_FOUND = "not_found"
    FAILURE = "failure"


@dataclass(frozen=True)
class Result(Generic[T]):
    """
    Outcome of a persistence operation.

    Truthy only on success. value carries the operation's product (e.g. the
    new transaction_pk) and error the exception behind a failure.
    """

    outcome: Outcome
    value: Optional[T] = None
    error: Optional[BaseException] = None

    @classmethod
    def ok(cls, value: Optional[T] = None) -> "Result[T]":
        return cls(Outcome.SUCCESS, value)

    @classmethod
    def not_found(cls) -> "Result[T]":
        return cls(Outcome.NOT_FOUND)

    @classmethod
    def failed(cls, error: BaseException) -> "Result[T]":
        return cls(Outcome.FAILURE, error=error)

    @property
    def is_success(self) -> bool:
        return self.outcome is Outcome.SUCCESS

    def __bool__(self) -> bool:
        return self.is_success
