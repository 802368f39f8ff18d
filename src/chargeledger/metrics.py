"""Prometheus instrumentation for persistence operations."""

import time
from contextlib import contextmanager

from prometheus_client import Counter, Histogram

from .models import Outcome

# Metrics live in the default prometheus_client registry.
# Use prometheus_client.start_http_server() or generate_latest() to expose them.

writes_total = Counter(
    "chargeledger_writes_total",
    "Persistence operations by outcome",
    labelnames=["operation", "outcome"],
)

write_duration_seconds = Histogram(
    "chargeledger_write_duration_seconds",
    "Duration of persistence operations including commit or rollback",
    labelnames=["operation"],
)

connectors_created_total = Counter(
    "chargeledger_connectors_created_total",
    "Connectors registered on their first status or meter event",
)

meter_values_inserted_total = Counter(
    "chargeledger_meter_values_inserted_total",
    "Meter readings committed",
)


def record_outcome(operation: str, outcome: Outcome):
    writes_total.labels(operation=operation, outcome=outcome.value).inc()


@contextmanager
def track_operation(operation: str):
    """Observe the wall time of the enclosed block under the operation label."""
    start = time.perf_counter()
    try:
        yield
    finally:
        write_duration_seconds.labels(operation=operation).observe(time.perf_counter() - start)
