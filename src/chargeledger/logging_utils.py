"""Structured JSON logging utilities for event-based logging."""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        # Add event-specific fields if present
        if hasattr(record, "event_type"):
            log_data["event_type"] = record.event_type
        if hasattr(record, "event_data"):
            log_data.update(record.event_data)

        # Add exception info if present
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


def setup_logging(level: str = "INFO"):
    """Configure JSON logging on the root logger."""
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(JSONFormatter())

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper()))
    root_logger.handlers = [console_handler]

    logging.getLogger("aiosqlite").setLevel(logging.WARNING)


def _event_data(charge_box_id: str | None, fields: dict[str, Any], **base: Any) -> dict[str, Any]:
    event_data = dict(base)

    # Only include charge_box_id if it's not None
    if charge_box_id is not None:
        event_data["charge_box_id"] = charge_box_id

    # Filter out None values from kwargs
    for key, value in fields.items():
        if value is not None:
            event_data[key] = value
    return event_data


def log_persistence_event(
    logger: logging.Logger,
    operation: str,
    message: str,
    charge_box_id: str | None = None,
    level: int = logging.INFO,
    **kwargs: Any,
) -> None:
    """
    Log a persistence event.

    Args:
        logger: Logger instance
        operation: Operation name (e.g., "insert_connector_status")
        message: Human readable message
        charge_box_id: Charge box identity (if applicable)
        level: Logging level of the record
        **kwargs: Additional fields such as connector_id or transaction_pk
    """
    extra = {
        "event_type": "persistence",
        "event_data": _event_data(charge_box_id, kwargs, operation=operation),
    }
    logger.log(level, message, extra=extra)


def log_error(
    logger: logging.Logger,
    error_type: str,
    message: str,
    charge_box_id: str | None = None,
    exc_info: BaseException | None = None,
    **kwargs: Any,
) -> None:
    """
    Log an error event.

    Args:
        logger: Logger instance
        error_type: Type of error (e.g., "write_failed", "not_registered")
        message: Error message
        charge_box_id: Charge box identity (if applicable)
        exc_info: Exception object (will extract traceback)
        **kwargs: Additional fields to include
    """
    extra = {
        "event_type": "error",
        "event_data": _event_data(charge_box_id, kwargs, error_type=error_type),
    }
    logger.error(message, extra=extra, exc_info=exc_info)
