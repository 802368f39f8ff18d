"""Shared plumbing for the persistence services."""

import logging
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any

from ..database import Database
from ..logging_utils import log_error
from ..metrics import record_outcome
from ..models import Outcome, Result

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(UTC)


class PersistenceService:
    """
    Base class for services that turn protocol events into database writes.

    Each public operation runs one Database.transaction() scope and is the
    boundary where failures are caught, logged and turned into a Result.
    """

    def __init__(self, database: Database, clock: Callable[[], datetime] = utc_now):
        self.database = database
        self.clock = clock

    def _succeed(self, operation: str, value: Any = None) -> Result:
        record_outcome(operation, Outcome.SUCCESS)
        return Result.ok(value)

    def _not_found(self, operation: str) -> Result:
        record_outcome(operation, Outcome.NOT_FOUND)
        return Result.not_found()

    def _fail(
        self,
        operation: str,
        message: str,
        error: Exception,
        charge_box_id: str | None = None,
        **context: Any,
    ) -> Result:
        log_error(
            logger,
            "write_failed",
            message,
            charge_box_id=charge_box_id,
            exc_info=error,
            operation=operation,
            **context,
        )
        record_outcome(operation, Outcome.FAILURE)
        return Result.failed(error)
