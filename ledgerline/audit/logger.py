"""
Audit Logger

DESIGN DECISION: Every significant action in the system is logged.
This provides:
1. Traceability of what was written to the data file
2. Debugging capability when a ledger unexpectedly comes back empty

The audit logger:
- Writes structured JSON lines to stderr, never to stdout
- Is quiet by default (WARNING), so normal command output stays clean
- Never changes the outcome of a command
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import structlog

from ledgerline.models.expense import Expense, ListQuery, ValidationIssue


LOGGER_NAME = "ledgerline"


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


def configure_logging(level: int = logging.WARNING) -> None:
    """
    Route the package's logs to stderr at the given level.

    Safe to call more than once; the previous handler is replaced.
    """
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(message)s"))

    logger = logging.getLogger(LOGGER_NAME)
    logger.handlers = [handler]
    logger.setLevel(level)


class AuditLogger:
    """
    Central audit logging service.

    One method per event so that event names and fields stay consistent
    across the storage layer and the command flows.
    """

    def __init__(self, name: str = LOGGER_NAME):
        self._logger = structlog.get_logger(name)

    def log_store_loaded(self, path: Path, count: int) -> None:
        """Log a successful load."""
        self._logger.debug("store_loaded", path=str(path), record_count=count)

    def log_store_recovered(self, path: Path, reason: str) -> None:
        """Log a missing or malformed document being treated as empty."""
        self._logger.debug("store_recovered", path=str(path), reason=reason)

    def log_record_skipped(self, path: Path, index: int, error: str) -> None:
        """Log an entry in the document that is not a valid expense."""
        self._logger.warning(
            "record_skipped",
            path=str(path),
            index=index,
            error=error,
        )

    def log_expense_saved(self, expense: Expense, path: Path) -> None:
        """Log a new expense being persisted."""
        self._logger.info(
            "expense_saved",
            expense_id=expense.id,
            amount=expense.amount,
            currency=expense.currency,
            category=expense.category,
            date=expense.date,
            path=str(path),
        )

    def log_query_executed(self, query: ListQuery, result_count: int) -> None:
        """Log a list query."""
        self._logger.info(
            "query_executed",
            result_count=result_count,
            **query.model_dump(exclude_none=True),
        )

    def log_validation_failed(
        self,
        issues: list[ValidationIssue],
        command: Optional[str] = None,
    ) -> None:
        """Log rejected input."""
        self._logger.info(
            "validation_failed",
            command=command,
            issues=[issue.model_dump() for issue in issues],
        )
