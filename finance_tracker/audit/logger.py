"""
Audit Logger

DESIGN DECISION: Every significant action in the system is logged.
This provides:
1. Traceability of every write to the data file
2. Debugging capability

The audit logger:
- Writes structured JSON lines to stderr, so stdout stays clean
  for command output
- Stamps each event with the correlation ID of the current invocation
"""

import logging
import sys
from typing import Optional
from uuid import UUID, uuid4

import structlog

from finance_tracker.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity


LOGGER_NAME = "finance_tracker"

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


def configure_logging(level: str = "WARNING") -> None:
    """
    Route the package's stdlib logger to the current stderr.

    Safe to call more than once: the previous handler is replaced.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level.upper())
    for handler in list(logger.handlers):
        if getattr(handler, "_finance_tracker", False):
            logger.removeHandler(handler)
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(message)s"))
    handler._finance_tracker = True
    logger.addHandler(handler)


class AuditLogger:
    """
    Central audit logging service.

    Each CLI invocation creates one AuditLogger; every event it logs
    carries that invocation's correlation ID.
    """

    def __init__(self, correlation_id: Optional[UUID] = None):
        self._correlation_id = correlation_id or create_correlation_id()
        self._logger = structlog.get_logger(f"{LOGGER_NAME}.audit")

    @property
    def correlation_id(self) -> UUID:
        return self._correlation_id

    def log(self, event: AuditEvent) -> None:
        """Log an audit event at the level matching its severity."""
        if event.correlation_id is None:
            event = event.model_copy(update={"correlation_id": self._correlation_id})
        log_dict = event.to_log_dict()

        if event.severity in (AuditSeverity.ERROR, AuditSeverity.CRITICAL):
            self._logger.error("audit_event", **log_dict)
        elif event.severity == AuditSeverity.WARNING:
            self._logger.warning("audit_event", **log_dict)
        elif event.severity == AuditSeverity.DEBUG:
            self._logger.debug("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

    def log_transaction_added(
        self,
        transaction_id: int,
        transaction_type: str,
        amount: str,
    ) -> None:
        """Log a successful add."""
        self.log(AuditEventBuilder.transaction_added(
            transaction_id=transaction_id,
            transaction_type=transaction_type,
            amount=amount,
        ))

    def log_validation_failed(
        self,
        transaction_type: str,
        issues: list[dict],
    ) -> None:
        """Log a rejected entry."""
        self.log(AuditEventBuilder.validation_failed(
            transaction_type=transaction_type,
            issues=issues,
        ))

    def log_validation_warning(
        self,
        transaction_type: str,
        warnings: list[str],
    ) -> None:
        """Log an entry accepted with warnings."""
        self.log(AuditEventBuilder.validation_warning(
            transaction_type=transaction_type,
            warnings=warnings,
        ))

    def log_storage_loaded(self, location: str, record_count: int) -> None:
        self.log(AuditEventBuilder.storage_loaded(location, record_count))

    def log_storage_saved(self, location: str, record_count: int) -> None:
        self.log(AuditEventBuilder.storage_saved(location, record_count))

    def log_storage_error(self, location: str, error_message: str) -> None:
        self.log(AuditEventBuilder.storage_error(location, error_message))

    def log_query_executed(self, query_description: str, result_count: int) -> None:
        self.log(AuditEventBuilder.query_executed(query_description, result_count))

    def log_report_generated(self, month: int, year: int, transaction_count: int) -> None:
        self.log(AuditEventBuilder.report_generated(month, year, transaction_count))


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    Use this once per CLI invocation.
    """
    return uuid4()
