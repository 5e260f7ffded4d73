"""
Audit Models for Personal Finance Tracker

Every significant action in the system is logged for audit purposes.
This provides:
1. Traceability of every write to the data file
2. Debugging information when things go wrong
3. Ability to reconstruct what a command did

DESIGN DECISION: Audit events are write-only. They go to the structured
log and are never read back by the tracker itself.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Writes
    TRANSACTION_ADDED = "transaction_added"

    # Validation
    VALIDATION_FAILED = "validation_failed"
    VALIDATION_WARNING = "validation_warning"

    # Storage
    STORAGE_LOADED = "storage_loaded"
    STORAGE_SAVED = "storage_saved"
    STORAGE_ERROR = "storage_error"

    # Reads
    QUERY_EXECUTED = "query_executed"
    REPORT_GENERATED = "report_generated"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuditEvent(BaseModel):
    """
    A single audit event.

    This is the core unit of our audit trail.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Context - what entity is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'transaction', 'storage', 'report')"
    )
    entity_id: Optional[str] = Field(
        default=None,
        description="ID of the entity this event relates to"
    )

    # Correlation - all events of one CLI invocation
    correlation_id: Optional[UUID] = Field(
        default=None,
        description="ID to correlate related events"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

    error_message: Optional[str] = None

    is_user_action: bool = Field(
        default=False,
        description="Was this triggered by a user action?"
    )

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.transaction_added(transaction_id, "income", "1000")
        event = AuditEventBuilder.storage_error(path, message)
    """

    @staticmethod
    def transaction_added(
        transaction_id: int,
        transaction_type: str,
        amount: str,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSACTION_ADDED,
            entity_type="transaction",
            entity_id=str(transaction_id),
            correlation_id=correlation_id,
            description=f"Added {transaction_type} transaction #{transaction_id}",
            details={
                "type": transaction_type,
                "amount": amount,
            },
            is_user_action=True,
        )

    @staticmethod
    def validation_failed(
        transaction_type: str,
        issues: list[dict],
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.VALIDATION_FAILED,
            severity=AuditSeverity.WARNING,
            entity_type="transaction",
            correlation_id=correlation_id,
            description=f"Rejected {transaction_type} entry with {len(issues)} issues",
            details={
                "type": transaction_type,
                "issues": issues,
            },
            is_user_action=True,
        )

    @staticmethod
    def validation_warning(
        transaction_type: str,
        warnings: list[str],
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.VALIDATION_WARNING,
            severity=AuditSeverity.WARNING,
            entity_type="transaction",
            correlation_id=correlation_id,
            description=f"Accepted {transaction_type} entry with {len(warnings)} warnings",
            details={
                "type": transaction_type,
                "warnings": warnings,
            },
        )

    @staticmethod
    def storage_loaded(
        location: str,
        record_count: int,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORAGE_LOADED,
            severity=AuditSeverity.DEBUG,
            entity_type="storage",
            entity_id=location,
            correlation_id=correlation_id,
            description=f"Loaded {record_count} transactions",
            details={"record_count": record_count},
        )

    @staticmethod
    def storage_saved(
        location: str,
        record_count: int,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORAGE_SAVED,
            entity_type="storage",
            entity_id=location,
            correlation_id=correlation_id,
            description=f"Saved {record_count} transactions",
            details={"record_count": record_count},
        )

    @staticmethod
    def storage_error(
        location: str,
        error_message: str,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORAGE_ERROR,
            severity=AuditSeverity.ERROR,
            entity_type="storage",
            entity_id=location,
            correlation_id=correlation_id,
            description="Storage operation failed",
            error_message=error_message,
        )

    @staticmethod
    def query_executed(
        query_description: str,
        result_count: int,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.QUERY_EXECUTED,
            severity=AuditSeverity.DEBUG,
            entity_type="query",
            correlation_id=correlation_id,
            description=f"Query executed: {query_description} returned {result_count} results",
            details={
                "query": query_description,
                "result_count": result_count,
            },
        )

    @staticmethod
    def report_generated(
        month: int,
        year: int,
        transaction_count: int,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.REPORT_GENERATED,
            entity_type="report",
            entity_id=f"{year:04d}-{month:02d}",
            correlation_id=correlation_id,
            description=f"Report generated for {year:04d}-{month:02d}",
            details={"transaction_count": transaction_count},
            is_user_action=True,
        )
