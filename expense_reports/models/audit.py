"""
Audit Models for Expense Reports

Every significant action in the system is logged for audit purposes.
This provides:
1. Traceability of every submission and export
2. Debugging information when things go wrong
3. Ability to reconstruct what the user saw

DESIGN DECISION: Audit events are plain records. They are emitted as
structured log lines and never mutated afterwards.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Expense recording
    EXPENSE_SUBMITTED = "expense_submitted"
    EXPENSE_VALIDATION_FAILED = "expense_validation_failed"
    EXPENSE_SAVED = "expense_saved"
    SAVE_FAILED = "save_failed"

    # Report export
    REPORT_FETCHED = "report_fetched"
    REPORT_FETCH_FAILED = "report_fetch_failed"
    REPORT_RENDERED = "report_rendered"
    REPORT_SAVED = "report_saved"
    REPORT_EXPOSED = "report_exposed"
    EXPORT_FAILED = "export_failed"

    # System events
    SYSTEM_ERROR = "system_error"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class AuditEvent(BaseModel):
    """
    A single audit event.

    Every significant action creates one of these.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=datetime.utcnow,
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType
    severity: AuditSeverity = AuditSeverity.INFO

    # Context - what entity is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'expense', 'report')"
    )
    entity_id: Optional[str] = None

    # Correlation - all events of one submission or export
    correlation_id: Optional[UUID] = None

    description: str = Field(..., max_length=500)
    details: dict[str, Any] = Field(default_factory=dict)

    error_message: Optional[str] = None

    is_user_action: bool = False

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
        event = AuditEventBuilder.expense_saved(expense_id, item_name, amount, correlation_id)
        event = AuditEventBuilder.report_fetched("Daily", 12, correlation_id)
    """

    @staticmethod
    def expense_submitted(
        item_name: str,
        amount_text: str,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_SUBMITTED,
            entity_type="expense",
            correlation_id=correlation_id,
            description="Expense form submitted",
            details={
                "item_name": item_name,
                "amount": amount_text,
            },
            is_user_action=True,
        )

    @staticmethod
    def expense_validation_failed(
        field_errors: dict[str, str],
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_VALIDATION_FAILED,
            severity=AuditSeverity.WARNING,
            entity_type="expense",
            correlation_id=correlation_id,
            description=f"Expense form rejected with {len(field_errors)} field errors",
            details={"field_errors": field_errors},
        )

    @staticmethod
    def expense_saved(
        expense_id: str,
        item_name: str,
        amount: str,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_SAVED,
            entity_type="expense",
            entity_id=expense_id,
            correlation_id=correlation_id,
            description=f"Expense saved: {item_name} - {amount}",
            details={
                "item_name": item_name,
                "amount": amount,
            },
        )

    @staticmethod
    def save_failed(
        expense_id: str,
        error_message: str,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SAVE_FAILED,
            severity=AuditSeverity.ERROR,
            entity_type="expense",
            entity_id=expense_id,
            correlation_id=correlation_id,
            description="Expense could not be written",
            error_message=error_message,
        )

    @staticmethod
    def report_fetched(
        report_type: str,
        entry_count: int,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.REPORT_FETCHED,
            entity_type="report",
            entity_id=report_type,
            correlation_id=correlation_id,
            description=f"Report {report_type} fetched with {entry_count} entries",
            details={"entry_count": entry_count},
        )

    @staticmethod
    def report_fetch_failed(
        report_type: str,
        error_message: str,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.REPORT_FETCH_FAILED,
            severity=AuditSeverity.ERROR,
            entity_type="report",
            entity_id=report_type,
            correlation_id=correlation_id,
            description=f"Report {report_type} could not be fetched",
            error_message=error_message,
        )

    @staticmethod
    def report_rendered(
        report_type: str,
        lines_drawn: int,
        lines_clipped: int,
        correlation_id: UUID
    ) -> AuditEvent:
        severity = AuditSeverity.WARNING if lines_clipped else AuditSeverity.INFO
        return AuditEvent(
            event_type=AuditEventType.REPORT_RENDERED,
            severity=severity,
            entity_type="report",
            entity_id=report_type,
            correlation_id=correlation_id,
            description=f"Report {report_type} rendered ({lines_clipped} lines clipped)",
            details={
                "lines_drawn": lines_drawn,
                "lines_clipped": lines_clipped,
            },
        )

    @staticmethod
    def report_saved(
        report_type: str,
        path: str,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.REPORT_SAVED,
            entity_type="report",
            entity_id=report_type,
            correlation_id=correlation_id,
            description=f"Report {report_type} written to disk",
            details={"path": path},
        )

    @staticmethod
    def report_exposed(
        report_type: str,
        uri: str,
        opened: bool,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.REPORT_EXPOSED,
            entity_type="report",
            entity_id=report_type,
            correlation_id=correlation_id,
            description=f"Report {report_type} shared",
            details={
                "uri": uri,
                "opened_in_viewer": opened,
            },
        )

    @staticmethod
    def export_failed(
        report_type: str,
        stage: str,
        error_message: str,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPORT_FAILED,
            severity=AuditSeverity.ERROR,
            entity_type="report",
            entity_id=report_type,
            correlation_id=correlation_id,
            description=f"Export of {report_type} failed while {stage}",
            details={"stage": stage},
            error_message=error_message,
        )

    @staticmethod
    def system_error(
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SYSTEM_ERROR,
            severity=AuditSeverity.ERROR,
            description=f"System error: {error_type}",
            error_message=error_message,
            details=details or {},
            correlation_id=correlation_id,
        )
