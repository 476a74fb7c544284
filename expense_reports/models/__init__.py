"""
Data Models Package

This package contains all Pydantic models used in the Expense Reports system.
All data flowing through the system must conform to these schemas.
"""

from expense_reports.models.expense import (
    Expense,
    FormValidationResult,
    SubmissionResult,
    ValidationIssue,
    new_expense_id,
)
from expense_reports.models.report import (
    REPORT_MIME_TYPE,
    TERMINAL_STATES,
    ExportResult,
    ExportState,
    Report,
    ReportEntry,
    ShareHandle,
    format_report,
)
from expense_reports.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Expense models
    "Expense",
    "FormValidationResult",
    "SubmissionResult",
    "ValidationIssue",
    "new_expense_id",
    # Report models
    "REPORT_MIME_TYPE",
    "TERMINAL_STATES",
    "ExportResult",
    "ExportState",
    "Report",
    "ReportEntry",
    "ShareHandle",
    "format_report",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
