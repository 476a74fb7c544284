"""
Main Orchestrator for Expense Reports

This module ties together all the components and defines the
end-to-end flows for:
1. Expense submission (form -> validate -> write -> notify)
2. Report export (type -> fetch -> render -> save -> share)

DESIGN DECISION: Each flow is one awaitable request that returns a
result object. The UI never talks to storage, Pillow or the file system
directly; it only renders what the result says.

Neither flow retries. A failed write or read is reported once and the
user decides what to do next.
"""

from typing import Optional
from uuid import UUID

import structlog

from expense_reports.audit import AuditLogger, configure_logging, create_correlation_id
from expense_reports.config import ReportSettings, get_settings
from expense_reports.models.audit import AuditEventBuilder
from expense_reports.models.expense import Expense, SubmissionResult
from expense_reports.models.report import ExportResult, ExportState, Report
from expense_reports.services.export import (
    ContentShareService,
    ReportExportError,
    ReportFileWriter,
)
from expense_reports.services.rendering import ReportRenderer
from expense_reports.services.storage import (
    ExpenseStorageInterface,
    FirebaseClient,
    FirebaseExpenseStorage,
    FirebaseReportStorage,
    InMemoryExpenseStorage,
    InMemoryReportStorage,
    ReportStorageInterface,
    StorageError,
    UnconfiguredExpenseStorage,
    UnconfiguredReportStorage,
)
from expense_reports.validation import ExpenseFormValidator


logger = structlog.get_logger(__name__)

STATUS_SAVED = "Expense saved successfully!"
STATUS_SAVE_FAILED = "Failed to save expense."
TOAST_SAVED = "Expense saved to database"
TOAST_SAVE_FAILED = "Failed to save expense"


class ExpenseRecorderFlow:
    """
    Orchestrates expense submission.

    Flow:
    1. Validate → field errors stop here, nothing is sent
    2. Build → Expense with a fresh id
    3. Write → exactly one save_expense call
    4. Report → status label + toast; clear the form only on success
    """

    def __init__(
        self,
        expense_storage: ExpenseStorageInterface,
        validator: Optional[ExpenseFormValidator] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._storage = expense_storage
        self._validator = validator or ExpenseFormValidator()
        self._audit_logger = audit_logger or AuditLogger()

    async def submit(
        self,
        item_name: Optional[str],
        amount_text: Optional[str],
        correlation_id: Optional[UUID] = None,
    ) -> SubmissionResult:
        """
        Validate and save one expense.

        Returns:
            SubmissionResult describing what the UI should show
        """
        correlation_id = correlation_id or create_correlation_id()
        self._audit_logger.log(AuditEventBuilder.expense_submitted(
            item_name=item_name or "",
            amount_text=amount_text or "",
            correlation_id=correlation_id,
        ))

        validation = self._validator.validate(item_name, amount_text)
        if not validation.is_valid:
            self._audit_logger.log(AuditEventBuilder.expense_validation_failed(
                field_errors=validation.field_errors,
                correlation_id=correlation_id,
            ))
            return SubmissionResult(success=False, validation=validation)

        expense = Expense(item_name=validation.item_name, amount=validation.amount)

        try:
            await self._storage.save_expense(expense)
        except StorageError as e:
            self._audit_logger.log(AuditEventBuilder.save_failed(
                expense_id=expense.id,
                error_message=str(e),
                correlation_id=correlation_id,
            ))
            return SubmissionResult(
                success=False,
                expense=expense,
                validation=validation,
                status_message=STATUS_SAVE_FAILED,
                notification=TOAST_SAVE_FAILED,
            )
        except Exception as e:
            self._audit_logger.log_error(
                error_type="expense_save",
                error_message=str(e),
                details={"expense_id": expense.id},
                correlation_id=correlation_id,
            )
            raise

        self._audit_logger.log(AuditEventBuilder.expense_saved(
            expense_id=expense.id,
            item_name=expense.item_name,
            amount=str(expense.amount),
            correlation_id=correlation_id,
        ))
        return SubmissionResult(
            success=True,
            expense=expense,
            validation=validation,
            status_message=STATUS_SAVED,
            notification=TOAST_SAVED,
            clear_fields=True,
        )


class ReportExportFlow:
    """
    Orchestrates report export.

    Flow:
    1. Fetch → one read of every entry under the report type
    2. Render → "key: value" lines on a fixed canvas
    3. Save → <ReportType>_Report.png in the reports directory
    4. Expose → share handle, optionally opened in the OS viewer

    Any failure moves the export to FAILED and stops it.
    """

    def __init__(
        self,
        report_storage: ReportStorageInterface,
        renderer: Optional[ReportRenderer] = None,
        file_writer: Optional[ReportFileWriter] = None,
        share_service: Optional[ContentShareService] = None,
        settings: Optional[ReportSettings] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._storage = report_storage
        self._settings = settings or get_settings().reports
        self._renderer = renderer or ReportRenderer(self._settings)
        self._file_writer = file_writer or ReportFileWriter(self._settings)
        self._share_service = share_service or ContentShareService()
        self._audit_logger = audit_logger or AuditLogger()

    @property
    def report_types(self) -> list[str]:
        return self._settings.types_list

    @property
    def default_report_type(self) -> str:
        return self._settings.default_type

    def resolve_report_type(self, report_type: Optional[str]) -> str:
        """
        Map a selector value to a configured report type.

        Blank or missing selections use the default type.

        Raises:
            ValueError: If the label is not a configured report type
        """
        label = (report_type or "").strip()
        if not label:
            return self.default_report_type
        if label not in self.report_types:
            raise ValueError(f"Unknown report type: {label}")
        return label

    async def fetch_report(self, report_type: Optional[str]) -> Report:
        """
        Read a report without rendering it.

        Raises:
            ValueError: For an unknown report type
            StorageError: If the read fails
        """
        report_type = self.resolve_report_type(report_type)
        entries = await self._storage.fetch_entries(report_type)
        return Report(report_type=report_type, entries=entries)

    async def export(
        self,
        report_type: Optional[str],
        correlation_id: Optional[UUID] = None,
    ) -> ExportResult:
        """
        Fetch, render, save and share one report.

        Never raises for expected failures; inspect result.state instead.
        """
        correlation_id = correlation_id or create_correlation_id()
        label = (report_type or "").strip() or self.default_report_type
        result = ExportResult(report_type=label, correlation_id=correlation_id)

        # Fetching
        result.transition(ExportState.FETCHING)
        try:
            report = await self.fetch_report(label)
        except ValueError as e:
            self._fail(result, "fetching", str(e), str(e))
            return result
        except StorageError as e:
            self._audit_logger.log(AuditEventBuilder.report_fetch_failed(
                report_type=label,
                error_message=str(e),
                correlation_id=correlation_id,
            ))
            self._fail(result, "fetching", str(e), f"Error fetching data: {e}")
            return result

        result.report_text = report.to_text()
        result.entry_count = len(report.entries)
        self._audit_logger.log(AuditEventBuilder.report_fetched(
            report_type=report.report_type,
            entry_count=result.entry_count,
            correlation_id=correlation_id,
        ))

        # Rendering
        result.transition(ExportState.RENDERING)
        try:
            rendered = self._renderer.render(result.report_text)
        except (OSError, UnicodeError, ValueError) as e:
            # Unreadable font file, or text the font cannot encode
            logger.error("report_render_failed", report_type=label, exc_info=True)
            self._fail(result, "rendering", str(e), f"Error rendering report: {e}")
            return result
        except Exception as e:
            self._audit_logger.log_error(
                error_type="report_render",
                error_message=str(e),
                details={"report_type": label},
                correlation_id=correlation_id,
            )
            raise
        result.lines_drawn = rendered.lines_drawn
        result.lines_clipped = rendered.lines_clipped
        self._audit_logger.log(AuditEventBuilder.report_rendered(
            report_type=report.report_type,
            lines_drawn=rendered.lines_drawn,
            lines_clipped=rendered.lines_clipped,
            correlation_id=correlation_id,
        ))

        # Saving and sharing
        try:
            path = self._file_writer.save(rendered.image, report.report_type)
            result.file_path = path
            result.transition(ExportState.SAVED)
            self._audit_logger.log(AuditEventBuilder.report_saved(
                report_type=report.report_type,
                path=str(path),
                correlation_id=correlation_id,
            ))

            share = self._share_service.expose(path)
            opened = False
            if self._settings.open_in_viewer:
                opened = self._share_service.open(share)
        except ReportExportError as e:
            stage = "sharing" if result.state == ExportState.SAVED else "saving"
            logger.error("report_export_failed", report_type=label, stage=stage, exc_info=True)
            self._fail(result, stage, str(e), f"Error saving report: {e}")
            return result

        result.share = share
        result.transition(ExportState.EXPOSED)
        result.message = f"Report saved to {share.path}"
        self._audit_logger.log(AuditEventBuilder.report_exposed(
            report_type=report.report_type,
            uri=share.uri,
            opened=opened,
            correlation_id=correlation_id,
        ))
        return result

    def _fail(self, result: ExportResult, stage: str, error: str, message: str) -> None:
        result.fail(message)
        self._audit_logger.log(AuditEventBuilder.export_failed(
            report_type=result.report_type,
            stage=stage,
            error_message=error,
            correlation_id=result.correlation_id,
        ))


def create_app_components(
    use_storage: bool = True,
) -> tuple[ExpenseRecorderFlow, ReportExportFlow, Optional[FirebaseClient]]:
    """
    Factory function to create all application components.

    Args:
        use_storage: Whether to connect to Firebase.
                    Set to False to run against in-memory storage.
                    If Firebase cannot be set up, both flows fail
                    every save and export with "Storage not configured".

    Returns:
        (expense_recorder_flow, report_export_flow, firebase_client)

    The caller owns the returned client and must close() it at shutdown.
    """
    settings = get_settings()
    configure_logging(settings.app.log_level)
    audit_logger = AuditLogger()

    firebase_client = None
    expense_storage: ExpenseStorageInterface
    report_storage: ReportStorageInterface

    if use_storage:
        try:
            firebase_client = FirebaseClient()
            firebase_client.connect()
            expense_storage = FirebaseExpenseStorage(firebase_client)
            report_storage = FirebaseReportStorage(firebase_client)
        except Exception as e:
            # Storage not configured - every save and export reports it
            logger.warning("storage_not_configured", error=str(e))
            firebase_client = None
            expense_storage = UnconfiguredExpenseStorage(str(e))
            report_storage = UnconfiguredReportStorage(str(e))
    else:
        expense_storage = InMemoryExpenseStorage()
        report_storage = InMemoryReportStorage()

    expense_flow = ExpenseRecorderFlow(
        expense_storage=expense_storage,
        audit_logger=audit_logger,
    )
    export_flow = ReportExportFlow(
        report_storage=report_storage,
        settings=settings.reports,
        audit_logger=audit_logger,
    )

    return expense_flow, export_flow, firebase_client
