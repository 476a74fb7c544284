"""Report export and sharing package."""

from expense_reports.services.export.file_export import (
    ContentShareService,
    ReportExportError,
    ReportFileWriter,
    ReportSaveError,
    ShareError,
    report_filename,
)

__all__ = [
    "ContentShareService",
    "ReportExportError",
    "ReportFileWriter",
    "ReportSaveError",
    "ShareError",
    "report_filename",
]
