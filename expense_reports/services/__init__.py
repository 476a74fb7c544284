"""Services package."""

from expense_reports.services.export import (
    ContentShareService,
    ReportExportError,
    ReportFileWriter,
    ReportSaveError,
    ShareError,
)
from expense_reports.services.rendering import (
    RenderedReport,
    ReportRenderer,
)
from expense_reports.services.storage import (
    ConnectionError,
    ExpenseStorageInterface,
    FirebaseClient,
    FirebaseExpenseStorage,
    FirebaseReportStorage,
    InMemoryExpenseStorage,
    InMemoryReportStorage,
    ReportStorageInterface,
    StorageError,
)

__all__ = [
    # Export services
    "ContentShareService",
    "ReportExportError",
    "ReportFileWriter",
    "ReportSaveError",
    "ShareError",
    # Rendering services
    "RenderedReport",
    "ReportRenderer",
    # Storage services
    "ConnectionError",
    "ExpenseStorageInterface",
    "FirebaseClient",
    "FirebaseExpenseStorage",
    "FirebaseReportStorage",
    "InMemoryExpenseStorage",
    "InMemoryReportStorage",
    "ReportStorageInterface",
    "StorageError",
]
