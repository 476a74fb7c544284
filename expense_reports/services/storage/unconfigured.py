"""
Unconfigured Storage

Stands in for Firebase when the client could not be set up at startup.
Every call fails with a StorageError, so the flows report the store as
unreachable instead of pretending a write or read succeeded.
"""

from expense_reports.models.expense import Expense
from expense_reports.models.report import ReportEntry
from expense_reports.services.storage.interface import (
    ExpenseStorageInterface,
    ReportStorageInterface,
    StorageError,
)


class _UnconfiguredStorage:

    def __init__(self, reason: str):
        self.reason = reason

    def _error(self) -> StorageError:
        return StorageError(f"Storage not configured: {self.reason}")


class UnconfiguredExpenseStorage(_UnconfiguredStorage, ExpenseStorageInterface):
    """Expense storage that rejects every write."""

    async def save_expense(self, expense: Expense) -> None:
        raise self._error()


class UnconfiguredReportStorage(_UnconfiguredStorage, ReportStorageInterface):
    """Report storage that rejects every read."""

    async def fetch_entries(self, report_type: str) -> list[ReportEntry]:
        raise self._error()
