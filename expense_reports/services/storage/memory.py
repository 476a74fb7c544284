"""
In-Memory Storage Implementation

Used by the test-suite and by create_app_components(use_storage=False).
Data lives only as long as the process.
"""

from typing import Optional

from expense_reports.models.expense import Expense
from expense_reports.models.report import ReportEntry
from expense_reports.services.storage.interface import (
    ExpenseStorageInterface,
    ReportStorageInterface,
    StorageError,
)


class InMemoryExpenseStorage(ExpenseStorageInterface):
    """Expense storage backed by a dict of id -> record."""

    def __init__(self, fail_with: Optional[str] = None):
        self.records: dict[str, dict] = {}
        self.write_count = 0
        self.fail_with = fail_with

    async def save_expense(self, expense: Expense) -> None:
        self.write_count += 1
        if self.fail_with:
            raise StorageError(f"Failed to save expense: {self.fail_with}")
        self.records[expense.id] = expense.to_record()


class InMemoryReportStorage(ReportStorageInterface):
    """Report storage backed by a dict of report type -> {key: value}."""

    def __init__(
        self,
        reports: Optional[dict[str, dict[str, str]]] = None,
        fail_with: Optional[str] = None,
    ):
        self.reports = reports or {}
        self.read_count = 0
        self.fail_with = fail_with

    async def fetch_entries(self, report_type: str) -> list[ReportEntry]:
        self.read_count += 1
        if self.fail_with:
            raise StorageError(self.fail_with)
        children = self.reports.get(report_type) or {}
        return [
            ReportEntry(key=str(key), value=str(value))
            for key, value in children.items()
        ]
