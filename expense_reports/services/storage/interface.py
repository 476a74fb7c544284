"""
Abstract Storage Interface

DESIGN DECISION: We define an abstract interface for storage operations.
This allows us to:
1. Swap Firebase for another document store later
2. Use in-memory storage for testing
3. Keep the flows decoupled from the storage implementation

The interface is intentionally tiny - one write and one read.
"""

from abc import ABC, abstractmethod

from expense_reports.models.expense import Expense
from expense_reports.models.report import ReportEntry


class ExpenseStorageInterface(ABC):
    """
    Abstract interface for expense writes.

    Expenses are write-only from this application's point of view.
    """

    @abstractmethod
    async def save_expense(self, expense: Expense) -> None:
        """
        Save an expense under its own id.

        Args:
            expense: The expense to write

        Raises:
            StorageError: If the write fails
        """
        pass


class ReportStorageInterface(ABC):
    """
    Abstract interface for report reads.

    Reports are read-only from this application's point of view.
    """

    @abstractmethod
    async def fetch_entries(self, report_type: str) -> list[ReportEntry]:
        """
        Read every entry stored under a report type.

        Args:
            report_type: Report type label (e.g. "Daily")

        Returns:
            Entries in the order the store yields them. Empty when the
            report type has no data.

        Raises:
            StorageError: If the read fails or the store is unreachable
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class ConnectionError(StorageError):
    """Could not connect to storage backend."""
    pass
