"""
Storage Services Package

Provides abstract interfaces and concrete implementations for data storage.
Currently implements Firebase Realtime Database as the backend, with an
in-memory implementation for tests and offline use, and an unconfigured
implementation that fails every call when Firebase cannot be set up.
"""

from expense_reports.services.storage.interface import (
    ConnectionError,
    ExpenseStorageInterface,
    ReportStorageInterface,
    StorageError,
)
from expense_reports.services.storage.memory import (
    InMemoryExpenseStorage,
    InMemoryReportStorage,
)
from expense_reports.services.storage.firebase import (
    FirebaseClient,
    FirebaseExpenseStorage,
    FirebaseReportStorage,
    snapshot_to_entries,
)
from expense_reports.services.storage.unconfigured import (
    UnconfiguredExpenseStorage,
    UnconfiguredReportStorage,
)

__all__ = [
    # Interfaces
    "ExpenseStorageInterface",
    "ReportStorageInterface",
    # Exceptions
    "ConnectionError",
    "StorageError",
    # In-memory implementation
    "InMemoryExpenseStorage",
    "InMemoryReportStorage",
    # Firebase implementation
    "FirebaseClient",
    "FirebaseExpenseStorage",
    "FirebaseReportStorage",
    "snapshot_to_entries",
    # Used when Firebase could not be set up
    "UnconfiguredExpenseStorage",
    "UnconfiguredReportStorage",
]
