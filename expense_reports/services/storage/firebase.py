"""
Firebase Realtime Database Storage Implementation

DESIGN DECISION: The Realtime Database holds two top-level collections:
- expenses: flat map of expense id -> {id, itemName, amount}
- sales_inventory: map of report type -> map of key -> value

TRADEOFFS:
- The Admin SDK is synchronous, so every call is pushed to a worker
  thread to keep the flows awaitable
- Writes and reads are NOT retried; a failure is reported once
- Child order is whatever the database returns

The implementation follows the abstract interface, so the flows never
import firebase_admin directly.
"""

import asyncio
import json
from typing import Any, Optional

import firebase_admin
from firebase_admin import credentials, db
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from expense_reports.config import FirebaseSettings, get_settings
from expense_reports.models.expense import Expense
from expense_reports.models.report import ReportEntry
from expense_reports.services.storage.interface import (
    ConnectionError,
    ExpenseStorageInterface,
    ReportStorageInterface,
    StorageError,
)


class FirebaseClient:
    """
    Low-level Firebase Admin wrapper.

    Owns one named firebase_admin app. Open it once at startup with
    connect() and release it at shutdown with close().
    """

    def __init__(self, settings: Optional[FirebaseSettings] = None):
        self._app: Optional[firebase_admin.App] = None
        self._settings = settings or get_settings().firebase

    @property
    def settings(self) -> FirebaseSettings:
        return self._settings

    @property
    def is_connected(self) -> bool:
        return self._app is not None

    @retry(
        retry=retry_if_exception_type(ConnectionError),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        reraise=True,
    )
    def connect(self) -> firebase_admin.App:
        """
        Initialize (or reuse) the firebase_admin app.

        Uses service account credentials for authentication.
        """
        if self._app is None:
            try:
                self._app = firebase_admin.get_app(self._settings.app_name)
            except ValueError:
                self._app = self._initialize()
        return self._app

    def _initialize(self) -> firebase_admin.App:
        try:
            cred = credentials.Certificate(self._settings.credentials_path)
        except (OSError, ValueError) as e:
            # StorageError, not ConnectionError: never retried
            raise StorageError(
                f"Invalid Firebase credentials at {self._settings.credentials_path}: {e}"
            ) from e
        try:
            return firebase_admin.initialize_app(
                cred,
                {"databaseURL": self._settings.database_url},
                name=self._settings.app_name,
            )
        except ValueError as e:
            # Bad options or a clashing app name: never retried
            raise StorageError(f"Invalid Firebase configuration: {e}") from e
        except Exception as e:
            raise ConnectionError(f"Failed to connect to Firebase: {e}") from e

    def reference(self, path: str) -> db.Reference:
        """Get a database reference bound to this client's app."""
        return db.reference(path, app=self.connect())

    def expenses_ref(self) -> db.Reference:
        return self.reference(self._settings.expenses_path)

    def reports_ref(self) -> db.Reference:
        return self.reference(self._settings.reports_path)

    def close(self) -> None:
        """Release the firebase_admin app. Safe to call twice."""
        if self._app is not None:
            firebase_admin.delete_app(self._app)
            self._app = None


def _stringify(value: Any) -> str:
    """Render a database value as report text."""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list)):
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False)
    return str(value)


def snapshot_to_entries(snapshot: Any) -> list[ReportEntry]:
    """
    Convert the value read from a report node into entries.

    The database returns a dict for keyed children, a list when every
    key is a small integer (holes come back as None), and None when the
    node does not exist.
    """
    if isinstance(snapshot, dict):
        items = snapshot.items()
    elif isinstance(snapshot, list):
        items = ((index, value) for index, value in enumerate(snapshot) if value is not None)
    else:
        return []

    return [
        ReportEntry(key=str(key), value=_stringify(value))
        for key, value in items
    ]


class FirebaseExpenseStorage(ExpenseStorageInterface):
    """
    Firebase implementation of expense storage.

    Every expense is written with set() at expenses/<expense.id>.
    """

    def __init__(self, client: Optional[FirebaseClient] = None):
        self._client = client or FirebaseClient()

    async def save_expense(self, expense: Expense) -> None:
        """Write an expense under its own id."""
        try:
            ref = self._client.expenses_ref().child(expense.id)
            await asyncio.to_thread(ref.set, expense.to_record())
        except Exception as e:
            raise StorageError(f"Failed to save expense: {e}") from e


class FirebaseReportStorage(ReportStorageInterface):
    """
    Firebase implementation of report storage.

    One whole-subtree read of sales_inventory/<report type> per call.
    """

    def __init__(self, client: Optional[FirebaseClient] = None):
        self._client = client or FirebaseClient()

    async def fetch_entries(self, report_type: str) -> list[ReportEntry]:
        """Read every entry under a report type."""
        try:
            ref = self._client.reports_ref().child(report_type)
            snapshot = await asyncio.to_thread(ref.get)
        except Exception as e:
            raise StorageError(str(e)) from e
        return snapshot_to_entries(snapshot)
