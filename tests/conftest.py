"""Shared test fixtures."""

from unittest.mock import MagicMock

import pytest

from expense_reports.audit import AuditLogger
from expense_reports.config import ReportSettings
from expense_reports.services.storage import InMemoryExpenseStorage, InMemoryReportStorage


@pytest.fixture
def report_settings(tmp_path) -> ReportSettings:
    """Report settings writing into a temporary directory."""
    return ReportSettings(output_dir=tmp_path, open_in_viewer=False)


@pytest.fixture
def audit_logger() -> AuditLogger:
    """Audit logger whose structlog backend is a mock."""
    audit = AuditLogger()
    audit._logger = MagicMock()
    return audit


@pytest.fixture
def expense_storage() -> InMemoryExpenseStorage:
    return InMemoryExpenseStorage()


@pytest.fixture
def report_storage() -> InMemoryReportStorage:
    return InMemoryReportStorage({
        "Daily": {"apples": "3", "bread": "2", "milk": "1"},
        "Weekly": {},
    })
