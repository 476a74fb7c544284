"""Configuration package."""

from expense_reports.config.settings import (
    DEFAULT_REPORT_TYPE,
    AppSettings,
    FirebaseSettings,
    ReportSettings,
    Settings,
    get_settings,
    validate_all_settings,
)

__all__ = [
    "DEFAULT_REPORT_TYPE",
    "AppSettings",
    "FirebaseSettings",
    "ReportSettings",
    "Settings",
    "get_settings",
    "validate_all_settings",
]
