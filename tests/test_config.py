"""Tests for configuration loading."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from expense_reports.config import AppSettings, FirebaseSettings, ReportSettings


class TestReportSettings:
    """Tests for ReportSettings."""

    def test_defaults(self, monkeypatch):
        """Test the default canvas, directory and report types."""
        for name in ("REPORT_OUTPUT_DIR", "REPORT_TYPES", "REPORT_DEFAULT_TYPE"):
            monkeypatch.delenv(name, raising=False)
        settings = ReportSettings(_env_file=None)

        assert (settings.width, settings.height) == (800, 600)
        assert settings.font_size == 24
        assert settings.reports_dir == Path("data") / "Reports"
        assert settings.types_list == ["Daily", "Weekly", "Monthly"]
        assert settings.default_type == "Daily"
        assert settings.open_in_viewer is False

    def test_types_list_includes_default(self):
        """Test that the default type is added to the selector list."""
        settings = ReportSettings(_env_file=None, types="Weekly, Monthly,,", default_type="Daily")
        assert settings.types_list == ["Daily", "Weekly", "Monthly"]

    def test_blank_default_type_rejected(self):
        """Test that a blank default type is rejected."""
        with pytest.raises(ValidationError):
            ReportSettings(_env_file=None, default_type="  ")

    def test_env_override(self, monkeypatch, tmp_path):
        """Test that REPORT_ variables override the defaults."""
        monkeypatch.setenv("REPORT_OUTPUT_DIR", str(tmp_path))
        monkeypatch.setenv("REPORT_TYPES", "Daily,Quarterly")
        monkeypatch.setenv("REPORT_OPEN_IN_VIEWER", "true")

        settings = ReportSettings(_env_file=None)

        assert settings.reports_dir == tmp_path / "Reports"
        assert settings.types_list == ["Daily", "Quarterly"]
        assert settings.open_in_viewer is True


class TestAppSettings:
    """Tests for AppSettings."""

    def test_log_level_is_normalized(self):
        """Test that the log level is trimmed and uppercased."""
        assert AppSettings(_env_file=None, log_level=" debug ").log_level == "DEBUG"

    def test_unknown_log_level_rejected(self):
        """Test that an unknown log level is rejected."""
        with pytest.raises(ValidationError):
            AppSettings(_env_file=None, log_level="LOUD")


class TestFirebaseSettings:
    """Tests for FirebaseSettings."""

    def test_requires_https_url(self, tmp_path):
        """Test that the database URL must use https."""
        key_file = tmp_path / "key.json"
        key_file.write_text("{}")
        with pytest.raises(ValidationError):
            FirebaseSettings(
                _env_file=None,
                credentials_path=str(key_file),
                database_url="http://example-db.firebaseio.com",
            )

    def test_missing_credentials_file_warns(self, tmp_path):
        """Test that a missing credentials file warns instead of failing."""
        with pytest.warns(UserWarning, match="credentials file not found"):
            FirebaseSettings(
                _env_file=None,
                credentials_path=str(tmp_path / "missing.json"),
                database_url="https://example-db.firebaseio.com",
            )
