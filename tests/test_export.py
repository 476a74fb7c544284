"""Tests for report file export and sharing."""

import stat
import webbrowser
from unittest.mock import patch

import pytest
from PIL import Image

from expense_reports.config import ReportSettings
from expense_reports.models.report import ShareHandle
from expense_reports.services.export import (
    ContentShareService,
    ReportFileWriter,
    ReportSaveError,
    ShareError,
    report_filename,
)


@pytest.fixture
def image():
    return Image.new("RGBA", (800, 600), (255, 255, 255, 255))


class TestReportFileWriter:
    """Tests for ReportFileWriter."""

    def test_filename(self):
        """Test the per-type file name."""
        assert report_filename("Daily") == "Daily_Report.png"

    def test_save_creates_directory_and_png(self, tmp_path, image):
        """Test that saving creates the Reports directory and a PNG."""
        writer = ReportFileWriter(ReportSettings(output_dir=tmp_path / "app"))
        path = writer.save(image, "Weekly")

        assert path == tmp_path / "app" / "Reports" / "Weekly_Report.png"
        assert path.exists()
        with Image.open(path) as saved:
            assert saved.format == "PNG"
            assert saved.size == (800, 600)

    def test_save_overwrites_previous_export(self, tmp_path, image):
        """Test that a new export replaces the previous file."""
        writer = ReportFileWriter(ReportSettings(output_dir=tmp_path))
        first = writer.save(image, "Daily")
        second = writer.save(Image.new("RGBA", (10, 10)), "Daily")

        assert first == second
        with Image.open(second) as saved:
            assert saved.size == (10, 10)

    def test_directory_creation_failure(self, tmp_path, image):
        """Test that a file blocking the directory raises ReportSaveError."""
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        writer = ReportFileWriter(ReportSettings(output_dir=blocker))

        with pytest.raises(ReportSaveError, match="Failed to create directory"):
            writer.save(image, "Daily")

    def test_rejects_path_like_report_type(self, tmp_path, image):
        """Test that report types cannot escape the reports directory."""
        writer = ReportFileWriter(ReportSettings(output_dir=tmp_path))
        with pytest.raises(ReportSaveError):
            writer.save(image, "../Daily")


class TestContentShareService:
    """Tests for ContentShareService."""

    def test_expose(self, tmp_path):
        """Test that exposing grants read access and builds a file URI."""
        path = tmp_path / "Daily_Report.png"
        path.write_bytes(b"png")
        path.chmod(0o600)

        handle = ContentShareService().expose(path)

        assert handle.path == path.resolve()
        assert handle.uri.startswith("file://")
        assert handle.uri.endswith("/Daily_Report.png")
        assert handle.mime_type == "image/png"
        assert handle.chooser_title == "Open Report"
        assert path.stat().st_mode & stat.S_IROTH

    def test_expose_missing_file(self, tmp_path):
        """Test that a missing file cannot be shared."""
        with pytest.raises(ShareError):
            ContentShareService().expose(tmp_path / "missing.png")

    def test_open_uses_default_viewer(self, tmp_path):
        """Test that open hands the URI to the default viewer."""
        handle = ShareHandle(path=tmp_path / "r.png", uri="file:///tmp/r.png")
        with patch(
            "expense_reports.services.export.file_export.webbrowser.open",
            return_value=True,
        ) as mock_open:
            assert ContentShareService().open(handle) is True
        mock_open.assert_called_once_with("file:///tmp/r.png", new=2)

    def test_open_without_viewer(self, tmp_path):
        """Test that a missing viewer raises ShareError."""
        handle = ShareHandle(path=tmp_path / "r.png", uri="file:///tmp/r.png")
        with patch(
            "expense_reports.services.export.file_export.webbrowser.open",
            side_effect=webbrowser.Error("no browser"),
        ):
            with pytest.raises(ShareError):
                ContentShareService().open(handle)
