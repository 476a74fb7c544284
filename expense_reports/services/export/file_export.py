"""
Report File Export and Sharing

Writes rendered reports to the application-private directory and turns
the written file into a ShareHandle other programs can open.

Layout on disk:
    <output_dir>/<reports_dir_name>/<ReportType>_Report.png

A report is regenerated on every export and overwrites the previous
file of the same type. Files are never read back.
"""

import mimetypes
import stat
import webbrowser
from pathlib import Path
from typing import Optional

from PIL import Image

from expense_reports.config import ReportSettings, get_settings
from expense_reports.models.report import REPORT_MIME_TYPE, ShareHandle


class ReportExportError(Exception):
    """Base exception for local export errors."""
    pass


class ReportSaveError(ReportExportError):
    """The reports directory or the image file could not be written."""
    pass


class ShareError(ReportExportError):
    """The saved file could not be exposed for sharing."""
    pass


def report_filename(report_type: str) -> str:
    return f"{report_type}_Report.png"


class ReportFileWriter:
    """Persists rendered report images as PNG files."""

    def __init__(self, settings: Optional[ReportSettings] = None):
        self._settings = settings or get_settings().reports

    @property
    def reports_dir(self) -> Path:
        return self._settings.reports_dir

    def ensure_directory(self) -> Path:
        """Create the reports directory if absent."""
        directory = self.reports_dir
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ReportSaveError(f"Failed to create directory {directory}: {e}") from e
        if not directory.is_dir():
            raise ReportSaveError(f"Failed to create directory {directory}")
        return directory

    def save(self, image: Image.Image, report_type: str) -> Path:
        """
        Write `image` as <ReportType>_Report.png.

        Returns:
            Path of the written file

        Raises:
            ReportSaveError: If the directory or file cannot be written
        """
        if not report_type or any(sep in report_type for sep in ("/", "\\")):
            raise ReportSaveError(f"Invalid report type for a file name: {report_type!r}")

        path = self.ensure_directory() / report_filename(report_type)
        try:
            with path.open("wb") as output:
                image.save(output, format="PNG")
        except OSError as e:
            raise ReportSaveError(f"Failed to write {path}: {e}") from e
        return path


class ContentShareService:
    """
    Exposes saved reports to other programs.

    expose() grants read access and builds a file:// URI; open() asks the
    platform's default handler (browser or image viewer) to show it.
    """

    def __init__(self, chooser_title: str = "Open Report"):
        self._chooser_title = chooser_title

    def expose(self, path: Path) -> ShareHandle:
        """
        Build a read-granted share handle for an exported file.

        Raises:
            ShareError: If the file is missing or permissions cannot be set
        """
        try:
            resolved = path.resolve(strict=True)
            mode = resolved.stat().st_mode
            resolved.chmod(mode | stat.S_IRUSR | stat.S_IRGRP | stat.S_IROTH)
            uri = resolved.as_uri()
        except (OSError, ValueError) as e:
            raise ShareError(f"Failed to share {path}: {e}") from e

        mime_type, _ = mimetypes.guess_type(resolved.name)
        return ShareHandle(
            path=resolved,
            uri=uri,
            mime_type=mime_type or REPORT_MIME_TYPE,
            chooser_title=self._chooser_title,
        )

    def open(self, handle: ShareHandle) -> bool:
        """Open the shared file with the default viewer. Returns False if none ran."""
        try:
            return webbrowser.open(handle.uri, new=2)
        except webbrowser.Error as e:
            raise ShareError(f"No viewer available for {handle.uri}: {e}") from e
