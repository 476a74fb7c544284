"""Report rendering package."""

from expense_reports.services.rendering.renderer import (
    RenderedReport,
    ReportRenderer,
    load_font,
)

__all__ = [
    "RenderedReport",
    "ReportRenderer",
    "load_font",
]
