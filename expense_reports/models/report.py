"""
Report Models

Report entries are read-only key/value pairs stored under a report-type
label. An export walks a small state machine:

    Idle -> Fetching -> Rendering -> Saved -> Exposed
                  \\          \\         \\
                   +----------+---------+--> Failed

Exposed and Failed are terminal.
"""

from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field


REPORT_MIME_TYPE = "image/png"


class ReportEntry(BaseModel):
    """A single key/value pair of a report."""

    key: str
    value: str

    def to_line(self) -> str:
        return f"{self.key}: {self.value}"


class Report(BaseModel):
    """All entries stored under one report type, in store order."""

    report_type: str = Field(..., min_length=1)
    entries: list[ReportEntry] = Field(default_factory=list)
    fetched_at: datetime = Field(default_factory=datetime.utcnow)

    def to_text(self) -> str:
        return format_report(self.entries)


def format_report(entries: list[ReportEntry]) -> str:
    """Serialize entries as newline-joined "key: value" lines."""
    return "\n".join(entry.to_line() for entry in entries)


# =============================================================================
# EXPORT STATE MACHINE
# =============================================================================

class ExportState(str, Enum):
    """Lifecycle of a single report export."""
    IDLE = "idle"
    FETCHING = "fetching"
    RENDERING = "rendering"
    SAVED = "saved"
    EXPOSED = "exposed"
    FAILED = "failed"


_TRANSITIONS: dict[ExportState, frozenset[ExportState]] = {
    ExportState.IDLE: frozenset({ExportState.FETCHING}),
    ExportState.FETCHING: frozenset({ExportState.RENDERING, ExportState.FAILED}),
    ExportState.RENDERING: frozenset({ExportState.SAVED, ExportState.FAILED}),
    ExportState.SAVED: frozenset({ExportState.EXPOSED, ExportState.FAILED}),
    ExportState.EXPOSED: frozenset(),
    ExportState.FAILED: frozenset(),
}

TERMINAL_STATES = frozenset({ExportState.EXPOSED, ExportState.FAILED})


class ShareHandle(BaseModel):
    """
    A read-granted reference to an exported file that other programs
    (a browser, an image viewer, a download) can consume.
    """

    path: Path
    uri: str
    mime_type: str = REPORT_MIME_TYPE
    chooser_title: str = "Open Report"

    def read_bytes(self) -> Optional[bytes]:
        """File contents, or None if the file has been removed since export."""
        try:
            return self.path.read_bytes()
        except FileNotFoundError:
            return None


class ExportResult(BaseModel):
    """Outcome and trace of one report export."""

    report_type: str
    correlation_id: Optional[UUID] = None
    state: ExportState = ExportState.IDLE
    history: list[ExportState] = Field(
        default_factory=lambda: [ExportState.IDLE]
    )

    report_text: Optional[str] = None
    entry_count: int = 0
    lines_drawn: int = 0
    lines_clipped: int = 0
    file_path: Optional[Path] = None
    share: Optional[ShareHandle] = None

    # User-facing toast text
    message: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.state == ExportState.EXPOSED

    @property
    def is_terminal(self) -> bool:
        return self.state in TERMINAL_STATES

    def transition(self, new_state: ExportState) -> None:
        """Move to new_state, raising ValueError on an illegal move."""
        if new_state not in _TRANSITIONS[self.state]:
            raise ValueError(
                f"Illegal export transition: {self.state.value} -> {new_state.value}"
            )
        self.state = new_state
        self.history.append(new_state)

    def fail(self, message: str) -> None:
        self.transition(ExportState.FAILED)
        self.message = message
