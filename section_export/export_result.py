"""Export Result Dataclass

Result outputs from an export run.
"""
from dataclasses import dataclass, field
from typing import List, Optional

import pandas as pd

from .models import ExportJob, SectionReport


REPORT_COLUMNS = ["Section", "Intrinsic size (px)", "Scale", "Bitmap (px)", "Origin (in)", "Placed size (in)"]


@dataclass
class ExportResult:
    """Result from an export run.

    Attributes:
        status: "completed" or "failed"
        status_message: Human-readable status message

        # Output
        output_path: Path to the written document (None on failure)
        section_count: Number of pages/slides in the document

        # Error Handling
        error: Internal error description for diagnostics (None on success)
        notice: Operator-facing notice (None on success)

        # Report
        sections: Per-section capture and placement records
    """

    status: str
    status_message: str

    output_path: Optional[str] = None
    section_count: int = 0

    error: Optional[str] = None
    notice: Optional[str] = None

    sections: List[SectionReport] = field(default_factory=list)

    @classmethod
    def from_job(cls, job: ExportJob, notice: Optional[str] = None) -> "ExportResult":
        if job.output_path and job.error is None:
            unit = "page" if job.kind.value == "pdf" else "slide"
            plural = "" if job.section_count == 1 else "s"
            return cls(
                status="completed",
                status_message=f"✅ Exported {job.section_count} {unit}{plural} to {job.output_path}",
                output_path=job.output_path,
                section_count=job.section_count,
                sections=list(job.sections),
            )
        return cls(
            status="failed",
            status_message=f"❌ {notice or 'Export failed'}",
            section_count=job.section_count,
            error=job.error,
            notice=notice,
        )

    @property
    def is_complete(self) -> bool:
        """True if a document was written."""
        return self.status == "completed" and self.output_path is not None

    @property
    def is_failed(self) -> bool:
        return self.status == "failed"

    def to_dataframe(self) -> pd.DataFrame:
        """Per-section report as a DataFrame for display."""
        return pd.DataFrame([s.as_row() for s in self.sections], columns=REPORT_COLUMNS)

    def to_gradio_outputs(self) -> tuple:
        """Convert to Gradio UI outputs format.

        Returns:
            Tuple of (output_file, status, report_table)
        """
        import gradio as gr

        if self.is_failed:
            return (
                None,
                self.status_message,
                gr.update(value=None, visible=False),
            )

        return (
            self.output_path,
            self.status_message,
            gr.update(value=self.to_dataframe(), visible=True),
        )
