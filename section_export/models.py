"""Data Model

Core data structures passed between the export pipeline components.
"""
import io
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, List, Optional

from PIL import Image

from .config import FALLBACK_SECTION_WIDTH, FALLBACK_SECTION_HEIGHT


class ExportKind(str, Enum):
    """Output format of an export job."""
    PDF = "pdf"
    DECK = "deck"


class JobStatus(str, Enum):
    """Lifecycle status of an export job."""
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class ContentSection:
    """One ordered content block of the presentation.

    Attributes:
        index: Position in document order (the section's identity)
        width: Intrinsic width in CSS pixels
        height: Intrinsic height in CSS pixels
        handle: Opaque reference owned by the content source (e.g. an ElementHandle)
    """
    index: int
    width: float
    height: float
    handle: Any = field(default=None, compare=False, repr=False)

    @classmethod
    def from_measurement(
        cls,
        index: int,
        width: Optional[float],
        height: Optional[float],
        handle: Any = None,
    ) -> "ContentSection":
        """Build a section, falling back to 1600x900 for unmeasurable sides."""
        return cls(
            index=index,
            width=width or FALLBACK_SECTION_WIDTH,
            height=height or FALLBACK_SECTION_HEIGHT,
            handle=handle,
        )


@dataclass
class CaptureResult:
    """Bitmap snapshot of one section."""
    section: ContentSection
    image: Image.Image
    scale: float

    @property
    def width(self) -> int:
        return self.image.width

    @property
    def height(self) -> int:
        return self.image.height

    def to_png_bytes(self) -> bytes:
        buffer = io.BytesIO()
        self.image.save(buffer, format="PNG")
        return buffer.getvalue()

    def release(self) -> None:
        """Free the pixel buffer once the capture has been placed."""
        self.image.close()


@dataclass(frozen=True)
class PlacementGeometry:
    """Position and size of a bitmap on a page or slide.

    Units are inches with the origin at the top-left corner of the page.
    """
    x: float
    y: float
    width: float
    height: float


@dataclass
class SectionReport:
    """Per-section record of what was captured and where it was placed."""
    index: int
    section_width: float
    section_height: float
    scale: float
    bitmap_width: int
    bitmap_height: int
    placement: PlacementGeometry

    def as_row(self) -> list:
        return [
            self.index + 1,
            f"{self.section_width:g}x{self.section_height:g}",
            round(self.scale, 3),
            f"{self.bitmap_width}x{self.bitmap_height}",
            f"({self.placement.x:.3f}, {self.placement.y:.3f})",
            f"{self.placement.width:.3f}x{self.placement.height:.3f}",
        ]


@dataclass
class ExportJob:
    """Record of one export run."""
    kind: ExportKind
    status: JobStatus = JobStatus.RUNNING
    started_at: datetime = field(default_factory=datetime.now)
    finished_at: Optional[datetime] = None
    section_count: int = 0
    output_path: Optional[str] = None
    error: Optional[str] = None
    sections: List[SectionReport] = field(default_factory=list)

    def mark_succeeded(self, output_path: str) -> None:
        self.status = JobStatus.SUCCEEDED
        self.output_path = output_path
        self.finished_at = datetime.now()

    def mark_failed(self, error: str) -> None:
        self.status = JobStatus.FAILED
        self.error = error
        self.finished_at = datetime.now()
