"""Document Assembler Base

Shared behaviour of the paginated and slide-deck assemblers: append-only
page accounting, single finalize, and all-or-nothing writing of the output
file.
"""
import logging
import os
from abc import ABC, abstractmethod
from typing import List

from ..exceptions import AssemblyFailure
from ..models import CaptureResult, PlacementGeometry
from ..utils import format_file_size, write_file_atomically

logger = logging.getLogger(__name__)


class DocumentAssembler(ABC):
    """Accumulates one page per capture and writes the finished document.

    Subclasses implement the format-specific fitting, drawing and
    serialization. The base class guarantees ordering, refuses appends after
    finalize, and writes the file only once the whole document serialized.

    Attributes:
        filename: Fixed name of the downloaded file
        placements: Geometry of every appended page, in order
    """

    filename: str = ""

    def __init__(self):
        self.placements: List[PlacementGeometry] = []
        self._finalized = False

    @property
    def page_count(self) -> int:
        return len(self.placements)

    @property
    def is_finalized(self) -> bool:
        return self._finalized

    def append(self, capture: CaptureResult) -> PlacementGeometry:
        """
        Add one capture as the next page/slide.

        Args:
            capture: Bitmap of the next section in document order

        Returns:
            Geometry the capture was placed at

        Raises:
            AssemblyFailure: If the document is already finalized or drawing fails
        """
        if self._finalized:
            raise AssemblyFailure(f"Cannot append to finalized document '{self.filename}'")

        geometry = self.fit(capture.width, capture.height)
        try:
            self._add_page(capture, geometry)
        except Exception as e:
            raise AssemblyFailure(
                f"Failed to add section {capture.section.index} to '{self.filename}': {e}"
            ) from e

        self.placements.append(geometry)
        logger.debug(
            "Placed section %d on page %d at (%.3f, %.3f) size %.3fx%.3f",
            capture.section.index, self.page_count,
            geometry.x, geometry.y, geometry.width, geometry.height,
        )
        return geometry

    async def finalize(self, output_dir: str) -> str:
        """
        Serialize the document and write it under its fixed file name.

        Args:
            output_dir: Directory to write the document to

        Returns:
            Path of the written file

        Raises:
            AssemblyFailure: If finalized twice, empty, or serialization/saving fails
        """
        if self._finalized:
            raise AssemblyFailure(f"Document '{self.filename}' is already finalized")
        if not self.placements:
            raise AssemblyFailure(f"Document '{self.filename}' has no pages")

        self._finalized = True
        output_path = os.path.join(output_dir, self.filename)

        try:
            data = await self._serialize()
            write_file_atomically(output_path, data)
        except Exception as e:
            raise AssemblyFailure(f"Failed to save '{output_path}': {e}") from e

        logger.info(
            "Wrote %s: %d page(s), %s",
            output_path, self.page_count, format_file_size(len(data)),
        )
        return output_path

    @abstractmethod
    def fit(self, bitmap_width: int, bitmap_height: int) -> PlacementGeometry:
        """Compute the placement of a bitmap in this format's coordinate space."""

    @abstractmethod
    def _add_page(self, capture: CaptureResult, geometry: PlacementGeometry) -> None:
        """Append a page/slide holding the capture at the given geometry."""

    @abstractmethod
    async def _serialize(self) -> bytes:
        """Return the complete document bytes."""
