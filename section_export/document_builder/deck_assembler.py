"""Slide Deck Assembler

Builds the 16:9 PPTX: one blank slide per section with the capture centered.
"""
import asyncio
import io

from pptx import Presentation
from pptx.util import Inches

from ..config import PPTX_FILENAME, SLIDE_WIDTH_IN, SLIDE_HEIGHT_IN, SLIDE_BLANK_LAYOUT_INDEX, PX_PER_INCH
from ..models import CaptureResult, PlacementGeometry
from .assembler import DocumentAssembler
from . import coordinate_utils


class DeckDocumentAssembler(DocumentAssembler):
    """Assemble captures into a python-pptx presentation."""

    filename = PPTX_FILENAME

    def __init__(
        self,
        slide_width: float = SLIDE_WIDTH_IN,
        slide_height: float = SLIDE_HEIGHT_IN,
        px_per_inch: float = PX_PER_INCH
    ):
        super().__init__()
        self.slide_width = slide_width
        self.slide_height = slide_height
        self.px_per_inch = px_per_inch

        self.presentation = Presentation()
        self.presentation.slide_width = Inches(slide_width)
        self.presentation.slide_height = Inches(slide_height)

    def fit(self, bitmap_width: int, bitmap_height: int) -> PlacementGeometry:
        return coordinate_utils.fit_to_slide(
            bitmap_width, bitmap_height, self.slide_width, self.slide_height, self.px_per_inch
        )

    def _add_page(self, capture: CaptureResult, geometry: PlacementGeometry) -> None:
        layout = self.presentation.slide_layouts[SLIDE_BLANK_LAYOUT_INDEX]
        slide = self.presentation.slides.add_slide(layout)
        slide.shapes.add_picture(
            io.BytesIO(capture.to_png_bytes()),
            Inches(geometry.x),
            Inches(geometry.y),
            width=Inches(geometry.width),
            height=Inches(geometry.height),
        )

    async def _serialize(self) -> bytes:
        # Zipping every slide image is the slow part; keep it off the event loop
        return await asyncio.to_thread(self._save_to_bytes)

    def _save_to_bytes(self) -> bytes:
        output = io.BytesIO()
        self.presentation.save(output)
        return output.getvalue()
