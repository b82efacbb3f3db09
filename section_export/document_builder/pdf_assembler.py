"""Paginated Document Assembler

Builds the borderless landscape PDF: one 20 x 11.25 inch page per section,
each capture drawn flush to the top-left corner.
"""
import io

from reportlab.lib.units import inch
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas as pdfcanvas

from ..config import PDF_FILENAME, PDF_PAGE_WIDTH_IN, PDF_PAGE_HEIGHT_IN, PDF_TITLE
from ..models import CaptureResult, PlacementGeometry
from .assembler import DocumentAssembler
from . import coordinate_utils


class PagedDocumentAssembler(DocumentAssembler):
    """Assemble captures into a PDF with ReportLab's canvas.

    The canvas starts with one open page. The first capture fills it; every
    later capture closes the current page with showPage() before drawing.
    """

    filename = PDF_FILENAME

    def __init__(
        self,
        page_width: float = PDF_PAGE_WIDTH_IN,
        page_height: float = PDF_PAGE_HEIGHT_IN,
        title: str = PDF_TITLE
    ):
        """
        Initialize the PDF assembler.

        Args:
            page_width: Page width in inches
            page_height: Page height in inches
            title: Document title stored in the PDF metadata
        """
        super().__init__()
        self.page_width = page_width
        self.page_height = page_height
        self._buffer = io.BytesIO()
        self._canvas = pdfcanvas.Canvas(
            self._buffer,
            pagesize=(page_width * inch, page_height * inch),
        )
        self._canvas.setTitle(title)

    def fit(self, bitmap_width: int, bitmap_height: int) -> PlacementGeometry:
        return coordinate_utils.fit_to_page(
            bitmap_width, bitmap_height, self.page_width, self.page_height
        )

    def _add_page(self, capture: CaptureResult, geometry: PlacementGeometry) -> None:
        if self.page_count > 0:
            self._canvas.showPage()

        x, y, width, height = coordinate_utils.geometry_to_pdf_points(geometry, self.page_height)
        self._canvas.drawImage(
            ImageReader(capture.image),
            x,
            y,
            width=width,
            height=height,
            preserveAspectRatio=False,
        )

    async def _serialize(self) -> bytes:
        self._canvas.save()
        return self._buffer.getvalue()
