"""Document Builder Package

This package turns section captures into the two downloadable documents:

Core Classes:
- DocumentAssembler: Append-only base class with atomic finalize (from assembler.py)
- PagedDocumentAssembler: 20 x 11.25 inch borderless PDF via ReportLab
- DeckDocumentAssembler: 16:9 PPTX via python-pptx

Utilities:
- coordinate_utils: Page/slide fitting and unit conversion functions

Helper Functions:
- create_assembler: Pick the assembler for an export kind
"""

from .assembler import DocumentAssembler
from .pdf_assembler import PagedDocumentAssembler
from .deck_assembler import DeckDocumentAssembler
from . import coordinate_utils
from ..models import ExportKind


def create_assembler(kind: ExportKind) -> DocumentAssembler:
    """
    Create a fresh assembler for one export run.

    Args:
        kind: ExportKind.PDF or ExportKind.DECK

    Returns:
        New, empty DocumentAssembler
    """
    if kind == ExportKind.PDF:
        return PagedDocumentAssembler()
    if kind == ExportKind.DECK:
        return DeckDocumentAssembler()
    raise ValueError(f"Unknown export kind: {kind}")


# Expose public API
__all__ = [
    # Base class
    'DocumentAssembler',

    # Format assemblers
    'PagedDocumentAssembler',
    'DeckDocumentAssembler',

    # Helper functions
    'create_assembler',

    # Utilities module
    'coordinate_utils',
]
