"""Section Export

Exports the sections of a rendered web presentation as a borderless
landscape PDF or a 16:9 PPTX deck, one rasterized page/slide per section.

Modules:
- config:            constants (page sizes, scale caps, file names, notices)
- export_options:    per-run ExportOptions
- content/           content source, readiness gate and section capture
- document_builder/  page/slide fitting and document assemblers
- pipeline:          shared readiness + capture loop
- controller:        single-flight export state machine
"""

from .controller import ExportContext, ExportController, ExportState, IDLE, start_export, settle_export
from .export_options import ExportOptions
from .export_result import ExportResult
from .models import ExportKind
from .pipeline import ExportPipeline

__version__ = "0.1.0"

__all__ = [
    "ExportContext",
    "ExportController",
    "ExportState",
    "IDLE",
    "start_export",
    "settle_export",
    "ExportOptions",
    "ExportResult",
    "ExportKind",
    "ExportPipeline",
]
