"""Export Pipeline

Shared orchestration for both output formats. Readiness and capture are the
same for PDF and PPTX; only the assembler (fitting + document writer)
differs per export kind.
"""
import contextlib
import logging
from typing import Callable, Optional

from .config import PROGRESS_STEPS
from .content import BrowserContentSource, ContentSource, ReadinessGate, SectionCapture
from .document_builder import create_assembler
from .exceptions import EmptyContentError, PipelineStepError, SectionExportError
from .export_options import ExportOptions
from .models import ExportJob, ExportKind, SectionReport

logger = logging.getLogger(__name__)


SourceFactory = Callable[[ExportOptions], ContentSource]


@contextlib.contextmanager
def pipeline_step(step_name: str):
    """Wrap unexpected exceptions of a step in PipelineStepError."""
    try:
        yield
    except SectionExportError:
        raise
    except Exception as e:
        raise PipelineStepError(step_name, e) from e


class ExportPipeline:
    """Section export pipeline.

    This class runs one export end to end:
    1. Open content - load the presentation through the content source
    2. Precondition - fail with EmptyContentError when there are no sections
    3. Readiness - wait for fonts and images to settle
    4. Capture loop - re-measure, capture, fit and append each section,
       strictly in order
    5. Finalize - serialize the document and write it in one step

    Nothing is written to the output directory unless every step succeeds.

    Attributes:
        options: Export options for this pipeline
        source_factory: Callable building a ContentSource from options
        progress: Callback for progress updates (progress, desc)
    """

    def __init__(
        self,
        options: ExportOptions,
        source_factory: Optional[SourceFactory] = None,
        progress_callback: Optional[Callable[[float, str], None]] = None,
        readiness_gate: Optional[ReadinessGate] = None,
        section_capture: Optional[SectionCapture] = None,
    ):
        self.options = options
        self.source_factory = source_factory or BrowserContentSource
        self.progress = progress_callback or (lambda p, d: None)
        self.readiness = readiness_gate or ReadinessGate(timeout=options.readiness_timeout)
        self.capture = section_capture or SectionCapture()

    async def run(self, kind: ExportKind, job: Optional[ExportJob] = None) -> str:
        """Execute the export.

        Args:
            kind: Output format
            job: Job record to fill with per-section reports (optional)

        Returns:
            Path of the written document

        Raises:
            EmptyContentError: If the content source has no sections
            CaptureFailure: If a section cannot be rasterized
            AssemblyFailure: If the document cannot be built or saved
            PipelineStepError: For any other failure, tagged with its step
        """
        job = job or ExportJob(kind=kind)

        async with contextlib.AsyncExitStack() as stack:
            self.progress(PROGRESS_STEPS["OPEN_CONTENT"], "Opening content...")
            with pipeline_step("open_content"):
                source = await stack.enter_async_context(self.source_factory(self.options))

            with pipeline_step("list_sections"):
                sections = await source.list_sections()

            if not sections:
                raise EmptyContentError(self.options.section_selector)

            self.progress(PROGRESS_STEPS["READINESS"], "Waiting for fonts and images...")
            with pipeline_step("readiness"):
                await self.readiness.wait(source)

            assembler = create_assembler(kind)
            total = len(sections)
            logger.info("Exporting %d section(s) as %s", total, kind.value)

            for position, section in enumerate(sections, start=1):
                with pipeline_step("capture"):
                    capture = await self.capture.capture(source, section)

                try:
                    geometry = assembler.append(capture)
                    job.sections.append(SectionReport(
                        index=section.index,
                        section_width=capture.section.width,
                        section_height=capture.section.height,
                        scale=capture.scale,
                        bitmap_width=capture.width,
                        bitmap_height=capture.height,
                        placement=geometry,
                    ))
                finally:
                    capture.release()

                progress_val = PROGRESS_STEPS["CAPTURE_START"] + (
                    (PROGRESS_STEPS["CAPTURE_END"] - PROGRESS_STEPS["CAPTURE_START"]) * position / total
                )
                self.progress(progress_val, f"Captured section {position} of {total}")

            self.progress(PROGRESS_STEPS["FINALIZE"], f"Saving {assembler.filename}...")
            output_path = await assembler.finalize(self.options.output_dir)

        job.section_count = assembler.page_count
        self.progress(PROGRESS_STEPS["COMPLETE"], "Complete!")
        return output_path
