"""Custom Exception Hierarchy

Exception hierarchy for the section export pipeline, giving each failure
scenario its own type while letting callers catch everything at the job
boundary through the common base class.
"""


class SectionExportError(Exception):
    """Base exception for all section export errors.

    This is the root of the exception hierarchy. Catching this exception
    will catch all custom exceptions raised by the export pipeline.
    """
    pass


# Validation Errors
class ValidationError(SectionExportError):
    """Raised when input validation fails."""
    pass


class InvalidConfigurationError(ValidationError):
    """Raised when export options are invalid."""
    pass


class InvalidContentUrlError(ValidationError):
    """Raised when the content URL is empty, malformed or points at a missing file."""
    pass


# Content Errors
class EmptyContentError(SectionExportError):
    """Raised when the content source yields zero sections."""

    def __init__(self, selector: str = ""):
        self.selector = selector
        detail = f" matching '{selector}'" if selector else ""
        super().__init__(f"No sections{detail} found in content source")


# Capture Errors
class CaptureError(SectionExportError):
    """Base class for rasterization errors."""
    pass


class CaptureFailure(CaptureError):
    """Raised when a section cannot be rasterized."""

    def __init__(self, section_index: int, reason: str):
        self.section_index = section_index
        self.reason = reason
        super().__init__(f"Failed to capture section {section_index}: {reason}")


class BrowserUnavailableError(CaptureError):
    """Raised when the headless browser cannot be started."""

    def __init__(self, reason: str):
        super().__init__(
            f"Headless browser unavailable: {reason}. "
            "Install with: pip install playwright && playwright install chromium"
        )


# Assembly Errors
class AssemblyFailure(SectionExportError):
    """Raised when a page/slide cannot be added or the document cannot be saved."""
    pass


# Pipeline Errors
class PipelineError(SectionExportError):
    """Base class for pipeline orchestration errors."""
    pass


class PipelineStepError(PipelineError):
    """Raised when a specific pipeline step fails.

    This wraps the underlying exception while preserving the pipeline context.
    """

    def __init__(self, step_name: str, original_exception: Exception):
        self.step_name = step_name
        self.original_exception = original_exception
        super().__init__(
            f"Pipeline step '{step_name}' failed: {str(original_exception)}"
        )
