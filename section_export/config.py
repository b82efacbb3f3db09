"""Configuration Constants

Constants for the section export pipeline.
"""

# Content Source
DEFAULT_SECTION_SELECTOR = ".page section"
DEFAULT_CONTENT_URL = "http://localhost:5173/"
DEFAULT_OUTPUT_DIR = "exports"

# Fallback intrinsic size when a section cannot be measured (CSS pixels)
FALLBACK_SECTION_WIDTH = 1600
FALLBACK_SECTION_HEIGHT = 900

# Capture Limits
MAX_CAPTURE_EDGE_PX = 1600  # Long edge of the raster, in source pixels
MAX_CAPTURE_SCALE = 2.0     # Oversampling cap for small sections
CAPTURE_BACKGROUND = (255, 255, 255)

# Browser Defaults
DEFAULT_VIEWPORT_WIDTH = 1600
DEFAULT_VIEWPORT_HEIGHT = 900
DEFAULT_NAVIGATION_TIMEOUT_SEC = 60.0

# Paginated Document (inches, landscape)
PDF_PAGE_WIDTH_IN = 20.0
PDF_PAGE_HEIGHT_IN = 11.25
PDF_PAGE_MARGIN_IN = 0.0
PDF_FILENAME = "presentation.pdf"
PDF_TITLE = "Presentation"

# Slide Deck (inches, 16:9)
SLIDE_WIDTH_IN = 10.0
SLIDE_HEIGHT_IN = 5.625
SLIDE_BLANK_LAYOUT_INDEX = 6
PPTX_FILENAME = "presentation.pptx"

# Browser pixels per inch
PX_PER_INCH = 96.0

# User-visible notices
NO_CONTENT_NOTICE = "No content found to export."
EXPORT_FAILED_NOTICES = {
    "pdf": "Unable to export PDF. Please check logs for details.",
    "deck": "Unable to export PPT. Please check logs for details.",
}

# Progress Steps (for UI progress tracking)
PROGRESS_STEPS = {
    "OPEN_CONTENT": 0.02,
    "READINESS": 0.05,
    "CAPTURE_START": 0.10,
    "CAPTURE_END": 0.90,
    "FINALIZE": 0.95,
    "COMPLETE": 1.0,
}

# Environment variables read by ExportOptions.from_env()
ENV_CONTENT_URL = "EXPORT_CONTENT_URL"
ENV_OUTPUT_DIR = "EXPORT_OUTPUT_DIR"
ENV_READINESS_TIMEOUT = "EXPORT_READINESS_TIMEOUT"
ENV_SECTION_SELECTOR = "EXPORT_SECTION_SELECTOR"
ENV_HEADLESS = "EXPORT_HEADLESS"
