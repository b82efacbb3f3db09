"""Content Package

Everything that reads from the presentation:

- ContentSource / ImageResource: abstract view of the presentation (source.py)
- BrowserContentSource: Playwright-backed implementation (browser_source.py)
- ReadinessGate: waits for fonts and images to settle (readiness.py)
- SectionCapture: bounded-scale rasterization on white (capture.py)
"""

from .source import ContentSource, ImageResource
from .readiness import ReadinessGate
from .capture import SectionCapture, compute_capture_scale, compute_capture_size, flatten_on_background
from .browser_source import BrowserContentSource, BrowserImage

__all__ = [
    'ContentSource',
    'ImageResource',
    'ReadinessGate',
    'SectionCapture',
    'compute_capture_scale',
    'compute_capture_size',
    'flatten_on_background',
    'BrowserContentSource',
    'BrowserImage',
]
