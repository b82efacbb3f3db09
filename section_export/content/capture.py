"""Section Capture

Rasterizes one section at a bounded scale onto an opaque white background.
"""
import io
import logging
from typing import Tuple

from PIL import Image

from ..config import MAX_CAPTURE_EDGE_PX, MAX_CAPTURE_SCALE, CAPTURE_BACKGROUND
from ..exceptions import CaptureFailure
from ..models import CaptureResult, ContentSection
from .source import ContentSource

logger = logging.getLogger(__name__)


def compute_capture_scale(width: float, height: float) -> float:
    """
    Device scale used to rasterize a section.

    The long edge of the raster is held near 1600 pixels. Small sections are
    oversampled up to 2x for sharper output; large ones are downsampled.

    Examples:
        >>> compute_capture_scale(1600, 900)
        1.0
        >>> compute_capture_scale(400, 300)
        2.0
        >>> compute_capture_scale(3200, 900)
        0.5
    """
    return min(MAX_CAPTURE_SCALE, MAX_CAPTURE_EDGE_PX / max(width, height))


def compute_capture_size(width: float, height: float, scale: float) -> Tuple[int, int]:
    """Bitmap pixel size of a section rendered at scale (at least 1x1)."""
    return max(1, round(width * scale)), max(1, round(height * scale))


def flatten_on_background(image: Image.Image, background=CAPTURE_BACKGROUND) -> Image.Image:
    """
    Composite an image onto an opaque background and return it as RGB.

    Transparent regions of the raster would otherwise show up as gaps in the
    final document.
    """
    if image.mode == "P":
        image = image.convert("RGBA")

    if image.mode in ("RGBA", "LA"):
        flattened = Image.new("RGB", image.size, background)
        flattened.paste(image, mask=image.split()[-1])
        return flattened

    return image.convert("RGB")


class SectionCapture:
    """Capture sections one at a time through a content source."""

    async def capture(self, source: ContentSource, section: ContentSection) -> CaptureResult:
        """
        Rasterize a section.

        The section is measured again first, so scale and clip follow the
        layout after fonts and images settled rather than the one seen when
        the sections were listed.

        Args:
            source: Content source that owns the section
            section: Section to capture

        Returns:
            CaptureResult with an RGB bitmap of exactly compute_capture_size()

        Raises:
            CaptureFailure: If measuring, rendering or decoding fails
        """
        try:
            section = await source.measure(section)
        except Exception as e:
            raise CaptureFailure(section.index, f"measuring failed: {e}") from e

        scale = compute_capture_scale(section.width, section.height)
        expected_size = compute_capture_size(section.width, section.height, scale)

        try:
            data = await source.rasterize(section, scale)
            with Image.open(io.BytesIO(data)) as raw:
                raw.load()
                image = flatten_on_background(raw)
        except CaptureFailure:
            raise
        except Exception as e:
            raise CaptureFailure(section.index, str(e)) from e

        if image.size != expected_size:
            logger.debug(
                "Section %d: raster is %dx%d, resampling to %dx%d",
                section.index, image.width, image.height, *expected_size,
            )
            image = image.resize(expected_size, Image.LANCZOS)

        logger.debug(
            "Captured section %d (%gx%g) at scale %.3f -> %dx%d",
            section.index, section.width, section.height, scale, image.width, image.height,
        )
        return CaptureResult(section=section, image=image, scale=scale)
