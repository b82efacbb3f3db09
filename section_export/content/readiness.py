"""Readiness Gate

Holds the pipeline back until fonts and images of the content source have
settled. An image that fails to load counts as settled: readiness is best
effort, a broken image should not abort the export.
"""
import asyncio
import logging
from typing import List, Optional

from .source import ContentSource, ImageResource

logger = logging.getLogger(__name__)


class ReadinessGate:
    """Wait for fonts and every image before capture starts.

    Attributes:
        timeout: Seconds to wait for images to settle before proceeding
                 anyway. Fonts are always awaited in full. None waits
                 indefinitely, so an image that never fires load or error
                 blocks the export.
    """

    def __init__(self, timeout: Optional[float] = None):
        self.timeout = timeout

    async def wait(self, source: ContentSource) -> None:
        """
        Block until the content source is ready to be captured.

        Remote images get their cross-origin attributes before any waiting.
        Attributes that are already present are left alone; an image whose
        attributes do change may be fetched again, and the wait covers that
        second load.

        Args:
            source: Content source to wait on
        """
        await source.wait_for_fonts()

        images = await source.list_images()
        remote = [image for image in images if image.is_remote]
        for image in remote:
            await image.prepare_cross_origin()

        logger.debug("Waiting for %d image(s) (%d remote)", len(images), len(remote))
        await self._wait_images(images)

    async def _wait_images(self, images: List[ImageResource]) -> None:
        if not images:
            return

        waits = [asyncio.ensure_future(image.wait_settled()) for image in images]
        try:
            if self.timeout is None:
                await asyncio.gather(*waits)
                return

            done, pending = await asyncio.wait(waits, timeout=self.timeout)
            if pending:
                logger.warning(
                    "%d of %d image(s) did not settle within %.1fs; capturing anyway",
                    len(pending), len(images), self.timeout,
                )
            # Surface errors from the readiness checks themselves
            errors = [task.exception() for task in done if not task.cancelled()]
            errors = [error for error in errors if error is not None]
            if errors:
                raise errors[0]
        finally:
            for task in waits:
                if not task.done():
                    task.cancel()
