"""Content Source Interfaces

Abstract view of the presentation the pipeline exports. The pipeline never
talks to a browser directly; it asks a ContentSource for sections, readiness
signals and rasterized bitmaps.
"""
from abc import ABC, abstractmethod
from typing import List

from ..models import ContentSection
from ..utils import is_remote_source


class ImageResource(ABC):
    """One image of the content source, with its own readiness awaitable."""

    @property
    @abstractmethod
    def src(self) -> str:
        """Image source URL as written in the document."""

    @property
    def is_remote(self) -> bool:
        return is_remote_source(self.src)

    @abstractmethod
    async def prepare_cross_origin(self) -> None:
        """Set crossorigin/referrerpolicy attributes if they are not already present."""

    @abstractmethod
    async def wait_settled(self) -> None:
        """Return once the image has loaded or failed to load."""


class ContentSource(ABC):
    """Presentation content as seen by the export pipeline."""

    @abstractmethod
    async def list_sections(self) -> List[ContentSection]:
        """Return the sections in document order."""

    @abstractmethod
    async def wait_for_fonts(self) -> None:
        """Return once web fonts report ready."""

    @abstractmethod
    async def list_images(self) -> List[ImageResource]:
        """Return every image in the content source."""

    async def measure(self, section: ContentSection) -> ContentSection:
        """
        Return the section with its current intrinsic size.

        Layout can change while fonts and images settle, so capture measures
        again right before rasterizing. Sources with a fixed layout return the
        section unchanged.
        """
        return section

    @abstractmethod
    async def rasterize(self, section: ContentSection, scale: float) -> bytes:
        """
        Render a section to an image.

        Args:
            section: Section to render, at its full intrinsic size
            scale: Device pixels per CSS pixel

        Returns:
            Encoded image bytes (PNG)
        """

    async def __aenter__(self) -> "ContentSource":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def close(self) -> None:
        """Release resources held by the source."""
