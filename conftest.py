"""
pytest configuration and shared fixtures

Provides an in-memory content source so the pipeline can be exercised
without a browser:

    async def test_something(make_source, export_options):
        source = make_source([(1600, 900), (800, 1200)])
"""
import asyncio
import io
from typing import Dict, List, Optional, Sequence, Tuple

import pytest
from PIL import Image

from section_export.content.source import ContentSource, ImageResource
from section_export.export_options import ExportOptions
from section_export.models import ContentSection


class FakeImage(ImageResource):
    """Image whose load/error signal is fired by the test."""

    def __init__(self, src: str, settled: bool = True):
        self._src = src
        self.attributes = {}
        self.events = []
        self._settled = asyncio.Event()
        if settled:
            self._settled.set()

    @property
    def src(self) -> str:
        return self._src

    @property
    def is_settled(self) -> bool:
        return self._settled.is_set()

    def fire(self) -> None:
        """Simulate the browser's load or error event."""
        self._settled.set()

    async def prepare_cross_origin(self) -> None:
        self.events.append("prepare")
        self.attributes.setdefault("crossorigin", "anonymous")
        self.attributes.setdefault("referrerpolicy", "no-referrer")

    async def wait_settled(self) -> None:
        self.events.append("wait")
        await self._settled.wait()


class FakeContentSource(ContentSource):
    """Content source rendering solid-colour sections with Pillow.

    Attributes:
        rasterized: Section indexes in the order they were captured
        max_in_flight: Highest number of concurrent rasterize() calls seen
        closed: True once the pipeline released the source

    reflow maps a section index to the size it takes once every image has
    settled, like a section whose images have no fixed dimensions.
    """

    def __init__(
        self,
        sizes: Sequence[Tuple[Optional[float], Optional[float]]],
        images: Optional[List[FakeImage]] = None,
        fail_at: Optional[int] = None,
        transparent: bool = False,
        size_error: int = 0,
        reflow: Optional[Dict[int, Tuple[float, float]]] = None,
    ):
        self.sections = [
            ContentSection.from_measurement(index, width, height, handle=f"section-{index}")
            for index, (width, height) in enumerate(sizes)
        ]
        self.images = images or []
        self.fail_at = fail_at
        self.transparent = transparent
        self.size_error = size_error
        self.reflow = reflow or {}

        self.fonts_waited = False
        self.rasterized = []
        self.scales = []
        self.max_in_flight = 0
        self._in_flight = 0
        self.closed = False

    async def list_sections(self) -> List[ContentSection]:
        return list(self.sections)

    async def wait_for_fonts(self) -> None:
        self.fonts_waited = True

    async def list_images(self) -> List[ImageResource]:
        return list(self.images)

    async def measure(self, section: ContentSection) -> ContentSection:
        settled = all(image.is_settled for image in self.images)
        if section.index not in self.reflow or not settled:
            return section
        width, height = self.reflow[section.index]
        return ContentSection.from_measurement(section.index, width, height, section.handle)

    async def rasterize(self, section: ContentSection, scale: float) -> bytes:
        self._in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self._in_flight)
        try:
            await asyncio.sleep(0)
            if self.fail_at is not None and section.index == self.fail_at:
                raise RuntimeError("tainted canvas")

            size = (
                max(1, round(section.width * scale)) + self.size_error,
                max(1, round(section.height * scale)),
            )
            if self.transparent:
                image = Image.new("RGBA", size, (255, 0, 0, 0))
            else:
                shade = (section.index * 40) % 256
                image = Image.new("RGB", size, (shade, 120, 200))

            buffer = io.BytesIO()
            image.save(buffer, format="PNG")
            self.rasterized.append(section.index)
            self.scales.append(scale)
            return buffer.getvalue()
        finally:
            self._in_flight -= 1

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def export_options(tmp_path) -> ExportOptions:
    """Options writing into a per-test output directory."""
    return ExportOptions(content_url="http://example.test/", output_dir=str(tmp_path / "exports"))


@pytest.fixture
def make_source():
    """Factory for FakeContentSource instances."""
    def _make(sizes, **kwargs) -> FakeContentSource:
        return FakeContentSource(sizes, **kwargs)
    return _make
