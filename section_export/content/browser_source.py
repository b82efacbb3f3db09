"""Browser Content Source

Loads the presentation into its own headless Chromium page with Playwright
and exposes it as a ContentSource. Because the page is a private copy, any
attribute the pipeline sets while preparing images never touches elements
owned by the live presentation.
"""
import base64
import contextlib
import logging
from typing import List

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import async_playwright

from ..exceptions import BrowserUnavailableError, CaptureFailure
from ..export_options import ExportOptions
from ..models import ContentSection
from ..utils import resolve_content_url
from .source import ContentSource, ImageResource

logger = logging.getLogger(__name__)


MEASURE_SECTION_JS = """
el => [el.scrollWidth || el.offsetWidth || 0, el.scrollHeight || el.offsetHeight || 0]
"""

SECTION_ORIGIN_JS = """
el => {
    const rect = el.getBoundingClientRect();
    return { x: rect.left + window.scrollX, y: rect.top + window.scrollY };
}
"""

FONTS_READY_JS = """
async () => {
    if (document.fonts) {
        await document.fonts.ready;
    }
}
"""

PREPARE_IMAGE_JS = """
img => {
    if (!img.hasAttribute('crossorigin')) {
        img.setAttribute('crossorigin', 'anonymous');
    }
    if (!img.hasAttribute('referrerpolicy')) {
        img.setAttribute('referrerpolicy', 'no-referrer');
    }
}
"""

# complete is true for loaded and for broken images alike
WAIT_IMAGE_JS = """
img => img.complete ? true : new Promise(resolve => {
    img.addEventListener('load', () => resolve(true), { once: true });
    img.addEventListener('error', () => resolve(false), { once: true });
})
"""

WHITE = {"r": 255, "g": 255, "b": 255, "a": 1}


class BrowserImage(ImageResource):
    """An <img> element of the browser page."""

    def __init__(self, handle, src: str):
        self._handle = handle
        self._src = src

    @property
    def src(self) -> str:
        return self._src

    async def prepare_cross_origin(self) -> None:
        await self._handle.evaluate(PREPARE_IMAGE_JS)

    async def wait_settled(self) -> None:
        await self._handle.evaluate(WAIT_IMAGE_JS)


class BrowserContentSource(ContentSource):
    """Content source backed by a Playwright Chromium page.

    Use as an async context manager:

        async with BrowserContentSource(options) as source:
            sections = await source.list_sections()
    """

    def __init__(self, options: ExportOptions):
        self.options = options
        self._playwright = None
        self._browser = None
        self._page = None
        self._cdp = None

    async def __aenter__(self) -> "BrowserContentSource":
        try:
            await self.open()
        except BaseException:
            await self.close()
            raise
        return self

    async def open(self) -> None:
        """Start Chromium and load the content URL.

        Raises:
            InvalidContentUrlError: If the content URL is unusable
            BrowserUnavailableError: If Playwright cannot launch Chromium
        """
        url = resolve_content_url(self.options.content_url)

        try:
            self._playwright = await async_playwright().start()
            self._browser = await self._playwright.chromium.launch(headless=self.options.headless)
        except PlaywrightError as e:
            raise BrowserUnavailableError(str(e)) from e

        self._page = await self._browser.new_page(
            viewport={
                "width": self.options.viewport_width,
                "height": self.options.viewport_height,
            },
        )
        logger.info("Loading content from %s", url)
        await self._page.goto(
            url,
            wait_until="domcontentloaded",
            timeout=self.options.navigation_timeout * 1000,
        )

        self._cdp = await self._page.context.new_cdp_session(self._page)
        await self._cdp.send("Emulation.setDefaultBackgroundColorOverride", {"color": WHITE})

    async def list_sections(self) -> List[ContentSection]:
        handles = await self._page.query_selector_all(self.options.section_selector)

        sections = []
        for index, handle in enumerate(handles):
            width, height = await handle.evaluate(MEASURE_SECTION_JS)
            sections.append(ContentSection.from_measurement(index, width, height, handle))

        logger.info("Found %d section(s) matching '%s'", len(sections), self.options.section_selector)
        return sections

    async def measure(self, section: ContentSection) -> ContentSection:
        if section.handle is None:
            return section

        width, height = await section.handle.evaluate(MEASURE_SECTION_JS)
        measured = ContentSection.from_measurement(section.index, width, height, section.handle)
        if measured != section:
            logger.debug(
                "Section %d reflowed from %gx%g to %gx%g",
                section.index, section.width, section.height, measured.width, measured.height,
            )
        return measured

    async def wait_for_fonts(self) -> None:
        await self._page.evaluate(FONTS_READY_JS)

    async def list_images(self) -> List[ImageResource]:
        images = []
        for handle in await self._page.query_selector_all("img"):
            src = await handle.evaluate("img => img.src")
            images.append(BrowserImage(handle, src or ""))
        return images

    async def rasterize(self, section: ContentSection, scale: float) -> bytes:
        """Capture the section's full intrinsic box through the DevTools protocol.

        Page.captureScreenshot accepts a per-call clip scale, so each section
        is rendered directly at its own resolution.
        """
        if section.handle is None:
            raise CaptureFailure(section.index, "section has no element handle")

        origin = await section.handle.evaluate(SECTION_ORIGIN_JS)
        result = await self._cdp.send(
            "Page.captureScreenshot",
            {
                "format": "png",
                "captureBeyondViewport": True,
                "clip": {
                    "x": origin["x"],
                    "y": origin["y"],
                    "width": section.width,
                    "height": section.height,
                    "scale": scale,
                },
            },
        )
        return base64.b64decode(result["data"])

    async def close(self) -> None:
        """Close the page, browser and Playwright driver."""
        browser = self._browser
        playwright = self._playwright
        self._cdp = None
        self._page = None
        self._browser = None
        self._playwright = None

        if browser is not None:
            with contextlib.suppress(PlaywrightError):
                await browser.close()
        if playwright is not None:
            with contextlib.suppress(PlaywrightError):
                await playwright.stop()
