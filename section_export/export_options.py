"""Export Options Dataclass

Configuration options for a single export run.
"""
import os
from dataclasses import dataclass
from typing import Optional

from .config import (
    DEFAULT_CONTENT_URL,
    DEFAULT_OUTPUT_DIR,
    DEFAULT_SECTION_SELECTOR,
    DEFAULT_VIEWPORT_WIDTH,
    DEFAULT_VIEWPORT_HEIGHT,
    DEFAULT_NAVIGATION_TIMEOUT_SEC,
    ENV_CONTENT_URL,
    ENV_OUTPUT_DIR,
    ENV_READINESS_TIMEOUT,
    ENV_SECTION_SELECTOR,
    ENV_HEADLESS,
)
from .exceptions import InvalidConfigurationError


@dataclass
class ExportOptions:
    """Configuration options for the export pipeline.

    Attributes:
        content_url: URL (or local HTML path) of the presentation to export
        section_selector: CSS selector matching the sections, in document order
        output_dir: Directory the finished document is written to

        # Readiness
        readiness_timeout: Seconds to wait for images to settle before proceeding
                           anyway. Fonts are always awaited in full. None waits
                           indefinitely.

        # Browser
        headless: Run Chromium without a window
        viewport_width: Initial browser viewport width in CSS pixels
        viewport_height: Initial browser viewport height in CSS pixels
        navigation_timeout: Seconds allowed for the content page to load
    """

    content_url: str = DEFAULT_CONTENT_URL
    section_selector: str = DEFAULT_SECTION_SELECTOR
    output_dir: str = DEFAULT_OUTPUT_DIR

    # Readiness
    readiness_timeout: Optional[float] = None

    # Browser
    headless: bool = True
    viewport_width: int = DEFAULT_VIEWPORT_WIDTH
    viewport_height: int = DEFAULT_VIEWPORT_HEIGHT
    navigation_timeout: float = DEFAULT_NAVIGATION_TIMEOUT_SEC

    def __post_init__(self):
        """Validate configuration options after initialization."""
        if not self.section_selector or not self.section_selector.strip():
            raise InvalidConfigurationError("section_selector cannot be empty")

        if not self.output_dir:
            raise InvalidConfigurationError("output_dir cannot be empty")

        if self.readiness_timeout is not None and self.readiness_timeout <= 0:
            raise InvalidConfigurationError(
                f"readiness_timeout must be positive or None, got {self.readiness_timeout}"
            )

        if self.viewport_width <= 0 or self.viewport_height <= 0:
            raise InvalidConfigurationError(
                f"viewport must be positive, got {self.viewport_width}x{self.viewport_height}"
            )

        if self.navigation_timeout <= 0:
            raise InvalidConfigurationError(
                f"navigation_timeout must be positive, got {self.navigation_timeout}"
            )

    @classmethod
    def from_env(cls, **overrides) -> "ExportOptions":
        """Build options from EXPORT_* environment variables.

        Keyword overrides win over the environment. Unset variables keep the
        dataclass defaults.
        """
        values = {}

        if os.getenv(ENV_CONTENT_URL):
            values["content_url"] = os.getenv(ENV_CONTENT_URL)
        if os.getenv(ENV_OUTPUT_DIR):
            values["output_dir"] = os.getenv(ENV_OUTPUT_DIR)
        if os.getenv(ENV_SECTION_SELECTOR):
            values["section_selector"] = os.getenv(ENV_SECTION_SELECTOR)

        timeout = os.getenv(ENV_READINESS_TIMEOUT)
        if timeout:
            try:
                values["readiness_timeout"] = float(timeout)
            except ValueError:
                raise InvalidConfigurationError(
                    f"{ENV_READINESS_TIMEOUT} must be a number, got '{timeout}'"
                )

        headless = os.getenv(ENV_HEADLESS)
        if headless:
            values["headless"] = headless.strip().lower() not in ("0", "false", "no", "off")

        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)
