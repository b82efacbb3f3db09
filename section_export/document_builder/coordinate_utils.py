"""Coordinate Conversion Utilities

This module provides pure utility functions for placing captured bitmaps on
the two output formats:

- Paginated PDF: custom 20 x 11.25 inch landscape page, bitmap flush to the
  top-left corner with zero margin
- Slide deck: 16:9 slide of 10 x 5.625 inches, bitmap centered
- Pixel/inch/point conversions and top-left to bottom-left flipping

All functions are pure (no side effects) and can be easily tested in isolation.
"""

from typing import Tuple

from ..config import (
    PDF_PAGE_WIDTH_IN,
    PDF_PAGE_HEIGHT_IN,
    PDF_PAGE_MARGIN_IN,
    SLIDE_WIDTH_IN,
    SLIDE_HEIGHT_IN,
    PX_PER_INCH,
)
from ..models import PlacementGeometry


def aspect_fit_ratio(
    box_width: float,
    box_height: float,
    content_width: float,
    content_height: float
) -> float:
    """
    Uniform scale factor that fits content inside a box without cropping.

    Args:
        box_width: Width of the bounding box
        box_height: Height of the bounding box
        content_width: Width of the content (same units as the result expects)
        content_height: Height of the content

    Returns:
        min(box_width / content_width, box_height / content_height)

    Raises:
        ValueError: If the content has a non-positive dimension
    """
    if content_width <= 0 or content_height <= 0:
        raise ValueError(
            f"Content dimensions must be positive, got {content_width}x{content_height}"
        )
    return min(box_width / content_width, box_height / content_height)


def fit_to_page(
    bitmap_width: float,
    bitmap_height: float,
    page_width: float = PDF_PAGE_WIDTH_IN,
    page_height: float = PDF_PAGE_HEIGHT_IN,
    margin: float = PDF_PAGE_MARGIN_IN
) -> PlacementGeometry:
    """
    Place a bitmap on a paginated-document page.

    The bitmap is scaled uniformly so it fits inside the page and is placed
    flush at the top-left corner. When the aspect ratios differ, the leftover
    space appears on the right or bottom edge only.

    Args:
        bitmap_width: Bitmap width in pixels
        bitmap_height: Bitmap height in pixels
        page_width: Page width in inches
        page_height: Page height in inches
        margin: Margin on every side in inches (0 for a borderless page)

    Returns:
        PlacementGeometry in inches, top-left origin

    Examples:
        >>> fit_to_page(1600, 900)
        PlacementGeometry(x=0.0, y=0.0, width=20.0, height=11.25)
        >>> fit_to_page(1067, 1600).x
        0.0
    """
    ratio = aspect_fit_ratio(
        page_width - margin * 2,
        page_height - margin * 2,
        bitmap_width,
        bitmap_height,
    )
    return PlacementGeometry(
        x=float(margin),
        y=float(margin),
        width=bitmap_width * ratio,
        height=bitmap_height * ratio,
    )


def fit_to_slide(
    bitmap_width: float,
    bitmap_height: float,
    slide_width: float = SLIDE_WIDTH_IN,
    slide_height: float = SLIDE_HEIGHT_IN,
    px_per_inch: float = PX_PER_INCH
) -> PlacementGeometry:
    """
    Place a bitmap on a 16:9 slide, centered on both axes.

    Bitmap pixels are first converted to inches at px_per_inch, then scaled
    uniformly to fit the slide.

    Args:
        bitmap_width: Bitmap width in pixels
        bitmap_height: Bitmap height in pixels
        slide_width: Slide width in inches
        slide_height: Slide height in inches
        px_per_inch: Pixel density used for the pixel to inch conversion

    Returns:
        PlacementGeometry in inches, top-left origin

    Examples:
        >>> fit_to_slide(1600, 900)
        PlacementGeometry(x=0.0, y=0.0, width=10.0, height=5.625)
        >>> fit_to_slide(900, 900).x
        2.1875
    """
    width_in = pixels_to_inches(bitmap_width, px_per_inch)
    height_in = pixels_to_inches(bitmap_height, px_per_inch)
    ratio = aspect_fit_ratio(slide_width, slide_height, width_in, height_in)

    w = width_in * ratio
    h = height_in * ratio
    return PlacementGeometry(
        x=(slide_width - w) / 2,
        y=(slide_height - h) / 2,
        width=w,
        height=h,
    )


def pixels_to_inches(pixels: float, px_per_inch: float = PX_PER_INCH) -> float:
    """
    Convert browser pixels to inches.

    Examples:
        >>> pixels_to_inches(96)
        1.0
    """
    return pixels / px_per_inch


def inches_to_points(inches: float) -> float:
    """
    Convert inches to PDF points (1 point = 1/72 inch).

    Examples:
        >>> inches_to_points(1)
        72.0
    """
    return inches * 72.0


def flip_y_coordinate(y: float, page_height: float) -> float:
    """
    Flip Y coordinate between top-left and bottom-left origin systems.

    Examples:
        >>> flip_y_coordinate(0, 792)
        792.0

    Notes:
        This function is its own inverse:
        flip_y_coordinate(flip_y_coordinate(y, h), h) == y
    """
    return float(page_height - y)


def geometry_to_pdf_points(
    geometry: PlacementGeometry,
    page_height: float = PDF_PAGE_HEIGHT_IN
) -> Tuple[float, float, float, float]:
    """
    Convert a top-left placement in inches to ReportLab drawing arguments.

    Coordinate Systems:
    - PlacementGeometry: inches, origin at top-left, (x, y) is the top-left corner
    - ReportLab: points, origin at bottom-left, (x, y) is the bottom-left corner

    Args:
        geometry: Placement in inches
        page_height: Page height in inches

    Returns:
        Tuple of (x, y, width, height) in points

    Examples:
        >>> geometry_to_pdf_points(PlacementGeometry(0, 0, 20, 10), 11.25)
        (0.0, 90.0, 1440.0, 720.0)
    """
    bottom_in = flip_y_coordinate(geometry.y + geometry.height, page_height)
    return (
        inches_to_points(geometry.x),
        inches_to_points(bottom_in),
        inches_to_points(geometry.width),
        inches_to_points(geometry.height),
    )
