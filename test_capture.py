"""Tests for section capture scale, size and background flattening."""
import pytest
from PIL import Image

from section_export.content.capture import (
    SectionCapture,
    compute_capture_scale,
    compute_capture_size,
    flatten_on_background,
)
from section_export.exceptions import CaptureFailure
from section_export.models import ContentSection


@pytest.mark.parametrize("width, height, expected_scale", [
    (1600, 900, 1.0),
    (800, 1200, 1600 / 1200),
    (3200, 900, 0.5),
    (400, 300, 2.0),      # small sections are capped at 2x
    (800, 800, 2.0),
    (1000, 1000, 1.6),
])
def test_capture_scale(width, height, expected_scale):
    assert compute_capture_scale(width, height) == pytest.approx(expected_scale)


def test_capture_size_follows_scale():
    assert compute_capture_size(1600, 900, 1.0) == (1600, 900)
    assert compute_capture_size(800, 1200, 1600 / 1200) == (1067, 1600)
    assert compute_capture_size(3200, 900, 0.5) == (1600, 450)


def test_capture_size_never_zero():
    assert compute_capture_size(1, 1, 0.1) == (1, 1)


def test_unmeasurable_section_falls_back_to_1600x900():
    section = ContentSection.from_measurement(0, 0, None)

    assert (section.width, section.height) == (1600, 900)


def test_flatten_fills_transparency_with_white():
    image = Image.new("RGBA", (4, 4), (255, 0, 0, 0))

    flattened = flatten_on_background(image)

    assert flattened.mode == "RGB"
    assert flattened.getpixel((0, 0)) == (255, 255, 255)


def test_flatten_keeps_opaque_pixels():
    image = Image.new("RGBA", (4, 4), (10, 20, 30, 255))

    assert flatten_on_background(image).getpixel((2, 2)) == (10, 20, 30)


@pytest.mark.asyncio
async def test_capture_produces_exact_bitmap(make_source):
    source = make_source([(800, 1200)])

    capture = await SectionCapture().capture(source, source.sections[0])

    assert capture.scale == pytest.approx(1600 / 1200)
    assert (capture.width, capture.height) == (1067, 1600)
    assert capture.image.mode == "RGB"
    assert capture.section is source.sections[0]


@pytest.mark.asyncio
async def test_capture_has_opaque_white_background(make_source):
    source = make_source([(100, 50)], transparent=True)

    capture = await SectionCapture().capture(source, source.sections[0])

    assert capture.image.getpixel((0, 0)) == (255, 255, 255)


@pytest.mark.asyncio
async def test_capture_resamples_off_by_rounding_raster(make_source):
    source = make_source([(1600, 900)], size_error=1)

    capture = await SectionCapture().capture(source, source.sections[0])

    assert (capture.width, capture.height) == (1600, 900)


@pytest.mark.asyncio
async def test_rasterizer_error_becomes_capture_failure(make_source):
    source = make_source([(1600, 900), (1600, 900)], fail_at=1)

    with pytest.raises(CaptureFailure) as exc_info:
        await SectionCapture().capture(source, source.sections[1])

    assert exc_info.value.section_index == 1
    assert "tainted canvas" in str(exc_info.value)
