"""Tests for the PDF and PPTX document assemblers."""
import os

import pytest
from PIL import Image
from pptx import Presentation
from pptx.util import Inches
from pypdf import PdfReader

from section_export.document_builder import (
    DeckDocumentAssembler,
    PagedDocumentAssembler,
    create_assembler,
)
from section_export.exceptions import AssemblyFailure
from section_export.models import CaptureResult, ContentSection, ExportKind


def make_capture(index: int, width: int, height: int) -> CaptureResult:
    section = ContentSection(index=index, width=width, height=height)
    return CaptureResult(section=section, image=Image.new("RGB", (width, height), (0, 90, 160)), scale=1.0)


def test_create_assembler_per_kind():
    assert isinstance(create_assembler(ExportKind.PDF), PagedDocumentAssembler)
    assert isinstance(create_assembler(ExportKind.DECK), DeckDocumentAssembler)


@pytest.mark.asyncio
async def test_pdf_has_one_landscape_page_per_capture(tmp_path):
    assembler = PagedDocumentAssembler()
    for index, (w, h) in enumerate([(1600, 900), (1067, 1600), (1600, 450)]):
        assembler.append(make_capture(index, w, h))

    path = await assembler.finalize(str(tmp_path))

    assert os.path.basename(path) == "presentation.pdf"
    reader = PdfReader(path)
    assert len(reader.pages) == 3
    for page in reader.pages:
        assert float(page.mediabox.width) == pytest.approx(20 * 72)
        assert float(page.mediabox.height) == pytest.approx(11.25 * 72)


@pytest.mark.asyncio
async def test_pdf_placements_are_flush_at_origin(tmp_path):
    assembler = PagedDocumentAssembler()
    first = assembler.append(make_capture(0, 1600, 900))
    second = assembler.append(make_capture(1, 1067, 1600))

    assert (first.x, first.y) == (0, 0)
    assert (second.x, second.y) == (0, 0)
    assert second.height == pytest.approx(11.25)
    assert assembler.page_count == 2


@pytest.mark.asyncio
async def test_deck_has_one_centered_slide_per_capture(tmp_path):
    assembler = DeckDocumentAssembler()
    assembler.append(make_capture(0, 1600, 900))
    assembler.append(make_capture(1, 900, 900))

    path = await assembler.finalize(str(tmp_path))

    assert os.path.basename(path) == "presentation.pptx"
    deck = Presentation(path)
    assert deck.slide_width == Inches(10)
    assert deck.slide_height == Inches(5.625)
    assert len(deck.slides) == 2

    square = list(deck.slides)[1].shapes[0]
    assert square.width == Inches(5.625)
    assert square.height == Inches(5.625)
    assert square.left == Inches(2.1875)
    assert square.top == 0


@pytest.mark.asyncio
async def test_finalize_twice_is_rejected(tmp_path):
    assembler = PagedDocumentAssembler()
    assembler.append(make_capture(0, 1600, 900))
    await assembler.finalize(str(tmp_path))

    with pytest.raises(AssemblyFailure):
        await assembler.finalize(str(tmp_path))


@pytest.mark.asyncio
async def test_append_after_finalize_is_rejected(tmp_path):
    assembler = DeckDocumentAssembler()
    assembler.append(make_capture(0, 1600, 900))
    await assembler.finalize(str(tmp_path))

    with pytest.raises(AssemblyFailure):
        assembler.append(make_capture(1, 1600, 900))


@pytest.mark.asyncio
async def test_empty_document_is_never_written(tmp_path):
    assembler = PagedDocumentAssembler()

    with pytest.raises(AssemblyFailure):
        await assembler.finalize(str(tmp_path))

    assert os.listdir(tmp_path) == []


@pytest.mark.asyncio
async def test_failed_save_leaves_no_file(tmp_path, monkeypatch):
    assembler = DeckDocumentAssembler()
    assembler.append(make_capture(0, 1600, 900))

    def broken_save():
        raise OSError("disk full")

    monkeypatch.setattr(assembler, "_save_to_bytes", broken_save)

    with pytest.raises(AssemblyFailure):
        await assembler.finalize(str(tmp_path))

    assert os.listdir(tmp_path) == []
