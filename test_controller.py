"""Tests for the single-flight export controller."""
import asyncio
import os

import pytest

from conftest import FakeImage
from section_export import (
    IDLE,
    ExportContext,
    ExportController,
    ExportKind,
    ExportPipeline,
    ExportState,
    settle_export,
    start_export,
)
from section_export.models import JobStatus


@pytest.fixture
def notices():
    return []


@pytest.fixture
def context(notices):
    return ExportContext(notify=notices.append)


def controller_for(context, options, source) -> ExportController:
    return ExportController(
        context,
        lambda: ExportPipeline(options, source_factory=lambda opts: source),
    )


def test_start_moves_idle_to_running():
    assert start_export(IDLE, ExportKind.PDF) == ExportState(kind=ExportKind.PDF)


def test_start_while_running_keeps_state():
    running = ExportState(kind=ExportKind.DECK)

    assert start_export(running, ExportKind.PDF) is running


def test_settle_returns_to_idle():
    assert settle_export(ExportState(kind=ExportKind.PDF)) == IDLE
    assert not IDLE.is_running


@pytest.mark.asyncio
async def test_successful_export_returns_to_idle(context, notices, export_options, make_source):
    source = make_source([(1600, 900), (800, 1200)])

    result = await controller_for(context, export_options, source).trigger(ExportKind.PDF)

    assert result.is_complete
    assert result.section_count == 2
    assert os.path.exists(result.output_path)
    assert "2 pages" in result.status_message
    assert context.state == IDLE
    assert notices == []
    assert context.jobs[0].status == JobStatus.SUCCEEDED


@pytest.mark.asyncio
async def test_trigger_while_running_is_dropped(context, export_options, make_source):
    stalled = FakeImage("https://cdn.example.test/slow.jpg", settled=False)
    source = make_source([(1600, 900)], images=[stalled])
    controller = controller_for(context, export_options, source)

    first = asyncio.ensure_future(controller.trigger(ExportKind.PDF))
    await asyncio.sleep(0)
    assert context.state == ExportState(kind=ExportKind.PDF)

    second = await controller.trigger(ExportKind.DECK)

    assert second is None
    assert len(context.jobs) == 1
    assert context.state == ExportState(kind=ExportKind.PDF)
    assert len(context.running_jobs) == 1

    stalled.fire()
    result = await asyncio.wait_for(first, timeout=5)

    assert result.is_complete
    assert context.state == IDLE
    assert context.running_jobs == []


@pytest.mark.asyncio
async def test_empty_content_shows_notice(context, notices, export_options, make_source):
    source = make_source([])

    result = await controller_for(context, export_options, source).trigger(ExportKind.PDF)

    assert result.is_failed
    assert notices == ["No content found to export."]
    assert context.state == IDLE
    assert not os.path.exists(export_options.output_dir)


@pytest.mark.asyncio
async def test_capture_failure_shows_generic_notice(context, notices, export_options, make_source):
    source = make_source([(1600, 900)] * 5, fail_at=3)

    result = await controller_for(context, export_options, source).trigger(ExportKind.DECK)

    assert result.is_failed
    assert result.output_path is None
    assert notices == ["Unable to export PPT. Please check logs for details."]
    assert "section 3" in result.error
    assert context.state == IDLE
    assert context.jobs[0].status == JobStatus.FAILED
    assert not os.path.exists(export_options.output_dir)


@pytest.mark.asyncio
async def test_pipeline_construction_error_is_contained(context, notices):
    def broken_factory():
        raise RuntimeError("no browser")

    result = await ExportController(context, broken_factory).trigger(ExportKind.PDF)

    assert result.is_failed
    assert notices == ["Unable to export PDF. Please check logs for details."]
    assert context.state == IDLE


@pytest.mark.asyncio
async def test_controller_recovers_after_failure(context, notices, export_options, make_source):
    await controller_for(context, export_options, make_source([])).trigger(ExportKind.PDF)

    result = await controller_for(
        context, export_options, make_source([(1600, 900)])
    ).trigger(ExportKind.PDF)

    assert result.is_complete
    assert len(context.jobs) == 2
    assert notices == ["No content found to export."]


@pytest.mark.asyncio
async def test_report_table_lists_every_section(context, export_options, make_source):
    source = make_source([(1600, 900), (800, 1200), (3200, 900)])

    result = await controller_for(context, export_options, source).trigger(ExportKind.DECK)
    table = result.to_dataframe()

    assert list(table["Section"]) == [1, 2, 3]
    assert list(table["Bitmap (px)"]) == ["1600x900", "1067x1600", "1600x450"]
