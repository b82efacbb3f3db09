"""Presentation Exporter - Main Application

Gradio application that exports the sections of a rendered web presentation
as a borderless PDF or a 16:9 PPTX deck.
"""
import logging
import os

import gradio as gr
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

from section_export import ExportContext, ExportController, ExportKind, ExportOptions, ExportPipeline
from section_export.config import DEFAULT_CONTENT_URL, ENV_CONTENT_URL
from section_export.exceptions import ValidationError
from section_export.export_result import REPORT_COLUMNS

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

BUTTON_LABELS = {
    ExportKind.PDF: "Export PDF",
    ExportKind.DECK: "Export PPT",
}
EXPORTING_LABEL = "Exporting…"


def show_notice(message: str) -> None:
    """Show a notice that stays until the operator dismisses it."""
    gr.Warning(message, duration=None)


# One export at a time for the whole process, shared by every browser session
export_context = ExportContext(notify=show_notice)


async def export_document(kind: ExportKind, content_url: str, progress=gr.Progress()) -> tuple:
    """
    Run one export through the single-flight controller.

    Args:
        kind: ExportKind.PDF or ExportKind.DECK
        content_url: URL or local path of the presentation
        progress: Gradio progress tracker

    Returns:
        Tuple of (output_file, status, report_table)
    """
    try:
        options = ExportOptions.from_env(content_url=content_url or None)
    except ValidationError as e:
        raise gr.Error(str(e))

    controller = ExportController(
        export_context,
        lambda: ExportPipeline(options, progress_callback=lambda p, d: progress(p, desc=d)),
    )

    result = await controller.trigger(kind)
    if result is None:
        return (
            gr.update(),
            "⏳ An export is already running. Please wait for it to finish.",
            gr.update(),
        )

    return result.to_gradio_outputs()


async def export_pdf(content_url: str, progress=gr.Progress()) -> tuple:
    return await export_document(ExportKind.PDF, content_url, progress)


async def export_ppt(content_url: str, progress=gr.Progress()) -> tuple:
    return await export_document(ExportKind.DECK, content_url, progress)


def lock_buttons(kind: ExportKind) -> tuple:
    """Disable both triggers and relabel the active one."""
    return tuple(
        gr.update(interactive=False, value=EXPORTING_LABEL if k == kind else BUTTON_LABELS[k])
        for k in (ExportKind.PDF, ExportKind.DECK)
    )


def unlock_buttons() -> tuple:
    """Re-enable both triggers of the calling session.

    A click that arrives while another session's export runs is dropped by
    the controller, so the buttons can be re-enabled unconditionally.
    """
    return tuple(
        gr.update(interactive=True, value=BUTTON_LABELS[k])
        for k in (ExportKind.PDF, ExportKind.DECK)
    )


# Create Gradio interface
with gr.Blocks(title="Presentation Exporter") as app:
    gr.Markdown("# 🖼️ Presentation Exporter")

    gr.Markdown("""
    Captures every section of the page and saves it as one PDF page or one slide.
    """)

    with gr.Row():
        with gr.Column():
            gr.Markdown("## Source")

            content_url = gr.Textbox(
                label="Presentation URL or HTML file",
                value=os.getenv(ENV_CONTENT_URL, DEFAULT_CONTENT_URL),
                info="Sections are the elements matching '.page section', in document order"
            )

            with gr.Row():
                pdf_btn = gr.Button(
                    BUTTON_LABELS[ExportKind.PDF],
                    variant="primary",
                    size="lg"
                )
                ppt_btn = gr.Button(
                    BUTTON_LABELS[ExportKind.DECK],
                    variant="secondary",
                    size="lg"
                )

        with gr.Column():
            gr.Markdown("## Result")

            main_status = gr.Textbox(
                label="Status",
                interactive=False,
                visible=True
            )

            output_file = gr.File(
                label="📥 Download",
                type="filepath"
            )

            report_table = gr.DataFrame(
                headers=REPORT_COLUMNS,
                interactive=False,
                wrap=True,
                label="Export Report",
                visible=False
            )

    # Lock immediately (outside the queue), export, then always unlock
    pdf_btn.click(
        fn=lambda: lock_buttons(ExportKind.PDF),
        outputs=[pdf_btn, ppt_btn],
        queue=False
    ).then(
        fn=export_pdf,
        inputs=[content_url],
        outputs=[output_file, main_status, report_table]
    ).then(
        fn=unlock_buttons,
        outputs=[pdf_btn, ppt_btn]
    )

    ppt_btn.click(
        fn=lambda: lock_buttons(ExportKind.DECK),
        outputs=[pdf_btn, ppt_btn],
        queue=False
    ).then(
        fn=export_ppt,
        inputs=[content_url],
        outputs=[output_file, main_status, report_table]
    ).then(
        fn=unlock_buttons,
        outputs=[pdf_btn, ppt_btn]
    )


if __name__ == "__main__":
    app.launch()
