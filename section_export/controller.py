"""Export Controller

Single-flight state machine around the export pipeline. At most one job runs
at a time; a trigger received while a job is running is dropped, never
queued. Every exit path of a running job returns the controller to idle.
"""
import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from .config import NO_CONTENT_NOTICE, EXPORT_FAILED_NOTICES
from .exceptions import EmptyContentError
from .export_result import ExportResult
from .models import ExportJob, ExportKind
from .pipeline import ExportPipeline

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExportState:
    """Controller state: idle (kind is None) or running an export of kind."""
    kind: Optional[ExportKind] = None

    @property
    def is_running(self) -> bool:
        return self.kind is not None


IDLE = ExportState()


def start_export(state: ExportState, kind: ExportKind) -> ExportState:
    """Idle --start(kind)--> Running(kind). A running state is returned unchanged."""
    if state.is_running:
        return state
    return ExportState(kind=kind)


def settle_export(state: ExportState) -> ExportState:
    """Running(kind) --settle--> Idle."""
    return IDLE


@dataclass
class ExportContext:
    """Mutable state shared between the trigger surface and the controller.

    Attributes:
        state: Current controller state
        notify: Callback showing a notice to the operator
        jobs: Every job started through this context, oldest first
    """
    state: ExportState = IDLE
    notify: Callable[[str], None] = lambda message: None
    jobs: List[ExportJob] = field(default_factory=list)

    @property
    def is_exporting(self) -> bool:
        return self.state.is_running

    @property
    def running_jobs(self) -> List[ExportJob]:
        return [job for job in self.jobs if job.finished_at is None]


class ExportController:
    """Trigger exports with single-flight semantics.

    Attributes:
        context: Shared ExportContext holding the state flag and notice sink
        pipeline_factory: Builds the pipeline for one run
    """

    def __init__(
        self,
        context: ExportContext,
        pipeline_factory: Callable[[], ExportPipeline],
    ):
        self.context = context
        self.pipeline_factory = pipeline_factory

    async def trigger(self, kind: ExportKind) -> Optional[ExportResult]:
        """
        Run an export unless one is already running.

        Args:
            kind: Output format to export

        Returns:
            ExportResult for the run, or None if the trigger was dropped

        Raises:
            Does not raise - failures are reported through notices and the result
        """
        # No await between the check and the transition
        if self.context.state.is_running:
            logger.warning(
                "Ignoring %s export request: %s export already running",
                kind.value, self.context.state.kind.value,
            )
            return None

        self.context.state = start_export(self.context.state, kind)
        job = ExportJob(kind=kind)
        self.context.jobs.append(job)
        logger.info("Starting %s export", kind.value)

        notice = None
        try:
            pipeline = self.pipeline_factory()
            output_path = await pipeline.run(kind, job)
            job.mark_succeeded(output_path)
        except EmptyContentError as e:
            logger.warning("%s export aborted: %s", kind.value, e)
            job.mark_failed(str(e))
            notice = NO_CONTENT_NOTICE
        except Exception as e:
            logger.exception("%s export failed", kind.value)
            job.mark_failed(f"{type(e).__name__}: {e}")
            notice = EXPORT_FAILED_NOTICES[kind.value]
        finally:
            self.context.state = settle_export(self.context.state)

        if notice:
            self.context.notify(notice)
        else:
            logger.info("%s export finished: %s", kind.value, job.output_path)

        return ExportResult.from_job(job, notice=notice)
