"""Stage-by-stage execution with one commit barrier per stage."""

from __future__ import annotations

import asyncio
import enum
import time
from collections.abc import Awaitable, Callable, Iterable, Sequence

import structlog
from sqlalchemy.exc import SQLAlchemyError

from OutlookMigrator.context import ImportContext, StageOutcome
from OutlookMigrator.errors import CommitError, PipelineStateError
from OutlookMigrator.metrics import inc_counter, observe_histogram
from OutlookMigrator.scheduler import Stage
from OutlookMigrator.tasks import ImportTask, run_import_task

log = structlog.get_logger()

Runner = Callable[[ImportTask, ImportContext], Awaitable[int]]


class PipelineState(str, enum.Enum):
    NOT_STARTED = "not_started"
    STAGE_RUNNING = "stage_running"
    STAGE_COMMITTING = "stage_committing"
    COMPLETED = "completed"
    FAILED = "failed"


class StageCoordinator:
    """Runs stages in order; tasks within a stage run concurrently.

    A coordinator is single-use: once it reaches COMPLETED or FAILED, ``run``
    raises ``PipelineStateError``.
    """

    def __init__(self, ctx: ImportContext, *, runner: Runner = run_import_task):
        self.ctx = ctx
        self.state = PipelineState.NOT_STARTED
        self.current_level: int | None = None
        self._runner = runner

    async def run(self, stages: Sequence[Stage]) -> None:
        if self.state is not PipelineState.NOT_STARTED:
            raise PipelineStateError(f"Coordinator already {self.state.value}")
        report = self.ctx.report
        report.mark_started()
        try:
            for stage in stages:
                await self._run_stage(stage)
            # Nothing is pending after the last barrier; this only persists stragglers
            await self._commit("final")
        except BaseException as exc:
            try:
                await self.ctx.store.rollback()
            except Exception as rb_exc:
                log.error(
                    "migration.rollback.failed",
                    error=type(rb_exc).__name__,
                    detail=str(rb_exc),
                )
            finally:
                self._fail(exc)
            raise
        self.state = PipelineState.COMPLETED
        report.mark_finished(self.state.value)
        log.info(
            "migration.completed",
            stages=len(report.committed_levels),
            records=report.total_records,
            duration_ms=report.duration_ms,
        )

    async def _run_stage(self, stage: Stage) -> None:
        self.state = PipelineState.STAGE_RUNNING
        self.current_level = stage.level
        start = time.perf_counter()
        log.info("migration.stage.start", level=stage.level, types=stage.names)

        counts = await self._run_tasks(stage)

        self.state = PipelineState.STAGE_COMMITTING
        await self._commit(stage.label)
        sealed = self.ctx.index.seal()

        dur_ms = int((time.perf_counter() - start) * 1000)
        self.ctx.report.record_stage(
            StageOutcome(level=stage.level, counts=counts, duration_ms=dur_ms, committed=True)
        )
        inc_counter("migration.stage.committed")
        observe_histogram("migration.stage.ms", dur_ms)
        log.info(
            "migration.stage.committed",
            level=stage.level,
            records=sealed,
            duration_ms=dur_ms,
        )

    async def _run_tasks(self, stage: Stage) -> dict[str, int]:
        running = {
            asyncio.create_task(self._runner(task, self.ctx), name=task.name): task.name
            for task in stage.tasks
        }
        try:
            done, pending = await asyncio.wait(running, return_when=asyncio.FIRST_EXCEPTION)
        except asyncio.CancelledError:
            await _cancel_all(running)
            raise
        failed = [t for t in done if not t.cancelled() and t.exception() is not None]
        if failed:
            await _cancel_all(pending)
            # Re-raise the first failure in task order so the error is deterministic
            first = min(failed, key=lambda t: stage.names.index(running[t]))
            raise first.exception()  # type: ignore[misc]
        return {running[t]: t.result() for t in done}

    async def _commit(self, label: str) -> bool:
        try:
            return await self.ctx.store.commit()
        except SQLAlchemyError as exc:
            diagnostic = str(getattr(exc, "orig", None) or exc)
            raise CommitError(label, diagnostic) from exc

    def _fail(self, exc: BaseException) -> None:
        self.state = PipelineState.FAILED
        dropped = self.ctx.index.discard_pending()
        report = self.ctx.report
        report.mark_finished(self.state.value, failure=f"{type(exc).__name__}: {exc}")
        inc_counter("migration.stage.failed")
        log.error(
            "migration.stage.failed",
            level=self.current_level,
            error=type(exc).__name__,
            detail=str(exc),
            discarded=dropped,
        )
        log.warning(
            "migration.partial_state",
            committed_levels=report.committed_levels,
            counts=report.counts_by_type(),
        )


async def _cancel_all(tasks: Iterable[asyncio.Task]) -> None:
    tasks = list(tasks)
    for t in tasks:
        t.cancel()
    await asyncio.gather(*tasks, return_exceptions=True)
