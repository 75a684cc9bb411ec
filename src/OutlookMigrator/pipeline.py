"""Entry points for a full legacy import."""

from __future__ import annotations

from collections.abc import Sequence

import structlog
from sqlalchemy.exc import SQLAlchemyError

from OutlookMigrator.context import ImportContext, ImportReport
from OutlookMigrator.coordinator import Runner, StageCoordinator
from OutlookMigrator.errors import MigrationError
from OutlookMigrator.scheduler import compute_stages
from OutlookMigrator.stores import SourceStore, TargetStore
from OutlookMigrator.tasks import IMPORT_TASKS, ImportTask, run_import_task

log = structlog.get_logger()


async def import_all(
    target_store: TargetStore,
    source_store: SourceStore,
    *,
    tasks: Sequence[ImportTask] = IMPORT_TASKS,
    runner: Runner = run_import_task,
) -> ImportReport:
    """Import every legacy entity type into ``target_store``.

    Stages are computed before any store is touched, so a misconfigured task
    graph raises ``SchedulingError`` with the target untouched. When a stage
    fails, earlier stages stay committed and the partial report is attached to
    the raised error as ``error.report``. Database errors raised while reading
    the source carry it too.
    """
    stages = compute_stages(tasks)
    ctx = ImportContext.create(target_store, source_store)
    log.info(
        "migration.start",
        stages=len(stages),
        types=sum(len(s.tasks) for s in stages),
    )
    coordinator = StageCoordinator(ctx, runner=runner)
    try:
        await coordinator.run(stages)
    except (MigrationError, SQLAlchemyError) as exc:
        exc.report = ctx.report  # type: ignore[union-attr]
        raise
    return ctx.report
