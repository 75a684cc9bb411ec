"""Per-run import context and report.

``ImportContext`` bundles the handles every importer needs (target store,
source store, SourceId index and resolver) so they are passed explicitly
instead of living in module globals.

``ImportReport`` aggregates per-stage outcomes the way the run report is
consumed by the CLI and by callers inspecting a failed run: committed stages
remain visible on ``MigrationError.report`` so a partially migrated target
can be reasoned about.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from OutlookMigrator.resolver import ReferenceResolver, SourceIdIndex
from OutlookMigrator.stores import SourceStore, TargetStore


@dataclass
class StageOutcome:
    level: int
    counts: dict[str, int]
    duration_ms: int
    committed: bool = False


@dataclass
class ImportReport:
    """Collects stage outcomes for one ``import_all`` run."""

    state: str = "not_started"
    started_at: datetime | None = None
    finished_at: datetime | None = None
    stages: list[StageOutcome] = field(default_factory=list)
    failure: str | None = None

    def mark_started(self) -> None:
        self.started_at = datetime.now(timezone.utc)

    def mark_finished(self, state: str, failure: str | None = None) -> None:
        self.state = state
        self.failure = failure
        self.finished_at = datetime.now(timezone.utc)

    def record_stage(self, outcome: StageOutcome) -> None:
        self.stages.append(outcome)

    @property
    def committed_levels(self) -> list[int]:
        return [s.level for s in self.stages if s.committed]

    def counts_by_type(self) -> dict[str, int]:
        out: dict[str, int] = {}
        for stage in self.stages:
            if stage.committed:
                out.update(stage.counts)
        return out

    @property
    def total_records(self) -> int:
        return sum(self.counts_by_type().values())

    @property
    def duration_ms(self) -> int:
        if self.started_at is None or self.finished_at is None:
            return 0
        return int((self.finished_at - self.started_at).total_seconds() * 1000)

    def to_dict(self) -> dict[str, Any]:
        return {
            "state": self.state,
            "failure": self.failure,
            "started_at": self.started_at.isoformat() if self.started_at else None,
            "finished_at": self.finished_at.isoformat() if self.finished_at else None,
            "duration_ms": self.duration_ms,
            "committed_levels": self.committed_levels,
            "total_records": self.total_records,
            "stages": [
                {
                    "level": s.level,
                    "counts": dict(sorted(s.counts.items())),
                    "duration_ms": s.duration_ms,
                    "committed": s.committed,
                }
                for s in self.stages
            ],
        }


@dataclass
class ImportContext:
    store: TargetStore
    source: SourceStore
    index: SourceIdIndex
    resolver: ReferenceResolver
    report: ImportReport = field(default_factory=ImportReport)

    @classmethod
    def create(cls, store: TargetStore, source: SourceStore) -> ImportContext:
        index = SourceIdIndex()
        return cls(store=store, source=source, index=index, resolver=ReferenceResolver(index))

    def ref(self, entity_type: str, source_id: int | None) -> Any | None:
        return self.resolver.resolve(entity_type, source_id)
