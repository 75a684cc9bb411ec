"""Error taxonomy for the import/clone pipeline.

Every error here is fatal for the run that raised it; nothing is retried.
"""

from __future__ import annotations

from typing import Any


class MigrationError(Exception):
    """Base class for pipeline failures."""

    # Populated by the pipeline entry point with the partial ImportReport
    report: Any = None


class SchedulingError(MigrationError):
    """Raised when the import task graph is misconfigured (cycle, unknown type)."""


class ReferenceResolutionError(MigrationError):
    """A non-null source reference has no committed target entity."""

    def __init__(self, entity_type: str, source_id: int | None = None):
        self.entity_type = entity_type
        self.source_id = source_id
        super().__init__(f"No committed {entity_type} with source_id={source_id}")


class TransformError(MigrationError):
    """A source field cannot be coerced to its target representation."""

    def __init__(self, entity_type: str, field: str, value: Any, reason: str | None = None):
        self.entity_type = entity_type
        self.field = field
        self.value = value
        detail = reason or "no matching target value"
        super().__init__(f"{entity_type}.{field}={value!r}: {detail}")


class DuplicateSourceIdError(TransformError):
    """Two target entities of one type claim the same source_id."""

    def __init__(self, entity_type: str, source_id: int):
        super().__init__(entity_type, "source_id", source_id, "duplicate source_id")
        self.source_id = source_id


class CommitError(MigrationError):
    """The target store rejected a commit."""

    def __init__(self, stage: str, diagnostic: str):
        self.stage = stage
        self.diagnostic = diagnostic
        super().__init__(f"Commit failed for stage {stage}: {diagnostic}")


class PipelineStateError(MigrationError):
    """A coordinator was driven from a terminal state."""
