"""SourceId index and reference resolution.

The index keeps two layers per entity type. Entities created during the
running stage sit in the pending layer; the coordinator seals them into the
committed layer once the stage commit succeeds, or discards them when the
stage fails. Resolution only ever consults the committed layer, so a target
entity can only reference rows that are already durable.
"""

from __future__ import annotations

import asyncio
from collections import defaultdict
from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import Any

import structlog

from OutlookMigrator.errors import DuplicateSourceIdError, ReferenceResolutionError
from OutlookMigrator.metrics import record_resolve_miss

log = structlog.get_logger()


class SourceIdIndex:
    def __init__(self) -> None:
        self._committed: dict[str, dict[int, Any]] = defaultdict(dict)
        self._pending: dict[str, dict[int, Any]] = defaultdict(dict)
        self._lock = asyncio.Lock()

    async def register(self, entity_type: str, entity: Any) -> None:
        source_id = entity.source_id
        async with self._lock:
            if source_id in self._committed[entity_type] or source_id in self._pending[entity_type]:
                raise DuplicateSourceIdError(entity_type, source_id)
            self._pending[entity_type][source_id] = entity

    def seal(self) -> int:
        """Promote pending entries to committed; returns how many moved."""
        moved = 0
        for entity_type, entries in self._pending.items():
            self._committed[entity_type].update(entries)
            moved += len(entries)
        self._pending.clear()
        return moved

    def discard_pending(self) -> int:
        dropped = sum(len(v) for v in self._pending.values())
        self._pending.clear()
        return dropped

    def committed(self, entity_type: str) -> Mapping[int, Any]:
        return MappingProxyType(self._committed.get(entity_type, {}))

    def pending_count(self, entity_type: str | None = None) -> int:
        if entity_type is not None:
            return len(self._pending.get(entity_type, {}))
        return sum(len(v) for v in self._pending.values())

    def committed_count(self, entity_type: str) -> int:
        return len(self._committed.get(entity_type, {}))


class ReferenceResolver:
    """Maps (entity type, source id) to an already committed target entity."""

    def __init__(self, index: SourceIdIndex):
        self._index = index

    def resolve(self, entity_type: str, source_id: int | None) -> Any | None:
        if source_id is None:
            return None
        entity = self._index.committed(entity_type).get(source_id)
        if entity is None:
            record_resolve_miss(entity_type)
            log.warning("migration.resolve.miss", entity_type=entity_type, source_id=source_id)
            raise ReferenceResolutionError(entity_type, source_id)
        return entity

    def resolve_many(self, entity_type: str, source_ids: Iterable[int]) -> list[Any]:
        return [self.resolve(entity_type, sid) for sid in source_ids]
