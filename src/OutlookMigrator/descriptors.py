"""Clone descriptors derived from target schema metadata."""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import Any

from sqlalchemy import inspect as sa_inspect

# Correlation key for a single import run; a copy must never inherit it
_MIGRATION_KEYS = frozenset({"source_id"})


@dataclass(frozen=True)
class FieldDescriptor:
    """One persisted column that a clone copies from its source instance."""

    attr: str
    is_reference: bool

    def copy(self, source: Any, target: Any) -> None:
        setattr(target, self.attr, getattr(source, self.attr))


@lru_cache(maxsize=None)
def clonable_fields(model: type) -> tuple[FieldDescriptor, ...]:
    """Return the clonable columns of ``model`` in table order.

    Excluded: primary keys, migration keys, server-computed columns and any
    column flagged ``info={"clone": False}``. Foreign-key columns are kept so
    a clone shares the source's plain associations; owners re-point the
    parent key after copying.
    """
    mapper = sa_inspect(model)
    out: list[FieldDescriptor] = []
    for prop in mapper.column_attrs:
        if len(prop.columns) != 1:
            continue
        col = prop.columns[0]
        if col.primary_key or prop.key in _MIGRATION_KEYS:
            continue
        if col.computed is not None or col.info.get("clone", True) is False:
            continue
        out.append(
            FieldDescriptor(
                attr=prop.key,
                is_reference=bool(col.foreign_keys),
            )
        )
    return tuple(out)
