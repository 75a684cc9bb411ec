"""Narrow adapters over the legacy (source) and target databases."""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator, Sequence
from typing import Any, TypeVar

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.orm import selectinload

from OutlookMigrator.descriptors import FieldDescriptor, clonable_fields

log = structlog.get_logger()

T = TypeVar("T")


class SourceStore:
    """Read-only access to the legacy tables.

    Each call opens its own short-lived session. Queries are serialized by a
    read lock because in-memory and StaticPool SQLite engines hand every
    session the same connection.
    """

    def __init__(self, sessionmaker: async_sessionmaker[AsyncSession]):
        self._sessionmaker = sessionmaker
        self._read_lock = asyncio.Lock()

    async def with_includes(self, model: type[T], *fields: str) -> AsyncIterator[T]:
        """Yield every ``model`` row with the named relationships eager-loaded."""
        stmt = select(model).options(*(selectinload(getattr(model, f)) for f in fields))
        async with self._read_lock:
            async with self._sessionmaker() as s:
                rows = (await s.execute(stmt)).scalars().all()
        for row in rows:
            yield row

    def enumerate_all(self, model: type[T]) -> AsyncIterator[T]:
        return self.with_includes(model)


class TargetStore:
    """Transactional handle shared by every task of a stage.

    ``create`` only stages an instance in the session; nothing is written
    until ``commit``. All session calls go through one lock since an
    AsyncSession does not allow concurrent operations.
    """

    def __init__(self, session: AsyncSession):
        self.session = session
        self._lock = asyncio.Lock()

    async def create(self, model: type[T], **values: Any) -> T:
        return await self.add(model(**values))

    async def add(self, entity: T) -> T:
        async with self._lock:
            self.session.add(entity)
        return entity

    async def find(self, model: type[T], *criteria: Any) -> T | None:
        async with self._lock:
            q = await self.session.execute(select(model).where(*criteria).limit(1))
            return q.scalar_one_or_none()

    async def get_all(self, model: type[T], *includes: str) -> Sequence[T]:
        stmt = select(model).order_by(model.id)  # type: ignore[attr-defined]
        if includes:
            stmt = stmt.options(*(selectinload(getattr(model, f)) for f in includes))
        async with self._lock:
            q = await self.session.execute(stmt)
            return q.scalars().all()

    @property
    def pending_count(self) -> int:
        s = self.session
        return len(s.new) + len(s.dirty) + len(s.deleted)

    async def commit(self) -> bool:
        """Persist everything staged since the last commit.

        Returns False without touching the database when nothing is pending.
        Flushed rows are pending too: an open transaction is always committed.
        """
        async with self._lock:
            pending = self.pending_count
            if pending == 0 and not self.session.in_transaction():
                return False
            await self.session.commit()
        log.debug("target.commit", pending=pending)
        return True

    async def rollback(self) -> None:
        async with self._lock:
            await self.session.rollback()

    def clonable_fields(self, model: type) -> tuple[FieldDescriptor, ...]:
        return clonable_fields(model)
