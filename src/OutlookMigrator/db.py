# src/OutlookMigrator/db.py
from __future__ import annotations

import contextlib
import os
from collections.abc import AsyncIterator

import structlog
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

log = structlog.get_logger()


def normalize_url(url: str) -> str:
    # Upgrade to async drivers if user supplies sync URLs
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+asyncpg://", 1)
    if url.startswith("sqlite://") and not url.startswith("sqlite+aiosqlite://"):
        return url.replace("sqlite://", "sqlite+aiosqlite://", 1)
    return url


class Base(DeclarativeBase):
    """Declarative base for the target store schema."""


def create_engine_for(url: str, *, role: str = "target") -> AsyncEngine:
    """Create an async engine with per-backend pool defaults.

    ``role`` only tags the connection log line ("source" or "target").
    """
    url = normalize_url(url)
    kwargs: dict[str, object] = {}
    if url.startswith("sqlite+aiosqlite://"):
        connect_args: dict[str, object] = {"timeout": 30}
        if "file::memory:?cache=shared" in url:
            connect_args["uri"] = True
        kwargs.update(connect_args=connect_args)
        # In-memory DBs must share a single connection so the schema persists
        if ":memory:" in url or "file::memory:?cache=shared" in url:
            kwargs.update(poolclass=StaticPool)
        if os.environ.get("MIGRATOR_SQLITE_STATIC_POOL") == "1":
            kwargs.update(poolclass=StaticPool)
    elif url.startswith("postgresql+asyncpg://"):
        kwargs.update(
            pool_pre_ping=True,
            pool_size=5,
            max_overflow=10,
            pool_timeout=30,
        )

    engine = create_async_engine(url, **kwargs)
    parsed = make_url(url)
    backend = "postgres" if url.startswith("postgresql") else (
        "sqlite" if url.startswith("sqlite") else "other"
    )
    log.info(
        "db.connection.config",
        role=role,
        backend=backend,
        host=parsed.host or "",
        database=parsed.database or "",
        driver=parsed.drivername,
    )
    return engine


def make_sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # Entities stay readable after each stage commit; later stages hold
    # references to them through the SourceId index.
    return async_sessionmaker(engine, expire_on_commit=False, autoflush=False)


async def create_target_schema(engine: AsyncEngine) -> None:
    from OutlookMigrator import models as _models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def create_legacy_schema(engine: AsyncEngine) -> None:
    from OutlookMigrator.legacy import LegacyBase

    async with engine.begin() as conn:
        await conn.run_sync(LegacyBase.metadata.create_all)



@contextlib.asynccontextmanager
async def session_scope(
    sessionmaker: async_sessionmaker[AsyncSession],
) -> AsyncIterator[AsyncSession]:
    async with sessionmaker() as s:
        try:
            yield s
            await s.commit()
        except Exception:
            log.error("db.session.error", exc_info=True)
            await s.rollback()
            raise
