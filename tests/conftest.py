# tests/conftest.py

import gc
import os
from collections.abc import AsyncIterator

import pytest
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

# Keep console logging out of captured CLI stdout
os.environ.setdefault("MIGRATOR_LOGGING_CONSOLE", "NONE")

from OutlookMigrator.db import (  # noqa: E402
    create_engine_for,
    create_legacy_schema,
    create_target_schema,
    make_sessionmaker,
)
from OutlookMigrator.metrics import reset_counters  # noqa: E402
from OutlookMigrator.stores import SourceStore, TargetStore  # noqa: E402

MEMORY_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture(autouse=True)
def _reset_metrics() -> None:
    reset_counters()


@pytest.fixture
async def legacy_engine() -> AsyncIterator[AsyncEngine]:
    engine = create_engine_for(MEMORY_URL, role="source")
    await create_legacy_schema(engine)
    try:
        yield engine
    finally:
        await engine.dispose()
    gc.collect()


@pytest.fixture
async def target_engine() -> AsyncIterator[AsyncEngine]:
    engine = create_engine_for(MEMORY_URL)
    await create_target_schema(engine)
    try:
        yield engine
    finally:
        await engine.dispose()
    gc.collect()


@pytest.fixture
async def legacy_db(legacy_engine: AsyncEngine) -> AsyncIterator[AsyncSession]:
    """Session for seeding legacy rows; commit before importing."""
    async with make_sessionmaker(legacy_engine)() as s:
        try:
            yield s
        finally:
            await s.rollback()
            await s.close()


@pytest.fixture
def source_store(legacy_engine: AsyncEngine) -> SourceStore:
    return SourceStore(make_sessionmaker(legacy_engine))


@pytest.fixture
async def target_db(target_engine: AsyncEngine) -> AsyncIterator[AsyncSession]:
    async with make_sessionmaker(target_engine)() as s:
        try:
            yield s
        finally:
            await s.rollback()
            await s.close()


@pytest.fixture
def target_store(target_db: AsyncSession) -> TargetStore:
    return TargetStore(target_db)

