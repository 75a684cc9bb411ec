import pytest
from sqlalchemy import select

import factories
from OutlookMigrator import legacy, models
from OutlookMigrator.db import make_sessionmaker


@pytest.mark.asyncio
async def test_source_store_eager_loads_includes(legacy_db, source_store):
    jane, john = factories.employee(1), factories.employee(2, "John")
    legacy_db.add_all([jane, john, factories.employee_task(1, assigned_employees=[jane, john])])
    await legacy_db.commit()

    tasks = [t async for t in source_store.with_includes(legacy.EmployeeTask, "assigned_employees")]
    assert len(tasks) == 1
    # Loaded before the read session closed, so no lazy load happens here
    assert sorted(e.first_name for e in tasks[0].assigned_employees) == ["Jane", "John"]


@pytest.mark.asyncio
async def test_source_store_enumerates_all(legacy_db, source_store):
    legacy_db.add_all([factories.crest(i) for i in (1, 2, 3)])
    await legacy_db.commit()
    ids = sorted([c.id async for c in source_store.enumerate_all(legacy.Crest)])
    assert ids == [1, 2, 3]


@pytest.mark.asyncio
async def test_target_store_stages_until_commit(target_store):
    pic = await target_store.create(models.Picture, source_id=7, data=b"x")
    assert target_store.pending_count == 1
    assert pic.id is None

    assert await target_store.commit() is True
    assert target_store.pending_count == 0
    assert pic.id is not None

    found = await target_store.find(models.Picture, models.Picture.source_id == 7)
    assert found is pic
    assert await target_store.find(models.Picture, models.Picture.source_id == 8) is None


@pytest.mark.asyncio
async def test_target_store_rollback_drops_pending(target_store):
    await target_store.create(models.Picture, source_id=1)
    await target_store.rollback()
    assert target_store.pending_count == 0
    assert list(await target_store.get_all(models.Picture)) == []


@pytest.mark.asyncio
async def test_target_store_commits_flushed_rows(target_store, target_engine):
    await target_store.create(models.Picture, source_id=9, data=b"x")
    await target_store.session.flush()
    assert target_store.pending_count == 0

    assert await target_store.commit() is True
    assert not target_store.session.in_transaction()
    async with make_sessionmaker(target_engine)() as other:
        rows = (await other.execute(select(models.Picture.source_id))).scalars().all()
    assert rows == [9]
