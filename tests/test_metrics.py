import pytest

import factories
from OutlookMigrator.metrics import (
    get_counter,
    get_counters,
    inc_counter,
    observe_histogram,
    reset_counters,
)
from OutlookMigrator.pipeline import import_all


def test_counters_and_reset():
    inc_counter("migration.records.Crest", 3)
    inc_counter("migration.records.Crest")
    assert get_counter("migration.records.Crest") == 4
    reset_counters()
    assert get_counter("migration.records.Crest") == 0


def test_histogram_buckets_flatten_into_counters():
    observe_histogram("migration.stage.ms", 3)
    observe_histogram("migration.stage.ms", 70)
    observe_histogram("migration.stage.ms", 99999)
    c = get_counters()
    assert c["histo.migration.stage.ms.le_5"] == 1
    assert c["histo.migration.stage.ms.le_100"] == 1
    assert c["histo.migration.stage.ms.gt_30000"] == 1
    assert c["histo.migration.stage.ms.count"] == 3
    assert c["histo.migration.stage.ms.sum"] == 3 + 70 + 99999


@pytest.mark.asyncio
async def test_import_emits_record_and_stage_counters(legacy_db, source_store, target_store):
    await factories.seed_acme(legacy_db)
    await import_all(target_store, source_store)

    assert get_counter("migration.records.State") == 2
    assert get_counter("migration.records.TaskAttachedFile") == 1
    assert get_counter("migration.stage.committed") == 5
    assert get_counter("migration.stage.failed") == 0
    assert get_counter("migration.resolve.miss") == 0
    assert get_counters()["histo.migration.stage.ms.count"] == 5
