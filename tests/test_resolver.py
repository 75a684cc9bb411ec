import asyncio
from types import SimpleNamespace

import pytest

from OutlookMigrator.errors import DuplicateSourceIdError, ReferenceResolutionError
from OutlookMigrator.metrics import get_counter
from OutlookMigrator.resolver import ReferenceResolver, SourceIdIndex


def _entity(source_id: int) -> SimpleNamespace:
    return SimpleNamespace(source_id=source_id)


@pytest.fixture
def index() -> SourceIdIndex:
    return SourceIdIndex()


@pytest.fixture
def resolver(index: SourceIdIndex) -> ReferenceResolver:
    return ReferenceResolver(index)


def test_resolve_none_is_none(resolver):
    assert resolver.resolve("Probation", None) is None
    assert get_counter("migration.resolve.miss") == 0


@pytest.mark.asyncio
async def test_resolve_committed_entity(index, resolver):
    acme = _entity(10)
    await index.register("Customer", acme)
    index.seal()
    found = resolver.resolve("Customer", 10)
    assert found is acme
    assert found.source_id == 10


@pytest.mark.asyncio
async def test_pending_entities_are_not_resolvable(index, resolver):
    await index.register("Customer", _entity(10))
    with pytest.raises(ReferenceResolutionError) as ei:
        resolver.resolve("Customer", 10)
    assert ei.value.entity_type == "Customer"
    assert ei.value.source_id == 10


def test_miss_raises_and_counts(resolver):
    with pytest.raises(ReferenceResolutionError) as ei:
        resolver.resolve("Probation", 999)
    assert ei.value.entity_type == "Probation"
    assert get_counter("migration.resolve.miss") == 1
    assert get_counter("migration.resolve.miss.Probation") == 1


@pytest.mark.asyncio
async def test_lookup_is_scoped_per_type(index, resolver):
    await index.register("Employee", _entity(1))
    index.seal()
    with pytest.raises(ReferenceResolutionError):
        resolver.resolve("Customer", 1)


@pytest.mark.asyncio
async def test_duplicate_source_id_rejected(index):
    await index.register("Order", _entity(5))
    with pytest.raises(DuplicateSourceIdError):
        await index.register("Order", _entity(5))
    index.seal()
    with pytest.raises(DuplicateSourceIdError):
        await index.register("Order", _entity(5))
    # Same id under another type is fine
    await index.register("Quote", _entity(5))


@pytest.mark.asyncio
async def test_discard_pending_keeps_committed(index):
    await index.register("Picture", _entity(1))
    assert index.seal() == 1
    await index.register("Picture", _entity(2))
    assert index.discard_pending() == 1
    assert dict(index.committed("Picture")).keys() == {1}
    assert index.pending_count() == 0


@pytest.mark.asyncio
async def test_committed_view_is_read_only(index):
    await index.register("Crest", _entity(1))
    index.seal()
    view = index.committed("Crest")
    with pytest.raises(TypeError):
        view[2] = _entity(2)  # type: ignore[index]


@pytest.mark.asyncio
async def test_concurrent_registration(index):
    await asyncio.gather(*(index.register("Employee", _entity(i)) for i in range(200)))
    assert index.pending_count("Employee") == 200
    index.seal()
    assert index.committed_count("Employee") == 200


@pytest.mark.asyncio
async def test_resolve_many(index, resolver):
    for i in (1, 2, 3):
        await index.register("Employee", _entity(i))
    index.seal()
    assert [e.source_id for e in resolver.resolve_many("Employee", [3, 1])] == [3, 1]
    with pytest.raises(ReferenceResolutionError):
        resolver.resolve_many("Employee", [1, 42])
