import pytest
from sqlalchemy import inspect as sa_inspect
from sqlalchemy.orm import RelationshipDirection

from OutlookMigrator import models
from OutlookMigrator.errors import SchedulingError
from OutlookMigrator.scheduler import compute_stages
from OutlookMigrator.tasks import IMPORT_TASKS, ImportTask


def _fake(name: str, *refs: str) -> ImportTask:
    return ImportTask(
        name=name,
        source=object,
        transform=lambda rec, ctx: None,
        references=frozenset(refs),
    )


def test_registry_levels():
    stages = compute_stages(IMPORT_TASKS)
    assert [s.names for s in stages] == [
        ["Crest", "Customer", "Picture", "Probation", "State"],
        ["CustomerStore", "Employee"],
        ["CustomerEmployee", "Evaluation", "Order", "Product", "Quote"],
        [
            "CustomerCommunication",
            "EmployeeTask",
            "OrderItem",
            "ProductCatalog",
            "ProductImage",
            "QuoteItem",
        ],
        ["TaskAttachedFile"],
    ]
    assert [s.level for s in stages] == [0, 1, 2, 3, 4]
    assert sum(len(s.tasks) for s in stages) == 19


def test_every_reference_points_to_a_lower_level():
    level = {t.name: s.level for s in compute_stages(IMPORT_TASKS) for t in s.tasks}
    for task in IMPORT_TASKS:
        for ref in task.references:
            assert level[ref] < level[task.name], (task.name, ref)


def test_declared_references_cover_target_relationships():
    task_names = {t.name for t in IMPORT_TASKS}
    for task in IMPORT_TASKS:
        mapper = sa_inspect(getattr(models, task.name))
        for rel in mapper.relationships:
            if rel.direction is RelationshipDirection.ONETOMANY:
                continue
            target = rel.mapper.class_.__name__
            # Owned rows (FileData) are built by their owner's transform
            if target not in task_names:
                continue
            assert target in task.references, (task.name, rel.key)


def test_cycle_is_rejected_with_remaining_types():
    tasks = [_fake("A"), _fake("B", "A", "C"), _fake("C", "B")]
    with pytest.raises(SchedulingError) as ei:
        compute_stages(tasks)
    assert "B" in str(ei.value) and "C" in str(ei.value)
    assert "A," not in str(ei.value)


def test_self_reference_is_a_cycle():
    with pytest.raises(SchedulingError, match="cycle"):
        compute_stages([_fake("Node", "Node")])


def test_unknown_reference_is_rejected():
    with pytest.raises(SchedulingError, match="Missing"):
        compute_stages([_fake("A", "Missing")])


def test_duplicate_task_name_is_rejected():
    with pytest.raises(SchedulingError, match="Duplicate"):
        compute_stages([_fake("A"), _fake("A")])


def test_levels_use_longest_path():
    # D depends on A directly and on C through B, so it sits above C
    tasks = [_fake("A"), _fake("B", "A"), _fake("C", "B"), _fake("D", "A", "C")]
    stages = compute_stages(tasks)
    assert [s.names for s in stages] == [["A"], ["B"], ["C"], ["D"]]


def test_empty_registry_has_no_stages():
    assert compute_stages([]) == []
