"""Import task registry.

One ``ImportTask`` per legacy entity type. ``references`` lists the task names
whose committed entities the transform may resolve; the scheduler derives the
stage order from it.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

import structlog

from OutlookMigrator import legacy, transforms
from OutlookMigrator.context import ImportContext
from OutlookMigrator.metrics import observe_histogram, record_imported

log = structlog.get_logger()


@dataclass(frozen=True)
class ImportTask:
    name: str
    source: type
    transform: Callable[[Any, ImportContext], Any]
    includes: tuple[str, ...] = ()
    references: frozenset[str] = frozenset()


def _task(
    name: str,
    transform: Callable[[Any, ImportContext], Any],
    *includes: str,
    references: tuple[str, ...] = (),
) -> ImportTask:
    return ImportTask(
        name=name,
        source=getattr(legacy, name),
        transform=transform,
        includes=includes,
        references=frozenset(references),
    )


IMPORT_TASKS: tuple[ImportTask, ...] = (
    _task("Crest", transforms.import_crest),
    _task("State", transforms.import_state),
    _task("Customer", transforms.import_customer),
    _task("Picture", transforms.import_picture),
    _task("Probation", transforms.import_probation),
    _task("CustomerStore", transforms.import_customer_store, references=("Customer", "Crest")),
    _task("Employee", transforms.import_employee, references=("Picture", "Probation")),
    _task("Evaluation", transforms.import_evaluation, references=("Employee",)),
    _task("Product", transforms.import_product, references=("Employee", "Picture")),
    _task("ProductImage", transforms.import_product_image, references=("Product", "Picture")),
    _task("ProductCatalog", transforms.import_product_catalog, references=("Product",)),
    _task(
        "Order",
        transforms.import_order,
        references=("Employee", "Customer", "CustomerStore"),
    ),
    _task("OrderItem", transforms.import_order_item, references=("Order", "Product")),
    _task(
        "Quote",
        transforms.import_quote,
        references=("Customer", "CustomerStore", "Employee"),
    ),
    _task("QuoteItem", transforms.import_quote_item, references=("Quote", "Product")),
    _task(
        "CustomerEmployee",
        transforms.import_customer_employee,
        references=("Picture", "Customer", "CustomerStore"),
    ),
    _task(
        "CustomerCommunication",
        transforms.import_customer_communication,
        references=("Employee", "CustomerEmployee"),
    ),
    _task(
        "EmployeeTask",
        transforms.import_employee_task,
        "assigned_employees",
        references=("CustomerEmployee", "Employee"),
    ),
    _task("TaskAttachedFile", transforms.import_task_attached_file, references=("EmployeeTask",)),
)


async def run_import_task(task: ImportTask, ctx: ImportContext) -> int:
    """Transform every source record of ``task`` into the target session.

    Entities are staged, not committed; they enter the pending index layer and
    become resolvable only after the stage commit seals it.
    """
    start = time.perf_counter()
    count = 0
    async for record in ctx.source.with_includes(task.source, *task.includes):
        entity = task.transform(record, ctx)
        await ctx.store.add(entity)
        await ctx.index.register(task.name, entity)
        count += 1
    dur_ms = int((time.perf_counter() - start) * 1000)
    record_imported(task.name, count)
    observe_histogram("migration.task.ms", dur_ms)
    log.info("migration.task.completed", entity_type=task.name, records=count, duration_ms=dur_ms)
    return count
