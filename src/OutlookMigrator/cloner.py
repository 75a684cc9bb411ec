"""Synthetic data generation: bulk copies of committed orders.

Each clone copies the order's clonable columns, shifts the order date back by
one day and prefixes the invoice number with the clone index. Items are copied
the same way and re-parented to the new order. All copies land in one commit.
"""

from __future__ import annotations

import time
from dataclasses import asdict, dataclass
from datetime import timedelta
from typing import Any

import structlog
from sqlalchemy.exc import SQLAlchemyError

from OutlookMigrator.errors import CommitError
from OutlookMigrator.metrics import inc_counter, observe_histogram
from OutlookMigrator.models import Order, OrderItem
from OutlookMigrator.stores import TargetStore

log = structlog.get_logger()

DATE_SHIFT = timedelta(days=1)


@dataclass
class CloneReport:
    factor: int
    source_orders: int
    orders_created: int
    items_created: int
    duration_ms: int

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


async def generate_clones(store: TargetStore, factor: int = 10) -> CloneReport:
    if factor < 0:
        raise ValueError(f"factor must be >= 0, got {factor}")
    start = time.perf_counter()
    orders = list(await store.get_all(Order, "items"))
    order_fields = store.clonable_fields(Order)
    item_fields = store.clonable_fields(OrderItem)

    orders_created = items_created = 0
    for order in orders:
        for index in range(factor):
            clone = await store.create(
                Order,
                order_date=order.order_date - DATE_SHIFT,
                invoice_number=f"{index}{order.invoice_number}",
            )
            for fd in order_fields:
                fd.copy(order, clone)
            orders_created += 1
            for item in order.items:
                new_item = await store.create(OrderItem)
                for fd in item_fields:
                    fd.copy(item, new_item)
                new_item.order = clone
                items_created += 1

    try:
        await store.commit()
    except SQLAlchemyError as exc:
        await store.rollback()
        raise CommitError("clone", str(getattr(exc, "orig", None) or exc)) from exc

    dur_ms = int((time.perf_counter() - start) * 1000)
    inc_counter("clone.orders", orders_created)
    inc_counter("clone.items", items_created)
    observe_histogram("clone.ms", dur_ms)
    log.info(
        "clone.completed",
        factor=factor,
        source_orders=len(orders),
        orders=orders_created,
        items=items_created,
        duration_ms=dur_ms,
    )
    return CloneReport(
        factor=factor,
        source_orders=len(orders),
        orders_created=orders_created,
        items_created=items_created,
        duration_ms=dur_ms,
    )
