from dataclasses import fields
from datetime import timedelta

import pytest
from sqlalchemy import Computed, Integer, String, select
from sqlalchemy.orm import Mapped, mapped_column, selectinload

import factories
from OutlookMigrator import models
from OutlookMigrator.cloner import generate_clones
from OutlookMigrator.db import Base
from OutlookMigrator.descriptors import clonable_fields
from OutlookMigrator.metrics import get_counter


async def _seed_orders(store, item_counts: list[int]) -> list[models.Order]:
    acme = await store.create(
        models.Customer,
        name="Acme",
        status=models.CustomerStatus.active,
        billing_address_state=models.StateEnum.CA,
        home_office_state=models.StateEnum.CA,
    )
    shop = await store.create(models.CustomerStore, customer=acme, state=models.StateEnum.CA)
    jane = await store.create(
        models.Employee,
        first_name="Jane",
        last_name="Doe",
        full_name="Jane Doe",
        prefix=models.PersonPrefix.ms,
        department=models.EmployeeDepartment.sales,
        status=models.EmployeeStatus.salaried,
        state=models.StateEnum.CA,
    )
    pic = await store.create(models.Picture, data=b"img")
    product = await store.create(
        models.Product,
        name="Monitor",
        category=models.ProductCategory.monitors,
        engineer=jane,
        support=jane,
        primary_image=pic,
    )
    orders = []
    for n, count in enumerate(item_counts):
        order = await store.create(
            models.Order,
            source_id=100 + n,
            invoice_number=f"INV{n}",
            order_date=factories.ORDER_DATE,
            po_number=f"PO-{n}",
            total_amount=10.0 * (n + 1),
            shipment_courier=models.ShipmentCourier.ups,
            shipment_status=models.ShipmentStatus.transit,
            employee=jane,
            customer=acme,
            store=shop,
        )
        for i in range(count):
            await store.create(
                models.OrderItem,
                source_id=1000 * (n + 1) + i,
                order=order,
                product=product,
                product_units=i + 1,
                total=5.0 * (i + 1),
            )
        orders.append(order)
    await store.commit()
    return orders


async def _orders_with_items(session):
    session.expunge_all()
    stmt = select(models.Order).options(selectinload(models.Order.items)).order_by(models.Order.id)
    return (await session.execute(stmt)).scalars().all()


@pytest.mark.asyncio
async def test_factor_three_clones(target_store, target_db):
    await _seed_orders(target_store, [2])

    report = await generate_clones(target_store, factor=3)

    assert (report.source_orders, report.orders_created, report.items_created) == (1, 3, 6)
    orders = await _orders_with_items(target_db)
    source, clones = orders[0], orders[1:]
    assert len(clones) == 3
    assert [c.invoice_number for c in clones] == ["0INV0", "1INV0", "2INV0"]
    for clone in clones:
        assert clone.order_date == source.order_date - timedelta(days=1)
        assert clone.po_number == source.po_number
        assert clone.total_amount == source.total_amount
        assert clone.shipment_courier is source.shipment_courier
        assert (clone.customer_id, clone.store_id, clone.employee_id) == (
            source.customer_id,
            source.store_id,
            source.employee_id,
        )
        assert clone.source_id is None
        assert len(clone.items) == len(source.items) == 2
        assert {i.order_id for i in clone.items} == {clone.id}
        assert sorted(i.product_units for i in clone.items) == [1, 2]
        assert all(i.source_id is None for i in clone.items)
    # Source aggregate is untouched
    assert source.invoice_number == "INV0"
    assert len(source.items) == 2


@pytest.mark.asyncio
async def test_childless_parent_clones_without_children(target_store, target_db):
    await _seed_orders(target_store, [0, 1])

    report = await generate_clones(target_store, factor=2)

    assert (report.orders_created, report.items_created) == (4, 2)
    orders = await _orders_with_items(target_db)
    empty_clones = [o for o in orders if o.invoice_number.endswith("INV0") and o.source_id is None]
    assert len(empty_clones) == 2
    assert all(o.items == [] for o in empty_clones)


@pytest.mark.asyncio
async def test_factor_zero_creates_nothing(target_store, target_db):
    await _seed_orders(target_store, [1])
    report = await generate_clones(target_store, factor=0)
    assert report.orders_created == 0
    assert len(await _orders_with_items(target_db)) == 1


@pytest.mark.asyncio
async def test_negative_factor_is_rejected(target_store):
    with pytest.raises(ValueError):
        await generate_clones(target_store, factor=-1)


@pytest.mark.asyncio
async def test_clone_commits_once_and_counts(target_store, target_db, monkeypatch):
    await _seed_orders(target_store, [1, 1])
    commits = []
    orig = target_store.commit

    async def counting_commit():
        commits.append(target_store.pending_count)
        return await orig()

    monkeypatch.setattr(target_store, "commit", counting_commit)
    await generate_clones(target_store, factor=2)

    assert len(commits) == 1
    assert get_counter("clone.orders") == 4
    assert get_counter("clone.items") == 4


def test_order_descriptors_exclude_overridden_and_key_columns():
    attrs = [fd.attr for fd in clonable_fields(models.Order)]
    for excluded in ("id", "source_id", "invoice_number", "order_date"):
        assert excluded not in attrs
    assert {"po_number", "total_amount", "customer_id", "store_id"} <= set(attrs)
    refs = {fd.attr for fd in clonable_fields(models.Order) if fd.is_reference}
    assert refs == {"employee_id", "customer_id", "store_id"}


def test_descriptors_are_cached_per_class():
    assert clonable_fields(models.OrderItem) is clonable_fields(models.OrderItem)
    assert clonable_fields(models.OrderItem) is not clonable_fields(models.Order)


def test_computed_and_flagged_columns_are_excluded():
    class Widget(Base):
        __tablename__ = "test_widgets"
        id: Mapped[int] = mapped_column(Integer, primary_key=True)
        source_id: Mapped[int | None] = mapped_column(Integer)
        name: Mapped[str] = mapped_column(String(20))
        name_len: Mapped[int] = mapped_column(Integer, Computed("length(name)"))
        secret: Mapped[str] = mapped_column(String(20), info={"clone": False})

    try:
        assert [fd.attr for fd in clonable_fields(Widget)] == ["name"]
    finally:
        Base.metadata.remove(Widget.__table__)


def test_descriptor_carries_attribute_and_reference_flag_only():
    fd = next(fd for fd in clonable_fields(models.OrderItem) if fd.attr == "product_id")
    assert [f.name for f in fields(fd)] == ["attr", "is_reference"]
    assert fd.is_reference is True
