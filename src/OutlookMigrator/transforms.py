"""Per-type legacy record -> target entity transforms.

Each transform builds exactly one unattached target instance (TaskAttachedFile
also builds its owned FileData). References are resolved from the legacy key
columns rather than the loaded relationship, so a dangling key fails resolution
instead of reading as a null reference. Registration in the session and the
SourceId index is done by ``tasks.run_import_task``.
"""

from __future__ import annotations

import re
from datetime import timedelta
from typing import Any

from OutlookMigrator import coercion, legacy, models
from OutlookMigrator.coercion import EnumMapping
from OutlookMigrator.context import ImportContext

_RAISE_RE = re.compile(r"Raise:\s*Yes")
_BONUS_RE = re.compile(r"Bonus:\s*Yes")
EVALUATION_LENGTH = timedelta(hours=1)


def _enum(mapping: EnumMapping, entity_type: str, field: str, value: Any) -> Any:
    return mapping.coerce(value, entity_type=entity_type, field=field)


def import_crest(rec: legacy.Crest, ctx: ImportContext) -> models.Crest:
    return models.Crest(
        source_id=rec.id,
        city_name=rec.city_name,
        large_image=rec.large_image,
        small_image=rec.small_image,
    )


def import_state(rec: legacy.State, ctx: ImportContext) -> models.State:
    short_name = _enum(coercion.STATE, "State", "short_name", rec.short_name)
    return models.State(
        source_id=short_name.ordinal,
        short_name=short_name,
        long_name=rec.long_name,
        large_flag=rec.flag48px,
        small_flag=rec.flag24px,
    )


def import_customer(rec: legacy.Customer, ctx: ImportContext) -> models.Customer:
    t = "Customer"
    return models.Customer(
        source_id=rec.id,
        name=rec.name,
        status=_enum(coercion.CUSTOMER_STATUS, t, "status", rec.status),
        phone=rec.phone,
        fax=rec.fax,
        website=rec.website,
        logo=rec.logo,
        profile=rec.profile,
        annual_revenue=rec.annual_revenue,
        total_employees=rec.total_employees,
        total_stores=rec.total_stores,
        billing_address_line=rec.billing_address_line,
        billing_address_city=rec.billing_address_city,
        billing_address_state=_enum(
            coercion.STATE, t, "billing_address_state", rec.billing_address_state
        ),
        billing_address_zip_code=rec.billing_address_zip_code,
        billing_address_latitude=rec.billing_address_latitude,
        billing_address_longitude=rec.billing_address_longitude,
        home_office_line=rec.home_office_line,
        home_office_city=rec.home_office_city,
        home_office_state=_enum(coercion.STATE, t, "home_office_state", rec.home_office_state),
        home_office_zip_code=rec.home_office_zip_code,
        home_office_latitude=rec.home_office_latitude,
        home_office_longitude=rec.home_office_longitude,
    )


def import_picture(rec: legacy.Picture, ctx: ImportContext) -> models.Picture:
    return models.Picture(source_id=rec.id, data=rec.data)


def import_probation(rec: legacy.Probation, ctx: ImportContext) -> models.Probation:
    return models.Probation(source_id=rec.id, reason=rec.reason)


def import_customer_store(rec: legacy.CustomerStore, ctx: ImportContext) -> models.CustomerStore:
    return models.CustomerStore(
        source_id=rec.id,
        customer=ctx.ref("Customer", rec.customer_id),
        crest=ctx.ref("Crest", rec.crest_id),
        phone=rec.phone,
        fax=rec.fax,
        location=rec.location,
        line=rec.address_line,
        city=rec.address_city,
        state=_enum(coercion.STATE, "CustomerStore", "state", rec.address_state),
        zip_code=rec.address_zip_code,
        latitude=rec.address_latitude,
        longitude=rec.address_longitude,
        annual_sales=rec.annual_sales,
        square_footage=rec.square_footage,
        total_employees=rec.total_employees,
    )


def import_employee(rec: legacy.Employee, ctx: ImportContext) -> models.Employee:
    t = "Employee"
    return models.Employee(
        source_id=rec.id,
        first_name=rec.first_name,
        last_name=rec.last_name,
        full_name=rec.full_name,
        prefix=_enum(coercion.PREFIX, t, "prefix", rec.prefix),
        title=rec.title,
        department=_enum(coercion.DEPARTMENT, t, "department", rec.department),
        status=_enum(coercion.EMPLOYEE_STATUS, t, "status", rec.status),
        email=rec.email,
        skype=rec.skype,
        mobile_phone=rec.mobile_phone,
        home_phone=rec.home_phone,
        birth_date=rec.birth_date,
        hire_date=rec.hire_date,
        address=rec.address_line,
        city=rec.address_city,
        state=_enum(coercion.STATE, t, "state", rec.address_state),
        zip_code=rec.address_zip_code,
        address_latitude=rec.address_latitude,
        address_longitude=rec.address_longitude,
        personal_profile=rec.personal_profile,
        picture=ctx.ref("Picture", rec.picture_id),
        probation_reason=ctx.ref("Probation", rec.probation_reason_id),
    )


def import_evaluation(rec: legacy.Evaluation, ctx: ImportContext) -> models.Evaluation:
    details = rec.details or ""
    return models.Evaluation(
        source_id=rec.id,
        subject=rec.subject,
        description=rec.details,
        employee=ctx.ref("Employee", rec.employee_id),
        manager=ctx.ref("Employee", rec.created_by_id),
        start_on=rec.created_on,
        end_on=rec.created_on + EVALUATION_LENGTH,
        rating=_enum(coercion.EVALUATION_RATING, "Evaluation", "rating", rec.rating),
        raise_=models.Raise.yes if _RAISE_RE.search(details) else models.Raise.no,
        bonus=models.Bonus.yes if _BONUS_RE.search(details) else models.Bonus.no,
    )


def import_product(rec: legacy.Product, ctx: ImportContext) -> models.Product:
    return models.Product(
        source_id=rec.id,
        name=rec.name,
        description=rec.description,
        category=_enum(coercion.PRODUCT_CATEGORY, "Product", "category", rec.category),
        available=rec.available,
        backorder=rec.backorder,
        manufacturing=rec.manufacturing,
        current_inventory=rec.current_inventory,
        cost=rec.cost,
        retail_price=rec.retail_price,
        sale_price=rec.sale_price,
        weight=rec.weight,
        consumer_rating=rec.consumer_rating,
        production_start=rec.production_start,
        image=rec.image,
        engineer=ctx.ref("Employee", rec.engineer_id),
        support=ctx.ref("Employee", rec.support_id),
        primary_image=ctx.ref("Picture", rec.primary_image_id),
    )


def import_product_image(rec: legacy.ProductImage, ctx: ImportContext) -> models.ProductImage:
    return models.ProductImage(
        source_id=rec.id,
        product=ctx.ref("Product", rec.product_id),
        picture=ctx.ref("Picture", rec.picture_id),
    )


def import_product_catalog(
    rec: legacy.ProductCatalog, ctx: ImportContext
) -> models.ProductCatalog:
    return models.ProductCatalog(
        source_id=rec.id,
        product=ctx.ref("Product", rec.product_id),
        pdf=rec.pdf,
    )


def import_order(rec: legacy.Order, ctx: ImportContext) -> models.Order:
    t = "Order"
    return models.Order(
        source_id=rec.id,
        invoice_number=rec.invoice_number,
        order_date=rec.order_date,
        ship_date=rec.ship_date,
        po_number=rec.po_number,
        order_terms=rec.order_terms,
        comments=rec.comments,
        sale_amount=rec.sale_amount,
        shipping_amount=rec.shipping_amount,
        total_amount=rec.total_amount,
        payment_total=rec.payment_total,
        refund_total=rec.refund_total,
        shipment_courier=_enum(coercion.SHIPMENT_COURIER, t, "shipment_courier", rec.shipment_courier),
        shipment_status=_enum(coercion.SHIPMENT_STATUS, t, "shipment_status", rec.shipment_status),
        employee=ctx.ref("Employee", rec.employee_id),
        customer=ctx.ref("Customer", rec.customer_id),
        store=ctx.ref("CustomerStore", rec.store_id),
    )


def import_order_item(rec: legacy.OrderItem, ctx: ImportContext) -> models.OrderItem:
    return models.OrderItem(
        source_id=rec.id,
        order=ctx.ref("Order", rec.order_id),
        product=ctx.ref("Product", rec.product_id),
        product_units=rec.product_units,
        product_price=rec.product_price,
        discount=rec.discount,
        total=rec.total,
    )


def import_quote(rec: legacy.Quote, ctx: ImportContext) -> models.Quote:
    return models.Quote(
        source_id=rec.id,
        number=rec.number,
        date=rec.date,
        opportunity=rec.opportunity,
        sub_total=rec.sub_total,
        shipping_amount=rec.shipping_amount,
        total=rec.total,
        customer=ctx.ref("Customer", rec.customer_id),
        customer_store=ctx.ref("CustomerStore", rec.customer_store_id),
        employee=ctx.ref("Employee", rec.employee_id),
    )


def import_quote_item(rec: legacy.QuoteItem, ctx: ImportContext) -> models.QuoteItem:
    return models.QuoteItem(
        source_id=rec.id,
        quote=ctx.ref("Quote", rec.quote_id),
        product=ctx.ref("Product", rec.product_id),
        product_units=rec.product_units,
        product_price=rec.product_price,
        discount=rec.discount,
        total=rec.total,
    )


def import_customer_employee(
    rec: legacy.CustomerEmployee, ctx: ImportContext
) -> models.CustomerEmployee:
    return models.CustomerEmployee(
        source_id=rec.id,
        prefix=_enum(coercion.PREFIX, "CustomerEmployee", "prefix", rec.prefix),
        first_name=rec.first_name,
        last_name=rec.last_name,
        full_name=rec.full_name,
        position=rec.position,
        email=rec.email,
        mobile_phone=rec.mobile_phone,
        is_purchase_authority=rec.is_purchase_authority,
        picture=ctx.ref("Picture", rec.picture_id),
        customer=ctx.ref("Customer", rec.customer_id),
        customer_store=ctx.ref("CustomerStore", rec.customer_store_id),
    )


def import_customer_communication(
    rec: legacy.CustomerCommunication, ctx: ImportContext
) -> models.CustomerCommunication:
    return models.CustomerCommunication(
        source_id=rec.id,
        date=rec.date,
        purpose=rec.purpose,
        type=rec.type,
        employee=ctx.ref("Employee", rec.employee_id),
        customer_employee=ctx.ref("CustomerEmployee", rec.customer_employee_id),
    )


def import_employee_task(rec: legacy.EmployeeTask, ctx: ImportContext) -> models.EmployeeTask:
    t = "EmployeeTask"
    return models.EmployeeTask(
        source_id=rec.id,
        subject=rec.subject,
        description=rec.description,
        rtf_text_description=rec.rtf_text_description,
        category=rec.category,
        predecessors=rec.predecessors,
        completion=rec.completion,
        priority=_enum(coercion.TASK_PRIORITY, t, "priority", rec.priority),
        status=_enum(coercion.TASK_STATUS, t, "status", rec.status),
        follow_up=_enum(coercion.TASK_FOLLOW_UP, t, "follow_up", rec.follow_up),
        private=rec.private,
        reminder=rec.reminder,
        reminder_date_time=rec.reminder_date_time,
        start_date=rec.start_date,
        due_date=rec.due_date,
        parent_id=rec.parent_id,
        attached_collections_changed=rec.attached_collections_changed,
        customer_employee=ctx.ref("CustomerEmployee", rec.customer_employee_id),
        owner=ctx.ref("Employee", rec.owner_id),
        assigned_employee=ctx.ref("Employee", rec.assigned_employee_id),
        assigned_employees=ctx.resolver.resolve_many(
            "Employee", [e.id for e in rec.assigned_employees]
        ),
    )


def import_task_attached_file(
    rec: legacy.TaskAttachedFile, ctx: ImportContext
) -> models.TaskAttachedFile:
    return models.TaskAttachedFile(
        source_id=rec.id,
        employee_task=ctx.ref("EmployeeTask", rec.employee_task_id),
        file=models.FileData(file_name=rec.name, content=rec.content),
    )
