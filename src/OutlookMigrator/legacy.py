"""Read-only mapping of the legacy DevAV tables.

Enumerated columns hold the legacy integer literals and US-state columns hold
two-letter codes; both are coerced by ``OutlookMigrator.coercion`` on import.
References are relationships so importers receive nested records rather than
raw ids.
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import (
    BigInteger,
    Boolean,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    LargeBinary,
    String,
    Table,
    Text,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


# 64-bit surrogate keys; SQLite only autoincrements INTEGER primary keys
LegacyId = BigInteger().with_variant(Integer, "sqlite")


class LegacyBase(DeclarativeBase):
    pass


class Crest(LegacyBase):
    __tablename__ = "Crests"
    id: Mapped[int] = mapped_column(LegacyId, primary_key=True)
    city_name: Mapped[str | None] = mapped_column(String(100))
    large_image: Mapped[bytes | None] = mapped_column(LargeBinary)
    small_image: Mapped[bytes | None] = mapped_column(LargeBinary)


class State(LegacyBase):
    __tablename__ = "States"
    short_name: Mapped[str] = mapped_column(String(2), primary_key=True)
    long_name: Mapped[str | None] = mapped_column(String(100))
    flag48px: Mapped[bytes | None] = mapped_column(LargeBinary)
    flag24px: Mapped[bytes | None] = mapped_column(LargeBinary)


class Customer(LegacyBase):
    __tablename__ = "Customers"
    id: Mapped[int] = mapped_column(LegacyId, primary_key=True)
    name: Mapped[str] = mapped_column(String(200))
    status: Mapped[int] = mapped_column(Integer, default=0)
    phone: Mapped[str | None] = mapped_column(String(50))
    fax: Mapped[str | None] = mapped_column(String(50))
    website: Mapped[str | None] = mapped_column(String(200))
    logo: Mapped[bytes | None] = mapped_column(LargeBinary)
    profile: Mapped[str | None] = mapped_column(Text)
    annual_revenue: Mapped[float | None] = mapped_column(Float)
    total_employees: Mapped[int] = mapped_column(Integer, default=0)
    total_stores: Mapped[int] = mapped_column(Integer, default=0)
    billing_address_line: Mapped[str | None] = mapped_column(String(200))
    billing_address_city: Mapped[str | None] = mapped_column(String(100))
    billing_address_state: Mapped[str] = mapped_column(String(2))
    billing_address_zip_code: Mapped[str | None] = mapped_column(String(20))
    billing_address_latitude: Mapped[float | None] = mapped_column(Float)
    billing_address_longitude: Mapped[float | None] = mapped_column(Float)
    home_office_line: Mapped[str | None] = mapped_column(String(200))
    home_office_city: Mapped[str | None] = mapped_column(String(100))
    home_office_state: Mapped[str] = mapped_column(String(2))
    home_office_zip_code: Mapped[str | None] = mapped_column(String(20))
    home_office_latitude: Mapped[float | None] = mapped_column(Float)
    home_office_longitude: Mapped[float | None] = mapped_column(Float)


class Picture(LegacyBase):
    __tablename__ = "Pictures"
    id: Mapped[int] = mapped_column(LegacyId, primary_key=True)
    data: Mapped[bytes | None] = mapped_column(LargeBinary)


class Probation(LegacyBase):
    __tablename__ = "Probations"
    id: Mapped[int] = mapped_column(LegacyId, primary_key=True)
    reason: Mapped[str | None] = mapped_column(Text)


class CustomerStore(LegacyBase):
    __tablename__ = "CustomerStores"
    id: Mapped[int] = mapped_column(LegacyId, primary_key=True)
    customer_id: Mapped[int] = mapped_column(ForeignKey("Customers.id"))
    crest_id: Mapped[int | None] = mapped_column(ForeignKey("Crests.id"), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(50))
    fax: Mapped[str | None] = mapped_column(String(50))
    location: Mapped[str | None] = mapped_column(String(200))
    address_line: Mapped[str | None] = mapped_column(String(200))
    address_city: Mapped[str | None] = mapped_column(String(100))
    address_state: Mapped[str] = mapped_column(String(2))
    address_zip_code: Mapped[str | None] = mapped_column(String(20))
    address_latitude: Mapped[float | None] = mapped_column(Float)
    address_longitude: Mapped[float | None] = mapped_column(Float)
    annual_sales: Mapped[float | None] = mapped_column(Float)
    square_footage: Mapped[int | None] = mapped_column(Integer)
    total_employees: Mapped[int] = mapped_column(Integer, default=0)

    customer: Mapped[Customer] = relationship()
    crest: Mapped[Crest | None] = relationship()


class Employee(LegacyBase):
    __tablename__ = "Employees"
    id: Mapped[int] = mapped_column(LegacyId, primary_key=True)
    first_name: Mapped[str] = mapped_column(String(100))
    last_name: Mapped[str] = mapped_column(String(100))
    full_name: Mapped[str] = mapped_column(String(200))
    prefix: Mapped[int] = mapped_column(Integer, default=0)
    title: Mapped[str | None] = mapped_column(String(100))
    department: Mapped[int] = mapped_column(Integer, default=1)
    status: Mapped[int] = mapped_column(Integer, default=0)
    email: Mapped[str | None] = mapped_column(String(200))
    skype: Mapped[str | None] = mapped_column(String(100))
    mobile_phone: Mapped[str | None] = mapped_column(String(50))
    home_phone: Mapped[str | None] = mapped_column(String(50))
    birth_date: Mapped[datetime | None] = mapped_column(DateTime)
    hire_date: Mapped[datetime | None] = mapped_column(DateTime)
    address_line: Mapped[str | None] = mapped_column(String(200))
    address_city: Mapped[str | None] = mapped_column(String(100))
    address_state: Mapped[str] = mapped_column(String(2))
    address_zip_code: Mapped[str | None] = mapped_column(String(20))
    address_latitude: Mapped[float | None] = mapped_column(Float)
    address_longitude: Mapped[float | None] = mapped_column(Float)
    personal_profile: Mapped[str | None] = mapped_column(Text)
    picture_id: Mapped[int | None] = mapped_column(ForeignKey("Pictures.id"), nullable=True)
    probation_reason_id: Mapped[int | None] = mapped_column(
        ForeignKey("Probations.id"), nullable=True
    )

    picture: Mapped[Picture | None] = relationship()
    probation_reason: Mapped[Probation | None] = relationship()


class Evaluation(LegacyBase):
    __tablename__ = "Evaluations"
    id: Mapped[int] = mapped_column(LegacyId, primary_key=True)
    subject: Mapped[str | None] = mapped_column(String(200))
    details: Mapped[str | None] = mapped_column(Text)
    created_on: Mapped[datetime] = mapped_column(DateTime)
    rating: Mapped[int] = mapped_column(Integer, default=0)
    employee_id: Mapped[int | None] = mapped_column(ForeignKey("Employees.id"), nullable=True)
    created_by_id: Mapped[int] = mapped_column(ForeignKey("Employees.id"))

    employee: Mapped[Employee | None] = relationship(foreign_keys=[employee_id])
    created_by: Mapped[Employee] = relationship(foreign_keys=[created_by_id])


class Product(LegacyBase):
    __tablename__ = "Products"
    id: Mapped[int] = mapped_column(LegacyId, primary_key=True)
    name: Mapped[str] = mapped_column(String(200))
    description: Mapped[str | None] = mapped_column(Text)
    category: Mapped[int] = mapped_column(Integer, default=0)
    available: Mapped[bool] = mapped_column(Boolean, default=True)
    backorder: Mapped[int] = mapped_column(Integer, default=0)
    manufacturing: Mapped[int] = mapped_column(Integer, default=0)
    current_inventory: Mapped[int] = mapped_column(Integer, default=0)
    cost: Mapped[float] = mapped_column(Float, default=0.0)
    retail_price: Mapped[float] = mapped_column(Float, default=0.0)
    sale_price: Mapped[float] = mapped_column(Float, default=0.0)
    weight: Mapped[float | None] = mapped_column(Float)
    consumer_rating: Mapped[float | None] = mapped_column(Float)
    production_start: Mapped[datetime | None] = mapped_column(DateTime)
    image: Mapped[bytes | None] = mapped_column(LargeBinary)
    engineer_id: Mapped[int] = mapped_column(ForeignKey("Employees.id"))
    support_id: Mapped[int] = mapped_column(ForeignKey("Employees.id"))
    primary_image_id: Mapped[int] = mapped_column(ForeignKey("Pictures.id"))

    engineer: Mapped[Employee] = relationship(foreign_keys=[engineer_id])
    support: Mapped[Employee] = relationship(foreign_keys=[support_id])
    primary_image: Mapped[Picture] = relationship()


class ProductImage(LegacyBase):
    __tablename__ = "ProductImages"
    id: Mapped[int] = mapped_column(LegacyId, primary_key=True)
    product_id: Mapped[int] = mapped_column(ForeignKey("Products.id"))
    picture_id: Mapped[int] = mapped_column(ForeignKey("Pictures.id"))

    product: Mapped[Product] = relationship()
    picture: Mapped[Picture] = relationship()


class ProductCatalog(LegacyBase):
    __tablename__ = "ProductCatalogs"
    id: Mapped[int] = mapped_column(LegacyId, primary_key=True)
    product_id: Mapped[int] = mapped_column(ForeignKey("Products.id"))
    pdf: Mapped[bytes | None] = mapped_column(LargeBinary)

    product: Mapped[Product] = relationship()


class Order(LegacyBase):
    __tablename__ = "Orders"
    id: Mapped[int] = mapped_column(LegacyId, primary_key=True)
    invoice_number: Mapped[str] = mapped_column(String(50))
    order_date: Mapped[datetime] = mapped_column(DateTime)
    ship_date: Mapped[datetime | None] = mapped_column(DateTime)
    po_number: Mapped[str | None] = mapped_column(String(50))
    order_terms: Mapped[str | None] = mapped_column(Text)
    comments: Mapped[str | None] = mapped_column(Text)
    sale_amount: Mapped[float] = mapped_column(Float, default=0.0)
    shipping_amount: Mapped[float] = mapped_column(Float, default=0.0)
    total_amount: Mapped[float] = mapped_column(Float, default=0.0)
    payment_total: Mapped[float] = mapped_column(Float, default=0.0)
    refund_total: Mapped[float] = mapped_column(Float, default=0.0)
    shipment_courier: Mapped[int] = mapped_column(Integer, default=0)
    shipment_status: Mapped[int] = mapped_column(Integer, default=0)
    employee_id: Mapped[int] = mapped_column(ForeignKey("Employees.id"))
    customer_id: Mapped[int] = mapped_column(ForeignKey("Customers.id"))
    store_id: Mapped[int] = mapped_column(ForeignKey("CustomerStores.id"))

    employee: Mapped[Employee] = relationship()
    customer: Mapped[Customer] = relationship()
    store: Mapped[CustomerStore] = relationship()


class OrderItem(LegacyBase):
    __tablename__ = "OrderItems"
    id: Mapped[int] = mapped_column(LegacyId, primary_key=True)
    product_units: Mapped[int] = mapped_column(Integer, default=0)
    product_price: Mapped[float] = mapped_column(Float, default=0.0)
    discount: Mapped[float] = mapped_column(Float, default=0.0)
    total: Mapped[float] = mapped_column(Float, default=0.0)
    order_id: Mapped[int] = mapped_column(ForeignKey("Orders.id"))
    product_id: Mapped[int] = mapped_column(ForeignKey("Products.id"))

    order: Mapped[Order] = relationship()
    product: Mapped[Product] = relationship()


class Quote(LegacyBase):
    __tablename__ = "Quotes"
    id: Mapped[int] = mapped_column(LegacyId, primary_key=True)
    number: Mapped[str | None] = mapped_column(String(50))
    date: Mapped[datetime | None] = mapped_column(DateTime)
    opportunity: Mapped[float | None] = mapped_column(Float)
    sub_total: Mapped[float] = mapped_column(Float, default=0.0)
    shipping_amount: Mapped[float] = mapped_column(Float, default=0.0)
    total: Mapped[float] = mapped_column(Float, default=0.0)
    customer_id: Mapped[int] = mapped_column(ForeignKey("Customers.id"))
    customer_store_id: Mapped[int] = mapped_column(ForeignKey("CustomerStores.id"))
    employee_id: Mapped[int] = mapped_column(ForeignKey("Employees.id"))

    customer: Mapped[Customer] = relationship()
    customer_store: Mapped[CustomerStore] = relationship()
    employee: Mapped[Employee] = relationship()


class QuoteItem(LegacyBase):
    __tablename__ = "QuoteItems"
    id: Mapped[int] = mapped_column(LegacyId, primary_key=True)
    product_units: Mapped[int] = mapped_column(Integer, default=0)
    product_price: Mapped[float] = mapped_column(Float, default=0.0)
    discount: Mapped[float] = mapped_column(Float, default=0.0)
    total: Mapped[float] = mapped_column(Float, default=0.0)
    quote_id: Mapped[int] = mapped_column(ForeignKey("Quotes.id"))
    product_id: Mapped[int] = mapped_column(ForeignKey("Products.id"))

    quote: Mapped[Quote] = relationship()
    product: Mapped[Product] = relationship()


class CustomerEmployee(LegacyBase):
    __tablename__ = "CustomerEmployees"
    id: Mapped[int] = mapped_column(LegacyId, primary_key=True)
    prefix: Mapped[int] = mapped_column(Integer, default=0)
    first_name: Mapped[str] = mapped_column(String(100))
    last_name: Mapped[str] = mapped_column(String(100))
    full_name: Mapped[str] = mapped_column(String(200))
    position: Mapped[str | None] = mapped_column(String(100))
    email: Mapped[str | None] = mapped_column(String(200))
    mobile_phone: Mapped[str | None] = mapped_column(String(50))
    is_purchase_authority: Mapped[bool] = mapped_column(Boolean, default=False)
    picture_id: Mapped[int] = mapped_column(ForeignKey("Pictures.id"))
    customer_id: Mapped[int] = mapped_column(ForeignKey("Customers.id"))
    customer_store_id: Mapped[int] = mapped_column(ForeignKey("CustomerStores.id"))

    picture: Mapped[Picture] = relationship()
    customer: Mapped[Customer] = relationship()
    customer_store: Mapped[CustomerStore] = relationship()


class CustomerCommunication(LegacyBase):
    __tablename__ = "CustomerCommunications"
    id: Mapped[int] = mapped_column(LegacyId, primary_key=True)
    date: Mapped[datetime | None] = mapped_column(DateTime)
    purpose: Mapped[str | None] = mapped_column(Text)
    type: Mapped[str | None] = mapped_column(String(50))
    employee_id: Mapped[int] = mapped_column(ForeignKey("Employees.id"))
    customer_employee_id: Mapped[int] = mapped_column(ForeignKey("CustomerEmployees.id"))

    employee: Mapped[Employee] = relationship()
    customer_employee: Mapped[CustomerEmployee] = relationship()


employee_task_assignments = Table(
    "EmployeeTaskAssignments",
    LegacyBase.metadata,
    Column("task_id", ForeignKey("EmployeeTasks.id"), primary_key=True),
    Column("employee_id", ForeignKey("Employees.id"), primary_key=True),
)


class EmployeeTask(LegacyBase):
    __tablename__ = "EmployeeTasks"
    id: Mapped[int] = mapped_column(LegacyId, primary_key=True)
    subject: Mapped[str | None] = mapped_column(String(200))
    description: Mapped[str | None] = mapped_column(Text)
    rtf_text_description: Mapped[str | None] = mapped_column(Text)
    category: Mapped[str | None] = mapped_column(String(50))
    predecessors: Mapped[str | None] = mapped_column(String(200))
    completion: Mapped[int] = mapped_column(Integer, default=0)
    priority: Mapped[int] = mapped_column(Integer, default=1)
    status: Mapped[int] = mapped_column(Integer, default=0)
    follow_up: Mapped[int] = mapped_column(Integer, default=0)
    private: Mapped[bool] = mapped_column(Boolean, default=False)
    reminder: Mapped[bool] = mapped_column(Boolean, default=False)
    reminder_date_time: Mapped[datetime | None] = mapped_column(DateTime)
    start_date: Mapped[datetime | None] = mapped_column(DateTime)
    due_date: Mapped[datetime | None] = mapped_column(DateTime)
    parent_id: Mapped[int | None] = mapped_column(BigInteger)
    attached_collections_changed: Mapped[bool] = mapped_column(Boolean, default=False)
    customer_employee_id: Mapped[int | None] = mapped_column(
        ForeignKey("CustomerEmployees.id"), nullable=True
    )
    owner_id: Mapped[int | None] = mapped_column(ForeignKey("Employees.id"), nullable=True)
    assigned_employee_id: Mapped[int | None] = mapped_column(
        ForeignKey("Employees.id"), nullable=True
    )

    customer_employee: Mapped[CustomerEmployee | None] = relationship()
    owner: Mapped[Employee | None] = relationship(foreign_keys=[owner_id])
    assigned_employee: Mapped[Employee | None] = relationship(foreign_keys=[assigned_employee_id])
    assigned_employees: Mapped[list[Employee]] = relationship(secondary=employee_task_assignments)


class TaskAttachedFile(LegacyBase):
    __tablename__ = "TaskAttachedFiles"
    id: Mapped[int] = mapped_column(LegacyId, primary_key=True)
    name: Mapped[str] = mapped_column(String(260))
    content: Mapped[bytes | None] = mapped_column(LargeBinary)
    employee_task_id: Mapped[int] = mapped_column(ForeignKey("EmployeeTasks.id"))

    employee_task: Mapped[EmployeeTask] = relationship()
