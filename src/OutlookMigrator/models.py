# models.py

from __future__ import annotations

import enum
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
from sqlalchemy import Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from OutlookMigrator.db import Base


class StateEnum(str, enum.Enum):
    # USPS order, alphabetical by state name. The ordinal is State.source_id; do not reorder
    AL = "AL"
    AK = "AK"
    AZ = "AZ"
    AR = "AR"
    CA = "CA"
    CO = "CO"
    CT = "CT"
    DE = "DE"
    DC = "DC"
    FL = "FL"
    GA = "GA"
    HI = "HI"
    ID = "ID"
    IL = "IL"
    IN = "IN"
    IA = "IA"
    KS = "KS"
    KY = "KY"
    LA = "LA"
    ME = "ME"
    MD = "MD"
    MA = "MA"
    MI = "MI"
    MN = "MN"
    MS = "MS"
    MO = "MO"
    MT = "MT"
    NE = "NE"
    NV = "NV"
    NH = "NH"
    NJ = "NJ"
    NM = "NM"
    NY = "NY"
    NC = "NC"
    ND = "ND"
    OH = "OH"
    OK = "OK"
    OR = "OR"
    PA = "PA"
    RI = "RI"
    SC = "SC"
    SD = "SD"
    TN = "TN"
    TX = "TX"
    UT = "UT"
    VT = "VT"
    VA = "VA"
    WA = "WA"
    WV = "WV"
    WI = "WI"
    WY = "WY"

    @property
    def ordinal(self) -> int:
        return list(StateEnum).index(self)


class EmployeeDepartment(str, enum.Enum):
    sales = "sales"
    support = "support"
    shipping = "shipping"
    engineering = "engineering"
    human_resources = "human_resources"
    management = "management"
    it = "it"


class EmployeeStatus(str, enum.Enum):
    salaried = "salaried"
    commission = "commission"
    contract = "contract"
    terminated = "terminated"
    on_leave = "on_leave"


class PersonPrefix(str, enum.Enum):
    dr = "dr"
    mr = "mr"
    ms = "ms"
    miss = "miss"
    mrs = "mrs"


class CustomerStatus(str, enum.Enum):
    active = "active"
    suspended = "suspended"


class ProductCategory(str, enum.Enum):
    automation = "automation"
    monitors = "monitors"
    projectors = "projectors"
    televisions = "televisions"
    video_players = "video_players"


class ShipmentCourier(str, enum.Enum):
    none = "none"
    fedex = "fedex"
    ups = "ups"
    dhl = "dhl"


class ShipmentStatus(str, enum.Enum):
    awaiting = "awaiting"
    transit = "transit"
    received = "received"


class EvaluationRating(str, enum.Enum):
    unset = "unset"
    good = "good"
    average = "average"
    poor = "poor"


class Raise(str, enum.Enum):
    no = "no"
    yes = "yes"


class Bonus(str, enum.Enum):
    no = "no"
    yes = "yes"


class EmployeeTaskStatus(str, enum.Enum):
    not_started = "not_started"
    completed = "completed"
    in_progress = "in_progress"
    need_assistance = "need_assistance"
    deferred = "deferred"


class EmployeeTaskPriority(str, enum.Enum):
    low = "low"
    normal = "normal"
    high = "high"
    urgent = "urgent"


class EmployeeTaskFollowUp(str, enum.Enum):
    never = "never"
    today = "today"
    tomorrow = "tomorrow"
    this_week = "this_week"
    next_week = "next_week"
    no_date = "no_date"
    custom = "custom"


class MigratedMixin:
    """Columns shared by every migrated entity."""

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    # Legacy surrogate key; only meaningful while correlating an import run
    source_id: Mapped[int | None] = mapped_column(BigInteger, index=True, nullable=True)


class Crest(MigratedMixin, Base):
    __tablename__ = "crests"
    city_name: Mapped[str | None] = mapped_column(String(100))
    large_image: Mapped[bytes | None] = mapped_column(LargeBinary)
    small_image: Mapped[bytes | None] = mapped_column(LargeBinary)


class State(MigratedMixin, Base):
    __tablename__ = "states"
    short_name: Mapped[StateEnum] = mapped_column(SAEnum(StateEnum), unique=True)
    long_name: Mapped[str | None] = mapped_column(String(100))
    large_flag: Mapped[bytes | None] = mapped_column(LargeBinary)
    small_flag: Mapped[bytes | None] = mapped_column(LargeBinary)


class Customer(MigratedMixin, Base):
    __tablename__ = "customers"
    name: Mapped[str] = mapped_column(String(200), index=True)
    status: Mapped[CustomerStatus] = mapped_column(SAEnum(CustomerStatus))
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
    billing_address_state: Mapped[StateEnum] = mapped_column(SAEnum(StateEnum))
    billing_address_zip_code: Mapped[str | None] = mapped_column(String(20))
    billing_address_latitude: Mapped[float | None] = mapped_column(Float)
    billing_address_longitude: Mapped[float | None] = mapped_column(Float)
    home_office_line: Mapped[str | None] = mapped_column(String(200))
    home_office_city: Mapped[str | None] = mapped_column(String(100))
    home_office_state: Mapped[StateEnum] = mapped_column(SAEnum(StateEnum))
    home_office_zip_code: Mapped[str | None] = mapped_column(String(20))
    home_office_latitude: Mapped[float | None] = mapped_column(Float)
    home_office_longitude: Mapped[float | None] = mapped_column(Float)


class Picture(MigratedMixin, Base):
    __tablename__ = "pictures"
    data: Mapped[bytes | None] = mapped_column(LargeBinary)


class Probation(MigratedMixin, Base):
    __tablename__ = "probations"
    reason: Mapped[str | None] = mapped_column(Text)


class CustomerStore(MigratedMixin, Base):
    __tablename__ = "customer_stores"
    customer_id: Mapped[int] = mapped_column(ForeignKey("customers.id"), index=True)
    crest_id: Mapped[int | None] = mapped_column(ForeignKey("crests.id"), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(50))
    fax: Mapped[str | None] = mapped_column(String(50))
    location: Mapped[str | None] = mapped_column(String(200))
    line: Mapped[str | None] = mapped_column(String(200))
    city: Mapped[str | None] = mapped_column(String(100))
    state: Mapped[StateEnum] = mapped_column(SAEnum(StateEnum))
    zip_code: Mapped[str | None] = mapped_column(String(20))
    latitude: Mapped[float | None] = mapped_column(Float)
    longitude: Mapped[float | None] = mapped_column(Float)
    annual_sales: Mapped[float | None] = mapped_column(Float)
    square_footage: Mapped[int | None] = mapped_column(Integer)
    total_employees: Mapped[int] = mapped_column(Integer, default=0)

    customer: Mapped[Customer] = relationship()
    crest: Mapped[Crest | None] = relationship()


class Employee(MigratedMixin, Base):
    __tablename__ = "employees"
    first_name: Mapped[str] = mapped_column(String(100))
    last_name: Mapped[str] = mapped_column(String(100))
    full_name: Mapped[str] = mapped_column(String(200), index=True)
    prefix: Mapped[PersonPrefix] = mapped_column(SAEnum(PersonPrefix))
    title: Mapped[str | None] = mapped_column(String(100))
    department: Mapped[EmployeeDepartment] = mapped_column(SAEnum(EmployeeDepartment))
    status: Mapped[EmployeeStatus] = mapped_column(SAEnum(EmployeeStatus))
    email: Mapped[str | None] = mapped_column(String(200))
    skype: Mapped[str | None] = mapped_column(String(100))
    mobile_phone: Mapped[str | None] = mapped_column(String(50))
    home_phone: Mapped[str | None] = mapped_column(String(50))
    birth_date: Mapped[datetime | None] = mapped_column(DateTime)
    hire_date: Mapped[datetime | None] = mapped_column(DateTime)
    address: Mapped[str | None] = mapped_column(String(200))
    city: Mapped[str | None] = mapped_column(String(100))
    state: Mapped[StateEnum] = mapped_column(SAEnum(StateEnum))
    zip_code: Mapped[str | None] = mapped_column(String(20))
    address_latitude: Mapped[float | None] = mapped_column(Float)
    address_longitude: Mapped[float | None] = mapped_column(Float)
    personal_profile: Mapped[str | None] = mapped_column(Text)
    picture_id: Mapped[int | None] = mapped_column(ForeignKey("pictures.id"), nullable=True)
    probation_reason_id: Mapped[int | None] = mapped_column(
        ForeignKey("probations.id"), nullable=True
    )

    picture: Mapped[Picture | None] = relationship()
    probation_reason: Mapped[Probation | None] = relationship()


class Evaluation(MigratedMixin, Base):
    __tablename__ = "evaluations"
    subject: Mapped[str | None] = mapped_column(String(200))
    description: Mapped[str | None] = mapped_column(Text)
    start_on: Mapped[datetime] = mapped_column(DateTime)
    end_on: Mapped[datetime] = mapped_column(DateTime)
    rating: Mapped[EvaluationRating] = mapped_column(SAEnum(EvaluationRating))
    raise_: Mapped[Raise] = mapped_column("raise", SAEnum(Raise), default=Raise.no)
    bonus: Mapped[Bonus] = mapped_column(SAEnum(Bonus), default=Bonus.no)
    employee_id: Mapped[int | None] = mapped_column(ForeignKey("employees.id"), nullable=True)
    manager_id: Mapped[int] = mapped_column(ForeignKey("employees.id"))

    employee: Mapped[Employee | None] = relationship(foreign_keys=[employee_id])
    manager: Mapped[Employee] = relationship(foreign_keys=[manager_id])


class Product(MigratedMixin, Base):
    __tablename__ = "products"
    name: Mapped[str] = mapped_column(String(200), index=True)
    description: Mapped[str | None] = mapped_column(Text)
    category: Mapped[ProductCategory] = mapped_column(SAEnum(ProductCategory))
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
    engineer_id: Mapped[int] = mapped_column(ForeignKey("employees.id"))
    support_id: Mapped[int] = mapped_column(ForeignKey("employees.id"))
    primary_image_id: Mapped[int] = mapped_column(ForeignKey("pictures.id"))

    engineer: Mapped[Employee] = relationship(foreign_keys=[engineer_id])
    support: Mapped[Employee] = relationship(foreign_keys=[support_id])
    primary_image: Mapped[Picture] = relationship()


class ProductImage(MigratedMixin, Base):
    __tablename__ = "product_images"
    product_id: Mapped[int] = mapped_column(ForeignKey("products.id"), index=True)
    picture_id: Mapped[int] = mapped_column(ForeignKey("pictures.id"))

    product: Mapped[Product] = relationship()
    picture: Mapped[Picture] = relationship()


class ProductCatalog(MigratedMixin, Base):
    __tablename__ = "product_catalogs"
    product_id: Mapped[int] = mapped_column(ForeignKey("products.id"), index=True)
    pdf: Mapped[bytes | None] = mapped_column(LargeBinary)

    product: Mapped[Product] = relationship()


class Order(MigratedMixin, Base):
    __tablename__ = "orders"
    # Overridden by the cloner, so never copied verbatim
    invoice_number: Mapped[str] = mapped_column(String(50), index=True, info={"clone": False})
    order_date: Mapped[datetime] = mapped_column(DateTime, info={"clone": False})
    ship_date: Mapped[datetime | None] = mapped_column(DateTime)
    po_number: Mapped[str | None] = mapped_column(String(50))
    order_terms: Mapped[str | None] = mapped_column(Text)
    comments: Mapped[str | None] = mapped_column(Text)
    sale_amount: Mapped[float] = mapped_column(Float, default=0.0)
    shipping_amount: Mapped[float] = mapped_column(Float, default=0.0)
    total_amount: Mapped[float] = mapped_column(Float, default=0.0)
    payment_total: Mapped[float] = mapped_column(Float, default=0.0)
    refund_total: Mapped[float] = mapped_column(Float, default=0.0)
    shipment_courier: Mapped[ShipmentCourier] = mapped_column(SAEnum(ShipmentCourier))
    shipment_status: Mapped[ShipmentStatus] = mapped_column(SAEnum(ShipmentStatus))
    employee_id: Mapped[int] = mapped_column(ForeignKey("employees.id"))
    customer_id: Mapped[int] = mapped_column(ForeignKey("customers.id"), index=True)
    store_id: Mapped[int] = mapped_column(ForeignKey("customer_stores.id"))

    employee: Mapped[Employee] = relationship()
    customer: Mapped[Customer] = relationship()
    store: Mapped[CustomerStore] = relationship()
    items: Mapped[list[OrderItem]] = relationship(back_populates="order")


class OrderItem(MigratedMixin, Base):
    __tablename__ = "order_items"
    product_units: Mapped[int] = mapped_column(Integer, default=0)
    product_price: Mapped[float] = mapped_column(Float, default=0.0)
    discount: Mapped[float] = mapped_column(Float, default=0.0)
    total: Mapped[float] = mapped_column(Float, default=0.0)
    order_id: Mapped[int] = mapped_column(ForeignKey("orders.id", ondelete="CASCADE"), index=True)
    product_id: Mapped[int] = mapped_column(ForeignKey("products.id"))

    order: Mapped[Order] = relationship(back_populates="items")
    product: Mapped[Product] = relationship()


class Quote(MigratedMixin, Base):
    __tablename__ = "quotes"
    number: Mapped[str | None] = mapped_column(String(50), index=True)
    date: Mapped[datetime | None] = mapped_column(DateTime)
    opportunity: Mapped[float | None] = mapped_column(Float)
    sub_total: Mapped[float] = mapped_column(Float, default=0.0)
    shipping_amount: Mapped[float] = mapped_column(Float, default=0.0)
    total: Mapped[float] = mapped_column(Float, default=0.0)
    customer_id: Mapped[int] = mapped_column(ForeignKey("customers.id"), index=True)
    customer_store_id: Mapped[int] = mapped_column(ForeignKey("customer_stores.id"))
    employee_id: Mapped[int] = mapped_column(ForeignKey("employees.id"))

    customer: Mapped[Customer] = relationship()
    customer_store: Mapped[CustomerStore] = relationship()
    employee: Mapped[Employee] = relationship()
    items: Mapped[list[QuoteItem]] = relationship(back_populates="quote")


class QuoteItem(MigratedMixin, Base):
    __tablename__ = "quote_items"
    product_units: Mapped[int] = mapped_column(Integer, default=0)
    product_price: Mapped[float] = mapped_column(Float, default=0.0)
    discount: Mapped[float] = mapped_column(Float, default=0.0)
    total: Mapped[float] = mapped_column(Float, default=0.0)
    quote_id: Mapped[int] = mapped_column(ForeignKey("quotes.id", ondelete="CASCADE"), index=True)
    product_id: Mapped[int] = mapped_column(ForeignKey("products.id"))

    quote: Mapped[Quote] = relationship(back_populates="items")
    product: Mapped[Product] = relationship()


class CustomerEmployee(MigratedMixin, Base):
    __tablename__ = "customer_employees"
    prefix: Mapped[PersonPrefix] = mapped_column(SAEnum(PersonPrefix))
    first_name: Mapped[str] = mapped_column(String(100))
    last_name: Mapped[str] = mapped_column(String(100))
    full_name: Mapped[str] = mapped_column(String(200))
    position: Mapped[str | None] = mapped_column(String(100))
    email: Mapped[str | None] = mapped_column(String(200))
    mobile_phone: Mapped[str | None] = mapped_column(String(50))
    is_purchase_authority: Mapped[bool] = mapped_column(Boolean, default=False)
    picture_id: Mapped[int] = mapped_column(ForeignKey("pictures.id"))
    customer_id: Mapped[int] = mapped_column(ForeignKey("customers.id"), index=True)
    customer_store_id: Mapped[int] = mapped_column(ForeignKey("customer_stores.id"))

    picture: Mapped[Picture] = relationship()
    customer: Mapped[Customer] = relationship()
    customer_store: Mapped[CustomerStore] = relationship()


class CustomerCommunication(MigratedMixin, Base):
    __tablename__ = "customer_communications"
    date: Mapped[datetime | None] = mapped_column(DateTime)
    purpose: Mapped[str | None] = mapped_column(Text)
    type: Mapped[str | None] = mapped_column(String(50))
    employee_id: Mapped[int] = mapped_column(ForeignKey("employees.id"))
    customer_employee_id: Mapped[int] = mapped_column(ForeignKey("customer_employees.id"))

    employee: Mapped[Employee] = relationship()
    customer_employee: Mapped[CustomerEmployee] = relationship()


employee_task_assignments = Table(
    "employee_task_assignments",
    Base.metadata,
    Column("task_id", ForeignKey("employee_tasks.id", ondelete="CASCADE"), primary_key=True),
    Column("employee_id", ForeignKey("employees.id", ondelete="CASCADE"), primary_key=True),
)


class EmployeeTask(MigratedMixin, Base):
    __tablename__ = "employee_tasks"
    subject: Mapped[str | None] = mapped_column(String(200))
    description: Mapped[str | None] = mapped_column(Text)
    rtf_text_description: Mapped[str | None] = mapped_column(Text)
    category: Mapped[str | None] = mapped_column(String(50))
    predecessors: Mapped[str | None] = mapped_column(String(200))
    completion: Mapped[int] = mapped_column(Integer, default=0)
    priority: Mapped[EmployeeTaskPriority] = mapped_column(SAEnum(EmployeeTaskPriority))
    status: Mapped[EmployeeTaskStatus] = mapped_column(SAEnum(EmployeeTaskStatus))
    follow_up: Mapped[EmployeeTaskFollowUp] = mapped_column(SAEnum(EmployeeTaskFollowUp))
    private: Mapped[bool] = mapped_column(Boolean, default=False)
    reminder: Mapped[bool] = mapped_column(Boolean, default=False)
    reminder_date_time: Mapped[datetime | None] = mapped_column(DateTime)
    start_date: Mapped[datetime | None] = mapped_column(DateTime)
    due_date: Mapped[datetime | None] = mapped_column(DateTime)
    # Legacy parent task id, kept verbatim (not a relationship)
    parent_id: Mapped[int | None] = mapped_column(BigInteger)
    attached_collections_changed: Mapped[bool] = mapped_column(Boolean, default=False)
    customer_employee_id: Mapped[int | None] = mapped_column(
        ForeignKey("customer_employees.id"), nullable=True
    )
    owner_id: Mapped[int | None] = mapped_column(ForeignKey("employees.id"), nullable=True)
    assigned_employee_id: Mapped[int | None] = mapped_column(
        ForeignKey("employees.id"), nullable=True
    )

    customer_employee: Mapped[CustomerEmployee | None] = relationship()
    owner: Mapped[Employee | None] = relationship(foreign_keys=[owner_id])
    assigned_employee: Mapped[Employee | None] = relationship(foreign_keys=[assigned_employee_id])
    assigned_employees: Mapped[list[Employee]] = relationship(secondary=employee_task_assignments)


class FileData(Base):
    __tablename__ = "file_data"
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    file_name: Mapped[str] = mapped_column(String(260))
    content: Mapped[bytes | None] = mapped_column(LargeBinary)


class TaskAttachedFile(MigratedMixin, Base):
    __tablename__ = "task_attached_files"
    employee_task_id: Mapped[int] = mapped_column(ForeignKey("employee_tasks.id"), index=True)
    file_id: Mapped[int] = mapped_column(ForeignKey("file_data.id", ondelete="CASCADE"))

    employee_task: Mapped[EmployeeTask] = relationship()
    # Owned: the attachment is the only holder of its FileData row
    file: Mapped[FileData] = relationship(cascade="all, delete-orphan", single_parent=True)
