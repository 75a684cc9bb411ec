"""Explicit legacy literal -> target enum tables.

Each enumerated target field has exactly one table. Lookups are exact: an
integer literal must be a key of its table, and a state code must match a
``StateEnum`` value character for character. Anything else is a
``TransformError``.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Generic, TypeVar

from OutlookMigrator.errors import TransformError
from OutlookMigrator.models import (
    CustomerStatus,
    EmployeeDepartment,
    EmployeeStatus,
    EmployeeTaskFollowUp,
    EmployeeTaskPriority,
    EmployeeTaskStatus,
    EvaluationRating,
    PersonPrefix,
    ProductCategory,
    ShipmentCourier,
    ShipmentStatus,
    StateEnum,
)

E = TypeVar("E", bound=Enum)


@dataclass(frozen=True)
class EnumMapping(Generic[E]):
    name: str
    table: Mapping[Any, E]

    def coerce(self, value: Any, *, entity_type: str, field: str) -> E:
        # bool is an int subclass; a True literal is never a valid enum code
        if isinstance(value, bool):
            raise TransformError(entity_type, field, value, f"not a {self.name} literal")
        try:
            return self.table[value]
        except (KeyError, TypeError):
            raise TransformError(entity_type, field, value, f"unmapped {self.name}") from None


def _table(pairs: dict[Any, E]) -> Mapping[Any, E]:
    return MappingProxyType(dict(pairs))


DEPARTMENT = EnumMapping(
    "EmployeeDepartment",
    _table(
        {
            1: EmployeeDepartment.sales,
            2: EmployeeDepartment.support,
            3: EmployeeDepartment.shipping,
            4: EmployeeDepartment.engineering,
            5: EmployeeDepartment.human_resources,
            6: EmployeeDepartment.management,
            7: EmployeeDepartment.it,
        }
    ),
)

EMPLOYEE_STATUS = EnumMapping(
    "EmployeeStatus",
    _table(
        {
            0: EmployeeStatus.salaried,
            1: EmployeeStatus.commission,
            2: EmployeeStatus.contract,
            3: EmployeeStatus.terminated,
            4: EmployeeStatus.on_leave,
        }
    ),
)

PREFIX = EnumMapping(
    "PersonPrefix",
    _table(
        {
            0: PersonPrefix.dr,
            1: PersonPrefix.mr,
            2: PersonPrefix.ms,
            3: PersonPrefix.miss,
            4: PersonPrefix.mrs,
        }
    ),
)

CUSTOMER_STATUS = EnumMapping(
    "CustomerStatus",
    _table({0: CustomerStatus.active, 1: CustomerStatus.suspended}),
)

PRODUCT_CATEGORY = EnumMapping(
    "ProductCategory",
    _table(
        {
            0: ProductCategory.automation,
            1: ProductCategory.monitors,
            2: ProductCategory.projectors,
            3: ProductCategory.televisions,
            4: ProductCategory.video_players,
        }
    ),
)

SHIPMENT_COURIER = EnumMapping(
    "ShipmentCourier",
    _table(
        {
            0: ShipmentCourier.none,
            1: ShipmentCourier.fedex,
            2: ShipmentCourier.ups,
            3: ShipmentCourier.dhl,
        }
    ),
)

SHIPMENT_STATUS = EnumMapping(
    "ShipmentStatus",
    _table(
        {
            0: ShipmentStatus.awaiting,
            1: ShipmentStatus.transit,
            2: ShipmentStatus.received,
        }
    ),
)

EVALUATION_RATING = EnumMapping(
    "EvaluationRating",
    _table(
        {
            0: EvaluationRating.unset,
            1: EvaluationRating.good,
            2: EvaluationRating.average,
            3: EvaluationRating.poor,
        }
    ),
)

TASK_STATUS = EnumMapping(
    "EmployeeTaskStatus",
    _table(
        {
            0: EmployeeTaskStatus.not_started,
            1: EmployeeTaskStatus.completed,
            2: EmployeeTaskStatus.in_progress,
            3: EmployeeTaskStatus.need_assistance,
            4: EmployeeTaskStatus.deferred,
        }
    ),
)

TASK_PRIORITY = EnumMapping(
    "EmployeeTaskPriority",
    _table(
        {
            0: EmployeeTaskPriority.low,
            1: EmployeeTaskPriority.normal,
            2: EmployeeTaskPriority.high,
            3: EmployeeTaskPriority.urgent,
        }
    ),
)

TASK_FOLLOW_UP = EnumMapping(
    "EmployeeTaskFollowUp",
    _table(
        {
            0: EmployeeTaskFollowUp.never,
            1: EmployeeTaskFollowUp.today,
            2: EmployeeTaskFollowUp.tomorrow,
            3: EmployeeTaskFollowUp.this_week,
            4: EmployeeTaskFollowUp.next_week,
            5: EmployeeTaskFollowUp.no_date,
            6: EmployeeTaskFollowUp.custom,
        }
    ),
)

STATE = EnumMapping("StateEnum", _table({s.value: s for s in StateEnum}))
