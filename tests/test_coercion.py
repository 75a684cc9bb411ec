import pytest

from OutlookMigrator import coercion
from OutlookMigrator.errors import TransformError
from OutlookMigrator.models import (
    EmployeeDepartment,
    EmployeeTaskFollowUp,
    ShipmentStatus,
    StateEnum,
)


def test_department_literals_start_at_one():
    assert coercion.DEPARTMENT.coerce(1, entity_type="Employee", field="department") is (
        EmployeeDepartment.sales
    )
    assert coercion.DEPARTMENT.coerce(7, entity_type="Employee", field="department") is (
        EmployeeDepartment.it
    )
    with pytest.raises(TransformError):
        coercion.DEPARTMENT.coerce(0, entity_type="Employee", field="department")


def test_every_table_is_exhaustive_over_its_enum():
    for mapping in (
        coercion.DEPARTMENT,
        coercion.EMPLOYEE_STATUS,
        coercion.PREFIX,
        coercion.CUSTOMER_STATUS,
        coercion.PRODUCT_CATEGORY,
        coercion.SHIPMENT_COURIER,
        coercion.SHIPMENT_STATUS,
        coercion.EVALUATION_RATING,
        coercion.TASK_STATUS,
        coercion.TASK_PRIORITY,
        coercion.TASK_FOLLOW_UP,
        coercion.STATE,
    ):
        targets = list(mapping.table.values())
        assert len(set(targets)) == len(targets), mapping.name
        assert set(targets) == set(type(targets[0])), mapping.name


def test_unmapped_literal_raises_transform_error():
    with pytest.raises(TransformError) as ei:
        coercion.SHIPMENT_STATUS.coerce(9, entity_type="Order", field="shipment_status")
    err = ei.value
    assert (err.entity_type, err.field, err.value) == ("Order", "shipment_status", 9)


@pytest.mark.parametrize("value", [None, "2", 2.5, True])
def test_non_integer_literals_are_rejected(value):
    with pytest.raises(TransformError):
        coercion.SHIPMENT_STATUS.coerce(value, entity_type="Order", field="shipment_status")


def test_shipment_status_known_literal():
    assert coercion.SHIPMENT_STATUS.coerce(2, entity_type="Order", field="s") is (
        ShipmentStatus.received
    )


def test_follow_up_custom():
    assert coercion.TASK_FOLLOW_UP.coerce(6, entity_type="EmployeeTask", field="f") is (
        EmployeeTaskFollowUp.custom
    )


def test_state_codes_are_exact():
    assert coercion.STATE.coerce("TX", entity_type="Customer", field="s") is StateEnum.TX
    for bad in ("tx", " TX", "Texas", "XX"):
        with pytest.raises(TransformError):
            coercion.STATE.coerce(bad, entity_type="Customer", field="s")


def test_state_ordinals_follow_declaration_order():
    assert StateEnum.AL.ordinal == 0
    assert StateEnum.CA.ordinal == 4
    assert StateEnum.WY.ordinal == len(StateEnum) - 1 == 50
