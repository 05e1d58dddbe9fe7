from __future__ import annotations

import dataclasses
from typing import TYPE_CHECKING, Any

import strawberry

from ...logging import get_logger
from ..context import get_services
from ..errors import client_errors
from ..types.employee import Employee

if TYPE_CHECKING:
    from ..mutations.root import AddEmployeeInput, UpdateEmployeeInput

logger = get_logger(__name__)


def supplied_fields(input: Any) -> dict[str, Any]:
    """Input fields the client actually sent; UNSET ones are dropped."""
    return {
        field.name: getattr(input, field.name)
        for field in dataclasses.fields(input)
        if getattr(input, field.name) is not strawberry.UNSET
    }


# Query resolvers
async def resolve_all_employees(info: strawberry.Info) -> list[Employee]:
    services = get_services(info)
    with client_errors():
        views = await services.employees.get_all_employees()
    return [Employee.from_view(view) for view in views]


async def resolve_employee_by_eid(info: strawberry.Info, eid: strawberry.ID) -> Employee | None:
    services = get_services(info)
    with client_errors():
        view = await services.employees.get_employee_by_eid(eid)
    if view is None:
        logger.info("Employee not found", employee_id=str(eid))
        return None
    return Employee.from_view(view)


async def resolve_employees_by_designation_or_department(
    info: strawberry.Info, designation: str | None, department: str | None
) -> list[Employee]:
    services = get_services(info)
    with client_errors():
        views = await services.employees.get_employees_by_designation_or_department(
            designation=designation, department=department
        )
    return [Employee.from_view(view) for view in views]


# Mutation resolvers
async def add_employee(info: strawberry.Info, input: AddEmployeeInput) -> Employee:
    services = get_services(info)
    with client_errors():
        view = await services.employees.add_employee(supplied_fields(input))
    return Employee.from_view(view)


async def update_employee_by_eid(
    info: strawberry.Info, eid: strawberry.ID, input: UpdateEmployeeInput
) -> Employee:
    services = get_services(info)
    with client_errors():
        view = await services.employees.update_employee_by_eid(eid, supplied_fields(input))
    return Employee.from_view(view)


async def delete_employee_by_eid(info: strawberry.Info, eid: strawberry.ID) -> Employee | None:
    services = get_services(info)
    with client_errors():
        view = await services.employees.delete_employee_by_eid(eid)
    return Employee.from_view(view)
