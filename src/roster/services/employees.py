"""Employee record operations."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ..database.gateway import PersistenceGateway, is_valid_id
from ..errors import AlreadyExists, BadRequest, InvalidId, NotFound
from ..logging import get_logger
from ..validators import validate_add_employee_input, validate_update_employee_input
from .errors import storage_errors
from .views import EmployeeView, employee_view

logger = get_logger(__name__)

DUPLICATE_EMPLOYEE_MESSAGE = "Employee with this email already exists"


def _check_eid(eid: Any) -> str:
    if not is_valid_id(eid):
        raise InvalidId()
    return str(eid)


class EmployeeService:
    def __init__(self, gateway: PersistenceGateway):
        self.gateway = gateway

    async def add_employee(self, data: Mapping[str, Any]) -> EmployeeView:
        fields = validate_add_employee_input(data)

        if await self.gateway.find_employee_by_email(fields["email"]) is not None:
            raise AlreadyExists(DUPLICATE_EMPLOYEE_MESSAGE)

        with storage_errors(DUPLICATE_EMPLOYEE_MESSAGE):
            employee = await self.gateway.create_employee(fields)

        logger.info("Employee created", employee_id=str(employee["_id"]))
        return employee_view(employee)

    async def update_employee_by_eid(self, eid: Any, data: Mapping[str, Any]) -> EmployeeView:
        """Apply the supplied fields to one employee, leaving the rest as stored.

        Raises:
            InvalidId: If ``eid`` is malformed
            ValidationFailed: If a supplied field breaks its rule
            NotFound: If no employee has ``eid``
            AlreadyExists: If the new email belongs to another employee
        """
        eid = _check_eid(eid)
        changes = validate_update_employee_input(data)

        with storage_errors(DUPLICATE_EMPLOYEE_MESSAGE):
            current = await self.gateway.find_employee_by_id(eid)
        if current is None:
            raise NotFound()

        new_email = changes.get("email")
        if new_email is not None and new_email != current.get("email"):
            other = await self.gateway.find_employee_by_email(new_email)
            if other is not None and other["_id"] != current["_id"]:
                raise AlreadyExists(DUPLICATE_EMPLOYEE_MESSAGE)

        if not changes:
            return employee_view(current)

        with storage_errors(DUPLICATE_EMPLOYEE_MESSAGE):
            updated = await self.gateway.update_employee(eid, changes)
        if updated is None:
            # Deleted between the lookup and the write
            raise NotFound()

        logger.info("Employee updated", employee_id=eid, fields=sorted(changes))
        return employee_view(updated)

    async def delete_employee_by_eid(self, eid: Any) -> EmployeeView:
        eid = _check_eid(eid)

        with storage_errors(DUPLICATE_EMPLOYEE_MESSAGE):
            deleted = await self.gateway.delete_employee(eid)
        if deleted is None:
            raise NotFound()

        logger.info("Employee deleted", employee_id=eid)
        return employee_view(deleted)

    async def get_employee_by_eid(self, eid: Any) -> EmployeeView | None:
        eid = _check_eid(eid)

        with storage_errors(DUPLICATE_EMPLOYEE_MESSAGE):
            employee = await self.gateway.find_employee_by_id(eid)
        return employee_view(employee) if employee is not None else None

    async def get_all_employees(self) -> list[EmployeeView]:
        return [employee_view(doc) for doc in await self.gateway.list_employees()]

    async def get_employees_by_designation_or_department(
        self, designation: str | None = None, department: str | None = None
    ) -> list[EmployeeView]:
        """Case-insensitive substring search; a record matching either filter is returned."""
        designation = designation.strip() if designation else None
        department = department.strip() if department else None
        if not designation and not department:
            raise BadRequest("Provide at least one of designation or department")

        employees = await self.gateway.list_employees(
            designation_pattern=designation or None,
            department_pattern=department or None,
        )
        return [employee_view(doc) for doc in employees]
