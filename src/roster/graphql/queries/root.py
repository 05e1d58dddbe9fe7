"""
Root GraphQL query definitions
"""

from typing import Annotated

import strawberry

from ..types.employee import Employee
from ..types.user import AuthPayload


@strawberry.type
class Query:
    """Root GraphQL query type."""

    @strawberry.field
    async def login(
        self,
        info: strawberry.Info,
        username_or_email: Annotated[str, strawberry.argument(name="usernameOrEmail")],
        password: str,
    ) -> AuthPayload:
        """Exchange a username or email and password for a bearer token."""
        from ..resolvers.auth import login

        return await login(info, username_or_email, password)

    @strawberry.field(name="getAllEmployees")
    async def get_all_employees(self, info: strawberry.Info) -> list[Employee]:
        """Get every employee, newest first."""
        from ..resolvers.employee import resolve_all_employees

        return await resolve_all_employees(info)

    @strawberry.field(name="getEmployeeByEid")
    async def get_employee_by_eid(self, info: strawberry.Info, eid: strawberry.ID) -> Employee | None:
        """Get an employee by ID."""
        from ..resolvers.employee import resolve_employee_by_eid

        return await resolve_employee_by_eid(info, eid)

    @strawberry.field(name="getEmployeesByDesignationOrDepartment")
    async def get_employees_by_designation_or_department(
        self,
        info: strawberry.Info,
        designation: str | None = None,
        department: str | None = None,
    ) -> list[Employee]:
        """Search employees by designation or department (case-insensitive substring)."""
        from ..resolvers.employee import resolve_employees_by_designation_or_department

        return await resolve_employees_by_designation_or_department(
            info, designation, department
        )
