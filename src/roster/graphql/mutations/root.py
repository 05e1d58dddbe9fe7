"""
Root GraphQL mutation definitions
"""

import strawberry

from ..types.employee import Employee
from ..types.user import AuthPayload


# Input types for mutations
@strawberry.input
class SignupInput:
    """Input for registering an account."""

    username: str
    email: str
    password: str


@strawberry.input
class AddEmployeeInput:
    """Input for creating an employee record."""

    first_name: str
    last_name: str
    email: str
    designation: str
    salary: float
    date_of_joining: str
    department: str
    gender: str | None = None
    employee_photo: str | None = None


@strawberry.input
class UpdateEmployeeInput:
    """Input for a partial employee update; omitted fields are left unchanged."""

    first_name: str | None = strawberry.UNSET
    last_name: str | None = strawberry.UNSET
    email: str | None = strawberry.UNSET
    gender: str | None = strawberry.UNSET
    designation: str | None = strawberry.UNSET
    salary: float | None = strawberry.UNSET
    date_of_joining: str | None = strawberry.UNSET
    department: str | None = strawberry.UNSET
    employee_photo: str | None = strawberry.UNSET


@strawberry.type
class Mutation:
    """Root GraphQL mutation type."""

    @strawberry.mutation
    async def signup(self, info: strawberry.Info, input: SignupInput) -> AuthPayload:
        """Register an account and return a bearer token."""
        from ..resolvers.auth import signup

        return await signup(info, input)

    @strawberry.mutation(name="addEmployee")
    async def add_employee(self, info: strawberry.Info, input: AddEmployeeInput) -> Employee:
        """Create an employee record."""
        from ..resolvers.employee import add_employee

        return await add_employee(info, input)

    @strawberry.mutation(name="updateEmployeeByEid")
    async def update_employee_by_eid(
        self, info: strawberry.Info, eid: strawberry.ID, input: UpdateEmployeeInput
    ) -> Employee:
        """Update the supplied fields of an employee record."""
        from ..resolvers.employee import update_employee_by_eid

        return await update_employee_by_eid(info, eid, input)

    @strawberry.mutation(name="deleteEmployeeByEid")
    async def delete_employee_by_eid(
        self, info: strawberry.Info, eid: strawberry.ID
    ) -> Employee | None:
        """Delete an employee record and return what was removed."""
        from ..resolvers.employee import delete_employee_by_eid

        return await delete_employee_by_eid(info, eid)
