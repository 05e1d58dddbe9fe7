"""
Employee GraphQL type definitions
"""

import strawberry

from ...services.views import EmployeeView


@strawberry.type
class Employee:
    """Employee record type for GraphQL API."""

    id: strawberry.ID
    first_name: str
    last_name: str
    email: str
    gender: str | None
    designation: str
    salary: float
    date_of_joining: str
    department: str
    employee_photo: str | None
    created_at: str = strawberry.field(name="createdAt")
    updated_at: str = strawberry.field(name="updatedAt")

    @classmethod
    def from_view(cls, view: EmployeeView) -> "Employee":
        return cls(
            id=strawberry.ID(view["id"]),
            first_name=view["first_name"],
            last_name=view["last_name"],
            email=view["email"],
            gender=view["gender"],
            designation=view["designation"],
            salary=view["salary"],
            date_of_joining=view["date_of_joining"],
            department=view["department"],
            employee_photo=view["employee_photo"],
            created_at=view["createdAt"],
            updated_at=view["updatedAt"],
        )
