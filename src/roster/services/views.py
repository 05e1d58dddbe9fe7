"""Public response shapes for stored documents."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any, TypedDict


class AccountView(TypedDict):
    id: str
    username: str
    email: str
    createdAt: str
    updatedAt: str


class EmployeeView(TypedDict):
    id: str
    first_name: str
    last_name: str
    email: str
    gender: str | None
    designation: str
    salary: float
    date_of_joining: str
    department: str
    employee_photo: str | None
    createdAt: str
    updatedAt: str


def to_iso(value: Any) -> str:
    """Render a stored timestamp as ISO-8601; naive values are taken as UTC."""
    if value is None:
        return ""
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.isoformat()
    return str(value)


def account_view(document: dict[str, Any]) -> AccountView:
    # The password hash never leaves the service layer
    return AccountView(
        id=str(document["_id"]),
        username=document["username"],
        email=document["email"],
        createdAt=to_iso(document.get("createdAt")),
        updatedAt=to_iso(document.get("updatedAt")),
    )


def employee_view(document: dict[str, Any]) -> EmployeeView:
    return EmployeeView(
        id=str(document["_id"]),
        first_name=document["first_name"],
        last_name=document["last_name"],
        email=document["email"],
        gender=document.get("gender"),
        designation=document["designation"],
        salary=float(document["salary"]),
        date_of_joining=to_iso(document.get("date_of_joining")),
        department=document["department"],
        employee_photo=document.get("employee_photo"),
        createdAt=to_iso(document.get("createdAt")),
        updatedAt=to_iso(document.get("updatedAt")),
    )
