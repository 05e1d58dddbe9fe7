"""
Stored document shape for the accounts and employees collections.

These checks run inside the gateway on every employee write, after the
service-level validators, so a caller that skips validation still cannot
persist a record that breaks the collection's field constraints.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

ACCOUNTS_COLLECTION = "users"
EMPLOYEES_COLLECTION = "employees"

GENDER_VALUES = ("Male", "Female", "Other")
SALARY_FLOOR = 1000

# field -> message when missing or blank
_REQUIRED_EMPLOYEE_FIELDS = {
    "first_name": "First name is required",
    "last_name": "Last name is required",
    "email": "Email is required",
    "designation": "Designation is required",
    "salary": "Salary is required",
    "date_of_joining": "Date of joining is required",
    "department": "Department is required",
}

_TRIMMED_EMPLOYEE_FIELDS = (
    "first_name",
    "last_name",
    "email",
    "designation",
    "department",
    "employee_photo",
)


def normalize_employee_fields(fields: Mapping[str, Any]) -> dict[str, Any]:
    """Trim text fields and lower-case the email, as the collection stores them."""
    normalized = dict(fields)
    for name in _TRIMMED_EMPLOYEE_FIELDS:
        value = normalized.get(name)
        if isinstance(value, str):
            normalized[name] = value.strip()
    if isinstance(normalized.get("email"), str):
        normalized["email"] = normalized["email"].lower()
    return normalized


def check_employee_document(fields: Mapping[str, Any], partial: bool = False) -> list[str]:
    """Return constraint violations for an employee document.

    With ``partial=True`` only the keys present in ``fields`` are checked, as
    for a ``$set`` update.
    """
    errors: list[str] = []

    for name, message in _REQUIRED_EMPLOYEE_FIELDS.items():
        if partial and name not in fields:
            continue
        value = fields.get(name)
        if value is None or (isinstance(value, str) and not value.strip()):
            errors.append(message)

    salary = fields.get("salary")
    if salary is not None:
        if isinstance(salary, bool) or not isinstance(salary, int | float):
            errors.append(f"Salary must be at least {SALARY_FLOOR}")
        elif salary < SALARY_FLOOR:
            errors.append(f"Salary must be at least {SALARY_FLOOR}")

    gender = fields.get("gender")
    if gender is not None and gender not in GENDER_VALUES:
        errors.append("Gender must be Male, Female, or Other")

    return errors
