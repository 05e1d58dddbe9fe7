"""
Input validation for auth and employee operations.

Each public ``validate_*`` function takes the raw input mapping from the API
layer and returns a normalized copy (strings trimmed, emails lower-cased,
salary coerced to float, dates parsed) or raises ``ValidationFailed`` listing
every rule the input breaks, in field order.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from datetime import UTC, date, datetime
from typing import Any

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic_core import PydanticCustomError

from .errors import ValidationFailed

GENDER_ENUM = ("Male", "Female", "Other")
MIN_SALARY = 1000
MIN_PASSWORD_LENGTH = 6
MAX_USERNAME_LENGTH = 100


def _reject(*messages: str) -> PydanticCustomError:
    """Fail a field with every rule it broke; the messages travel in the error context."""
    return PydanticCustomError("rule_violation", messages[0], {"messages": list(messages)})


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _required_text(value: Any, message: str) -> str:
    if _is_blank(value):
        raise _reject(message)
    return str(value).strip()


def _optional_text(value: Any) -> str | None:
    if value is None:
        return None
    return str(value).strip()


def _email(value: Any, required: bool = True) -> str:
    """Trimmed, lower-cased email.

    A missing email breaks both the presence and the syntax rule when the
    field is required, and only the syntax rule on a partial update.
    """
    if _is_blank(value):
        if required:
            raise _reject("Email is required", "Email must be valid")
        raise _reject("Email must be valid")
    text = str(value).strip()
    try:
        validate_email(text, check_deliverability=False)
    except EmailNotValidError:
        raise _reject("Email must be valid") from None
    return text.lower()


def _salary(value: Any, required: bool = True) -> float:
    floor_message = f"Salary must be at least {MIN_SALARY}"
    if _is_blank(value):
        if required:
            raise _reject("Salary is required", floor_message)
        raise _reject(floor_message)
    if isinstance(value, bool):
        raise _reject(floor_message)
    try:
        amount = float(value)
    except (TypeError, ValueError):
        raise _reject(floor_message) from None
    if not math.isfinite(amount) or amount < MIN_SALARY:
        raise _reject(floor_message)
    return amount


def _joining_date(value: Any, required: bool = True) -> datetime:
    invalid_message = "Date of joining must be a valid date"
    if _is_blank(value):
        if required:
            raise _reject("Date of joining is required", invalid_message)
        raise _reject(invalid_message)
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    else:
        try:
            parsed = datetime.fromisoformat(str(value).strip())
        except ValueError:
            raise _reject(invalid_message) from None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)


def _gender(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    if text not in GENDER_ENUM:
        raise _reject("Gender must be Male, Female, or Other")
    return text


class LoginRules(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    username_or_email: str | None = Field(
        default=None, alias="usernameOrEmail", validate_default=True
    )
    password: str | None = Field(default=None, validate_default=True)

    @field_validator("username_or_email", mode="before")
    @classmethod
    def check_identifier(cls, v: Any) -> str:
        return _required_text(v, "Username or email is required")

    @field_validator("password", mode="before")
    @classmethod
    def check_password(cls, v: Any) -> str:
        if not isinstance(v, str) or not v:
            raise _reject("Password is required")
        return v


class SignupRules(BaseModel):
    model_config = ConfigDict(extra="ignore")

    username: str | None = Field(default=None, validate_default=True)
    email: str | None = Field(default=None, validate_default=True)
    password: str | None = Field(default=None, validate_default=True)

    @field_validator("username", mode="before")
    @classmethod
    def check_username(cls, v: Any) -> str:
        text = "" if v is None else str(v).strip()
        broken = []
        if not text:
            broken.append("Username is required")
        if not 1 <= len(text) <= MAX_USERNAME_LENGTH:
            broken.append(f"Username must be between 1 and {MAX_USERNAME_LENGTH} characters")
        if broken:
            raise _reject(*broken)
        return text

    @field_validator("email", mode="before")
    @classmethod
    def check_email(cls, v: Any) -> str:
        return _email(v)

    @field_validator("password", mode="before")
    @classmethod
    def check_password(cls, v: Any) -> str:
        short_message = f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
        if not isinstance(v, str) or not v:
            raise _reject("Password is required", short_message)
        if len(v) < MIN_PASSWORD_LENGTH:
            raise _reject(short_message)
        return v


_EMPLOYEE_TEXT_MESSAGES = {
    "first_name": "First name is required",
    "last_name": "Last name is required",
    "designation": "Designation is required",
    "department": "Department is required",
}


class _EmployeeRules(BaseModel):
    """Per-field employee rules shared by the add and update rule sets."""

    model_config = ConfigDict(extra="ignore")

    @field_validator(
        "first_name", "last_name", "designation", "department", mode="before", check_fields=False
    )
    @classmethod
    def check_text(cls, v: Any, info) -> str:
        return _required_text(v, _EMPLOYEE_TEXT_MESSAGES[info.field_name])

    @field_validator("email", mode="before", check_fields=False)
    @classmethod
    def check_email(cls, v: Any) -> str:
        return _email(v)

    @field_validator("gender", mode="before", check_fields=False)
    @classmethod
    def check_gender(cls, v: Any) -> str | None:
        return _gender(v)

    @field_validator("salary", mode="before", check_fields=False)
    @classmethod
    def check_salary(cls, v: Any) -> float:
        return _salary(v)

    @field_validator("date_of_joining", mode="before", check_fields=False)
    @classmethod
    def check_date_of_joining(cls, v: Any) -> datetime:
        return _joining_date(v)

    @field_validator("employee_photo", mode="before", check_fields=False)
    @classmethod
    def check_photo(cls, v: Any) -> str | None:
        return _optional_text(v)


class AddEmployeeRules(_EmployeeRules):
    first_name: str | None = Field(default=None, validate_default=True)
    last_name: str | None = Field(default=None, validate_default=True)
    email: str | None = Field(default=None, validate_default=True)
    gender: str | None = None
    designation: str | None = Field(default=None, validate_default=True)
    salary: float | None = Field(default=None, validate_default=True)
    date_of_joining: datetime | None = Field(default=None, validate_default=True)
    department: str | None = Field(default=None, validate_default=True)
    employee_photo: str | None = None


class UpdateEmployeeRules(_EmployeeRules):
    """Rules only run for fields the caller actually supplied.

    A supplied null or blank email, salary or date breaks only the format
    rule; there is no presence rule on a partial update.
    """

    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    gender: str | None = None
    designation: str | None = None
    salary: float | None = None
    date_of_joining: datetime | None = None
    department: str | None = None
    employee_photo: str | None = None

    @field_validator("email", mode="before")
    @classmethod
    def check_email(cls, v: Any) -> str:
        return _email(v, required=False)

    @field_validator("salary", mode="before")
    @classmethod
    def check_salary(cls, v: Any) -> float:
        return _salary(v, required=False)

    @field_validator("date_of_joining", mode="before")
    @classmethod
    def check_date_of_joining(cls, v: Any) -> datetime:
        return _joining_date(v, required=False)


def _run(rules: type[BaseModel], data: Mapping[str, Any] | None) -> BaseModel:
    try:
        return rules.model_validate(dict(data or {}))
    except ValidationError as e:
        messages: list[str] = []
        for error in e.errors():
            messages.extend((error.get("ctx") or {}).get("messages") or [error["msg"]])
        raise ValidationFailed(messages) from e


def validate_login_input(data: Mapping[str, Any] | None) -> dict[str, Any]:
    """Validate login arguments; returns ``username_or_email`` and ``password``."""
    return _run(LoginRules, data).model_dump()


def validate_signup_input(data: Mapping[str, Any] | None) -> dict[str, Any]:
    return _run(SignupRules, data).model_dump()


def validate_add_employee_input(data: Mapping[str, Any] | None) -> dict[str, Any]:
    return _run(AddEmployeeRules, data).model_dump()


def validate_update_employee_input(data: Mapping[str, Any] | None) -> dict[str, Any]:
    """Validate a partial update.

    Only keys present in ``data`` appear in the result; an explicit ``None`` is
    kept for the optional fields (gender, employee_photo) to clear them.
    """
    rules = _run(UpdateEmployeeRules, data)
    return rules.model_dump(include=rules.model_fields_set)
