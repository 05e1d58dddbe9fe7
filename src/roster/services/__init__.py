"""Operation layer composing validation, credentials and storage."""

from .auth import AuthPayload, AuthService
from .employees import EmployeeService
from .views import AccountView, EmployeeView, account_view, employee_view

__all__ = [
    "AccountView",
    "AuthPayload",
    "AuthService",
    "EmployeeService",
    "EmployeeView",
    "account_view",
    "employee_view",
]
