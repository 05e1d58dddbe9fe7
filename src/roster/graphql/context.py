"""
Per-request GraphQL context
"""

from dataclasses import dataclass

import strawberry

from ..auth.credentials import CredentialCodec
from ..database.gateway import PersistenceGateway
from ..services import AuthService, EmployeeService


@dataclass(frozen=True)
class Services:
    """Operation services shared by every request; built once at startup."""

    auth: AuthService
    employees: EmployeeService


def build_services(gateway: PersistenceGateway, codec: CredentialCodec) -> Services:
    return Services(
        auth=AuthService(gateway, codec),
        employees=EmployeeService(gateway),
    )


def get_services(info: strawberry.Info) -> Services:
    services = info.context.get("services")
    if services is None:
        raise RuntimeError("Services not found in GraphQL context")
    return services
