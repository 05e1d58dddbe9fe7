from __future__ import annotations

from typing import TYPE_CHECKING

import strawberry

from ..context import get_services
from ..errors import client_errors
from ..types.user import AuthPayload, User

if TYPE_CHECKING:
    from ..mutations.root import SignupInput


def _payload(result) -> AuthPayload:
    return AuthPayload(token=result["token"], user=User.from_view(result["account"]))


async def signup(info: strawberry.Info, input: SignupInput) -> AuthPayload:
    services = get_services(info)
    with client_errors():
        result = await services.auth.signup(
            {"username": input.username, "email": input.email, "password": input.password}
        )
    return _payload(result)


async def login(info: strawberry.Info, username_or_email: str, password: str) -> AuthPayload:
    services = get_services(info)
    with client_errors():
        result = await services.auth.login(username_or_email, password)
    return _payload(result)
