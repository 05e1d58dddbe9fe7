"""Signup and login."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, TypedDict

from ..auth.credentials import CredentialCodec
from ..database.gateway import PersistenceGateway
from ..errors import AlreadyExists, InvalidCredentials
from ..logging import get_logger
from ..validators import validate_login_input, validate_signup_input
from .errors import storage_errors
from .views import AccountView, account_view

logger = get_logger(__name__)

DUPLICATE_ACCOUNT_MESSAGE = "Username or email already registered"


class AuthPayload(TypedDict):
    token: str
    account: AccountView


class AuthService:
    def __init__(self, gateway: PersistenceGateway, codec: CredentialCodec):
        self.gateway = gateway
        self.codec = codec

    async def signup(self, data: Mapping[str, Any]) -> AuthPayload:
        """Register an account and return a token for it.

        Raises:
            ValidationFailed: If the input breaks the signup rules
            AlreadyExists: If the username or email is taken, including when a
                concurrent signup wins the race past the pre-check
        """
        fields = validate_signup_input(data)

        existing = await self.gateway.find_account(
            username=fields["username"], email=fields["email"]
        )
        if existing is not None:
            logger.info("Signup rejected, account exists", username=fields["username"])
            raise AlreadyExists(DUPLICATE_ACCOUNT_MESSAGE)

        hashed = await self.codec.hash_password_async(fields["password"])

        with storage_errors(DUPLICATE_ACCOUNT_MESSAGE):
            account = await self.gateway.create_account(
                {
                    "username": fields["username"],
                    "email": fields["email"],
                    "password": hashed,
                }
            )

        logger.info("Account created", account_id=str(account["_id"]))
        return AuthPayload(
            token=self.codec.issue_token(str(account["_id"])),
            account=account_view(account),
        )

    async def login(self, username_or_email: Any, password: Any) -> AuthPayload:
        """Authenticate by username or email.

        An unknown account and a wrong password raise the same
        ``InvalidCredentials`` so callers cannot probe for accounts.
        """
        fields = validate_login_input(
            {"usernameOrEmail": username_or_email, "password": password}
        )
        identifier = fields["username_or_email"]

        if "@" in identifier:
            account = await self.gateway.find_account(email=identifier.lower())
        else:
            account = await self.gateway.find_account(username=identifier)

        if account is None:
            logger.info("Login rejected, unknown account")
            raise InvalidCredentials()

        if not await self.codec.verify_password_async(fields["password"], account["password"]):
            logger.info("Login rejected, wrong password", account_id=str(account["_id"]))
            raise InvalidCredentials()

        logger.info("Login succeeded", account_id=str(account["_id"]))
        return AuthPayload(
            token=self.codec.issue_token(str(account["_id"])),
            account=account_view(account),
        )
