"""
Tests for signup and login orchestration
"""

import asyncio
from unittest.mock import AsyncMock

import pytest

from roster.database.errors import DuplicateKey
from roster.errors import AlreadyExists, ErrorKind, InvalidCredentials, ValidationFailed
from roster.services import AuthService


def _signup(username="alice", email="alice@acme.com", password="secret1"):
    return {"username": username, "email": email, "password": password}


class TestSignup:
    @pytest.mark.asyncio
    async def test_creates_account_and_returns_token(self, services, gateway, codec):
        result = await services.auth.signup(_signup(username=" alice ", email="Alice@Acme.com"))

        account = result["account"]
        assert account["username"] == "alice"
        assert account["email"] == "alice@acme.com"
        assert "password" not in account
        assert account["createdAt"].startswith("2024-01-01T")
        assert codec.verify_token(result["token"]) == account["id"]

        stored = next(iter(gateway.accounts.values()))
        assert stored["password"] != "secret1"
        assert codec.verify_password("secret1", stored["password"])

    @pytest.mark.asyncio
    async def test_short_password_creates_nothing(self, services, gateway):
        with pytest.raises(ValidationFailed) as excinfo:
            await services.auth.signup(_signup(password="12345"))

        assert excinfo.value.errors == ["Password must be at least 6 characters"]
        assert gateway.accounts == {}

    @pytest.mark.asyncio
    async def test_long_password_signup_and_login(self, services):
        long_password = "p" * 80

        created = await services.auth.signup(
            _signup(username="longpw", email="l@x.com", password=long_password)
        )
        result = await services.auth.login("longpw", long_password)

        assert result["account"]["id"] == created["account"]["id"]
        with pytest.raises(InvalidCredentials):
            await services.auth.login("longpw", "p" * 72)

    @pytest.mark.asyncio
    async def test_duplicate_email_in_any_case(self, services, gateway):
        await services.auth.signup(_signup())

        with pytest.raises(AlreadyExists) as excinfo:
            await services.auth.signup(_signup(username="other", email="ALICE@acme.COM"))

        assert excinfo.value.kind is ErrorKind.ALREADY_EXISTS
        assert excinfo.value.message == "Username or email already registered"
        assert len(gateway.accounts) == 1

    @pytest.mark.asyncio
    async def test_duplicate_username(self, services, gateway):
        await services.auth.signup(_signup())

        with pytest.raises(AlreadyExists):
            await services.auth.signup(_signup(email="other@acme.com"))
        assert len(gateway.accounts) == 1

    @pytest.mark.asyncio
    async def test_race_past_precheck_is_already_exists(self, codec):
        gateway = AsyncMock()
        gateway.find_account.return_value = None
        gateway.create_account.side_effect = DuplicateKey("email")
        service = AuthService(gateway, codec)

        with pytest.raises(AlreadyExists) as excinfo:
            await service.signup(_signup())

        assert excinfo.value.message == "Username or email already registered"
        assert isinstance(excinfo.value.__cause__, DuplicateKey)

    @pytest.mark.asyncio
    async def test_concurrent_duplicate_signups(self, services, gateway):
        results = await asyncio.gather(
            *(
                services.auth.signup(_signup(username=f"user{i}", email="same@acme.com"))
                for i in range(5)
            ),
            return_exceptions=True,
        )

        successes = [r for r in results if isinstance(r, dict)]
        failures = [r for r in results if isinstance(r, Exception)]
        assert len(successes) == 1
        assert len(failures) == 4
        assert all(isinstance(f, AlreadyExists) for f in failures)
        assert len(gateway.accounts) == 1

    @pytest.mark.asyncio
    async def test_unexpected_storage_errors_propagate(self, codec):
        gateway = AsyncMock()
        gateway.find_account.side_effect = ConnectionError("mongo down")
        service = AuthService(gateway, codec)

        with pytest.raises(ConnectionError):
            await service.signup(_signup())


class TestLogin:
    @pytest.mark.asyncio
    async def test_login_by_username(self, services, codec):
        created = await services.auth.signup(_signup())

        result = await services.auth.login("  alice ", "secret1")

        assert result["account"] == created["account"]
        assert codec.verify_token(result["token"]) == created["account"]["id"]

    @pytest.mark.asyncio
    async def test_login_by_email_is_case_insensitive(self, services):
        await services.auth.signup(_signup())

        result = await services.auth.login("ALICE@acme.com", "secret1")

        assert result["account"]["username"] == "alice"

    @pytest.mark.asyncio
    async def test_wrong_password_matches_unknown_account(self, services):
        await services.auth.signup(_signup())

        with pytest.raises(InvalidCredentials) as wrong_password:
            await services.auth.login("alice", "wrong-password")
        with pytest.raises(InvalidCredentials) as unknown_account:
            await services.auth.login("nobody", "wrong-password")

        assert wrong_password.value.kind is unknown_account.value.kind
        assert wrong_password.value.message == unknown_account.value.message
        assert wrong_password.value.message == "Invalid username/email or password"

    @pytest.mark.asyncio
    async def test_missing_credentials(self, services):
        with pytest.raises(ValidationFailed) as excinfo:
            await services.auth.login(" ", "")

        assert excinfo.value.errors == ["Username or email is required", "Password is required"]
