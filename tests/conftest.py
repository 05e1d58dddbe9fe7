"""
Shared pytest fixtures and configuration for all tests.
"""

import asyncio
import os
import sys
from collections.abc import Generator, Mapping
from datetime import UTC, datetime, timedelta
from pathlib import Path
from typing import Any

import pytest
from bson import ObjectId

# Add src directory to path so imports work without an editable install
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from roster.auth.credentials import CredentialCodec
from roster.database.documents import check_employee_document, normalize_employee_fields
from roster.database.errors import DuplicateKey, SchemaViolation
from roster.database.gateway import parse_object_id
from roster.graphql.context import Services, build_services


class InMemoryGateway:
    """Dict-backed stand-in for ``MongoGateway`` with the same unique keys.

    Every call yields to the event loop first so concurrent tasks interleave
    between a uniqueness pre-check and the insert, as they do against MongoDB.
    """

    def __init__(self):
        self.accounts: dict[ObjectId, dict[str, Any]] = {}
        self.employees: dict[ObjectId, dict[str, Any]] = {}
        self._clock = datetime(2024, 1, 1, tzinfo=UTC)

    def _now(self) -> datetime:
        # Strictly increasing so creation order is unambiguous
        self._clock += timedelta(seconds=1)
        return self._clock

    async def find_account(self, username=None, email=None):
        await asyncio.sleep(0)
        for account in self.accounts.values():
            if username is not None and account["username"] == username:
                return dict(account)
            if email is not None and account["email"] == email:
                return dict(account)
        return None

    async def create_account(self, fields: Mapping[str, Any]):
        await asyncio.sleep(0)
        for account in self.accounts.values():
            for key in ("username", "email"):
                if account[key] == fields[key]:
                    raise DuplicateKey(key)
        now = self._now()
        document = {**fields, "_id": ObjectId(), "createdAt": now, "updatedAt": now}
        self.accounts[document["_id"]] = document
        return dict(document)

    async def find_employee_by_id(self, employee_id: str):
        oid = parse_object_id(employee_id)
        await asyncio.sleep(0)
        document = self.employees.get(oid)
        return dict(document) if document else None

    async def find_employee_by_email(self, email: str):
        await asyncio.sleep(0)
        for document in self.employees.values():
            if document["email"] == email:
                return dict(document)
        return None

    async def list_employees(self, designation_pattern=None, department_pattern=None):
        await asyncio.sleep(0)

        def matches(document):
            if not designation_pattern and not department_pattern:
                return True
            if designation_pattern and designation_pattern.lower() in document["designation"].lower():
                return True
            if department_pattern and department_pattern.lower() in document["department"].lower():
                return True
            return False

        found = [dict(doc) for doc in self.employees.values() if matches(doc)]
        return sorted(found, key=lambda doc: doc["createdAt"], reverse=True)

    async def create_employee(self, fields: Mapping[str, Any]):
        await asyncio.sleep(0)
        document = normalize_employee_fields(fields)
        violations = check_employee_document(document)
        if violations:
            raise SchemaViolation(violations)
        if any(doc["email"] == document["email"] for doc in self.employees.values()):
            raise DuplicateKey("email")
        now = self._now()
        document.update(_id=ObjectId(), createdAt=now, updatedAt=now)
        document.setdefault("employee_photo", None)
        self.employees[document["_id"]] = document
        return dict(document)

    async def update_employee(self, employee_id: str, fields: Mapping[str, Any]):
        oid = parse_object_id(employee_id)
        await asyncio.sleep(0)
        changes = normalize_employee_fields(fields)
        violations = check_employee_document(changes, partial=True)
        if violations:
            raise SchemaViolation(violations)
        if oid not in self.employees:
            return None
        if "email" in changes and any(
            doc["email"] == changes["email"] and key != oid for key, doc in self.employees.items()
        ):
            raise DuplicateKey("email")
        self.employees[oid].update(changes, updatedAt=self._now())
        return dict(self.employees[oid])

    async def delete_employee(self, employee_id: str):
        oid = parse_object_id(employee_id)
        await asyncio.sleep(0)
        document = self.employees.pop(oid, None)
        return dict(document) if document else None


@pytest.fixture
def gateway() -> InMemoryGateway:
    return InMemoryGateway()


@pytest.fixture
def codec() -> CredentialCodec:
    # Minimum bcrypt cost keeps the suite fast
    return CredentialCodec(secret_key="test-secret-key-for-testing-only", bcrypt_rounds=4)


@pytest.fixture
def services(gateway: InMemoryGateway, codec: CredentialCodec) -> Services:
    return build_services(gateway, codec)


@pytest.fixture
def employee_input() -> dict[str, Any]:
    return {
        "first_name": "Ann",
        "last_name": "Lee",
        "email": "Ann@X.com",
        "designation": "Dev",
        "salary": 50000,
        "date_of_joining": "2024-01-01",
        "department": "Eng",
    }


@pytest.fixture(autouse=True)
def reset_environment() -> Generator[None, None, None]:
    """Reset environment variables for each test."""
    original_env = os.environ.copy()
    yield
    os.environ.clear()
    os.environ.update(original_env)


def pytest_configure(config: Any) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "slow: mark test as slow running")  # type: ignore[reportUnknownMemberType]
    config.addinivalue_line("markers", "integration: mark test as integration test")  # type: ignore[reportUnknownMemberType]
    config.addinivalue_line("markers", "unit: mark test as unit test")  # type: ignore[reportUnknownMemberType]
