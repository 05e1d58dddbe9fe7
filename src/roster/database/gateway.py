"""Persistence gateway over the accounts and employees collections."""

from __future__ import annotations

import re
from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any, Protocol

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import DESCENDING, ReturnDocument
from pymongo.errors import DuplicateKeyError

from ..logging import get_logger
from .documents import (
    ACCOUNTS_COLLECTION,
    EMPLOYEES_COLLECTION,
    check_employee_document,
    normalize_employee_fields,
)
from .errors import DuplicateKey, InvalidId, SchemaViolation

logger = get_logger(__name__)

Document = dict[str, Any]


class PersistenceGateway(Protocol):
    """Storage operations consumed by the services.

    Documents are plain dicts keyed by field name, with ``_id``,
    ``createdAt`` and ``updatedAt`` set by the gateway.
    """

    async def find_account(
        self, username: str | None = None, email: str | None = None
    ) -> Document | None:
        """Find an account matching the username or the email."""
        ...

    async def create_account(self, fields: Mapping[str, Any]) -> Document:
        """Insert an account.

        Raises:
            DuplicateKey: If the username or email is already taken
        """
        ...

    async def find_employee_by_id(self, employee_id: str) -> Document | None:
        """
        Raises:
            InvalidId: If ``employee_id`` is not a well-formed identifier
        """
        ...

    async def find_employee_by_email(self, email: str) -> Document | None: ...

    async def list_employees(
        self,
        designation_pattern: str | None = None,
        department_pattern: str | None = None,
    ) -> list[Document]:
        """Newest first; patterns are case-insensitive substrings, OR-combined."""
        ...

    async def create_employee(self, fields: Mapping[str, Any]) -> Document:
        """
        Raises:
            DuplicateKey: If the email is already taken
            SchemaViolation: If the document breaks the stored constraints
        """
        ...

    async def update_employee(
        self, employee_id: str, fields: Mapping[str, Any]
    ) -> Document | None:
        """Set only the supplied fields; None when no record has the id."""
        ...

    async def delete_employee(self, employee_id: str) -> Document | None:
        """Delete and return the record's final state; None when absent."""
        ...


def is_valid_id(value: Any) -> bool:
    return isinstance(value, str | ObjectId) and ObjectId.is_valid(value)


def parse_object_id(value: Any) -> ObjectId:
    if not is_valid_id(value):
        raise InvalidId(value)
    return ObjectId(value)


def _duplicate_field(error: DuplicateKeyError) -> str | None:
    details = error.details or {}
    for key in ("keyValue", "keyPattern"):
        fields = details.get(key)
        if fields:
            return next(iter(fields))
    return None


def _contains(pattern: str) -> dict[str, Any]:
    return {"$regex": re.escape(pattern), "$options": "i"}


class MongoGateway:
    """``PersistenceGateway`` backed by a Motor database handle."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.accounts = db[ACCOUNTS_COLLECTION]
        self.employees = db[EMPLOYEES_COLLECTION]

    # Accounts

    async def find_account(
        self, username: str | None = None, email: str | None = None
    ) -> Document | None:
        clauses = []
        if username is not None:
            clauses.append({"username": username})
        if email is not None:
            clauses.append({"email": email})
        if not clauses:
            return None
        query = clauses[0] if len(clauses) == 1 else {"$or": clauses}
        return await self.accounts.find_one(query)

    async def create_account(self, fields: Mapping[str, Any]) -> Document:
        now = datetime.now(UTC)
        document = {**fields, "createdAt": now, "updatedAt": now}
        try:
            result = await self.accounts.insert_one(document)
        except DuplicateKeyError as e:
            raise DuplicateKey(_duplicate_field(e)) from e
        document["_id"] = result.inserted_id
        return document

    # Employees

    async def find_employee_by_id(self, employee_id: str) -> Document | None:
        oid = parse_object_id(employee_id)
        return await self.employees.find_one({"_id": oid})

    async def find_employee_by_email(self, email: str) -> Document | None:
        return await self.employees.find_one({"email": email})

    async def list_employees(
        self,
        designation_pattern: str | None = None,
        department_pattern: str | None = None,
    ) -> list[Document]:
        clauses = []
        if designation_pattern:
            clauses.append({"designation": _contains(designation_pattern)})
        if department_pattern:
            clauses.append({"department": _contains(department_pattern)})

        if not clauses:
            query: dict[str, Any] = {}
        elif len(clauses) == 1:
            query = clauses[0]
        else:
            query = {"$or": clauses}

        cursor = self.employees.find(query).sort("createdAt", DESCENDING)
        return await cursor.to_list(length=None)

    async def create_employee(self, fields: Mapping[str, Any]) -> Document:
        document = normalize_employee_fields(fields)
        violations = check_employee_document(document)
        if violations:
            raise SchemaViolation(violations)

        now = datetime.now(UTC)
        document.update(createdAt=now, updatedAt=now)
        document.setdefault("employee_photo", None)
        try:
            result = await self.employees.insert_one(document)
        except DuplicateKeyError as e:
            raise DuplicateKey(_duplicate_field(e)) from e
        document["_id"] = result.inserted_id
        return document

    async def update_employee(
        self, employee_id: str, fields: Mapping[str, Any]
    ) -> Document | None:
        oid = parse_object_id(employee_id)
        changes = normalize_employee_fields(fields)
        violations = check_employee_document(changes, partial=True)
        if violations:
            raise SchemaViolation(violations)

        changes["updatedAt"] = datetime.now(UTC)
        try:
            return await self.employees.find_one_and_update(
                {"_id": oid},
                {"$set": changes},
                return_document=ReturnDocument.AFTER,
            )
        except DuplicateKeyError as e:
            raise DuplicateKey(_duplicate_field(e)) from e

    async def delete_employee(self, employee_id: str) -> Document | None:
        oid = parse_object_id(employee_id)
        return await self.employees.find_one_and_delete({"_id": oid})
