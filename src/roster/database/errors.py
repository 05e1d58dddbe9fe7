"""Errors raised by the persistence gateway."""

from __future__ import annotations


class GatewayError(Exception):
    """Base class for storage-layer failures the services know how to translate."""

    pass


class DuplicateKey(GatewayError):
    """A unique index rejected the write."""

    def __init__(self, field: str | None = None):
        self.field = field
        super().__init__(f"Duplicate value for unique field: {field or 'unknown'}")


class InvalidId(GatewayError):
    """The identifier is not a well-formed ObjectId."""

    def __init__(self, value: object):
        self.value = value
        super().__init__(f"Invalid document id: {value!r}")


class SchemaViolation(GatewayError):
    """A document failed the stored field constraints."""

    def __init__(self, errors: list[str]):
        self.errors = list(errors)
        super().__init__("; ".join(self.errors))
