"""
Client-facing error vocabulary shared by validators and services.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(Enum):
    """Machine-distinguishable error kinds surfaced to API clients."""

    VALIDATION_FAILED = "VALIDATION_FAILED"
    ALREADY_EXISTS = "ALREADY_EXISTS"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    INVALID_ID = "INVALID_ID"
    NOT_FOUND = "NOT_FOUND"
    BAD_REQUEST = "BAD_REQUEST"


class RosterError(Exception):
    """Base class for errors caused by client input.

    The kind and messages are plain data so the transport layer can render
    them without inspecting the exception type.
    """

    kind: ErrorKind = ErrorKind.BAD_REQUEST

    def __init__(self, message: str, errors: list[str] | None = None):
        super().__init__(message)
        self.message = message
        self.errors = list(errors or [])

    def to_dict(self) -> dict:
        data: dict = {"code": self.kind.value, "message": self.message}
        if self.errors:
            data["errors"] = list(self.errors)
        return data


class ValidationFailed(RosterError):
    """One or more field-level rules were violated."""

    kind = ErrorKind.VALIDATION_FAILED

    def __init__(self, errors: list[str], message: str = "Validation failed"):
        super().__init__(message, errors)


class AlreadyExists(RosterError):
    kind = ErrorKind.ALREADY_EXISTS


class InvalidCredentials(RosterError):
    kind = ErrorKind.INVALID_CREDENTIALS

    def __init__(self, message: str = "Invalid username/email or password"):
        super().__init__(message)


class InvalidId(RosterError):
    kind = ErrorKind.INVALID_ID

    def __init__(self, message: str = "Invalid employee ID"):
        super().__init__(message)


class NotFound(RosterError):
    kind = ErrorKind.NOT_FOUND

    def __init__(self, message: str = "Employee not found"):
        super().__init__(message)


class BadRequest(RosterError):
    kind = ErrorKind.BAD_REQUEST
