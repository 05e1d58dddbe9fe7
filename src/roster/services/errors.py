"""Translation of gateway failures into client-facing errors."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from ..database import errors as db_errors
from ..errors import AlreadyExists, InvalidId, ValidationFailed


@contextmanager
def storage_errors(duplicate_message: str) -> Iterator[None]:
    """Re-raise known gateway errors as their client-facing counterparts.

    Anything else (connectivity, server errors) propagates unchanged.
    """
    try:
        yield
    except db_errors.DuplicateKey as e:
        raise AlreadyExists(duplicate_message) from e
    except db_errors.SchemaViolation as e:
        raise ValidationFailed(e.errors) from e
    except db_errors.InvalidId as e:
        raise InvalidId() from e
