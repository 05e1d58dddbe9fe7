"""
Rendering of client-input errors in the GraphQL response envelope
"""

from collections.abc import Iterator
from contextlib import contextmanager

from graphql import GraphQLError

from ..errors import RosterError


def to_graphql_error(error: RosterError) -> GraphQLError:
    """Carry the error kind as ``extensions.code`` and field messages as ``extensions.errors``."""
    extensions: dict = {"code": error.kind.value}
    if error.errors:
        extensions["errors"] = list(error.errors)
    return GraphQLError(error.message, extensions=extensions, original_error=error)


@contextmanager
def client_errors() -> Iterator[None]:
    try:
        yield
    except RosterError as e:
        raise to_graphql_error(e) from e
