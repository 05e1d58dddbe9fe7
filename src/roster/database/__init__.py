"""
Database module for Roster backend
"""

from .connection import ensure_indexes, get_database, init_database, reset_database
from .errors import DuplicateKey, GatewayError, InvalidId, SchemaViolation
from .gateway import MongoGateway, PersistenceGateway

__all__ = [
    "DuplicateKey",
    "GatewayError",
    "InvalidId",
    "MongoGateway",
    "PersistenceGateway",
    "SchemaViolation",
    "ensure_indexes",
    "get_database",
    "init_database",
    "reset_database",
]
