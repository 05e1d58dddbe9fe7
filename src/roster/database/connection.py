"""
Database connection management
"""

import os
import threading

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo import ASCENDING, DESCENDING

from ..config import settings
from ..logging import get_logger
from .documents import ACCOUNTS_COLLECTION, EMPLOYEES_COLLECTION

logger = get_logger(__name__)

# Shared client; Motor keeps its own connection pool per client
_client: AsyncIOMotorClient | None = None
_database: AsyncIOMotorDatabase | None = None
_initialized = False
_init_lock = threading.Lock()


def get_mongo_uri() -> str:
    """Get the MongoDB URI, checking environment variables first for test compatibility."""
    return os.getenv("ROSTER_MONGO_URI") or settings.mongo_uri


def reset_database() -> None:
    """Reset database connections (for tests)."""
    global _client, _database, _initialized
    if _client is not None:
        _client.close()
    _client = None
    _database = None
    _initialized = False


def init_database(
    mongo_uri: str | None = None,
    db_name: str | None = None,
    force_reinit: bool = False,
) -> AsyncIOMotorDatabase:
    """Initialize the shared Motor client.

    Creating the client does not touch the network; the first operation does.
    """
    global _client, _database, _initialized

    if _initialized and not force_reinit and mongo_uri is None and _database is not None:
        return _database

    with _init_lock:
        if _initialized and not force_reinit and mongo_uri is None and _database is not None:
            return _database

        if _client is not None:
            _client.close()

        uri = mongo_uri or get_mongo_uri()
        name = db_name or settings.mongo_db_name

        _client = AsyncIOMotorClient(
            uri,
            maxPoolSize=settings.mongo_max_pool_size,
            serverSelectionTimeoutMS=settings.mongo_server_selection_timeout_ms,
            tz_aware=True,
        )
        _database = _client[name]
        _initialized = True
        logger.info("Database initialized", db_name=name)
        return _database


def get_database() -> AsyncIOMotorDatabase:
    """Get the shared database handle, initializing on first use."""
    if _database is None:
        return init_database()
    return _database


async def ensure_indexes(db: AsyncIOMotorDatabase) -> None:
    """Create the unique indexes the services rely on as their uniqueness backstop."""
    await db[ACCOUNTS_COLLECTION].create_index([("username", ASCENDING)], unique=True)
    await db[ACCOUNTS_COLLECTION].create_index([("email", ASCENDING)], unique=True)
    await db[EMPLOYEES_COLLECTION].create_index([("email", ASCENDING)], unique=True)
    await db[EMPLOYEES_COLLECTION].create_index([("createdAt", DESCENDING)])
    logger.info("Database indexes ensured")


async def check_database_connection() -> tuple[bool, str | None]:
    """
    Ping the database server and return a helpful error message on failure.

    Returns:
        tuple: (success: bool, error_message: str | None)
    """
    if _client is None:
        return False, "Database client not initialized"

    try:
        await _client.admin.command("ping")
        return True, None
    except Exception as e:
        error_str = str(e)
        error_type = type(e).__name__

        if error_type == "ServerSelectionTimeoutError" or "Connection refused" in error_str:
            return False, (
                f"Cannot connect to database server: {error_str}\n"
                f"The database server appears to be down or unreachable.\n"
                f"Please check that MongoDB is running and ROSTER_MONGO_URI is correct."
            )
        elif "Authentication failed" in error_str:
            return False, (
                f"Database authentication failed: {error_str}\n"
                f"Please check your database credentials."
            )
        else:
            return False, f"Database connection error ({error_type}): {error_str}"
