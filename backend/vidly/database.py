"""
Vidly Backend — Database Connection Management
===============================================

What:  MongoDB client creation, index setup, and identifier helpers.
Why:   Centralizes all connection logic in one place; repositories only ever
       see an AsyncDatabase handle.
How:   pymongo's asyncio client (AsyncMongoClient) with tz-aware datetimes.
       The client is created once by the application lifespan, stored in the
       AppContext, and closed on shutdown.

Collections:
    genres, movies, customers, rentals, users

Indexes:
    users.email     unique  (email uniqueness is enforced here, not in code)
    genres.name             (list endpoint sort key)
    movies.title            (list endpoint sort key)
    rentals.dateOut         (list endpoint sort key, descending)
"""

import logging
from typing import Any

from bson import ObjectId
from bson.errors import InvalidId
from pymongo import ASCENDING, DESCENDING, AsyncMongoClient
from pymongo.asynchronous.database import AsyncDatabase

from vidly.config import Settings

logger = logging.getLogger(__name__)

GENRES = "genres"
MOVIES = "movies"
CUSTOMERS = "customers"
RENTALS = "rentals"
USERS = "users"


def create_client(settings: Settings) -> AsyncMongoClient:
    """
    Build the process-wide MongoDB client.

    tz_aware=True: dateOut/dateReturned come back as aware UTC datetimes,
    so fee arithmetic never mixes naive and aware values.
    """
    return AsyncMongoClient(settings.mongodb_uri, tz_aware=True)


def get_database(client: AsyncMongoClient, settings: Settings) -> AsyncDatabase:
    """Database named in the URI, falling back to MONGODB_DATABASE."""
    return client.get_default_database(default=settings.mongodb_database)


async def ensure_indexes(db: AsyncDatabase) -> None:
    """
    Create the indexes the API relies on. Idempotent; safe on every startup.
    """
    await db[USERS].create_index("email", unique=True)
    await db[GENRES].create_index([("name", ASCENDING)])
    await db[MOVIES].create_index([("title", ASCENDING)])
    await db[RENTALS].create_index([("dateOut", DESCENDING)])
    await db[RENTALS].create_index([("customer._id", ASCENDING), ("movie._id", ASCENDING)])
    logger.info("Database indexes ensured")


async def ping(db: AsyncDatabase) -> bool:
    """Lightweight connectivity check for the health endpoint."""
    try:
        await db.command("ping")
        return True
    except Exception as e:
        logger.warning("Database ping failed: %s", str(e))
        return False


def is_valid_object_id(value: Any) -> bool:
    """
    True when `value` is a 24-character hex string (or already an ObjectId).

    Stricter than ObjectId.is_valid, which also accepts any 12-byte value;
    path identifiers are always text, so only the hex form is meaningful.
    """
    if isinstance(value, ObjectId):
        return True
    if not isinstance(value, str) or len(value) != 24:
        return False
    try:
        ObjectId(value)
    except (InvalidId, TypeError):
        return False
    return True


def to_object_id(value: Any) -> ObjectId:
    """Convert an already-validated identifier to ObjectId."""
    return value if isinstance(value, ObjectId) else ObjectId(value)
