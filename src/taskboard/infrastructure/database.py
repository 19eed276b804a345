"""
Database configuration for the users and tasks collections.

Uses Motor (async MongoDB driver) in production and mongomock when
``store_backend`` is ``"memory"``.
"""

import logging

import mongomock
from motor.motor_asyncio import AsyncIOMotorClient

from taskboard.application.settings import Settings
from taskboard.domain.repositories import DocumentCollection
from taskboard.integration.repositories import InMemoryDocumentCollection, MotorDocumentCollection

logger = logging.getLogger(__name__)

# Collection names
USERS_COLLECTION = "users"
TASKS_COLLECTION = "tasks"

# Connection state
_client: AsyncIOMotorClient | mongomock.MongoClient | None = None
_collections: dict[str, DocumentCollection] = {}


async def connect_db(settings: Settings) -> None:
    """Initialize the store connection for the configured backend."""
    global _client

    if settings.store_backend == "memory":
        logger.info(f"Using in-memory store / {settings.database_name}")
        client = mongomock.MongoClient(tz_aware=True)
        db = client[settings.database_name]
        _client = client
        for name in (USERS_COLLECTION, TASKS_COLLECTION):
            _collections[name] = InMemoryDocumentCollection(db[name])
        return

    mongo_url = settings.connection_strings["mongo"]
    logger.info(f"Connecting to MongoDB: {mongo_url.split('@')[-1]} / {settings.database_name}")

    client = AsyncIOMotorClient(mongo_url, tz_aware=True)
    try:
        await client.admin.command("ping")
    except Exception as e:
        logger.error(f"Failed to connect to MongoDB: {e}")
        client.close()
        raise
    _client = client
    db = client[settings.database_name]
    for name in (USERS_COLLECTION, TASKS_COLLECTION):
        _collections[name] = MotorDocumentCollection(db[name])
    logger.info("MongoDB connection established")


async def close_db() -> None:
    """Close the store connection."""
    global _client

    if _client is not None:
        _client.close()
        _client = None
        _collections.clear()
        logger.info("Store connection closed")


def get_collection(name: str) -> DocumentCollection:
    """Get a collection by name."""
    if name not in _collections:
        raise RuntimeError("Database not initialized. Call connect_db() first.")
    return _collections[name]


async def init_indexes() -> None:
    """Create database indexes."""
    users = get_collection(USERS_COLLECTION)
    tasks = get_collection(TASKS_COLLECTION)

    if isinstance(users, MotorDocumentCollection) and isinstance(tasks, MotorDocumentCollection):
        await users.collection.create_index("email", unique=True)
        await tasks.collection.create_index("assignedUser")
        await tasks.collection.create_index("completed")
        await tasks.collection.create_index("deadline")
    elif isinstance(users, InMemoryDocumentCollection) and isinstance(tasks, InMemoryDocumentCollection):
        users.collection.create_index("email", unique=True)
        tasks.collection.create_index("assignedUser")
        tasks.collection.create_index("completed")
        tasks.collection.create_index("deadline")

    logger.info("Database indexes created")
