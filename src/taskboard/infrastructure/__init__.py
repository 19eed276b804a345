"""Store connection lifecycle."""

from .database import TASKS_COLLECTION, USERS_COLLECTION, close_db, connect_db, get_collection, init_indexes

__all__ = [
    "USERS_COLLECTION",
    "TASKS_COLLECTION",
    "connect_db",
    "close_db",
    "get_collection",
    "init_indexes",
]
